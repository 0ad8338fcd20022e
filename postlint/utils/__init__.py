"""
Shared utilities for postlint.

Common functionality used across contexts:
- Logger setup with provenance
- Timestamp and date helpers
"""

from postlint.utils.timestamp import now, parse_post_date

__all__ = ["now", "parse_post_date"]
