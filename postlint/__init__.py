"""
postlint - content linter for Markdown blog posts

Checks a folder of Jekyll-style posts (YAML front matter + Markdown body with
fenced code samples) for structural problems before an external renderer
ever sees them.

Architecture:
- Ingest Context: Post discovery, filename convention, front matter parsing, Markdown scanning
- Linting Context: Rules, configuration, orchestration and report formatting
"""

__version__ = "0.1.0"
