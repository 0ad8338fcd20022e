"""
Ingest context logger.

Provides logging interface for the ingest context with automatic [ingest] prefix.
All ingest modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from postlint.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[ingest]"


def setup_ingest_logger(log_dir: Optional[Path] = None, posts_dir: Optional[Path] = None) -> Optional[Path]:
    """
    Setup logger for the ingest context.

    Args:
        log_dir: Directory for this session's log file (None for console only)
        posts_dir: Posts directory being read, recorded in the provenance header

    Returns:
        Path to log file, or None
    """
    return _setup_logger(
        context_name="ingest",
        log_dir=log_dir,
        extra_provenance={"Posts directory": posts_dir},
    )


def _log_info(message: str) -> None:
    """Log info message with [ingest] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [ingest] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [ingest] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_index_result(posts_dir: Path, loaded: int, skipped: int) -> None:
    """Log outcome of building a post index."""
    _log_info(f"Indexed {loaded} post(s) from {posts_dir}")
    if skipped:
        _log_warning(f"Skipped {skipped} post(s) that could not be parsed")
