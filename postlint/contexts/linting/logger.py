"""
Linting context logger.

Provides logging interface for the linting context with automatic [lint] prefix.
All linting modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from postlint.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[lint]"


def setup_linting_logger(
    log_dir: Optional[Path] = None,
    posts_dir: Optional[Path] = None,
    config_path: Optional[Path] = None,
    console_level: Optional[str] = "INFO",
) -> Optional[Path]:
    """
    Setup logger for the linting context.

    Configures loguru with provenance tracking and lint-specific context.

    Args:
        log_dir: Directory for this lint session (None for console only)
        posts_dir: Posts directory being linted
        config_path: Lint config file in use, if any
        console_level: Minimum level shown on the console

    Returns:
        Path to log file, or None

    Example:
        from postlint.contexts.linting.logger import setup_linting_logger

        log_file = setup_linting_logger(log_dir, posts_dir=Path("_posts"))
    """
    return _setup_logger(
        context_name="lint",
        log_dir=log_dir,
        extra_provenance={
            "Posts directory": posts_dir,
            "Config": config_path or "(defaults)",
        },
        console_level=console_level,
    )


# Wrapper functions with automatic [lint] prefix


def _log_info(message: str) -> None:
    """Log info message with [lint] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [lint] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [lint] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [lint] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [lint] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level lint-specific logging helpers


def log_lint_start(posts_dir: Path, num_posts: int) -> None:
    """Log start of a directory lint."""
    _log_info(f"Linting {num_posts} post(s) in {posts_dir}")


def log_post_result(report) -> None:
    """
    Log the outcome for one post at DEBUG level.

    Args:
        report: PostReport from lint_file() / lint_text()
    """
    if report.is_clean:
        _log_debug(f"  {report.name}: clean")
        return
    _log_debug(f"  {report.name}: {len(report.errors)} error(s), {len(report.warnings)} warning(s)")
    for finding in report.findings:
        _log_debug(f"    {finding.rule_id} line {finding.line}: {finding.message}")


def log_lint_result(report, elapsed_time: float) -> None:
    """
    Log the outcome of a directory lint.

    Args:
        report: LintReport from lint_directory()
        elapsed_time: Time taken in seconds
    """
    summary = (
        f"{len(report.posts)} post(s), {report.error_count} error(s), "
        f"{report.warning_count} warning(s) ({elapsed_time:.2f}s)"
    )
    if report.error_count:
        _log_error(f"Lint failed: {summary}")
    elif report.warning_count:
        _log_warning(f"Lint passed with warnings: {summary}")
    else:
        _log_success(f"Lint passed: {summary}")
