"""
Generic logger setup utilities for detailed run logging.

Provides reusable loguru configuration with provenance tracking.
Context-specific wrappers should be defined in contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Optional[Path] = None,
    extra_provenance: Optional[dict] = None,
    level_colors: Optional[dict] = None,
    console_level: Optional[str] = "INFO",
) -> Optional[Path]:
    """
    Configure loguru for a context with provenance tracking.

    Console output goes to stderr so that reports written to stdout
    (e.g. JSON) stay machine-readable. When log_dir is given, a DEBUG-level
    file sink is added as well.

    Args:
        context_name: Context identifier (e.g., "lint", "ingest")
        log_dir: Directory for this logging session (None disables the file sink)
        extra_provenance: Additional key-value pairs for provenance header
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})
        console_level: Minimum level shown on the console (None disables console output)

    Returns:
        Path to log file, or None if no file sink was configured

    Example:
        from postlint.utils.logger import setup_logger

        log_file = setup_logger(
            context_name="lint",
            log_dir=Path("outs/logs/lint_20251114_123456"),
            extra_provenance={"Posts directory": "_posts"}
        )
    """
    # Remove default logger
    logger.remove()

    colors = {**LEVEL_COLORS, **(level_colors or {})}
    for level_name, color in colors.items():
        logger.level(level_name, color=color)

    log_file = None
    if log_dir is not None:
        log_dir.mkdir(exist_ok=True, parents=True)
        log_file = log_dir / f"{context_name}.log"
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}",
            level="DEBUG",
        )

    if console_level is not None:
        logger.add(
            sys.stderr,
            format="{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>",
            level=console_level,
            colorize=True,
        )

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: Optional[dict] = None) -> None:
    """
    Log execution provenance to current logger.

    Logs standard context (script, command, working directory, Python version)
    at DEBUG level plus any additional context provided.

    Args:
        extra_context: Additional key-value pairs to log
    """
    logger.debug("=" * 80)
    logger.debug(f"Script: {sys.argv[0]}")
    logger.debug(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.version.split()[0]}")

    if extra_context:
        for key, value in extra_context.items():
            logger.debug(f"{key}: {value}")

    logger.debug("=" * 80)
