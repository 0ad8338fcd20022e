#!/usr/bin/env python3
"""
Lint a directory of blog posts.

Usage:
    python scripts/lint_posts.py                      # lint $POSTS_PATH (default: _posts)
    python scripts/lint_posts.py content/_posts --strict
    python scripts/lint_posts.py --format json > lint.json
    python scripts/lint_posts.py --list-rules

Exit codes:
    0 - no errors (and no warnings with --strict)
    1 - findings that fail the run
    2 - posts directory or config file problem
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from postlint.contexts.ingest.exceptions import PostsDirectoryError
from postlint.contexts.linting.lint_config import ConfigError, load_lint_config
from postlint.contexts.linting.linter import lint_directory
from postlint.contexts.linting.logger import setup_linting_logger
from postlint.contexts.linting.report_formatter import (
    OUTPUT_FORMATS,
    format_report,
    format_rule_table,
)
from postlint.utils.timestamp import now

load_dotenv()
POSTS_PATH = Path(os.getenv("POSTS_PATH", "_posts"))
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(add_completion=False, help="Lint blog posts (front matter, code blocks, links).")


@app.command()
def main(
    posts_dir: Optional[Path] = typer.Argument(
        None, help="Directory containing posts (default: $POSTS_PATH or _posts)"
    ),
    output_format: str = typer.Option(
        "text", "--format", "-f", help=f"Output format: {', '.join(OUTPUT_FORMATS)}"
    ),
    strict: bool = typer.Option(False, "--strict", help="Treat warnings as failures"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Lint config YAML (default: $POSTLINT_CONFIG)"
    ),
    log: bool = typer.Option(
        False, "--log/--no-log", help="Write a detailed log under $LOGS_PATH"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show per-post debug output"),
    list_rules: bool = typer.Option(False, "--list-rules", help="List available rules and exit"),
):
    """Lint every post in POSTS_DIR and report findings."""
    if list_rules:
        typer.echo(format_rule_table())
        raise typer.Exit()

    if output_format not in OUTPUT_FORMATS:
        typer.echo(
            f"ERROR: Unknown format '{output_format}' (expected one of: {', '.join(OUTPUT_FORMATS)})",
            err=True,
        )
        raise typer.Exit(2)

    posts_dir = posts_dir or POSTS_PATH

    # JSON goes to stdout untouched; keep the console quiet
    if output_format == "json":
        console_level = None
    else:
        console_level = "DEBUG" if verbose else "INFO"
    log_dir = LOGS_PATH / f"lint_{now()}" if log else None
    log_file = setup_linting_logger(
        log_dir, posts_dir=posts_dir, config_path=config_path, console_level=console_level
    )

    try:
        config = load_lint_config(config_path)
        report = lint_directory(posts_dir, config)
    except (ConfigError, PostsDirectoryError) as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(2)

    typer.echo(format_report(report, output_format))

    if log_file is not None and output_format == "text":
        typer.echo(f"Log: {log_file}")

    raise typer.Exit(report.exit_code(strict=strict))


if __name__ == "__main__":
    app()
