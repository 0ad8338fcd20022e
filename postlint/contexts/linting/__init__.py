"""
Linting Context

Responsibilities:
- Defines content-linting rules for posts (front matter, code blocks, links, filenames)
- Loads lint configuration (rule selection, severities, allowed values)
- Runs rules over one post or a posts directory and collects findings
- Formats lint reports as text or JSON

Owns: Rules, findings, lint configuration, report formatting
Never: Modifies posts
"""

from postlint.contexts.linting.lint_config import (
    ConfigError,
    LintConfig,
    Severity,
    load_lint_config,
)
from postlint.contexts.linting.linter import (
    LintReport,
    PostReport,
    lint_directory,
    lint_file,
    lint_post,
    lint_text,
)
from postlint.contexts.linting.report_formatter import (
    format_json_report,
    format_report,
    format_text_report,
)
from postlint.contexts.linting.rules import RULES, Finding, Rule

__all__ = [
    # Configuration
    "ConfigError",
    "LintConfig",
    "Severity",
    "load_lint_config",
    # Rules and findings
    "RULES",
    "Rule",
    "Finding",
    # Orchestration
    "lint_post",
    "lint_text",
    "lint_file",
    "lint_directory",
    "PostReport",
    "LintReport",
    # Output
    "format_report",
    "format_text_report",
    "format_json_report",
]
