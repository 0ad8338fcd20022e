"""
Lint report formatting.

Two output formats:
- text: one line per finding, compiler style, then a summary line
- json: the LintReport as a JSON document
"""

import json
from pathlib import Path
from typing import Optional

from postlint.contexts.linting.linter import LintReport
from postlint.contexts.linting.rules import RULES, Finding
from postlint.utils.table_formatter import Column, TableFormatter

OUTPUT_FORMATS = ("text", "json")


def _display_path(path: Optional[Path], base: Optional[Path]) -> str:
    if path is None:
        return "<post>"
    if base is not None:
        try:
            return str(path.relative_to(base))
        except ValueError:
            pass
    return str(path)


def format_finding(finding: Finding, base: Optional[Path] = None) -> str:
    """
    Format one finding as "path:line: severity RULE message".

    The line part is omitted for file-level findings.

    Example:
        _posts/2014-3-7-rewrite.md:12: error CB001 Code block opened with ``` is never closed
    """
    location = _display_path(finding.path, base)
    if finding.line is not None:
        location = f"{location}:{finding.line}"
    return f"{location}: {finding.severity.value} {finding.rule_id} {finding.message}"


def format_summary(report: LintReport) -> str:
    posts = len(report.posts)
    return (
        f"{posts} post{'s' if posts != 1 else ''} checked: "
        f"{report.error_count} error(s), {report.warning_count} warning(s), "
        f"{report.clean_count} clean"
    )


def format_text_report(report: LintReport, relative: bool = True) -> str:
    """
    Render a lint report as text.

    Args:
        report: Result of lint_directory()
        relative: Show paths relative to the posts directory's parent

    Returns:
        Findings one per line, followed by a summary line
    """
    base = report.posts_dir.parent if relative and report.posts_dir is not None else None
    lines = [
        format_finding(finding, base)
        for post_report in report.posts
        for finding in post_report.findings
    ]
    if lines:
        lines.append("")
    lines.append(format_summary(report))
    return "\n".join(lines)


def format_json_report(report: LintReport) -> str:
    """Render a lint report as indented JSON."""
    return json.dumps(report.to_dict(), indent=2)


def format_report(report: LintReport, output_format: str = "text") -> str:
    """
    Render a lint report in the requested format.

    Raises:
        ValueError: If output_format is not "text" or "json"
    """
    if output_format == "text":
        return format_text_report(report)
    if output_format == "json":
        return format_json_report(report)
    raise ValueError(f"Unknown output format '{output_format}'. Expected one of: {OUTPUT_FORMATS}")


def format_rule_table() -> str:
    """Table of registered rules with their default severity and description."""
    table = TableFormatter(
        [
            Column("Rule", 6),
            Column("Severity", 8),
            Column("Description", 60),
        ]
    )
    table.add_table_header()
    for rule_id in sorted(RULES):
        rule = RULES[rule_id]
        table.add_row([rule.rule_id, rule.severity.value, rule.description])
    return table.render()
