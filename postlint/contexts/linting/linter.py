"""
Post linting orchestration.

Runs the registered rules against posts and collects findings into reports:
- lint_post(): findings for an already parsed Post
- lint_text() / lint_file(): parse then lint one post, never raising on bad content
- lint_directory(): lint every post under a posts directory

Content problems (unreadable files, broken front matter) become findings so a
single bad post never aborts a run. A missing posts directory or a bad config
file does raise, since no meaningful report can be produced.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from postlint.contexts.ingest.exceptions import FrontMatterError
from postlint.contexts.ingest.front_matter import split_front_matter
from postlint.contexts.ingest.nomenclature import parse_post_filename
from postlint.contexts.ingest.post_data_structure import Post
from postlint.contexts.ingest.post_index import POSTS_PATH, discover_posts
from postlint.contexts.linting.lint_config import LintConfig, Severity
from postlint.contexts.linting.logger import (
    log_lint_result,
    log_lint_start,
    log_post_result,
)
from postlint.contexts.linting.rules import (
    RULES,
    SCOPE_BODY,
    SCOPE_FILENAME,
    SCOPE_FRONT_MATTER,
    Finding,
    Rule,
)

# Reported when a post file cannot be read at all; not a registered rule
READ_ERROR_RULE_ID = "IO001"


# ============================================================================
# Result Dataclasses
# ============================================================================


@dataclass
class PostReport:
    """
    Lint result for one post.

    Attributes:
        path: Post file (None for posts linted from text)
        post: Parsed post, or None if it could not be parsed
        findings: Violations sorted by line (file-level findings first)
    """

    path: Optional[Path]
    post: Optional[Post]
    findings: List[Finding] = field(default_factory=list)

    @property
    def name(self) -> str:
        if self.path is not None:
            return str(self.path)
        return self.post.name if self.post is not None else "<post>"

    @property
    def errors(self) -> List[Finding]:
        return [f for f in self.findings if f.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[Finding]:
        return [f for f in self.findings if f.severity == Severity.WARNING]

    @property
    def is_clean(self) -> bool:
        return not self.findings

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": str(self.path) if self.path is not None else None,
            "title": self.post.title if self.post is not None else None,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "findings": [finding.to_dict() for finding in self.findings],
        }


@dataclass
class LintReport:
    """
    Lint result for a posts directory.

    Attributes:
        posts_dir: Directory that was linted
        posts: One PostReport per discovered post, in path order
        time_s: Wall-clock time of the run
    """

    posts_dir: Optional[Path] = None
    posts: List[PostReport] = field(default_factory=list)
    time_s: float = 0.0

    @property
    def findings(self) -> List[Finding]:
        return [finding for report in self.posts for finding in report.findings]

    @property
    def error_count(self) -> int:
        return sum(len(report.errors) for report in self.posts)

    @property
    def warning_count(self) -> int:
        return sum(len(report.warnings) for report in self.posts)

    @property
    def clean_count(self) -> int:
        return sum(1 for report in self.posts if report.is_clean)

    def exit_code(self, strict: bool = False) -> int:
        """
        Process exit code for this report.

        Returns:
            1 if there are errors (or warnings when strict), else 0
        """
        if self.error_count or (strict and self.warning_count):
            return 1
        return 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "posts_dir": str(self.posts_dir) if self.posts_dir is not None else None,
            "posts": [report.to_dict() for report in self.posts],
            "summary": {
                "posts": len(self.posts),
                "clean": self.clean_count,
                "errors": self.error_count,
                "warnings": self.warning_count,
            },
        }


# ============================================================================
# Linting
# ============================================================================


def _sort_findings(findings: List[Finding]) -> List[Finding]:
    # File-level findings (line None) first, then by line; stable within a line
    return sorted(findings, key=lambda f: (f.line is not None, f.line or 0))


def _selected_rules(post: Post, scopes: List[str]) -> List[Rule]:
    selected = [rule for rule in RULES.values() if rule.scope in scopes]
    if SCOPE_FRONT_MATTER not in scopes and not post.has_front_matter:
        # A post without any front matter block still gets FM001
        selected.insert(0, RULES["FM001"])
    return selected


def _run_rules(post: Post, config: LintConfig, scopes: List[str]) -> List[Finding]:
    findings = []
    for rule in _selected_rules(post, scopes):
        if not config.is_enabled(rule.rule_id):
            continue
        severity = config.severity_for(rule.rule_id, rule.severity)
        for line, message in rule.check(post, config):
            findings.append(
                Finding(
                    rule_id=rule.rule_id,
                    severity=severity,
                    message=message,
                    path=post.path,
                    line=line,
                )
            )
    return findings


def lint_post(post: Post, config: Optional[LintConfig] = None) -> List[Finding]:
    """
    Run every enabled rule against a parsed post.

    Front matter rules other than FM001 are skipped when the post has no
    front matter block; body and filename rules always run.

    Args:
        post: Parsed post
        config: Lint settings (defaults to LintConfig())

    Returns:
        Findings sorted by line
    """
    if config is None:
        config = LintConfig()

    scopes = [SCOPE_BODY, SCOPE_FILENAME]
    if post.has_front_matter:
        scopes.append(SCOPE_FRONT_MATTER)

    return _sort_findings(_run_rules(post, config, scopes))


def _front_matter_failure(
    text: str, path: Optional[Path], error: FrontMatterError, config: LintConfig
) -> PostReport:
    """
    Report a post whose front matter could not be parsed.

    The body (everything after the closing fence, when there is one) is still
    linted so that code block and link problems surface in the same run.
    """
    findings = []
    if config.is_enabled("FM001"):
        findings.append(
            Finding(
                rule_id="FM001",
                severity=config.severity_for("FM001", RULES["FM001"].severity),
                message=error.message,
                path=path,
                line=error.line,
            )
        )

    try:
        _, body, line_count = split_front_matter(text)
    except FrontMatterError:
        # Unterminated front matter: there is no body to lint
        body, line_count = "", 0

    # Stand-in with the raw block kept, so only body and filename rules apply
    partial = Post(
        body=body,
        raw_front_matter="",
        front_matter_line_count=line_count,
        path=path,
        filename=parse_post_filename(path.name) if path is not None else None,
    )
    findings.extend(_run_rules(partial, config, [SCOPE_BODY, SCOPE_FILENAME]))

    return PostReport(path=path, post=None, findings=_sort_findings(findings))


def lint_text(
    text: str, path: Optional[Path] = None, config: Optional[LintConfig] = None
) -> PostReport:
    """
    Parse and lint a post given as text.

    Args:
        text: Full post text including front matter
        path: Optional file path (enables filename rules and is reported in findings)
        config: Lint settings (defaults to LintConfig())

    Returns:
        PostReport; never raises on malformed content
    """
    if config is None:
        config = LintConfig()
    path = Path(path) if path is not None else None

    try:
        post = Post.from_text(text, path=path)
    except FrontMatterError as e:
        report = _front_matter_failure(text, path, e, config)
        log_post_result(report)
        return report

    report = PostReport(path=path, post=post, findings=lint_post(post, config))
    log_post_result(report)
    return report


def lint_file(path: Path, config: Optional[LintConfig] = None) -> PostReport:
    """
    Read and lint one post file.

    A file that cannot be read, or is not valid UTF-8, yields a single IO001
    error finding instead of raising.

    Args:
        path: Post file
        config: Lint settings (defaults to LintConfig())

    Returns:
        PostReport
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        reason = "not valid UTF-8" if isinstance(e, UnicodeDecodeError) else str(e)
        report = PostReport(
            path=path,
            post=None,
            findings=[
                Finding(
                    rule_id=READ_ERROR_RULE_ID,
                    severity=Severity.ERROR,
                    message=f"Cannot read post: {reason}",
                    path=path,
                )
            ],
        )
        log_post_result(report)
        return report

    return lint_text(text, path=path, config=config)


def lint_directory(posts_dir: Path = None, config: Optional[LintConfig] = None) -> LintReport:
    """
    Lint every post under a directory.

    Orchestration function that:
    1. Discovers post files (recursive, hidden entries skipped)
    2. Lints each one with lint_file()
    3. Logs a per-post DEBUG line and a summary

    Args:
        posts_dir: Directory holding posts (defaults to POSTS_PATH env variable)
        config: Lint settings (defaults to LintConfig())

    Returns:
        LintReport with one PostReport per post

    Raises:
        PostsDirectoryError: If posts_dir does not exist

    Example:
        >>> report = lint_directory(Path("_posts"))
        >>> if report.exit_code():
        ...     print(format_text_report(report))
    """
    if posts_dir is None:
        posts_dir = POSTS_PATH
    if config is None:
        config = LintConfig()
    posts_dir = Path(posts_dir)

    start = time.time()
    paths = discover_posts(posts_dir)
    log_lint_start(posts_dir, len(paths))

    report = LintReport(posts_dir=posts_dir)
    for path in paths:
        report.posts.append(lint_file(path, config))

    report.time_s = time.time() - start
    log_lint_result(report, report.time_s)
    return report
