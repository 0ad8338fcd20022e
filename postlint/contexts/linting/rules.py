"""
Content-linting rules for blog posts.

Each rule is a generator function registered with @rule. It receives a parsed
Post and the active LintConfig and yields (line, message) pairs, one per
violation. The linter turns those into Findings with the rule's id and
(possibly overridden) severity.

Rule id prefixes:
    FM - front matter
    CB - fenced code blocks
    LK - links
    FN - filename convention

FM001 (front matter missing or unparseable) is reported by the linter itself
when a post cannot be parsed; its rule function only covers posts that have no
front matter block at all.
"""

from collections import Counter
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from postlint.contexts.ingest.post_data_structure import Post
from postlint.contexts.linting.lint_config import LintConfig, Severity
from postlint.utils.timestamp import parse_post_date

# Scopes decide which rules still run when front matter is unusable
SCOPE_FRONT_MATTER = "front_matter"
SCOPE_BODY = "body"
SCOPE_FILENAME = "filename"

Violation = Tuple[Optional[int], str]
CheckFunction = Callable[[Post, LintConfig], Iterator[Violation]]


@dataclass(frozen=True)
class Finding:
    """
    One rule violation in one post.

    Attributes:
        rule_id: Id of the violated rule (e.g. "FM002")
        severity: Effective severity after config overrides
        message: Human-readable description
        path: Post file (None for posts linted from text)
        line: 1-based line in the post file (None when not line-specific)
    """

    rule_id: str
    severity: Severity
    message: str
    path: Optional[Path] = None
    line: Optional[int] = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["severity"] = self.severity.value
        data["path"] = str(self.path) if self.path is not None else None
        return data


@dataclass(frozen=True)
class Rule:
    """A registered lint rule."""

    rule_id: str
    severity: Severity
    description: str
    scope: str
    check: CheckFunction


RULES: Dict[str, Rule] = {}


def rule(rule_id: str, severity: Severity, description: str, scope: str):
    """Register a check function under rule_id."""

    def decorator(func: CheckFunction) -> CheckFunction:
        if rule_id in RULES:
            raise ValueError(f"Duplicate rule id: {rule_id}")
        RULES[rule_id] = Rule(rule_id, severity, description, scope, func)
        return func

    return decorator


# ============================================================================
# Helpers
# ============================================================================


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _describe_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, dict):
        return "mapping"
    if isinstance(value, (list, tuple)):
        return "sequence"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    return type(value).__name__


def _check_non_empty_string(post: Post, key: str) -> Iterator[Violation]:
    if key not in post.front_matter:
        yield None, f"Missing required front matter key '{key}'"
        return

    value = post.front_matter[key]
    line = post.key_line(key)
    if _is_blank(value):
        yield line, f"'{key}' must not be empty"
    elif not isinstance(value, str):
        yield line, f"'{key}' must be a string, got {_describe_type(value)}"


def _check_string_sequence(post: Post, key: str, config: LintConfig) -> Iterator[Violation]:
    if key not in post.front_matter:
        return

    value = post.front_matter[key]
    line = post.key_line(key)

    if isinstance(value, str) and config.allow_string_lists:
        if not value.split():
            yield line, f"'{key}' must not be empty"
        return

    if not isinstance(value, list):
        yield line, f"'{key}' must be a sequence of strings, got {_describe_type(value)}"
        return

    for position, item in enumerate(value, start=1):
        if not isinstance(item, str):
            yield line, f"'{key}' entry {position} must be a string, got {_describe_type(item)}"
        elif not item.strip():
            yield line, f"'{key}' entry {position} is an empty string"


# ============================================================================
# Front matter rules
# ============================================================================


@rule("FM001", Severity.ERROR, "Front matter present and parseable", SCOPE_FRONT_MATTER)
def check_front_matter_present(post: Post, config: LintConfig) -> Iterator[Violation]:
    if not post.has_front_matter:
        yield 1, "Post has no front matter block (expected '---' on the first line)"


@rule("FM002", Severity.ERROR, "Non-empty 'title'", SCOPE_FRONT_MATTER)
def check_title(post: Post, config: LintConfig) -> Iterator[Violation]:
    yield from _check_non_empty_string(post, "title")


@rule("FM003", Severity.ERROR, "Non-empty 'layout'", SCOPE_FRONT_MATTER)
def check_layout(post: Post, config: LintConfig) -> Iterator[Violation]:
    yield from _check_non_empty_string(post, "layout")


@rule("FM004", Severity.ERROR, "'tags' is a sequence of non-empty strings", SCOPE_FRONT_MATTER)
def check_tags(post: Post, config: LintConfig) -> Iterator[Violation]:
    yield from _check_string_sequence(post, "tags", config)


@rule(
    "FM005",
    Severity.ERROR,
    "'categories' is a sequence of non-empty strings",
    SCOPE_FRONT_MATTER,
)
def check_categories(post: Post, config: LintConfig) -> Iterator[Violation]:
    yield from _check_string_sequence(post, "categories", config)


@rule("FM006", Severity.WARNING, "'layout' is an allowed layout", SCOPE_FRONT_MATTER)
def check_allowed_layout(post: Post, config: LintConfig) -> Iterator[Violation]:
    layout = post.front_matter.get("layout")
    if not config.allowed_layouts or not isinstance(layout, str) or not layout.strip():
        return
    if layout not in config.allowed_layouts:
        allowed = ", ".join(config.allowed_layouts)
        yield post.key_line("layout"), f"Unknown layout '{layout}' (allowed: {allowed})"


@rule("FM007", Severity.WARNING, "Only known front matter keys", SCOPE_FRONT_MATTER)
def check_known_keys(post: Post, config: LintConfig) -> Iterator[Violation]:
    if not config.known_keys:
        return
    known = set(config.known_keys) | set(config.required_keys)
    for key in post.front_matter:
        if key not in known:
            yield post.key_line(key), f"Unknown front matter key '{key}'"


@rule("FM008", Severity.WARNING, "No duplicate tags or categories", SCOPE_FRONT_MATTER)
def check_duplicate_entries(post: Post, config: LintConfig) -> Iterator[Violation]:
    for key in ("tags", "categories"):
        value = post.front_matter.get(key)
        if not isinstance(value, list):
            continue
        counts = Counter(item for item in value if isinstance(item, str))
        for item, count in counts.items():
            if count > 1:
                yield post.key_line(key), f"'{key}' lists '{item}' {count} times"


@rule("FM009", Severity.ERROR, "Configured required keys present", SCOPE_FRONT_MATTER)
def check_required_keys(post: Post, config: LintConfig) -> Iterator[Violation]:
    # title and layout have dedicated rules
    for key in config.required_keys:
        if key in ("title", "layout"):
            continue
        if key not in post.front_matter:
            yield None, f"Missing required front matter key '{key}'"
        elif _is_blank(post.front_matter[key]) or post.front_matter[key] == []:
            yield post.key_line(key), f"'{key}' must not be empty"


# ============================================================================
# Code block rules
# ============================================================================


@rule("CB001", Severity.ERROR, "Fenced code blocks are closed", SCOPE_BODY)
def check_unterminated_blocks(post: Post, config: LintConfig) -> Iterator[Violation]:
    for block in post.markdown.unterminated_blocks:
        yield block.start_line, f"Code block opened with {block.fence} is never closed"


@rule("CB002", Severity.WARNING, "Fenced code blocks name a language", SCOPE_BODY)
def check_block_language_present(post: Post, config: LintConfig) -> Iterator[Violation]:
    for block in post.markdown.code_blocks:
        if block.language is None:
            yield block.start_line, "Code block has no language tag"


@rule("CB003", Severity.WARNING, "Code block language is a configured language", SCOPE_BODY)
def check_block_language_known(post: Post, config: LintConfig) -> Iterator[Violation]:
    if not config.languages:
        return
    allowed = {language.lower() for language in config.languages}
    for block in post.markdown.code_blocks:
        if block.language is not None and block.language.lower() not in allowed:
            yield block.start_line, f"Unknown code block language '{block.language}'"


# ============================================================================
# Link rules
# ============================================================================


def _link_label(text: str) -> str:
    text = text.strip()
    return f"'{text[:40]}...'" if len(text) > 40 else f"'{text}'"


@rule("LK001", Severity.ERROR, "Links have a non-empty URL", SCOPE_BODY)
def check_empty_urls(post: Post, config: LintConfig) -> Iterator[Violation]:
    scan = post.markdown
    for link in scan.links:
        if link.kind == "reference":
            url = scan.resolve(link)
            # Undefined references are LK002's concern
            if url is not None and not url.strip():
                yield link.line, f"Reference [{link.ref}] resolves to an empty URL"
        elif not link.url:
            noun = "Image" if link.is_image else "Link"
            if link.kind == "definition":
                yield link.line, f"Reference definition [{link.ref}] has an empty URL"
            else:
                yield link.line, f"{noun} {_link_label(link.text)} has an empty URL"


@rule("LK002", Severity.ERROR, "Reference links are defined", SCOPE_BODY)
def check_undefined_references(post: Post, config: LintConfig) -> Iterator[Violation]:
    scan = post.markdown
    for link in scan.links:
        if link.kind == "reference" and scan.resolve(link) is None:
            yield link.line, f"Link reference [{link.ref}] is not defined"


@rule("LK003", Severity.WARNING, "URLs contain no whitespace", SCOPE_BODY)
def check_url_whitespace(post: Post, config: LintConfig) -> Iterator[Violation]:
    for link in post.markdown.links:
        if link.url and any(char.isspace() for char in link.url):
            yield link.line, f"URL '{link.url}' contains whitespace"


# ============================================================================
# Filename rules
# ============================================================================


@rule("FN001", Severity.WARNING, "Filename follows YYYY-M-D-slug.md", SCOPE_FILENAME)
def check_filename_convention(post: Post, config: LintConfig) -> Iterator[Violation]:
    if post.path is not None and post.filename is None:
        yield None, f"Filename '{post.path.name}' does not follow YYYY-M-D-slug.md"


@rule("FN002", Severity.ERROR, "Filename date is a real date", SCOPE_FILENAME)
def check_filename_date(post: Post, config: LintConfig) -> Iterator[Violation]:
    if post.filename is not None and post.filename.date_error:
        yield None, f"Filename date is invalid ({post.filename.date_error})"


@rule("FN003", Severity.WARNING, "Front matter 'date' agrees with filename", SCOPE_FRONT_MATTER)
def check_date_consistency(post: Post, config: LintConfig) -> Iterator[Violation]:
    if "date" not in post.front_matter:
        return

    raw = post.front_matter["date"]
    line = post.key_line("date")
    front_matter_date = parse_post_date(raw)
    if front_matter_date is None:
        yield line, f"Unrecognized 'date' value '{raw}'"
        return

    if post.filename_date is not None and front_matter_date != post.filename_date:
        yield line, (
            f"'date' {front_matter_date.isoformat()} does not match filename date "
            f"{post.filename_date.isoformat()}"
        )
