"""
Post filename nomenclature for the ingest context.

Post Filename Format:
    YYYY-M-D-slug.md

Month and day may carry a leading zero or not; both "2014-3-7-foo.md" and
"2014-03-07-foo.md" are accepted. The ".markdown" extension is accepted too.

Examples:
    >>> parse_post_filename("2014-3-7-wordpress-rewrite-rules.md")
    PostFilename(date=datetime.date(2014, 3, 7), slug='wordpress-rewrite-rules', ...)
    >>> build_post_filename(date(2014, 3, 7), "wordpress-rewrite-rules")
    '2014-3-7-wordpress-rewrite-rules.md'
"""

import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

POST_EXTENSIONS = (".md", ".markdown")

POST_FILENAME_PATTERN = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})-(?P<slug>[^/\\]+?)\.(?P<ext>md|markdown)$"
)


@dataclass(frozen=True)
class PostFilename:
    """Components parsed from a post filename."""

    name: str
    slug: str
    extension: str
    date: Optional[date] = None
    date_error: Optional[str] = None


def is_post_file(path: Path) -> bool:
    """Check whether path has a post extension and is not hidden."""
    path = Path(path)
    return path.suffix.lower() in POST_EXTENSIONS and not path.name.startswith(".")


def parse_post_filename(filename: str) -> Optional[PostFilename]:
    """
    Parse a post filename into its date and slug.

    Args:
        filename: Filename with or without directory (e.g., "_posts/2014-3-7-foo.md")

    Returns:
        PostFilename, or None if the name does not follow the convention.
        A name with the right shape but an impossible date (e.g. "2014-2-30-x.md")
        is returned with date=None and date_error set.
    """
    name = Path(filename).name
    match = POST_FILENAME_PATTERN.match(name)
    if not match:
        return None

    year, month, day = (int(match.group(k)) for k in ("year", "month", "day"))
    try:
        post_date = date(year, month, day)
        date_error = None
    except ValueError as e:
        post_date = None
        date_error = f"{match.group('year')}-{match.group('month')}-{match.group('day')}: {e}"

    return PostFilename(
        name=name,
        slug=match.group("slug"),
        extension=match.group("ext"),
        date=post_date,
        date_error=date_error,
    )


def build_post_filename(post_date: date, slug: str, extension: str = "md") -> str:
    """
    Build the canonical (unpadded) filename for a post.

    Args:
        post_date: Publication date
        slug: URL slug (use slugify() to derive one from a title)
        extension: "md" or "markdown"

    Returns:
        Filename such as "2014-3-7-my-slug.md"

    Raises:
        ValueError: If slug is empty or extension is not a post extension
    """
    if not slug:
        raise ValueError("Slug must not be empty")
    if f".{extension}" not in POST_EXTENSIONS:
        raise ValueError(f"Unsupported post extension: {extension}")
    return f"{post_date.year}-{post_date.month}-{post_date.day}-{slug}.{extension}"


def slugify(title: str) -> str:
    """
    Derive a URL slug from a post title.

    Lowercases, drops anything outside [a-z0-9 -], and collapses runs of
    whitespace and dashes into single dashes.

    Example:
        >>> slugify("ActiveRecord: Scopes & Joins!")
        'activerecord-scopes-joins'
    """
    slug = title.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"[\s-]+", "-", slug)
    return slug.strip("-")
