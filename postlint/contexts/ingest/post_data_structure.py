"""
Post data structure for the ingest context.

Provides the Post class that represents one blog article: front matter
metadata, Markdown body, and what the filename says about its date and slug.
Posts are read-only; nothing in postlint writes them back.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, List, Optional

from postlint.contexts.ingest.front_matter import parse_front_matter, split_front_matter
from postlint.contexts.ingest.markdown_scanner import MarkdownScan, scan_markdown
from postlint.contexts.ingest.nomenclature import PostFilename, parse_post_filename
from postlint.utils.timestamp import parse_post_date


@dataclass(frozen=True)
class Post:
    """
    One parsed blog post.

    Factory methods:
        from_text(text, path) - Parse raw post text
        from_file(path) - Load from a Markdown file (filename supplies date and slug)

    Front matter that fails to parse raises FrontMatterError from the factories;
    the linter catches it and reports a finding instead.
    """

    body: str
    front_matter: Dict[str, Any] = field(default_factory=dict)
    raw_front_matter: Optional[str] = None
    front_matter_line_count: int = 0
    path: Optional[Path] = None
    filename: Optional[PostFilename] = None

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def from_text(cls, text: str, path: Optional[Path] = None) -> "Post":
        """
        Parse post text into a Post.

        Args:
            text: Full post text including front matter
            path: Optional source path (used for filename date and slug)

        Returns:
            Post instance

        Raises:
            FrontMatterError: If the front matter block is unterminated or not valid YAML
        """
        raw_front_matter, body, line_count = split_front_matter(text)
        front_matter = parse_front_matter(raw_front_matter)
        path = Path(path) if path is not None else None
        return cls(
            body=body,
            front_matter=front_matter,
            raw_front_matter=raw_front_matter,
            front_matter_line_count=line_count,
            path=path,
            filename=parse_post_filename(path.name) if path is not None else None,
        )

    @classmethod
    def from_file(cls, path: Path) -> "Post":
        """
        Load a post from disk.

        Raises:
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not UTF-8
            FrontMatterError: If the front matter is malformed
        """
        path = Path(path)
        return cls.from_text(path.read_text(encoding="utf-8"), path=path)

    # =========================================================================
    # FRONT MATTER ACCESS
    # =========================================================================

    @property
    def has_front_matter(self) -> bool:
        return self.raw_front_matter is not None

    def get(self, key: str, default: Any = None) -> Any:
        """Raw front-matter value."""
        return self.front_matter.get(key, default)

    def key_line(self, key: str) -> Optional[int]:
        """
        File line number where a top-level front-matter key is defined.

        Returns None if the key cannot be located (e.g. flow-style mappings).
        """
        if self.raw_front_matter is None:
            return None
        pattern = re.compile(rf"^['\"]?{re.escape(str(key))}['\"]?\s*:")
        for offset, line in enumerate(self.raw_front_matter.split("\n")):
            if pattern.match(line):
                # Line 1 is the opening fence
                return offset + 2
        return None

    @property
    def title(self) -> Optional[str]:
        value = self.front_matter.get("title")
        return str(value) if value is not None else None

    @property
    def layout(self) -> Optional[str]:
        value = self.front_matter.get("layout")
        return str(value) if value is not None else None

    @property
    def tags(self) -> List[str]:
        return _as_string_list(self.front_matter.get("tags"))

    @property
    def categories(self) -> List[str]:
        return _as_string_list(self.front_matter.get("categories"))

    @property
    def slug(self) -> Optional[str]:
        """Slug from the filename, falling back to the file stem."""
        if self.filename is not None:
            return self.filename.slug
        if self.path is not None:
            return self.path.stem
        return None

    @property
    def filename_date(self) -> Optional[date]:
        return self.filename.date if self.filename is not None else None

    @property
    def date(self) -> Optional[date]:
        """
        Publication date.

        Priority:
        1. Front-matter "date" (when it is a recognizable date)
        2. Date in the filename
        """
        front_matter_date = parse_post_date(self.front_matter.get("date"))
        return front_matter_date or self.filename_date

    @property
    def name(self) -> str:
        """Display name: file name, or title for posts without a path."""
        if self.path is not None:
            return self.path.name
        return self.title or "<post>"

    # =========================================================================
    # BODY ACCESS
    # =========================================================================

    @cached_property
    def markdown(self) -> MarkdownScan:
        """Code blocks and links in the body, with line numbers pointing into the file."""
        return scan_markdown(self.body, line_offset=self.front_matter_line_count)


def _as_string_list(value: Any) -> List[str]:
    """
    Read a tags/categories value as a list of strings.

    Lists are returned element-wise; a bare string is split on whitespace the
    way Jekyll does. Anything else yields an empty list.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]
    return []
