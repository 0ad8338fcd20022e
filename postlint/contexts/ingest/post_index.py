"""
Post discovery and indexing for the ingest context.

Finds post files under a posts directory and builds a read-only index of the
ones that parse, grouped by tag and category for listing.
"""

import os
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from postlint.contexts.ingest.exceptions import FrontMatterError, PostsDirectoryError
from postlint.contexts.ingest.logger import _log_debug, _log_warning, log_index_result
from postlint.contexts.ingest.nomenclature import is_post_file
from postlint.contexts.ingest.post_data_structure import Post

load_dotenv()
POSTS_PATH = Path(os.getenv("POSTS_PATH", "_posts"))


def discover_posts(posts_dir: Path = None) -> List[Path]:
    """
    List post files under a directory, recursively.

    Hidden files and anything under a hidden directory (".git", ".drafts", ...)
    are skipped. Results are sorted by path for stable output.

    Args:
        posts_dir: Directory to search (defaults to POSTS_PATH env variable)

    Returns:
        Sorted list of post file paths

    Raises:
        PostsDirectoryError: If posts_dir does not exist or is not a directory
    """
    if posts_dir is None:
        posts_dir = POSTS_PATH
    posts_dir = Path(posts_dir)

    if not posts_dir.is_dir():
        raise PostsDirectoryError(posts_dir)

    found = []
    for path in posts_dir.rglob("*"):
        relative = path.relative_to(posts_dir)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if path.is_file() and is_post_file(path):
            found.append(path)

    return sorted(found)


def _sort_key(post: Post):
    # Undated posts go last
    post_date = post.date
    return (post_date is None, post_date or date.min, post.name)


@dataclass
class PostIndex:
    """
    Read-only index of parsed posts.

    Attributes:
        posts: Posts sorted by date (undated last), then file name
        skipped: Paths that could not be parsed, with the reason
    """

    posts: List[Post] = field(default_factory=list)
    skipped: Dict[Path, str] = field(default_factory=dict)

    @classmethod
    def from_posts(cls, posts: List[Post]) -> "PostIndex":
        return cls(posts=sorted(posts, key=_sort_key))

    @classmethod
    def from_directory(cls, posts_dir: Path = None) -> "PostIndex":
        """
        Load every parseable post under posts_dir.

        Posts whose front matter is broken, or that cannot be read as UTF-8,
        are skipped and recorded in `skipped`.

        Raises:
            PostsDirectoryError: If posts_dir does not exist
        """
        if posts_dir is None:
            posts_dir = POSTS_PATH

        posts = []
        skipped = {}
        for path in discover_posts(posts_dir):
            try:
                posts.append(Post.from_file(path))
                _log_debug(f"Loaded {path}")
            except (FrontMatterError, OSError, UnicodeDecodeError) as e:
                _log_warning(f"Skipping {path}: {e}")
                skipped[path] = str(e)

        log_index_result(Path(posts_dir), loaded=len(posts), skipped=len(skipped))
        index = cls.from_posts(posts)
        index.skipped = skipped
        return index

    def __len__(self) -> int:
        return len(self.posts)

    def __iter__(self):
        return iter(self.posts)

    def by_tag(self) -> Dict[str, List[Post]]:
        """Tag -> posts carrying it, tags in alphabetical order."""
        grouped: Dict[str, List[Post]] = {}
        for post in self.posts:
            for tag in dict.fromkeys(post.tags):
                grouped.setdefault(tag, []).append(post)
        return dict(sorted(grouped.items()))

    def by_category(self) -> Dict[str, List[Post]]:
        """Category -> posts filed under it, categories in alphabetical order."""
        grouped: Dict[str, List[Post]] = {}
        for post in self.posts:
            for category in dict.fromkeys(post.categories):
                grouped.setdefault(category, []).append(post)
        return dict(sorted(grouped.items()))

    def tag_counts(self) -> Counter:
        return Counter(tag for post in self.posts for tag in dict.fromkeys(post.tags))

    def category_counts(self) -> Counter:
        return Counter(
            category for post in self.posts for category in dict.fromkeys(post.categories)
        )

    def filter(self, tag: Optional[str] = None, category: Optional[str] = None) -> List[Post]:
        """Posts matching every given filter (case-sensitive, as Jekyll is)."""
        result = self.posts
        if tag is not None:
            result = [post for post in result if tag in post.tags]
        if category is not None:
            result = [post for post in result if category in post.categories]
        return result
