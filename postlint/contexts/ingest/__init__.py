"""
Ingest Context

Responsibilities:
- Discovers post files and parses their filenames (date + slug)
- Splits and parses YAML front matter
- Scans Markdown bodies for fenced code blocks and links
- Builds a read-only index of posts by date, tag and category

Owns: Post representation, front matter parsing, Markdown scanning
Never: Judges whether a post is valid (that belongs to the linting context)
"""

from postlint.contexts.ingest.exceptions import FrontMatterError, PostsDirectoryError
from postlint.contexts.ingest.front_matter import parse_front_matter, split_front_matter
from postlint.contexts.ingest.markdown_scanner import (
    CodeBlock,
    Link,
    MarkdownScan,
    extract_code_blocks,
    extract_links,
    scan_markdown,
)
from postlint.contexts.ingest.nomenclature import (
    PostFilename,
    build_post_filename,
    parse_post_filename,
    slugify,
)
from postlint.contexts.ingest.post_data_structure import Post
from postlint.contexts.ingest.post_index import PostIndex, discover_posts

__all__ = [
    # Errors
    "FrontMatterError",
    "PostsDirectoryError",
    # Front matter
    "split_front_matter",
    "parse_front_matter",
    # Markdown scanning
    "CodeBlock",
    "Link",
    "MarkdownScan",
    "scan_markdown",
    "extract_code_blocks",
    "extract_links",
    # Filenames
    "PostFilename",
    "parse_post_filename",
    "build_post_filename",
    "slugify",
    # Posts
    "Post",
    "PostIndex",
    "discover_posts",
]
