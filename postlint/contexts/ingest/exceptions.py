"""Custom exceptions for the ingest context."""

from pathlib import Path
from typing import Optional


class FrontMatterError(Exception):
    """
    Exception raised when a post's front matter cannot be read as key-value metadata.

    Attributes:
        message: Error description
        line: 1-based line number in the post file, when known
        snippet: The offending front-matter text, when available
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        snippet: Optional[str] = None,
    ):
        self.message = message
        self.line = line
        self.snippet = snippet

        full_message = message

        if line is not None:
            full_message += f" (line {line})"

        if snippet:
            # Truncate snippet if too long
            snippet = snippet[:200] + "..." if len(snippet) > 200 else snippet
            full_message += f"\nFront matter:\n{snippet}"

        super().__init__(full_message)


class PostsDirectoryError(Exception):
    """
    Exception raised when the posts directory is missing or not a directory.

    Attributes:
        path: The path that was expected to hold posts
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(f"Posts directory not found: {self.path}")
