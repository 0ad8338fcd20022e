"""
Line-based Markdown scanning for the ingest context.

Extracts the two structures the linter cares about from a post body:
- Fenced code blocks (with language tag and whether they were closed)
- Links (inline, autolinks, reference links and reference definitions)

Links inside fenced code blocks and inline code spans are ignored, since the
PHP and Ruby snippets in posts are full of brackets and angle brackets.

This is not a full CommonMark parser. Indented code blocks and inline code
spans that cross line boundaries are not recognized.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from postlint.contexts.ingest.markdown_patterns import FencePatterns, LinkPatterns

_OPENING_FENCE = re.compile(FencePatterns.OPENING)
_INLINE_LINK = re.compile(LinkPatterns.INLINE)
_LOOSE_INLINE_LINK = re.compile(LinkPatterns.LOOSE_INLINE)
_AUTOLINK = re.compile(LinkPatterns.AUTOLINK)
_REFERENCE_LINK = re.compile(LinkPatterns.REFERENCE)
_DEFINITION = re.compile(LinkPatterns.DEFINITION)
_TRAILING_TITLE = re.compile(LinkPatterns.TRAILING_TITLE)
_INLINE_CODE = re.compile(LinkPatterns.INLINE_CODE)


@dataclass(frozen=True)
class CodeBlock:
    """
    A fenced code block.

    Attributes:
        fence: The opening fence characters (e.g. "```" or "~~~~")
        info: Full info string after the fence (stripped)
        language: First word of the info string, or None if untagged
        start_line: Line of the opening fence
        end_line: Line of the closing fence, or the last line if unterminated
        content: Text between the fences
        terminated: Whether a closing fence was found
    """

    fence: str
    info: str
    language: Optional[str]
    start_line: int
    end_line: int
    content: str
    terminated: bool = True


@dataclass(frozen=True)
class Link:
    """
    A link found in prose.

    Attributes:
        kind: "inline", "autolink", "reference" or "definition"
        text: Link text (alt text for images, label for definitions)
        url: Target URL; None for reference links until resolved
        line: Line number the link appears on
        ref: Reference label for reference links and definitions
        is_image: Whether this is an image (![alt](src))
    """

    kind: str
    text: str
    url: Optional[str]
    line: int
    ref: Optional[str] = None
    is_image: bool = False


@dataclass
class MarkdownScan:
    """Everything extracted from one Markdown body."""

    code_blocks: List[CodeBlock] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)

    @property
    def unterminated_blocks(self) -> List[CodeBlock]:
        return [block for block in self.code_blocks if not block.terminated]

    @property
    def definitions(self) -> Dict[str, str]:
        """Reference label (normalized) -> URL. The first definition of a label wins."""
        result = {}
        for link in self.links:
            if link.kind == "definition":
                result.setdefault(normalize_reference_label(link.ref), link.url)
        return result

    def resolve(self, link: Link) -> Optional[str]:
        """URL a link points to, following reference definitions."""
        if link.kind != "reference":
            return link.url
        return self.definitions.get(normalize_reference_label(link.ref))


# ============================================================================
# Helpers
# ============================================================================


def normalize_reference_label(label: str) -> str:
    """Reference labels match case-insensitively with internal whitespace collapsed."""
    return re.sub(r"\s+", " ", label.strip()).casefold()


def strip_inline_code(line: str) -> str:
    """
    Mask `inline code` spans with spaces, keeping the line length unchanged.

    Example:
        >>> strip_inline_code("use `[$a](b)` here")
        'use           here'
    """
    return _INLINE_CODE.sub(lambda m: " " * len(m.group(0)), line)


def _body_lines(body: str) -> List[str]:
    """Split on "\n" only, so line numbers match what an editor shows."""
    lines = [line.rstrip("\r") for line in body.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _unwrap_url(url: str) -> str:
    url = url.strip()
    if url.startswith("<") and url.endswith(">"):
        return url[1:-1].strip()
    return url


def _loose_destination(raw: str) -> str:
    return _unwrap_url(_TRAILING_TITLE.sub("", raw.strip()))


def _mask(line: str, start: int, end: int) -> str:
    return line[:start] + " " * (end - start) + line[end:]


def _closing_fence(fence: str) -> re.Pattern:
    return re.compile(
        FencePatterns.CLOSING_TEMPLATE.format(char=re.escape(fence[0]), length=len(fence))
    )


# ============================================================================
# Code blocks
# ============================================================================


def _split_fences(lines: List[str], line_offset: int) -> Tuple[List[CodeBlock], List[int]]:
    """
    Walk lines, pairing opening and closing fences.

    Returns:
        (code_blocks, prose_line_indexes) where prose_line_indexes are the
        0-based indexes of lines outside any code block
    """
    blocks = []
    prose = []
    index = 0

    while index < len(lines):
        match = _OPENING_FENCE.match(lines[index])
        if match:
            fence = match.group("fence")
            info = match.group("info").strip()
            # A backtick fence followed by backticks is inline code, not a fence
            if fence[0] == "`" and "`" in info:
                match = None

        if not match:
            prose.append(index)
            index += 1
            continue

        closing = _closing_fence(fence)
        content_lines = []
        close_index = None
        for inner in range(index + 1, len(lines)):
            if closing.match(lines[inner]):
                close_index = inner
                break
            content_lines.append(lines[inner])

        language = info.split()[0] if info else None
        terminated = close_index is not None
        end_index = close_index if terminated else len(lines) - 1

        blocks.append(
            CodeBlock(
                fence=fence,
                info=info,
                language=language,
                start_line=index + 1 + line_offset,
                end_line=end_index + 1 + line_offset,
                content="\n".join(content_lines),
                terminated=terminated,
            )
        )
        index = end_index + 1

    return blocks, prose


def extract_code_blocks(body: str, line_offset: int = 0) -> Tuple[List[CodeBlock], List[CodeBlock]]:
    """
    Extract fenced code blocks from a Markdown body.

    An unclosed fence swallows the rest of the document, as CommonMark does.

    Args:
        body: Markdown text
        line_offset: Added to every line number (lines before the body)

    Returns:
        (blocks, unterminated) where unterminated is the subset of blocks
        that never saw a closing fence (at most one, always the last)
    """
    blocks, _ = _split_fences(_body_lines(body), line_offset)
    return blocks, [block for block in blocks if not block.terminated]


# ============================================================================
# Links
# ============================================================================


def _links_in_line(line: str, line_number: int) -> List[Link]:
    """Extract links from a single prose line (inline code already masked)."""
    definition = _DEFINITION.match(line)
    if definition:
        return [
            Link(
                kind="definition",
                text=definition.group("ref"),
                url=_unwrap_url(definition.group("url")),
                line=line_number,
                ref=definition.group("ref"),
            )
        ]

    links = []
    masked = line

    for match in _INLINE_LINK.finditer(line):
        links.append(
            Link(
                kind="inline",
                text=match.group("text"),
                url=_unwrap_url(match.group("url")),
                line=line_number,
                is_image=bool(match.group("bang")),
            )
        )
        # One level of nesting covers the common [![badge](img)](url) case
        for inner in _INLINE_LINK.finditer(match.group("text")):
            links.append(
                Link(
                    kind="inline",
                    text=inner.group("text"),
                    url=_unwrap_url(inner.group("url")),
                    line=line_number,
                    is_image=bool(inner.group("bang")),
                )
            )
        # Mask the whole link so its URL is not re-read as an autolink
        masked = _mask(masked, match.start(), match.end())

    # Destinations the strict pattern rejects, such as URLs with spaces, are kept raw
    for match in _LOOSE_INLINE_LINK.finditer(masked):
        links.append(
            Link(
                kind="inline",
                text=match.group("text"),
                url=_loose_destination(match.group("url")),
                line=line_number,
                is_image=bool(match.group("bang")),
            )
        )
        masked = _mask(masked, match.start(), match.end())

    for match in _AUTOLINK.finditer(masked):
        links.append(
            Link(kind="autolink", text=match.group("url"), url=match.group("url"), line=line_number)
        )

    for match in _REFERENCE_LINK.finditer(masked):
        ref = match.group("ref") or match.group("text")
        links.append(
            Link(
                kind="reference",
                text=match.group("text"),
                url=None,
                line=line_number,
                ref=ref,
                is_image=bool(match.group("bang")),
            )
        )

    return links


def scan_markdown(body: str, line_offset: int = 0) -> MarkdownScan:
    """
    Scan a Markdown body for code blocks and links.

    Args:
        body: Markdown text (front matter already removed)
        line_offset: Added to every line number so results point into the post file

    Returns:
        MarkdownScan with code blocks and links in document order
    """
    lines = _body_lines(body)
    blocks, prose = _split_fences(lines, line_offset)

    links = []
    for index in prose:
        line = strip_inline_code(lines[index])
        if "[" not in line and "<" not in line:
            continue
        links.extend(_links_in_line(line, index + 1 + line_offset))

    return MarkdownScan(code_blocks=blocks, links=links)


def extract_links(body: str, line_offset: int = 0) -> List[Link]:
    """Extract links from prose, skipping code blocks and inline code."""
    return scan_markdown(body, line_offset).links
