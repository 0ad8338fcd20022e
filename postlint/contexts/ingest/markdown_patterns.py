"""
Markdown Pattern Constants

Regex patterns used to scan post bodies for fenced code blocks and links.
Organized into frozen dataclasses by category for immutability and clear grouping.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FencePatterns:
    """
    Fenced code block patterns (CommonMark style).

    An opening fence is 3+ backticks or tildes indented by at most three spaces,
    followed by an optional info string. Backtick fences may not carry
    backticks in their info string.
    """

    OPENING: str = r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})(?P<info>.*)$"

    # Closing fence: same character as the opener, at least as long, nothing but spaces after
    CLOSING_TEMPLATE: str = r"^ {{0,3}}{char}{{{length},}}[ \t]*$"


@dataclass(frozen=True)
class LinkPatterns:
    """
    Link patterns for inline, autolink and reference-style links.

    Bracketed text allows one level of nested brackets so that image links
    inside link text ("[![alt](img.png)](url)") are matched as a unit.
    """

    # [text](url "title") and ![alt](url); url may be wrapped in <...>
    INLINE: str = (
        r"(?P<bang>!?)\[(?P<text>(?:[^\[\]]|\[[^\[\]]*\])*)\]"
        r"\(\s*(?P<url><[^>]*>|[^\s()]*(?:\([^\s()]*\)[^\s()]*)*)"
        r"(?:\s+(?P<title>\"[^\"]*\"|'[^']*'|\([^)]*\)))?\s*\)"
    )

    # Fallback for [text](destination) that INLINE rejects, e.g. a URL containing spaces;
    # the destination runs to the closing parenthesis (one level of nested parentheses)
    LOOSE_INLINE: str = (
        r"(?P<bang>!?)\[(?P<text>(?:[^\[\]]|\[[^\[\]]*\])*)\]"
        r"\((?P<url>[^()]*(?:\([^()]*\)[^()]*)*)\)"
    )

    # Optional "title" at the end of a loose destination
    TRAILING_TITLE: str = r"\s+(?:\"[^\"]*\"|'[^']*')$"

    # <https://example.com>
    AUTOLINK: str = r"<(?P<url>[a-zA-Z][a-zA-Z0-9+.-]{1,31}:[^\s<>]*)>"

    # [text][ref] and collapsed [text][]
    REFERENCE: str = (
        r"(?P<bang>!?)\[(?P<text>(?:[^\[\]]|\[[^\[\]]*\])*)\]\[(?P<ref>[^\[\]]*)\]"
    )

    # [ref]: url "optional title"   (at most three spaces of indentation)
    DEFINITION: str = (
        r"^ {0,3}\[(?P<ref>[^\[\]]+)\]:[ \t]*(?P<url><[^>]*>|\S*)"
        r"(?:[ \t]+(?P<title>\"[^\"]*\"|'[^']*'|\([^)]*\)))?[ \t]*$"
    )

    # `inline code` spans (matching backtick run lengths)
    INLINE_CODE: str = r"(?P<ticks>`+)(?!`).+?(?<!`)(?P=ticks)(?!`)"
