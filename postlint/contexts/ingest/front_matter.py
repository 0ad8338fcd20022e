"""
Front matter splitting and parsing for the ingest context.

A front matter block is a YAML mapping delimited by "---" lines at the very top
of a post:

    ---
    layout: post
    title: WordPress rewrite rules
    tags: [php, wordpress]
    ---
    Body text...

The closing delimiter may also be "..." (YAML document end marker).
YAML is loaded with OmegaConf so that duplicate keys are rejected and dates
stay plain strings.
"""

import re
from typing import Any, Dict, Optional, Tuple

import yaml
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from postlint.contexts.ingest.exceptions import FrontMatterError

OPENING_FENCE = re.compile(r"^---[ \t]*$")
CLOSING_FENCE = re.compile(r"^(?:---|\.\.\.)[ \t]*$")

BOM = "\ufeff"


def split_front_matter(text: str) -> Tuple[Optional[str], str, int]:
    """
    Split a post into its raw front matter and body.

    Args:
        text: Full post text

    Returns:
        (raw_yaml, body, line_count) where:
        - raw_yaml: Text between the fences, or None if the post has no front matter
        - body: Everything after the closing fence
        - line_count: Lines taken by the block including both fences (0 if none)

    Raises:
        FrontMatterError: If an opening fence is never closed
    """
    text = text.removeprefix(BOM)
    # Lines end at "\n" only; form feeds and U+2028 stay inside a line
    lines = re.split(r"(?<=\n)", text)

    if not lines or not OPENING_FENCE.match(lines[0].rstrip("\r\n")):
        return None, text, 0

    for index in range(1, len(lines)):
        if CLOSING_FENCE.match(lines[index].rstrip("\r\n")):
            raw_yaml = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            return raw_yaml, body, index + 1

    raise FrontMatterError("Unterminated front matter: no closing '---'", line=1)


def _root_node(raw_yaml: str) -> Optional[yaml.Node]:
    """Compose the YAML document without constructing it, to inspect the top-level shape."""
    return yaml.compose(raw_yaml, Loader=yaml.SafeLoader)


def _yaml_error(e: yaml.YAMLError) -> FrontMatterError:
    mark = getattr(e, "problem_mark", None)
    line = mark.line + 2 if mark is not None else None
    problem = getattr(e, "problem", None) or str(e).splitlines()[0]
    return FrontMatterError(f"Invalid YAML in front matter: {problem}", line=line)


def parse_front_matter(raw_yaml: Optional[str]) -> Dict[str, Any]:
    """
    Parse raw front matter YAML into a plain dict.

    Interpolation strings such as "${var}" are kept literally (PHP and Ruby
    snippets in titles are common).

    Args:
        raw_yaml: Text between the front matter fences (None or blank yields {})

    Returns:
        Dict of front-matter keys to plain Python values (str, int, list, dict, ...)

    Raises:
        FrontMatterError: If the YAML is malformed, has duplicate keys, or is not a mapping.
            Line numbers are relative to the post file (the opening fence is line 1).
    """
    if raw_yaml is None or not raw_yaml.strip():
        return {}

    try:
        root = _root_node(raw_yaml)
    except yaml.YAMLError as e:
        raise _yaml_error(e) from e

    if root is None:
        # Comments only
        return {}
    if not isinstance(root, yaml.MappingNode):
        # OmegaConf would read a bare scalar such as "see http://x" as {scalar: None}
        raise FrontMatterError(
            "Front matter is not a key-value mapping",
            line=root.start_mark.line + 2,
            snippet=raw_yaml,
        )

    try:
        config = OmegaConf.create(raw_yaml)
    except yaml.YAMLError as e:
        raise _yaml_error(e) from e
    except (OmegaConfBaseException, ValueError) as e:
        raise FrontMatterError(f"Invalid front matter: {e}", snippet=raw_yaml) from e

    if not isinstance(config, DictConfig):
        raise FrontMatterError(
            "Front matter is not a key-value mapping", line=2, snippet=raw_yaml
        )

    return OmegaConf.to_container(config, resolve=False)
