"""
scan_md/components/title.py - Title resolution for Markdown documents.

A document's title is taken, in order of preference, from:

  1. the `title` field of a leading YAML front matter block
  2. the first level-1 heading (`# Title`) in the body
  3. the file name with its extension removed
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, Tuple

import yaml

from scan_md.errors import ParseFailure

logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"

# Front matter must open the document; blank lines before it are tolerated.
_FRONT_MATTER_RE = re.compile(
    r"\A(?:[ \t]*\r?\n)*---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
_H1_RE = re.compile(r"^#[ \t]+(\S.*)$", re.MULTILINE)

FrontMatterParser = Callable[[str], Dict[str, Any]]


def split_front_matter(text: str) -> Tuple[str, str]:
    """Split *text* into (front matter source, body). No block gives ("", text)."""
    match = _FRONT_MATTER_RE.match(text)
    if match is None:
        return "", text
    return match.group(1), text[match.end():]


def parse_front_matter(text: str) -> Dict[str, Any]:
    """
    Parse the leading front matter block of *text* into a dict.

    Returns an empty dict when there is no block or the block is empty.

    Raises:
        ParseFailure: If the block is not valid YAML or is not a mapping.
    """
    raw, _ = split_front_matter(text)
    if not raw.strip():
        return {}

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ParseFailure(f"invalid front matter: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ParseFailure(
            f"front matter must be a mapping, got {type(data).__name__}"
        )
    return data


def strip_extension(name: str) -> str:
    stem, dot, _ = name.rpartition(".")
    if not dot or not stem:
        return name
    return stem


def resolve_title(
    content: str,
    fallback_name: str,
    parse: FrontMatterParser = parse_front_matter,
) -> str:
    """
    Return the best available title for a document.

    Args:
        content:       Raw document text.
        fallback_name: File name used when the text carries no title.
        parse:         Front matter parser; its ParseFailure propagates.
    """
    title = parse(content).get("title")
    if isinstance(title, str) and title:
        return title

    _, body = split_front_matter(content)
    heading = _H1_RE.search(body)
    if heading:
        return heading.group(1).strip()

    logger.debug("No title in %s, falling back to file name", fallback_name)
    return strip_extension(fallback_name)
