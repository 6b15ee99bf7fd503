# sitewright/generation/parser.py
"""
Extraction of generated files from model text.

Parsing is purely lexical: fenced markdown code blocks are located by their
language tag. Nothing here touches the filesystem.
"""
import re
from typing import Iterable, Optional

from sitewright.generation.errors import UnsupportedKindError
from sitewright.generation.models import OutputKind, ParsedFileSet
from sitewright.utils.logging import get_logger

logger = get_logger(__name__)

def _fence_pattern(tags: Iterable[str]) -> "re.Pattern[str]":
    # The tag must be followed by a line break, so ```htmlx never matches html
    alternation = "|".join(re.escape(tag) for tag in tags)
    return re.compile(
        r"```(?:" + alternation + r")[ \t]*\r?\n(.*?)```",
        re.IGNORECASE | re.DOTALL,
    )


def extract_fenced_block(text: str, tags: Iterable[str]) -> Optional[str]:
    """
    Return the body of the first fenced block tagged with one of `tags`.

    Args:
        text: Text that may contain fenced code blocks
        tags: Accepted language tags (matched case-insensitively)

    Returns:
        The raw (untrimmed) block body, or None if no such block exists
    """
    match = _fence_pattern(tags).search(text or "")
    if match:
        return match.group(1)
    return None


def parse_single_file(text: str) -> ParsedFileSet:
    """Parse a single HTML document, falling back to the whole text."""
    text = text or ""
    block = extract_fenced_block(text, ("html",))
    if block is not None and block.strip():
        html = block.strip()
    else:
        logger.debug("No html block found, using the whole response as the document")
        html = text.strip()

    file_set = ParsedFileSet(kind=OutputKind.SINGLE_FILE, html=html)
    file_set.require_primary()
    return file_set


def parse_multi_file(text: str) -> ParsedFileSet:
    """Parse an HTML/CSS/JS triplet. Missing blocks leave their slot empty."""
    slots = {}
    for slot, tags in (("html", ("html",)), ("css", ("css",)), ("js", ("js", "javascript"))):
        block = extract_fenced_block(text, tags)
        slots[slot] = block.strip() if block else ""

    file_set = ParsedFileSet(kind=OutputKind.MULTI_FILE, **slots)
    logger.debug(
        "Parsed multi-file response",
        extra={"slots": [name for name, value in slots.items() if value]},
    )
    file_set.require_primary()
    return file_set


def parse_output(text: str, kind) -> ParsedFileSet:
    """
    Turn one completed model response into a typed file set.

    Args:
        text: The complete model response
        kind: OutputKind (or its string value)

    Returns:
        ParsedFileSet for the kind

    Raises:
        UnsupportedKindError: For an unknown kind
        ValidationError: If the primary html slot is empty
    """
    kind = OutputKind.parse(kind)

    if kind is OutputKind.SINGLE_FILE:
        return parse_single_file(text)
    if kind is OutputKind.MULTI_FILE:
        return parse_multi_file(text)
    if kind is OutputKind.FRAMEWORK_PROJECT:
        content = (text or "").strip()
        return ParsedFileSet(kind=kind, content=content or None)

    raise UnsupportedKindError(kind)


class OutputParser:
    """Thin object wrapper so the parser can be registered as a service."""

    def parse(self, text: str, kind) -> ParsedFileSet:
        return parse_output(text, kind)


output_parser = OutputParser()
