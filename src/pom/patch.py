"""Format-preserving property rewrites.

Only the bytes of the targeted property values change; indentation,
comments, attribute quoting and line endings stay exactly as they were.
"""

from __future__ import annotations

import logging
from typing import Iterable, List
from xml.sax.saxutils import escape

from errors import PropertyNotFound
from versioning.models import DocumentPatchResult, PropertyEdit
from .locator import PropertyLocation, locate_properties

logger = logging.getLogger(__name__)


def _splice(data: bytes, locations: List[PropertyLocation], value: str) -> bytes:
    encoded = escape(value).encode("utf-8")
    for loc in sorted(locations, key=lambda l: l.start, reverse=True):
        if loc.empty:
            opening = data[loc.start:loc.end - 2].rstrip()
            replacement = opening + b">" + encoded + b"</" + loc.tag.encode("utf-8") + b">"
        else:
            replacement = encoded
        data = data[:loc.start] + replacement + data[loc.end:]
    return data


def apply_edits(text: str, edits: Iterable[PropertyEdit]) -> DocumentPatchResult:
    """Apply ``edits`` in order, each one to the output of the previous one.

    Stops at the first property that does not exist and reports it in
    ``missing_property``; the input text is never modified.

    Raises:
        DocumentParseError: when the document is not well-formed XML.
    """
    data = text.encode("utf-8")
    for edit in edits:
        matches = [loc for loc in locate_properties(data) if loc.name == edit.property_name]
        if not matches:
            logger.error("Property %s not found in document", edit.property_name)
            return DocumentPatchResult(missing_property=edit.property_name)
        logger.info("Setting property %s=%s", edit.property_name, edit.new_value)
        data = _splice(data, matches, edit.new_value)
    return DocumentPatchResult(text=data.decode("utf-8"))


def patch_document(text: str, edits: Iterable[PropertyEdit]) -> str:
    """Like apply_edits, but raise PropertyNotFound instead of returning it."""
    result = apply_edits(text, edits)
    if not result.ok:
        raise PropertyNotFound(result.missing_property)
    return result.text
