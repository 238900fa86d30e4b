"""Find where project properties live inside a POM, as byte offsets.

The document is parsed once with expat; for every child element of
``/project/properties`` the byte range of its content is recorded so a
caller can splice a new value in without re-serializing the document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple
from xml.parsers import expat

from errors import DocumentParseError

logger = logging.getLogger(__name__)

PROPERTIES_PATH = ("project", "properties")


@dataclass(frozen=True)
class PropertyLocation:
    """Byte range of one property inside the UTF-8 encoded document.

    For ``<name>value</name>`` the range covers ``value``. For a
    self-closing ``<name/>`` (``empty`` is True) it covers the whole tag.
    """
    name: str
    start: int
    end: int
    empty: bool = False
    tag: Optional[str] = None


def _local(name: str) -> str:
    return name.rsplit(":", 1)[-1]


def _start_tag_end(data: bytes, start: int) -> int:
    """Index of the ``>`` closing the start tag that begins at ``start``."""
    quote = None
    i = start
    n = len(data)
    while i < n:
        c = data[i:i + 1]
        if quote is not None:
            if c == quote:
                quote = None
        elif c in (b'"', b"'"):
            quote = c
        elif c == b">":
            return i
        i += 1
    raise DocumentParseError(f"unterminated start tag at offset {start}")


class _Scanner:
    def __init__(self, data: bytes):
        self.data = data
        self.parser = expat.ParserCreate(encoding="UTF-8")
        self.parser.StartElementHandler = self.start
        self.parser.EndElementHandler = self.end
        self.path: List[str] = []
        self.open: List[Optional[Tuple[str, int, int]]] = []
        self.locations: List[PropertyLocation] = []

    def start(self, name, _attrs):
        pos = self.parser.CurrentByteIndex
        parent = tuple(self.path)
        self.path.append(_local(name))
        if parent == PROPERTIES_PATH:
            tag_end = _start_tag_end(self.data, pos)
            self.open.append((name, pos, tag_end))
        else:
            self.open.append(None)

    def end(self, name):
        pos = self.parser.CurrentByteIndex
        pending = self.open.pop()
        self.path.pop()
        if pending is None:
            return
        qname, tag_start, tag_end = pending
        if self.data[tag_end - 1:tag_end] == b"/":
            self.locations.append(PropertyLocation(_local(qname), tag_start, tag_end + 1, True, qname))
        else:
            self.locations.append(PropertyLocation(_local(qname), tag_end + 1, pos, False, qname))

    def run(self) -> List[PropertyLocation]:
        try:
            self.parser.Parse(self.data, True)
        except expat.ExpatError as e:
            raise DocumentParseError(f"malformed document: {e}") from e
        return self.locations


def locate_properties(data: bytes) -> List[PropertyLocation]:
    """Return the location of every ``/project/properties/*`` element.

    Raises:
        DocumentParseError: when ``data`` is not well-formed XML.
    """
    locations = _Scanner(data).run()
    logger.debug("Located %d properties", len(locations))
    return locations
