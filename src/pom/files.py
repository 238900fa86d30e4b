"""Reading and writing descriptor documents without touching their bytes."""

from __future__ import annotations

import codecs
import logging
import re
from typing import Tuple

from constants import Constants
from errors import DocumentWriteFailure

logger = logging.getLogger(__name__)

_XML_DECL_ENCODING = re.compile(
    rb"^(?:\xef\xbb\xbf)?\s*<\?xml[^>]*?encoding\s*=\s*[\"']([A-Za-z0-9._-]+)[\"']"
)


# UTF-32 before UTF-16: the UTF-32-LE mark starts with the UTF-16-LE one.
_BYTE_ORDER_MARKS = (
    (codecs.BOM_UTF32_LE, "UTF-32"),
    (codecs.BOM_UTF32_BE, "UTF-32"),
    (codecs.BOM_UTF16_LE, "UTF-16"),
    (codecs.BOM_UTF16_BE, "UTF-16"),
)


def detect_encoding(data: bytes) -> str:
    """Encoding given by a byte-order mark or the XML declaration.

    UTF-8 when neither names a known encoding.
    """
    for bom, name in _BYTE_ORDER_MARKS:
        if data.startswith(bom):
            return name
    m = _XML_DECL_ENCODING.match(data)
    if m:
        name = m.group(1).decode("ascii")
        try:
            codecs.lookup(name)
            return name
        except LookupError:
            logger.warning("Unknown document encoding %s, falling back to %s", name,
                           Constants.DEFAULT_ENCODING)
    return Constants.DEFAULT_ENCODING


def read_document(path: str) -> Tuple[str, str]:
    """Return (text, encoding) of the document at ``path``.

    Line endings are kept as found.

    Raises:
        OSError: when the file cannot be read.
        UnicodeDecodeError: when the bytes do not match the detected encoding.
    """
    with open(path, "rb") as fh:
        data = fh.read()
    encoding = detect_encoding(data)
    return data.decode(encoding), encoding


def write_document(path: str, text: str, encoding: str = Constants.DEFAULT_ENCODING) -> None:
    """Write ``text`` to ``path`` verbatim.

    Raises:
        DocumentWriteFailure: wrapping the underlying OSError.
    """
    try:
        with open(path, "w", encoding=encoding, newline="") as fh:
            fh.write(text)
    except OSError as e:
        logger.error("Failed to write installed pom file %s: %s", path, e)
        raise DocumentWriteFailure(path, e) from e
    logger.info("Wrote %s", path)
