"""Maven generic version ordering.

Implements the ordering rules of Maven's generic version scheme so versions
such as ``6.0.1-12-ce`` or ``3.3.max`` compare the way the Maven resolver
compares them. PEP 440 parsers reject most of these strings, hence the
dedicated implementation.

Ordering summary:

- a version is split into items on ``.``, ``-`` and ``_`` and on every
  transition between digits and letters
- numbers compare numerically, leading zeros are ignored
- known qualifiers rank ``alpha < beta < milestone < rc == cr < snapshot <
  "" == ga == final == release < sp``
- any other word compares case-insensitively, above qualifiers and below
  numbers
- ``min``/``max`` as the last item rank below/above everything
- trailing items equal to the padding (``0`` or ``ga``) are ignored, so
  ``1.0 == 1.0.0 == 1-ga``
"""

from __future__ import annotations

import functools
from typing import List, Optional

KIND_MIN = 0
KIND_QUALIFIER = 2
KIND_STRING = 3
KIND_INT = 4
KIND_BIGINT = 5
KIND_MAX = 8

QUALIFIER_ALPHA = -5
QUALIFIER_BETA = -4
QUALIFIER_MILESTONE = -3

QUALIFIERS = {
    "alpha": QUALIFIER_ALPHA,
    "beta": QUALIFIER_BETA,
    "milestone": QUALIFIER_MILESTONE,
    "cr": -2,
    "rc": -2,
    "snapshot": -1,
    "ga": 0,
    "final": 0,
    "release": 0,
    "": 0,
    "sp": 1,
}

_SHORT_QUALIFIERS = {"a": QUALIFIER_ALPHA, "b": QUALIFIER_BETA, "m": QUALIFIER_MILESTONE}


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class Item:
    """One parsed segment of a version."""

    __slots__ = ("kind", "value")

    def __init__(self, kind: int, value):
        self.kind = kind
        self.value = value

    def is_number(self) -> bool:
        return (self.kind & KIND_QUALIFIER) == 0

    def compare(self, that: Optional["Item"]) -> int:
        """Compare with another item; ``None`` stands for the padding item."""
        if that is None:
            if self.kind == KIND_MIN:
                return -1
            if self.kind in (KIND_MAX, KIND_BIGINT, KIND_STRING):
                return 1
            return _sign(self.value)

        rel = self.kind - that.kind
        if rel != 0:
            return _sign(rel)
        if self.kind in (KIND_MAX, KIND_MIN):
            return 0
        if self.kind == KIND_STRING:
            a, b = self.value.lower(), that.value.lower()
            return (a > b) - (a < b)
        return _sign(self.value - that.value)

    def __repr__(self) -> str:
        return f"Item({self.kind}, {self.value!r})"


ITEM_MIN = Item(KIND_MIN, "min")
ITEM_MAX = Item(KIND_MAX, "max")


class _Tokenizer:
    """Walks a version string and yields one item per segment."""

    def __init__(self, version: str):
        self.version = version if version else "0"
        self.index = 0
        self.token = ""
        self.number = False
        self.terminated_by_number = False

    def next(self) -> bool:
        version = self.version
        length = len(version)
        if self.index >= length:
            return False

        state = -2
        start = self.index
        end = length
        self.terminated_by_number = False

        while self.index < length:
            c = version[self.index]
            if c in ".-_":
                end = self.index
                self.index += 1
                break
            if c.isdigit() and c.isascii():
                if state == -1:
                    end = self.index
                    self.terminated_by_number = True
                    break
                if state == 0:
                    # strip leading zeros
                    start += 1
                state = 1 if (state > 0 or c != "0") else 0
            else:
                if state >= 0:
                    end = self.index
                    break
                state = -1
            self.index += 1

        if end - start > 0:
            self.token = version[start:end]
            self.number = state >= 0
        else:
            self.token = "0"
            self.number = True
        return True

    def to_item(self) -> Item:
        token = self.token
        if self.number:
            value = int(token)
            return Item(KIND_INT if len(token) < 10 else KIND_BIGINT, value)

        if self.index >= len(self.version):
            if token.lower() == "min":
                return ITEM_MIN
            if token.lower() == "max":
                return ITEM_MAX

        if self.terminated_by_number and len(token) == 1:
            short = _SHORT_QUALIFIERS.get(token.lower())
            if short is not None:
                return Item(KIND_QUALIFIER, short)

        qualifier = QUALIFIERS.get(token.lower())
        if qualifier is not None:
            return Item(KIND_QUALIFIER, qualifier)
        return Item(KIND_STRING, token.lower())


def _trim_padding(items: List[Item]) -> None:
    number = None
    end = len(items) - 1
    i = end
    while i > 0:
        item = items[i]
        if item.is_number() != number:
            end = i
            number = item.is_number()
        if (
            end == i
            and (i == len(items) - 1 or items[i - 1].is_number() == item.is_number())
            and item.compare(None) == 0
        ):
            del items[i]
            end -= 1
        i -= 1


def parse_items(version: str) -> List[Item]:
    """Split ``version`` into comparable items. Accepts any string."""
    items: List[Item] = []
    tokenizer = _Tokenizer(version)
    while tokenizer.next():
        items.append(tokenizer.to_item())
    _trim_padding(items)
    return items


def _compare_padding(items: List[Item], index: int, number: Optional[bool]) -> int:
    rel = 0
    for item in items[index:]:
        if number is not None and number != item.is_number():
            break
        rel = item.compare(None)
        if rel != 0:
            break
    return rel


def compare_items(these: List[Item], those: List[Item]) -> int:
    """Three-way comparison of two parsed versions."""
    number = True
    index = 0
    while True:
        if index >= len(these) and index >= len(those):
            return 0
        if index >= len(these):
            return -_compare_padding(those, index, None)
        if index >= len(those):
            return _compare_padding(these, index, None)

        this_item = these[index]
        that_item = those[index]
        if this_item.is_number() != that_item.is_number():
            if number == this_item.is_number():
                return _compare_padding(these, index, number)
            return -_compare_padding(those, index, number)

        rel = this_item.compare(that_item)
        if rel != 0:
            return rel
        number = this_item.is_number()
        index += 1


@functools.total_ordering
class GenericVersion:
    """A version string ordered by Maven's generic version rules."""

    __slots__ = ("raw", "items")

    def __init__(self, raw: str):
        self.raw = raw
        self.items = parse_items(raw.strip())

    def compare(self, other: "GenericVersion") -> int:
        return compare_items(self.items, other.items)

    def __eq__(self, other) -> bool:
        if not isinstance(other, GenericVersion):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other) -> bool:
        if not isinstance(other, GenericVersion):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash(tuple((item.kind, item.value) for item in self.items))

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"GenericVersion({self.raw!r})"
