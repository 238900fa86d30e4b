"""Maven version range expressions.

Supports the bracket notation understood by the Maven resolver:
``[1.0,2.0)``, ``(,1.0]``, ``[1.5]``, ``[1.2.*]`` and unions such as
``[1.0,2.0),[3.0,)``. A string without brackets is a plain version and
matches only itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from errors import InvalidVersionRange
from .generic import GenericVersion


@dataclass(frozen=True)
class VersionRange:
    """A single interval with optional bounds."""
    lower: Optional[GenericVersion]
    lower_inclusive: bool
    upper: Optional[GenericVersion]
    upper_inclusive: bool

    def contains(self, version: GenericVersion) -> bool:
        if self.lower is not None:
            rel = version.compare(self.lower)
            if rel < 0 or (rel == 0 and not self.lower_inclusive):
                return False
        if self.upper is not None:
            rel = version.compare(self.upper)
            if rel > 0 or (rel == 0 and not self.upper_inclusive):
                return False
        return True

    def __str__(self) -> str:
        lower = self.lower.raw if self.lower is not None else ""
        upper = self.upper.raw if self.upper is not None else ""
        open_ch = "[" if self.lower_inclusive else "("
        close_ch = "]" if self.upper_inclusive else ")"
        if self.lower is not None and self.lower is self.upper:
            return f"[{lower}]"
        return f"{open_ch}{lower},{upper}{close_ch}"


@dataclass(frozen=True)
class VersionConstraint:
    """Either a union of ranges or a single plain version."""
    expression: str
    ranges: Tuple[VersionRange, ...]
    version: Optional[GenericVersion] = None

    @property
    def is_range(self) -> bool:
        return bool(self.ranges)

    def contains(self, version: GenericVersion) -> bool:
        if self.ranges:
            return any(r.contains(version) for r in self.ranges)
        return self.version is not None and version == self.version

    def filter(self, candidates: Iterable[str]) -> List[str]:
        """Keep the candidates matched by this constraint, in input order."""
        return [c for c in candidates if self.contains(GenericVersion(c))]


def parse_range(expression: str, text: str) -> VersionRange:
    """Parse one bracketed interval. ``expression`` is used in error messages."""
    if text.startswith("["):
        lower_inclusive = True
    elif text.startswith("("):
        lower_inclusive = False
    else:
        raise InvalidVersionRange(expression, "a range must start with either [ or (")

    if text.endswith("]"):
        upper_inclusive = True
    elif text.endswith(")"):
        upper_inclusive = False
    else:
        raise InvalidVersionRange(expression, "a range must end with either ] or )")

    inner = text[1:-1]
    if "," not in inner:
        if not (lower_inclusive and upper_inclusive):
            raise InvalidVersionRange(expression, "single version must be surrounded by []")
        version = inner.strip()
        if version.endswith(".*"):
            prefix = version[:-1]
            return VersionRange(GenericVersion(prefix + "min"), True, GenericVersion(prefix + "max"), True)
        bound = GenericVersion(version)
        return VersionRange(bound, True, bound, True)

    lower_text, upper_text = inner.split(",", 1)
    lower_text, upper_text = lower_text.strip(), upper_text.strip()
    if "," in upper_text:
        raise InvalidVersionRange(expression, "bounds may not contain additional ','")
    lower = GenericVersion(lower_text) if lower_text else None
    upper = GenericVersion(upper_text) if upper_text else None
    if lower is not None and upper is not None and upper < lower:
        raise InvalidVersionRange(expression, "lower bound must not be greater than upper bound")
    return VersionRange(lower, lower_inclusive, upper, upper_inclusive)


def parse_constraint(expression: str) -> VersionConstraint:
    """Parse a range expression or a plain version.

    Raises:
        InvalidVersionRange: when brackets are unbalanced, bounds are
            reversed or text follows the last range.
    """
    if expression is None:
        raise InvalidVersionRange("None", "expression is required")
    process = expression.strip()
    ranges: List[VersionRange] = []

    while process.startswith("[") or process.startswith("("):
        close_paren = process.find(")")
        close_bracket = process.find("]")
        index = close_bracket
        if close_bracket < 0 or (0 <= close_paren < close_bracket):
            index = close_paren
        if index < 0:
            raise InvalidVersionRange(expression, "unbounded version range")
        ranges.append(parse_range(expression, process[:index + 1]))
        process = process[index + 1:].strip()
        if process.startswith(","):
            process = process[1:].strip()

    if process and ranges:
        raise InvalidVersionRange(expression, f"expected [ or ( but got {process}")
    if not ranges:
        if not process:
            raise InvalidVersionRange(expression, "empty version constraint")
        return VersionConstraint(expression=expression, ranges=(), version=GenericVersion(process))
    return VersionConstraint(expression=expression, ranges=tuple(ranges))
