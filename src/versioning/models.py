"""Data models for version resolution and descriptor rewriting."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from constants import Constants
from .generic import GenericVersion

_SNAPSHOT_TIMESTAMP = re.compile(Constants.SNAPSHOT_TIMESTAMP)
_VARIANT_TAG = re.compile(r"-([A-Za-z][A-Za-z0-9]*)$")


def is_snapshot(raw: str) -> bool:
    """Return True for ``...SNAPSHOT`` and timestamped snapshot versions."""
    return raw.endswith(Constants.SNAPSHOT) or _SNAPSHOT_TIMESTAMP.fullmatch(raw) is not None


def has_variant(raw: str, suffix: str) -> bool:
    """Return True if ``raw`` ends with ``suffix``.

    This is a plain trailing-substring test: ``6.0.1-1-xce`` matches ``ce``.
    """
    return raw.endswith(suffix)


@dataclass(frozen=True, order=False)
class Version:
    """A candidate version: the raw string plus its ordering key."""
    raw: str
    key: GenericVersion = field(compare=False, repr=False)

    @property
    def is_snapshot(self) -> bool:
        return is_snapshot(self.raw)

    @property
    def variant_tag(self) -> Optional[str]:
        """Trailing alphabetic qualifier, e.g. ``ce`` for ``6.0.1-1-ce``."""
        m = _VARIANT_TAG.search(self.raw)
        return m.group(1) if m else None

    def has_variant(self, suffix: str) -> bool:
        return has_variant(self.raw, suffix)

    def __lt__(self, other: "Version") -> bool:
        return self.key < other.key

    def __str__(self) -> str:
        return self.raw


def parse_version(raw: str) -> Version:
    """Build a Version from any string; never raises."""
    return Version(raw=raw, key=GenericVersion(raw))


# Filters replace the whole tuple rather than mutating it.
CandidateSet = Tuple[Version, ...]


def candidate_set(raws) -> CandidateSet:
    return tuple(parse_version(r) for r in raws)


@dataclass(frozen=True)
class RangeConstraint:
    """Artifact coordinates plus the range expression to resolve."""
    group_id: str
    artifact_id: str
    expression: str

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.expression}"


class FailureKind(Enum):
    """Why a target produced no version."""
    EMPTY_CANDIDATE_SET = "empty_candidate_set"
    NO_MATCHING_VERSION = "no_matching_version"


@dataclass(frozen=True)
class Selected:
    """A target resolved to ``version``."""
    version: Version

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failed:
    """A target could not be resolved."""
    reason: str
    constraint_description: str
    kind: FailureKind = FailureKind.NO_MATCHING_VERSION

    @property
    def ok(self) -> bool:
        return False


ResolutionOutcome = Union[Selected, Failed]


@dataclass(frozen=True)
class TargetSpec:
    """A named resolution target.

    ``variant_suffix`` of None means every variant qualifies.
    """
    name: str
    variant_suffix: Optional[str]
    property_name: Optional[str] = None


@dataclass(frozen=True)
class PropertyEdit:
    """Set the property ``property_name`` to ``new_value``."""
    property_name: str
    new_value: str


@dataclass(frozen=True)
class DocumentPatchResult:
    """Outcome of a batch of property edits.

    Exactly one of ``text`` and ``missing_property`` is set.
    """
    text: Optional[str] = None
    missing_property: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.missing_property is None
