"""Candidate filters.

Each filter takes a CandidateSet and returns a new one; none of them
mutate their input. Filters are idempotent and commute with each other.
"""

from __future__ import annotations

import functools
from typing import Callable, Iterable

from .models import CandidateSet

CandidateFilter = Callable[[CandidateSet], CandidateSet]


def exclude_snapshots(candidates: CandidateSet) -> CandidateSet:
    """Drop SNAPSHOT and timestamped snapshot versions."""
    return tuple(v for v in candidates if not v.is_snapshot)


def restrict_to_variant(candidates: CandidateSet, suffix: str) -> CandidateSet:
    """Keep only versions ending with ``suffix``."""
    return tuple(v for v in candidates if v.has_variant(suffix))


def variant_filter(suffix: str) -> CandidateFilter:
    return functools.partial(restrict_to_variant, suffix=suffix)


def apply_filters(candidates: CandidateSet, filters: Iterable[CandidateFilter]) -> CandidateSet:
    for f in filters:
        candidates = f(candidates)
    return candidates
