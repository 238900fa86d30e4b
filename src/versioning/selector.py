"""Pick the highest version of a filtered candidate set."""

from __future__ import annotations

from .models import CandidateSet, Failed, FailureKind, ResolutionOutcome, Selected

NO_MATCHING_VERSION = "no matching version"


def select_highest(candidates: CandidateSet, constraint_description: str) -> ResolutionOutcome:
    """Return Selected(max) or Failed when ``candidates`` is empty.

    Versions that rank equal under the generic ordering (``1.0`` and
    ``1.0.0``) resolve to the first one encountered.
    """
    if not candidates:
        return Failed(NO_MATCHING_VERSION, constraint_description, FailureKind.NO_MATCHING_VERSION)
    return Selected(max(candidates, key=lambda v: v.key))
