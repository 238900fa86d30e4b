"""Resolution orchestration: one fetch per constraint, one outcome per target."""

from __future__ import annotations

import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled
from errors import UnknownTarget
from .filters import exclude_snapshots, restrict_to_variant
from .models import (
    CandidateSet,
    Failed,
    FailureKind,
    RangeConstraint,
    ResolutionOutcome,
    TargetSpec,
    candidate_set,
)
from .selector import select_highest

logger = logging.getLogger(__name__)


def describe_constraint(constraint: RangeConstraint, include_snapshots: bool) -> str:
    return f"{constraint}, {'including' if include_snapshots else 'excluding'} snapshots"


def build_targets(
    names: Iterable[str],
    property_names: Optional[Mapping[str, str]] = None,
    variants: Optional[Mapping[str, Optional[str]]] = None,
) -> List[TargetSpec]:
    """Turn target names into TargetSpecs.

    Raises:
        UnknownTarget: for a name that has no variant mapping.
    """
    variants = Constants.TARGET_VARIANTS if variants is None else variants
    property_names = property_names or {}
    targets = []
    for name in names:
        if name not in variants:
            raise UnknownTarget(name)
        targets.append(TargetSpec(name=name, variant_suffix=variants[name],
                                  property_name=property_names.get(name)))
    return targets


class ResolutionService:
    """Resolves named targets against the versions a repository reports.

    ``client`` is anything with ``resolve_version_range(constraint) ->
    list[str]``, e.g. registry.maven.client.MavenRepositoryClient.
    """

    def __init__(self, client, known_variants: Optional[Iterable[Optional[str]]] = None):
        self.client = client
        if known_variants is None:
            known_variants = Constants.TARGET_VARIANTS.values()
        self.known_variants = set(known_variants)

    def fetch(self, constraint: RangeConstraint) -> CandidateSet:
        """Ask the repository once for every version in range."""
        return candidate_set(self.client.resolve_version_range(constraint))

    def resolve(
        self,
        constraint: RangeConstraint,
        targets: Sequence[TargetSpec],
        include_snapshots: bool = False,
        parallel: bool = False,
    ) -> Dict[str, ResolutionOutcome]:
        """Resolve every target from a single fetch of ``constraint``.

        A failing target does not stop the others; the caller decides what
        a partial result means. Returned mapping follows ``targets`` order.

        Raises:
            UnknownTarget: when a target uses a variant this service does not know.
            InvalidVersionRange, RepositoryError: from the repository client.
        """
        for target in targets:
            if target.variant_suffix not in self.known_variants:
                raise UnknownTarget(target.name)

        description = describe_constraint(constraint, include_snapshots)
        logger.info("Resolving range for %s", description)

        raw = self.fetch(constraint)
        if is_debug_enabled(logger):
            logger.debug(
                "Versions fetched",
                extra=extra_context(
                    event="fetch",
                    component="service",
                    action="resolve",
                    target=str(constraint),
                    count=len(raw),
                )
            )
            logger.debug("Versions fetched %s", [v.raw for v in raw])

        if not raw:
            logger.warning("No versions found for %s", description)
            return {
                t.name: Failed(f"No {t.name} versions found for constraint: '{description}'.",
                               description, FailureKind.EMPTY_CANDIDATE_SET)
                for t in targets
            }

        base = raw if include_snapshots else exclude_snapshots(raw)

        def _one(target: TargetSpec) -> ResolutionOutcome:
            return self._resolve_target(target, base, description)

        if parallel and len(targets) > 1:
            with ThreadPoolExecutor(max_workers=len(targets)) as pool:
                outcomes = list(pool.map(_one, targets))
        else:
            outcomes = [_one(t) for t in targets]
        return {t.name: o for t, o in zip(targets, outcomes)}

    def _resolve_target(self, target: TargetSpec, candidates: CandidateSet,
                        description: str) -> ResolutionOutcome:
        if target.variant_suffix is not None:
            candidates = restrict_to_variant(candidates, target.variant_suffix)
            if not candidates:
                logger.info("%s can not be fetched", target.name)

        logger.debug("%s Versions in range: %s", target.name, [v.raw for v in candidates])
        outcome = select_highest(candidates, description)
        if isinstance(outcome, Failed):
            return dataclasses.replace(
                outcome,
                reason=f"No matching {target.name} version found for constraint: '{description}'.",
            )
        logger.info("Highest %s version: %s", target.name, outcome.version)
        return outcome
