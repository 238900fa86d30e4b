"""Tests for the resolution service."""

import pytest

from errors import UnknownTarget
from versioning.models import Failed, FailureKind, RangeConstraint, Selected, TargetSpec
from versioning.service import ResolutionService, build_targets, describe_constraint


class FakeClient:
    """Repository stand-in that records how often it was asked."""

    def __init__(self, versions):
        self.versions = list(versions)
        self.calls = []

    def resolve_version_range(self, constraint):
        self.calls.append(constraint)
        return list(self.versions)


CONSTRAINT = RangeConstraint("org.apache.kafka", "kafka-clients", "[6.0.1-1, 6.0.2-1)")


@pytest.fixture
def targets():
    return build_targets(["ce-kafka", "ccs-kafka"], {"ce-kafka": "ce.kafka.version", "ccs-kafka": "kafka.version"})


def test_build_targets_maps_variants_and_properties(targets):
    assert targets == [
        TargetSpec("ce-kafka", "-ce", "ce.kafka.version"),
        TargetSpec("ccs-kafka", "-ccs", "kafka.version"),
    ]


def test_build_targets_rejects_unknown_name():
    with pytest.raises(UnknownTarget) as exc:
        build_targets(["ce-kafka", "enterprise"])
    assert exc.value.name == "enterprise"


def test_resolves_each_target_from_one_fetch(targets):
    client = FakeClient(["6.0.1-12-ce", "6.0.1-1-ccs", "6.0.1-3-ce", "6.0.1-2-ccs-SNAPSHOT"])
    outcomes = ResolutionService(client).resolve(CONSTRAINT, targets)

    assert len(client.calls) == 1
    assert list(outcomes) == ["ce-kafka", "ccs-kafka"]
    assert outcomes["ce-kafka"].version.raw == "6.0.1-12-ce"
    assert outcomes["ccs-kafka"].version.raw == "6.0.1-1-ccs"


def test_include_snapshots(targets):
    client = FakeClient(["6.0.1-1-ccs", "6.0.1-2-ccs-SNAPSHOT"])
    outcomes = ResolutionService(client).resolve(CONSTRAINT, targets[1:], include_snapshots=True)
    # "-ccs-SNAPSHOT" does not end with "-ccs"; the snapshot is still filtered by variant.
    assert outcomes["ccs-kafka"].version.raw == "6.0.1-1-ccs"

    client = FakeClient(["6.0.1-1", "6.0.1-2-SNAPSHOT"])
    any_target = build_targets(["any"])
    outcomes = ResolutionService(client).resolve(CONSTRAINT, any_target, include_snapshots=True)
    assert outcomes["any"].version.raw == "6.0.1-2-SNAPSHOT"
    outcomes = ResolutionService(client).resolve(CONSTRAINT, any_target, include_snapshots=False)
    assert outcomes["any"].version.raw == "6.0.1-1"


def test_partial_failure_is_reported_per_target(targets):
    client = FakeClient(["6.0.1-12-ce"])
    outcomes = ResolutionService(client).resolve(CONSTRAINT, targets)

    assert isinstance(outcomes["ce-kafka"], Selected)
    failed = outcomes["ccs-kafka"]
    assert isinstance(failed, Failed)
    assert failed.kind == FailureKind.NO_MATCHING_VERSION
    assert "ccs-kafka" in failed.reason
    assert "[6.0.1-1, 6.0.2-1)" in failed.reason
    assert "excluding snapshots" in failed.reason


def test_snapshot_only_range_has_no_matching_version(targets):
    client = FakeClient(["6.0.1-1-ce-SNAPSHOT", "6.0.1-1-ccs-SNAPSHOT"])
    outcomes = ResolutionService(client).resolve(CONSTRAINT, targets)
    assert all(o.kind == FailureKind.NO_MATCHING_VERSION for o in outcomes.values())


def test_empty_candidate_set(targets):
    outcomes = ResolutionService(FakeClient([])).resolve(CONSTRAINT, targets)
    for outcome in outcomes.values():
        assert isinstance(outcome, Failed)
        assert outcome.kind == FailureKind.EMPTY_CANDIDATE_SET
        assert outcome.constraint_description == describe_constraint(CONSTRAINT, False)


def test_empty_candidate_set_names_each_target(targets):
    outcomes = ResolutionService(FakeClient([])).resolve(CONSTRAINT, targets)
    assert outcomes["ce-kafka"].reason != outcomes["ccs-kafka"].reason
    for name, outcome in outcomes.items():
        assert name in outcome.reason
        assert str(CONSTRAINT) in outcome.reason


def test_unknown_variant_fails_before_fetch():
    client = FakeClient(["1.0-ce"])
    service = ResolutionService(client)
    with pytest.raises(UnknownTarget):
        service.resolve(CONSTRAINT, [TargetSpec("custom", "-custom")])
    assert client.calls == []


def test_custom_variants():
    client = FakeClient(["1.0-ee", "1.1-ee", "1.2-ce"])
    variants = {"enterprise": "-ee"}
    service = ResolutionService(client, known_variants=variants.values())
    outcomes = service.resolve(CONSTRAINT, build_targets(["enterprise"], variants=variants))
    assert outcomes["enterprise"].version.raw == "1.1-ee"


def test_parallel_matches_sequential(targets):
    versions = ["6.0.1-12-ce", "6.0.1-1-ccs", "6.0.1-3-ce", "6.0.1-4-ccs"]
    sequential = ResolutionService(FakeClient(versions)).resolve(CONSTRAINT, targets)
    parallel = ResolutionService(FakeClient(versions)).resolve(CONSTRAINT, targets, parallel=True)
    assert sequential == parallel
    assert list(parallel) == ["ce-kafka", "ccs-kafka"]


def test_describe_constraint():
    assert describe_constraint(CONSTRAINT, True) == \
        "org.apache.kafka:kafka-clients:[6.0.1-1, 6.0.2-1), including snapshots"
