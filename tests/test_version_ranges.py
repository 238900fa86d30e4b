"""Tests for Maven version range expressions."""

import pytest

from errors import InvalidVersionRange
from versioning.generic import GenericVersion
from versioning.ranges import parse_constraint


def test_half_open_range_from_reference_build():
    """The [6.0.1-1, 6.0.2-1) range keeps 6.0.1 builds of every variant."""
    constraint = parse_constraint("[6.0.1-1, 6.0.2-1)")
    candidates = ["6.0.1-1-ccs", "6.0.1-12-ce", "6.0.2-1-ce", "6.0.0-5-ce"]
    assert constraint.is_range
    assert constraint.filter(candidates) == ["6.0.1-1-ccs", "6.0.1-12-ce"]


def test_inclusive_bounds():
    constraint = parse_constraint("[6.0.0-1, 6.0.1-1]")
    assert constraint.contains(GenericVersion("6.0.0-1"))
    assert constraint.contains(GenericVersion("6.0.1-1"))
    assert not constraint.contains(GenericVersion("6.0.1-2"))


def test_exclusive_lower_bound():
    constraint = parse_constraint("(1.0,2.0]")
    assert not constraint.contains(GenericVersion("1.0"))
    assert constraint.contains(GenericVersion("1.5"))
    assert constraint.contains(GenericVersion("2.0"))


def test_open_bounds():
    upper_only = parse_constraint("(,1.0]")
    assert upper_only.filter(["0.9", "1.0", "1.1"]) == ["0.9", "1.0"]
    lower_only = parse_constraint("[1.0,)")
    assert lower_only.filter(["0.9", "1.0", "99"]) == ["1.0", "99"]


def test_exact_range_matches_equivalent_spellings():
    constraint = parse_constraint("[1.0]")
    assert constraint.filter(["1.0", "1.0.0", "1.0.1"]) == ["1.0", "1.0.0"]


def test_prefix_range():
    constraint = parse_constraint("[1.2.*]")
    assert constraint.filter(["1.1.9", "1.2.0", "1.2.3", "1.3.0"]) == ["1.2.0", "1.2.3"]


def test_union_of_ranges():
    constraint = parse_constraint("[1,2),[3,4]")
    assert len(constraint.ranges) == 2
    assert constraint.filter(["1.5", "2.5", "3.5", "4.1"]) == ["1.5", "3.5"]


def test_plain_version_is_not_a_range():
    constraint = parse_constraint("1.0")
    assert not constraint.is_range
    assert constraint.contains(GenericVersion("1.0.0"))
    assert not constraint.contains(GenericVersion("1.1"))


@pytest.mark.parametrize("expression", [
    "[1.0,2.0",
    "(1.0)",
    "[2.0,1.0]",
    "[1,2,3]",
    "[1,2] trailing",
    "",
])
def test_invalid_expressions(expression):
    with pytest.raises(InvalidVersionRange):
        parse_constraint(expression)
