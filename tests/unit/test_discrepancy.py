from __future__ import annotations

import pytest

from inventory.discrepancy import DiscrepancyClass, classify


@pytest.mark.parametrize(
    "actual, expected, result",
    [
        (100, 100, DiscrepancyClass.NONE),
        (101, 100, DiscrepancyClass.LOW),
        (110, 100, DiscrepancyClass.LOW),
        (111, 100, DiscrepancyClass.MEDIUM),
        (120, 100, DiscrepancyClass.MEDIUM),
        (121, 100, DiscrepancyClass.HIGH),
        (80, 100, DiscrepancyClass.MEDIUM),
        (79, 100, DiscrepancyClass.HIGH),
        (0, 0, DiscrepancyClass.NONE),
    ],
)
def test_boundaries(actual, expected, result):
    assert classify(actual, expected) is result


@pytest.mark.parametrize("diff", [0, 1, 10, 11, 20, 21, 500])
def test_sign_of_difference_does_not_matter(diff):
    assert classify(100 + diff, 100) is classify(100 - diff, 100)


def test_missing_count_is_unknown():
    assert classify(None, 100) is DiscrepancyClass.UNKNOWN


def test_missing_on_hand_is_unknown():
    assert classify(5, None) is DiscrepancyClass.UNKNOWN


def test_every_class_has_a_marker_and_color():
    for cls in DiscrepancyClass:
        assert cls.marker
        assert cls.color.startswith("#")
