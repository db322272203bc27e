"""
Discrepancy classification between a physical count and the on-hand quantity.
"""

from enum import Enum
from typing import Optional


class DiscrepancyClass(Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    UNKNOWN = "unknown"

    @property
    def color(self) -> str:
        return DISCREPANCY_COLORS[self]

    @property
    def marker(self) -> str:
        return DISCREPANCY_MARKERS[self]


DISCREPANCY_COLORS = {
    DiscrepancyClass.NONE: "#22c55e",
    DiscrepancyClass.LOW: "#facc15",
    DiscrepancyClass.MEDIUM: "#fb923c",
    DiscrepancyClass.HIGH: "#ef4444",
    DiscrepancyClass.UNKNOWN: "#cbd5e1",
}

DISCREPANCY_MARKERS = {
    DiscrepancyClass.NONE: "🟢",
    DiscrepancyClass.LOW: "🟡",
    DiscrepancyClass.MEDIUM: "🟠",
    DiscrepancyClass.HIGH: "🔴",
    DiscrepancyClass.UNKNOWN: "⚪",
}

# Legend text shown above the count table
DISCREPANCY_LEGEND = [
    (DiscrepancyClass.NONE, "Count matches On Hand"),
    (DiscrepancyClass.LOW, "1–10 off"),
    (DiscrepancyClass.MEDIUM, "11–20 off"),
    (DiscrepancyClass.HIGH, "21+ off"),
    (DiscrepancyClass.UNKNOWN, "Not counted yet"),
]

LOW_LIMIT = 10
MEDIUM_LIMIT = 20


def classify(actual: Optional[int], expected: Optional[int]) -> DiscrepancyClass:
    """
    Classify the absolute difference between a count and its expected quantity.

    Boundaries are inclusive on the lower class: a difference of 10 is LOW,
    20 is MEDIUM. A missing count (or a missing on-hand value) is UNKNOWN.
    """
    if actual is None or expected is None:
        return DiscrepancyClass.UNKNOWN

    diff = abs(actual - expected)
    if diff == 0:
        return DiscrepancyClass.NONE
    if diff <= LOW_LIMIT:
        return DiscrepancyClass.LOW
    if diff <= MEDIUM_LIMIT:
        return DiscrepancyClass.MEDIUM
    return DiscrepancyClass.HIGH
