"""
Threshold band tables shared by the risk, wastage and health calculators.

Every table is a list of rows ordered from the highest minimum down.
A value falls in the first row whose minimum it reaches (inclusive lower
bound); the next row up's minimum is the exclusive upper bound.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Band:
    minimum: float
    key: str
    label: str
    color: str


def find_band(value: float, bands: Sequence[Band]) -> Band:
    for band in bands:
        if value >= band.minimum:
            return band
    # below the lowest minimum (e.g. a negative score) → lowest band
    return bands[-1]


# ═══════════════════════════════════════════════════════════════
# Risk level  (score 0-100, higher = riskier)
#   ≥70 High · 40-69 Medium · 0-39 Low
# ═══════════════════════════════════════════════════════════════
RISK_BANDS: list[Band] = [
    Band(70.0, "high", "High Risk", "#ef4444"),
    Band(40.0, "medium", "Medium Risk", "#f59e0b"),
    Band(0.0, "low", "Low Risk", "#10b981"),
]


# ═══════════════════════════════════════════════════════════════
# Wastage status  (% of allocation never consumed)
#   ≥35 critical · 20-35 concerning · 10-20 acceptable · 5-10 good · <5 excellent
# ═══════════════════════════════════════════════════════════════
WASTAGE_BANDS: list[Band] = [
    Band(35.0, "critical", "Critical", "#ef4444"),
    Band(20.0, "concerning", "Concerning", "#f97316"),
    Band(10.0, "acceptable", "Acceptable", "#f59e0b"),
    Band(5.0, "good", "Good", "#3b82f6"),
    Band(0.0, "excellent", "Excellent", "#10b981"),
]


# ═══════════════════════════════════════════════════════════════
# Project health  (composite 0-100, higher = healthier)
#   ≥80 excellent · 65-79 good · 45-64 fair · 25-44 poor · <25 critical
# ═══════════════════════════════════════════════════════════════
HEALTH_BANDS: list[Band] = [
    Band(80.0, "excellent", "Excellent", "#10b981"),
    Band(65.0, "good", "Good", "#3b82f6"),
    Band(45.0, "fair", "Fair", "#f59e0b"),
    Band(25.0, "poor", "Poor", "#f97316"),
    Band(0.0, "critical", "Critical", "#ef4444"),
]
