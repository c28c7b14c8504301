"""
Risk Scoring Engine — project risk score (0-100, higher = riskier)

Five independently optional factors, each scored 0-100 by the user:

    budget_variance        0.25
    schedule_delay         0.20
    resource_availability  0.20
    complexity             0.20
    stakeholder_alignment  0.15

The score is the weighted average over the factors actually supplied.
A missing factor drops out of BOTH the numerator and the denominator, so
{budget_variance: 80} scores 80, not 80 * 0.25.  Never default a missing
factor to 0.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from enum import Enum
from numbers import Real
from typing import Any, Mapping, Optional

from app.calculators.bands import RISK_BANDS, find_band
from app.calculators.recommendations import get_risk_recommendations
from app.core.exceptions import DomainError, InputShapeError


class RiskLevel(str, Enum):
    LOW = "Low Risk"
    MEDIUM = "Medium Risk"
    HIGH = "High Risk"


RISK_WEIGHTS: dict[str, float] = {
    "budget_variance": 0.25,
    "schedule_delay": 0.20,
    "resource_availability": 0.20,
    "complexity": 0.20,
    "stakeholder_alignment": 0.15,
}
assert abs(sum(RISK_WEIGHTS.values()) - 1.0) < 1e-9, "Weights must sum to 1.0"


@dataclass(frozen=True)
class RiskFactorDefinition:
    label: str
    description: str
    color: str


RISK_FACTOR_DEFINITIONS: dict[str, RiskFactorDefinition] = {
    "budget_variance": RiskFactorDefinition(
        "Budget Variance", "How much the project is over/under budget", "#3b82f6"),
    "schedule_delay": RiskFactorDefinition(
        "Schedule Delay", "Project timeline slippage and delays", "#8b5cf6"),
    "resource_availability": RiskFactorDefinition(
        "Resource Availability", "Team capacity and resource constraints", "#ec4899"),
    "complexity": RiskFactorDefinition(
        "Complexity", "Technical and operational difficulty", "#f59e0b"),
    "stakeholder_alignment": RiskFactorDefinition(
        "Stakeholder Alignment", "Buy-in and support from key stakeholders", "#06b6d4"),
}


@dataclass(frozen=True)
class RiskFactors:
    """Factor values in [0, 100]; None means "not assessed"."""
    budget_variance: Optional[float] = None
    schedule_delay: Optional[float] = None
    resource_availability: Optional[float] = None
    complexity: Optional[float] = None
    stakeholder_alignment: Optional[float] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RiskFactors":
        unknown = set(data) - set(RISK_WEIGHTS)
        if unknown:
            raise InputShapeError(f"unknown risk factors: {', '.join(sorted(unknown))}")
        return cls(**data)

    def present(self) -> dict[str, float]:
        """Supplied factors, in weight-table order."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        return {name: _require_factor(values[name], name) for name in RISK_WEIGHTS if values[name] is not None}

    def has_any(self) -> bool:
        return any(getattr(self, f.name) is not None for f in fields(self))


@dataclass(frozen=True)
class RiskBand:
    level: RiskLevel
    color: str


@dataclass(frozen=True)
class FactorContribution:
    """One supplied factor with its share of the renormalised weight."""
    name: str
    label: str
    value: float
    weight: float
    color: str


@dataclass(frozen=True)
class RiskResult:
    risk_score: int
    risk_level: RiskLevel
    color: str
    recommendations: list[str]
    breakdown: list[FactorContribution] = field(default_factory=list)


def _require_factor(value, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InputShapeError(f"{name} must be a number, got {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value):
        raise DomainError(f"{name} must be finite, got {value}")
    return value


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_risk_score(factors: RiskFactors) -> int:
    total_score = 0.0
    total_weight = 0.0

    for name, value in factors.present().items():
        weight = RISK_WEIGHTS[name]
        total_score += value * weight
        total_weight += weight

    if total_weight == 0:
        return 0

    normalized = total_score / total_weight
    return _round_half_up(min(100.0, max(0.0, normalized)))


def get_risk_level_from_score(score: float) -> RiskBand:
    band = find_band(score, RISK_BANDS)
    return RiskBand(level=RiskLevel(band.label), color=band.color)


def factor_breakdown(factors: RiskFactors) -> list[FactorContribution]:
    present = factors.present()
    total_weight = sum(RISK_WEIGHTS[name] for name in present)

    breakdown = []
    for name, value in present.items():
        definition = RISK_FACTOR_DEFINITIONS[name]
        breakdown.append(FactorContribution(
            name=name,
            label=definition.label,
            value=value,
            weight=round(RISK_WEIGHTS[name] / total_weight, 4),
            color=definition.color,
        ))
    return breakdown


def assess_risk(factors: RiskFactors) -> RiskResult:
    score = calculate_risk_score(factors)
    band = get_risk_level_from_score(score)

    return RiskResult(
        risk_score=score,
        risk_level=band.level,
        color=band.color,
        recommendations=get_risk_recommendations(score, factors),
        breakdown=factor_breakdown(factors),
    )
