"""
Health Aggregator — composite project health score (0-100)

Starts from a neutral 50 and adds one component per available signal:

    NPV        > 0           +30
               -10k .. 0     +15
               < -10k        -10
    Risk       < 30          +25
               < 50          +15
               < 70           +5
               ≥ 70          -15
    Status     Complete +15 · In progress +10 · Planning +5 · Paused -5 · Cancelled -15
    Priority   High +10 · Medium +5 · Low 0

A project with no NPV or no risk assessment simply skips that component;
missing data is never scored as zero.  The total is clamped to [0, 100].
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Optional, Union

from app.calculators.bands import HEALTH_BANDS, find_band
from app.core.exceptions import DomainError, InputShapeError

BASE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100

# NPV losses below this are "deeply negative"
NPV_LOSS_FLOOR = -10_000.0


class ProjectStatus(str, Enum):
    PLANNING = "Planning"
    IN_PROGRESS = "In progress"
    COMPLETE = "Complete"
    PAUSED = "Paused"
    CANCELLED = "Cancelled"


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class HealthBandKey(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"


STATUS_POINTS: dict[ProjectStatus, int] = {
    ProjectStatus.COMPLETE: 15,
    ProjectStatus.IN_PROGRESS: 10,
    ProjectStatus.PLANNING: 5,
    ProjectStatus.PAUSED: -5,
    ProjectStatus.CANCELLED: -15,
}

PRIORITY_POINTS: dict[Priority, int] = {
    Priority.HIGH: 10,
    Priority.MEDIUM: 5,
    Priority.LOW: 0,
}

# (exclusive upper bound, points); first match wins, ≥70 falls through
RISK_POINTS: list[tuple[float, int]] = [
    (30.0, 25),
    (50.0, 15),
    (70.0, 5),
]
HIGH_RISK_POINTS = -15


@dataclass(frozen=True)
class ProjectHealthInputs:
    status: ProjectStatus
    priority: Priority
    npv: Optional[float] = None
    risk_score: Optional[float] = None

    @classmethod
    def build(
        cls,
        status: Union[ProjectStatus, str],
        priority: Union[Priority, str],
        npv: Optional[float] = None,
        risk_score: Optional[float] = None,
    ) -> "ProjectHealthInputs":
        try:
            status = ProjectStatus(status)
        except ValueError:
            raise InputShapeError(f"unknown project status {status!r}")
        try:
            priority = Priority(priority)
        except ValueError:
            raise InputShapeError(f"unknown project priority {priority!r}")
        return cls(status=status, priority=priority, npv=npv, risk_score=risk_score)


@dataclass(frozen=True)
class HealthBand:
    band: HealthBandKey
    label: str
    color: str


@dataclass(frozen=True)
class HealthComponent:
    name: str
    points: int


@dataclass(frozen=True)
class HealthAssessment:
    score: int
    band: HealthBand
    components: list[HealthComponent]


def _optional_number(value, name: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InputShapeError(f"{name} must be a number, got {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value):
        raise DomainError(f"{name} must be finite, got {value}")
    return value


def _npv_points(npv: float) -> int:
    if npv > 0:
        return 30
    if npv >= NPV_LOSS_FLOOR:
        return 15
    return -10


def _risk_points(risk_score: float) -> int:
    for upper, points in RISK_POINTS:
        if risk_score < upper:
            return points
    return HIGH_RISK_POINTS


def health_components(project: ProjectHealthInputs) -> list[HealthComponent]:
    """Additive components that apply to this project, in scoring order."""
    components: list[HealthComponent] = []

    npv = _optional_number(project.npv, "npv")
    if npv is not None:
        components.append(HealthComponent("npv", _npv_points(npv)))

    risk_score = _optional_number(project.risk_score, "risk_score")
    if risk_score is not None:
        components.append(HealthComponent("risk", _risk_points(risk_score)))

    checked = ProjectHealthInputs.build(project.status, project.priority)
    components.append(HealthComponent("status", STATUS_POINTS[checked.status]))
    components.append(HealthComponent("priority", PRIORITY_POINTS[checked.priority]))
    return components


def _clamp(score: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, score))


def calculate_project_health_score(project: ProjectHealthInputs) -> int:
    raw = BASE_SCORE + sum(c.points for c in health_components(project))
    return _clamp(raw)


def get_health_band(score: float) -> HealthBand:
    band = find_band(score, HEALTH_BANDS)
    return HealthBand(band=HealthBandKey(band.key), label=band.label, color=band.color)


def assess_project_health(project: ProjectHealthInputs) -> HealthAssessment:
    components = health_components(project)
    score = _clamp(BASE_SCORE + sum(c.points for c in components))
    return HealthAssessment(score=score, band=get_health_band(score), components=components)
