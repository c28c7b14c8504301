"""
Wastage Engine — allocated vs. used resources

    wastage_amount      = max(0, allocated - used)
    wastage_percentage  = wastage_amount / allocated * 100
    efficiency_score    = used / allocated * 100
    wastage_cost        = wastage_amount * cost_per_unit

Efficiency above 100 means the project consumed more than it was given;
that is reported as-is and triggers the over-allocation warning.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Mapping, Optional

from app.calculators.bands import WASTAGE_BANDS, find_band
from app.calculators.recommendations import NO_ALLOCATION_MESSAGE, get_wastage_recommendations
from app.core.exceptions import DomainError, InputShapeError


class WastageStatus(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    ACCEPTABLE = "acceptable"
    CONCERNING = "concerning"
    CRITICAL = "critical"


class ResourceType(str, Enum):
    BUDGET = "budget"
    HOURS = "hours"
    MATERIALS = "materials"
    EQUIPMENT = "equipment"
    OTHER = "other"


@dataclass(frozen=True)
class ResourceTypeDefinition:
    label: str
    default_unit: str
    color: str


RESOURCE_TYPES: dict[ResourceType, ResourceTypeDefinition] = {
    ResourceType.BUDGET: ResourceTypeDefinition("Budget", "USD", "#10b981"),
    ResourceType.HOURS: ResourceTypeDefinition("Work Hours", "hours", "#3b82f6"),
    ResourceType.MATERIALS: ResourceTypeDefinition("Materials", "units", "#f59e0b"),
    ResourceType.EQUIPMENT: ResourceTypeDefinition("Equipment", "units", "#8b5cf6"),
    ResourceType.OTHER: ResourceTypeDefinition("Other Resources", "units", "#6b7280"),
}


@dataclass(frozen=True)
class WastageBand:
    status: WastageStatus
    label: str
    color: str


@dataclass(frozen=True)
class WastageResult:
    wastage_amount: float
    wastage_percentage: float
    efficiency_score: float
    wastage_cost: float
    status: WastageStatus
    recommendations: list[str]


def _require_quantity(value, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InputShapeError(f"{name} must be a number, got {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value):
        raise DomainError(f"{name} must be finite, got {value}")
    if value < 0:
        raise InputShapeError(f"{name} must be non-negative, got {value}")
    return value


def get_resource_type(resource_type) -> ResourceTypeDefinition:
    try:
        return RESOURCE_TYPES[ResourceType(resource_type)]
    except ValueError:
        valid = ", ".join(t.value for t in ResourceType)
        raise InputShapeError(f"resource_type must be one of {valid}, got {resource_type!r}")


def get_wastage_status(percentage: float) -> WastageBand:
    band = find_band(percentage, WASTAGE_BANDS)
    return WastageBand(status=WastageStatus(band.key), label=band.label, color=band.color)


def calculate_wastage_metrics(
    allocated: float,
    used: float,
    cost_per_unit: Optional[float] = None,
) -> WastageResult:
    allocated = _require_quantity(allocated, "allocated")
    used = _require_quantity(used, "used")
    if cost_per_unit is not None:
        cost_per_unit = _require_quantity(cost_per_unit, "cost_per_unit")

    # Nothing allocated: no ratio is defined
    if allocated == 0:
        return WastageResult(
            wastage_amount=0.0,
            wastage_percentage=0.0,
            efficiency_score=0.0,
            wastage_cost=0.0,
            status=WastageStatus.EXCELLENT,
            recommendations=[NO_ALLOCATION_MESSAGE],
        )

    wastage_amount = max(0.0, allocated - used)
    wastage_percentage = wastage_amount / allocated * 100
    efficiency_score = used / allocated * 100
    wastage_cost = wastage_amount * cost_per_unit if cost_per_unit else 0.0

    status = get_wastage_status(wastage_percentage).status

    return WastageResult(
        wastage_amount=wastage_amount,
        wastage_percentage=wastage_percentage,
        efficiency_score=efficiency_score,
        wastage_cost=wastage_cost,
        status=status,
        recommendations=get_wastage_recommendations(wastage_percentage, status, efficiency_score),
    )


def calculate_resource_utilization(resource_allocation: Mapping[str, float]) -> float:
    """Mean of per-resource utilisation figures, rounded to 2 decimals (0 if empty)."""
    values = [_require_quantity(v, f"resource_allocation[{k!r}]") for k, v in resource_allocation.items()]
    if not values:
        return 0.0
    return round(sum(values) / len(values), 2)
