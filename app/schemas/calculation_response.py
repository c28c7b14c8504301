"""
Response payloads returned to the dashboard.

Field names match the stored calculation rows, so the caller can persist
a response as-is and link it to the project as the "latest" result.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from app.calculators.discounting import PeriodType
from app.calculators.health import HealthBandKey
from app.calculators.risk import RiskLevel
from app.calculators.wastage import ResourceType, WastageStatus


class CumulativeValue(BaseModel):
    period: int
    label: str = Field(description="Display label, e.g. 'Year 2' or 'Q3'")
    value: float


class NPVCalculationResponse(BaseModel):
    npv: float
    is_viable: bool
    cumulative_values: list[CumulativeValue]
    break_even_period: Optional[int] = Field(None, description="First period with a positive cumulative value")
    period_type: PeriodType
    project_duration: int = Field(description="Number of periods in the series")


class ProjectNPVResponse(BaseModel):
    npv: float
    is_viable: bool


class DefaultDiscountRateResponse(BaseModel):
    country: Optional[str] = None
    discount_rate: float


class RiskFactorScore(BaseModel):
    name: str
    label: str
    value: float
    weight: float = Field(description="Share of the score after renormalising over supplied factors")
    color: str


class RiskAssessmentResponse(BaseModel):
    risk_score: int
    risk_level: RiskLevel
    color: str
    recommendations: list[str]
    factors: list[RiskFactorScore]


class WastageAssessmentResponse(BaseModel):
    resource_type: ResourceType
    resource_label: str
    unit: str = Field(description="Unit from the request, else the resource type's default")
    wastage_amount: float
    wastage_percentage: float
    efficiency_score: float
    wastage_cost: float
    status: WastageStatus
    label: str
    color: str
    recommendations: list[str]


class HealthComponentScore(BaseModel):
    name: str
    points: int


class HealthScoreResponse(BaseModel):
    health_score: int
    band: HealthBandKey
    label: str
    color: str
    components: list[HealthComponentScore] = Field(description="Additive components applied on top of the base 50")


class ProjectHealthSummary(BaseModel):
    project_id: str
    name: str
    health_score: int
    band: HealthBandKey
    color: str


class PortfolioHealth(BaseModel):
    project_count: int
    average_health_score: Optional[float] = None
    band_counts: dict[str, int]
    needs_attention: list[ProjectHealthSummary]


class PeriodStatistics(BaseModel):
    total: int
    in_progress: int
    completed: int
    planning: int
    high_priority: int
    short_term: int
    long_term: int
    total_budget: float
    total_actual_costs: float
    total_npv: float
    budget_variance: float
    budget_variance_percentage: float
    completion_rate: float
    average_npv: float


class PortfolioSummaryResponse(BaseModel):
    currency: str
    period_label: Optional[str] = None
    health: PortfolioHealth
    statistics: PeriodStatistics
    display: dict[str, str] = Field(description="Pre-formatted money and percentage figures")
