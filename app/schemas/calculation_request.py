"""
Inbound payloads for the calculators.

The dashboard sends each calculator's raw form values in a single POST.
The engine never fetches project data itself — anything it needs arrives here.
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from app.calculators.discounting import PeriodType
from app.calculators.health import Priority, ProjectHealthInputs, ProjectStatus
from app.calculators.risk import RiskFactors
from app.calculators.wastage import ResourceType
from app.services.currency import Currency
from app.services.portfolio import DateRange, ProjectRecord, ProjectScale, TimePeriod


# ── NPV ──

class NPVCalculationRequest(BaseModel):
    """POST /v1/npv/calculate — periodic cash-flow series."""
    initial_investment: float = Field(ge=0, description="Upfront outlay paid at period 0")
    discount_rate: float = Field(description="Annual discount rate in percent (e.g. 10 = 10%)")
    cash_flows: list[float] = Field(description="One net cash flow per period, period 1 first")
    period_type: PeriodType = PeriodType.YEARS
    calculation_name: Optional[str] = None
    project_id: Optional[str] = None


class ProjectNPVRequest(BaseModel):
    """POST /v1/npv/project — legacy lump-sum NPV from aggregate project figures."""
    expected_revenue: Optional[float] = None
    actual_costs: Optional[float] = Field(None, ge=0)
    discount_rate: float = Field(description="Annual discount rate in percent")
    duration_months: Optional[float] = Field(None, ge=0)


# ── Risk ──

class RiskAssessmentRequest(BaseModel):
    """POST /v1/risk/calculate — any subset of the five factors, each 0-100."""
    budget_variance: Optional[float] = Field(None, ge=0, le=100)
    schedule_delay: Optional[float] = Field(None, ge=0, le=100)
    resource_availability: Optional[float] = Field(None, ge=0, le=100)
    complexity: Optional[float] = Field(None, ge=0, le=100)
    stakeholder_alignment: Optional[float] = Field(None, ge=0, le=100)
    assessment_name: Optional[str] = None
    project_id: Optional[str] = None

    @model_validator(mode="after")
    def require_one_factor(self) -> "RiskAssessmentRequest":
        if not self.to_factors().has_any():
            raise ValueError("At least one risk factor is required")
        return self

    def to_factors(self) -> RiskFactors:
        return RiskFactors(
            budget_variance=self.budget_variance,
            schedule_delay=self.schedule_delay,
            resource_availability=self.resource_availability,
            complexity=self.complexity,
            stakeholder_alignment=self.stakeholder_alignment,
        )


# ── Wastage ──

class WastageAssessmentRequest(BaseModel):
    """POST /v1/wastage/calculate"""
    resource_type: ResourceType = ResourceType.BUDGET
    allocated: float = Field(ge=0)
    used: float = Field(ge=0)
    unit: Optional[str] = None
    cost_per_unit: Optional[float] = Field(None, ge=0)
    assessment_name: Optional[str] = None
    project_id: Optional[str] = None


# ── Health ──

class HealthScoreRequest(BaseModel):
    """POST /v1/health/score — latest metrics linked to one project."""
    npv: Optional[float] = Field(None, description="Latest linked NPV; omit if never calculated")
    risk_score: Optional[float] = Field(None, ge=0, le=100, description="Latest linked risk score")
    status: ProjectStatus
    priority: Priority

    def to_inputs(self) -> ProjectHealthInputs:
        return ProjectHealthInputs(
            status=self.status,
            priority=self.priority,
            npv=self.npv,
            risk_score=self.risk_score,
        )


# ── Portfolio ──

class ProjectPayload(BaseModel):
    id: str
    name: str
    status: ProjectStatus
    priority: Priority
    npv: Optional[float] = None
    risk_score: Optional[float] = Field(None, ge=0, le=100)
    budget: Optional[float] = None
    actual_costs: Optional[float] = None
    start_date: Optional[date] = None
    scale: Optional[ProjectScale] = None

    def to_record(self) -> ProjectRecord:
        return ProjectRecord(**self.model_dump())


class PortfolioSummaryRequest(BaseModel):
    """POST /v1/portfolio/summary — the caller's visible projects."""
    projects: list[ProjectPayload]
    currency: Optional[Currency] = Field(None, description="Display currency; defaults to settings")
    period: Optional[TimePeriod] = Field(None, description="Restrict to projects starting in this period")
    reference_date: Optional[date] = Field(None, description="'Today' for period windows; defaults to the server date")
    custom_start: Optional[date] = Field(None, description="First day of a custom period, inclusive")
    custom_end: Optional[date] = Field(None, description="Last day of a custom period, inclusive")
    scale: Optional[ProjectScale] = Field(None, description="Restrict to projects of this term")

    @model_validator(mode="after")
    def check_custom_range(self) -> "PortfolioSummaryRequest":
        if self.period is TimePeriod.CUSTOM:
            if self.custom_start is None or self.custom_end is None:
                raise ValueError("custom_start and custom_end are required for a custom period")
            if self.custom_end < self.custom_start:
                raise ValueError("custom_end must not be before custom_start")
        return self

    def custom_range(self) -> Optional[DateRange]:
        if self.period is not TimePeriod.CUSTOM:
            return None
        return DateRange(self.custom_start, self.custom_end)
