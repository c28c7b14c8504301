"""
Portfolio aggregation — dashboard and report roll-ups.

Consumes already-fetched, already-authorised project records and returns
summaries; nothing here is persisted.

  summarize_portfolio_health  → average score, counts per band, "needs attention"
  calculate_period_stats      → counts, budget/cost/NPV totals for a report period
  get_date_range_for_period   → calendar window for the report period selector
  filter_projects_by_scale    → dashboard term filter
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, Optional

import structlog
from dateutil.relativedelta import MO, relativedelta

from app.calculators.bands import HEALTH_BANDS
from app.calculators.health import (
    HealthBand,
    HealthBandKey,
    Priority,
    ProjectHealthInputs,
    ProjectStatus,
    assess_project_health,
)

logger = structlog.get_logger()

# Projects scoring below the "fair" minimum need attention
ATTENTION_THRESHOLD = next(b.minimum for b in HEALTH_BANDS if b.key == HealthBandKey.FAIR.value)


class ProjectScale(str, Enum):
    SHORT_TERM = "Short-term"
    MEDIUM_TERM = "Medium-term"
    LONG_TERM = "Long-term"


@dataclass(frozen=True)
class ProjectRecord:
    """The slice of a stored project the dashboards read."""
    id: str
    name: str
    status: ProjectStatus
    priority: Priority
    npv: Optional[float] = None
    risk_score: Optional[float] = None
    budget: Optional[float] = None
    actual_costs: Optional[float] = None
    start_date: Optional[date] = None
    scale: Optional[ProjectScale] = None

    def health_inputs(self) -> ProjectHealthInputs:
        return ProjectHealthInputs.build(
            status=self.status,
            priority=self.priority,
            npv=self.npv,
            risk_score=self.risk_score,
        )


@dataclass(frozen=True)
class ProjectHealth:
    project_id: str
    name: str
    score: int
    band: HealthBand


@dataclass(frozen=True)
class PortfolioHealthSummary:
    project_count: int
    average_health_score: Optional[float]
    band_counts: dict[str, int]
    needs_attention: list[ProjectHealth] = field(default_factory=list)


@dataclass(frozen=True)
class PeriodStats:
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


# ═══════════════════════════════════════════════════════════════
# Health roll-up
# ═══════════════════════════════════════════════════════════════

def score_projects(projects: Iterable[ProjectRecord]) -> list[ProjectHealth]:
    scored = []
    for project in projects:
        assessment = assess_project_health(project.health_inputs())
        scored.append(ProjectHealth(
            project_id=project.id,
            name=project.name,
            score=assessment.score,
            band=assessment.band,
        ))
    return scored


def filter_projects_by_scale(projects: Iterable[ProjectRecord], scale: ProjectScale) -> list[ProjectRecord]:
    """Dashboard Short-term / Medium-term / Long-term filter; unscaled projects never match."""
    scale = ProjectScale(scale)
    return [p for p in projects if p.scale == scale]


def summarize_portfolio_health(projects: Iterable[ProjectRecord]) -> PortfolioHealthSummary:
    scored = score_projects(projects)

    band_counts = {b.key: 0 for b in HEALTH_BANDS}
    for ph in scored:
        band_counts[ph.band.band.value] += 1

    average = round(sum(ph.score for ph in scored) / len(scored), 1) if scored else None

    # sorted() is stable, so equal scores keep input order
    needs_attention = sorted(
        (ph for ph in scored if ph.score < ATTENTION_THRESHOLD),
        key=lambda ph: ph.score,
    )

    logger.debug(
        "portfolio_health_summarized",
        project_count=len(scored),
        average_health_score=average,
        needs_attention=len(needs_attention),
    )

    return PortfolioHealthSummary(
        project_count=len(scored),
        average_health_score=average,
        band_counts=band_counts,
        needs_attention=needs_attention,
    )


# ═══════════════════════════════════════════════════════════════
# Period statistics (reports page)
# ═══════════════════════════════════════════════════════════════

def calculate_period_stats(projects: Iterable[ProjectRecord]) -> PeriodStats:
    projects = list(projects)
    total = len(projects)

    completed = sum(1 for p in projects if p.status == ProjectStatus.COMPLETE)
    total_budget = sum(p.budget or 0.0 for p in projects)
    total_actual_costs = sum(p.actual_costs or 0.0 for p in projects)
    total_npv = sum(p.npv or 0.0 for p in projects)

    budget_variance = total_budget - total_actual_costs
    variance_pct = round(budget_variance / total_budget * 100, 1) if total_budget > 0 else 0.0

    return PeriodStats(
        total=total,
        in_progress=sum(1 for p in projects if p.status == ProjectStatus.IN_PROGRESS),
        completed=completed,
        planning=sum(1 for p in projects if p.status == ProjectStatus.PLANNING),
        high_priority=sum(1 for p in projects if p.priority == Priority.HIGH),
        short_term=sum(1 for p in projects if p.scale == ProjectScale.SHORT_TERM),
        long_term=sum(1 for p in projects if p.scale == ProjectScale.LONG_TERM),
        total_budget=total_budget,
        total_actual_costs=total_actual_costs,
        total_npv=total_npv,
        budget_variance=budget_variance,
        budget_variance_percentage=variance_pct,
        completion_rate=round(completed / total * 100, 1) if total > 0 else 0.0,
        average_npv=float(round(total_npv / total)) if total > 0 else 0.0,
    )


# ═══════════════════════════════════════════════════════════════
# Report periods
# ═══════════════════════════════════════════════════════════════

class TimePeriod(str, Enum):
    THIS_WEEK = "this_week"
    LAST_WEEK = "last_week"
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    THIS_QUARTER = "this_quarter"
    LAST_QUARTER = "last_quarter"
    THIS_YEAR = "this_year"
    CUSTOM = "custom"


TIME_PERIOD_LABELS: dict[TimePeriod, str] = {
    TimePeriod.THIS_WEEK: "This Week",
    TimePeriod.LAST_WEEK: "Last Week",
    TimePeriod.THIS_MONTH: "This Month",
    TimePeriod.LAST_MONTH: "Last Month",
    TimePeriod.THIS_QUARTER: "This Quarter",
    TimePeriod.LAST_QUARTER: "Last Quarter",
    TimePeriod.THIS_YEAR: "This Year",
    TimePeriod.CUSTOM: "Custom Range",
}


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date  # inclusive


def _month_range(day: date) -> DateRange:
    return DateRange(day + relativedelta(day=1), day + relativedelta(day=31))


def _week_range(day: date) -> DateRange:
    monday = day + relativedelta(weekday=MO(-1))
    return DateRange(monday, monday + relativedelta(days=6))


def _quarter_range(day: date) -> DateRange:
    start = day + relativedelta(month=(day.month - 1) // 3 * 3 + 1, day=1)
    return DateRange(start, start + relativedelta(months=2, day=31))


def get_date_range_for_period(
    period: TimePeriod,
    today: Optional[date] = None,
    custom_range: Optional[DateRange] = None,
) -> DateRange:
    """Calendar window for a report period; weeks start on Monday.

    CUSTOM uses custom_range when given and otherwise falls back to the
    current month.
    """
    today = today or date.today()
    period = TimePeriod(period)

    if period is TimePeriod.CUSTOM and custom_range is not None:
        return custom_range
    if period is TimePeriod.THIS_WEEK:
        return _week_range(today)
    if period is TimePeriod.LAST_WEEK:
        return _week_range(today + relativedelta(weeks=-1))
    if period is TimePeriod.LAST_MONTH:
        return _month_range(today + relativedelta(months=-1))
    if period is TimePeriod.THIS_QUARTER:
        return _quarter_range(today)
    if period is TimePeriod.LAST_QUARTER:
        return _quarter_range(today + relativedelta(months=-3))
    if period is TimePeriod.THIS_YEAR:
        return DateRange(today + relativedelta(month=1, day=1), today + relativedelta(month=12, day=31))
    return _month_range(today)


def filter_projects_by_date_range(
    projects: Iterable[ProjectRecord],
    date_range: DateRange,
) -> list[ProjectRecord]:
    return [
        p for p in projects
        if p.start_date is not None and date_range.start <= p.start_date <= date_range.end
    ]


def get_time_period_label(period: TimePeriod, custom_range: Optional[DateRange] = None) -> str:
    period = TimePeriod(period)
    if period is TimePeriod.CUSTOM and custom_range is not None:
        return f"{custom_range.start:%b %d, %Y} - {custom_range.end:%b %d, %Y}"
    return TIME_PERIOD_LABELS[period]
