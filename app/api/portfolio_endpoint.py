"""
POST /v1/portfolio/summary

Dashboard / report roll-up over the projects the caller is allowed to see.
Access control happens upstream; this endpoint trusts the list it receives.
"""
from __future__ import annotations

from dataclasses import asdict

import structlog
from fastapi import APIRouter, Depends

from app.api.errors import to_http_error
from app.core.config import Settings, get_settings
from app.core.metrics import record_calculation
from app.schemas.calculation_request import PortfolioSummaryRequest
from app.schemas.calculation_response import (
    PeriodStatistics,
    PortfolioHealth,
    PortfolioSummaryResponse,
    ProjectHealthSummary,
)
from app.services.currency import format_currency, format_percentage, get_currency
from app.services.portfolio import (
    calculate_period_stats,
    filter_projects_by_date_range,
    filter_projects_by_scale,
    get_date_range_for_period,
    get_time_period_label,
    summarize_portfolio_health,
)

logger = structlog.get_logger()
router = APIRouter(prefix="/v1/portfolio", tags=["portfolio"])


@router.post("/summary", response_model=PortfolioSummaryResponse, summary="Portfolio health and period statistics")
async def portfolio_summary(
    request: PortfolioSummaryRequest,
    settings: Settings = Depends(get_settings),
) -> PortfolioSummaryResponse:
    try:
        currency = get_currency(request.currency or settings.default_currency)
        records = [p.to_record() for p in request.projects]

        period_label = None
        if request.period is not None:
            custom_range = request.custom_range()
            date_range = get_date_range_for_period(request.period, request.reference_date, custom_range)
            records = filter_projects_by_date_range(records, date_range)
            period_label = get_time_period_label(request.period, custom_range)
        if request.scale is not None:
            records = filter_projects_by_scale(records, request.scale)

        health = summarize_portfolio_health(records)
        stats = calculate_period_stats(records)
    except Exception as e:
        raise to_http_error("portfolio", e) from e

    record_calculation("portfolio")
    logger.info(
        "portfolio_summarized",
        project_count=health.project_count,
        average_health_score=health.average_health_score,
        needs_attention=len(health.needs_attention),
        period=request.period.value if request.period else None,
        scale=request.scale.value if request.scale else None,
    )

    return PortfolioSummaryResponse(
        currency=currency.code.value,
        period_label=period_label,
        health=PortfolioHealth(
            project_count=health.project_count,
            average_health_score=health.average_health_score,
            band_counts=health.band_counts,
            needs_attention=[
                ProjectHealthSummary(
                    project_id=ph.project_id,
                    name=ph.name,
                    health_score=ph.score,
                    band=ph.band.band,
                    color=ph.band.color,
                )
                for ph in health.needs_attention
            ],
        ),
        statistics=PeriodStatistics(**asdict(stats)),
        display={
            "total_budget": format_currency(stats.total_budget, currency),
            "total_actual_costs": format_currency(stats.total_actual_costs, currency),
            "total_npv": format_currency(stats.total_npv, currency),
            "average_npv": format_currency(stats.average_npv, currency, decimals=0),
            "budget_variance": format_currency(stats.budget_variance, currency),
            "budget_variance_percentage": format_percentage(stats.budget_variance_percentage),
            "completion_rate": format_percentage(stats.completion_rate),
        },
    )
