"""
NPV calculator endpoints.

POST /v1/npv/calculate                → periodic cash-flow NPV + cumulative curve
POST /v1/npv/project                  → legacy lump-sum NPV for aggregate project figures
GET  /v1/npv/default-discount-rate    → policy rate for a country
"""
from __future__ import annotations

from typing import Optional

import structlog
from fastapi import APIRouter, Depends

from app.api.errors import to_http_error
from app.calculators.discounting import (
    calculate_project_npv,
    get_default_discount_rate,
    get_period_label,
    perform_npv_calculation,
)
from app.core.config import Settings, get_settings
from app.core.metrics import record_calculation
from app.schemas.calculation_request import NPVCalculationRequest, ProjectNPVRequest
from app.schemas.calculation_response import (
    CumulativeValue,
    DefaultDiscountRateResponse,
    NPVCalculationResponse,
    ProjectNPVResponse,
)

logger = structlog.get_logger()
router = APIRouter(prefix="/v1/npv", tags=["npv"])


@router.post(
    "/calculate",
    response_model=NPVCalculationResponse,
    summary="Net Present Value of a periodic cash-flow series",
)
async def calculate_npv(request: NPVCalculationRequest) -> NPVCalculationResponse:
    try:
        result = perform_npv_calculation(
            request.initial_investment,
            request.discount_rate,
            request.cash_flows,
            request.period_type,
        )
    except Exception as e:
        raise to_http_error("npv", e) from e

    record_calculation("npv")
    logger.info(
        "npv_calculated",
        project_id=request.project_id,
        periods=len(request.cash_flows),
        period_type=request.period_type.value,
        npv=round(result.npv, 2),
        is_viable=result.is_viable,
    )

    return NPVCalculationResponse(
        npv=result.npv,
        is_viable=result.is_viable,
        cumulative_values=[
            CumulativeValue(
                period=point.period,
                label="Start" if point.period == 0 else get_period_label(request.period_type, point.period),
                value=point.value,
            )
            for point in result.cumulative_values
        ],
        break_even_period=result.break_even_period,
        period_type=request.period_type,
        project_duration=len(request.cash_flows),
    )


@router.post(
    "/project",
    response_model=ProjectNPVResponse,
    summary="Legacy lump-sum NPV from expected revenue and actual costs",
    description="Discounts the whole expected revenue once at the project end. "
                "Not comparable with /v1/npv/calculate for the same project.",
)
async def calculate_project_npv_endpoint(request: ProjectNPVRequest) -> ProjectNPVResponse:
    try:
        npv = calculate_project_npv(
            request.expected_revenue,
            request.actual_costs,
            request.discount_rate,
            request.duration_months,
        )
    except Exception as e:
        raise to_http_error("project_npv", e) from e

    record_calculation("project_npv")
    logger.info("project_npv_calculated", npv=npv, duration_months=request.duration_months)
    return ProjectNPVResponse(npv=npv, is_viable=npv > 0)


@router.get("/default-discount-rate", response_model=DefaultDiscountRateResponse)
async def default_discount_rate(
    country: Optional[str] = None,
    settings: Settings = Depends(get_settings),
) -> DefaultDiscountRateResponse:
    country = country or settings.default_country
    return DefaultDiscountRateResponse(country=country, discount_rate=get_default_discount_rate(country))
