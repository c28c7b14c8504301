"""
POST /v1/wastage/calculate

Allocated vs. used for one resource line (budget, hours, materials, ...).
"""
from __future__ import annotations

import structlog
from fastapi import APIRouter

from app.api.errors import to_http_error
from app.calculators.wastage import calculate_wastage_metrics, get_resource_type, get_wastage_status
from app.core.metrics import record_calculation
from app.schemas.calculation_request import WastageAssessmentRequest
from app.schemas.calculation_response import WastageAssessmentResponse

logger = structlog.get_logger()
router = APIRouter(prefix="/v1/wastage", tags=["wastage"])


@router.post(
    "/calculate",
    response_model=WastageAssessmentResponse,
    summary="Resource wastage, efficiency and financial impact",
)
async def calculate_wastage(request: WastageAssessmentRequest) -> WastageAssessmentResponse:
    try:
        resource = get_resource_type(request.resource_type)
        result = calculate_wastage_metrics(request.allocated, request.used, request.cost_per_unit)
    except Exception as e:
        raise to_http_error("wastage", e) from e

    band = get_wastage_status(result.wastage_percentage)

    record_calculation("wastage")
    logger.info(
        "wastage_assessed",
        project_id=request.project_id,
        resource_type=request.resource_type.value,
        wastage_percentage=round(result.wastage_percentage, 2),
        status=result.status.value,
    )

    return WastageAssessmentResponse(
        resource_type=request.resource_type,
        resource_label=resource.label,
        unit=request.unit or resource.default_unit,
        wastage_amount=result.wastage_amount,
        wastage_percentage=result.wastage_percentage,
        efficiency_score=result.efficiency_score,
        wastage_cost=result.wastage_cost,
        status=result.status,
        label=band.label,
        color=band.color,
        recommendations=result.recommendations,
    )
