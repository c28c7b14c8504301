"""
POST /v1/risk/calculate

Called by the risk calculator page with whichever factors the user filled in.
Synchronous request → score → response; the caller stores the result and
links it to the project.
"""
from __future__ import annotations

import structlog
from fastapi import APIRouter

from app.api.errors import to_http_error
from app.calculators.risk import assess_risk
from app.core.metrics import record_calculation
from app.schemas.calculation_request import RiskAssessmentRequest
from app.schemas.calculation_response import RiskAssessmentResponse, RiskFactorScore

logger = structlog.get_logger()
router = APIRouter(prefix="/v1/risk", tags=["risk"])


@router.post(
    "/calculate",
    response_model=RiskAssessmentResponse,
    summary="Weighted risk score for a project",
    description="Missing factors are left out of the weighted average rather than counted as zero.",
)
async def calculate_risk(request: RiskAssessmentRequest) -> RiskAssessmentResponse:
    factors = request.to_factors()

    logger.info(
        "risk_assessment_started",
        project_id=request.project_id,
        factors_supplied=sorted(factors.present()),
    )

    try:
        result = assess_risk(factors)
    except Exception as e:
        raise to_http_error("risk", e) from e

    record_calculation("risk")
    logger.info(
        "risk_assessed",
        project_id=request.project_id,
        risk_score=result.risk_score,
        risk_level=result.risk_level.value,
    )

    return RiskAssessmentResponse(
        risk_score=result.risk_score,
        risk_level=result.risk_level,
        color=result.color,
        recommendations=result.recommendations,
        factors=[
            RiskFactorScore(
                name=c.name,
                label=c.label,
                value=c.value,
                weight=c.weight,
                color=c.color,
            )
            for c in result.breakdown
        ],
    )
