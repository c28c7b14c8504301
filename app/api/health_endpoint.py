"""
POST /v1/health/score

Composite project health from the latest linked NPV and risk results plus
the project's status and priority.
"""
from __future__ import annotations

import structlog
from fastapi import APIRouter

from app.api.errors import to_http_error
from app.calculators.health import assess_project_health
from app.core.metrics import record_calculation, record_health_band
from app.schemas.calculation_request import HealthScoreRequest
from app.schemas.calculation_response import HealthComponentScore, HealthScoreResponse

logger = structlog.get_logger()
router = APIRouter(prefix="/v1/health", tags=["health"])


@router.post("/score", response_model=HealthScoreResponse, summary="Composite project health score")
async def score_project_health(request: HealthScoreRequest) -> HealthScoreResponse:
    try:
        assessment = assess_project_health(request.to_inputs())
    except Exception as e:
        raise to_http_error("health", e) from e

    record_calculation("health")
    record_health_band(assessment.band.band.value)
    logger.info(
        "health_scored",
        health_score=assessment.score,
        band=assessment.band.band.value,
        has_npv=request.npv is not None,
        has_risk=request.risk_score is not None,
    )

    return HealthScoreResponse(
        health_score=assessment.score,
        band=assessment.band.band,
        label=assessment.band.label,
        color=assessment.band.color,
        components=[HealthComponentScore(name=c.name, points=c.points) for c in assessment.components],
    )
