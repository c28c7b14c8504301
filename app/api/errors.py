"""
Map calculation failures to HTTP errors.

DomainError      → 422  (valid shape, mathematically unusable values)
InputShapeError  → 400  (malformed input that slipped past the schema)
anything else    → 500
"""
from __future__ import annotations

import structlog
from fastapi import HTTPException

from app.core.exceptions import CalculationError, DomainError
from app.core.metrics import record_rejection

logger = structlog.get_logger()


def to_http_error(calculator: str, error: Exception) -> HTTPException:
    if isinstance(error, CalculationError):
        logger.warning(
            "calculation_rejected",
            calculator=calculator,
            error_type=type(error).__name__,
            error=str(error),
        )
        record_rejection(calculator, error)
        status_code = 422 if isinstance(error, DomainError) else 400
        return HTTPException(status_code=status_code, detail=str(error))

    logger.error("calculation_failed", calculator=calculator, error=str(error))
    return HTTPException(status_code=500, detail=f"Calculation engine error: {error}")
