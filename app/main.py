"""
Dashly Calculation Engine — FastAPI Application Entry Point

POST /v1/npv/calculate        → periodic cash-flow NPV
POST /v1/npv/project          → legacy lump-sum NPV
POST /v1/risk/calculate       → weighted risk score
POST /v1/wastage/calculate    → resource wastage metrics
POST /v1/health/score         → composite project health
POST /v1/portfolio/summary    → dashboard roll-up
GET  /health                  → liveness check
GET  /docs                    → OpenAPI / Swagger UI
"""
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from app.api.health_endpoint import router as health_router
from app.api.npv_endpoint import router as npv_router
from app.api.portfolio_endpoint import router as portfolio_router
from app.api.risk_endpoint import router as risk_router
from app.api.wastage_endpoint import router as wastage_router
from app.core.config import get_settings

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.ConsoleRenderer() if get_settings().app_env == "development"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(get_settings().log_level),
)
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("calc_engine_starting", engine_version=get_settings().engine_version)
    yield
    logger.info("calc_engine_shutting_down")


app = FastAPI(
    title="Dashly Calculation Engine",
    description="NPV, risk, wastage and project health calculators for portfolio dashboards",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (dashboard front end) ──
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allow_origins,
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)

# ── Prometheus metrics ──
if get_settings().metrics_enabled:
    app.mount("/metrics", make_asgi_app())

# ── Routes ──
app.include_router(npv_router)
app.include_router(risk_router)
app.include_router(wastage_router)
app.include_router(health_router)
app.include_router(portfolio_router)


@app.get("/health", tags=["status"])
async def health():
    settings = get_settings()
    return {"status": "ok", "service": settings.app_name, "engine_version": settings.engine_version}


@app.get("/", include_in_schema=False)
async def root():
    return {
        "service": get_settings().app_name,
        "version": "1.0.0",
        "docs": "/docs",
        "calculators": [
            "POST /v1/npv/calculate",
            "POST /v1/risk/calculate",
            "POST /v1/wastage/calculate",
            "POST /v1/health/score",
        ],
    }
