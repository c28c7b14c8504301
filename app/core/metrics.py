"""Prometheus metrics for calculator usage and portfolio health distribution"""

from prometheus_client import Counter

calculations_counter = Counter(
    "dashly_calculations_total",
    "Calculations completed",
    ["calculator"],  # npv | project_npv | risk | wastage | health | portfolio
)

calculation_rejections_counter = Counter(
    "dashly_calculation_rejections_total",
    "Calculations rejected by the core",
    ["calculator", "error"],  # DomainError | InputShapeError
)

health_band_counter = Counter(
    "dashly_health_band_total",
    "Health scores issued by band",
    ["band"],
)


def record_calculation(calculator: str) -> None:
    calculations_counter.labels(calculator=calculator).inc()


def record_rejection(calculator: str, error: Exception) -> None:
    calculation_rejections_counter.labels(calculator=calculator, error=type(error).__name__).inc()


def record_health_band(band: str) -> None:
    health_band_counter.labels(band=band).inc()
