"""
Discounting Engine — Net Present Value

Two NPV models live here:

  Periodic series (calculator page, /v1/npv/calculate):
      NPV = -I + Σ CF[t-1] / (1 + r)^(t / periods_per_year),  t = 1..n

  Legacy lump sum (project records with aggregate revenue/cost only):
      NPV = revenue / (1 + r)^(months / 12) - costs

r is the ANNUAL discount rate given as a percentage.  Shorter period units
(quarters, months, weeks) are converted to fractional years before
discounting, so the same annual rate applies regardless of granularity.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Optional, Sequence, Union

from app.core.exceptions import DomainError, InputShapeError


class PeriodType(str, Enum):
    YEARS = "years"
    QUARTERS = "quarters"
    MONTHS = "months"
    WEEKS = "weeks"


@dataclass(frozen=True)
class PeriodConfig:
    label: str
    singular: str
    periods_per_year: int
    short_label: str


PERIOD_CONFIGS: dict[PeriodType, PeriodConfig] = {
    PeriodType.YEARS: PeriodConfig("Years", "Year", 1, "Y"),
    PeriodType.QUARTERS: PeriodConfig("Quarters", "Quarter", 4, "Q"),
    PeriodType.MONTHS: PeriodConfig("Months", "Month", 12, "M"),
    PeriodType.WEEKS: PeriodConfig("Weeks", "Week", 52, "W"),
}


@dataclass(frozen=True)
class CumulativePoint:
    period: int
    value: float


@dataclass(frozen=True)
class NPVResult:
    npv: float
    is_viable: bool
    cumulative_values: list[CumulativePoint]
    break_even_period: Optional[int] = None


# ═══════════════════════════════════════════════════════════════
# Default discount rates by country (cost-of-capital policy table)
#   Zambia → 10% · listed emerging markets → 8% · everything else → 5%
# ═══════════════════════════════════════════════════════════════
HOME_MARKET = "Zambia"
HOME_MARKET_RATE = 10.0
EMERGING_MARKET_RATE = 8.0
DEFAULT_RATE = 5.0

EMERGING_MARKETS: tuple[str, ...] = (
    "Nigeria",
    "Kenya",
    "South Africa",
    "Ghana",
    "Tanzania",
    "Uganda",
    "Zimbabwe",
    "Malawi",
    "Botswana",
    "Mozambique",
    "Rwanda",
    "Ethiopia",
    "Senegal",
    "Côte d'Ivoire",
)
_EMERGING_KEYS = frozenset(c.casefold() for c in EMERGING_MARKETS)

LEGACY_ROUNDING_DECIMALS = 2


def get_default_discount_rate(country: Optional[str]) -> float:
    if not country:
        return DEFAULT_RATE

    key = country.strip().casefold()
    if key == HOME_MARKET.casefold():
        return HOME_MARKET_RATE
    if key in _EMERGING_KEYS:
        return EMERGING_MARKET_RATE
    return DEFAULT_RATE


# ═══════════════════════════════════════════════════════════════
# Period helpers
# ═══════════════════════════════════════════════════════════════

def resolve_period_type(period_type: Union[PeriodType, str, None]) -> PeriodType:
    if period_type is None:
        return PeriodType.YEARS
    if isinstance(period_type, PeriodType):
        return period_type
    try:
        return PeriodType(period_type)
    except ValueError:
        valid = ", ".join(p.value for p in PeriodType)
        raise InputShapeError(f"period_type must be one of {valid}, got {period_type!r}")


def periods_to_years(periods: float, period_type: Union[PeriodType, str] = PeriodType.YEARS) -> float:
    return periods / PERIOD_CONFIGS[resolve_period_type(period_type)].periods_per_year


def get_period_label(period_type: Union[PeriodType, str], period_number: int) -> str:
    """'Q3' for quarters, otherwise '<Singular> <n>' (e.g. 'Month 5')."""
    ptype = resolve_period_type(period_type)
    if ptype is PeriodType.QUARTERS:
        return f"Q{period_number}"
    return f"{PERIOD_CONFIGS[ptype].singular} {period_number}"


# ═══════════════════════════════════════════════════════════════
# Input checks
# ═══════════════════════════════════════════════════════════════

def _require_number(value, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InputShapeError(f"{name} must be a number, got {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value):
        raise DomainError(f"{name} must be finite, got {value}")
    return value


def _require_cash_flows(cash_flows) -> list[float]:
    if not isinstance(cash_flows, (list, tuple)):
        raise InputShapeError(f"cash_flows must be a list of numbers, got {type(cash_flows).__name__}")
    return [_require_number(cf, f"cash_flows[{i}]") for i, cf in enumerate(cash_flows)]


def _discount_base(discount_rate: float) -> float:
    base = 1 + discount_rate / 100
    if base <= 0:
        raise DomainError(
            f"discount_rate {discount_rate}% gives a non-positive discount base (1 + r = {base})"
        )
    return base


def _require_finite_result(value: float, what: str) -> float:
    if not math.isfinite(value):
        raise DomainError(f"{what} is not finite ({value})")
    return value


def _discount(amount: float, base: float, years: float, what: str) -> float:
    try:
        factor = base ** years
    except OverflowError:
        raise DomainError(f"discount factor for {what} overflows")
    if factor == 0:
        raise DomainError(f"discount factor for {what} underflows to zero")
    return _require_finite_result(amount / factor, what)


def _present_values(
    discount_rate: float,
    cash_flows: Sequence[float],
    period_type: PeriodType,
) -> list[float]:
    """Discounted value of each cash flow, in period order (period t = index + 1)."""
    if not cash_flows:
        return []

    base = _discount_base(discount_rate)
    per_year = PERIOD_CONFIGS[period_type].periods_per_year
    return [
        _discount(cf, base, t / per_year, f"period {t}")
        for t, cf in enumerate(cash_flows, start=1)
    ]


# ═══════════════════════════════════════════════════════════════
# Periodic-series NPV
# ═══════════════════════════════════════════════════════════════

def calculate_npv(
    initial_investment: float,
    discount_rate: float,
    cash_flows: Sequence[float],
    period_type: Union[PeriodType, str] = PeriodType.YEARS,
) -> float:
    investment = _require_number(initial_investment, "initial_investment")
    if investment < 0:
        raise InputShapeError("initial_investment must be non-negative")
    rate = _require_number(discount_rate, "discount_rate")
    flows = _require_cash_flows(cash_flows)
    ptype = resolve_period_type(period_type)

    npv = -investment
    for pv in _present_values(rate, flows, ptype):
        npv += pv
    return _require_finite_result(npv, "NPV")


def calculate_cumulative_npv(
    initial_investment: float,
    discount_rate: float,
    cash_flows: Sequence[float],
    period_type: Union[PeriodType, str] = PeriodType.YEARS,
) -> list[CumulativePoint]:
    """
    Running discounted total per period.

    Period 0 holds -initial_investment; each later point adds that period's
    present value to the previous point.
    """
    investment = _require_number(initial_investment, "initial_investment")
    if investment < 0:
        raise InputShapeError("initial_investment must be non-negative")
    rate = _require_number(discount_rate, "discount_rate")
    flows = _require_cash_flows(cash_flows)
    ptype = resolve_period_type(period_type)

    running = -investment
    points = [CumulativePoint(period=0, value=running)]
    for period, pv in enumerate(_present_values(rate, flows, ptype), start=1):
        running = _require_finite_result(running + pv, f"cumulative value of period {period}")
        points.append(CumulativePoint(period=period, value=running))
    return points


def perform_npv_calculation(
    initial_investment: float,
    discount_rate: float,
    cash_flows: Sequence[float],
    period_type: Union[PeriodType, str] = PeriodType.YEARS,
) -> NPVResult:
    """
    NPV, viability, cumulative curve and break-even period in one pass.

    The break-even period is the first period whose cumulative value is
    strictly positive; it stays None when the project never pays back.
    """
    npv = calculate_npv(initial_investment, discount_rate, cash_flows, period_type)
    cumulative = calculate_cumulative_npv(initial_investment, discount_rate, cash_flows, period_type)

    break_even = next((p.period for p in cumulative if p.value > 0), None)

    return NPVResult(
        npv=npv,
        is_viable=npv > 0,
        cumulative_values=cumulative,
        break_even_period=break_even,
    )


# ═══════════════════════════════════════════════════════════════
# Legacy lump-sum NPV
# ═══════════════════════════════════════════════════════════════

def calculate_project_npv(
    expected_revenue: Optional[float],
    actual_costs: Optional[float],
    discount_rate: float,
    duration_months: Optional[float],
) -> float:
    """
    Single-shot NPV for project records that only carry aggregate figures.

    The whole expected revenue is treated as one payment received at the end
    of the project (duration_months / 12 years) and discounted once; actual
    costs are subtracted undiscounted.  This is NOT the same model as
    calculate_npv (periodic flows plus an upfront investment), and the two
    generally disagree for the same project.
    """
    if not expected_revenue or not duration_months:
        return 0.0

    revenue = _require_number(expected_revenue, "expected_revenue")
    costs = _require_number(actual_costs or 0.0, "actual_costs")
    rate = _require_number(discount_rate, "discount_rate")
    months = _require_number(duration_months, "duration_months")

    present_value = _discount(revenue, _discount_base(rate), months / 12, "expected revenue")
    npv = _require_finite_result(present_value - costs, "NPV")
    return round(npv, LEGACY_ROUNDING_DECIMALS)
