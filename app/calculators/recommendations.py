"""
Recommendation Generators — advisory text for the risk and wastage calculators.

Both generators are plain lookups into the ordered rule tables below; the
text is part of the API contract (dashboards and PDF reports print it
verbatim), so edit the tables, never the functions.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from app.calculators.bands import RISK_BANDS, WASTAGE_BANDS, find_band
from app.core.exceptions import InputShapeError

if TYPE_CHECKING:
    from app.calculators.risk import RiskFactors


# ═══════════════════════════════════════════════════════════════
# Risk: per-factor advice  (factor value ≥ 60)
#   Order of this table is the order lines appear in the output.
# ═══════════════════════════════════════════════════════════════
RISK_FACTOR_ADVICE_THRESHOLD = 60.0

RISK_FACTOR_ADVICE: list[tuple[str, tuple[str, ...]]] = [
    ("budget_variance", (
        "Implement stricter budget controls and monthly reviews",
        "Consider revising project scope to reduce costs",
    )),
    ("schedule_delay", (
        "Add buffer time to critical path activities",
        "Increase team resources to accelerate delivery",
    )),
    ("resource_availability", (
        "Secure additional resources or contractors",
        "Prioritize tasks and reduce scope if necessary",
    )),
    ("complexity", (
        "Break down complex tasks into smaller milestones",
        "Bring in specialized expertise or consultants",
    )),
    ("stakeholder_alignment", (
        "Schedule stakeholder alignment meetings",
        "Improve communication and transparency",
    )),
]

# Closing verdict, keyed by risk band (≥70 / 40-69 / <40)
RISK_VERDICTS: dict[str, str] = {
    "high": "🚨 High risk project - consider pausing for risk mitigation",
    "medium": "⚠️ Monitor closely and implement mitigation strategies",
    "low": "✅ Low risk - maintain current approach",
}


def get_risk_recommendations(score: float, factors: "RiskFactors") -> list[str]:
    recommendations: list[str] = []
    present = factors.present()

    for factor_name, advice in RISK_FACTOR_ADVICE:
        value = present.get(factor_name)
        if value is not None and value >= RISK_FACTOR_ADVICE_THRESHOLD:
            recommendations.extend(advice)

    recommendations.append(RISK_VERDICTS[find_band(score, RISK_BANDS).key])
    return recommendations


# ═══════════════════════════════════════════════════════════════
# Wastage: one block per status tier
# ═══════════════════════════════════════════════════════════════
WASTAGE_ADVICE: dict[str, tuple[str, ...]] = {
    "critical": (
        "CRITICAL: Immediate action required",
        "Conduct urgent resource allocation review",
        "Implement strict monitoring and approval processes",
        "Consider project scope reduction or reallocation",
    ),
    "concerning": (
        "WARNING: High wastage detected - review resource planning",
        "Analyze root causes of resource underutilization",
        "Implement better forecasting and tracking",
        "Set up weekly resource utilization reviews",
    ),
    "acceptable": (
        "MODERATE: Room for improvement",
        "Fine-tune resource allocation estimates",
        "Monitor trends to prevent further increases",
        "Share best practices from high-performing projects",
    ),
    "good": (
        "GOOD: Maintain current practices",
        "Document processes for future projects",
        "Continue monitoring resource utilization",
    ),
    "excellent": (
        "EXCELLENT: Outstanding resource efficiency",
        "Share your allocation strategy with the team",
        "Consider this as a benchmark for other projects",
    ),
}
assert set(WASTAGE_ADVICE) == {b.key for b in WASTAGE_BANDS}, "Every wastage band needs advice"

OVER_ALLOCATION_WARNING = "WARNING: Resources exceeded allocation - may indicate under-budgeting"
NO_ALLOCATION_MESSAGE = "No resources allocated"


def get_wastage_recommendations(
    wastage_percentage: float,
    status: str,
    efficiency_score: float,
) -> list[str]:
    """
    Advice block for the status tier, with the over-allocation warning first
    when more was used than allocated (efficiency above 100).

    wastage_percentage is accepted for signature parity with the status
    lookup; the tier alone selects the block.
    """
    key = getattr(status, "value", status)
    if key not in WASTAGE_ADVICE:
        raise InputShapeError(f"unknown wastage status {status!r}")
    recommendations = list(WASTAGE_ADVICE[key])

    if efficiency_score > 100:
        recommendations.insert(0, OVER_ALLOCATION_WARNING)

    return recommendations
