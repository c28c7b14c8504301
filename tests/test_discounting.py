"""
Unit tests for the discounting engine (periodic and lump-sum NPV).
"""
import pytest

from app.calculators.discounting import (
    PeriodType,
    calculate_cumulative_npv,
    calculate_npv,
    calculate_project_npv,
    get_default_discount_rate,
    get_period_label,
    perform_npv_calculation,
    periods_to_years,
)
from app.core.exceptions import DomainError, InputShapeError

SCENARIO_FLOWS = [30_000, 35_000, 40_000, 40_000, 35_000]


def _formula_npv(investment, rate_pct, flows, per_year=1):
    npv = -investment
    for t, cf in enumerate(flows, start=1):
        npv += cf / (1 + rate_pct / 100) ** (t / per_year)
    return npv


class TestCalculateNPV:
    def test_five_year_project(self):
        npv = calculate_npv(100_000, 10, SCENARIO_FLOWS)
        assert npv == pytest.approx(_formula_npv(100_000, 10, SCENARIO_FLOWS))
        # 27272.73 + 28925.62 + 30052.59 + 27320.54 + 21732.25 - 100000
        assert npv == pytest.approx(35_303.72, abs=0.01)

    def test_no_cash_flows_returns_negative_investment(self):
        assert calculate_npv(50_000, 10, []) == -50_000
        assert calculate_npv(0, 25, []) == 0

    def test_empty_series_ignores_unusable_rate(self):
        assert calculate_npv(1_000, -150, []) == -1_000

    def test_negative_cash_flows(self):
        npv = calculate_npv(10_000, 8, [5_000, -2_000, 9_000])
        assert npv == pytest.approx(_formula_npv(10_000, 8, [5_000, -2_000, 9_000]))

    def test_zero_rate_is_plain_sum(self):
        assert calculate_npv(1_000, 0, [400, 400, 400]) == pytest.approx(200)

    def test_monthly_periods_use_fractional_years(self):
        flows = [1_000] * 12
        npv = calculate_npv(10_000, 12, flows, "months")
        assert npv == pytest.approx(_formula_npv(10_000, 12, flows, per_year=12))

    def test_quarterly_and_weekly_periods(self):
        flows = [2_500, 2_500, 2_500, 2_500]
        assert calculate_npv(9_000, 10, flows, PeriodType.QUARTERS) == pytest.approx(
            _formula_npv(9_000, 10, flows, per_year=4)
        )
        assert calculate_npv(9_000, 10, flows, PeriodType.WEEKS) == pytest.approx(
            _formula_npv(9_000, 10, flows, per_year=52)
        )

    def test_deterministic(self):
        first = calculate_npv(100_000, 7.5, SCENARIO_FLOWS, "quarters")
        second = calculate_npv(100_000, 7.5, SCENARIO_FLOWS, "quarters")
        assert first == second


class TestDomainErrors:
    def test_minus_hundred_percent_rate(self):
        with pytest.raises(DomainError):
            calculate_npv(1_000, -100, [500])

    def test_rate_below_minus_hundred(self):
        with pytest.raises(DomainError):
            calculate_npv(1_000, -150, [500, 500], "months")

    def test_non_finite_input(self):
        with pytest.raises(DomainError):
            calculate_npv(1_000, float("nan"), [500])
        with pytest.raises(DomainError):
            calculate_npv(1_000, 10, [float("inf")])


class TestInputShape:
    def test_cash_flows_must_be_a_list(self):
        with pytest.raises(InputShapeError):
            calculate_npv(1_000, 10, "1000")
        with pytest.raises(InputShapeError):
            calculate_npv(1_000, 10, None)

    def test_cash_flow_entries_must_be_numbers(self):
        with pytest.raises(InputShapeError):
            calculate_npv(1_000, 10, [100, "200"])
        with pytest.raises(InputShapeError):
            calculate_npv(1_000, 10, [True])

    def test_unknown_period_type(self):
        with pytest.raises(InputShapeError):
            calculate_npv(1_000, 10, [100], "days")

    def test_negative_investment(self):
        with pytest.raises(InputShapeError):
            calculate_npv(-1, 10, [100])


class TestCumulativeNPV:
    def test_starts_at_negative_investment(self):
        points = calculate_cumulative_npv(100_000, 10, SCENARIO_FLOWS)
        assert points[0].period == 0
        assert points[0].value == -100_000
        assert len(points) == len(SCENARIO_FLOWS) + 1

    def test_running_sum_matches_each_discounted_flow(self):
        points = calculate_cumulative_npv(100_000, 10, SCENARIO_FLOWS, "quarters")
        for k in range(1, len(points)):
            discounted = SCENARIO_FLOWS[k - 1] / 1.1 ** (k / 4)
            assert points[k].value - points[k - 1].value == pytest.approx(discounted)

    def test_last_point_equals_npv(self):
        points = calculate_cumulative_npv(100_000, 10, SCENARIO_FLOWS)
        assert points[-1].value == calculate_npv(100_000, 10, SCENARIO_FLOWS)


class TestPerformNPVCalculation:
    def test_viable_project_breaks_even(self):
        result = perform_npv_calculation(100_000, 10, SCENARIO_FLOWS)
        assert result.is_viable
        # cumulative: -100000, -72727, -43802, -13749, +13571
        assert result.break_even_period == 4

    def test_never_breaks_even(self):
        result = perform_npv_calculation(100_000, 10, [10_000, 10_000])
        assert not result.is_viable
        assert result.break_even_period is None

    def test_zero_npv_is_not_viable(self):
        result = perform_npv_calculation(1_000, 0, [500, 500])
        assert result.npv == 0
        assert not result.is_viable


class TestProjectNPV:
    def test_lump_sum_discounted_once(self):
        # 120000 / 1.1^2 - 50000 = 49173.55
        assert calculate_project_npv(120_000, 50_000, 10, 24) == 49_173.55

    def test_zero_revenue_or_duration(self):
        assert calculate_project_npv(0, 5_000, 10, 12) == 0
        assert calculate_project_npv(None, 5_000, 10, 12) == 0
        assert calculate_project_npv(10_000, 5_000, 10, 0) == 0

    def test_differs_from_periodic_model(self):
        lump = calculate_project_npv(100_000, 60_000, 10, 24)
        periodic = calculate_npv(60_000, 10, [50_000, 50_000])
        assert lump != pytest.approx(periodic)

    def test_unusable_rate(self):
        with pytest.raises(DomainError):
            calculate_project_npv(10_000, 0, -100, 12)


class TestDefaultDiscountRate:
    def test_home_market(self):
        assert get_default_discount_rate("Zambia") == 10
        assert get_default_discount_rate("  zambia ") == 10

    def test_emerging_markets(self):
        for country in ("Nigeria", "Kenya", "South Africa", "Rwanda", "Côte d'Ivoire"):
            assert get_default_discount_rate(country) == 8

    def test_everything_else(self):
        assert get_default_discount_rate("Germany") == 5
        assert get_default_discount_rate(None) == 5
        assert get_default_discount_rate("") == 5


class TestPeriodHelpers:
    def test_periods_to_years(self):
        assert periods_to_years(6, "months") == 0.5
        assert periods_to_years(2, PeriodType.QUARTERS) == 0.5
        assert periods_to_years(3) == 3

    def test_period_labels(self):
        assert get_period_label("quarters", 3) == "Q3"
        assert get_period_label("years", 2) == "Year 2"
        assert get_period_label(PeriodType.MONTHS, 5) == "Month 5"
        assert get_period_label("weeks", 1) == "Week 1"
