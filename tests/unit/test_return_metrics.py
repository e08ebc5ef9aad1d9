"""
Unit Tests for the return metrics engine
"""

import math

import pytest

from investor_portal.domain.models import DEFAULT_SCENARIO, SimulatorScenario
from investor_portal.domain.services.return_metrics import (
    BILLION,
    build_value_trajectory,
    calculate_return_metrics,
)


def scenario(**overrides) -> SimulatorScenario:
    values = dict(
        entry_valuation=200.0,
        exit_valuation=420.0,
        ownership_pct=1.0,
        dilution_follow_on=10.0,
        years=5,
    )
    values.update(overrides)
    return SimulatorScenario(**values)


@pytest.mark.unit
class TestCalculateReturnMetrics:

    def test_baseline_scenario(self):
        metrics = calculate_return_metrics(scenario())
        assert metrics.moic == pytest.approx(1.89, abs=0.005)
        assert 0.12 < metrics.irr < 0.14

    def test_full_ownership_matches_ratio(self):
        metrics = calculate_return_metrics(scenario(ownership_pct=100))
        assert metrics.investment == pytest.approx(200 * BILLION)
        assert metrics.exit_proceeds == pytest.approx(420 * BILLION * 0.9)
        assert metrics.moic == pytest.approx(1.89)
        assert 0.12 < metrics.irr < 0.14

    def test_small_ownership(self):
        metrics = calculate_return_metrics(
            scenario(entry_valuation=183, exit_valuation=300, ownership_pct=0.2, dilution_follow_on=0, years=3)
        )
        assert 1.5 < metrics.moic < 1.7
        assert metrics.irr > 0.14

    def test_zero_entry_valuation_returns_zeros(self):
        metrics = calculate_return_metrics(scenario(entry_valuation=0, exit_valuation=400))
        assert metrics.moic == 0
        assert metrics.irr == 0
        assert metrics.investment == 0
        assert metrics.exit_proceeds == pytest.approx(400 * BILLION * 0.01 * 0.9)
        assert all(math.isfinite(v) for v in (metrics.moic, metrics.irr, metrics.exit_proceeds))

    def test_zero_years_returns_zero_ratios(self):
        metrics = calculate_return_metrics(scenario(years=0))
        assert metrics.moic == 0
        assert metrics.irr == 0
        assert metrics.investment > 0

    def test_loss_scenario_irr_floored_at_zero(self):
        metrics = calculate_return_metrics(scenario(exit_valuation=100))
        assert metrics.moic < 1
        assert metrics.irr == 0

    def test_total_wipeout_does_not_raise(self):
        metrics = calculate_return_metrics(scenario(exit_valuation=0))
        assert metrics.moic == 0
        assert metrics.irr == 0

    def test_dilution_is_clamped(self):
        over = calculate_return_metrics(scenario(dilution_follow_on=150))
        assert over.exit_proceeds == 0

        under = calculate_return_metrics(scenario(dilution_follow_on=-20))
        assert under.exit_proceeds == pytest.approx(420 * BILLION * 0.01)

    def test_ownership_is_clamped(self):
        capped = calculate_return_metrics(scenario(ownership_pct=250))
        assert capped.investment == pytest.approx(200 * BILLION)

    def test_default_scenario(self):
        metrics = calculate_return_metrics(DEFAULT_SCENARIO)
        assert metrics.moic == pytest.approx(420 * 0.9 / 183)

    def test_overflowing_valuations_return_zeros(self):
        s = scenario(entry_valuation=1e300, exit_valuation=1e300, ownership_pct=100)
        metrics = calculate_return_metrics(s)
        assert (metrics.moic, metrics.irr, metrics.investment, metrics.exit_proceeds) == (0, 0, 0, 0)
        assert all(math.isfinite(p.value) for p in build_value_trajectory(s, metrics))

    def test_overflowing_multiple_returns_zeros(self):
        metrics = calculate_return_metrics(
            scenario(entry_valuation=1e-300, exit_valuation=1e299, ownership_pct=100, dilution_follow_on=0)
        )
        assert metrics.moic == 0
        assert metrics.irr == 0


@pytest.mark.unit
class TestBuildValueTrajectory:

    def test_linear_path_between_endpoints(self):
        s = scenario()
        metrics = calculate_return_metrics(s)
        points = build_value_trajectory(s, metrics)

        assert [p.year for p in points] == [0, 1, 2, 3, 4, 5]
        assert points[0].value == pytest.approx(metrics.investment)
        assert points[-1].value == pytest.approx(metrics.exit_proceeds)
        step = (metrics.exit_proceeds - metrics.investment) / 5
        assert points[2].value - points[1].value == pytest.approx(step)

    def test_is_restartable(self):
        s = scenario()
        metrics = calculate_return_metrics(s)
        assert build_value_trajectory(s, metrics) == build_value_trajectory(s, metrics)

    def test_zero_years_yields_single_point(self):
        s = scenario(years=0)
        points = build_value_trajectory(s, calculate_return_metrics(s))
        assert len(points) == 1
        assert points[0].year == 0
