"""
RETURN METRICS ENGINE

MOIC and an annualised-growth IRR approximation for a single entry/exit
scenario. Deterministic math only.

RULES:
- Valuations arrive in billions and are scaled to currency units
- Ownership and dilution are clamped to [0, 100] percent
- No NaN/Infinity: zero investment, a non-positive horizon or overflowing
  valuations yield zeros
- IRR is floored at 0 (loss scenarios are not shown as negative)
"""

import logging
import math
from typing import List

from investor_portal.domain.models import ReturnMetrics, SimulatorScenario, ValuePoint

logger = logging.getLogger(__name__)

BILLION = 1_000_000_000


def _clamp_pct(value: float) -> float:
    return max(0.0, min(float(value), 100.0)) / 100.0


def calculate_return_metrics(scenario: SimulatorScenario) -> ReturnMetrics:
    entry = scenario.entry_valuation * BILLION
    exit_value = scenario.exit_valuation * BILLION
    ownership = _clamp_pct(scenario.ownership_pct)
    dilution = _clamp_pct(scenario.dilution_follow_on)

    investment = entry * ownership
    exit_proceeds = exit_value * ownership * (1 - dilution)

    if not (math.isfinite(investment) and math.isfinite(exit_proceeds)):
        logger.warning("Scenario valuations overflow; returning zero metrics")
        return ReturnMetrics(moic=0.0, irr=0.0, investment=0.0, exit_proceeds=0.0)

    if investment <= 0 or scenario.years <= 0:
        return ReturnMetrics(
            moic=0.0,
            irr=0.0,
            investment=investment,
            exit_proceeds=exit_proceeds,
        )

    moic = exit_proceeds / investment
    if not math.isfinite(moic):
        logger.warning("Scenario multiple overflows; returning zero metrics")
        return ReturnMetrics(moic=0.0, irr=0.0, investment=0.0, exit_proceeds=0.0)

    # max(..., 1) keeps the base positive when the exit is wiped out
    growth = max(exit_proceeds, 1.0) / investment
    irr = max(growth ** (1.0 / scenario.years) - 1.0, 0.0)

    return ReturnMetrics(
        moic=moic,
        irr=irr,
        investment=investment,
        exit_proceeds=exit_proceeds,
    )


def build_value_trajectory(
    scenario: SimulatorScenario,
    metrics: ReturnMetrics,
) -> List[ValuePoint]:
    """
    Straight line from the investment at year 0 to the exit proceeds at the
    final year, one point per year.
    """
    if scenario.years <= 0:
        return [ValuePoint(year=0, value=metrics.investment)]

    points: List[ValuePoint] = []
    spread = metrics.exit_proceeds - metrics.investment
    for year in range(0, int(scenario.years) + 1):
        share = min(year / scenario.years, 1.0)
        points.append(ValuePoint(year=year, value=metrics.investment + spread * share))
    return points
