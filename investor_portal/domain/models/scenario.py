"""
DOMAIN MODELS — RETURN SCENARIOS

Pure, immutable data structures for the return simulator and fee waterfall.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class SimulatorScenario:
    """
    Valuations are in billions; ownership and dilution are percentages (0-100).
    """
    entry_valuation: float
    exit_valuation: float
    ownership_pct: float
    dilution_follow_on: float
    years: int


DEFAULT_SCENARIO = SimulatorScenario(
    entry_valuation=183.0,
    exit_valuation=420.0,
    ownership_pct=0.8,
    dilution_follow_on=10.0,
    years=5,
)


@dataclass(frozen=True)
class ReturnMetrics:
    moic: float
    irr: float
    investment: float
    exit_proceeds: float


@dataclass(frozen=True)
class ValuePoint:
    year: int
    value: float


@dataclass(frozen=True)
class WaterfallResult:
    invested: float
    gross: float
    gross_profit: float
    carry: float
    net: float
    net_mom: float


@dataclass(frozen=True)
class FundDefaults:
    """
    Default waterfall terms and revenue run-rates for one portfolio company.
    """
    company: str
    name: str
    commitment: float
    mgmt_fee_pct: float
    carry_pct: float
    revenue_run_rates: Dict[int, float]
    ev_sales_multiple: float
