"""
FEE WATERFALL

Management fee up front, carried interest on profit only.

Inputs are not range-checked here: commitments must be non-negative and
fee/carry fractions must lie in [0, 1]. Request models enforce that.
"""

from typing import Optional

from investor_portal.domain.models import WaterfallResult


def invested_after_fee(commitment: float, fee_pct: float) -> float:
    return commitment * (1 - fee_pct)


def gross_proceeds(invested: float, gross_mom: float) -> float:
    return invested * gross_mom


def jbv_carry(gross_profit: float, carry_pct: float) -> float:
    """Carry is never charged on a loss."""
    return max(0.0, gross_profit) * carry_pct


def market_cap(revenue_run_rate: float, ev_sales_multiple: float) -> float:
    return revenue_run_rate * ev_sales_multiple


def net_to_investors(
    commitment: float,
    fee_pct: float,
    gross_mom: float,
    carry_pct: float,
) -> WaterfallResult:
    invested = invested_after_fee(commitment, fee_pct)
    gross = gross_proceeds(invested, gross_mom)
    return _settle(commitment, invested, gross, carry_pct)


def compute_waterfall(
    commitment: float,
    mgmt_fee_pct: float,
    carry_pct: float,
    gross_mom: Optional[float] = None,
    ownership: Optional[float] = None,
    market_cap_value: Optional[float] = None,
) -> WaterfallResult:
    """
    Dashboard composite.

    Gross comes from ``ownership * market_cap_value`` when both are known and
    ownership is positive; otherwise from ``invested * gross_mom``. Raises
    ValueError when neither gross figure is supplied.
    """
    invested = invested_after_fee(commitment, mgmt_fee_pct)

    if ownership is not None and ownership > 0 and market_cap_value is not None:
        gross = ownership * market_cap_value
    elif gross_mom is not None:
        gross = gross_proceeds(invested, gross_mom)
    else:
        raise ValueError("gross_mom is required without ownership and a market cap")

    return _settle(commitment, invested, gross, carry_pct)


def _settle(commitment: float, invested: float, gross: float, carry_pct: float) -> WaterfallResult:
    gross_profit = gross - invested
    carry = jbv_carry(gross_profit, carry_pct)
    net = gross - carry
    net_mom = net / commitment if commitment > 0 else 0.0
    return WaterfallResult(
        invested=invested,
        gross=gross,
        gross_profit=gross_profit,
        carry=carry,
        net=net,
        net_mom=net_mom,
    )
