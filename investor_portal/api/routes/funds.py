"""
Fund model defaults per portfolio company.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import Dict, List

from investor_portal.api.dependencies import get_fund_config
from investor_portal.domain.services.fee_waterfall import market_cap
from investor_portal.domain.services.fund_config import FundConfigEngine

router = APIRouter()


class FundDefaultsResponse(BaseModel):
    company: str
    name: str
    commitment: float
    mgmt_fee_pct: float
    carry_pct: float
    ev_sales_multiple: float
    revenue_run_rates: Dict[int, float]
    market_caps: Dict[int, float]


@router.get("", response_model=List[str])
async def list_funds(engine: FundConfigEngine = Depends(get_fund_config)):
    return engine.companies


@router.get("/{company}/defaults", response_model=FundDefaultsResponse)
async def get_fund_defaults(company: str, engine: FundConfigEngine = Depends(get_fund_config)):
    try:
        fund = engine.get(company)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown fund: {company}")

    return FundDefaultsResponse(
        company=fund.company,
        name=fund.name,
        commitment=fund.commitment,
        mgmt_fee_pct=fund.mgmt_fee_pct,
        carry_pct=fund.carry_pct,
        ev_sales_multiple=fund.ev_sales_multiple,
        revenue_run_rates=fund.revenue_run_rates,
        market_caps={
            year: market_cap(rate, fund.ev_sales_multiple)
            for year, rate in fund.revenue_run_rates.items()
        },
    )
