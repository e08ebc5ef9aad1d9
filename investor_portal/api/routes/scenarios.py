"""
Scenario Calculator Routes
Return simulator (public) and fee waterfall (investors only)
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, model_validator
from typing import List, Optional

from investor_portal.api.dependencies import require_session
from investor_portal.domain.models import DEFAULT_SCENARIO, SimulatorScenario
from investor_portal.domain.services.fee_waterfall import compute_waterfall, market_cap
from investor_portal.domain.services.return_metrics import (
    build_value_trajectory,
    calculate_return_metrics,
)

router = APIRouter()


# -------------------------------------------------------------------
# Request / Response models
# -------------------------------------------------------------------

class ReturnScenarioRequest(BaseModel):
    entry_valuation: float = Field(DEFAULT_SCENARIO.entry_valuation, ge=0, allow_inf_nan=False, description="Entry valuation (USD B)")
    exit_valuation: float = Field(DEFAULT_SCENARIO.exit_valuation, ge=0, allow_inf_nan=False, description="Exit valuation (USD B)")
    ownership_pct: float = Field(DEFAULT_SCENARIO.ownership_pct, description="Ownership %, clamped to 0-100")
    dilution_follow_on: float = Field(DEFAULT_SCENARIO.dilution_follow_on, description="Dilution %, clamped to 0-100")
    years: int = Field(DEFAULT_SCENARIO.years, ge=0, le=50, description="Holding period in years")


class ValuePointResponse(BaseModel):
    year: int
    value: float


class ReturnMetricsResponse(BaseModel):
    moic: float
    irr: float
    investment: float
    exit_proceeds: float
    trajectory: List[ValuePointResponse]


class WaterfallRequest(BaseModel):
    commitment: float = Field(..., ge=0, description="Committed capital (USD)")
    mgmt_fee_pct: float = Field(..., ge=0, le=1)
    carry_pct: float = Field(..., ge=0, le=1)
    gross_mom: Optional[float] = Field(None, ge=0, description="Gross multiple on invested capital")
    ownership: Optional[float] = Field(None, ge=0, le=1, description="Ownership as a fraction")
    market_cap: Optional[float] = Field(None, ge=0, description="Exit market cap (USD)")
    revenue_run_rate: Optional[float] = Field(None, ge=0, description="Used with ev_sales_multiple when market_cap is absent")
    ev_sales_multiple: Optional[float] = Field(None, ge=0)

    def resolved_market_cap(self) -> Optional[float]:
        if self.market_cap is not None:
            return self.market_cap
        if self.revenue_run_rate is not None and self.ev_sales_multiple is not None:
            return market_cap(self.revenue_run_rate, self.ev_sales_multiple)
        return None

    def uses_ownership(self) -> bool:
        return self.ownership is not None and self.ownership > 0 and self.resolved_market_cap() is not None

    @model_validator(mode="after")
    def require_gross_figure(self):
        if self.gross_mom is None and not self.uses_ownership():
            raise ValueError(
                "gross_mom is required unless ownership is given with market_cap "
                "or revenue_run_rate and ev_sales_multiple"
            )
        return self


class WaterfallResponse(BaseModel):
    invested: float
    gross: float
    gross_profit: float
    carry: float
    net: float
    net_mom: float
    path: str


# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------

@router.post("/returns", response_model=ReturnMetricsResponse)
async def simulate_returns(request: ReturnScenarioRequest):
    scenario = SimulatorScenario(
        entry_valuation=request.entry_valuation,
        exit_valuation=request.exit_valuation,
        ownership_pct=request.ownership_pct,
        dilution_follow_on=request.dilution_follow_on,
        years=request.years,
    )
    metrics = calculate_return_metrics(scenario)
    trajectory = build_value_trajectory(scenario, metrics)

    return ReturnMetricsResponse(
        moic=metrics.moic,
        irr=metrics.irr,
        investment=metrics.investment,
        exit_proceeds=metrics.exit_proceeds,
        trajectory=[ValuePointResponse(year=p.year, value=p.value) for p in trajectory],
    )


@router.post("/waterfall", response_model=WaterfallResponse, dependencies=[Depends(require_session)])
async def simulate_waterfall(request: WaterfallRequest):
    cap = request.resolved_market_cap()
    result = compute_waterfall(
        commitment=request.commitment,
        mgmt_fee_pct=request.mgmt_fee_pct,
        carry_pct=request.carry_pct,
        gross_mom=request.gross_mom,
        ownership=request.ownership,
        market_cap_value=cap,
    )

    return WaterfallResponse(
        invested=result.invested,
        gross=result.gross,
        gross_profit=result.gross_profit,
        carry=result.carry,
        net=result.net,
        net_mom=result.net_mom,
        path="ownership" if request.uses_ownership() else "multiple",
    )
