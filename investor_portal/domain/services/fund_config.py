"""
FUND CONFIG ENGINE
Load, validate, and expose per-company waterfall defaults

RULES:
❌ No defaults if config missing
✅ Fail fast on invalid config
✅ Read-only typed objects
"""

import yaml
from pathlib import Path
from typing import Dict, List

from investor_portal.domain.models import FundDefaults


class FundConfigEngine:
    """
    Fund model configuration
    Single source of truth for waterfall defaults
    """

    def __init__(self, config_dir: Path):
        self.config_dir = config_dir
        self._funds: Dict[str, FundDefaults] = {}

    def load_all(self) -> None:
        fund_file = self.config_dir / "fund_models.yml"
        if not fund_file.exists():
            raise FileNotFoundError(f"Fund model config not found: {fund_file}")

        with open(fund_file, "r") as f:
            data = yaml.safe_load(f) or {}

        funds: Dict[str, FundDefaults] = {}
        for key, raw in (data.get("funds") or {}).items():
            funds[key.lower()] = self._parse_fund(key.lower(), raw)

        if not funds:
            raise ValueError("No funds defined in fund_models.yml")

        self._funds = funds

    def _parse_fund(self, key: str, raw: dict) -> FundDefaults:
        commitment = float(raw["commitment_usd"])
        mgmt_fee = float(raw["mgmt_fee_pct"])
        carry = float(raw["carry_pct"])
        multiple = float(raw["ev_sales_multiple"])
        run_rates = {int(year): float(value) for year, value in (raw.get("revenue_run_rates") or {}).items()}

        if commitment <= 0:
            raise ValueError(f"{key}: commitment_usd must be positive")
        if not 0 <= mgmt_fee <= 1:
            raise ValueError(f"{key}: mgmt_fee_pct must be between 0 and 1")
        if not 0 <= carry <= 1:
            raise ValueError(f"{key}: carry_pct must be between 0 and 1")
        if multiple <= 0:
            raise ValueError(f"{key}: ev_sales_multiple must be positive")
        if not run_rates:
            raise ValueError(f"{key}: at least one revenue run-rate is required")
        if any(value <= 0 for value in run_rates.values()):
            raise ValueError(f"{key}: revenue run-rates must be positive")

        return FundDefaults(
            company=key,
            name=str(raw.get("name", key)),
            commitment=commitment,
            mgmt_fee_pct=mgmt_fee,
            carry_pct=carry,
            revenue_run_rates=dict(sorted(run_rates.items())),
            ev_sales_multiple=multiple,
        )

    @property
    def companies(self) -> List[str]:
        return sorted(self._funds.keys())

    def get(self, company: str) -> FundDefaults:
        fund = self._funds.get(company.lower())
        if fund is None:
            raise KeyError(f"Unknown fund: {company}")
        return fund
