from pathlib import Path

import pytest

from investor_portal.domain.services.fund_config import FundConfigEngine


@pytest.mark.unit
def test_fund_config_loads_repository_defaults():
    config_dir = Path(__file__).resolve().parents[2] / "config"
    engine = FundConfigEngine(config_dir)
    engine.load_all()

    assert engine.companies == ["anthropic", "openai", "xai"]

    anthropic = engine.get("Anthropic")
    assert anthropic.commitment == 1_000_000
    assert anthropic.mgmt_fee_pct == pytest.approx(0.05)
    assert anthropic.carry_pct == pytest.approx(0.10)
    assert list(anthropic.revenue_run_rates) == sorted(anthropic.revenue_run_rates)


@pytest.mark.unit
def test_unknown_fund_raises():
    engine = FundConfigEngine(Path(__file__).resolve().parents[2] / "config")
    engine.load_all()
    with pytest.raises(KeyError):
        engine.get("mistral")


@pytest.mark.unit
def test_missing_config_file_fails_fast(tmp_path):
    with pytest.raises(FileNotFoundError):
        FundConfigEngine(tmp_path).load_all()


@pytest.mark.unit
@pytest.mark.parametrize(
    "field,value,message",
    [
        ("mgmt_fee_pct", 1.5, "mgmt_fee_pct"),
        ("carry_pct", -0.1, "carry_pct"),
        ("commitment_usd", 0, "commitment_usd"),
    ],
)
def test_invalid_values_are_rejected(tmp_path, field, value, message):
    values = {
        "commitment_usd": 1000000,
        "mgmt_fee_pct": 0.05,
        "carry_pct": 0.1,
        "ev_sales_multiple": 20,
    }
    values[field] = value
    lines = ["funds:", "  demo:"]
    lines += [f"    {k}: {v}" for k, v in values.items()]
    lines += ["    revenue_run_rates:", "      2025: 1000000"]
    (tmp_path / "fund_models.yml").write_text("\n".join(lines) + "\n")

    with pytest.raises(ValueError, match=message):
        FundConfigEngine(tmp_path).load_all()


@pytest.mark.unit
def test_run_rates_required(tmp_path):
    (tmp_path / "fund_models.yml").write_text(
        "funds:\n"
        "  demo:\n"
        "    commitment_usd: 1000000\n"
        "    mgmt_fee_pct: 0.05\n"
        "    carry_pct: 0.1\n"
        "    ev_sales_multiple: 20\n"
    )
    with pytest.raises(ValueError, match="run-rate"):
        FundConfigEngine(tmp_path).load_all()
