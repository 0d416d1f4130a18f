from __future__ import annotations

from .inputs import SimulationParams


def base_params() -> SimulationParams:
    """Provide a reasonable starting point for the UI."""
    return SimulationParams(
        principal=100_000,
        months=24,
        benchmark_annual=14.90,
        inflation_annual=5.17,
        fund_rate_monthly=1.5,
        cd_percent_of_benchmark=105.0,
        exempt_percent_of_benchmark=90.0,
        fixed_annual=12.5,
        inflation_spread_annual=6.0,
        peer_fund_trailing_return=14.0,
        payout_monthly=False,
        fund_name="My Fund",
        taxed_evolution=True,
    )
