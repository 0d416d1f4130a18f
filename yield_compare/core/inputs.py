from dataclasses import dataclass
from enum import Enum


class AccrualMode(str, Enum):
    DISTRIBUTED = "distributed"  # simple interest, paid out monthly
    COMPOUND = "compound"  # reinvested until maturity


@dataclass(frozen=True)
class SimulationParams:
    principal: float
    months: int
    benchmark_annual: float  # % a.a., interbank reference (CDI-like)
    inflation_annual: float  # % a.a., consumer price index (IPCA-like)
    fund_rate_monthly: float  # % a.m.
    cd_percent_of_benchmark: float = 105.0
    exempt_percent_of_benchmark: float = 90.0
    fixed_annual: float = 12.5  # % a.a.
    inflation_spread_annual: float = 6.0  # % a.a. over inflation
    peer_fund_trailing_return: float = 0.0  # % over the last 12 months, 0 disables
    payout_monthly: bool = False
    fund_name: str = "My Fund"
    # Compound mode: tax intermediate chart points as if redeemed that month.
    taxed_evolution: bool = True

    @property
    def mode(self) -> AccrualMode:
        return AccrualMode.DISTRIBUTED if self.payout_monthly else AccrualMode.COMPOUND

    @property
    def days(self) -> int:
        """Holding period in days, using the 30-day month convention."""
        return self.months * 30
