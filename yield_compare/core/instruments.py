from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .inputs import SimulationParams
from .rates import annual_to_monthly_compound, trailing_return_to_monthly

# Savings account: 0.5% a.m. plus an approximate reference-rate add-on.
SAVINGS_BASE_MONTHLY = 0.005
SAVINGS_REFERENCE_MONTHLY = 0.0017


class InstrumentKind(str, Enum):
    FUND = "fund"
    CD = "cd"
    EXEMPT_BOND = "exempt_bond"
    FIXED_RATE = "fixed_rate"
    INFLATION_LINKED = "inflation_linked"
    PEER_FUND = "peer_fund"
    SAVINGS = "savings"


@dataclass(frozen=True)
class InstrumentVariant:
    kind: InstrumentKind
    name: str
    monthly_rate: float  # fraction
    taxed: bool
    # Contracted % of benchmark, reported as-is instead of being recomputed.
    contracted_percent: Optional[float] = None

    @property
    def is_user_fund(self) -> bool:
        return self.kind is InstrumentKind.FUND


def build_variants(params: SimulationParams) -> List[InstrumentVariant]:
    """Derive per-month rates for every instrument compared in a run."""
    benchmark_monthly = annual_to_monthly_compound(params.benchmark_annual)
    inflation_monthly = annual_to_monthly_compound(params.inflation_annual)

    variants = [
        InstrumentVariant(
            InstrumentKind.FUND,
            params.fund_name,
            params.fund_rate_monthly / 100.0,
            taxed=True,
        ),
        InstrumentVariant(
            InstrumentKind.CD,
            f"CD {params.cd_percent_of_benchmark:g}% of benchmark",
            benchmark_monthly * params.cd_percent_of_benchmark / 100.0,
            taxed=True,
            contracted_percent=params.cd_percent_of_benchmark,
        ),
        InstrumentVariant(
            InstrumentKind.EXEMPT_BOND,
            f"Tax-exempt bond {params.exempt_percent_of_benchmark:g}% of benchmark",
            benchmark_monthly * params.exempt_percent_of_benchmark / 100.0,
            taxed=False,
            contracted_percent=params.exempt_percent_of_benchmark,
        ),
        InstrumentVariant(
            InstrumentKind.FIXED_RATE,
            f"Fixed rate {params.fixed_annual:.1f}% p.a.",
            annual_to_monthly_compound(params.fixed_annual),
            taxed=True,
        ),
        InstrumentVariant(
            InstrumentKind.INFLATION_LINKED,
            f"Inflation + {params.inflation_spread_annual:.1f}%",
            inflation_monthly + params.inflation_spread_annual / 1200.0,
            taxed=True,
        ),
    ]

    if params.peer_fund_trailing_return > 0:
        variants.append(
            InstrumentVariant(
                InstrumentKind.PEER_FUND,
                f"Peer funds (12m: {params.peer_fund_trailing_return:.1f}%)",
                trailing_return_to_monthly(params.peer_fund_trailing_return),
                taxed=True,
            )
        )

    variants.append(
        InstrumentVariant(
            InstrumentKind.SAVINGS,
            "Savings account",
            SAVINGS_BASE_MONTHLY + SAVINGS_REFERENCE_MONTHLY,
            taxed=False,
        )
    )
    return variants
