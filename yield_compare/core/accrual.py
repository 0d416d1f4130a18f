from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .inputs import AccrualMode
from .rates import growth_factor
from .taxes import apply_withholding, withholding_rate_for_month


@dataclass(frozen=True)
class MonthlyDetail:
    month: int
    principal: float
    gross_profit: float
    tax_rate: float  # %
    tax_amount: float
    net_profit: float
    accumulated: float  # cumulative net profit through this month


@dataclass(frozen=True)
class EvolutionPoint:
    month: int
    value: float


@dataclass
class AccrualOutcome:
    gross_total: float
    net_total: float
    total_tax: float
    monthly_payout_gross: float = 0.0
    details: List[MonthlyDetail] = field(default_factory=list)
    evolution: List[EvolutionPoint] = field(default_factory=list)


def accrue_distributed(principal: float, months: int, monthly_rate: float, taxed: bool) -> AccrualOutcome:
    """Simple interest paid out every month; the principal is never reinvested.

    Each month's payout is withheld at the bracket for the days elapsed
    since inception at that month, not per tranche.
    """
    total_gross = 0.0
    total_tax = 0.0
    total_net = 0.0
    details: List[MonthlyDetail] = []
    evolution = [EvolutionPoint(0, principal)]

    gross_profit = principal * monthly_rate
    for month in range(1, months + 1):
        month_rate = withholding_rate_for_month(month) if taxed else 0.0
        net_profit, tax_amount = apply_withholding(gross_profit, month_rate, taxed)

        total_gross += gross_profit
        total_tax += tax_amount
        total_net += net_profit

        details.append(
            MonthlyDetail(
                month=month,
                principal=principal,
                gross_profit=gross_profit,
                tax_rate=month_rate * 100.0,
                tax_amount=tax_amount,
                net_profit=net_profit,
                accumulated=total_net,
            )
        )
        evolution.append(EvolutionPoint(month, principal + total_net))

    return AccrualOutcome(
        gross_total=principal + total_gross,
        net_total=principal + total_net,
        total_tax=total_tax,
        monthly_payout_gross=gross_profit,
        details=details,
        evolution=evolution,
    )


def compound_evolution(
    principal: float, months: int, monthly_rate: float, taxed: bool, taxed_evolution: bool = True
) -> List[EvolutionPoint]:
    """Chart series for a reinvested instrument.

    Each point is computed on its own, as if redeemed that month: the
    partial profit is taxed at the bracket for m * 30 days. This is a
    display value only; the instrument is not taxed before maturity.
    """
    evolution = [EvolutionPoint(0, principal)]
    for month in range(1, months + 1):
        gross = principal * growth_factor(monthly_rate, month)
        if taxed and taxed_evolution:
            _, tax = apply_withholding(gross - principal, withholding_rate_for_month(month))
        else:
            tax = 0.0
        evolution.append(EvolutionPoint(month, gross - tax))
    return evolution


def accrue_compound(
    principal: float, months: int, monthly_rate: float, taxed: bool, taxed_evolution: bool = True
) -> AccrualOutcome:
    """Reinvested accrual, taxed once at maturity with the full-period bracket."""
    gross_total = principal * growth_factor(monthly_rate, months)
    rate = withholding_rate_for_month(months)
    _, tax = apply_withholding(gross_total - principal, rate, taxed)
    return AccrualOutcome(
        gross_total=gross_total,
        net_total=gross_total - tax,
        total_tax=tax,
        evolution=compound_evolution(principal, months, monthly_rate, taxed, taxed_evolution),
    )


def accrue(
    mode: AccrualMode,
    principal: float,
    months: int,
    monthly_rate: float,
    taxed: bool,
    taxed_evolution: bool = True,
) -> AccrualOutcome:
    """Run one instrument under `mode`; `taxed_evolution` only affects compound chart points."""
    if mode is AccrualMode.DISTRIBUTED:
        return accrue_distributed(principal, months, monthly_rate, taxed)
    return accrue_compound(principal, months, monthly_rate, taxed, taxed_evolution)
