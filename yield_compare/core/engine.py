from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .accrual import EvolutionPoint, MonthlyDetail, accrue
from .inputs import AccrualMode, SimulationParams
from .instruments import InstrumentKind, InstrumentVariant, build_variants
from .rates import annualize, gross_up, monthly_to_annual_compound, net_monthly_rate, percent_of_benchmark
from .taxes import withholding_rate_for_month

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    kind: InstrumentKind
    name: str
    gross_total: float
    tax_amount: float
    tax_rate: float  # %, full-period bracket
    net_total: float
    net_return_percent: float
    percent_of_benchmark: float
    monthly_payout_gross: float
    monthly_payout_net: float
    monthly_rate_gross: float  # %
    monthly_rate_net: float  # %
    annual_rate_gross: float  # %
    annual_rate_net: float  # %
    gross_up: float
    is_user_fund: bool
    monthly_details: List[MonthlyDetail] = field(default_factory=list)
    evolution: List[EvolutionPoint] = field(default_factory=list)


def _ratio(numerator: float, denominator: float) -> float:
    """Plain division that yields nan/inf on a zero denominator."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(numerator) / np.float64(denominator))


def project_variant(params: SimulationParams, variant: InstrumentVariant) -> SimulationResult:
    """Run one instrument through the run's accrual strategy and report it."""
    mode = params.mode
    principal = params.principal
    months = params.months
    period_tax_rate = withholding_rate_for_month(months)

    outcome = accrue(mode, principal, months, variant.monthly_rate, variant.taxed, params.taxed_evolution)

    net_rate = net_monthly_rate(outcome.net_total, principal, months)
    annual_for_benchmark = monthly_to_annual_compound(variant.monthly_rate)
    if variant.contracted_percent is not None:
        pct_of_benchmark = variant.contracted_percent
    else:
        pct_of_benchmark = percent_of_benchmark(annual_for_benchmark, params.benchmark_annual)

    distributed = mode is AccrualMode.DISTRIBUTED
    return SimulationResult(
        kind=variant.kind,
        name=variant.name,
        gross_total=outcome.gross_total,
        tax_amount=outcome.total_tax,
        tax_rate=period_tax_rate * 100.0 if variant.taxed else 0.0,
        net_total=outcome.net_total,
        net_return_percent=_ratio(outcome.net_total - principal, principal) * 100.0,
        percent_of_benchmark=pct_of_benchmark,
        monthly_payout_gross=outcome.monthly_payout_gross,
        monthly_payout_net=_ratio(outcome.net_total - principal, months) if distributed else 0.0,
        monthly_rate_gross=variant.monthly_rate * 100.0,
        monthly_rate_net=net_rate * 100.0,
        annual_rate_gross=annualize(variant.monthly_rate, mode),
        annual_rate_net=annualize(net_rate, mode),
        gross_up=0.0 if variant.taxed else gross_up(pct_of_benchmark, period_tax_rate),
        is_user_fund=variant.is_user_fund,
        monthly_details=outcome.details,
        evolution=outcome.evolution,
    )


def aggregate(results: List[SimulationResult]) -> List[SimulationResult]:
    """User fund first, then everything else by net total, highest first."""
    user_fund = [r for r in results if r.is_user_fund]
    others = sorted((r for r in results if not r.is_user_fund), key=lambda r: r.net_total, reverse=True)
    return user_fund + others


def find_user_fund(results: List[SimulationResult]) -> Optional[SimulationResult]:
    return next((r for r in results if r.is_user_fund), None)


def differential(result: SimulationResult, user_fund: Optional[SimulationResult]) -> Optional[Tuple[float, float]]:
    """Return (amount, percent) of `result` over the user fund's net total.

    None for the user fund itself or when there is no user fund.
    """
    if user_fund is None or result.is_user_fund:
        return None
    diff = result.net_total - user_fund.net_total
    return diff, _ratio(diff, user_fund.net_total) * 100.0


def run_projection(params: SimulationParams) -> List[SimulationResult]:
    """Project every instrument for `params` and return them in display order.

    Recomputed from scratch on every call; nothing is cached.
    """
    if params.principal <= 0 or params.months <= 0:
        logger.warning(
            "Degenerate projection inputs (principal=%s, months=%s); results will contain nan/inf",
            params.principal,
            params.months,
        )

    variants = build_variants(params)
    logger.debug("Projecting %d instruments in %s mode", len(variants), params.mode.value)

    results = []
    for variant in variants:
        result = project_variant(params, variant)
        logger.debug("%s: gross=%.2f tax=%.2f net=%.2f", result.name, result.gross_total, result.tax_amount, result.net_total)
        results.append(result)

    ordered = aggregate(results)
    logger.debug("Result order: %s", [r.name for r in ordered])
    return ordered
