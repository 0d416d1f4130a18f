from __future__ import annotations

import numpy as np

from .inputs import AccrualMode


def annual_to_monthly_compound(annual_pct: float) -> float:
    """Annual effective rate in % to the equivalent monthly rate as a fraction."""
    return (1 + annual_pct / 100.0) ** (1 / 12.0) - 1


def growth_factor(monthly_rate: float, periods: float) -> float:
    """(1 + rate) ** periods, overflowing to inf instead of raising."""
    with np.errstate(over="ignore", invalid="ignore"):
        return float(np.power(np.float64(1 + monthly_rate), np.float64(periods)))


def monthly_to_annual_compound(monthly_rate: float) -> float:
    """Monthly fraction to annual effective rate in %."""
    return growth_factor(monthly_rate, 12) * 100.0 - 100.0


def monthly_to_annual_simple(monthly_rate: float) -> float:
    """Monthly fraction to annual nominal rate in % (no compounding)."""
    return monthly_rate * 1200.0


def annualize(monthly_rate: float, mode: AccrualMode) -> float:
    if mode is AccrualMode.DISTRIBUTED:
        return monthly_to_annual_simple(monthly_rate)
    return monthly_to_annual_compound(monthly_rate)


def trailing_return_to_monthly(trailing_pct: float) -> float:
    """Geometric monthly rate (fraction) behind a trailing 12-month return in %."""
    return (1 + trailing_pct / 100.0) ** (1 / 12.0) - 1


def percent_of_benchmark(annual_gross_pct: float, benchmark_annual_pct: float) -> float:
    if benchmark_annual_pct == 0:
        return 0.0
    return annual_gross_pct / benchmark_annual_pct * 100.0


def gross_up(exempt_percent_of_benchmark: float, period_tax_rate: float) -> float:
    """Taxable-equivalent % of benchmark for an exempt instrument.

    A taxed instrument paying this much of the benchmark, taxed at
    `period_tax_rate` (fraction, full holding period bracket), nets the
    same as the exempt one.
    """
    return exempt_percent_of_benchmark / (1 - period_tax_rate)


def net_monthly_rate(net_total: float, principal: float, months: int) -> float:
    """Back-solve the per-month rate that grows principal into net_total.

    Principal or months of zero give nan/inf rather than raising.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        growth = np.float64(net_total) / np.float64(principal)
        return float(np.power(growth, np.float64(1.0) / np.float64(months)) - 1)
