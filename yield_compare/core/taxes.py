from __future__ import annotations

# Regressive withholding schedule: (max holding days, rate).
WITHHOLDING_BRACKETS: tuple[tuple[int, float], ...] = (
    (180, 0.225),
    (360, 0.20),
    (720, 0.175),
)
LONG_TERM_RATE = 0.15


def withholding_rate(days: int) -> float:
    """Return the withholding rate (fraction) for a holding period of `days`."""
    for max_days, rate in WITHHOLDING_BRACKETS:
        if days <= max_days:
            return rate
    return LONG_TERM_RATE


def withholding_rate_for_month(month: int) -> float:
    """Bracket for days-since-inception at `month`, 30-day months."""
    return withholding_rate(month * 30)


def apply_withholding(profit: float, rate: float, taxed: bool = True) -> tuple[float, float]:
    """Return (net_profit, tax_paid); exempt instruments pay nothing."""
    tax_paid = profit * rate if taxed else 0.0
    return profit - tax_paid, tax_paid
