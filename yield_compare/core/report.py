from __future__ import annotations

from typing import List

import pandas as pd

from .engine import SimulationResult, differential, find_user_fund

SUMMARY_COLUMNS = [
    "name",
    "kind",
    "gross_total",
    "tax_amount",
    "tax_rate",
    "net_total",
    "net_return_percent",
    "percent_of_benchmark",
    "monthly_rate_gross",
    "monthly_rate_net",
    "annual_rate_gross",
    "annual_rate_net",
    "monthly_payout_gross",
    "monthly_payout_net",
    "gross_up",
    "is_user_fund",
    "differential",
    "differential_percent",
]


def summary_frame(results: List[SimulationResult]) -> pd.DataFrame:
    """One row per instrument, in result order, with the differential vs the user fund."""
    user_fund = find_user_fund(results)
    records = []
    for result in results:
        diff = differential(result, user_fund)
        records.append(
            {
                "name": result.name,
                "kind": result.kind.value,
                "gross_total": result.gross_total,
                "tax_amount": result.tax_amount,
                "tax_rate": result.tax_rate,
                "net_total": result.net_total,
                "net_return_percent": result.net_return_percent,
                "percent_of_benchmark": result.percent_of_benchmark,
                "monthly_rate_gross": result.monthly_rate_gross,
                "monthly_rate_net": result.monthly_rate_net,
                "annual_rate_gross": result.annual_rate_gross,
                "annual_rate_net": result.annual_rate_net,
                "monthly_payout_gross": result.monthly_payout_gross,
                "monthly_payout_net": result.monthly_payout_net,
                "gross_up": result.gross_up,
                "is_user_fund": result.is_user_fund,
                "differential": diff[0] if diff else None,
                "differential_percent": diff[1] if diff else None,
            }
        )
    return pd.DataFrame.from_records(records, columns=SUMMARY_COLUMNS)


def column_labels(results: List[SimulationResult]) -> List[str]:
    """Display names, suffixed with the instrument kind where a name repeats.

    The user fund name is free text and can match a benchmark's name.
    """
    labels = []
    for result in results:
        label = result.name
        if label in labels:
            label = f"{result.name} ({result.kind.value})"
        labels.append(label)
    return labels


def evolution_frame(results: List[SimulationResult]) -> pd.DataFrame:
    """Month-indexed values, one column per instrument."""
    series = {
        label: pd.Series({point.month: point.value for point in result.evolution}, dtype=float)
        for label, result in zip(column_labels(results), results)
    }
    df = pd.DataFrame(series)
    df.index.name = "month"
    return df


def monthly_details_frame(result: SimulationResult) -> pd.DataFrame:
    columns = ["month", "principal", "gross_profit", "tax_rate", "tax_amount", "net_profit", "accumulated"]
    records = [
        {
            "month": d.month,
            "principal": d.principal,
            "gross_profit": d.gross_profit,
            "tax_rate": d.tax_rate,
            "tax_amount": d.tax_amount,
            "net_profit": d.net_profit,
            "accumulated": d.accumulated,
        }
        for d in result.monthly_details
    ]
    return pd.DataFrame.from_records(records, columns=columns).set_index("month")


def to_csv(results: List[SimulationResult]) -> str:
    return summary_frame(results).to_csv(index=False)
