from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))


import pandas as pd
import streamlit as st

from yield_compare.core.engine import SimulationResult, differential, find_user_fund, run_projection
from yield_compare.core.inputs import SimulationParams
from yield_compare.core.report import column_labels, evolution_frame, monthly_details_frame, summary_frame, to_csv
from yield_compare.core.scenarios import base_params

logging.basicConfig(level=logging.WARNING)

st.set_page_config(page_title="Fixed Income Comparator", layout="wide")


def sidebar_inputs() -> SimulationParams:
    defaults = base_params()
    with st.sidebar.expander("Your fund", expanded=True):
        fund_name = st.text_input("Fund name", value=defaults.fund_name)
        principal = st.number_input(
            "Amount invested", min_value=1_000, max_value=100_000_000, value=int(defaults.principal), step=1_000
        )
        months = st.slider("Horizon (months)", min_value=1, max_value=120, value=defaults.months)
        fund_rate = st.number_input(
            "Fund rate (monthly %)",
            min_value=0.0,
            max_value=10.0,
            value=float(defaults.fund_rate_monthly),
            step=0.05,
            format="%.2f",
        )
        payout_monthly = st.checkbox(
            "Pay out interest monthly (no reinvestment)", value=defaults.payout_monthly
        )
        taxed_evolution = st.checkbox(
            "Tax intermediate chart points as if redeemed that month",
            value=defaults.taxed_evolution,
            help="Only affects the chart when interest is reinvested. Final totals are taxed once at maturity.",
        )

    with st.sidebar.expander("Reference rates", expanded=False):
        benchmark = st.number_input(
            "Benchmark rate (annual %)", min_value=0.0, max_value=50.0, value=float(defaults.benchmark_annual), step=0.05
        )
        inflation = st.number_input(
            "Inflation index (annual %)", min_value=-5.0, max_value=50.0, value=float(defaults.inflation_annual), step=0.05
        )

    with st.sidebar.expander("Benchmark instruments", expanded=False):
        cd_pct = st.slider(
            "CD (% of benchmark)", min_value=50.0, max_value=200.0, value=defaults.cd_percent_of_benchmark, step=1.0
        )
        exempt_pct = st.slider(
            "Tax-exempt bond (% of benchmark)",
            min_value=50.0,
            max_value=200.0,
            value=defaults.exempt_percent_of_benchmark,
            step=1.0,
        )
        fixed_annual = st.number_input(
            "Fixed rate bond (annual %)", min_value=0.0, max_value=50.0, value=float(defaults.fixed_annual), step=0.1
        )
        spread = st.number_input(
            "Inflation-linked spread (annual %)",
            min_value=0.0,
            max_value=20.0,
            value=float(defaults.inflation_spread_annual),
            step=0.1,
        )
        peer_return = st.number_input(
            "Peer funds, last 12 months (%)",
            min_value=0.0,
            max_value=100.0,
            value=float(defaults.peer_fund_trailing_return),
            step=0.1,
            help="Set to 0 to leave peer funds out of the comparison.",
        )

    return SimulationParams(
        principal=float(principal),
        months=int(months),
        benchmark_annual=float(benchmark),
        inflation_annual=float(inflation),
        fund_rate_monthly=float(fund_rate),
        cd_percent_of_benchmark=float(cd_pct),
        exempt_percent_of_benchmark=float(exempt_pct),
        fixed_annual=float(fixed_annual),
        inflation_spread_annual=float(spread),
        peer_fund_trailing_return=float(peer_return),
        payout_monthly=bool(payout_monthly),
        fund_name=fund_name or defaults.fund_name,
        taxed_evolution=bool(taxed_evolution),
    )


def render_cards(results: list[SimulationResult], params: SimulationParams) -> None:
    user_fund = find_user_fund(results)
    cols = st.columns(3)
    for idx, result in enumerate(results):
        col = cols[idx % len(cols)]
        diff = differential(result, user_fund)
        delta = f"{diff[0]:+,.2f} ({diff[1]:+.2f}%) vs your fund" if diff else None
        col.metric(result.name, f"${result.net_total:,.2f}", delta=delta)
        lines = [
            f"Gross: ${result.gross_total:,.2f}",
            f"Tax: ${result.tax_amount:,.2f} ({result.tax_rate:.1f}%)",
            f"Net return: {result.net_return_percent:.2f}%",
            f"{result.percent_of_benchmark:.1f}% of benchmark",
            f"Annual gross / net: {result.annual_rate_gross:.2f}% / {result.annual_rate_net:.2f}%",
        ]
        if params.payout_monthly:
            lines.append(f"Monthly payout gross / net: ${result.monthly_payout_gross:,.2f} / ${result.monthly_payout_net:,.2f}")
        if result.gross_up:
            lines.append(f"Gross-up: {result.gross_up:.1f}% of benchmark")
        col.caption("  \n".join(lines))


def render_charts(results: list[SimulationResult], params: SimulationParams) -> None:
    st.markdown("**Net value over time**")
    st.line_chart(evolution_frame(results), height=360)
    if not params.payout_monthly and params.taxed_evolution:
        st.caption("Intermediate points assume redemption in that month and apply that month's tax bracket.")

    st.markdown("**Net profit by instrument**")
    profit = pd.DataFrame(
        {"net_profit": [r.net_total - params.principal for r in results]}, index=column_labels(results)
    )
    st.bar_chart(profit, height=300)


def render_table(results: list[SimulationResult]) -> None:
    df = summary_frame(results)
    st.dataframe(df, use_container_width=True)
    st.download_button("Download CSV", data=to_csv(results), file_name="comparison.csv", mime="text/csv")


def render_monthly_details(results: list[SimulationResult], params: SimulationParams) -> None:
    if not params.payout_monthly:
        st.info("Monthly details are available when interest is paid out monthly.")
        return
    labels = column_labels(results)
    choice = st.selectbox("Instrument", options=range(len(results)), format_func=lambda idx: labels[idx])
    selected = results[choice]
    st.dataframe(monthly_details_frame(selected).reset_index(), use_container_width=True)


def main():
    st.title("Fixed Income Comparator")
    st.write(
        "Compare the after-tax return of your fund against CDs, tax-exempt bonds, fixed and inflation-linked bonds, peer funds and a savings account."
    )

    params = sidebar_inputs()

    try:
        results = run_projection(params)
    except Exception as exc:  # Streamlit friendly error surface
        st.error(f"Unable to run projection: {exc}")
        return

    tab_cards, tab_chart, tab_table, tab_details = st.tabs(["Cards", "Evolution chart", "Table", "Monthly details"])

    with tab_cards:
        render_cards(results, params)

    with tab_chart:
        render_charts(results, params)

    with tab_table:
        render_table(results)

    with tab_details:
        render_monthly_details(results, params)


if __name__ == "__main__":
    main()
