import math
from dataclasses import replace

import pytest

from yield_compare.core.engine import SimulationResult, aggregate, differential, find_user_fund, run_projection
from yield_compare.core.instruments import InstrumentKind
from yield_compare.core.rates import (
    annual_to_monthly_compound,
    gross_up,
    monthly_to_annual_compound,
    percent_of_benchmark,
    trailing_return_to_monthly,
)
from yield_compare.core.scenarios import base_params


def _result(name, net_total, is_user_fund=False):
    return SimulationResult(
        kind=InstrumentKind.FUND if is_user_fund else InstrumentKind.CD,
        name=name,
        gross_total=net_total,
        tax_amount=0.0,
        tax_rate=0.0,
        net_total=net_total,
        net_return_percent=0.0,
        percent_of_benchmark=0.0,
        monthly_payout_gross=0.0,
        monthly_payout_net=0.0,
        monthly_rate_gross=0.0,
        monthly_rate_net=0.0,
        annual_rate_gross=0.0,
        annual_rate_net=0.0,
        gross_up=0.0,
        is_user_fund=is_user_fund,
    )


def _by_kind(results):
    return {r.kind: r for r in results}


def test_aggregate_puts_user_fund_first_then_descending():
    results = [
        _result("low", 120_000),
        _result("mine", 150_000, is_user_fund=True),
        _result("high", 170_000),
        _result("mid", 160_000),
    ]
    ordered = aggregate(results)
    assert [r.name for r in ordered] == ["mine", "high", "mid", "low"]


def test_aggregate_without_user_fund():
    ordered = aggregate([_result("a", 1.0), _result("b", 2.0)])
    assert [r.name for r in ordered] == ["b", "a"]
    assert find_user_fund(ordered) is None
    assert differential(ordered[0], None) is None


def test_differential_against_user_fund():
    mine = _result("mine", 150_000, is_user_fund=True)
    other = _result("other", 160_000)

    amount, percent = differential(other, mine)
    assert amount == pytest.approx(10_000)
    assert percent == pytest.approx(6.67, abs=0.01)
    assert differential(mine, mine) is None


def test_differential_against_zero_user_fund_is_infinite():
    _, percent = differential(_result("other", 10.0), _result("mine", 0.0, is_user_fund=True))
    assert math.isinf(percent)


def test_compound_run_matches_reference_scenario():
    results = run_projection(base_params())
    fund = results[0]

    assert fund.is_user_fund
    assert fund.gross_total == pytest.approx(142_950.28, abs=0.5)
    assert fund.tax_amount == pytest.approx(7_516.30, abs=0.5)
    assert fund.tax_rate == pytest.approx(17.5)
    assert fund.net_total == pytest.approx(135_433.98, abs=0.5)
    assert fund.net_return_percent == pytest.approx((fund.net_total - 100_000) / 1_000)
    assert fund.monthly_details == []
    assert fund.monthly_payout_gross == 0.0
    assert fund.monthly_payout_net == 0.0
    assert fund.percent_of_benchmark == pytest.approx(monthly_to_annual_compound(0.015) / 14.90 * 100)
    assert fund.annual_rate_gross == pytest.approx(monthly_to_annual_compound(0.015))
    assert fund.annual_rate_net == pytest.approx(((fund.net_total / 100_000) ** (1 / 24)) ** 12 * 100 - 100)

    others = [r.net_total for r in results[1:]]
    assert others == sorted(others, reverse=True)
    assert len(results) == 7


def test_contracted_percentages_and_gross_up():
    results = _by_kind(run_projection(base_params()))

    cd = results[InstrumentKind.CD]
    assert cd.percent_of_benchmark == 105.0
    assert cd.gross_up == 0.0

    exempt = results[InstrumentKind.EXEMPT_BOND]
    assert exempt.percent_of_benchmark == 90.0
    assert exempt.tax_amount == 0.0
    assert exempt.tax_rate == 0.0
    assert exempt.gross_up == pytest.approx(90 / 0.825)
    assert exempt.net_total == exempt.gross_total

    savings = results[InstrumentKind.SAVINGS]
    savings_pct = percent_of_benchmark(monthly_to_annual_compound(0.0067), 14.90)
    assert savings.percent_of_benchmark == pytest.approx(savings_pct)
    assert savings.gross_up == pytest.approx(gross_up(savings_pct, 0.175))

    fixed = results[InstrumentKind.FIXED_RATE]
    assert fixed.annual_rate_gross == pytest.approx(12.5)
    assert fixed.percent_of_benchmark == pytest.approx(12.5 / 14.90 * 100)


def test_distributed_run_applies_one_strategy_to_every_instrument():
    params = replace(base_params(), payout_monthly=True, months=12)
    results = run_projection(params)

    for result in results:
        assert len(result.monthly_details) == 12
        assert len(result.evolution) == 13
        assert result.annual_rate_gross == pytest.approx(result.monthly_rate_gross * 12)
        assert result.annual_rate_net == pytest.approx(result.monthly_rate_net * 12)
        assert sum(d.net_profit for d in result.monthly_details) == pytest.approx(result.net_total - params.principal)
        assert result.monthly_payout_net == pytest.approx((result.net_total - params.principal) / 12)

    fund = results[0]
    assert fund.monthly_payout_gross == pytest.approx(1_500.0)
    assert fund.net_total == pytest.approx(100_000 + 6 * 1_500 * 0.775 + 6 * 1_500 * 0.80)


def test_evolution_starts_at_principal_for_every_instrument():
    params = base_params()
    for result in run_projection(params):
        assert result.evolution[0].month == 0
        assert result.evolution[0].value == params.principal
        assert [p.month for p in result.evolution] == list(range(params.months + 1))


def test_run_is_recomputed_from_params():
    params = base_params()
    first = run_projection(params)
    second = run_projection(params)
    assert [r.net_total for r in first] == [r.net_total for r in second]
    assert first[0] is not second[0]


def test_zero_principal_degrades_to_nan_without_raising():
    results = run_projection(replace(base_params(), principal=0.0))
    fund = find_user_fund(results)
    assert fund.net_total == 0.0
    assert math.isnan(fund.net_return_percent)
    assert math.isnan(fund.monthly_rate_net)


def test_zero_benchmark_reports_zero_percent():
    results = _by_kind(run_projection(replace(base_params(), benchmark_annual=0.0)))
    assert results[InstrumentKind.FIXED_RATE].percent_of_benchmark == 0.0
    assert results[InstrumentKind.CD].net_total == pytest.approx(100_000)


def test_computed_percent_of_benchmark_uses_compound_annual_rate():
    results = _by_kind(run_projection(base_params()))

    inflation_monthly = annual_to_monthly_compound(5.17) + 6.0 / 1200
    assert results[InstrumentKind.INFLATION_LINKED].percent_of_benchmark == pytest.approx(
        monthly_to_annual_compound(inflation_monthly) / 14.90 * 100
    )
    peer_monthly = trailing_return_to_monthly(14.0)
    assert results[InstrumentKind.PEER_FUND].percent_of_benchmark == pytest.approx(
        monthly_to_annual_compound(peer_monthly) / 14.90 * 100
    )
    assert results[InstrumentKind.PEER_FUND].percent_of_benchmark == pytest.approx(14.0 / 14.90 * 100)


def test_user_fund_percent_of_benchmark_is_compound_in_distributed_mode():
    results = _by_kind(run_projection(replace(base_params(), payout_monthly=True)))
    fund = results[InstrumentKind.FUND]

    assert fund.annual_rate_gross == pytest.approx(18.0)
    assert fund.percent_of_benchmark == pytest.approx(monthly_to_annual_compound(0.015) / 14.90 * 100)
    assert fund.percent_of_benchmark != pytest.approx(18.0 / 14.90 * 100)

    inflation_monthly = annual_to_monthly_compound(5.17) + 6.0 / 1200
    assert results[InstrumentKind.INFLATION_LINKED].percent_of_benchmark == pytest.approx(
        monthly_to_annual_compound(inflation_monthly) / 14.90 * 100
    )
    assert results[InstrumentKind.PEER_FUND].percent_of_benchmark == pytest.approx(14.0 / 14.90 * 100)


def test_long_horizon_yields_non_finite_totals_without_raising():
    results = run_projection(replace(base_params(), months=60_000))
    fund = find_user_fund(results)

    assert math.isinf(fund.gross_total)
    assert math.isnan(fund.net_total)
    assert math.isnan(fund.monthly_rate_net)
    assert len(results) == 7


def test_untaxed_chart_option_reaches_every_instrument():
    params = replace(base_params(), taxed_evolution=False)
    for result in run_projection(params):
        assert result.evolution[-1].value == pytest.approx(result.gross_total)

    fund = find_user_fund(run_projection(params))
    assert fund.evolution[6].value == pytest.approx(100_000 * 1.015**6)
    assert fund.net_total == pytest.approx(135_433.98, abs=0.5)
