"""
tests/test_trade_analytics.py — Bet Tracker
============================================
Unit tests for core/trade_analytics.py — round trips, extrapolation,
ROI and target series.

Run: pytest tests/test_trade_analytics.py -v
"""

import math
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from core.records import BUY_ONLY, DAY_TRADE, SELL_ONLY, Trade
from core.trade_analytics import (
    ANNUAL_TARGET_PCT,
    PROJECTION_CAPITAL,
    TARGET_PERIOD_DAYS,
    compound_growth_pct,
    compute_trade_analytics,
    cumulative_roi_series,
    projected_profit,
    round_trips,
    target_series,
)


def _trade(buy_total, sell_total, trade_type=DAY_TRADE, trade_date="2025-09-04",
           created="2025-09-04T15:00:00Z", symbol="AAPL", trade_id=None):
    return Trade(
        symbol=symbol,
        company_name="",
        trade_type=trade_type,
        quantity=1,
        trade_date=trade_date,
        buy_total=buy_total,
        sell_total=sell_total,
        id=trade_id,
        created_at=created,
    )


# ---------------------------------------------------------------------------
# compute_trade_analytics
# ---------------------------------------------------------------------------

class TestComputeTradeAnalytics:
    def test_empty_returns_none(self):
        assert compute_trade_analytics([]) is None

    def test_single_round_trip(self):
        s = compute_trade_analytics([_trade(1000.0, 1050.0)])
        assert s.total_trades == 1
        assert s.net_profit == pytest.approx(50.0)
        assert s.capital_roi_pct == pytest.approx(5.0)
        assert s.average_trade_pct == pytest.approx(5.0)
        assert s.win_rate == pytest.approx(100.0)
        assert s.best_trade == pytest.approx(50.0)
        assert s.worst_trade == pytest.approx(50.0)

    def test_mixed_results(self):
        trades = [
            _trade(1000.0, 1050.0, created="2025-09-04T15:00:00Z"),
            _trade(500.0, 480.0, created="2025-09-05T15:00:00Z"),
        ]
        s = compute_trade_analytics(trades)
        assert s.net_profit == pytest.approx(30.0)
        assert s.total_buy_value == pytest.approx(1500.0)
        assert s.capital_roi_pct == pytest.approx(2.0)
        assert s.win_rate == pytest.approx(50.0)
        assert s.average_profit == pytest.approx(15.0)
        assert s.worst_trade == pytest.approx(-20.0)
        assert s.average_trade_pct == pytest.approx((5.0 - 4.0) / 2)

    def test_open_legs_only(self):
        trades = [
            _trade(200.0, None, trade_type=BUY_ONLY),
            _trade(None, 300.0, trade_type=SELL_ONLY),
        ]
        s = compute_trade_analytics(trades)
        assert s.total_trades == 0
        assert s.net_profit == 0.0
        assert s.annualized_return_pct == 0.0
        assert s.open_buy_count == 1
        assert s.open_buy_value == pytest.approx(200.0)
        assert s.open_sell_count == 1
        assert s.open_sell_value == pytest.approx(300.0)
        assert s.cumulative_roi == []

    def test_open_legs_not_paired(self):
        trades = [
            _trade(1000.0, None, trade_type=BUY_ONLY),
            _trade(None, 1100.0, trade_type=SELL_ONLY),
            _trade(100.0, 110.0),
        ]
        s = compute_trade_analytics(trades)
        assert s.total_trades == 1
        assert s.net_profit == pytest.approx(10.0)

    def test_projection_uses_fixed_capital(self):
        s = compute_trade_analytics([_trade(1000.0, 1001.0)])
        assert s.projected_capital_profit == pytest.approx(
            PROJECTION_CAPITAL * compound_growth_pct(0.1) / 100
        )


# ---------------------------------------------------------------------------
# round_trips
# ---------------------------------------------------------------------------

class TestRoundTrips:
    def test_profit_recomputed_from_totals(self):
        stale = _trade(100.0, 120.0)
        stale.profit_loss = 999.0
        trips = round_trips([stale])
        assert trips[0].profit == pytest.approx(20.0)
        assert trips[0].percentage == pytest.approx(20.0)

    def test_sorted_by_created(self):
        trades = [
            _trade(100.0, 110.0, created="2025-09-06T10:00:00Z", symbol="LATE"),
            _trade(100.0, 110.0, created="2025-09-04T10:00:00Z", symbol="EARLY"),
        ]
        assert [t.symbol for t in round_trips(trades)] == ["EARLY", "LATE"]

    def test_skips_incomplete_day_trade(self):
        assert round_trips([_trade(100.0, None)]) == []


# ---------------------------------------------------------------------------
# Extrapolation
# ---------------------------------------------------------------------------

class TestCompoundGrowth:
    def test_zero(self):
        assert compound_growth_pct(0.0) == pytest.approx(0.0)

    def test_known_value(self):
        assert compound_growth_pct(1.0, days=2) == pytest.approx(2.01)

    def test_total_loss_floor(self):
        assert compound_growth_pct(-150.0) == pytest.approx(-100.0)

    def test_overflow_is_inf(self):
        assert math.isinf(compound_growth_pct(1e6))

    def test_projected_profit_inf(self):
        assert math.isinf(projected_profit(1e6))

    def test_projected_profit_flat(self):
        assert projected_profit(0.0) == pytest.approx(0.0)


# ---------------------------------------------------------------------------
# Series
# ---------------------------------------------------------------------------

class TestSeries:
    def test_cumulative_roi(self):
        trips = round_trips([
            _trade(1000.0, 1050.0, created="2025-09-04T10:00:00Z"),
            _trade(1000.0, 950.0, created="2025-09-05T10:00:00Z"),
        ])
        assert cumulative_roi_series(trips) == pytest.approx([5.0, 0.0])

    def test_target_pro_rated_from_first_trip(self):
        trips = round_trips([
            _trade(100.0, 101.0, trade_date="2025-09-04", created="2025-09-04T10:00:00Z"),
            _trade(100.0, 101.0, trade_date="2025-09-14", created="2025-09-14T10:00:00Z"),
        ])
        daily = ANNUAL_TARGET_PCT / TARGET_PERIOD_DAYS
        assert target_series(trips) == pytest.approx([daily, daily * 10])

    def test_target_capped(self):
        trips = round_trips([
            _trade(100.0, 101.0, trade_date="2024-01-01", created="2024-01-01T10:00:00Z"),
            _trade(100.0, 101.0, trade_date="2025-09-04", created="2025-09-04T10:00:00Z"),
        ])
        assert target_series(trips)[-1] == ANNUAL_TARGET_PCT

    def test_target_empty(self):
        assert target_series([]) == []
