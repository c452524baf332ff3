"""
tests/test_records.py — Bet Tracker
====================================
Unit tests for core/records.py — row mapping and derived-field math.

Run: pytest tests/test_records.py -v
"""

import os
import sys
from datetime import timezone

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from core.records import (
    BUY_ONLY,
    DAY_TRADE,
    LOST,
    PENDING,
    SELL_ONLY,
    SPORTSBOOKS,
    WON,
    Bet,
    Trade,
    bet_profit,
    calculate_payout,
    parse_timestamp,
    profit_percentage,
    trade_legs,
)


# ---------------------------------------------------------------------------
# parse_timestamp
# ---------------------------------------------------------------------------

class TestParseTimestamp:
    def test_z_suffix(self):
        ts = parse_timestamp("2025-09-04T12:30:00Z")
        assert ts.tzinfo is not None
        assert ts.hour == 12

    def test_offset_converted_to_utc(self):
        ts = parse_timestamp("2025-09-04T12:00:00+02:00")
        assert ts.utcoffset().total_seconds() == 0
        assert ts.hour == 10

    def test_naive_treated_as_utc(self):
        ts = parse_timestamp("2025-09-04T08:00:00")
        assert ts.tzinfo == timezone.utc
        assert ts.hour == 8

    def test_empty_returns_none(self):
        assert parse_timestamp("") is None
        assert parse_timestamp(None) is None

    def test_garbage_returns_none(self):
        assert parse_timestamp("not a date") is None


# ---------------------------------------------------------------------------
# Bet math
# ---------------------------------------------------------------------------

class TestCalculatePayout:
    def test_basic(self):
        assert calculate_payout(50, 2.25) == pytest.approx(112.5)

    def test_rounds_to_cents(self):
        assert calculate_payout(10, 1.333) == pytest.approx(13.33)

    def test_zero_inputs(self):
        assert calculate_payout(0, 3.0) == 0.0
        assert calculate_payout(None, None) == 0.0


class TestBetProfit:
    def test_won(self):
        assert bet_profit(50, 112.5, WON) == pytest.approx(62.5)

    def test_lost(self):
        assert bet_profit(20, 60, LOST) == pytest.approx(-20)

    def test_pending_is_zero(self):
        assert bet_profit(20, 60, PENDING) == 0.0


class TestBetRow:
    def _row(self, **overrides):
        row = {
            "id": 7,
            "team_or_player": "Mahomes 2+ TD",
            "sportsbook": "DraftKings",
            "result": "won",
            "stake": "50",
            "odds": "2.25",
            "bet_amount": "2025-09-04",
            "potential_payout": 112.5,
            "created_at": "2025-09-04T18:00:00Z",
            "updated_at": None,
        }
        row.update(overrides)
        return row

    def test_from_row_maps_bet_amount_to_date(self):
        bet = Bet.from_row(self._row())
        assert bet.bet_date == "2025-09-04"
        assert bet.stake == 50.0
        assert bet.odds == 2.25
        assert bet.id == 7

    def test_missing_payout_is_computed(self):
        bet = Bet.from_row(self._row(potential_payout=None))
        assert bet.potential_payout == pytest.approx(112.5)

    def test_missing_result_defaults_pending(self):
        bet = Bet.from_row(self._row(result=None))
        assert bet.result == PENDING
        assert not bet.is_completed

    def test_to_row_writes_date_to_bet_amount(self):
        row = Bet.from_row(self._row()).to_row()
        assert row["bet_amount"] == "2025-09-04"
        assert "bet_date" not in row

    def test_to_row_omits_store_owned_fields(self):
        row = Bet.from_row(self._row()).to_row()
        assert "id" not in row
        assert "created_at" not in row
        assert "updated_at" not in row

    def test_to_row_includes_updated_at_when_set(self):
        bet = Bet.from_row(self._row(updated_at="2025-09-05T00:00:00Z"))
        assert bet.to_row()["updated_at"] == "2025-09-05T00:00:00Z"

    def test_profit_property(self):
        bet = Bet.from_row(self._row())
        assert bet.profit == pytest.approx(62.5)

    def test_created_property(self):
        assert Bet.from_row(self._row()).created.year == 2025

    def test_sportsbooks_list(self):
        assert "PrizePicks" in SPORTSBOOKS
        assert "UnderDog" in SPORTSBOOKS
        assert len(SPORTSBOOKS) == 8


# ---------------------------------------------------------------------------
# Trade math
# ---------------------------------------------------------------------------

class TestProfitPercentage:
    def test_basic(self):
        assert profit_percentage(1000, 50) == pytest.approx(5.0)

    def test_zero_buy_total(self):
        assert profit_percentage(0, 50) == 0.0

    def test_negative_buy_total(self):
        assert profit_percentage(-10, 50) == 0.0


class TestTradeLegs:
    def test_day_trade_profit(self):
        legs = trade_legs(DAY_TRADE, 10, 100.0, 105.0)
        assert legs["buy_total"] == pytest.approx(1000.0)
        assert legs["sell_total"] == pytest.approx(1050.0)
        assert legs["profit_loss"] == pytest.approx(50.0)
        assert legs["profit_loss_percentage"] == pytest.approx(5.0)

    def test_day_trade_loss(self):
        legs = trade_legs(DAY_TRADE, 5, 20.0, 18.0)
        assert legs["profit_loss"] == pytest.approx(-10.0)
        assert legs["profit_loss_percentage"] == pytest.approx(-10.0)

    def test_day_trade_missing_price_zeroes_everything(self):
        legs = trade_legs(DAY_TRADE, 10, 100.0, 0)
        assert legs == {
            "buy_total": 0.0,
            "sell_total": 0.0,
            "profit_loss": 0.0,
            "profit_loss_percentage": 0.0,
        }

    def test_buy_only(self):
        legs = trade_legs(BUY_ONLY, 3, 10.5, 99.0)
        assert legs["buy_total"] == pytest.approx(31.5)
        assert legs["sell_total"] == 0.0
        assert legs["profit_loss"] == 0.0

    def test_sell_only(self):
        legs = trade_legs(SELL_ONLY, 4, 99.0, 12.25)
        assert legs["sell_total"] == pytest.approx(49.0)
        assert legs["buy_total"] == 0.0

    def test_zero_quantity(self):
        legs = trade_legs(DAY_TRADE, 0, 100.0, 105.0)
        assert legs["buy_total"] == 0.0
        assert legs["profit_loss"] == 0.0


class TestTradeRow:
    def _trade(self, trade_type=DAY_TRADE, **overrides):
        values = dict(
            symbol="aapl",
            company_name="Apple Inc.",
            trade_type=trade_type,
            quantity=10,
            trade_date="2025-09-04",
            buy_price=100.0,
            sell_price=105.0,
            buy_time="09:31",
            sell_time="10:05",
        )
        values.update(overrides)
        return Trade(**values).with_derived()

    def test_from_row_uppercases_symbol(self):
        trade = Trade.from_row({"symbol": "tsla", "trade_type": "buy_only", "quantity": "5"})
        assert trade.symbol == "TSLA"
        assert trade.quantity == 5
        assert trade.buy_price is None

    def test_from_row_defaults(self):
        trade = Trade.from_row({})
        assert trade.trade_type == DAY_TRADE
        assert trade.notes == ""
        assert trade.quantity == 0

    def test_with_derived_fills_totals(self):
        trade = self._trade()
        assert trade.buy_total == pytest.approx(1000.0)
        assert trade.profit_loss == pytest.approx(50.0)

    def test_day_trade_row_has_both_legs(self):
        row = self._trade().to_row()
        for name in ("buy_price", "buy_total", "buy_time", "sell_price", "sell_total",
                     "sell_time", "profit_loss", "profit_loss_percentage"):
            assert name in row

    def test_buy_only_row_drops_sell_leg(self):
        row = self._trade(BUY_ONLY).to_row()
        assert row["buy_total"] == pytest.approx(1000.0)
        assert "sell_price" not in row
        assert "sell_total" not in row
        assert "sell_time" not in row
        assert "profit_loss" not in row

    def test_sell_only_row_drops_buy_leg(self):
        row = self._trade(SELL_ONLY).to_row()
        assert row["sell_total"] == pytest.approx(1050.0)
        assert "buy_price" not in row
        assert "buy_total" not in row

    def test_include_nulls_clears_irrelevant_leg(self):
        row = self._trade(BUY_ONLY).to_row(include_nulls=True)
        assert row["sell_price"] is None
        assert row["sell_total"] is None
        assert row["profit_loss"] is None
        assert row["buy_total"] == pytest.approx(1000.0)

    def test_is_round_trip(self):
        assert self._trade().is_round_trip
        assert not self._trade(BUY_ONLY).is_round_trip
        assert not self._trade(sell_price=0).is_round_trip
