"""
core/trade_analytics.py — Round-trip analytics for stock trades
=================================================================
Pure aggregation over the full stocks table. No UI, no HTTP.

Grouping: one day_trade row with both a buy_total and a sell_total is one
round trip. buy_only / sell_only rows are never paired with each other; they
are reported as open legs.

Per round trip:
  profit     = sell_total − buy_total
  percentage = profit / buy_total × 100

Annual extrapolation (compounding the average per-trade % daily):
  yearly %   = ((1 + avg_pct / 100) ^ 252 − 1) × 100
  $ projection on a fixed 1500.00 daily capital over the same 252 days.

Target series: 5% annual target pro-rated over 250 trading days, counted
from the first round trip's trade_date, capped at 5%.

DO NOT import streamlit or requests here.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional

from core.records import BUY_ONLY, SELL_ONLY, Trade, profit_percentage

TRADING_DAYS_PER_YEAR: int = 252
TARGET_PERIOD_DAYS: int = 250
ANNUAL_TARGET_PCT: float = 5.0
PROJECTION_CAPITAL: float = 1500.00


@dataclass
class RoundTrip:
    symbol: str
    trade_date: str
    profit: float
    percentage: float
    buy_value: float
    sell_value: float
    trade_id: Optional[int] = None


@dataclass
class TradeAnalytics:
    total_trades: int
    total_buy_value: float
    total_sell_value: float
    net_profit: float
    capital_roi_pct: float
    win_rate: float
    average_profit: float
    best_trade: float
    worst_trade: float
    average_trade_pct: float
    annualized_return_pct: float
    projected_capital_profit: float

    open_buy_count: int = 0
    open_buy_value: float = 0.0
    open_sell_count: int = 0
    open_sell_value: float = 0.0

    round_trips: list[RoundTrip] = field(default_factory=list)
    cumulative_roi: list[float] = field(default_factory=list)
    target_roi: list[float] = field(default_factory=list)
    trade_dates: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _parse_date(value: str) -> Optional[date]:
    try:
        return date.fromisoformat(str(value)[:10])
    except (TypeError, ValueError):
        return None


def _created_key(trade: Trade) -> datetime:
    return trade.created or datetime.max.replace(tzinfo=timezone.utc)


def compound_growth_pct(daily_pct: float, days: int = TRADING_DAYS_PER_YEAR) -> float:
    """
    Compound a per-day % return over `days`, in percent.

    A base below zero is floored at zero (−100%). Overflow returns inf.

    >>> round(compound_growth_pct(0.0), 6)
    0.0
    >>> round(compound_growth_pct(-150.0), 1)
    -100.0
    """
    base = max(0.0, 1 + daily_pct / 100)
    try:
        return (base ** days - 1) * 100
    except OverflowError:
        return math.inf


def projected_profit(
    daily_pct: float,
    capital: float = PROJECTION_CAPITAL,
    days: int = TRADING_DAYS_PER_YEAR,
) -> float:
    """Profit on `capital` compounding at daily_pct for `days` trading days."""
    growth = compound_growth_pct(daily_pct, days)
    if math.isinf(growth):
        return math.inf
    return capital * growth / 100


def round_trips(trades: list[Trade]) -> list[RoundTrip]:
    """
    Extract completed round trips in chronological (created_at) order.

    Profit is recomputed from the stored totals so stale profit columns
    cannot skew the aggregate.
    """
    trips: list[RoundTrip] = []
    for trade in sorted(trades, key=_created_key):
        if not trade.is_round_trip:
            continue
        buy_value = trade.buy_total or 0.0
        sell_value = trade.sell_total or 0.0
        profit = sell_value - buy_value
        trips.append(RoundTrip(
            symbol=trade.symbol,
            trade_date=trade.trade_date,
            profit=profit,
            percentage=profit_percentage(buy_value, profit),
            buy_value=buy_value,
            sell_value=sell_value,
            trade_id=trade.id,
        ))
    return trips


def target_series(trips: list[RoundTrip]) -> list[float]:
    """5% annual target pro-rated per calendar day since the first trip."""
    if not trips:
        return []
    start = _parse_date(trips[0].trade_date)
    daily_target = ANNUAL_TARGET_PCT / TARGET_PERIOD_DAYS

    series = []
    for trip in trips:
        current = _parse_date(trip.trade_date)
        if start is None or current is None:
            elapsed = 1
        else:
            elapsed = max(1, (current - start).days)
        series.append(min(daily_target * elapsed, ANNUAL_TARGET_PCT))
    return series


def cumulative_roi_series(trips: list[RoundTrip]) -> list[float]:
    """Running profit / running capital × 100 after each trip."""
    capital = 0.0
    profit = 0.0
    series = []
    for trip in trips:
        capital += trip.buy_value
        profit += trip.profit
        series.append(profit / capital * 100 if capital > 0 else 0.0)
    return series


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------
def compute_trade_analytics(trades: list[Trade]) -> Optional[TradeAnalytics]:
    """
    Aggregate the complete trade set.

    Returns:
        TradeAnalytics, or None when there are no trades at all.
        A table with only open legs yields zeroed round-trip figures.

    >>> compute_trade_analytics([]) is None
    True
    """
    if not trades:
        return None

    trips = round_trips(trades)
    n = len(trips)

    total_buy = sum(t.buy_value for t in trips)
    total_sell = sum(t.sell_value for t in trips)
    net_profit = total_sell - total_buy
    winners = sum(1 for t in trips if t.profit > 0)
    avg_pct = sum(t.percentage for t in trips) / n if n else 0.0

    open_buys = [t for t in trades if t.trade_type == BUY_ONLY]
    open_sells = [t for t in trades if t.trade_type == SELL_ONLY]

    return TradeAnalytics(
        total_trades=n,
        total_buy_value=total_buy,
        total_sell_value=total_sell,
        net_profit=net_profit,
        capital_roi_pct=net_profit / total_buy * 100 if total_buy > 0 else 0.0,
        win_rate=winners / n * 100 if n else 0.0,
        average_profit=net_profit / n if n else 0.0,
        best_trade=max((t.profit for t in trips), default=0.0),
        worst_trade=min((t.profit for t in trips), default=0.0),
        average_trade_pct=avg_pct,
        annualized_return_pct=compound_growth_pct(avg_pct) if n else 0.0,
        projected_capital_profit=projected_profit(avg_pct) if n else 0.0,
        open_buy_count=len(open_buys),
        open_buy_value=sum(t.buy_total or 0.0 for t in open_buys),
        open_sell_count=len(open_sells),
        open_sell_value=sum(t.sell_total or 0.0 for t in open_sells),
        round_trips=trips,
        cumulative_roi=cumulative_roi_series(trips),
        target_roi=target_series(trips),
        trade_dates=[t.trade_date for t in trips],
    )
