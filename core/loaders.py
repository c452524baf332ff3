"""
core/loaders.py — Fetch results for every view
================================================
Each view re-fetches the full table on load. Loaders never raise: a gateway
failure is logged and returned as Failed(reason) for the page to render with
a Retry button.

    PENDING        initial view state, before the first load
    Loaded(data)   rows (history) or an analytics record / None (no data)
    Failed(reason) short user-facing message

DO NOT add Streamlit calls to this file.
"""

import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Union

from core.bet_analytics import compute_bet_analytics
from core.records import BET, TRADE, Bet, Trade
from core.supabase_gateway import GatewayError, SupabaseGateway
from core.trade_analytics import compute_trade_analytics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pending:
    pass


@dataclass(frozen=True)
class Loaded:
    data: Any


@dataclass(frozen=True)
class Failed:
    reason: str


FetchResult = Union[Pending, Loaded, Failed]

PENDING = Pending()

BET_LOAD_ERROR = "Failed to load bet data"
TRADE_LOAD_ERROR = "Failed to load trade data"
PERFORMANCE_LOAD_ERROR = "Failed to load performance data"


def load_bets(gateway: SupabaseGateway, ascending: bool = False) -> FetchResult:
    """All bets as Bet objects. Newest first unless ascending=True."""
    try:
        rows = gateway.select_all(BET, ascending=ascending)
    except GatewayError as exc:
        logger.error("Error fetching bets: %s", exc)
        return Failed(BET_LOAD_ERROR)
    return Loaded([Bet.from_row(r) for r in rows])


def load_trades(gateway: SupabaseGateway, ascending: bool = False) -> FetchResult:
    """All trades as Trade objects. Newest first unless ascending=True."""
    try:
        rows = gateway.select_all(TRADE, ascending=ascending)
    except GatewayError as exc:
        logger.error("Error fetching trades: %s", exc)
        return Failed(TRADE_LOAD_ERROR)
    return Loaded([Trade.from_row(r) for r in rows])


def load_bet_analytics(
    gateway: SupabaseGateway,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> FetchResult:
    """Loaded(BetAnalytics), Loaded(None) for an empty table, or Failed."""
    result = load_bets(gateway, ascending=True)
    if isinstance(result, Failed):
        return result
    return Loaded(compute_bet_analytics(result.data, now=now, rng=rng))


def load_trade_analytics(gateway: SupabaseGateway) -> FetchResult:
    """Loaded(TradeAnalytics), Loaded(None) for an empty table, or Failed."""
    result = load_trades(gateway, ascending=True)
    if isinstance(result, Failed):
        return Failed(PERFORMANCE_LOAD_ERROR)
    return Loaded(compute_trade_analytics(result.data))
