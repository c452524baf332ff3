"""
core/records.py — Bet Tracker
==============================
Row models for the two record kinds and their derived-field math.
No UI, no HTTP, no aggregation.

Tables (owned by the remote store):
  bets    — one row per sports bet
  stocks  — one row per stock trade

Bet columns:
  id               INTEGER
  team_or_player   TEXT     -- pick description
  sportsbook       TEXT     -- one of SPORTSBOOKS
  result           TEXT     -- "pending", "won", "lost"
  stake            REAL
  odds             REAL     -- decimal payout multiplier (>= 1)
  bet_amount       TEXT     -- the bet DATE (YYYY-MM-DD); historical column name
  potential_payout REAL     -- stake × odds
  created_at       TEXT     -- ISO 8601, set by the store
  updated_at       TEXT     -- ISO 8601

Stock columns:
  id, symbol, company_name, trade_type ("day_trade" | "buy_only" | "sell_only"),
  quantity, buy_price, sell_price, buy_total, sell_total,
  profit_loss, profit_loss_percentage, trade_date, buy_time, sell_time,
  notes, created_at, updated_at

Leg rule: day_trade carries both legs + profit fields. buy_only carries only
buy_price/buy_total/buy_time. sell_only carries only the sell equivalents.

DO NOT add HTTP or Streamlit calls to this file.
"""

from dataclasses import asdict, dataclass, replace
from datetime import datetime, timezone
from typing import Optional

# ---------------------------------------------------------------------------
# Record kinds + tables
# ---------------------------------------------------------------------------
BET = "bet"
TRADE = "trade"

TABLES: dict[str, str] = {
    BET: "bets",
    TRADE: "stocks",
}

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------
SPORTSBOOKS = [
    "PrizePicks",
    "DraftKings",
    "FanDuel",
    "BetMGM",
    "Caesars",
    "Bet365",
    "Fliff",
    "UnderDog",
]

PENDING = "pending"
WON = "won"
LOST = "lost"
BET_RESULTS = (PENDING, WON, LOST)

DAY_TRADE = "day_trade"
BUY_ONLY = "buy_only"
SELL_ONLY = "sell_only"
TRADE_TYPES = (DAY_TRADE, BUY_ONLY, SELL_ONLY)

TRADE_TYPE_LABELS = {
    DAY_TRADE: "Day Trade",
    BUY_ONLY:  "Buy Only",
    SELL_ONLY: "Sell Only",
}

_BUY_FIELDS = ("buy_price", "buy_total", "buy_time")
_SELL_FIELDS = ("sell_price", "sell_total", "sell_time")
_PROFIT_FIELDS = ("profit_loss", "profit_loss_percentage")


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------
def _to_float(value, default: Optional[float] = 0.0) -> Optional[float]:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _to_int(value, default: int = 0) -> int:
    if value is None or value == "":
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp from the store into an aware UTC datetime.

    Accepts a trailing "Z" and date-only strings. Naive values are treated
    as UTC. Returns None for empty or malformed input.

    >>> parse_timestamp("2025-09-04T12:00:00Z").tzinfo is not None
    True
    >>> parse_timestamp("garbage") is None
    True
    """
    if not value:
        return None
    raw = str(value).strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        ts = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Derived-field math
# ---------------------------------------------------------------------------
def calculate_payout(stake: float, odds: float) -> float:
    """
    Potential payout of a bet: stake × decimal multiplier.

    >>> calculate_payout(50, 2.25)
    112.5
    """
    return round((stake or 0.0) * (odds or 0.0), 2)


def bet_profit(stake: float, potential_payout: float, result: str) -> float:
    """Net profit of one bet. won → payout − stake, lost → −stake, pending → 0."""
    if result == WON:
        return (potential_payout or 0.0) - (stake or 0.0)
    if result == LOST:
        return -(stake or 0.0)
    return 0.0


def profit_percentage(buy_total: float, profit: float) -> float:
    """profit / buy_total × 100, or 0.0 when nothing was deployed."""
    if not buy_total or buy_total <= 0:
        return 0.0
    return profit / buy_total * 100


def trade_legs(
    trade_type: str,
    quantity: float,
    buy_price: Optional[float],
    sell_price: Optional[float],
) -> dict:
    """
    Compute leg totals and profit for a trade.

    day_trade needs both prices, otherwise every derived value is 0.
    buy_only fills buy_total only; sell_only fills sell_total only.

    Returns:
        Dict with buy_total, sell_total, profit_loss, profit_loss_percentage.

    >>> trade_legs("day_trade", 10, 100.0, 105.0)["profit_loss"]
    50.0
    """
    buy_total = 0.0
    sell_total = 0.0
    profit = 0.0
    pct = 0.0

    qty = quantity or 0
    if qty > 0:
        if trade_type == DAY_TRADE and buy_price and sell_price:
            buy_total = round(qty * buy_price, 2)
            sell_total = round(qty * sell_price, 2)
            profit = round(sell_total - buy_total, 2)
            pct = round(profit_percentage(buy_total, profit), 4)
        elif trade_type == BUY_ONLY and buy_price:
            buy_total = round(qty * buy_price, 2)
        elif trade_type == SELL_ONLY and sell_price:
            sell_total = round(qty * sell_price, 2)

    return {
        "buy_total": buy_total,
        "sell_total": sell_total,
        "profit_loss": profit,
        "profit_loss_percentage": pct,
    }


# ---------------------------------------------------------------------------
# Bet
# ---------------------------------------------------------------------------
@dataclass
class Bet:
    team_or_player: str
    sportsbook: str
    stake: float
    odds: float
    bet_date: str
    result: str = PENDING
    potential_payout: float = 0.0
    id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "Bet":
        stake = _to_float(row.get("stake"))
        odds = _to_float(row.get("odds"))
        payout = row.get("potential_payout")
        return cls(
            team_or_player=row.get("team_or_player") or "",
            sportsbook=row.get("sportsbook") or "",
            stake=stake,
            odds=odds,
            bet_date=row.get("bet_amount") or "",
            result=row.get("result") or PENDING,
            potential_payout=(
                _to_float(payout) if payout is not None else calculate_payout(stake, odds)
            ),
            id=row.get("id"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    def to_row(self) -> dict:
        """Column dict for insert/update. id and created_at are store-owned."""
        row = {
            "team_or_player": self.team_or_player,
            "sportsbook": self.sportsbook,
            "result": self.result,
            "stake": self.stake,
            "odds": self.odds,
            "bet_amount": self.bet_date,
            "potential_payout": self.potential_payout,
        }
        if self.updated_at:
            row["updated_at"] = self.updated_at
        return row

    @property
    def is_completed(self) -> bool:
        return self.result != PENDING

    @property
    def profit(self) -> float:
        return bet_profit(self.stake, self.potential_payout, self.result)

    @property
    def created(self) -> Optional[datetime]:
        return parse_timestamp(self.created_at)


# ---------------------------------------------------------------------------
# Trade
# ---------------------------------------------------------------------------
@dataclass
class Trade:
    symbol: str
    company_name: str
    trade_type: str
    quantity: int
    trade_date: str
    buy_price: Optional[float] = None
    sell_price: Optional[float] = None
    buy_total: Optional[float] = None
    sell_total: Optional[float] = None
    profit_loss: Optional[float] = None
    profit_loss_percentage: Optional[float] = None
    buy_time: Optional[str] = None
    sell_time: Optional[str] = None
    notes: str = ""
    id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "Trade":
        return cls(
            symbol=(row.get("symbol") or "").upper(),
            company_name=row.get("company_name") or "",
            trade_type=row.get("trade_type") or DAY_TRADE,
            quantity=_to_int(row.get("quantity")),
            trade_date=row.get("trade_date") or "",
            buy_price=_to_float(row.get("buy_price"), None),
            sell_price=_to_float(row.get("sell_price"), None),
            buy_total=_to_float(row.get("buy_total"), None),
            sell_total=_to_float(row.get("sell_total"), None),
            profit_loss=_to_float(row.get("profit_loss"), None),
            profit_loss_percentage=_to_float(row.get("profit_loss_percentage"), None),
            buy_time=row.get("buy_time") or None,
            sell_time=row.get("sell_time") or None,
            notes=row.get("notes") or "",
            id=row.get("id"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    def to_row(self, include_nulls: bool = False) -> dict:
        """
        Column dict for insert/update, honouring the leg rule.

        Fields of the irrelevant leg are dropped on insert. With
        include_nulls=True they are sent as None so an update clears them
        (needed when an edit changes trade_type).
        """
        row = {
            "symbol": self.symbol,
            "company_name": self.company_name,
            "trade_type": self.trade_type,
            "quantity": self.quantity,
            "trade_date": self.trade_date,
            "notes": self.notes,
        }
        values = asdict(self)

        relevant: tuple = ()
        if self.trade_type == DAY_TRADE:
            relevant = _BUY_FIELDS + _SELL_FIELDS + _PROFIT_FIELDS
        elif self.trade_type == BUY_ONLY:
            relevant = _BUY_FIELDS
        elif self.trade_type == SELL_ONLY:
            relevant = _SELL_FIELDS

        for name in _BUY_FIELDS + _SELL_FIELDS + _PROFIT_FIELDS:
            if name in relevant:
                row[name] = values[name]
            elif include_nulls:
                row[name] = None

        if self.updated_at:
            row["updated_at"] = self.updated_at
        return row

    def with_derived(self) -> "Trade":
        """Copy with totals/profit recomputed from quantity and prices."""
        legs = trade_legs(self.trade_type, self.quantity, self.buy_price, self.sell_price)
        return replace(self, **legs)

    @property
    def is_round_trip(self) -> bool:
        return (
            self.trade_type == DAY_TRADE
            and bool(self.buy_total)
            and bool(self.sell_total)
        )

    @property
    def created(self) -> Optional[datetime]:
        return parse_timestamp(self.created_at)
