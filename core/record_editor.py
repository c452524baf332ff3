"""
core/record_editor.py — Draft records for the input forms
===========================================================
One mutable draft per form. Every change to a quantity- or price-like field
recomputes the derived fields from scratch, so applying the same input twice
yields the same totals.

Submission is a single insert. Success → fresh draft (dates reset to today).
Failure → the same draft is kept and an error message is returned.
No optimistic append: history/analytics views re-fetch on their own.

Used by the input tab (new records) and the history tab (inline edit).

DO NOT add Streamlit calls to this file.
"""

import logging
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from typing import Optional, Union

from core.records import (
    BET,
    DAY_TRADE,
    PENDING,
    TRADE,
    Bet,
    Trade,
    calculate_payout,
    trade_legs,
)
from core.supabase_gateway import GatewayError, SupabaseGateway

logger = logging.getLogger(__name__)

BET_ADDED = "Bet added successfully!"
BET_ADD_ERROR = "Error adding bet. Please try again."
TRADE_ADDED = "Trade added successfully!"
TRADE_ADD_ERROR = "Error adding trade. Please try again."


def today_iso(today: Optional[date] = None) -> str:
    return (today or date.today()).isoformat()


def current_time_hhmm(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime("%H:%M")


# ---------------------------------------------------------------------------
# Drafts
# ---------------------------------------------------------------------------
@dataclass
class BetDraft:
    team_or_player: str = ""
    sportsbook: str = ""
    stake: float = 0.0
    odds: float = 0.0
    bet_date: str = field(default_factory=today_iso)
    result: str = PENDING
    potential_payout: float = 0.0

    def update(self, **changes) -> "BetDraft":
        """Apply field changes, then recompute the payout."""
        _apply(self, changes)
        self.recompute()
        return self

    def recompute(self) -> None:
        self.potential_payout = calculate_payout(self.stake, self.odds)

    @property
    def potential_profit(self) -> float:
        return self.potential_payout - self.stake

    def to_bet(self) -> Bet:
        return Bet(
            team_or_player=self.team_or_player.strip(),
            sportsbook=self.sportsbook,
            stake=self.stake,
            odds=self.odds,
            bet_date=self.bet_date,
            result=self.result,
            potential_payout=calculate_payout(self.stake, self.odds),
        )

    @classmethod
    def from_bet(cls, bet: Bet) -> "BetDraft":
        draft = cls(
            team_or_player=bet.team_or_player,
            sportsbook=bet.sportsbook,
            stake=bet.stake,
            odds=bet.odds,
            bet_date=bet.bet_date,
            result=bet.result,
        )
        draft.recompute()
        return draft


@dataclass
class TradeDraft:
    symbol: str = ""
    company_name: str = ""
    trade_type: str = DAY_TRADE
    quantity: int = 0
    buy_price: float = 0.0
    sell_price: float = 0.0
    buy_total: float = 0.0
    sell_total: float = 0.0
    profit_loss: float = 0.0
    profit_loss_percentage: float = 0.0
    trade_date: str = field(default_factory=today_iso)
    buy_time: str = field(default_factory=current_time_hhmm)
    sell_time: str = field(default_factory=current_time_hhmm)
    notes: str = ""

    def update(self, **changes) -> "TradeDraft":
        """Apply field changes, then recompute totals and profit."""
        if "symbol" in changes:
            changes["symbol"] = (changes["symbol"] or "").upper()
        _apply(self, changes)
        self.recompute()
        return self

    def recompute(self) -> None:
        legs = trade_legs(self.trade_type, self.quantity, self.buy_price, self.sell_price)
        self.buy_total = legs["buy_total"]
        self.sell_total = legs["sell_total"]
        self.profit_loss = legs["profit_loss"]
        self.profit_loss_percentage = legs["profit_loss_percentage"]

    def to_trade(self) -> Trade:
        """Trade with derived fields fresh; to_row() applies the leg rule."""
        trade = Trade(
            symbol=self.symbol.strip().upper(),
            company_name=self.company_name.strip(),
            trade_type=self.trade_type,
            quantity=int(self.quantity),
            trade_date=self.trade_date,
            buy_price=self.buy_price,
            sell_price=self.sell_price,
            buy_time=self.buy_time or None,
            sell_time=self.sell_time or None,
            notes=self.notes,
        )
        return trade.with_derived()

    @classmethod
    def from_trade(cls, trade: Trade) -> "TradeDraft":
        draft = cls(
            symbol=trade.symbol,
            company_name=trade.company_name,
            trade_type=trade.trade_type,
            quantity=trade.quantity,
            buy_price=trade.buy_price or 0.0,
            sell_price=trade.sell_price or 0.0,
            trade_date=trade.trade_date,
            buy_time=trade.buy_time or "",
            sell_time=trade.sell_time or "",
            notes=trade.notes,
        )
        draft.recompute()
        return draft


Draft = Union[BetDraft, TradeDraft]


def _apply(draft: Draft, changes: dict) -> None:
    known = {f.name for f in fields(draft)}
    for name, value in changes.items():
        if name not in known:
            raise AttributeError(f"{type(draft).__name__} has no field {name!r}")
        setattr(draft, name, value)


def new_bet_draft(today: Optional[date] = None) -> BetDraft:
    return BetDraft(bet_date=today_iso(today))


def new_trade_draft(now: Optional[datetime] = None) -> TradeDraft:
    now = now or datetime.now()
    return TradeDraft(
        trade_date=now.date().isoformat(),
        buy_time=current_time_hhmm(now),
        sell_time=current_time_hhmm(now),
    )


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------
@dataclass
class SubmitOutcome:
    ok: bool
    message: str
    draft: Draft
    record_id: Optional[int] = None


def submit_bet(
    gateway: SupabaseGateway,
    draft: BetDraft,
    today: Optional[date] = None,
) -> SubmitOutcome:
    """Insert the draft as a new bet."""
    try:
        stored = gateway.insert(BET, draft.to_bet().to_row())
    except GatewayError as exc:
        logger.error("Error adding bet: %s", exc)
        return SubmitOutcome(ok=False, message=BET_ADD_ERROR, draft=draft)
    return SubmitOutcome(
        ok=True,
        message=BET_ADDED,
        draft=new_bet_draft(today),
        record_id=stored.get("id"),
    )


def submit_trade(
    gateway: SupabaseGateway,
    draft: TradeDraft,
    now: Optional[datetime] = None,
) -> SubmitOutcome:
    """Insert the draft as a new trade, only the relevant legs included."""
    try:
        stored = gateway.insert(TRADE, draft.to_trade().to_row())
    except GatewayError as exc:
        logger.error("Error adding trade: %s", exc)
        return SubmitOutcome(ok=False, message=TRADE_ADD_ERROR, draft=draft)
    return SubmitOutcome(
        ok=True,
        message=TRADE_ADDED,
        draft=new_trade_draft(now),
        record_id=stored.get("id"),
    )
