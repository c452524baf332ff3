"""
core/history_browser.py — History view state + mutations
==========================================================
Client-side browsing of one full table (bets or trades).

State per view (HistoryState):
- records loaded newest-first
- status filter ("all" / result / trade type)
- case-insensitive substring search over the text fields of the kind
- multi-select set of ids + pending bulk action
- at most one inline edit draft
- busy flag: one mutating handler at a time
- error string shown with a Retry button

Every mutation is one gateway call followed by a full re-fetch. Failures are
logged and stored as state.error; nothing is raised to the page.

DO NOT add Streamlit calls to this file.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from core.loaders import Failed, load_bets, load_trades
from core.record_editor import BetDraft, TradeDraft
from core.records import BET, BET_RESULTS, TRADE, TRADE_TYPES, Bet, Trade, utc_now_iso
from core.supabase_gateway import GatewayError, SupabaseGateway

logger = logging.getLogger(__name__)

ALL = "all"
NO_ACTION = "none"
DELETE = "delete"

STATUS_FILTERS: dict[str, tuple] = {
    BET:   (ALL,) + BET_RESULTS,
    TRADE: (ALL,) + TRADE_TYPES,
}

BULK_ACTIONS: dict[str, tuple] = {
    BET:   (NO_ACTION, "won", "lost", "pending", DELETE),
    TRADE: (NO_ACTION, DELETE),
}

SEARCH_FIELDS: dict[str, tuple] = {
    BET:   ("team_or_player", "sportsbook"),
    TRADE: ("symbol", "company_name"),
}

_NOUN = {BET: "bet", TRADE: "trade"}

Record = Union[Bet, Trade]


@dataclass
class HistoryState:
    kind: str
    records: list = field(default_factory=list)
    status_filter: str = ALL
    search_term: str = ""
    selected: set = field(default_factory=set)
    bulk_action: str = NO_ACTION
    editing_id: Optional[int] = None
    edit_draft: Optional[Union[BetDraft, TradeDraft]] = None
    busy: bool = False
    error: str = ""
    loaded: bool = False

    def visible(self) -> list:
        return filter_records(self.records, self.kind, self.status_filter, self.search_term)

    def toggle(self, record_id: int) -> None:
        if record_id in self.selected:
            self.selected.discard(record_id)
        else:
            self.selected.add(record_id)

    def toggle_all(self) -> None:
        """Select every visible record, or clear when all are already selected."""
        visible_ids = {r.id for r in self.visible() if r.id is not None}
        if visible_ids and self.selected == visible_ids:
            self.selected = set()
        else:
            self.selected = visible_ids


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------
def _status_of(record: Record) -> str:
    return record.result if isinstance(record, Bet) else record.trade_type


def filter_records(
    records: list,
    kind: str,
    status_filter: str = ALL,
    search_term: str = "",
) -> list:
    """
    Apply the status filter and free-text search.

    >>> filter_records([], "bet", "won", "x")
    []
    """
    filtered = records
    if status_filter and status_filter != ALL:
        filtered = [r for r in filtered if _status_of(r) == status_filter]

    term = (search_term or "").strip().lower()
    if term:
        names = SEARCH_FIELDS[kind]
        filtered = [
            r for r in filtered
            if any(term in (getattr(r, name) or "").lower() for name in names)
        ]
    return filtered


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------
def refresh(gateway: SupabaseGateway, state: HistoryState) -> bool:
    """Re-fetch the full table newest-first. Drops selections that no longer exist."""
    loader = load_bets if state.kind == BET else load_trades
    result = loader(gateway, ascending=False)
    if isinstance(result, Failed):
        state.error = result.reason
        return False

    state.records = result.data
    state.loaded = True
    state.error = ""
    existing = {r.id for r in state.records}
    state.selected &= existing
    return True


def _run(gateway: SupabaseGateway, state: HistoryState, action, error_msg: str) -> bool:
    """Run one mutation under the busy flag, then re-fetch."""
    if state.busy:
        return False
    state.busy = True
    try:
        action()
    except GatewayError as exc:
        logger.error("%s: %s", error_msg, exc)
        state.error = error_msg
        return False
    finally:
        state.busy = False
    return refresh(gateway, state)


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------
def apply_bulk_action(gateway: SupabaseGateway, state: HistoryState) -> bool:
    """
    Apply state.bulk_action to every selected id in one gateway call.

    Returns True when the batch succeeded and the table was re-fetched.
    No-op (False) when there is no action or no selection.
    """
    action = state.bulk_action
    if action == NO_ACTION or not state.selected:
        return False
    if action not in BULK_ACTIONS[state.kind]:
        raise ValueError(f"Unsupported bulk action for {state.kind}: {action}")

    ids = sorted(state.selected)
    noun = _NOUN[state.kind]

    if action == DELETE:
        ok = _run(
            gateway, state,
            lambda: gateway.delete(state.kind, ids),
            f"Failed to delete {noun}s",
        )
    else:
        ok = _run(
            gateway, state,
            lambda: gateway.update(
                state.kind, {"result": action, "updated_at": utc_now_iso()}, ids
            ),
            f"Failed to update {noun}s",
        )

    if ok:
        state.selected = set()
        state.bulk_action = NO_ACTION
    return ok


def update_result(
    gateway: SupabaseGateway,
    state: HistoryState,
    record_id: int,
    result: str,
) -> bool:
    """Inline result change for one bet."""
    if result not in BET_RESULTS:
        raise ValueError(f"Unknown bet result: {result}")
    return _run(
        gateway, state,
        lambda: gateway.update(BET, {"result": result, "updated_at": utc_now_iso()}, [record_id]),
        "Failed to update bet",
    )


def delete_record(gateway: SupabaseGateway, state: HistoryState, record_id: int) -> bool:
    """Delete one record. Confirmation is the page's job."""
    ok = _run(
        gateway, state,
        lambda: gateway.delete(state.kind, [record_id]),
        f"Failed to delete {_NOUN[state.kind]}",
    )
    if ok and state.editing_id == record_id:
        cancel_edit(state)
    return ok


# ---------------------------------------------------------------------------
# Inline edit
# ---------------------------------------------------------------------------
def start_edit(state: HistoryState, record: Record) -> None:
    state.editing_id = record.id
    if isinstance(record, Bet):
        state.edit_draft = BetDraft.from_bet(record)
    else:
        state.edit_draft = TradeDraft.from_trade(record)


def cancel_edit(state: HistoryState) -> None:
    state.editing_id = None
    state.edit_draft = None


def save_edit(gateway: SupabaseGateway, state: HistoryState) -> bool:
    """
    Persist the inline draft with recomputed derived fields and a fresh updated_at.

    Trades are sent with the irrelevant leg nulled, so switching trade_type
    during an edit leaves no stale totals behind.
    """
    if state.editing_id is None or state.edit_draft is None:
        return False

    draft = state.edit_draft
    draft.recompute()
    if isinstance(draft, BetDraft):
        values = draft.to_bet().to_row()
    else:
        values = draft.to_trade().to_row(include_nulls=True)
    values["updated_at"] = utc_now_iso()

    record_id = state.editing_id
    ok = _run(
        gateway, state,
        lambda: gateway.update(state.kind, values, [record_id]),
        f"Failed to update {_NOUN[state.kind]}",
    )
    if ok:
        cancel_edit(state)
    return ok


# ---------------------------------------------------------------------------
# Summary strip
# ---------------------------------------------------------------------------
def summarize(records: list, kind: str) -> dict:
    """
    Totals for the records currently shown.

    Bets:   shown, total_staked (completed only), net_pnl.
    Trades: shown, capital (Σ buy_total), net_pnl (Σ day-trade profit).
    """
    if kind == BET:
        return {
            "shown": len(records),
            "total_staked": sum(r.stake for r in records if r.is_completed),
            "net_pnl": sum(r.profit for r in records),
        }
    return {
        "shown": len(records),
        "capital": sum(r.buy_total or 0.0 for r in records),
        "net_pnl": sum(r.profit_loss or 0.0 for r in records if r.is_round_trip),
    }
