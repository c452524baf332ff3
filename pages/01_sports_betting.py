"""
pages/01_sports_betting.py — Sports Betting section

Three tabs:
1. Log Bet   — draft form with live payout preview, single insert on submit
2. Analytics — bankroll growth, CAGR, win rate, cumulative growth chart,
               goal projection (Monte Carlo, 5% of bankroll per bet)
3. History   — full table newest-first: filter, search, multi-select,
               bulk result/delete, inline result change, edit, delete

Payout: potential_payout = stake × odds (decimal multiplier)
Profit: won → payout − stake, lost → −stake, pending → 0

Design:
- Dark terminal aesthetic consistent with app.py
- st.html() cards for individual bets
- Every tab fetches on its own — no shared cache
"""

import sys
from datetime import date
from pathlib import Path

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

ROOT = Path(__file__).parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.bet_analytics import (
    GOAL_ALREADY_MET,
    GOAL_BUSTED,
    GOAL_NEGATIVE_EV,
    GOAL_NO_BANKROLL,
    GOAL_REACHED,
    MIN_DAYS_FOR_ANNUALIZED,
    TARGET_GROWTH_PCT,
    BetAnalytics,
)
from core.history_browser import (
    BULK_ACTIONS,
    DELETE,
    NO_ACTION,
    STATUS_FILTERS,
    HistoryState,
    apply_bulk_action,
    cancel_edit,
    delete_record,
    refresh,
    save_edit,
    start_edit,
    summarize,
    update_result,
)
from core.loaders import Failed, load_bet_analytics
from core.record_editor import new_bet_draft, submit_bet
from core.records import BET, BET_RESULTS, SPORTSBOOKS, Bet
from core.supabase_gateway import get_gateway

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
GREEN = "#22c55e"
RED = "#ef4444"
AMBER = "#f59e0b"
GRAY = "#6b7280"

RESULT_COLORS = {
    "won":     GREEN,
    "lost":    RED,
    "pending": AMBER,
}
RESULT_LABELS = {
    "won":     "WON ✓",
    "lost":    "LOST ✗",
    "pending": "PENDING",
}
FILTER_LABELS = {"all": "All Bets", "pending": "Pending", "won": "Won", "lost": "Lost"}
BULK_LABELS = {
    "none":    "Bulk Action",
    "won":     "Mark as Won",
    "lost":    "Mark as Lost",
    "pending": "Mark as Pending",
    "delete":  "Delete",
}

PLOTLY_BASE = dict(
    paper_bgcolor="#0e1117",
    plot_bgcolor="#13161d",
    font=dict(color="#d1d5db", size=11, family="monospace"),
    margin=dict(l=45, r=20, t=35, b=40),
    xaxis=dict(gridcolor="#2d3139", linecolor="#2d3139"),
    yaxis=dict(gridcolor="#2d3139", linecolor="#2d3139"),
    hoverlabel=dict(bgcolor="#1a1d23", bordercolor="#2d3139", font_color="#f3f4f6"),
)

INPUT_PREFIX = "bet_in_"


# ---------------------------------------------------------------------------
# Small UI helpers
# ---------------------------------------------------------------------------
def _money(value: float, signed: bool = False) -> str:
    if signed:
        return f"+${value:,.2f}" if value > 0 else (f"-${abs(value):,.2f}" if value < 0 else "$0.00")
    return f"${value:,.2f}"


def _pnl_color(value: float) -> str:
    return GREEN if value > 0 else (RED if value < 0 else GRAY)


def _section_header(title: str, subtitle: str = "") -> None:
    sub = f'<div style="font-size:0.7rem; color:{GRAY}; margin-top:2px;">{subtitle}</div>' if subtitle else ""
    st.html(f"""
    <div style="margin:6px 0 10px 0;">
        <div style="font-size:0.8rem; font-weight:700; color:{AMBER};
                    letter-spacing:0.1em; text-transform:uppercase;">{title}</div>
        {sub}
    </div>
    """)


def _no_data_card(msg: str) -> None:
    st.html(f"""
    <div style="
        background:#1a1d23; border:1px solid #2d3139; border-radius:6px;
        padding:24px 20px; text-align:center; color:{GRAY}; font-size:0.82rem;
    ">
        <div style="font-size:1.3rem; margin-bottom:8px;">—</div>
        {msg}
    </div>
    """)


def _error_with_retry(msg: str, key: str) -> None:
    st.error(msg)
    if st.button("↺  Retry", key=key, type="secondary"):
        st.rerun()


def _stat_card(label: str, value: str, color: str = "#e5e7eb", note: str = "") -> str:
    note_html = f'<div style="font-size:0.6rem; color:{GRAY}; margin-top:2px;">{note}</div>' if note else ""
    return f"""
    <div style="background:#0e1117; border-radius:4px; padding:6px 10px;">
        <div style="font-size:0.55rem; color:{GRAY}; letter-spacing:0.08em;">{label}</div>
        <div style="font-size:0.95rem; font-weight:700; color:{color};">{value}</div>
        {note_html}
    </div>
    """


def _panel(title: str, cards: list[str], columns: int = 3) -> None:
    st.html(f"""
    <div style="
        background:#1a1d23; border:1px solid #2d3139; border-radius:8px;
        padding:12px 16px; margin-bottom:10px;
    ">
        <div style="font-size:0.65rem; font-weight:700; color:#9ca3af;
                    letter-spacing:0.1em; margin-bottom:8px;">{title}</div>
        <div style="display:grid; grid-template-columns:repeat({columns}, 1fr); gap:6px;">
            {''.join(cards)}
        </div>
    </div>
    """)


# ---------------------------------------------------------------------------
# Tab 1 — Log Bet
# ---------------------------------------------------------------------------
def _submit_bet_callback() -> None:
    """on_click handler: guarded by bet_submitting so a double click cannot insert twice."""
    if st.session_state.get("bet_submitting"):
        return
    draft = st.session_state["bet_draft"]

    if not draft.team_or_player.strip():
        st.session_state["bet_form_msg"] = ("error", "Pick description is required.")
        return
    if not draft.sportsbook:
        st.session_state["bet_form_msg"] = ("error", "Select a sportsbook.")
        return
    if draft.stake <= 0 or draft.odds < 1:
        st.session_state["bet_form_msg"] = ("error", "Stake must be > 0 and odds >= 1.00.")
        return

    st.session_state["bet_submitting"] = True
    try:
        outcome = submit_bet(get_gateway(), draft)
    finally:
        st.session_state["bet_submitting"] = False

    st.session_state["bet_draft"] = outcome.draft
    if outcome.ok:
        st.session_state["bet_form_msg"] = ("success", outcome.message)
        for key in [k for k in st.session_state.keys() if k.startswith(INPUT_PREFIX)]:
            del st.session_state[key]
        history = st.session_state.get("bet_history")
        if history is not None:
            history.loaded = False
    else:
        st.session_state["bet_form_msg"] = ("error", outcome.message)


def _render_input_tab() -> None:
    draft = st.session_state.setdefault("bet_draft", new_bet_draft())

    form_col, preview_col = st.columns([3, 2], gap="large")

    with form_col:
        st.subheader("Log a Bet")

        pick = st.text_input(
            "Pick Description",
            value=draft.team_or_player,
            placeholder="e.g., Mahomes 0.5+ TDs + CMC 50+ rush yards",
            key=f"{INPUT_PREFIX}pick",
        )

        c1, c2 = st.columns(2)
        with c1:
            book_options = [""] + SPORTSBOOKS
            sportsbook = st.selectbox(
                "Sportsbook",
                book_options,
                index=book_options.index(draft.sportsbook) if draft.sportsbook in book_options else 0,
                format_func=lambda x: x or "Select Sportsbook",
                key=f"{INPUT_PREFIX}book",
            )
        with c2:
            bet_day = st.date_input(
                "Bet Date",
                value=date.fromisoformat(draft.bet_date),
                key=f"{INPUT_PREFIX}date",
            )

        c3, c4, c5 = st.columns(3)
        with c3:
            stake = st.number_input(
                "Stake ($)", value=float(draft.stake), min_value=0.0, step=1.0,
                format="%.2f", key=f"{INPUT_PREFIX}stake",
            )
        with c4:
            odds = st.number_input(
                "Payout Multiplier", value=float(draft.odds), min_value=0.0, step=0.01,
                format="%.2f", key=f"{INPUT_PREFIX}odds",
                help="Decimal multiplier, e.g. 2.25 pays $112.50 on $50",
            )
        with c5:
            result = st.selectbox(
                "Result",
                list(BET_RESULTS),
                index=list(BET_RESULTS).index(draft.result),
                format_func=lambda x: x.title(),
                key=f"{INPUT_PREFIX}result",
            )

        draft.update(
            team_or_player=pick,
            sportsbook=sportsbook,
            bet_date=bet_day.isoformat(),
            stake=stake,
            odds=odds,
            result=result,
        )

        st.button(
            "Add Bet",
            type="primary",
            use_container_width=True,
            on_click=_submit_bet_callback,
            disabled=st.session_state.get("bet_submitting", False),
            key="bet_submit_btn",
        )

        msg = st.session_state.pop("bet_form_msg", None)
        if msg:
            level, text = msg
            (st.success if level == "success" else st.error)(text)

    with preview_col:
        st.subheader("Preview")
        profit = draft.potential_profit
        _panel("PAYOUT", [
            _stat_card("STAKE", _money(draft.stake)),
            _stat_card("MULTIPLIER", f"{draft.odds:.2f}x"),
            _stat_card("POTENTIAL PAYOUT", _money(draft.potential_payout), AMBER),
            _stat_card("POTENTIAL PROFIT", _money(profit, signed=True), _pnl_color(profit)),
        ], columns=2)


# ---------------------------------------------------------------------------
# Tab 2 — Analytics
# ---------------------------------------------------------------------------
def _build_growth_chart(summary: BetAnalytics) -> go.Figure:
    """Cumulative bankroll growth % vs the flat 5% target."""
    xs = list(range(1, len(summary.cumulative_growth) + 1))
    final = summary.cumulative_growth[-1]
    line_color = GREEN if final >= 0 else RED

    hover_dates = [d.strftime("%b %d, %Y") if d else "—" for d in summary.growth_dates]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=xs, y=summary.target_growth,
        mode="lines",
        name=f"{TARGET_GROWTH_PCT:.0f}% Target",
        line=dict(color=AMBER, width=2, dash="dash"),
        hoverinfo="skip",
    ))
    fig.add_trace(go.Scatter(
        x=xs, y=summary.cumulative_growth,
        mode="lines+markers",
        name="Bankroll Growth",
        line=dict(color=line_color, width=2),
        marker=dict(size=5, color=line_color),
        customdata=hover_dates,
        hovertemplate="Bet #%{x} · %{customdata}<br>Growth: %{y:+.2f}%<extra></extra>",
    ))
    fig.add_hline(y=0, line_color="#2d3139", line_width=1)

    all_vals = summary.cumulative_growth + summary.target_growth
    y_max = max(all_vals + [10.0])
    y_min = min(all_vals + [-10.0])

    layout = dict(PLOTLY_BASE)
    layout["title"] = dict(text="Bankroll Growth vs 5% Target", font=dict(size=12, color="#9ca3af"), x=0)
    layout["height"] = 280
    layout["xaxis"] = dict(**PLOTLY_BASE["xaxis"], title="Completed bet #", dtick=max(1, len(xs) // 10))
    layout["yaxis"] = dict(**PLOTLY_BASE["yaxis"], ticksuffix="%", range=[y_min * 1.1, y_max * 1.1])
    layout["legend"] = dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1)
    fig.update_layout(**layout)
    return fig


def _goal_card(summary: BetAnalytics) -> None:
    goal = summary.goal
    if goal.status == GOAL_REACHED:
        days = f"~{goal.projected_days} days" if goal.projected_days is not None else "pace unknown"
        headline = f"{goal.estimated_bets} bets · {days}"
        color = GREEN
    elif goal.status == GOAL_ALREADY_MET:
        headline, color = "Goal already reached", GREEN
    elif goal.status == GOAL_NEGATIVE_EV:
        headline, color = "Not reachable at current edge", RED
    elif goal.status == GOAL_BUSTED:
        headline, color = "Simulated bankroll busted", RED
    elif goal.status == GOAL_NO_BANKROLL:
        headline, color = "No bankroll left to grow", RED
    else:
        headline, color = "Unknown (>1000 bets)", GRAY

    _panel(f"GOAL · {_money(goal.goal_amount)}", [
        _stat_card("PROJECTION", headline, color, note="5% of bankroll per bet"),
        _stat_card("AVG WAGER", _money(goal.average_wager)),
        _stat_card("AVG MULTIPLIER", f"{goal.average_multiplier:.2f}x"),
        _stat_card("EV / $1 STAKED", f"{goal.expected_value_per_unit:+.3f}",
                   _pnl_color(goal.expected_value_per_unit)),
        _stat_card("SIMULATED FINAL", _money(goal.projected_final_bankroll)),
        _stat_card("BETS SIMULATED", str(goal.bets_simulated)),
    ], columns=3)


def _render_analytics_tab() -> None:
    with st.spinner("Loading bet analytics..."):
        result = load_bet_analytics(get_gateway())

    if isinstance(result, Failed):
        _error_with_retry(result.reason, key="bet_analytics_retry")
        return

    summary = result.data
    if summary is None:
        _no_data_card("No bets yet.<br>Log a bet in the first tab to start tracking your bankroll.")
        return

    _section_header(
        "Bankroll",
        f"{summary.total_bets} total bets · {summary.completed_count} completed · "
        f"{summary.pending_count} pending · {summary.time_in_market_days} days tracked",
    )

    k1, k2, k3, k4, k5 = st.columns(5)
    with k1:
        st.metric("Current Bankroll", _money(summary.current_bankroll),
                  delta=_money(summary.total_profit_loss, signed=True))
    with k2:
        st.metric("Bankroll Growth", f"{summary.bankroll_growth_pct:+.2f}%")
    with k3:
        if summary.annualized_return_pct is None:
            st.metric("Annualized Return", "N/A",
                      help=f"Needs {MIN_DAYS_FOR_ANNUALIZED}+ days of history and a positive bankroll")
        else:
            st.metric("Annualized Return", f"{summary.annualized_return_pct:+.1f}%")
    with k4:
        st.metric("Win Rate", f"{summary.win_rate:.1f}%" if summary.completed_count else "—")
    with k5:
        st.metric("Record", f"{summary.won_count}W – {summary.lost_count}L")

    st.markdown("---")

    _section_header("Growth Over Time", "Completed bets in order placed · dashed line = 5% target")
    if not summary.cumulative_growth:
        _no_data_card("No completed bet data to display.<br>Complete some bets to see your growth.")
    else:
        st.plotly_chart(_build_growth_chart(summary), use_container_width=True,
                        config={"displayModeBar": False})

    st.markdown("---")

    left, right = st.columns(2, gap="large")
    with left:
        _panel("COMPLETED BETS", [
            _stat_card("STARTING BANKROLL", _money(summary.starting_bankroll)),
            _stat_card("TOTAL STAKED", _money(summary.total_staked)),
            _stat_card("TOTAL WON", _money(summary.total_won), GREEN),
            _stat_card("TOTAL LOST", _money(summary.total_lost), RED),
            _stat_card("NET P/L", _money(summary.total_profit_loss, signed=True),
                       _pnl_color(summary.total_profit_loss)),
            _stat_card("ROI ON STAKE", f"{summary.staked_roi_pct:+.1f}%",
                       _pnl_color(summary.staked_roi_pct)),
        ])
    with right:
        _panel("PENDING EXPOSURE", [
            _stat_card("PENDING BETS", str(summary.pending_count), AMBER),
            _stat_card("AT RISK", _money(summary.pending_stake)),
            _stat_card("MAX PAYOUT", _money(summary.max_pending_payout), AMBER),
        ])
        _goal_card(summary)


# ---------------------------------------------------------------------------
# Tab 3 — History
# ---------------------------------------------------------------------------
def _history_state() -> HistoryState:
    return st.session_state.setdefault("bet_history", HistoryState(kind=BET))


def _flash(text: str, level: str = "success") -> None:
    st.session_state["bet_hist_flash"] = (level, text)


def _sync_checkboxes(state: HistoryState) -> None:
    for record in state.records:
        st.session_state[f"bet_sel_{record.id}"] = record.id in state.selected


def _on_toggle(record_id: int) -> None:
    _history_state().toggle(record_id)


def _on_toggle_all() -> None:
    state = _history_state()
    state.toggle_all()
    _sync_checkboxes(state)


def _on_bulk_apply() -> None:
    state = _history_state()
    state.bulk_action = st.session_state.get("bet_hist_bulk", NO_ACTION)
    if state.bulk_action == DELETE and not st.session_state.get("bet_hist_bulk_confirm"):
        _flash("Tick 'Confirm delete' to delete the selected bets.", "error")
        return
    n = len(state.selected)
    if apply_bulk_action(get_gateway(), state):
        st.session_state["bet_hist_bulk"] = NO_ACTION
        st.session_state["bet_hist_bulk_confirm"] = False
        _sync_checkboxes(state)
        _flash(f"Updated {n} bet(s).")


def _on_quick_result(record_id: int) -> None:
    new_result = st.session_state[f"bet_quick_{record_id}"]
    update_result(get_gateway(), _history_state(), record_id, new_result)


def _on_start_edit(bet: Bet) -> None:
    start_edit(_history_state(), bet)


def _on_cancel_edit() -> None:
    cancel_edit(_history_state())


def _on_save_edit() -> None:
    if save_edit(get_gateway(), _history_state()):
        _flash("Bet updated.")


def _on_delete(record_id: int) -> None:
    state = _history_state()
    st.session_state.pop("bet_confirm_delete", None)
    if delete_record(get_gateway(), state, record_id):
        _flash("Bet deleted.")


def _bet_card(bet: Bet) -> str:
    color = RESULT_COLORS.get(bet.result, GRAY)
    label = RESULT_LABELS.get(bet.result, bet.result.upper())
    profit = bet.profit
    profit_str = _money(profit, signed=True) if bet.is_completed else "—"
    created = (bet.created_at or "")[:16].replace("T", " ")

    return f"""
    <div style="
        background: #1a1d23;
        border: 1px solid #2d3139;
        border-left: 4px solid {color};
        border-radius: 8px;
        padding: 10px 14px;
    ">
        <div style="display:flex; justify-content:space-between; align-items:flex-start;">
            <div>
                <span style="font-size:0.6rem; color:{GRAY}; letter-spacing:0.1em; font-weight:600;">
                    {bet.sportsbook.upper()} · {bet.bet_date}
                </span>
                <div style="font-size:0.9rem; font-weight:700; color:#e5e7eb; margin-top:2px;">
                    {bet.team_or_player}
                </div>
            </div>
            <div style="text-align:right;">
                <div style="font-size:0.95rem; font-weight:800; color:{color};">{label}</div>
                <div style="font-size:0.9rem; font-weight:700; color:{_pnl_color(profit)};">{profit_str}</div>
            </div>
        </div>
        <div style="display:grid; grid-template-columns:1fr 1fr 1fr 1fr; gap:6px; margin-top:8px;">
            {_stat_card("STAKE", _money(bet.stake))}
            {_stat_card("MULTIPLIER", f"{bet.odds:.2f}x")}
            {_stat_card("PAYOUT", _money(bet.potential_payout))}
            {_stat_card("LOGGED", created or "—", "#9ca3af")}
        </div>
    </div>
    """


def _render_edit_form(state: HistoryState, bet: Bet) -> None:
    draft = state.edit_draft
    key = f"bet_edit_{bet.id}"
    e1, e2 = st.columns(2)
    with e1:
        pick = st.text_input("Pick Description", value=draft.team_or_player, key=f"{key}_pick")
    with e2:
        book = st.selectbox(
            "Sportsbook", SPORTSBOOKS,
            index=SPORTSBOOKS.index(draft.sportsbook) if draft.sportsbook in SPORTSBOOKS else 0,
            key=f"{key}_book",
        )
    e3, e4, e5, e6 = st.columns(4)
    with e3:
        stake = st.number_input("Stake ($)", value=float(draft.stake), min_value=0.0,
                                step=1.0, format="%.2f", key=f"{key}_stake")
    with e4:
        odds = st.number_input("Multiplier", value=float(draft.odds), min_value=0.0,
                               step=0.01, format="%.2f", key=f"{key}_odds")
    with e5:
        bet_day = st.date_input(
            "Bet Date",
            value=date.fromisoformat(draft.bet_date) if draft.bet_date else date.today(),
            key=f"{key}_date",
        )
    with e6:
        result = st.selectbox("Result", list(BET_RESULTS),
                              index=list(BET_RESULTS).index(draft.result),
                              format_func=lambda x: x.title(), key=f"{key}_result")

    draft.update(team_or_player=pick, sportsbook=book, stake=stake, odds=odds,
                 bet_date=bet_day.isoformat(), result=result)
    st.caption(f"New payout: {_money(draft.potential_payout)}")

    b1, b2, _ = st.columns([1, 1, 4])
    with b1:
        st.button("Save", key=f"{key}_save", type="primary", on_click=_on_save_edit,
                  disabled=state.busy)
    with b2:
        st.button("Cancel", key=f"{key}_cancel", on_click=_on_cancel_edit)


def _render_bet_row(state: HistoryState, bet: Bet) -> None:
    sel_col, card_col, action_col = st.columns([0.4, 6, 2])
    with sel_col:
        st.session_state.setdefault(f"bet_sel_{bet.id}", bet.id in state.selected)
        st.checkbox(
            "select", key=f"bet_sel_{bet.id}",
            label_visibility="collapsed", on_change=_on_toggle, args=(bet.id,),
        )
    with card_col:
        st.html(_bet_card(bet))
    with action_col:
        # mirror the stored result on every run
        st.session_state[f"bet_quick_{bet.id}"] = bet.result if bet.result in BET_RESULTS else BET_RESULTS[0]
        st.selectbox(
            "Result", list(BET_RESULTS),
            format_func=lambda x: x.title(),
            key=f"bet_quick_{bet.id}",
            on_change=_on_quick_result, args=(bet.id,),
            label_visibility="collapsed",
            disabled=state.busy,
        )
        a1, a2 = st.columns(2)
        with a1:
            st.button("Edit", key=f"bet_edit_btn_{bet.id}", on_click=_on_start_edit,
                      args=(bet,), use_container_width=True)
        with a2:
            if st.button("Delete", key=f"bet_del_btn_{bet.id}", use_container_width=True):
                st.session_state["bet_confirm_delete"] = bet.id

        if st.session_state.get("bet_confirm_delete") == bet.id:
            st.warning("Delete this bet?")
            c1, c2 = st.columns(2)
            with c1:
                st.button("Yes", key=f"bet_del_yes_{bet.id}", type="primary",
                          on_click=_on_delete, args=(bet.id,), use_container_width=True)
            with c2:
                if st.button("No", key=f"bet_del_no_{bet.id}", use_container_width=True):
                    st.session_state.pop("bet_confirm_delete", None)
                    st.rerun()

    if state.editing_id == bet.id and state.edit_draft is not None:
        with st.container(border=True):
            _render_edit_form(state, bet)


def _render_history_tab() -> None:
    state = _history_state()
    gateway = get_gateway()

    head_col, refresh_col = st.columns([6, 1])
    with head_col:
        st.subheader("Bet History")
    with refresh_col:
        if st.button("↺  Refresh", key="bet_hist_refresh", use_container_width=True):
            state.loaded = False

    if not state.loaded and not state.error:
        with st.spinner("Loading bet history..."):
            refresh(gateway, state)

    if state.error:
        st.error(state.error)
        if st.button("↺  Retry", key="bet_hist_retry"):
            state.error = ""
            state.loaded = False
            st.rerun()
        if not state.loaded:
            return

    flash = st.session_state.pop("bet_hist_flash", None)
    if flash:
        level, text = flash
        (st.success if level == "success" else st.error)(text)

    f1, f2, f3 = st.columns([3, 2, 1])
    with f1:
        state.search_term = st.text_input(
            "Search", placeholder="Search bets or sportsbooks...", key="bet_hist_search",
            label_visibility="collapsed",
        )
    with f2:
        state.status_filter = st.selectbox(
            "Filter", STATUS_FILTERS[BET], format_func=lambda x: FILTER_LABELS[x],
            key="bet_hist_filter", label_visibility="collapsed",
        )
    with f3:
        st.button("Select all", key="bet_hist_select_all", on_click=_on_toggle_all,
                  use_container_width=True)

    if state.selected:
        b1, b2, b3 = st.columns([2, 1, 1])
        with b1:
            st.selectbox(
                "Bulk action", BULK_ACTIONS[BET], format_func=lambda x: BULK_LABELS[x],
                key="bet_hist_bulk", label_visibility="collapsed",
            )
        with b2:
            if st.session_state.get("bet_hist_bulk") == DELETE:
                st.checkbox("Confirm delete", key="bet_hist_bulk_confirm")
        with b3:
            st.button(
                f"Apply ({len(state.selected)})", key="bet_hist_bulk_apply", type="primary",
                on_click=_on_bulk_apply, use_container_width=True,
                disabled=state.busy or st.session_state.get("bet_hist_bulk", NO_ACTION) == NO_ACTION,
            )

    visible = state.visible()
    if not visible:
        msg = "No bets found." if not state.records else "No bets match the current filters."
        _no_data_card(msg)
        return

    for bet in visible:
        _render_bet_row(state, bet)

    totals = summarize(visible, BET)
    st.html(
        f"""
        <div style="
            background:#1a1d23; border:1px solid #2d3139;
            border-radius:6px; padding:10px 16px; margin-top:6px;
            display:flex; gap:24px; font-size:0.8rem;
        ">
            <span style="color:{GRAY};">
                Showing <strong style="color:#e5e7eb;">{totals['shown']}</strong> of {len(state.records)} bets
            </span>
            <span style="color:{GRAY};">
                Total staked: <strong style="color:#e5e7eb;">{_money(totals['total_staked'])}</strong>
            </span>
            <span style="color:{GRAY};">
                Net P&amp;L: <strong style="color:{_pnl_color(totals['net_pnl'])};">{_money(totals['net_pnl'], signed=True)}</strong>
            </span>
        </div>
        """
    )

    with st.expander("Table view"):
        rows = [{
            "#": b.id,
            "Date": b.bet_date,
            "Pick": b.team_or_player,
            "Book": b.sportsbook,
            "Stake": b.stake,
            "Multiplier": b.odds,
            "Payout": b.potential_payout,
            "Result": RESULT_LABELS.get(b.result, b.result),
            "P&L": b.profit,
        } for b in visible]
        st.dataframe(
            pd.DataFrame(rows),
            use_container_width=True,
            hide_index=True,
            column_config={
                "#":          st.column_config.NumberColumn("#", width=45),
                "Stake":      st.column_config.NumberColumn("Stake", format="$%.2f"),
                "Multiplier": st.column_config.NumberColumn("Multiplier", format="%.2fx"),
                "Payout":     st.column_config.NumberColumn("Payout", format="$%.2f"),
                "P&L":        st.column_config.NumberColumn("P&L", format="$%.2f"),
            },
        )


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------
st.title("🏈 Sports Betting")

input_tab, analytics_tab, history_tab = st.tabs(["➕ Log Bet", "📊 Analytics", "📋 History"])

with input_tab:
    _render_input_tab()

with analytics_tab:
    _render_analytics_tab()

with history_tab:
    _render_history_tab()
