"""
pages/02_day_trading.py — Day Trading section

Three tabs:
1. Log Trade — day trade / buy only / sell only, live totals + P&L preview
2. Analytics — round-trip stats, yearly % extrapolation, $1500 projection,
               cumulative ROI vs pro-rated 5% target, open legs
3. History   — newest-first table: type filter, symbol/company search,
               multi-select bulk delete, edit, delete

Totals: buy_total = quantity × buy_price, sell_total = quantity × sell_price
Round trip profit = sell_total − buy_total (day_trade rows only)
"""

import math
import sys
from datetime import date, datetime, time
from pathlib import Path

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

ROOT = Path(__file__).parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

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
)
from core.loaders import Failed, load_trade_analytics
from core.record_editor import TradeDraft, new_trade_draft, submit_trade
from core.records import (
    BUY_ONLY,
    DAY_TRADE,
    SELL_ONLY,
    TRADE,
    TRADE_TYPE_LABELS,
    TRADE_TYPES,
    Trade,
)
from core.supabase_gateway import get_gateway
from core.trade_analytics import (
    ANNUAL_TARGET_PCT,
    PROJECTION_CAPITAL,
    TRADING_DAYS_PER_YEAR,
    TradeAnalytics,
)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
GREEN = "#22c55e"
RED = "#ef4444"
AMBER = "#f59e0b"
BLUE = "#3b82f6"
GRAY = "#6b7280"

TYPE_COLORS = {
    DAY_TRADE: AMBER,
    BUY_ONLY:  BLUE,
    SELL_ONLY: "#a855f7",
}
FILTER_LABELS = {"all": "All Trades", **TRADE_TYPE_LABELS}
BULK_LABELS = {"none": "Bulk Action", "delete": "Delete"}

PLOTLY_BASE = dict(
    paper_bgcolor="#0e1117",
    plot_bgcolor="#13161d",
    font=dict(color="#d1d5db", size=11, family="monospace"),
    margin=dict(l=45, r=20, t=35, b=40),
    xaxis=dict(gridcolor="#2d3139", linecolor="#2d3139"),
    yaxis=dict(gridcolor="#2d3139", linecolor="#2d3139"),
    hoverlabel=dict(bgcolor="#1a1d23", bordercolor="#2d3139", font_color="#f3f4f6"),
)

INPUT_PREFIX = "trade_in_"


# ---------------------------------------------------------------------------
# Small UI helpers
# ---------------------------------------------------------------------------
def _money(value: float, signed: bool = False) -> str:
    if math.isinf(value):
        return "∞"
    if signed:
        return f"+${value:,.2f}" if value > 0 else (f"-${abs(value):,.2f}" if value < 0 else "$0.00")
    return f"${value:,.2f}"


def _pct(value: float) -> str:
    return "∞" if math.isinf(value) else f"{value:+.2f}%"


def _pnl_color(value: float) -> str:
    return GREEN if value > 0 else (RED if value < 0 else GRAY)


def _parse_hhmm(value: str, fallback: time) -> time:
    try:
        return datetime.strptime(value, "%H:%M").time()
    except (TypeError, ValueError):
        return fallback


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


def _trade_widgets(draft: TradeDraft, key: str) -> dict:
    """Shared field widgets for the log form and the inline editor."""
    c1, c2, c3 = st.columns([1, 2, 2])
    with c1:
        symbol = st.text_input("Symbol", value=draft.symbol, placeholder="AAPL", key=f"{key}symbol")
    with c2:
        company = st.text_input("Company", value=draft.company_name,
                                placeholder="Apple Inc.", key=f"{key}company")
    with c3:
        trade_type = st.radio(
            "Trade Type", list(TRADE_TYPES),
            index=list(TRADE_TYPES).index(draft.trade_type) if draft.trade_type in TRADE_TYPES else 0,
            format_func=lambda x: TRADE_TYPE_LABELS[x],
            horizontal=True, key=f"{key}type",
        )

    c4, c5, c6 = st.columns(3)
    with c4:
        quantity = st.number_input("Quantity", value=int(draft.quantity), min_value=0,
                                   step=1, key=f"{key}qty")
    with c5:
        trade_day = st.date_input(
            "Trade Date",
            value=date.fromisoformat(draft.trade_date) if draft.trade_date else date.today(),
            key=f"{key}date",
        )
    now = datetime.now().time().replace(second=0, microsecond=0)

    buy_price, sell_price = draft.buy_price, draft.sell_price
    buy_time, sell_time = draft.buy_time, draft.sell_time

    if trade_type in (DAY_TRADE, BUY_ONLY):
        b1, b2 = st.columns(2)
        with b1:
            buy_price = st.number_input("Buy Price ($)", value=float(draft.buy_price or 0.0),
                                        min_value=0.0, step=0.01, format="%.2f", key=f"{key}buy_price")
        with b2:
            buy_time = st.time_input("Buy Time", value=_parse_hhmm(draft.buy_time, now),
                                     key=f"{key}buy_time").strftime("%H:%M")
    if trade_type in (DAY_TRADE, SELL_ONLY):
        s1, s2 = st.columns(2)
        with s1:
            sell_price = st.number_input("Sell Price ($)", value=float(draft.sell_price or 0.0),
                                         min_value=0.0, step=0.01, format="%.2f", key=f"{key}sell_price")
        with s2:
            sell_time = st.time_input("Sell Time", value=_parse_hhmm(draft.sell_time, now),
                                      key=f"{key}sell_time").strftime("%H:%M")
    with c6:
        notes = st.text_input("Notes", value=draft.notes, placeholder="Optional", key=f"{key}notes")

    return dict(
        symbol=symbol,
        company_name=company,
        trade_type=trade_type,
        quantity=quantity,
        trade_date=trade_day.isoformat(),
        buy_price=buy_price,
        sell_price=sell_price,
        buy_time=buy_time,
        sell_time=sell_time,
        notes=notes,
    )


def _totals_cards(draft: TradeDraft) -> list[str]:
    cards = []
    if draft.trade_type in (DAY_TRADE, BUY_ONLY):
        cards.append(_stat_card("BUY TOTAL", _money(draft.buy_total)))
    if draft.trade_type in (DAY_TRADE, SELL_ONLY):
        cards.append(_stat_card("SELL TOTAL", _money(draft.sell_total)))
    if draft.trade_type == DAY_TRADE:
        cards.append(_stat_card("PROFIT / LOSS", _money(draft.profit_loss, signed=True),
                                _pnl_color(draft.profit_loss)))
        cards.append(_stat_card("RETURN", f"{draft.profit_loss_percentage:+.2f}%",
                                _pnl_color(draft.profit_loss_percentage)))
    return cards


# ---------------------------------------------------------------------------
# Tab 1 — Log Trade
# ---------------------------------------------------------------------------
def _submit_trade_callback() -> None:
    if st.session_state.get("trade_submitting"):
        return
    draft = st.session_state["trade_draft"]

    if not draft.symbol.strip():
        st.session_state["trade_form_msg"] = ("error", "Symbol is required.")
        return
    if draft.quantity <= 0:
        st.session_state["trade_form_msg"] = ("error", "Quantity must be at least 1.")
        return
    needs_buy = draft.trade_type in (DAY_TRADE, BUY_ONLY)
    needs_sell = draft.trade_type in (DAY_TRADE, SELL_ONLY)
    if (needs_buy and not draft.buy_price) or (needs_sell and not draft.sell_price):
        st.session_state["trade_form_msg"] = ("error", "Enter a price for every leg of the trade.")
        return

    st.session_state["trade_submitting"] = True
    try:
        outcome = submit_trade(get_gateway(), draft)
    finally:
        st.session_state["trade_submitting"] = False

    st.session_state["trade_draft"] = outcome.draft
    if outcome.ok:
        st.session_state["trade_form_msg"] = ("success", outcome.message)
        for key in [k for k in st.session_state.keys() if k.startswith(INPUT_PREFIX)]:
            del st.session_state[key]
        history = st.session_state.get("trade_history")
        if history is not None:
            history.loaded = False
    else:
        st.session_state["trade_form_msg"] = ("error", outcome.message)


def _render_input_tab() -> None:
    draft = st.session_state.setdefault("trade_draft", new_trade_draft())

    st.subheader("Log a Trade")
    draft.update(**_trade_widgets(draft, INPUT_PREFIX))

    _panel(f"PREVIEW · {TRADE_TYPE_LABELS[draft.trade_type].upper()}", _totals_cards(draft), columns=4)

    st.button(
        "Add Trade",
        type="primary",
        use_container_width=True,
        on_click=_submit_trade_callback,
        disabled=st.session_state.get("trade_submitting", False),
        key="trade_submit_btn",
    )

    msg = st.session_state.pop("trade_form_msg", None)
    if msg:
        level, text = msg
        (st.success if level == "success" else st.error)(text)


# ---------------------------------------------------------------------------
# Tab 2 — Analytics
# ---------------------------------------------------------------------------
def _build_roi_chart(summary: TradeAnalytics) -> go.Figure:
    """Cumulative ROI on deployed capital vs pro-rated 5% annual target."""
    xs = list(range(1, len(summary.cumulative_roi) + 1))
    final = summary.cumulative_roi[-1]
    line_color = GREEN if final >= 0 else RED
    labels = [f"{t.symbol} · {t.trade_date}" for t in summary.round_trips]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=xs, y=summary.target_roi,
        mode="lines",
        name=f"{ANNUAL_TARGET_PCT:.0f}% Annual Target",
        line=dict(color=AMBER, width=2, dash="dash"),
        hoverinfo="skip",
    ))
    fig.add_trace(go.Scatter(
        x=xs, y=summary.cumulative_roi,
        mode="lines+markers",
        name="Cumulative ROI",
        line=dict(color=line_color, width=2),
        marker=dict(size=5, color=line_color),
        customdata=labels,
        hovertemplate="Trade #%{x} · %{customdata}<br>ROI: %{y:+.2f}%<extra></extra>",
    ))
    fig.add_hline(y=0, line_color="#2d3139", line_width=1)

    all_vals = summary.cumulative_roi + summary.target_roi
    y_max = max(all_vals + [ANNUAL_TARGET_PCT])
    y_min = min(all_vals + [-1.0])

    layout = dict(PLOTLY_BASE)
    layout["title"] = dict(text="Cumulative ROI vs Target", font=dict(size=12, color="#9ca3af"), x=0)
    layout["height"] = 280
    layout["xaxis"] = dict(**PLOTLY_BASE["xaxis"], title="Round trip #", dtick=max(1, len(xs) // 10))
    layout["yaxis"] = dict(**PLOTLY_BASE["yaxis"], ticksuffix="%", range=[y_min * 1.1, y_max * 1.1])
    layout["legend"] = dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1)
    fig.update_layout(**layout)
    return fig


def _render_analytics_tab() -> None:
    with st.spinner("Loading trade analytics..."):
        result = load_trade_analytics(get_gateway())

    if isinstance(result, Failed):
        st.error(result.reason)
        if st.button("↺  Retry", key="trade_analytics_retry"):
            st.rerun()
        return

    summary = result.data
    if summary is None:
        _no_data_card("No trades yet.<br>Log a trade in the first tab to start tracking.")
        return

    _section_header(
        "Performance",
        f"{summary.total_trades} round trips · "
        f"{summary.open_buy_count} open buys · {summary.open_sell_count} open sells",
    )

    k1, k2, k3, k4, k5 = st.columns(5)
    with k1:
        st.metric("Net Profit", _money(summary.net_profit, signed=True))
    with k2:
        st.metric("ROI on Capital", f"{summary.capital_roi_pct:+.2f}%")
    with k3:
        st.metric("Win Rate", f"{summary.win_rate:.1f}%" if summary.total_trades else "—")
    with k4:
        st.metric("Yearly % Return", _pct(summary.annualized_return_pct),
                  help=f"Average trade % compounded over {TRADING_DAYS_PER_YEAR} trading days")
    with k5:
        st.metric("Avg Trade", f"{summary.average_trade_pct:+.2f}%")

    st.markdown("---")

    _section_header("ROI Over Time", "Round trips in order logged · dashed line = pro-rated 5% annual target")
    if not summary.cumulative_roi:
        _no_data_card("No completed day trades yet.<br>Log a day trade with both legs to see ROI.")
    else:
        st.plotly_chart(_build_roi_chart(summary), use_container_width=True,
                        config={"displayModeBar": False})

    st.markdown("---")

    left, right = st.columns(2, gap="large")
    with left:
        _panel("ROUND TRIPS", [
            _stat_card("CAPITAL DEPLOYED", _money(summary.total_buy_value)),
            _stat_card("TOTAL SOLD", _money(summary.total_sell_value)),
            _stat_card("AVG PROFIT", _money(summary.average_profit, signed=True),
                       _pnl_color(summary.average_profit)),
            _stat_card("BEST TRADE", _money(summary.best_trade, signed=True), _pnl_color(summary.best_trade)),
            _stat_card("WORST TRADE", _money(summary.worst_trade, signed=True), _pnl_color(summary.worst_trade)),
            _stat_card("TRADES", str(summary.total_trades)),
        ])
        _panel("OPEN LEGS", [
            _stat_card("BUY ONLY", f"{summary.open_buy_count} · {_money(summary.open_buy_value)}", BLUE),
            _stat_card("SELL ONLY", f"{summary.open_sell_count} · {_money(summary.open_sell_value)}",
                       TYPE_COLORS[SELL_ONLY]),
        ], columns=2)
    with right:
        _panel("PROJECTION", [
            _stat_card(
                f"PROFIT ON {_money(PROJECTION_CAPITAL)}",
                _money(summary.projected_capital_profit, signed=True),
                _pnl_color(summary.projected_capital_profit),
                note=f"{TRADING_DAYS_PER_YEAR} trading days, compounding",
            ),
            _stat_card("YEARLY % RETURN", _pct(summary.annualized_return_pct),
                       _pnl_color(summary.annualized_return_pct)),
        ], columns=2)

        if summary.round_trips:
            rows = [{
                "Date": t.trade_date,
                "Symbol": t.symbol,
                "Bought": t.buy_value,
                "Sold": t.sell_value,
                "P&L": t.profit,
                "Return %": t.percentage,
            } for t in reversed(summary.round_trips)]
            st.dataframe(
                pd.DataFrame(rows),
                use_container_width=True,
                hide_index=True,
                column_config={
                    "Bought":   st.column_config.NumberColumn("Bought", format="$%.2f"),
                    "Sold":     st.column_config.NumberColumn("Sold", format="$%.2f"),
                    "P&L":      st.column_config.NumberColumn("P&L", format="$%.2f"),
                    "Return %": st.column_config.NumberColumn("Return %", format="%.2f%%"),
                },
            )


# ---------------------------------------------------------------------------
# Tab 3 — History
# ---------------------------------------------------------------------------
def _history_state() -> HistoryState:
    return st.session_state.setdefault("trade_history", HistoryState(kind=TRADE))


def _flash(text: str, level: str = "success") -> None:
    st.session_state["trade_hist_flash"] = (level, text)


def _sync_checkboxes(state: HistoryState) -> None:
    for record in state.records:
        st.session_state[f"trade_sel_{record.id}"] = record.id in state.selected


def _on_toggle(record_id: int) -> None:
    _history_state().toggle(record_id)


def _on_toggle_all() -> None:
    state = _history_state()
    state.toggle_all()
    _sync_checkboxes(state)


def _on_bulk_apply() -> None:
    state = _history_state()
    state.bulk_action = st.session_state.get("trade_hist_bulk", NO_ACTION)
    if state.bulk_action == DELETE and not st.session_state.get("trade_hist_bulk_confirm"):
        _flash("Tick 'Confirm delete' to delete the selected trades.", "error")
        return
    n = len(state.selected)
    if apply_bulk_action(get_gateway(), state):
        st.session_state["trade_hist_bulk"] = NO_ACTION
        st.session_state["trade_hist_bulk_confirm"] = False
        _sync_checkboxes(state)
        _flash(f"Deleted {n} trade(s).")


def _on_start_edit(trade: Trade) -> None:
    start_edit(_history_state(), trade)


def _on_cancel_edit() -> None:
    cancel_edit(_history_state())


def _on_save_edit() -> None:
    if save_edit(get_gateway(), _history_state()):
        _flash("Trade updated.")


def _on_delete(record_id: int) -> None:
    st.session_state.pop("trade_confirm_delete", None)
    if delete_record(get_gateway(), _history_state(), record_id):
        _flash("Trade deleted.")


def _trade_card(trade: Trade) -> str:
    color = TYPE_COLORS.get(trade.trade_type, GRAY)
    label = TRADE_TYPE_LABELS.get(trade.trade_type, trade.trade_type).upper()

    cards = [_stat_card("QTY", str(trade.quantity))]
    if trade.trade_type in (DAY_TRADE, BUY_ONLY):
        cards.append(_stat_card(
            "BUY", f"{_money(trade.buy_price or 0.0)} · {_money(trade.buy_total or 0.0)}",
            note=trade.buy_time or "",
        ))
    if trade.trade_type in (DAY_TRADE, SELL_ONLY):
        cards.append(_stat_card(
            "SELL", f"{_money(trade.sell_price or 0.0)} · {_money(trade.sell_total or 0.0)}",
            note=trade.sell_time or "",
        ))

    pnl_html = ""
    if trade.trade_type == DAY_TRADE:
        pnl = trade.profit_loss or 0.0
        pnl_html = f"""
            <div style="font-size:0.95rem; font-weight:800; color:{_pnl_color(pnl)};">
                {_money(pnl, signed=True)}
            </div>
            <div style="font-size:0.7rem; color:{_pnl_color(pnl)};">
                {(trade.profit_loss_percentage or 0.0):+.2f}%
            </div>
        """

    notes_html = (
        f'<div style="font-size:0.7rem; color:#9ca3af; margin-top:6px;">{trade.notes}</div>'
        if trade.notes else ""
    )

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
                <span style="font-size:0.6rem; color:{color}; letter-spacing:0.1em; font-weight:600;">
                    {label} · {trade.trade_date}
                </span>
                <div style="font-size:0.95rem; font-weight:700; color:#e5e7eb; margin-top:2px;">
                    {trade.symbol}
                    <span style="font-size:0.75rem; color:{GRAY}; font-weight:400;">{trade.company_name}</span>
                </div>
            </div>
            <div style="text-align:right;">{pnl_html}</div>
        </div>
        <div style="display:grid; grid-template-columns:repeat({len(cards)}, 1fr); gap:6px; margin-top:8px;">
            {''.join(cards)}
        </div>
        {notes_html}
    </div>
    """


def _render_edit_form(state: HistoryState, trade: Trade) -> None:
    draft = state.edit_draft
    key = f"trade_edit_{trade.id}_"
    draft.update(**_trade_widgets(draft, key))
    _panel("UPDATED TOTALS", _totals_cards(draft), columns=4)

    b1, b2, _ = st.columns([1, 1, 4])
    with b1:
        st.button("Save", key=f"{key}save", type="primary", on_click=_on_save_edit,
                  disabled=state.busy)
    with b2:
        st.button("Cancel", key=f"{key}cancel", on_click=_on_cancel_edit)


def _render_trade_row(state: HistoryState, trade: Trade) -> None:
    sel_col, card_col, action_col = st.columns([0.4, 6, 1.5])
    with sel_col:
        st.session_state.setdefault(f"trade_sel_{trade.id}", trade.id in state.selected)
        st.checkbox(
            "select", key=f"trade_sel_{trade.id}",
            label_visibility="collapsed", on_change=_on_toggle, args=(trade.id,),
        )
    with card_col:
        st.html(_trade_card(trade))
    with action_col:
        st.button("Edit", key=f"trade_edit_btn_{trade.id}", on_click=_on_start_edit,
                  args=(trade,), use_container_width=True)
        if st.button("Delete", key=f"trade_del_btn_{trade.id}", use_container_width=True):
            st.session_state["trade_confirm_delete"] = trade.id

        if st.session_state.get("trade_confirm_delete") == trade.id:
            st.warning("Delete this trade?")
            c1, c2 = st.columns(2)
            with c1:
                st.button("Yes", key=f"trade_del_yes_{trade.id}", type="primary",
                          on_click=_on_delete, args=(trade.id,), use_container_width=True)
            with c2:
                if st.button("No", key=f"trade_del_no_{trade.id}", use_container_width=True):
                    st.session_state.pop("trade_confirm_delete", None)
                    st.rerun()

    if state.editing_id == trade.id and state.edit_draft is not None:
        with st.container(border=True):
            _render_edit_form(state, trade)


def _render_history_tab() -> None:
    state = _history_state()
    gateway = get_gateway()

    head_col, refresh_col = st.columns([6, 1])
    with head_col:
        st.subheader("Trade History")
    with refresh_col:
        if st.button("↺  Refresh", key="trade_hist_refresh", use_container_width=True):
            state.loaded = False

    if not state.loaded and not state.error:
        with st.spinner("Loading trade history..."):
            refresh(gateway, state)

    if state.error:
        st.error(state.error)
        if st.button("↺  Retry", key="trade_hist_retry"):
            state.error = ""
            state.loaded = False
            st.rerun()
        if not state.loaded:
            return

    flash = st.session_state.pop("trade_hist_flash", None)
    if flash:
        level, text = flash
        (st.success if level == "success" else st.error)(text)

    f1, f2, f3 = st.columns([3, 2, 1])
    with f1:
        state.search_term = st.text_input(
            "Search", placeholder="Search symbol or company...", key="trade_hist_search",
            label_visibility="collapsed",
        )
    with f2:
        state.status_filter = st.selectbox(
            "Filter", STATUS_FILTERS[TRADE], format_func=lambda x: FILTER_LABELS[x],
            key="trade_hist_filter", label_visibility="collapsed",
        )
    with f3:
        st.button("Select all", key="trade_hist_select_all", on_click=_on_toggle_all,
                  use_container_width=True)

    if state.selected:
        b1, b2, b3 = st.columns([2, 1, 1])
        with b1:
            st.selectbox(
                "Bulk action", BULK_ACTIONS[TRADE], format_func=lambda x: BULK_LABELS[x],
                key="trade_hist_bulk", label_visibility="collapsed",
            )
        with b2:
            if st.session_state.get("trade_hist_bulk") == DELETE:
                st.checkbox("Confirm delete", key="trade_hist_bulk_confirm")
        with b3:
            st.button(
                f"Apply ({len(state.selected)})", key="trade_hist_bulk_apply", type="primary",
                on_click=_on_bulk_apply, use_container_width=True,
                disabled=state.busy or st.session_state.get("trade_hist_bulk", NO_ACTION) == NO_ACTION,
            )

    visible = state.visible()
    if not visible:
        msg = "No trades found." if not state.records else "No trades match the current filters."
        _no_data_card(msg)
        return

    for trade in visible:
        _render_trade_row(state, trade)

    totals = summarize(visible, TRADE)
    st.html(
        f"""
        <div style="
            background:#1a1d23; border:1px solid #2d3139;
            border-radius:6px; padding:10px 16px; margin-top:6px;
            display:flex; gap:24px; font-size:0.8rem;
        ">
            <span style="color:{GRAY};">
                Showing <strong style="color:#e5e7eb;">{totals['shown']}</strong> of {len(state.records)} trades
            </span>
            <span style="color:{GRAY};">
                Capital: <strong style="color:#e5e7eb;">{_money(totals['capital'])}</strong>
            </span>
            <span style="color:{GRAY};">
                Net P&amp;L: <strong style="color:{_pnl_color(totals['net_pnl'])};">{_money(totals['net_pnl'], signed=True)}</strong>
            </span>
        </div>
        """
    )

    with st.expander("Table view"):
        rows = [{
            "#": t.id,
            "Date": t.trade_date,
            "Symbol": t.symbol,
            "Company": t.company_name,
            "Type": TRADE_TYPE_LABELS.get(t.trade_type, t.trade_type),
            "Qty": t.quantity,
            "Buy": t.buy_total,
            "Sell": t.sell_total,
            "P&L": t.profit_loss,
        } for t in visible]
        st.dataframe(
            pd.DataFrame(rows),
            use_container_width=True,
            hide_index=True,
            column_config={
                "#":    st.column_config.NumberColumn("#", width=45),
                "Buy":  st.column_config.NumberColumn("Buy", format="$%.2f"),
                "Sell": st.column_config.NumberColumn("Sell", format="$%.2f"),
                "P&L":  st.column_config.NumberColumn("P&L", format="$%.2f"),
            },
        )


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------
st.title("📈 Day Trading")

input_tab, analytics_tab, history_tab = st.tabs(["➕ Log Trade", "📊 Analytics", "📋 History"])

with input_tab:
    _render_input_tab()

with analytics_tab:
    _render_analytics_tab()

with history_tab:
    _render_history_tab()
