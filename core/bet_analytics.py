"""
core/bet_analytics.py — Bankroll analytics for sports bets
============================================================
Pure aggregation over the full bet table. No UI, no HTTP.

Bankroll model:
  starting bankroll   = 100.00 (fixed)
  net P/L             = Σ potential_payout (won) − Σ stake (lost)
  current bankroll    = starting + net P/L
  growth %            = net P/L / starting × 100

Annualized return (CAGR):
  ((current / starting) ^ (365.25 / days_in_market) − 1) × 100
  Only when days_in_market >= 7 and current > 0, clamped to [−99, 10000].
  Otherwise None ("N/A").

Cumulative growth series (chart):
  Completed bets, oldest first. won adds payout − stake, lost subtracts stake.
  Each step emits cumulative profit / starting × 100, paired with a flat
  5% target series of the same length.

Goal projection (target bankroll 1000.00):
  EV per unit stake = p_win × avg_multiplier − (1 − p_win).
  When EV > 0 and current < goal: Monte Carlo of a 5%-of-bankroll wager
  strategy. Win adds wager × (avg_multiplier − 1), loss subtracts wager.
  Stops at goal, bankroll <= 0, or 1000 bets ("unknown").

Usage:
    import random
    from core.bet_analytics import compute_bet_analytics
    summary = compute_bet_analytics(bets, rng=random.Random(7))
    if summary is None:
        ...  # no data

DO NOT import streamlit or requests here.
"""

import math
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from core.records import LOST, WON, Bet

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
STARTING_BANKROLL: float = 100.00
GOAL_BANKROLL: float = 1000.00
TARGET_GROWTH_PCT: float = 5.0

MIN_DAYS_FOR_ANNUALIZED: int = 7
DAYS_PER_YEAR: float = 365.25
CAGR_FLOOR: float = -99.0
CAGR_CEILING: float = 10000.0

WAGER_FRACTION: float = 0.05
MAX_SIMULATED_BETS: int = 1000

# Goal projection statuses
GOAL_REACHED = "reached"
GOAL_BUSTED = "busted"          # simulated bankroll hit zero
GOAL_UNKNOWN = "unknown"        # simulation cap hit
GOAL_NEGATIVE_EV = "negative_ev"
GOAL_ALREADY_MET = "already_met"
GOAL_NO_BANKROLL = "no_bankroll"


# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------
@dataclass
class GoalProjection:
    status: str
    goal_amount: float = GOAL_BANKROLL
    average_wager: float = 0.0
    average_multiplier: float = 0.0
    expected_value_per_unit: float = 0.0
    estimated_bets: Optional[int] = None     # only when status == reached
    projected_days: Optional[int] = None     # only when status == reached
    projected_final_bankroll: float = 0.0
    bets_simulated: int = 0


@dataclass
class BetAnalytics:
    total_bets: int
    completed_count: int
    pending_count: int
    won_count: int
    lost_count: int

    total_staked: float          # completed bets only
    total_won: float             # Σ payout over won
    total_lost: float            # Σ stake over lost
    pending_stake: float
    max_pending_payout: float

    starting_bankroll: float
    current_bankroll: float
    total_profit_loss: float
    bankroll_growth_pct: float
    staked_roi_pct: float        # net P/L / completed stake × 100

    time_in_market_days: int
    annualized_return_pct: Optional[float]
    win_rate: float              # 0–100

    cumulative_growth: list[float] = field(default_factory=list)
    target_growth: list[float] = field(default_factory=list)
    growth_dates: list[Optional[datetime]] = field(default_factory=list)

    goal: GoalProjection = field(default_factory=lambda: GoalProjection(GOAL_NEGATIVE_EV))


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------
def chronological(bets: list[Bet]) -> list[Bet]:
    """
    Sort by creation timestamp, oldest first.

    Bets without a parseable created_at keep their relative order and sort last.
    """
    far_future = datetime.max.replace(tzinfo=timezone.utc)
    return sorted(bets, key=lambda b: b.created or far_future)


def days_in_market(bets: list[Bet], now: Optional[datetime] = None) -> int:
    """
    Whole days between the earliest created_at and now, minimum 1.

    >>> days_in_market([])
    1
    """
    now = now or datetime.now(timezone.utc)
    stamps = [b.created for b in bets if b.created is not None]
    if not stamps:
        return 1
    elapsed = now - min(stamps)
    return max(1, math.floor(elapsed.total_seconds() / 86400))


def annualized_return(
    current_bankroll: float,
    starting_bankroll: float,
    days: int,
) -> Optional[float]:
    """
    Compound annual growth rate in percent, or None when not applicable.

    Not applicable: fewer than MIN_DAYS_FOR_ANNUALIZED days, or a bankroll
    at or below zero. Clamped to [CAGR_FLOOR, CAGR_CEILING].

    >>> annualized_return(110.0, 100.0, 3) is None
    True
    >>> round(annualized_return(110.0, 100.0, 365), 1)
    10.0
    """
    if days < MIN_DAYS_FOR_ANNUALIZED or current_bankroll <= 0 or starting_bankroll <= 0:
        return None
    exponent = DAYS_PER_YEAR / days
    try:
        cagr = ((current_bankroll / starting_bankroll) ** exponent - 1) * 100
    except OverflowError:
        cagr = CAGR_CEILING
    return max(CAGR_FLOOR, min(CAGR_CEILING, cagr))


def cumulative_growth_series(
    completed: list[Bet],
    starting_bankroll: float = STARTING_BANKROLL,
) -> tuple[list[float], list[float], list[Optional[datetime]]]:
    """
    Cumulative bankroll-growth % per completed bet, oldest first.

    Returns:
        (growth_pct, target_pct, created_timestamps), all the same length.
    """
    running = 0.0
    growth: list[float] = []
    target: list[float] = []
    dates: list[Optional[datetime]] = []

    for bet in chronological(completed):
        if bet.result == WON:
            running += bet.potential_payout - bet.stake
        elif bet.result == LOST:
            running -= bet.stake
        growth.append(running / starting_bankroll * 100)
        target.append(TARGET_GROWTH_PCT)
        dates.append(bet.created)

    return growth, target, dates


def expected_value_per_unit(win_probability: float, average_multiplier: float) -> float:
    """
    EV of one unit staked: p × multiplier − (1 − p).

    >>> round(expected_value_per_unit(0.5, 2.5), 2)
    0.75
    """
    return win_probability * average_multiplier - (1 - win_probability)


def simulate_bets_to_goal(
    bankroll: float,
    goal: float,
    win_probability: float,
    average_multiplier: float,
    rng: Optional[random.Random] = None,
    wager_fraction: float = WAGER_FRACTION,
    max_bets: int = MAX_SIMULATED_BETS,
) -> tuple[str, int, float]:
    """
    Monte Carlo run of a fixed-fraction wager strategy.

    Each step wagers wager_fraction of the simulated bankroll. A win
    (rng.random() < win_probability) adds wager × (multiplier − 1); a loss
    subtracts the wager.

    Args:
        bankroll:           Starting simulated bankroll.
        goal:               Target bankroll.
        win_probability:    0–1.
        average_multiplier: Decimal odds.
        rng:                Random source. Pass random.Random(seed) in tests.
        wager_fraction:     Share of bankroll wagered per bet.
        max_bets:           Hard iteration cap.

    Returns:
        (status, bets_simulated, final_bankroll) where status is
        GOAL_REACHED, GOAL_BUSTED or GOAL_UNKNOWN.
    """
    rng = rng or random.Random()
    simulated = bankroll
    n_bets = 0

    while simulated < goal and n_bets < max_bets:
        wager = simulated * wager_fraction
        if rng.random() < win_probability:
            simulated += wager * (average_multiplier - 1)
        else:
            simulated -= wager
        n_bets += 1
        if simulated <= 0:
            return GOAL_BUSTED, n_bets, simulated

    if simulated >= goal:
        return GOAL_REACHED, n_bets, simulated
    return GOAL_UNKNOWN, n_bets, simulated


def project_goal(
    completed: list[Bet],
    current_bankroll: float,
    win_rate_pct: float,
    total_bets: int,
    time_in_market_days: int,
    goal: float = GOAL_BANKROLL,
    rng: Optional[random.Random] = None,
) -> GoalProjection:
    """
    Estimate how many bets (and days) the 5% strategy needs to reach goal.

    Days are derived from the historical betting pace:
        bets_per_day = total_bets / time_in_market_days
        days         = ceil(estimated_bets / bets_per_day)
    """
    projection = GoalProjection(
        status=GOAL_NEGATIVE_EV,
        goal_amount=goal,
        projected_final_bankroll=current_bankroll,
    )
    if not completed:
        return projection

    n = len(completed)
    projection.average_wager = sum(b.stake for b in completed) / n
    projection.average_multiplier = sum(b.odds for b in completed) / n

    p_win = win_rate_pct / 100
    ev = expected_value_per_unit(p_win, projection.average_multiplier)
    projection.expected_value_per_unit = ev

    if current_bankroll >= goal:
        projection.status = GOAL_ALREADY_MET
        return projection
    if ev <= 0:
        return projection
    if current_bankroll <= 0:
        projection.status = GOAL_NO_BANKROLL
        return projection

    status, n_bets, final = simulate_bets_to_goal(
        current_bankroll, goal, p_win, projection.average_multiplier, rng=rng
    )
    projection.status = status
    projection.bets_simulated = n_bets
    projection.projected_final_bankroll = final

    if status == GOAL_REACHED:
        projection.estimated_bets = n_bets
        bets_per_day = total_bets / time_in_market_days if time_in_market_days > 0 else 0
        if bets_per_day > 0:
            projection.projected_days = math.ceil(n_bets / bets_per_day)

    return projection


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------
def compute_bet_analytics(
    bets: list[Bet],
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
    starting_bankroll: float = STARTING_BANKROLL,
    goal: float = GOAL_BANKROLL,
) -> Optional[BetAnalytics]:
    """
    Aggregate the complete bet set into one analytics record.

    Args:
        bets:              Every bet row (any order).
        now:               Clock override for time-in-market. Defaults to UTC now.
        rng:               Random source for the goal projection.
        starting_bankroll: Fixed bankroll the tracker started with.
        goal:              Goal bankroll for the projection.

    Returns:
        BetAnalytics, or None when there are no bets at all.

    >>> compute_bet_analytics([]) is None
    True
    """
    if not bets:
        return None

    completed = [b for b in bets if b.is_completed]
    pending = [b for b in bets if not b.is_completed]
    won = [b for b in completed if b.result == WON]
    lost = [b for b in completed if b.result == LOST]

    total_staked = sum(b.stake for b in completed)
    total_won = sum(b.potential_payout for b in won)
    total_lost = sum(b.stake for b in lost)

    total_profit_loss = total_won - total_lost
    current_bankroll = starting_bankroll + total_profit_loss
    growth_pct = total_profit_loss / starting_bankroll * 100
    staked_roi = total_profit_loss / total_staked * 100 if total_staked > 0 else 0.0

    days = days_in_market(bets, now)
    win_rate = len(won) / len(completed) * 100 if completed else 0.0

    growth, target, dates = cumulative_growth_series(completed, starting_bankroll)

    goal_projection = project_goal(
        completed=completed,
        current_bankroll=current_bankroll,
        win_rate_pct=win_rate,
        total_bets=len(bets),
        time_in_market_days=days,
        goal=goal,
        rng=rng,
    )

    return BetAnalytics(
        total_bets=len(bets),
        completed_count=len(completed),
        pending_count=len(pending),
        won_count=len(won),
        lost_count=len(lost),
        total_staked=total_staked,
        total_won=total_won,
        total_lost=total_lost,
        pending_stake=sum(b.stake for b in pending),
        max_pending_payout=sum(b.potential_payout for b in pending),
        starting_bankroll=starting_bankroll,
        current_bankroll=current_bankroll,
        total_profit_loss=total_profit_loss,
        bankroll_growth_pct=growth_pct,
        staked_roi_pct=staked_roi,
        time_in_market_days=days,
        annualized_return_pct=annualized_return(current_bankroll, starting_bankroll, days),
        win_rate=win_rate,
        cumulative_growth=growth,
        target_growth=target,
        growth_dates=dates,
        goal=goal_projection,
    )
