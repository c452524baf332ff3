"""
tests/test_bet_analytics.py — Bet Tracker
==========================================
Unit tests for core/bet_analytics.py — bankroll math, CAGR, growth series,
goal projection.

Run: pytest tests/test_bet_analytics.py -v
"""

import math
import os
import random
import sys
from datetime import datetime, timezone

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from core.bet_analytics import (
    CAGR_CEILING,
    GOAL_ALREADY_MET,
    GOAL_BUSTED,
    GOAL_NEGATIVE_EV,
    GOAL_REACHED,
    GOAL_UNKNOWN,
    MAX_SIMULATED_BETS,
    STARTING_BANKROLL,
    TARGET_GROWTH_PCT,
    annualized_return,
    chronological,
    compute_bet_analytics,
    cumulative_growth_series,
    days_in_market,
    expected_value_per_unit,
    project_goal,
    simulate_bets_to_goal,
)
from core.records import Bet, calculate_payout

NOW = datetime(2025, 9, 11, 12, 0, tzinfo=timezone.utc)


def _bet(stake, odds, result, created="2025-09-01T12:00:00Z", bet_id=None):
    return Bet(
        team_or_player="Pick",
        sportsbook="FanDuel",
        stake=stake,
        odds=odds,
        bet_date=created[:10],
        result=result,
        potential_payout=calculate_payout(stake, odds),
        id=bet_id,
        created_at=created,
    )


# ---------------------------------------------------------------------------
# compute_bet_analytics
# ---------------------------------------------------------------------------

class TestComputeBetAnalytics:
    def test_empty_returns_none(self):
        assert compute_bet_analytics([]) is None

    def test_won_and_lost_example(self):
        bets = [
            _bet(50, 2.25, "won", "2025-09-01T12:00:00Z"),
            _bet(20, 3.0, "lost", "2025-09-02T12:00:00Z"),
        ]
        s = compute_bet_analytics(bets, now=NOW, rng=random.Random(1))
        assert s.total_won == pytest.approx(112.5)
        assert s.total_lost == pytest.approx(20.0)
        assert s.total_profit_loss == pytest.approx(92.5)
        assert s.current_bankroll == pytest.approx(192.5)
        assert s.bankroll_growth_pct == pytest.approx(92.5)
        assert s.win_rate == pytest.approx(50.0)
        assert s.total_staked == pytest.approx(70.0)

    def test_counts(self):
        bets = [
            _bet(10, 2.0, "won"),
            _bet(10, 2.0, "lost"),
            _bet(10, 2.0, "pending"),
        ]
        s = compute_bet_analytics(bets, now=NOW, rng=random.Random(1))
        assert s.total_bets == 3
        assert s.completed_count == 2
        assert s.pending_count == 1
        assert s.won_count == 1
        assert s.lost_count == 1

    def test_pending_only_leaves_bankroll_unchanged(self):
        s = compute_bet_analytics([_bet(25, 4.0, "pending")], now=NOW)
        assert s.current_bankroll == pytest.approx(STARTING_BANKROLL)
        assert s.win_rate == 0.0
        assert s.cumulative_growth == []
        assert s.pending_stake == pytest.approx(25.0)
        assert s.max_pending_payout == pytest.approx(100.0)

    def test_recent_history_has_no_annualized_return(self):
        bets = [_bet(10, 2.0, "won", "2025-09-09T12:00:00Z")]
        s = compute_bet_analytics(bets, now=NOW, rng=random.Random(1))
        assert s.time_in_market_days == 2
        assert s.annualized_return_pct is None

    def test_staked_roi(self):
        bets = [_bet(50, 2.25, "won"), _bet(20, 3.0, "lost")]
        s = compute_bet_analytics(bets, now=NOW, rng=random.Random(1))
        assert s.staked_roi_pct == pytest.approx(92.5 / 70 * 100)


# ---------------------------------------------------------------------------
# days_in_market / annualized_return
# ---------------------------------------------------------------------------

class TestDaysInMarket:
    def test_floor_of_elapsed_days(self):
        bets = [_bet(10, 2.0, "won", "2025-09-01T18:00:00Z")]
        assert days_in_market(bets, NOW) == 9

    def test_minimum_one_day(self):
        bets = [_bet(10, 2.0, "won", "2025-09-11T11:00:00Z")]
        assert days_in_market(bets, NOW) == 1

    def test_uses_earliest(self):
        bets = [
            _bet(10, 2.0, "won", "2025-09-10T12:00:00Z"),
            _bet(10, 2.0, "won", "2025-08-12T12:00:00Z"),
        ]
        assert days_in_market(bets, NOW) == 30


class TestAnnualizedReturn:
    def test_none_under_seven_days(self):
        assert annualized_return(150.0, 100.0, 6) is None

    def test_none_when_bankroll_gone(self):
        assert annualized_return(0.0, 100.0, 30) is None
        assert annualized_return(-5.0, 100.0, 30) is None

    def test_one_year(self):
        assert annualized_return(110.0, 100.0, 365) == pytest.approx(10.0, abs=0.05)

    def test_flat_is_zero(self):
        assert annualized_return(100.0, 100.0, 30) == pytest.approx(0.0)

    def test_clamped_to_ceiling(self):
        assert annualized_return(1000.0, 100.0, 7) == CAGR_CEILING


# ---------------------------------------------------------------------------
# cumulative_growth_series
# ---------------------------------------------------------------------------

class TestCumulativeGrowthSeries:
    def test_running_profit_percent(self):
        bets = [
            _bet(20, 3.0, "lost", "2025-09-02T12:00:00Z"),
            _bet(50, 2.25, "won", "2025-09-01T12:00:00Z"),
        ]
        growth, target, dates = cumulative_growth_series(bets)
        assert growth == pytest.approx([62.5, 42.5])
        assert target == [TARGET_GROWTH_PCT, TARGET_GROWTH_PCT]
        assert dates[0] < dates[1]

    def test_empty(self):
        assert cumulative_growth_series([]) == ([], [], [])

    def test_chronological_keeps_unparseable_last(self):
        a = _bet(1, 2.0, "won", "2025-09-02T00:00:00Z", bet_id=1)
        b = _bet(1, 2.0, "won", "bad", bet_id=2)
        c = _bet(1, 2.0, "won", "2025-09-01T00:00:00Z", bet_id=3)
        assert [x.id for x in chronological([a, b, c])] == [3, 1, 2]


# ---------------------------------------------------------------------------
# Goal projection
# ---------------------------------------------------------------------------

class TestExpectedValue:
    def test_positive(self):
        assert expected_value_per_unit(0.5, 2.5) == pytest.approx(0.75)

    def test_negative(self):
        assert expected_value_per_unit(0.2, 2.0) == pytest.approx(-0.4)


class TestSimulateBetsToGoal:
    def test_always_win_reaches_goal(self):
        status, n, final = simulate_bets_to_goal(100.0, 200.0, 1.0, 2.0, rng=random.Random(3))
        assert status == GOAL_REACHED
        # 5% per bet compounding from 100 → 200
        assert n == math.ceil(math.log(2) / math.log(1.05))
        assert final >= 200.0

    def test_always_lose_hits_cap_without_going_negative(self):
        status, n, final = simulate_bets_to_goal(100.0, 1000.0, 0.0, 2.0, rng=random.Random(3))
        assert status == GOAL_UNKNOWN
        assert n == MAX_SIMULATED_BETS
        assert final > 0

    def test_bust_is_never_reported_as_reached(self):
        status, n, final = simulate_bets_to_goal(
            100.0, 1000.0, 0.0, 2.0, rng=random.Random(3), wager_fraction=1.0
        )
        assert status == GOAL_BUSTED
        assert n == 1
        assert final <= 0

    def test_iteration_cap(self):
        _, n, _ = simulate_bets_to_goal(
            100.0, 1e12, 0.5, 2.0, rng=random.Random(11), max_bets=50
        )
        assert n <= 50

    def test_seeded_runs_repeat(self):
        a = simulate_bets_to_goal(100.0, 500.0, 0.6, 2.0, rng=random.Random(42))
        b = simulate_bets_to_goal(100.0, 500.0, 0.6, 2.0, rng=random.Random(42))
        assert a == b


class TestProjectGoal:
    def test_negative_ev(self):
        completed = [_bet(10, 2.0, "lost"), _bet(10, 2.0, "lost")]
        goal = project_goal(completed, 80.0, 0.0, 2, 10, rng=random.Random(1))
        assert goal.status == GOAL_NEGATIVE_EV
        assert goal.estimated_bets is None
        assert goal.projected_days is None

    def test_already_met(self):
        completed = [_bet(10, 2.0, "won")]
        goal = project_goal(completed, 1500.0, 100.0, 1, 10, goal=1000.0)
        assert goal.status == GOAL_ALREADY_MET

    def test_reached_sets_bets_and_days(self):
        completed = [_bet(50, 2.0, "won"), _bet(50, 2.0, "won")]
        goal = project_goal(completed, 300.0, 100.0, 2, 10, rng=random.Random(1))
        assert goal.status == GOAL_REACHED
        assert goal.estimated_bets == goal.bets_simulated
        assert goal.projected_days == math.ceil(goal.estimated_bets / (2 / 10))
        assert goal.average_wager == pytest.approx(50.0)
        assert goal.average_multiplier == pytest.approx(2.0)

    def test_no_completed_bets(self):
        goal = project_goal([], 100.0, 0.0, 1, 1)
        assert goal.status == GOAL_NEGATIVE_EV
        assert goal.bets_simulated == 0
