# api/netprophet/services/odds/factors.py
"""
Factor extractors for the odds engine.

Each one compares player1 against player2 along a single dimension and
returns a value in (-1, 1); positive favours player1.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from netprophet.schemas.odds import HeadToHeadRecord, OddsFactors, PlayerOddsProfile

RECENT_FORM_WEIGHTS = (0.4, 0.25, 0.2, 0.1, 0.05)
H2H_RECENCY_DAYS = 180


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def _large_gap_multiplier(base: float) -> float:
    if base >= 4.5:
        return 3.5
    if base >= 4.0:
        return 3.0
    if base >= 3.5:
        return 2.5
    return 2.0


def _small_gap_multiplier(base: float) -> float:
    if base >= 4.5:
        return 1.2
    if base >= 4.0:
        return 1.0
    if base >= 3.5:
        return 0.8
    return 0.6


def ntrp_advantage(player1: PlayerOddsProfile, player2: PlayerOddsProfile) -> float:
    """
    Skill-rating edge. The same rating gap counts for more at higher levels:
      |diff| < 0.01  -> near zero, keeps even matchups at ~50/50
      |diff| >= 1.0  -> linear, clamped to +/-0.8
      otherwise      -> tanh of the level-scaled gap
    """
    diff = player1.ntrp_rating - player2.ntrp_rating
    base = min(player1.ntrp_rating, player2.ntrp_rating)

    if abs(diff) < 0.01:
        return math.tanh(diff * 0.1)

    if abs(diff) >= 1.0:
        return clamp(diff * _large_gap_multiplier(base), -0.8, 0.8)

    scaled = diff * _small_gap_multiplier(base)
    return math.tanh(scaled * 1.0)


def _long_run_win_rate(player: PlayerOddsProfile) -> float:
    matches = player.matches_played
    if matches < 10:
        # Shrink thin records toward 50%
        return (player.wins + 5) / (matches + 10)
    return player.wins / matches


def _recent_form(player: PlayerOddsProfile) -> float:
    return sum(w for result, w in zip(player.last5, RECENT_FORM_WEIGHTS) if result == "W")


def form_advantage(player1: PlayerOddsProfile, player2: PlayerOddsProfile) -> float:
    recent_weight = clamp((player1.matches_played + player2.matches_played) / 40, 0.5, 0.8)
    overall_weight = 1 - recent_weight

    p1_form = _recent_form(player1) * recent_weight + _long_run_win_rate(player1) * overall_weight
    p2_form = _recent_form(player2) * recent_weight + _long_run_win_rate(player2) * overall_weight

    return math.tanh((p1_form - p2_form) * 1.5)


def surface_win_rate(player: PlayerOddsProfile, surface: str) -> float:
    if player.surface_win_rates is None:
        return 0.65 if player.surface_preference == surface else 0.35
    return player.surface_win_rates.get(surface, 0.5)


def surface_advantage(player1: PlayerOddsProfile, player2: PlayerOddsProfile, surface: str) -> float:
    diff = surface_win_rate(player1, surface) - surface_win_rate(player2, surface)
    return math.tanh(diff * 0.3)


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def head_to_head_advantage(h2h: Optional[HeadToHeadRecord], now: Optional[datetime] = None) -> float:
    if h2h is None or h2h.total_matches == 0:
        return 0.0

    total = h2h.total_matches
    win_rate = h2h.wins / total

    recency_bonus = 0.0
    if h2h.last_match_result and h2h.last_match_date:
        now = _as_utc(now or datetime.now(timezone.utc))
        days_since = (now - _as_utc(h2h.last_match_date)).total_seconds() / 86400
        if days_since < H2H_RECENCY_DAYS:
            recency_bonus = 0.05 if h2h.last_match_result == "W" else -0.05

    volume_boost = min(0.4, total * 0.05)
    raw = (win_rate - 0.5) * (0.8 + volume_boost) + recency_bonus
    return math.tanh(raw * 1.1)


def _experience(player: PlayerOddsProfile) -> float:
    return player.age * 0.3 + player.matches_played * 0.7


def experience_advantage(player1: PlayerOddsProfile, player2: PlayerOddsProfile) -> float:
    return math.tanh((_experience(player1) - _experience(player2)) * 0.005)


def _momentum(player: PlayerOddsProfile) -> float:
    root = math.sqrt(player.current_streak)
    return root if player.streak_type == "W" else -root


def momentum_advantage(player1: PlayerOddsProfile, player2: PlayerOddsProfile) -> float:
    return math.tanh((_momentum(player1) - _momentum(player2)) * 0.15)


def calculate_factors(
    player1: PlayerOddsProfile,
    player2: PlayerOddsProfile,
    surface: str,
    h2h: Optional[HeadToHeadRecord] = None,
    now: Optional[datetime] = None,
) -> OddsFactors:
    return OddsFactors(
        ntrp_advantage=ntrp_advantage(player1, player2),
        form_advantage=form_advantage(player1, player2),
        surface_advantage=surface_advantage(player1, player2, surface),
        experience_advantage=experience_advantage(player1, player2),
        momentum_advantage=momentum_advantage(player1, player2),
        head_to_head_advantage=head_to_head_advantage(h2h, now),
    )
