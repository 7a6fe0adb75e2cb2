# api/netprophet/core/parlay.py
"""
Parlay (accumulator) pricing for multi-match slips.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from netprophet.schemas.parlay import ParlayLeg

BONUS_THRESHOLD = 3  # legs needed for the bonus multiplier
BONUS_PERCENTAGE = 0.05
STREAK_BOOSTER_THRESHOLD = 3
STREAK_BOOSTER_PERCENTAGE = 0.02  # per streak level
MAX_STREAK_BOOSTER = 0.20
SAFE_BET_COST = 50  # tokens per leg
MIN_LEGS = 2


@dataclass(frozen=True)
class ParlayCalculation:
    base_odds: float
    bonus_multiplier: float
    final_odds: float
    potential_winnings: float
    bonus_percentage: float
    is_eligible_for_bonus: bool
    streak_booster: float


def _surname(name: str) -> str:
    parts = name.lower().split()
    return parts[-1] if parts else ""


def leg_odds(leg: ParlayLeg) -> float:
    """Odds of the side picked on this leg; average of both if the pick can't be read."""
    if leg.pick == "player1":
        return leg.player1_odds
    if leg.pick == "player2":
        return leg.player2_odds

    text = leg.prediction.lower()
    p1 = _surname(leg.player1_name)
    p2 = _surname(leg.player2_name)
    if p1 and p1 in text:
        return leg.player1_odds
    if p2 and p2 in text:
        return leg.player2_odds
    return (leg.player1_odds + leg.player2_odds) / 2


def streak_booster(user_streak: int) -> float:
    if user_streak < STREAK_BOOSTER_THRESHOLD:
        return 1.0
    boost = min((user_streak - STREAK_BOOSTER_THRESHOLD + 1) * STREAK_BOOSTER_PERCENTAGE, MAX_STREAK_BOOSTER)
    return 1.0 + boost


def calculate_parlay_odds(legs: Sequence[ParlayLeg], stake: float, user_streak: int = 0) -> ParlayCalculation:
    if not legs:
        return ParlayCalculation(
            base_odds=1.0,
            bonus_multiplier=1.0,
            final_odds=1.0,
            potential_winnings=0.0,
            bonus_percentage=0.0,
            is_eligible_for_bonus=False,
            streak_booster=1.0,
        )

    base = 1.0
    for leg in legs:
        base *= leg_odds(leg)

    eligible = len(legs) >= BONUS_THRESHOLD
    bonus_multiplier = 1.0 + BONUS_PERCENTAGE if eligible else 1.0
    booster = streak_booster(user_streak)
    final = base * bonus_multiplier * booster

    return ParlayCalculation(
        base_odds=base,
        bonus_multiplier=bonus_multiplier,
        final_odds=final,
        potential_winnings=stake * final,
        bonus_percentage=BONUS_PERCENTAGE * 100 if eligible else 0.0,
        is_eligible_for_bonus=eligible,
        streak_booster=booster,
    )


def safe_bet_cost(leg_count: int) -> int:
    return SAFE_BET_COST * leg_count


def bonus_descriptions(leg_count: int, user_streak: int) -> List[str]:
    out: List[str] = []
    if leg_count >= BONUS_THRESHOLD:
        out.append(f"{BONUS_PERCENTAGE * 100:.0f}% bonus for {leg_count}+ picks")
    if user_streak >= STREAK_BOOSTER_THRESHOLD:
        pct = (streak_booster(user_streak) - 1) * 100
        out.append(f"+{pct:.1f}% streak booster ({user_streak} wins)")
    return out


def validate_parlay_bet(
    legs: Sequence[ParlayLeg],
    stake: float,
    user_balance: Optional[float] = None,
) -> Optional[str]:
    """Reason the slip can't be placed, or None if it can."""
    if len(legs) < MIN_LEGS:
        return "Parlay requires at least 2 predictions"
    if stake <= 0:
        return "Stake must be greater than 0"
    if user_balance is not None and stake > user_balance:
        return "Insufficient balance"
    if any(leg.is_locked for leg in legs):
        return "Some matches are already locked"
    return None
