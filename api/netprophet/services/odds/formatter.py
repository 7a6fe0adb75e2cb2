from __future__ import annotations

from typing import List, Optional, Tuple

from netprophet.core.odds import decimal_odds
from netprophet.schemas.odds import HeadToHeadRecord, OddsFactors, PlayerOddsProfile
from netprophet.services.odds.factors import clamp

MAX_RECOMMENDATIONS = 3
RECOMMENDATION_THRESHOLD = 0.1


def price_odds(p1: float, p2: float) -> Tuple[float, float]:
    return decimal_odds(p1), decimal_odds(p2)


def calculate_confidence(
    player1: PlayerOddsProfile,
    player2: PlayerOddsProfile,
    factors: OddsFactors,
) -> float:
    confidence = 0.6

    n1 = player1.matches_played
    n2 = player2.matches_played
    if n1 >= 15 and n2 >= 15:
        confidence += 0.15
    if n1 >= 30 and n2 >= 30:
        confidence += 0.1

    if player1.surface_win_rates is not None and player2.surface_win_rates is not None:
        confidence += 0.05

    if player1.head_to_head_record is not None and player2.head_to_head_record is not None:
        confidence += 0.1

    signal = (
        abs(factors.ntrp_advantage)
        + abs(factors.form_advantage)
        + abs(factors.surface_advantage)
        + abs(factors.head_to_head_advantage)
    )
    if signal > 0.6:
        confidence += 0.1
    if signal > 1.0:
        confidence += 0.05

    return clamp(confidence, 0.3, 0.95)


def _h2h_line(
    player1: PlayerOddsProfile,
    player2: PlayerOddsProfile,
    factor: float,
    h2h: Optional[HeadToHeadRecord],
) -> Optional[str]:
    if h2h is None or h2h.total_matches == 0:
        return None
    if factor > 0:
        leader, trailer, won, lost = player1, player2, h2h.wins, h2h.losses
    else:
        leader, trailer, won, lost = player2, player1, h2h.losses, h2h.wins
    pct = won / h2h.total_matches * 100
    return f"{leader.first_name} leads H2H vs {trailer.first_name} {won}-{lost} ({pct:.0f}% win rate)"


def generate_recommendations(
    player1: PlayerOddsProfile,
    player2: PlayerOddsProfile,
    factors: OddsFactors,
    surface: str,
    h2h: Optional[HeadToHeadRecord] = None,
) -> List[str]:
    """Explanations in fixed priority order: H2H, rating, surface, form. Top 3 kept."""
    recs: List[str] = []

    if abs(factors.head_to_head_advantage) > RECOMMENDATION_THRESHOLD:
        line = _h2h_line(player1, player2, factors.head_to_head_advantage, h2h)
        if line:
            recs.append(line)

    if abs(factors.ntrp_advantage) > RECOMMENDATION_THRESHOLD:
        stronger, weaker = (player1, player2) if factors.ntrp_advantage > 0 else (player2, player1)
        recs.append(
            f"{stronger.first_name} has NTRP advantage ({stronger.ntrp_rating} vs {weaker.ntrp_rating})"
        )

    if abs(factors.surface_advantage) > RECOMMENDATION_THRESHOLD:
        advantaged = player1 if factors.surface_advantage > 0 else player2
        rate = (advantaged.surface_win_rates or {}).get(surface)
        if rate is not None:
            recs.append(f"{advantaged.first_name} excels on {surface} ({rate * 100:.0f}% win rate)")

    if abs(factors.form_advantage) > RECOMMENDATION_THRESHOLD:
        in_form = player1 if factors.form_advantage > 0 else player2
        recent_wins = in_form.last5.count("W")
        recs.append(f"{in_form.first_name} in good form ({recent_wins}/5 recent wins)")

    return recs[:MAX_RECOMMENDATIONS]
