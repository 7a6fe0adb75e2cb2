from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from netprophet.schemas.odds import HeadToHeadRecord, OddsResult, PlayerOddsProfile


@dataclass(frozen=True)
class OrientedMatch:
    player1: PlayerOddsProfile
    player2: PlayerOddsProfile
    h2h: Optional[HeadToHeadRecord]
    swapped: bool

    def to_sides(self, result: OddsResult) -> Tuple[float, float]:
        """Engine odds mapped back to the stored (player_a, player_b) columns."""
        if self.swapped:
            return result.player2_odds, result.player1_odds
        return result.player1_odds, result.player2_odds


def orient_players(
    player_a: PlayerOddsProfile,
    player_b: PlayerOddsProfile,
    h2h_ab: Optional[HeadToHeadRecord] = None,
) -> OrientedMatch:
    """
    Pick player1 for the engine. An H2H leader goes first; without one the
    higher NTRP rating does, and ties keep side A first.

    `h2h_ab` is counted from player A's side.
    """
    if h2h_ab is not None and h2h_ab.wins != h2h_ab.losses:
        swap = h2h_ab.losses > h2h_ab.wins
    else:
        swap = player_b.ntrp_rating > player_a.ntrp_rating

    if not swap:
        return OrientedMatch(player1=player_a, player2=player_b, h2h=h2h_ab, swapped=False)
    return OrientedMatch(
        player1=player_b,
        player2=player_a,
        h2h=h2h_ab.flipped() if h2h_ab is not None else None,
        swapped=True,
    )
