from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from netprophet.schemas.odds import HeadToHeadRecord

_PLAYER_COLS = [
    "id",
    "first_name",
    "last_name",
    "ntrp_rating",
    "surface_preference",
    "surface_win_rates",
    "wins",
    "losses",
    "last5",
    "current_streak",
    "streak_type",
    "age",
    "hand",
    "notes",
]


def _player_select(alias: str, prefix: str) -> str:
    return ",\n              ".join(f"{alias}.{c} AS {prefix}{c}" for c in _PLAYER_COLS)


def _player_from_row(row: Dict[str, Any], prefix: str) -> Optional[Dict[str, Any]]:
    if row.get(f"{prefix}id") is None:
        return None
    return {c: row.get(f"{prefix}{c}") for c in _PLAYER_COLS}


async def load_match_for_odds(db: AsyncSession, match_id: str) -> Optional[Dict[str, Any]]:
    """
    Match row with tournament surface and both player rows.
    Missing joins come back as None so callers can report incomplete matches.
    """
    async with db.begin_nested():
        r = await db.execute(
            text(
                f"""
                SELECT
                  m.id AS match_id,
                  t.surface AS surface,
                  {_player_select("pa", "a_")},
                  {_player_select("pb", "b_")}
                FROM matches m
                LEFT JOIN tournaments t ON t.id = m.tournament_id
                LEFT JOIN players pa ON pa.id = m.player_a_id
                LEFT JOIN players pb ON pb.id = m.player_b_id
                WHERE m.id = :match_id
                LIMIT 1
                """
            ),
            {"match_id": match_id},
        )
        row = r.mappings().first()
    if not row:
        return None
    row = dict(row)
    return {
        "match_id": str(row["match_id"]),
        "surface": row.get("surface"),
        "player_a": _player_from_row(row, "a_"),
        "player_b": _player_from_row(row, "b_"),
    }


async def get_head_to_head_record(
    db: AsyncSession,
    player1_id: str,
    player2_id: str,
) -> Optional[HeadToHeadRecord]:
    """
    Prior meetings counted from player1's side. The stored aggregate keeps an
    arbitrary (A, B) order, so wins/losses and the last result are re-oriented.
    """
    try:
        async with db.begin_nested():
            r = await db.execute(
                text(
                    """
                    SELECT player_a_id, player_a_wins, player_b_wins,
                           last_match_result, last_match_date
                    FROM get_head_to_head_record(:p1, :p2)
                    """
                ),
                {"p1": player1_id, "p2": player2_id},
            )
            row = r.mappings().first()
    except DBAPIError as e:
        msg = str(e.orig) if getattr(e, "orig", None) is not None else str(e)
        if "get_head_to_head_record" in msg and ("does not exist" in msg or "undefined" in msg):
            return None
        raise

    if not row:
        return None

    player1_is_a = str(row["player_a_id"]) == str(player1_id)
    a_wins = int(row["player_a_wins"] or 0)
    b_wins = int(row["player_b_wins"] or 0)

    last_result = None
    if row["last_match_result"] in ("A", "B"):
        a_won_last = row["last_match_result"] == "A"
        last_result = "W" if a_won_last == player1_is_a else "L"

    return HeadToHeadRecord(
        wins=a_wins if player1_is_a else b_wins,
        losses=b_wins if player1_is_a else a_wins,
        last_match_result=last_result,
        last_match_date=row["last_match_date"],
    )


async def update_match_odds(db: AsyncSession, match_id: str, odds_a: float, odds_b: float) -> int:
    async with db.begin_nested():
        result = await db.execute(
            text("UPDATE matches SET odds_a = :odds_a, odds_b = :odds_b WHERE id = :match_id"),
            {"odds_a": odds_a, "odds_b": odds_b, "match_id": match_id},
        )
    return result.rowcount
