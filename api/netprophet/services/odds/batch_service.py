from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import HTTPException
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from netprophet.config import settings
from netprophet.core.surfaces import HARD_COURT
from netprophet.db.repositories.odds_repo import (
    get_head_to_head_record,
    load_match_for_odds,
    update_match_odds,
)
from netprophet.schemas.odds import (
    MatchContext,
    MatchOddsError,
    MatchOddsResponse,
    MatchOddsSuccess,
    PlayerOddsProfile,
    SideOdds,
)
from netprophet.services.odds.blender import NoiseSource
from netprophet.services.odds.engine import coerce_model, compute_odds
from netprophet.services.odds.errors import InvalidOddsInput
from netprophet.services.odds.orientation import orient_players

logger = logging.getLogger(__name__)

# Used when a player row has no recorded recent results yet.
DEFAULT_LAST5_A = ["W", "W", "L", "W", "L"]
DEFAULT_LAST5_B = ["L", "W", "W", "L", "W"]

CALCULATION_FAILED = "Failed to calculate odds"


def _surface_rates(raw: Any) -> Optional[Dict[str, Any]]:
    if isinstance(raw, str):
        raw = json.loads(raw) if raw.strip() else None
    return raw or None


def profile_from_row(row: Dict[str, Any], default_last5: List[str] = DEFAULT_LAST5_A) -> PlayerOddsProfile:
    """Player row -> engine profile, filling the same defaults the admin screens assume."""
    data = {
        "id": str(row["id"]),
        "first_name": row.get("first_name") or "",
        "last_name": row.get("last_name") or "",
        "ntrp_rating": row.get("ntrp_rating") or 3.0,
        "wins": row.get("wins") or 0,
        "losses": row.get("losses") or 0,
        "last5": row.get("last5") or default_last5,
        "current_streak": row.get("current_streak") or 0,
        "streak_type": row.get("streak_type") or "W",
        "surface_preference": row.get("surface_preference") or HARD_COURT,
        "surface_win_rates": _surface_rates(row.get("surface_win_rates")),
        "age": row.get("age") or 25,
        "hand": row.get("hand") or "right",
        "notes": row.get("notes") or "",
    }
    return coerce_model(PlayerOddsProfile, data, f"player {data['id']}")


async def _calculate_one(
    db: AsyncSession,
    match_id: str,
    rng: Optional[NoiseSource],
) -> Union[MatchOddsSuccess, MatchOddsError]:
    match = await load_match_for_odds(db, match_id)
    if match is None:
        return MatchOddsError(match_id=match_id, error="Match not found")
    if not match["player_a"] or not match["player_b"] or not match["surface"]:
        return MatchOddsError(match_id=match_id, error="Incomplete match data")

    player_a = profile_from_row(match["player_a"])
    player_b = profile_from_row(match["player_b"], DEFAULT_LAST5_B)
    context = coerce_model(MatchContext, {"surface": match["surface"]}, "match context")

    h2h = None
    try:
        h2h = await get_head_to_head_record(db, player_a.id, player_b.id)
    except SQLAlchemyError as e:
        logger.warning("odds.batch h2h lookup failed match_id=%s err=%s", match_id, e)

    oriented = orient_players(player_a, player_b, h2h)
    result = compute_odds(oriented.player1, oriented.player2, context, oriented.h2h, rng=rng)
    odds_a, odds_b = oriented.to_sides(result)

    try:
        updated = await update_match_odds(db, match_id, odds_a, odds_b)
    except DBAPIError as e:
        logger.warning("odds.batch update failed match_id=%s err=%s", match_id, e)
        return MatchOddsError(match_id=match_id, error="Failed to update match odds")
    if not updated:
        return MatchOddsError(match_id=match_id, error="Failed to update match odds")

    return MatchOddsSuccess(
        match_id=match_id,
        odds=SideOdds(player_a=odds_a, player_b=odds_b, confidence=result.confidence),
    )


async def calculate_match_odds(
    match_ids: List[str],
    db: AsyncSession,
    rng: Optional[NoiseSource] = None,
) -> MatchOddsResponse:
    """
    Recalculate and store odds for a batch of matches. A failing match is
    reported in its own result entry and never stops the rest of the batch.
    """
    if not match_ids:
        raise HTTPException(status_code=400, detail="match_ids array is required")
    limit = settings.odds_max_batch_size
    if len(match_ids) > limit:
        raise HTTPException(status_code=400, detail=f"Maximum {limit} matches allowed per request")

    logger.info("odds.calculate_match_odds start matches=%s", len(match_ids))

    results: List[Union[MatchOddsSuccess, MatchOddsError]] = []
    for match_id in match_ids:
        try:
            # A failed statement only rolls back this match, not the whole batch.
            async with db.begin_nested():
                outcome = await _calculate_one(db, match_id, rng)
        except InvalidOddsInput as e:
            outcome = MatchOddsError(match_id=match_id, error=str(e))
        except DBAPIError:
            logger.exception("odds.calculate_match_odds db error match_id=%s", match_id)
            outcome = MatchOddsError(match_id=match_id, error=CALCULATION_FAILED)
        except Exception:
            logger.exception("odds.calculate_match_odds unexpected error match_id=%s", match_id)
            outcome = MatchOddsError(match_id=match_id, error=CALCULATION_FAILED)
        if isinstance(outcome, MatchOddsError):
            logger.warning("odds.calculate_match_odds skipped match_id=%s error=%s", match_id, outcome.error)
        results.append(outcome)

    await db.commit()

    ok = sum(1 for r in results if isinstance(r, MatchOddsSuccess))
    logger.info("odds.calculate_match_odds done matches=%s ok=%s failed=%s", len(results), ok, len(results) - ok)
    return MatchOddsResponse(success=True, processed=len(results), results=results)
