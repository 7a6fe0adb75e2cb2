from __future__ import annotations

import logging
from typing import Optional

from fastapi import HTTPException

from netprophet.core.odds import format_odds, prob_to_american
from netprophet.schemas.odds import OddsQuoteRequest, OddsQuoteResponse
from netprophet.services.odds.blender import NoiseSource
from netprophet.services.odds.engine import compute_odds
from netprophet.services.odds.errors import InvalidOddsInput

logger = logging.getLogger(__name__)


def quote_odds(req: OddsQuoteRequest, rng: Optional[NoiseSource] = None) -> OddsQuoteResponse:
    """Price a single matchup without touching the database."""
    try:
        result = compute_odds(req.player1, req.player2, req.context, req.h2h, rng=rng)
    except InvalidOddsInput as e:
        raise HTTPException(status_code=422, detail=str(e))

    logger.info(
        "odds.quote done p1=%s p2=%s surface=%s odds=(%s, %s)",
        req.player1.id,
        req.player2.id,
        req.context.surface,
        result.player1_odds,
        result.player2_odds,
    )
    return OddsQuoteResponse(
        **result.model_dump(),
        player1_odds_display=format_odds(result.player1_odds),
        player2_odds_display=format_odds(result.player2_odds),
        player1_fair_american=prob_to_american(result.player1_win_probability),
        player2_fair_american=prob_to_american(result.player2_win_probability),
    )
