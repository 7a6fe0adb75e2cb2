from __future__ import annotations

import logging

from netprophet.core.parlay import (
    bonus_descriptions,
    calculate_parlay_odds,
    safe_bet_cost,
    validate_parlay_bet,
)
from netprophet.schemas.parlay import ParlayQuoteRequest, ParlayQuoteResponse

logger = logging.getLogger(__name__)


def quote_parlay(req: ParlayQuoteRequest) -> ParlayQuoteResponse:
    """
    Price a parlay slip. Invalid slips are still priced so the UI can show
    what the slip would pay; `is_valid`/`error` say whether it can be placed.
    """
    calc = calculate_parlay_odds(req.legs, req.stake, req.user_streak)
    error = validate_parlay_bet(req.legs, req.stake, req.user_balance)
    if error:
        logger.info("parlay.quote rejected legs=%s error=%s", len(req.legs), error)

    return ParlayQuoteResponse(
        base_odds=calc.base_odds,
        bonus_multiplier=calc.bonus_multiplier,
        streak_booster=calc.streak_booster,
        final_odds=calc.final_odds,
        potential_winnings=calc.potential_winnings,
        bonus_percentage=calc.bonus_percentage,
        is_eligible_for_bonus=calc.is_eligible_for_bonus,
        safe_bet_cost=safe_bet_cost(len(req.legs)) if req.is_safe_bet else 0,
        bonus_descriptions=bonus_descriptions(len(req.legs), req.user_streak),
        is_valid=error is None,
        error=error,
    )
