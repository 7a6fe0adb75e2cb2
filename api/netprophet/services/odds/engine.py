# api/netprophet/services/odds/engine.py
"""
Odds engine: two player profiles + surface (+ optional H2H) -> win
probabilities, margin-priced decimal odds, confidence and explanations.

Pure apart from the uncertainty noise, which comes from `rng` (any callable
returning a float in [0, 1); defaults to random.random). Pass
`rng=lambda: 0.5` for a deterministic result.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from netprophet.schemas.odds import (
    HeadToHeadRecord,
    MatchContext,
    OddsResult,
    PlayerOddsProfile,
)
from netprophet.services.odds.blender import NoiseSource, blend_score
from netprophet.services.odds.errors import InvalidOddsInput
from netprophet.services.odds.factors import calculate_factors
from netprophet.services.odds.formatter import (
    calculate_confidence,
    generate_recommendations,
    price_odds,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def coerce_model(model: Type[M], value: Union[M, Mapping[str, Any]], label: str) -> M:
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or label}: {err['msg']}" for err in e.errors()
        )
        raise InvalidOddsInput(f"Invalid {label}: {problems}") from e


def compute_odds(
    player1: Union[PlayerOddsProfile, Mapping[str, Any]],
    player2: Union[PlayerOddsProfile, Mapping[str, Any]],
    context: Union[MatchContext, Mapping[str, Any]],
    h2h: Union[HeadToHeadRecord, Mapping[str, Any], None] = None,
    *,
    rng: Optional[NoiseSource] = None,
    now: Optional[datetime] = None,
) -> OddsResult:
    p1 = coerce_model(PlayerOddsProfile, player1, "player1")
    p2 = coerce_model(PlayerOddsProfile, player2, "player2")
    ctx = coerce_model(MatchContext, context, "match context")
    record = coerce_model(HeadToHeadRecord, h2h, "head-to-head record") if h2h is not None else None

    factors = calculate_factors(p1, p2, ctx.surface, record, now)
    p1_prob = blend_score(factors, p1.ntrp_rating, p2.ntrp_rating, record, rng or random.random)
    p2_prob = 1 - p1_prob

    p1_odds, p2_odds = price_odds(p1_prob, p2_prob)

    result = OddsResult(
        player1_win_probability=p1_prob,
        player2_win_probability=p2_prob,
        player1_odds=p1_odds,
        player2_odds=p2_odds,
        confidence=calculate_confidence(p1, p2, factors),
        factors=factors,
        recommendations=generate_recommendations(p1, p2, factors, ctx.surface, record),
    )
    logger.debug(
        "odds.compute p1=%s p2=%s surface=%s p1_prob=%.4f odds=(%.2f, %.2f)",
        p1.id,
        p2.id,
        ctx.surface,
        p1_prob,
        p1_odds,
        p2_odds,
    )
    return result
