from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from netprophet.schemas.odds import HeadToHeadRecord, OddsFactors
from netprophet.services.odds.factors import clamp

logger = logging.getLogger(__name__)

UNCERTAINTY_BAND = 0.05  # total width, centred on zero

NoiseSource = Callable[[], float]


@dataclass(frozen=True)
class FactorWeights:
    ntrp: float
    form: float
    surface: float
    experience: float
    momentum: float
    head_to_head: float

    def total(self) -> float:
        return self.ntrp + self.form + self.surface + self.experience + self.momentum + self.head_to_head


def _ntrp_weight(ntrp_diff: float, base: float) -> float:
    if ntrp_diff >= 1.5:
        return 0.6 if base >= 4.0 else 0.55
    if ntrp_diff >= 1.0:
        if base >= 4.0:
            return 0.55
        if base >= 3.5:
            return 0.5
        return 0.45
    if ntrp_diff >= 0.5:
        return 0.35
    return 0.25


def allocate_weights(rating1: float, rating2: float, h2h_total: int) -> FactorWeights:
    """
    Skill rating takes a bigger share as the gap and the level grow. H2H gets
    a slice that grows with meetings; the four remaining factors split the rest.
    """
    ntrp_diff = abs(rating1 - rating2)
    base = min(rating1, rating2)

    ntrp_w = _ntrp_weight(ntrp_diff, base)
    remaining = 1 - ntrp_w

    h2h_w = 0.0
    if h2h_total > 0:
        h2h_w = min(remaining * 0.4, min(0.2, 0.08 + min(0.12, h2h_total * 0.02)))

    other_w = max(remaining - h2h_w, 0) / 4
    return FactorWeights(
        ntrp=ntrp_w,
        form=other_w,
        surface=other_w,
        experience=other_w,
        momentum=other_w,
        head_to_head=h2h_w,
    )


def probability_bounds(ntrp_diff: float) -> Tuple[float, float]:
    if ntrp_diff < 0.2:
        return 0.35, 0.65
    if ntrp_diff < 0.35:
        return 0.3, 0.7
    if ntrp_diff >= 1.5:
        return 0.05, 0.95
    if ntrp_diff >= 1.0:
        return 0.1, 0.9
    if ntrp_diff >= 0.5:
        return 0.15, 0.85
    return 0.2, 0.8


def _bayesian_h2h_blend(score: float, h2h: HeadToHeadRecord, ntrp_diff: float) -> float:
    total = h2h.total_matches
    h2h_win_rate = h2h.wins / total
    rating_diff_adjustment = (1 - ntrp_diff * 0.8) if ntrp_diff <= 0.5 else 0.6
    blend_strength = clamp((0.25 + total * 0.08) * rating_diff_adjustment, 0.0, 0.85)
    return score * (1 - blend_strength) + h2h_win_rate * blend_strength


def _h2h_tilt(score: float, h2h: HeadToHeadRecord) -> float:
    if h2h.wins == h2h.losses:
        return score
    tilt = min(0.2, abs(h2h.wins - h2h.losses) * 0.025 + h2h.total_matches * 0.01)
    if h2h.wins > h2h.losses:
        return max(score, 0.5 + tilt)
    return min(score, 0.5 - tilt)


def blend_score(
    factors: OddsFactors,
    rating1: float,
    rating2: float,
    h2h: Optional[HeadToHeadRecord],
    noise: NoiseSource,
) -> float:
    """
    Player1 win probability. Order is fixed: weighted sum, H2H blend, noise,
    H2H tilt, then the bounds clamp last.
    """
    ntrp_diff = abs(rating1 - rating2)
    h2h_total = h2h.total_matches if h2h is not None else 0
    weights = allocate_weights(rating1, rating2, h2h_total)

    score = (
        0.5
        + factors.ntrp_advantage * weights.ntrp
        + factors.form_advantage * weights.form
        + factors.surface_advantage * weights.surface
        + factors.experience_advantage * weights.experience
        + factors.momentum_advantage * weights.momentum
        + factors.head_to_head_advantage * weights.head_to_head
    )

    if h2h is not None and h2h_total >= 2:
        score = _bayesian_h2h_blend(score, h2h, ntrp_diff)

    score += (noise() - 0.5) * UNCERTAINTY_BAND

    if h2h is not None and h2h_total >= 2:
        score = _h2h_tilt(score, h2h)

    lo, hi = probability_bounds(ntrp_diff)
    clamped = clamp(score, lo, hi)
    logger.debug(
        "odds.blend weights=%s raw=%.4f bounds=(%.2f, %.2f) final=%.4f",
        weights,
        score,
        lo,
        hi,
        clamped,
    )
    return clamped
