from .odds import (
    HeadToHeadRecord,
    MatchContext,
    MatchOddsRequest,
    MatchOddsResponse,
    OddsFactors,
    OddsQuoteRequest,
    OddsQuoteResponse,
    OddsResult,
    PlayerOddsProfile,
)
from .parlay import ParlayLeg, ParlayQuoteRequest, ParlayQuoteResponse

__all__ = [
    "PlayerOddsProfile",
    "MatchContext",
    "HeadToHeadRecord",
    "OddsFactors",
    "OddsResult",
    "OddsQuoteRequest",
    "OddsQuoteResponse",
    "MatchOddsRequest",
    "MatchOddsResponse",
    "ParlayLeg",
    "ParlayQuoteRequest",
    "ParlayQuoteResponse",
]
