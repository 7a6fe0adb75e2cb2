from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from netprophet.db_session import get_db
from netprophet.schemas.odds import (
    MatchOddsRequest,
    MatchOddsResponse,
    OddsQuoteRequest,
    OddsQuoteResponse,
)
from netprophet.services.odds.batch_service import (
    calculate_match_odds as calculate_match_odds_service,
)
from netprophet.services.odds.quote_service import quote_odds as quote_odds_service

router = APIRouter(tags=["Odds"])


@router.post("/calculate", response_model=OddsQuoteResponse)
async def calculate_odds(req: OddsQuoteRequest):
    return quote_odds_service(req)


@router.post("/matches", response_model=MatchOddsResponse)
async def calculate_match_odds(req: MatchOddsRequest, db: AsyncSession = Depends(get_db)):
    return await calculate_match_odds_service(match_ids=req.match_ids, db=db)
