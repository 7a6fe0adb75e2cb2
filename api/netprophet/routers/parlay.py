from __future__ import annotations

from fastapi import APIRouter

from netprophet.schemas.parlay import ParlayQuoteRequest, ParlayQuoteResponse
from netprophet.services.parlay.quote_service import quote_parlay as quote_parlay_service

router = APIRouter(tags=["Parlay"])


@router.post("/quote", response_model=ParlayQuoteResponse)
async def quote_parlay(req: ParlayQuoteRequest):
    return quote_parlay_service(req)
