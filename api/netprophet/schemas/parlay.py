from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class ParlayLeg(BaseModel):
    match_id: str
    player1_name: str
    player1_odds: float = Field(..., gt=0)
    player2_name: str
    player2_odds: float = Field(..., gt=0)
    prediction: str = Field("", description="Free-text pick, e.g. 'Winner: Nikos Papas'")
    pick: Optional[Literal["player1", "player2"]] = None
    is_locked: bool = False


class ParlayQuoteRequest(BaseModel):
    legs: List[ParlayLeg]
    stake: float
    user_streak: int = Field(0, ge=0)
    is_safe_bet: bool = False
    user_balance: Optional[float] = None


class ParlayQuoteResponse(BaseModel):
    base_odds: float
    bonus_multiplier: float
    streak_booster: float
    final_odds: float
    potential_winnings: float
    bonus_percentage: float
    is_eligible_for_bonus: bool
    safe_bet_cost: int
    bonus_descriptions: List[str]
    is_valid: bool
    error: Optional[str] = None
