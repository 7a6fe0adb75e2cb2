from __future__ import annotations

import math
from datetime import date, datetime, time
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from netprophet.core.surfaces import normalize_surface

Outcome = Literal["W", "L"]


class ProfileHeadToHead(BaseModel):
    """Record a player carries against one named opponent."""

    opponent_id: str
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    last_match_result: Optional[Outcome] = None
    last_match_date: Optional[datetime] = None


class PlayerOddsProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    first_name: str
    last_name: str = ""
    ntrp_rating: float = Field(..., gt=0, allow_inf_nan=False)
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    last5: List[Outcome] = Field(..., min_length=5, max_length=5, description="Most recent first")
    current_streak: int = Field(0, ge=0)
    streak_type: Outcome = "W"
    surface_preference: str = "Hard Court"
    surface_win_rates: Optional[Dict[str, Optional[float]]] = None
    age: float = Field(25, ge=0, allow_inf_nan=False)
    hand: Literal["left", "right"] = "right"
    notes: Optional[str] = None

    # Carried for the admin screens; not used by the factor math.
    aggressiveness: float = Field(5, ge=1, le=10)
    stamina: float = Field(5, ge=1, le=10)
    consistency: float = Field(5, ge=1, le=10)
    club: str = ""
    injury_status: Optional[Literal["healthy", "minor", "major"]] = None
    seasonal_form: Optional[float] = Field(None, ge=0, le=1)
    last_match_date: Optional[datetime] = None
    head_to_head_record: Optional[ProfileHeadToHead] = None

    @property
    def matches_played(self) -> int:
        return self.wins + self.losses

    @field_validator("surface_preference")
    @classmethod
    def _normalize_preference(cls, v: str) -> str:
        return normalize_surface(v) or v

    @field_validator("surface_win_rates")
    @classmethod
    def _normalize_rate_keys(cls, v: Optional[Dict[str, Optional[float]]]) -> Optional[Dict[str, float]]:
        if v is None:
            return None
        out: Dict[str, float] = {}
        for key, rate in v.items():
            surface = normalize_surface(key)
            # Keys that aren't surfaces (e.g. "overall") are ignored.
            if rate is None or surface is None:
                continue
            rate = float(rate)
            if not math.isfinite(rate) or rate < 0 or rate > 1:
                raise ValueError(f"surface win rate for {key!r} must be within [0, 1]")
            out[surface] = rate
        return out


class MatchContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    surface: Literal["Hard Court", "Clay Court", "Grass Court", "Indoor"]

    @field_validator("surface", mode="before")
    @classmethod
    def _normalize(cls, v: Any) -> Any:
        if isinstance(v, str):
            return normalize_surface(v) or v
        return v


class HeadToHeadRecord(BaseModel):
    """Meetings between the two players, counted from player1's side."""

    model_config = ConfigDict(frozen=True)

    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    last_match_result: Optional[Outcome] = None
    last_match_date: Optional[datetime] = None

    @field_validator("last_match_date", mode="before")
    @classmethod
    def _date_to_datetime(cls, v: Any) -> Any:
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime.combine(v, time.min)
        return v

    @property
    def total_matches(self) -> int:
        return self.wins + self.losses

    def flipped(self) -> "HeadToHeadRecord":
        last = None
        if self.last_match_result is not None:
            last = "L" if self.last_match_result == "W" else "W"
        return HeadToHeadRecord(
            wins=self.losses,
            losses=self.wins,
            last_match_result=last,
            last_match_date=self.last_match_date,
        )


class OddsFactors(BaseModel):
    ntrp_advantage: float
    form_advantage: float
    surface_advantage: float
    experience_advantage: float
    momentum_advantage: float
    head_to_head_advantage: float


class OddsResult(BaseModel):
    player1_win_probability: float
    player2_win_probability: float
    player1_odds: float
    player2_odds: float
    confidence: float
    factors: OddsFactors
    recommendations: List[str]


class OddsQuoteRequest(BaseModel):
    player1: PlayerOddsProfile
    player2: PlayerOddsProfile
    context: MatchContext
    h2h: Optional[HeadToHeadRecord] = None


class OddsQuoteResponse(OddsResult):
    player1_odds_display: str = Field(..., description="American-style, e.g. +150 / -200")
    player2_odds_display: str
    player1_fair_american: Optional[int] = None
    player2_fair_american: Optional[int] = None


class MatchOddsRequest(BaseModel):
    match_ids: List[str]


class SideOdds(BaseModel):
    player_a: float
    player_b: float
    confidence: float


class MatchOddsSuccess(BaseModel):
    match_id: str
    success: Literal[True] = True
    odds: SideOdds


class MatchOddsError(BaseModel):
    match_id: str
    success: Literal[False] = False
    error: str


class MatchOddsResponse(BaseModel):
    success: bool = True
    processed: int
    results: List[Union[MatchOddsSuccess, MatchOddsError]]
