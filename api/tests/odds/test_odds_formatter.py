from __future__ import annotations

import pytest

from netprophet.schemas.odds import HeadToHeadRecord, OddsFactors, PlayerOddsProfile
from netprophet.services.odds.formatter import (
    calculate_confidence,
    generate_recommendations,
    price_odds,
)


def _profile(name: str, **overrides) -> PlayerOddsProfile:
    data = {
        "id": name.lower(),
        "first_name": name,
        "ntrp_rating": 4.0,
        "wins": 5,
        "losses": 5,
        "last5": ["W", "W", "W", "L", "W"],
    }
    data.update(overrides)
    return PlayerOddsProfile(**data)


def _factors(**overrides) -> OddsFactors:
    data = dict.fromkeys(
        [
            "ntrp_advantage",
            "form_advantage",
            "surface_advantage",
            "experience_advantage",
            "momentum_advantage",
            "head_to_head_advantage",
        ],
        0.0,
    )
    data.update(overrides)
    return OddsFactors(**data)


def test_price_odds_adds_margin_per_side():
    assert price_odds(0.5, 0.5) == (2.1, 2.1)
    assert price_odds(0.35, 0.65) == (3.0, 1.62)


def test_confidence_baseline_and_floor():
    assert calculate_confidence(_profile("A"), _profile("B"), _factors()) == pytest.approx(0.6)


def test_confidence_stacks_bonuses_and_caps():
    h2h = {"opponent_id": "x", "wins": 1, "losses": 1}
    p1 = _profile("A", wins=20, losses=15, surface_win_rates={"hard": 0.6}, head_to_head_record=h2h)
    p2 = _profile("B", wins=25, losses=10, surface_win_rates={"clay": 0.5}, head_to_head_record=h2h)
    strong = _factors(ntrp_advantage=0.8, form_advantage=0.5)
    # 0.6 + 0.15 + 0.1 + 0.05 + 0.1 + 0.1 + 0.05 -> capped
    assert calculate_confidence(p1, p2, strong) == pytest.approx(0.95)


def test_recommendations_order_and_cap():
    p1 = _profile("Nikos", ntrp_rating=4.5, surface_win_rates={"Clay Court": 0.8})
    p2 = _profile("Giorgos", ntrp_rating=3.5)
    factors = _factors(
        head_to_head_advantage=0.4,
        ntrp_advantage=0.8,
        surface_advantage=0.2,
        form_advantage=0.3,
    )
    recs = generate_recommendations(p1, p2, factors, "Clay Court", HeadToHeadRecord(wins=3, losses=1))
    assert recs == [
        "Nikos leads H2H vs Giorgos 3-1 (75% win rate)",
        "Nikos has NTRP advantage (4.5 vs 3.5)",
        "Nikos excels on Clay Court (80% win rate)",
    ]


def test_recommendations_skip_small_factors():
    recs = generate_recommendations(_profile("A"), _profile("B"), _factors(ntrp_advantage=0.1), "Hard Court")
    assert recs == []


def test_surface_line_needs_recorded_rate():
    factors = _factors(surface_advantage=-0.3)
    recs = generate_recommendations(_profile("A"), _profile("B"), factors, "Grass Court")
    assert recs == []


def test_form_line_names_trailing_player_when_negative():
    p2 = _profile("B", last5=["W", "W", "W", "W", "L"])
    recs = generate_recommendations(_profile("A"), p2, _factors(form_advantage=-0.2), "Hard Court")
    assert recs == ["B in good form (4/5 recent wins)"]
