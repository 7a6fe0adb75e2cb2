from __future__ import annotations

import math

import pytest

from netprophet.schemas.odds import HeadToHeadRecord, MatchContext, PlayerOddsProfile
from netprophet.services.odds.blender import probability_bounds
from netprophet.services.odds.engine import compute_odds
from netprophet.services.odds.errors import InvalidOddsInput


def _no_noise() -> float:
    return 0.5


def _player(pid: str, name: str, **overrides) -> dict:
    data = {
        "id": pid,
        "first_name": name,
        "last_name": "Test",
        "ntrp_rating": 4.0,
        "wins": 10,
        "losses": 10,
        "last5": ["W", "L", "W", "L", "W"],
        "current_streak": 0,
        "streak_type": "W",
        "surface_preference": "Hard Court",
        "age": 25,
    }
    data.update(overrides)
    return data


HARD = {"surface": "Hard Court"}


def _strong_vs_weak():
    p1 = _player(
        "p1",
        "Nikos",
        ntrp_rating=5.0,
        wins=20,
        losses=5,
        last5=["W", "W", "W", "W", "W"],
        current_streak=5,
        streak_type="W",
    )
    p2 = _player(
        "p2",
        "Giorgos",
        ntrp_rating=3.5,
        wins=8,
        losses=12,
        last5=["L", "L", "W", "L", "L"],
        current_streak=2,
        streak_type="L",
    )
    return p1, p2


def test_strong_favourite_scenario():
    p1, p2 = _strong_vs_weak()
    out = compute_odds(p1, p2, HARD, rng=_no_noise)

    assert out.factors.ntrp_advantage == pytest.approx(0.8)
    assert out.player1_win_probability == pytest.approx(0.95)
    assert out.player1_odds == 1.11
    assert out.player2_odds == 21.0
    assert out.confidence == pytest.approx(0.9)
    assert out.recommendations == [
        "Nikos has NTRP advantage (5.0 vs 3.5)",
        "Nikos in good form (5/5 recent wins)",
    ]


def test_h2h_whitewash_scenario():
    p1 = _player("p1", "Nikos")
    p2 = _player("p2", "Giorgos")
    out = compute_odds(p1, p2, HARD, {"wins": 0, "losses": 5}, rng=_no_noise)

    assert out.factors.head_to_head_advantage == pytest.approx(-0.5208, abs=1e-4)
    assert out.player1_win_probability < 0.5
    assert out.player1_win_probability == pytest.approx(0.35)
    assert out.player2_win_probability == pytest.approx(0.65)
    assert out.player1_odds == 3.0
    assert out.player2_odds == 1.62
    assert out.recommendations == ["Giorgos leads H2H vs Nikos 5-0 (100% win rate)"]


def _matchups():
    p1, p2 = _strong_vs_weak()
    yield p1, p2, None
    yield _player("a", "A"), _player("b", "B"), {"wins": 0, "losses": 5}
    yield (
        _player("a", "A", ntrp_rating=3.5, surface_win_rates={"clay": 0.8}),
        _player("b", "B", ntrp_rating=3.0, surface_win_rates={"clay": 0.3}, age=40),
        {"wins": 3, "losses": 1, "last_match_result": "W", "last_match_date": "2026-01-10T00:00:00Z"},
    )
    yield (
        _player("a", "A", ntrp_rating=4.5, current_streak=3),
        _player("b", "B", ntrp_rating=4.2, wins=40, losses=5),
        {"wins": 2, "losses": 2, "last_match_result": "L", "last_match_date": "2025-02-01T00:00:00"},
    )


@pytest.mark.parametrize("noise", [0.0, 0.5, 0.999])
def test_complement_odds_confidence_and_bounds(noise):
    for p1, p2, h2h in _matchups():
        out = compute_odds(p1, p2, HARD, h2h, rng=lambda: noise)
        assert out.player1_win_probability + out.player2_win_probability == pytest.approx(1.0)
        for odds in (out.player1_odds, out.player2_odds):
            assert math.isfinite(odds)
            assert odds > 1.0
        assert 0.3 <= out.confidence <= 0.95
        assert len(out.recommendations) <= 3
        lo, hi = probability_bounds(abs(p1["ntrp_rating"] - p2["ntrp_rating"]))
        assert lo <= out.player1_win_probability <= hi


def _flip(h2h):
    if h2h is None:
        return None
    return HeadToHeadRecord.model_validate(h2h).flipped()


def test_swapping_players_mirrors_probability():
    for p1, p2, h2h in _matchups():
        fwd = compute_odds(p1, p2, HARD, h2h, rng=_no_noise)
        rev = compute_odds(p2, p1, HARD, _flip(h2h), rng=_no_noise)
        assert rev.player1_win_probability == pytest.approx(fwd.player2_win_probability, abs=1e-9)


def test_higher_rating_never_lowers_probability():
    p2 = _player("b", "B", ntrp_rating=3.0)
    previous = 0.0
    for i in range(11):
        p1 = _player("a", "A", ntrp_rating=3.0 + i * 0.25)
        prob = compute_odds(p1, p2, HARD, rng=_no_noise).player1_win_probability
        assert prob >= previous
        previous = prob


@pytest.mark.parametrize("noise", [0.0, 0.5, 0.999])
def test_equal_players_stay_near_even(noise):
    out = compute_odds(_player("a", "A"), _player("b", "B"), HARD, rng=lambda: noise)
    assert 0.45 <= out.player1_win_probability <= 0.55


def test_accepts_models_and_loose_surface():
    p1 = PlayerOddsProfile(**_player("a", "A", ntrp_rating=4.5))
    p2 = PlayerOddsProfile(**_player("b", "B"))
    out = compute_odds(p1, p2, MatchContext(surface="hard"), rng=_no_noise)
    assert out.player1_win_probability > 0.5


def test_invalid_profile_raises():
    bad = _player("a", "A", last5=["W", "W"])
    with pytest.raises(InvalidOddsInput) as exc:
        compute_odds(bad, _player("b", "B"), HARD, rng=_no_noise)
    assert "player1" in str(exc.value)
    assert "last5" in str(exc.value)


def test_invalid_surface_raises():
    with pytest.raises(InvalidOddsInput):
        compute_odds(_player("a", "A"), _player("b", "B"), {"surface": "ice"}, rng=_no_noise)


def test_non_positive_rating_raises():
    with pytest.raises(InvalidOddsInput):
        compute_odds(_player("a", "A", ntrp_rating=0), _player("b", "B"), HARD, rng=_no_noise)
