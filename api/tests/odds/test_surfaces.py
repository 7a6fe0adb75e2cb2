from __future__ import annotations

import pytest

from netprophet.core.surfaces import CLAY_COURT, GRASS_COURT, HARD_COURT, INDOOR, normalize_surface


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Hard Court", HARD_COURT),
        ("hardCourt", HARD_COURT),
        ("hard_court", HARD_COURT),
        (" HARD ", HARD_COURT),
        ("red clay", CLAY_COURT),
        ("Clay Court", CLAY_COURT),
        ("grass", GRASS_COURT),
        ("Indoor Hard", INDOOR),
        ("carpet", INDOOR),
    ],
)
def test_normalize_surface(raw, expected):
    assert normalize_surface(raw) == expected


def test_unknown_surface_is_none():
    assert normalize_surface("ice") is None
    assert normalize_surface("") is None
    assert normalize_surface(None) is None
