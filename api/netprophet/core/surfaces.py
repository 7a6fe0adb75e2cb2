# api/netprophet/core/surfaces.py

import re
from typing import Optional

HARD_COURT = "Hard Court"
CLAY_COURT = "Clay Court"
GRASS_COURT = "Grass Court"
INDOOR = "Indoor"

SURFACES = (HARD_COURT, CLAY_COURT, GRASS_COURT, INDOOR)

# Keys are lowercased with spaces/underscores/dashes removed, so
# "Hard Court", "hardCourt", "hard_court" and "hard" all land on the same entry.
SURFACE_MAP = {
    "hardcourt": HARD_COURT,
    "hard": HARD_COURT,
    "outdoorhard": HARD_COURT,
    "claycourt": CLAY_COURT,
    "clay": CLAY_COURT,
    "redclay": CLAY_COURT,
    "greenclay": CLAY_COURT,
    "grasscourt": GRASS_COURT,
    "grass": GRASS_COURT,
    "indoor": INDOOR,
    "indoorhard": INDOOR,
    "carpet": INDOOR,
}


def _surface_slug(value: str) -> str:
    return re.sub(r"[\s_\-]+", "", value.strip().lower())


def normalize_surface(surface_raw: Optional[str]) -> Optional[str]:
    """Map a loose surface spelling onto the match surface vocabulary, or None."""
    if not surface_raw:
        return None
    return SURFACE_MAP.get(_surface_slug(surface_raw))
