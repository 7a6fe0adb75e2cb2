from __future__ import annotations


class InvalidOddsInput(ValueError):
    """Player or match data the odds engine refuses to price."""
