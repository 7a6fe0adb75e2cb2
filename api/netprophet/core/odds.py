# api/netprophet/core/odds.py
from typing import Optional

BOOKMAKER_MARGIN = 0.05


def decimal_odds(p: float, margin: float = BOOKMAKER_MARGIN) -> float:
    # Margin is applied per side, so both sides price above fair.
    return round((1.0 / p) * (1.0 + margin), 2)


def format_odds(odds: float) -> str:
    """Decimal odds as an American-style display string (+150 / -200)."""
    if odds >= 2.0:
        return f"+{round((odds - 1) * 100)}"
    return f"-{round(100 / (odds - 1))}"


def odds_to_probability(odds: float) -> float:
    return 1.0 / odds


def expected_value(odds: float, stake: float, probability: float) -> float:
    return (odds - 1) * stake * probability - stake * (1 - probability)


def prob_to_american(p: Optional[float]) -> Optional[int]:
    """Fair (no-margin) American line for a win probability."""
    if p is None or p <= 0 or p >= 1:
        return None
    if p >= 0.5:
        return int(-round((p / (1 - p)) * 100))
    return int(round(((1 - p) / p) * 100))


def american_to_prob(odds: int) -> float:
    if odds < 0:
        return (-odds) / ((-odds) + 100.0)
    return 100.0 / (odds + 100.0)
