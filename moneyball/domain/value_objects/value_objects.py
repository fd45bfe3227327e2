"""
Domain Value Objects Module

Value objects are immutable objects that are defined by their attributes rather than identity.
They encapsulate validation logic and provide type safety.
"""

import math
from dataclasses import dataclass
from enum import Enum


# Allowed drift of the outcome probabilities from a total of 1.0
PROBABILITY_SUM_TOLERANCE = 1e-9


class ConfidenceLevel(str, Enum):
    """How decisively one outcome dominates the probability distribution."""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


@dataclass(frozen=True)
class TeamForm:
    """
    Recent-form summary of a team over its sampled match window.

    Averages are per match actually sampled; form points are the raw
    sum over the window (W=3, D=1, L=0).
    """
    avg_xg: float
    avg_goals_scored: float
    avg_goals_conceded: float
    form_points: float
    matches_used: int = 0

    @property
    def points_per_match(self) -> float:
        """Average points per sampled match."""
        if self.matches_used == 0:
            return 0.0
        return self.form_points / self.matches_used


@dataclass(frozen=True)
class OutcomeProbabilities:
    """
    Normalized match outcome probabilities.

    The three values are non-negative and sum to 1.0.
    """
    home_win: float
    draw: float
    away_win: float

    def __post_init__(self):
        for prob in self.as_tuple():
            if not math.isfinite(prob) or prob < 0.0:
                raise ValueError(f"Probability must be a non-negative number, got {prob}")

        total = sum(self.as_tuple())
        if abs(total - 1.0) > PROBABILITY_SUM_TOLERANCE:
            raise ValueError(f"Match outcome probabilities must sum to 1, got {total}")

    @property
    def max_probability(self) -> float:
        """Largest of the three outcome probabilities."""
        return max(self.as_tuple())

    @property
    def favourite(self) -> str:
        """
        Get the most likely outcome.

        Returns:
            'home_win', 'draw' or 'away_win' (ties resolve in that order)
        """
        probs = {
            "home_win": self.home_win,
            "draw": self.draw,
            "away_win": self.away_win,
        }
        return max(probs, key=probs.get)

    def as_tuple(self) -> tuple[float, float, float]:
        """Return (home_win, draw, away_win)."""
        return (self.home_win, self.draw, self.away_win)
