"""
Prediction Service Module

This domain service contains the core prediction logic:
1. Expected goals from recent form (multiplicative model plus home advantage)
2. Poisson Distribution over a bounded scoreline grid for match outcomes
3. Confidence classification of the resulting distribution

This is a pure domain service with no external dependencies.
"""

import math
import functools

from moneyball.domain.constants import (
    LEAGUE_AVG_GOALS_CONCEDED,
    AVERAGE_FORM_POINTS,
    FORM_POINTS_SCALE,
    HOME_ADVANTAGE,
    MIN_EXPECTED_GOALS,
    MAX_EXPECTED_GOALS,
    MAX_GOALS,
    HIGH_CONFIDENCE_THRESHOLD,
    MEDIUM_CONFIDENCE_THRESHOLD,
)
from moneyball.domain.exceptions import InvalidModelInputException
from moneyball.domain.value_objects.value_objects import (
    ConfidenceLevel,
    OutcomeProbabilities,
    TeamForm,
)


class PredictionService:
    """
    Domain service for generating match predictions.

    Uses a form-adjusted expected goals model and treats each side's goals
    as an independent Poisson variable.
    """

    def __init__(self, max_goals: int = MAX_GOALS):
        """Initialize the prediction service."""
        self.max_goals = max_goals

    def estimate_goals(
        self,
        attacking: TeamForm,
        defending: TeamForm,
        is_home: bool,
    ) -> float:
        """
        Calculate expected goals for the attacking side of a fixture.

        Formula: xG = (avg_xg × defensive_adjustment × form_multiplier) + home_advantage

        - defensive_adjustment: opponent concessions relative to a baseline defense
          (2.0 conceded / 1.5 baseline = 1.33, easier to score against)
        - form_multiplier: 24 points vs the 15-point average = 1.3 boost,
          6 points = 0.7 penalty
        - home_advantage: flat 0.35 goals for the home side

        Args:
            attacking: Form of the team whose goals are estimated
            defending: Form of the opponent
            is_home: Whether the attacking team plays at home

        Returns:
            Expected goals clamped to [0.5, 3.5]
        """
        defensive_adjustment = defending.avg_goals_conceded / LEAGUE_AVG_GOALS_CONCEDED
        form_multiplier = 1.0 + ((attacking.form_points - AVERAGE_FORM_POINTS) / FORM_POINTS_SCALE)
        home_advantage = HOME_ADVANTAGE if is_home else 0.0

        xg = (attacking.avg_xg * defensive_adjustment * form_multiplier) + home_advantage
        if not math.isfinite(xg):
            raise InvalidModelInputException(
                f"Expected goals is not finite (avg_xg={attacking.avg_xg}, "
                f"conceded={defending.avg_goals_conceded}, form={attacking.form_points})"
            )

        # Keep xG realistic
        return max(MIN_EXPECTED_GOALS, min(MAX_EXPECTED_GOALS, xg))

    @staticmethod
    @functools.lru_cache(maxsize=1024)
    def poisson_probability(expected: float, actual: int) -> float:
        """
        Calculate Poisson probability.

        P(X = k) = (λ^k * e^(-λ)) / k!

        λ = 0 is the degenerate distribution: P(X=0) = 1 and P(X>0) = 0.

        Args:
            expected: Expected value (λ)
            actual: Actual value (k)

        Returns:
            Probability of exactly 'actual' events occurring
        """
        if not math.isfinite(expected) or expected < 0:
            raise InvalidModelInputException(f"Poisson mean must be finite and non-negative, got {expected}")
        if actual < 0:
            raise InvalidModelInputException(f"Goal count cannot be negative, got {actual}")

        return (math.pow(expected, actual) * math.exp(-expected)) / math.factorial(actual)

    @staticmethod
    def _validate_expected_goals(home_expected: float, away_expected: float) -> None:
        for label, value in (("home", home_expected), ("away", away_expected)):
            if not math.isfinite(value) or value < 0:
                raise InvalidModelInputException(
                    f"Expected goals for {label} side must be finite and non-negative, got {value}"
                )

    def calculate_scoreline_matrix(
        self,
        home_expected: float,
        away_expected: float,
    ) -> list[list[float]]:
        """
        Joint probability of every scoreline on the bounded grid.

        Returns:
            matrix[h][a] = P(home scores h) × P(away scores a), h and a in [0, max_goals]
        """
        self._validate_expected_goals(home_expected, away_expected)

        home_probs = [self.poisson_probability(home_expected, k) for k in range(self.max_goals + 1)]
        away_probs = [self.poisson_probability(away_expected, k) for k in range(self.max_goals + 1)]

        return [
            [home_probs[home_goals] * away_probs[away_goals] for away_goals in range(self.max_goals + 1)]
            for home_goals in range(self.max_goals + 1)
        ]

    def calculate_outcome_probabilities(
        self,
        home_expected: float,
        away_expected: float,
    ) -> OutcomeProbabilities:
        """
        Calculate match outcome probabilities using Poisson distribution.

        Mass beyond max_goals per side is dropped, then the three buckets are
        rescaled to sum to 1. Buckets are summed with math.fsum so swapping the
        two means mirrors the home and away probabilities exactly.

        Args:
            home_expected: Expected goals for home team
            away_expected: Expected goals for away team

        Returns:
            Normalized OutcomeProbabilities

        Raises:
            InvalidModelInputException: On negative or non-finite expected goals
        """
        matrix = self.calculate_scoreline_matrix(home_expected, away_expected)

        home_win_mass = []
        draw_mass = []
        away_win_mass = []

        for home_goals, row in enumerate(matrix):
            for away_goals, prob in enumerate(row):
                if home_goals > away_goals:
                    home_win_mass.append(prob)
                elif home_goals == away_goals:
                    draw_mass.append(prob)
                else:
                    away_win_mass.append(prob)

        home_win = math.fsum(home_win_mass)
        draw = math.fsum(draw_mass)
        away_win = math.fsum(away_win_mass)

        # Normalize to ensure sum equals 1
        total = math.fsum((home_win, draw, away_win))
        if total <= 0:
            raise InvalidModelInputException(
                f"Scoreline grid has no probability mass (home={home_expected}, away={away_expected})"
            )

        return OutcomeProbabilities(
            home_win=home_win / total,
            draw=draw / total,
            away_win=away_win / total,
        )

    def most_likely_scoreline(
        self,
        home_expected: float,
        away_expected: float,
    ) -> tuple[int, int]:
        """Modal (home_goals, away_goals) cell of the scoreline grid."""
        matrix = self.calculate_scoreline_matrix(home_expected, away_expected)
        best = (0, 0)
        for home_goals, row in enumerate(matrix):
            for away_goals, prob in enumerate(row):
                if prob > matrix[best[0]][best[1]]:
                    best = (home_goals, away_goals)
        return best

    @staticmethod
    def classify_confidence(probabilities: OutcomeProbabilities) -> ConfidenceLevel:
        """
        Calculate confidence level in prediction.

        HIGH: One outcome is very likely (>60%)
        MEDIUM: Clear favorite but not dominant (>45% up to 60%)
        LOW: Very close match, all outcomes possible (45% or less)
        """
        max_prob = probabilities.max_probability

        if max_prob > HIGH_CONFIDENCE_THRESHOLD:
            return ConfidenceLevel.HIGH
        elif max_prob > MEDIUM_CONFIDENCE_THRESHOLD:
            return ConfidenceLevel.MEDIUM
        return ConfidenceLevel.LOW
