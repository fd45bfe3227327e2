"""
Unit Tests for Prediction Service

Tests the expected goals model, the Poisson outcome distribution
and confidence classification.
"""

import math
import pytest

from moneyball.domain.exceptions import InvalidModelInputException
from moneyball.domain.services.prediction_service import PredictionService
from moneyball.domain.value_objects.value_objects import (
    ConfidenceLevel,
    OutcomeProbabilities,
    TeamForm,
)


def make_form(avg_xg=1.5, scored=1.5, conceded=1.5, points=15.0, matches=10):
    return TeamForm(
        avg_xg=avg_xg,
        avg_goals_scored=scored,
        avg_goals_conceded=conceded,
        form_points=points,
        matches_used=matches,
    )


@pytest.fixture
def service():
    """Create prediction service instance."""
    return PredictionService()


class TestEstimateGoals:
    """Tests for the expected goals estimator."""

    def test_average_teams_away(self, service):
        """Average form against an average defense returns the base xG."""
        xg = service.estimate_goals(make_form(avg_xg=1.5), make_form(), is_home=False)
        assert xg == pytest.approx(1.5)

    def test_home_advantage_is_additive(self, service):
        home = service.estimate_goals(make_form(avg_xg=1.5), make_form(), is_home=True)
        away = service.estimate_goals(make_form(avg_xg=1.5), make_form(), is_home=False)
        assert home - away == pytest.approx(0.35)

    def test_leaky_defense_scales_up(self, service):
        base = service.estimate_goals(make_form(avg_xg=1.2), make_form(conceded=1.5), is_home=False)
        leaky = service.estimate_goals(make_form(avg_xg=1.2), make_form(conceded=2.0), is_home=False)
        tight = service.estimate_goals(make_form(avg_xg=1.2), make_form(conceded=1.0), is_home=False)
        assert tight < base < leaky
        assert leaky == pytest.approx(1.2 * 2.0 / 1.5)

    def test_form_multiplier(self, service):
        """24 points gives a 1.3 multiplier, 6 points gives 0.7."""
        good = service.estimate_goals(make_form(avg_xg=1.0, points=24.0), make_form(), is_home=False)
        poor = service.estimate_goals(make_form(avg_xg=1.0, points=6.0), make_form(), is_home=False)
        assert good == pytest.approx(1.3)
        assert poor == pytest.approx(0.7)

    def test_good_home_form_exceeds_base_xg(self, service):
        """Strong attack, good form, leaky opponent and home bonus all push xG up."""
        xg_raw = 2.40 * (1.8 / 1.5) * (1.0 + (24 - 15) / 30.0) + 0.35
        assert xg_raw > 2.40

        xg = service.estimate_goals(
            make_form(avg_xg=2.40, points=24.0),
            make_form(conceded=1.8),
            is_home=True,
        )
        assert xg > 2.40
        assert xg <= 3.5
        assert xg == min(3.5, xg_raw)

    @pytest.mark.parametrize(
        "attacking,defending,is_home",
        [
            (make_form(avg_xg=0.0, points=0.0), make_form(conceded=0.1), False),
            (make_form(avg_xg=0.0, points=0.0), make_form(conceded=0.0), True),
            (make_form(avg_xg=4.0, points=30.0), make_form(conceded=4.0), True),
            (make_form(avg_xg=0.3, points=0.0), make_form(conceded=0.2), False),
            (make_form(avg_xg=10.0, points=0.0), make_form(conceded=9.0), False),
        ],
    )
    def test_output_is_clamped(self, service, attacking, defending, is_home):
        xg = service.estimate_goals(attacking, defending, is_home)
        assert 0.5 <= xg <= 3.5

    def test_non_finite_input_raises(self, service):
        with pytest.raises(InvalidModelInputException):
            service.estimate_goals(make_form(avg_xg=float("nan")), make_form(), is_home=True)

    def test_deterministic(self, service):
        attacking = make_form(avg_xg=1.73, points=19.0)
        defending = make_form(conceded=1.27)
        assert service.estimate_goals(attacking, defending, True) == service.estimate_goals(attacking, defending, True)


class TestPoissonProbability:
    """Tests for the Poisson point mass."""

    def test_poisson_probability(self, service):
        """Test Poisson probability calculation."""
        # P(X=2) when λ=2 should be about 0.27
        prob = service.poisson_probability(2.0, 2)
        assert 0.26 < prob < 0.28

        # P(X=3) when λ=2.5 should be about 0.2138
        assert service.poisson_probability(2.5, 3) == pytest.approx(0.2138, abs=1e-4)

    def test_poisson_probability_edge_cases(self, service):
        """λ=0 should give P(X=0)=1 and P(X>0)=0."""
        assert service.poisson_probability(0.0, 0) == 1.0
        for k in range(1, 6):
            assert service.poisson_probability(0.0, k) == 0.0

    def test_negative_mean_raises(self, service):
        with pytest.raises(InvalidModelInputException):
            service.poisson_probability(-0.5, 1)

    def test_negative_goals_raises(self, service):
        with pytest.raises(InvalidModelInputException):
            service.poisson_probability(1.0, -1)


class TestOutcomeProbabilities:
    """Tests for the scoreline grid and outcome distribution."""

    def test_scoreline_matrix_shape(self, service):
        matrix = service.calculate_scoreline_matrix(1.5, 1.0)
        assert len(matrix) == 6
        assert all(len(row) == 6 for row in matrix)

    def test_truncated_mass_below_one(self, service):
        """Mass above 5 goals per side is dropped before normalization."""
        matrix = service.calculate_scoreline_matrix(3.5, 3.5)
        assert math.fsum(sum(matrix, [])) < 1.0

    def test_calculate_outcome_probabilities(self, service):
        """Test outcome probability calculation."""
        probs = service.calculate_outcome_probabilities(1.5, 1.0)

        assert abs(probs.home_win + probs.draw + probs.away_win - 1.0) < 1e-9
        assert probs.home_win > probs.away_win

    @pytest.mark.parametrize(
        "home_xg,away_xg",
        [(0.5, 0.5), (0.5, 3.5), (3.5, 0.5), (1.37, 2.91), (3.5, 3.5), (0.01, 0.02), (2.2, 1.1)],
    )
    def test_probabilities_are_normalized(self, service, home_xg, away_xg):
        probs = service.calculate_outcome_probabilities(home_xg, away_xg)
        assert all(p >= 0 for p in probs.as_tuple())
        assert abs(sum(probs.as_tuple()) - 1.0) < 1e-9

    @pytest.mark.parametrize("a,b", [(1.5, 1.0), (0.5, 3.5), (2.74, 1.77), (1.2, 1.2), (0.83, 2.06)])
    def test_swap_symmetry(self, service, a, b):
        """Swapping the means mirrors home and away probabilities exactly."""
        forward = service.calculate_outcome_probabilities(a, b)
        swapped = service.calculate_outcome_probabilities(b, a)
        assert forward.home_win == swapped.away_win
        assert forward.away_win == swapped.home_win
        assert forward.draw == swapped.draw

    def test_both_zero_is_certain_draw(self, service):
        probs = service.calculate_outcome_probabilities(0.0, 0.0)
        assert probs.draw == 1.0
        assert probs.home_win == 0.0
        assert probs.away_win == 0.0

    @pytest.mark.parametrize("home_xg,away_xg", [(-0.1, 1.0), (1.0, float("inf")), (float("nan"), 1.0)])
    def test_invalid_expected_goals_raise(self, service, home_xg, away_xg):
        with pytest.raises(InvalidModelInputException):
            service.calculate_outcome_probabilities(home_xg, away_xg)

    def test_most_likely_scoreline(self, service):
        assert service.most_likely_scoreline(0.5, 0.5) == (0, 0)
        assert service.most_likely_scoreline(2.6, 0.6) == (2, 0)


class TestClassifyConfidence:
    """Tests for confidence classification."""

    @pytest.mark.parametrize(
        "probs,expected",
        [
            ((0.60, 0.25, 0.15), ConfidenceLevel.MEDIUM),
            ((0.600001, 0.25, 0.149999), ConfidenceLevel.HIGH),
            ((0.45, 0.30, 0.25), ConfidenceLevel.LOW),
            ((0.450001, 0.30, 0.249999), ConfidenceLevel.MEDIUM),
            ((0.20, 0.10, 0.70), ConfidenceLevel.HIGH),
            ((0.34, 0.33, 0.33), ConfidenceLevel.LOW),
        ],
    )
    def test_boundaries(self, service, probs, expected):
        probabilities = OutcomeProbabilities(*probs)
        assert service.classify_confidence(probabilities) == expected

    def test_draw_can_drive_confidence(self, service):
        probabilities = OutcomeProbabilities(home_win=0.2, draw=0.5, away_win=0.3)
        assert service.classify_confidence(probabilities) == ConfidenceLevel.MEDIUM
