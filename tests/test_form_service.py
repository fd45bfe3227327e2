"""
Unit Tests for Form Service

Tests recent-form aggregation from match history.
"""

import pytest
from datetime import datetime, timedelta

from moneyball.domain.entities.entities import Team, Match, FormResult
from moneyball.domain.exceptions import InvalidModelInputException
from moneyball.domain.services.form_service import FormService


TEAM = Team(id=1, name="Manchester City", season_average_xg=2.4)
OPPONENT = Team(id=2, name="Arsenal")
BASE_DATE = datetime(2024, 5, 1, 15, 0)


def make_match(
    match_id,
    days_ago,
    team_home=True,
    scored=2,
    conceded=1,
    xg_for=1.8,
    xg_against=0.9,
    completed=True,
):
    """Build a match from the perspective of TEAM."""
    home, away = (TEAM, OPPONENT) if team_home else (OPPONENT, TEAM)
    home_score, away_score = (scored, conceded) if team_home else (conceded, scored)
    home_xg, away_xg = (xg_for, xg_against) if team_home else (xg_against, xg_for)
    return Match(
        id=match_id,
        home_team=home,
        away_team=away,
        match_date=BASE_DATE - timedelta(days=days_ago),
        home_score=home_score,
        away_score=away_score,
        home_xg=home_xg,
        away_xg=away_xg,
        completed=completed,
    )


class TestClassify:
    """Tests for win/draw/loss classification."""

    def test_classify(self):
        assert FormService.classify(3, 1) == FormResult.WIN
        assert FormService.classify(1, 1) == FormResult.DRAW
        assert FormService.classify(0, 2) == FormResult.LOSS


class TestCalculateTeamForm:
    """Tests for FormService.calculate_team_form."""

    @pytest.fixture
    def service(self):
        return FormService()

    def test_empty_history_uses_season_average(self, service):
        """New teams fall back to their season xG."""
        form = service.calculate_team_form(TEAM, [])
        assert form.avg_xg == 2.4
        assert form.avg_goals_scored == 1.5
        assert form.avg_goals_conceded == 1.5
        assert form.form_points == 0.0
        assert form.matches_used == 0

    def test_empty_history_without_season_average(self, service):
        form = service.calculate_team_form(Team(id=9, name="Promoted FC"), [])
        assert form.avg_xg == 1.5
        assert form.form_points == 0.0

    def test_home_and_away_roles(self, service):
        """Stats are taken from the team's own side of each match."""
        matches = [
            make_match(1, 1, team_home=True, scored=3, conceded=0, xg_for=2.5),
            make_match(2, 8, team_home=False, scored=1, conceded=1, xg_for=1.1),
            make_match(3, 15, team_home=False, scored=0, conceded=2, xg_for=0.6),
        ]
        form = service.calculate_team_form(TEAM, matches)

        assert form.matches_used == 3
        assert form.avg_xg == pytest.approx((2.5 + 1.1 + 0.6) / 3)
        assert form.avg_goals_scored == pytest.approx(4 / 3)
        assert form.avg_goals_conceded == pytest.approx(3 / 3)
        # Win + draw + loss
        assert form.form_points == 4.0

    def test_form_points_are_summed_not_averaged(self, service):
        matches = [make_match(i, i, scored=2, conceded=0) for i in range(8)]
        form = service.calculate_team_form(TEAM, matches)
        assert form.form_points == 24.0

    def test_window_uses_ten_most_recent(self, service):
        """Matches beyond the first ten are ignored."""
        recent = [make_match(i, i, scored=1, conceded=0) for i in range(10)]
        older = [make_match(100 + i, 100 + i, scored=0, conceded=5, xg_for=0.1) for i in range(5)]

        form_recent = service.calculate_team_form(TEAM, recent)
        form_all = service.calculate_team_form(TEAM, recent + older)

        assert form_all == form_recent
        assert form_all.matches_used == 10
        assert form_all.form_points == 30.0

    def test_averages_divide_by_actual_sample_size(self, service):
        matches = [make_match(i, i, scored=2, conceded=1) for i in range(4)]
        form = service.calculate_team_form(TEAM, matches)
        assert form.avg_goals_scored == 2.0
        assert form.avg_goals_conceded == 1.0

    def test_missing_xg_counts_as_zero(self, service):
        matches = [
            make_match(1, 1, xg_for=None),
            make_match(2, 2, xg_for=2.0),
        ]
        form = service.calculate_team_form(TEAM, matches)
        assert form.avg_xg == 1.0

    def test_missing_score_only_affects_that_field(self, service):
        """A missing score earns no points and is skipped only for its own total."""
        matches = [
            make_match(1, 1, scored=2, conceded=None),
            make_match(2, 2, scored=1, conceded=1),
        ]
        form = service.calculate_team_form(TEAM, matches)

        assert form.matches_used == 2
        assert form.avg_goals_scored == 1.5
        assert form.avg_goals_conceded == 0.5
        assert form.form_points == 1.0

    def test_unfinished_matches_are_ignored(self, service):
        matches = [
            make_match(1, 0, scored=0, conceded=0, completed=False),
            make_match(2, 3, scored=2, conceded=0),
        ]
        form = service.calculate_team_form(TEAM, matches)
        assert form.matches_used == 1
        assert form.form_points == 3.0

    def test_deterministic(self, service):
        matches = [make_match(i, i, scored=i % 3, conceded=1, xg_for=0.3 * i) for i in range(12)]
        first = service.calculate_team_form(TEAM, matches)
        second = service.calculate_team_form(TEAM, matches)
        assert first == second

    def test_match_without_team_raises(self, service):
        stranger = Match(
            id=99,
            home_team=Team(id=5, name="Chelsea"),
            away_team=Team(id=6, name="Liverpool"),
            match_date=BASE_DATE,
            home_score=1,
            away_score=0,
            completed=True,
        )
        with pytest.raises(InvalidModelInputException, match="does not involve"):
            service.calculate_team_form(TEAM, [stranger])

    def test_negative_score_raises(self, service):
        with pytest.raises(InvalidModelInputException, match="negative"):
            service.calculate_team_form(TEAM, [make_match(1, 1, scored=-1)])

    def test_non_finite_xg_raises(self, service):
        with pytest.raises(InvalidModelInputException, match="invalid"):
            service.calculate_team_form(TEAM, [make_match(1, 1, xg_for=float("nan"))])

    def test_custom_window_size(self):
        service = FormService(window_size=5)
        matches = [make_match(i, i) for i in range(8)]
        assert service.calculate_team_form(TEAM, matches).matches_used == 5

    def test_invalid_window_size(self):
        with pytest.raises(ValueError):
            FormService(window_size=0)
