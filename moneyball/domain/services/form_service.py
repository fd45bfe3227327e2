"""
Form Domain Service

Reduces a team's recent match history to a TeamForm summary.
"""

import logging
import math
from typing import Sequence

from moneyball.domain.constants import (
    FORM_WINDOW_SIZE,
    DEFAULT_AVG_XG,
    DEFAULT_AVG_GOALS_SCORED,
    DEFAULT_AVG_GOALS_CONCEDED,
)
from moneyball.domain.entities.entities import FormResult, Match, Team
from moneyball.domain.exceptions import InvalidModelInputException
from moneyball.domain.value_objects.value_objects import TeamForm

logger = logging.getLogger(__name__)


class FormService:
    """
    Domain service for recent-form aggregation.

    Pure and stateless: the same team and match list always produce the
    same TeamForm.
    """

    def __init__(self, window_size: int = FORM_WINDOW_SIZE):
        if window_size < 1:
            raise ValueError("Form window must contain at least one match")
        self.window_size = window_size

    @staticmethod
    def classify(scored_by_us: int, scored_by_them: int) -> FormResult:
        """Win, draw or loss from one team's point of view."""
        if scored_by_us > scored_by_them:
            return FormResult.WIN
        if scored_by_us < scored_by_them:
            return FormResult.LOSS
        return FormResult.DRAW

    @staticmethod
    def fallback_form(team: Team) -> TeamForm:
        """Form used when a team has no completed matches yet."""
        avg_xg = team.season_average_xg if team.season_average_xg is not None else DEFAULT_AVG_XG
        return TeamForm(
            avg_xg=avg_xg,
            avg_goals_scored=DEFAULT_AVG_GOALS_SCORED,
            avg_goals_conceded=DEFAULT_AVG_GOALS_CONCEDED,
            form_points=0.0,
            matches_used=0,
        )

    def calculate_team_form(
        self,
        team: Team,
        recent_matches: Sequence[Match],
    ) -> TeamForm:
        """
        Calculate recent form for a team.

        Args:
            team: The team whose form is calculated
            recent_matches: Completed matches involving the team, most recent first

        Returns:
            TeamForm averaged over at most `window_size` matches

        Raises:
            InvalidModelInputException: If a match does not involve the team
                or carries negative scores / xG
        """
        completed = [m for m in recent_matches if m.completed]
        skipped = len(recent_matches) - len(completed)
        if skipped:
            logger.debug(f"Ignoring {skipped} unfinished matches for {team.name}")

        sample = completed[:self.window_size]
        if not sample:
            return self.fallback_form(team)

        total_xg = 0.0
        total_goals_scored = 0.0
        total_goals_conceded = 0.0
        form_points = 0.0

        for match in sample:
            if not match.involves(team.id):
                raise InvalidModelInputException(
                    f"Match {match.id} does not involve team {team.id}"
                )
            if match.home_team.id == team.id:
                xg_for, goals_for, goals_against = match.home_xg, match.home_score, match.away_score
            else:
                xg_for, goals_for, goals_against = match.away_xg, match.away_score, match.home_score

            self._validate_match_values(match)

            total_xg += xg_for if xg_for is not None else 0.0
            if goals_for is not None:
                total_goals_scored += goals_for
            if goals_against is not None:
                total_goals_conceded += goals_against

            # A missing score on either side earns no points
            if goals_for is not None and goals_against is not None:
                form_points += self.classify(goals_for, goals_against).points

        matches_used = len(sample)
        return TeamForm(
            avg_xg=total_xg / matches_used,
            avg_goals_scored=total_goals_scored / matches_used,
            avg_goals_conceded=total_goals_conceded / matches_used,
            form_points=form_points,
            matches_used=matches_used,
        )

    @staticmethod
    def _validate_match_values(match: Match) -> None:
        for label, score in (("home_score", match.home_score), ("away_score", match.away_score)):
            if score is not None and score < 0:
                raise InvalidModelInputException(f"Match {match.id} has negative {label}: {score}")

        for label, xg in (("home_xg", match.home_xg), ("away_xg", match.away_xg)):
            if xg is not None and (not math.isfinite(xg) or xg < 0):
                raise InvalidModelInputException(f"Match {match.id} has invalid {label}: {xg}")
