"""
Application Use Cases Module

Use cases represent application-specific business rules and orchestrate
the flow of data between the domain layer and the infrastructure layer.
"""

import asyncio
import logging
from typing import Optional

from moneyball.config import COMMENTARY_TIMEOUT_SECONDS
from moneyball.domain.constants import (
    COMMENTARY_UNAVAILABLE_MESSAGE,
    RECENT_PREDICTIONS_LIMIT,
)
from moneyball.domain.entities.entities import PredictionResult, Team
from moneyball.domain.exceptions import (
    CommentaryUnavailableException,
    NotFoundException,
)
from moneyball.domain.repositories.repositories import (
    CommentaryProvider,
    MatchRepository,
    PredictionRepository,
    TeamRepository,
)
from moneyball.domain.services.form_service import FormService
from moneyball.domain.services.prediction_service import PredictionService
from moneyball.domain.value_objects.value_objects import (
    ConfidenceLevel,
    OutcomeProbabilities,
    TeamForm,
)
from moneyball.application.dtos.dtos import (
    PredictionRequestDTO,
    PredictionResponseDTO,
    PredictionRecordDTO,
    TeamDTO,
    MatchDTO,
)


logger = logging.getLogger(__name__)


class PredictMatchUseCase:
    """
    Use case for predicting a single match.

    Steps:
    1. Get both teams (unknown ID aborts before any computation)
    2. Get recent completed matches for both teams
    3. Calculate team form
    4. Predict expected goals for both sides
    5. Calculate win/draw/loss probabilities and confidence
    6. Optionally ask the commentary provider for an analysis
    7. Save the prediction to the result sink
    """

    def __init__(
        self,
        team_repository: TeamRepository,
        match_repository: MatchRepository,
        prediction_repository: PredictionRepository,
        form_service: FormService,
        prediction_service: PredictionService,
        commentary_provider: Optional[CommentaryProvider] = None,
        commentary_timeout: float = COMMENTARY_TIMEOUT_SECONDS,
    ):
        self.team_repository = team_repository
        self.match_repository = match_repository
        self.prediction_repository = prediction_repository
        self.form_service = form_service
        self.prediction_service = prediction_service
        self.commentary_provider = commentary_provider
        self.commentary_timeout = commentary_timeout

    async def execute(self, request: PredictionRequestDTO) -> PredictionResponseDTO:
        """
        Predict the outcome of a match between two teams.

        Raises:
            NotFoundException: If either team does not exist
            InvalidModelInputException: If match data or derived xG is malformed
        """
        home_team = await self._get_team(request.home_team_id, "Home")
        away_team = await self._get_team(request.away_team_id, "Away")

        logger.info(f"Predicting match: {home_team.name} vs {away_team.name}")

        home_matches, away_matches = await asyncio.gather(
            self.match_repository.get_completed_matches(home_team.id),
            self.match_repository.get_completed_matches(away_team.id),
        )

        home_form = self.form_service.calculate_team_form(home_team, home_matches)
        away_form = self.form_service.calculate_team_form(away_team, away_matches)
        for team, form in ((home_team, home_form), (away_team, away_form)):
            logger.info(
                f"Form {team.name}: {form.form_points:.0f} pts over {form.matches_used} matches "
                f"({form.points_per_match:.2f} per match), xG {form.avg_xg:.2f}"
            )

        predicted_home_xg = self.prediction_service.estimate_goals(home_form, away_form, is_home=True)
        predicted_away_xg = self.prediction_service.estimate_goals(away_form, home_form, is_home=False)

        logger.info(
            f"Predicted xG: {home_team.name} = {predicted_home_xg:.2f}, "
            f"{away_team.name} = {predicted_away_xg:.2f}"
        )

        probs = self.prediction_service.calculate_outcome_probabilities(predicted_home_xg, predicted_away_xg)
        confidence = self.prediction_service.classify_confidence(probs)
        most_likely = self.prediction_service.most_likely_scoreline(predicted_home_xg, predicted_away_xg)

        logger.info(
            f"Probabilities: Home={probs.home_win:.3f}, Draw={probs.draw:.3f}, "
            f"Away={probs.away_win:.3f} ({confidence.value})"
        )

        ai_analysis = None
        if request.include_ai_analysis:
            ai_analysis = await self._get_commentary(
                home_team, away_team, home_form, away_form,
                probs, predicted_home_xg, predicted_away_xg,
            )

        result = PredictionResult(
            home_team_id=home_team.id,
            away_team_id=away_team.id,
            home_team_name=home_team.name,
            away_team_name=away_team.name,
            probabilities=probs,
            predicted_home_xg=predicted_home_xg,
            predicted_away_xg=predicted_away_xg,
            confidence=confidence,
            ai_analysis=ai_analysis,
        )

        warnings = []
        prediction_id = None
        try:
            saved = await self.prediction_repository.save(result)
            prediction_id = saved.id
            logger.info(f"Prediction saved with ID: {prediction_id}")
        except Exception as e:
            logger.warning(f"Failed to save prediction for {home_team.name} vs {away_team.name}: {e}")
            warnings.append(f"Prediction could not be saved: {e}")

        return PredictionResponseDTO(
            prediction_id=prediction_id,
            home_team_name=home_team.name,
            away_team_name=away_team.name,
            home_win_probability=probs.home_win,
            draw_probability=probs.draw,
            away_win_probability=probs.away_win,
            predicted_home_xg=predicted_home_xg,
            predicted_away_xg=predicted_away_xg,
            most_likely_score=f"{most_likely[0]}-{most_likely[1]}",
            recommended_outcome=result.recommended_outcome,
            confidence=confidence,
            ai_analysis=ai_analysis,
            warnings=warnings,
        )

    async def _get_team(self, team_id: int, side: str) -> Team:
        team = await self.team_repository.get_team_by_id(team_id)
        if team is None:
            raise NotFoundException(f"{side} team not found with ID: {team_id}")
        return team

    async def _get_commentary(
        self,
        home_team: Team,
        away_team: Team,
        home_form: TeamForm,
        away_form: TeamForm,
        probs: OutcomeProbabilities,
        home_xg: float,
        away_xg: float,
    ) -> str:
        """Commentary never invalidates the numeric result; failures fall back to a placeholder."""
        if self.commentary_provider is None:
            logger.warning("AI analysis requested but no commentary provider is configured")
            return COMMENTARY_UNAVAILABLE_MESSAGE

        logger.info("Requesting AI analysis...")
        try:
            return await asyncio.wait_for(
                self.commentary_provider.generate_commentary(
                    home_team, away_team, home_form, away_form, probs, home_xg, away_xg,
                ),
                timeout=self.commentary_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"AI analysis timed out after {self.commentary_timeout}s")
        except CommentaryUnavailableException as e:
            logger.warning(f"AI analysis unavailable: {e}")
        except Exception as e:
            logger.error(f"Unexpected error from commentary provider: {e}", exc_info=True)
        return COMMENTARY_UNAVAILABLE_MESSAGE


class GetPredictionHistoryUseCase:
    """Use case for reading stored predictions."""

    def __init__(self, prediction_repository: PredictionRepository):
        self.prediction_repository = prediction_repository

    async def get_all(self) -> list[PredictionRecordDTO]:
        results = await self.prediction_repository.get_all()
        return [PredictionRecordDTO.from_result(r) for r in results]

    async def get_by_id(self, prediction_id: int) -> PredictionRecordDTO:
        result = await self.prediction_repository.get_by_id(prediction_id)
        if result is None:
            raise NotFoundException(f"Prediction not found with ID: {prediction_id}")
        return PredictionRecordDTO.from_result(result)

    async def get_recent(self, limit: int = RECENT_PREDICTIONS_LIMIT) -> list[PredictionRecordDTO]:
        results = await self.prediction_repository.get_recent(limit)
        return [PredictionRecordDTO.from_result(r) for r in results]

    async def get_by_teams(self, home_team_id: int, away_team_id: int) -> list[PredictionRecordDTO]:
        results = await self.prediction_repository.get_by_teams(home_team_id, away_team_id)
        return [PredictionRecordDTO.from_result(r) for r in results]

    async def get_by_team(self, team_id: int) -> list[PredictionRecordDTO]:
        results = await self.prediction_repository.get_by_team(team_id)
        return [PredictionRecordDTO.from_result(r) for r in results]

    async def get_by_confidence(self, confidence: ConfidenceLevel) -> list[PredictionRecordDTO]:
        results = await self.prediction_repository.get_by_confidence(confidence)
        return [PredictionRecordDTO.from_result(r) for r in results]


class GetTeamsUseCase:
    """Use case for looking up teams."""

    def __init__(self, team_repository: TeamRepository):
        self.team_repository = team_repository

    async def list_teams(self, league: Optional[str] = None) -> list[TeamDTO]:
        """List all teams, or only those of one league."""
        if league:
            teams = await self.team_repository.get_teams_by_league(league)
        else:
            teams = await self.team_repository.get_all_teams()
        return [TeamDTO.from_team(t) for t in teams]

    async def get_by_name(self, name: str) -> TeamDTO:
        team = await self.team_repository.get_team_by_name(name)
        if team is None:
            raise NotFoundException(f"Team not found with name: {name}")
        return TeamDTO.from_team(team)


class GetUpcomingMatchesUseCase:
    """Use case for listing fixtures that have not been played."""

    def __init__(self, match_repository: MatchRepository):
        self.match_repository = match_repository

    async def execute(self) -> list[MatchDTO]:
        matches = await self.match_repository.get_upcoming_matches()
        logger.info(f"Found {len(matches)} upcoming matches")
        return [MatchDTO.from_match(m) for m in matches]
