"""
Dependencies Module

Provides dependency injection for scripts and callers.
Contains factory functions for creating use case dependencies.
"""

from functools import lru_cache

from moneyball.domain.services.form_service import FormService
from moneyball.domain.services.prediction_service import PredictionService
from moneyball.infrastructure.ai.gemini_service import GeminiCommentaryProvider
from moneyball.infrastructure.database.database_service import DatabaseService
from moneyball.infrastructure.repositories.sql_repositories import (
    SqlMatchRepository,
    SqlPredictionRepository,
    SqlTeamRepository,
)
from moneyball.application.use_cases.use_cases import (
    GetPredictionHistoryUseCase,
    GetTeamsUseCase,
    GetUpcomingMatchesUseCase,
    PredictMatchUseCase,
)


@lru_cache()
def get_database_service() -> DatabaseService:
    """Get database service (cached)."""
    return DatabaseService()


@lru_cache()
def get_team_repository() -> SqlTeamRepository:
    """Get team repository (cached)."""
    return SqlTeamRepository(get_database_service())


@lru_cache()
def get_match_repository() -> SqlMatchRepository:
    """Get match repository (cached)."""
    return SqlMatchRepository(get_database_service())


@lru_cache()
def get_prediction_repository() -> SqlPredictionRepository:
    """Get prediction repository (cached)."""
    return SqlPredictionRepository(get_database_service())


@lru_cache()
def get_form_service() -> FormService:
    """Get form service (cached)."""
    return FormService()


@lru_cache()
def get_prediction_service() -> PredictionService:
    """Get prediction service (cached)."""
    return PredictionService()


@lru_cache()
def get_commentary_provider() -> GeminiCommentaryProvider:
    """Get Gemini commentary provider (cached)."""
    return GeminiCommentaryProvider()


def get_predict_match_use_case() -> PredictMatchUseCase:
    """Get the match prediction use case."""
    return PredictMatchUseCase(
        team_repository=get_team_repository(),
        match_repository=get_match_repository(),
        prediction_repository=get_prediction_repository(),
        form_service=get_form_service(),
        prediction_service=get_prediction_service(),
        commentary_provider=get_commentary_provider(),
    )


def get_prediction_history_use_case() -> GetPredictionHistoryUseCase:
    """Get the prediction history use case."""
    return GetPredictionHistoryUseCase(get_prediction_repository())


def get_teams_use_case() -> GetTeamsUseCase:
    """Get the team lookup use case."""
    return GetTeamsUseCase(get_team_repository())


def get_upcoming_matches_use_case() -> GetUpcomingMatchesUseCase:
    """Get the upcoming fixtures use case."""
    return GetUpcomingMatchesUseCase(get_match_repository())
