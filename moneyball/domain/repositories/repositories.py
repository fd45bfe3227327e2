"""
Domain Repository Interfaces Module

These are abstract interfaces that define how the domain layer accesses data
and external collaborators. Concrete implementations are provided in the
infrastructure layer. This follows the Dependency Inversion Principle (DIP).
"""

from abc import ABC, abstractmethod
from typing import Optional

from moneyball.domain.entities.entities import (
    Team,
    Match,
    PredictionResult,
)
from moneyball.domain.value_objects.value_objects import (
    ConfidenceLevel,
    OutcomeProbabilities,
    TeamForm,
)


class TeamRepository(ABC):
    """Abstract repository for team operations."""

    @abstractmethod
    async def get_team_by_id(self, team_id: int) -> Optional[Team]:
        """Get a specific team by ID."""
        pass

    @abstractmethod
    async def get_all_teams(self) -> list[Team]:
        """Get all teams."""
        pass

    @abstractmethod
    async def get_teams_by_league(self, league: str) -> list[Team]:
        """Get all teams in a league."""
        pass

    @abstractmethod
    async def get_team_by_name(self, name: str) -> Optional[Team]:
        """Get a team by its exact name."""
        pass


class MatchRepository(ABC):
    """Abstract repository for match operations."""

    @abstractmethod
    async def get_completed_matches(self, team_id: int) -> list[Match]:
        """Get completed matches for a team, most recent first."""
        pass

    @abstractmethod
    async def get_upcoming_matches(self) -> list[Match]:
        """Get matches that have not been played yet, soonest first."""
        pass


class PredictionRepository(ABC):
    """Abstract result sink and history store for predictions."""

    @abstractmethod
    async def save(self, result: PredictionResult) -> PredictionResult:
        """Store a prediction and return it with its storage ID."""
        pass

    @abstractmethod
    async def get_all(self) -> list[PredictionResult]:
        """Get every stored prediction."""
        pass

    @abstractmethod
    async def get_by_id(self, prediction_id: int) -> Optional[PredictionResult]:
        """Get a specific prediction by ID."""
        pass

    @abstractmethod
    async def get_recent(self, limit: int = 10) -> list[PredictionResult]:
        """Get the most recent predictions, newest first."""
        pass

    @abstractmethod
    async def get_by_teams(self, home_team_id: int, away_team_id: int) -> list[PredictionResult]:
        """Get predictions for a specific matchup."""
        pass

    @abstractmethod
    async def get_by_team(self, team_id: int) -> list[PredictionResult]:
        """Get predictions where the team plays home or away, newest first."""
        pass

    @abstractmethod
    async def get_by_confidence(self, confidence: ConfidenceLevel) -> list[PredictionResult]:
        """Get predictions with a given confidence level."""
        pass


class CommentaryProvider(ABC):
    """Abstract provider of free-text match commentary."""

    @abstractmethod
    async def generate_commentary(
        self,
        home_team: Team,
        away_team: Team,
        home_form: TeamForm,
        away_form: TeamForm,
        probabilities: OutcomeProbabilities,
        home_xg: float,
        away_xg: float,
    ) -> str:
        """
        Generate commentary for a predicted match.

        Raises:
            CommentaryUnavailableException: If no commentary can be produced
        """
        pass
