"""
Domain Entities Module

This module contains the core domain entities for the match prediction system.
These entities represent the core business concepts and are independent of any infrastructure.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from enum import Enum

from moneyball.domain.constants import POINTS_FOR_WIN, POINTS_FOR_DRAW, POINTS_FOR_LOSS
from moneyball.domain.value_objects.value_objects import (
    ConfidenceLevel,
    OutcomeProbabilities,
)
from moneyball.utils.time_utils import get_current_time


class MatchOutcome(Enum):
    """Possible outcomes of a football match."""
    HOME_WIN = "home_win"
    DRAW = "draw"
    AWAY_WIN = "away_win"


class FormResult(Enum):
    """Result of a match from one team's point of view."""
    WIN = "W"
    DRAW = "D"
    LOSS = "L"

    @property
    def points(self) -> int:
        """League points earned for this result."""
        if self is FormResult.WIN:
            return POINTS_FOR_WIN
        if self is FormResult.DRAW:
            return POINTS_FOR_DRAW
        return POINTS_FOR_LOSS


@dataclass(frozen=True)
class Team:
    """
    Represents a football team.

    Attributes:
        id: Unique identifier for the team
        name: Full name of the team
        league: League the team plays in (e.g., "Premier League")
        season_average_xg: Average expected goals per match this season
        season_average_goals_conceded: Average goals conceded per match this season
        season_average_xa: Average expected assists per match this season
        goals_scored: Total goals scored this season
        goals_conceded: Total goals conceded this season
    """
    id: int
    name: str
    league: Optional[str] = None
    season_average_xg: Optional[float] = None
    season_average_goals_conceded: Optional[float] = None
    season_average_xa: Optional[float] = None
    goals_scored: int = 0
    goals_conceded: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0

    def __post_init__(self):
        if not self.name:
            raise ValueError("Team name cannot be empty")

    @property
    def matches_played(self) -> int:
        """Season matches played."""
        return self.wins + self.draws + self.losses


@dataclass
class Match:
    """
    Represents a football match between two teams.

    Attributes:
        id: Unique identifier for the match
        home_team: The home team
        away_team: The away team
        match_date: Date and time of the match, used for recency ordering
        home_score: Goals scored by home team (None if not played)
        away_score: Goals scored by away team (None if not played)
        home_xg: Expected goals created by the home team
        away_xg: Expected goals created by the away team
        completed: Whether the match has finished
    """
    id: int
    home_team: Team
    away_team: Team
    match_date: datetime
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    home_xg: Optional[float] = None
    away_xg: Optional[float] = None
    home_xa: Optional[float] = None
    away_xa: Optional[float] = None
    home_possession: Optional[float] = None
    away_possession: Optional[float] = None
    home_shots: Optional[int] = None
    away_shots: Optional[int] = None
    completed: bool = False

    @property
    def is_played(self) -> bool:
        """Check if the match has finished with both scores recorded."""
        return self.completed and self.home_score is not None and self.away_score is not None

    @property
    def outcome(self) -> Optional[MatchOutcome]:
        """Get the match outcome if played."""
        if not self.is_played:
            return None
        if self.home_score > self.away_score:
            return MatchOutcome.HOME_WIN
        elif self.home_score < self.away_score:
            return MatchOutcome.AWAY_WIN
        return MatchOutcome.DRAW

    def involves(self, team_id: int) -> bool:
        """Check if the given team played in this match."""
        return self.home_team.id == team_id or self.away_team.id == team_id


@dataclass(frozen=True)
class PredictionResult:
    """
    Final record of a match prediction, handed to the result sink.

    Attributes:
        home_team_id: ID of the home team
        away_team_id: ID of the away team
        probabilities: Normalized home win / draw / away win probabilities
        predicted_home_xg: Expected goals for the home team
        predicted_away_xg: Expected goals for the away team
        confidence: HIGH, MEDIUM or LOW
        ai_analysis: Optional free-text commentary
        id: Storage identifier, assigned by the sink
        created_at: Timestamp when the prediction was created
    """
    home_team_id: int
    away_team_id: int
    home_team_name: str
    away_team_name: str
    probabilities: OutcomeProbabilities
    predicted_home_xg: float
    predicted_away_xg: float
    confidence: ConfidenceLevel
    ai_analysis: Optional[str] = None
    id: Optional[int] = None
    created_at: datetime = field(default_factory=get_current_time)

    @property
    def recommended_outcome(self) -> MatchOutcome:
        """Get the outcome with the highest probability."""
        return MatchOutcome(self.probabilities.favourite)
