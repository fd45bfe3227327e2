"""
Data Transfer Objects (DTOs) Module

DTOs are used to transfer data between layers and to/from callers.
They use Pydantic for validation and serialization.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from moneyball.domain.entities.entities import Match, MatchOutcome, PredictionResult, Team
from moneyball.domain.value_objects.value_objects import ConfidenceLevel


# ============================================================
# Request DTOs
# ============================================================

class PredictionRequestDTO(BaseModel):
    """Request for a single match prediction."""
    home_team_id: int = Field(..., description="Home team identifier")
    away_team_id: int = Field(..., description="Away team identifier")
    include_ai_analysis: bool = Field(default=False, description="Request AI commentary")


# ============================================================
# Response DTOs
# ============================================================

class ProbabilitiesDTO(BaseModel):
    """Match outcome probabilities."""
    home_win: float = Field(..., ge=0, le=1)
    draw: float = Field(..., ge=0, le=1)
    away_win: float = Field(..., ge=0, le=1)


class PredictionResponseDTO(BaseModel):
    """Response for a match prediction."""
    prediction_id: Optional[int] = None
    home_team_name: str
    away_team_name: str
    home_win_probability: float = Field(..., ge=0, le=1)
    draw_probability: float = Field(..., ge=0, le=1)
    away_win_probability: float = Field(..., ge=0, le=1)
    predicted_home_xg: float = Field(..., ge=0)
    predicted_away_xg: float = Field(..., ge=0)
    most_likely_score: str
    recommended_outcome: MatchOutcome
    confidence: ConfidenceLevel
    ai_analysis: Optional[str] = None
    warnings: list[str] = Field(default_factory=list)


class PredictionRecordDTO(BaseModel):
    """Stored prediction data transfer object."""
    id: Optional[int] = None
    home_team_id: int
    away_team_id: int
    home_team_name: str
    away_team_name: str
    probabilities: ProbabilitiesDTO
    predicted_home_xg: float = Field(..., ge=0)
    predicted_away_xg: float = Field(..., ge=0)
    recommended_outcome: MatchOutcome
    confidence: ConfidenceLevel
    ai_analysis: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_result(cls, result: PredictionResult) -> "PredictionRecordDTO":
        """Build the DTO from a domain PredictionResult."""
        return cls(
            id=result.id,
            home_team_id=result.home_team_id,
            away_team_id=result.away_team_id,
            home_team_name=result.home_team_name,
            away_team_name=result.away_team_name,
            probabilities=ProbabilitiesDTO(
                home_win=result.probabilities.home_win,
                draw=result.probabilities.draw,
                away_win=result.probabilities.away_win,
            ),
            predicted_home_xg=result.predicted_home_xg,
            predicted_away_xg=result.predicted_away_xg,
            recommended_outcome=result.recommended_outcome,
            confidence=result.confidence,
            ai_analysis=result.ai_analysis,
            created_at=result.created_at,
        )


class TeamDTO(BaseModel):
    """Team data transfer object."""
    id: int
    name: str
    league: Optional[str] = None
    season_average_xg: Optional[float] = None
    season_average_goals_conceded: Optional[float] = None
    matches_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0

    @classmethod
    def from_team(cls, team: Team) -> "TeamDTO":
        return cls(
            id=team.id,
            name=team.name,
            league=team.league,
            season_average_xg=team.season_average_xg,
            season_average_goals_conceded=team.season_average_goals_conceded,
            matches_played=team.matches_played,
            wins=team.wins,
            draws=team.draws,
            losses=team.losses,
        )


class MatchDTO(BaseModel):
    """Fixture or result data transfer object."""
    id: int
    home_team: TeamDTO
    away_team: TeamDTO
    match_date: datetime
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    outcome: Optional[MatchOutcome] = None

    @classmethod
    def from_match(cls, match: Match) -> "MatchDTO":
        played = match.is_played
        return cls(
            id=match.id,
            home_team=TeamDTO.from_team(match.home_team),
            away_team=TeamDTO.from_team(match.away_team),
            match_date=match.match_date,
            home_score=match.home_score if played else None,
            away_score=match.away_score if played else None,
            outcome=match.outcome,
        )
