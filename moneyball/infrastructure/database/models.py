"""
SQLAlchemy models for teams, matches and predictions.
"""

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from moneyball.infrastructure.database.database_service import Base
from moneyball.utils.time_utils import get_current_time


class TeamModel(Base):
    """
    SQLAlchemy model for teams and their season statistics.
    """
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False)
    league = Column(String(255), nullable=False)
    goals_scored = Column(Integer, default=0)
    goals_conceded = Column(Integer, default=0)
    average_xg = Column(Float)
    average_xa = Column(Float)
    average_goals_conceded = Column(Float)
    wins = Column(Integer, default=0)
    draws = Column(Integer, default=0)
    losses = Column(Integer, default=0)
    created_at = Column(DateTime, default=get_current_time)


class MatchModel(Base):
    """
    SQLAlchemy model for played and upcoming matches.
    """
    __tablename__ = "matches"

    id = Column(Integer, primary_key=True, autoincrement=True)
    home_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    away_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    home_score = Column(Integer)
    away_score = Column(Integer)
    home_xg = Column(Float)
    away_xg = Column(Float)
    home_xa = Column(Float)
    away_xa = Column(Float)
    home_possession = Column(Float)
    away_possession = Column(Float)
    home_shots = Column(Integer)
    away_shots = Column(Integer)
    match_date = Column(DateTime, nullable=False, index=True)
    completed = Column(Boolean, default=False)
    created_at = Column(DateTime, default=get_current_time)

    home_team = relationship("TeamModel", foreign_keys=[home_team_id], lazy="joined")
    away_team = relationship("TeamModel", foreign_keys=[away_team_id], lazy="joined")


class PredictionModel(Base):
    """
    SQLAlchemy model for stored predictions.
    """
    __tablename__ = "predictions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    home_team_id = Column(Integer, nullable=False)
    away_team_id = Column(Integer, nullable=False)
    home_team_name = Column(String(255), nullable=False)
    away_team_name = Column(String(255), nullable=False)
    home_win_prob = Column(Float, nullable=False)
    draw_prob = Column(Float, nullable=False)
    away_win_prob = Column(Float, nullable=False)
    predicted_home_xg = Column(Float, nullable=False)
    predicted_away_xg = Column(Float, nullable=False)
    ai_analysis = Column(Text)
    confidence = Column(String(20), nullable=False)
    created_at = Column(DateTime, default=get_current_time, index=True)

    __table_args__ = (
        Index("idx_predictions_teams", "home_team_id", "away_team_id"),
    )
