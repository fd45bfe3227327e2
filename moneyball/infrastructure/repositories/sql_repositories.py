"""
SQL Repositories Module

SQLAlchemy implementations of the domain repository interfaces.
"""

import asyncio
import functools
import logging
from typing import Callable, Optional, TypeVar

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from moneyball.domain.entities.entities import Match, PredictionResult, Team
from moneyball.domain.repositories.repositories import (
    MatchRepository,
    PredictionRepository,
    TeamRepository,
)
from moneyball.domain.value_objects.value_objects import ConfidenceLevel, OutcomeProbabilities
from moneyball.infrastructure.database.database_service import DatabaseService
from moneyball.infrastructure.database.models import MatchModel, PredictionModel, TeamModel

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _to_team(record: TeamModel) -> Team:
    return Team(
        id=record.id,
        name=record.name,
        league=record.league,
        season_average_xg=record.average_xg,
        season_average_goals_conceded=record.average_goals_conceded,
        season_average_xa=record.average_xa,
        goals_scored=record.goals_scored or 0,
        goals_conceded=record.goals_conceded or 0,
        wins=record.wins or 0,
        draws=record.draws or 0,
        losses=record.losses or 0,
    )


def _to_match(record: MatchModel) -> Match:
    return Match(
        id=record.id,
        home_team=_to_team(record.home_team),
        away_team=_to_team(record.away_team),
        match_date=record.match_date,
        home_score=record.home_score,
        away_score=record.away_score,
        home_xg=record.home_xg,
        away_xg=record.away_xg,
        home_xa=record.home_xa,
        away_xa=record.away_xa,
        home_possession=record.home_possession,
        away_possession=record.away_possession,
        home_shots=record.home_shots,
        away_shots=record.away_shots,
        completed=bool(record.completed),
    )


def _to_prediction(record: PredictionModel) -> PredictionResult:
    return PredictionResult(
        id=record.id,
        home_team_id=record.home_team_id,
        away_team_id=record.away_team_id,
        home_team_name=record.home_team_name,
        away_team_name=record.away_team_name,
        probabilities=OutcomeProbabilities(
            home_win=record.home_win_prob,
            draw=record.draw_prob,
            away_win=record.away_win_prob,
        ),
        predicted_home_xg=record.predicted_home_xg,
        predicted_away_xg=record.predicted_away_xg,
        confidence=ConfidenceLevel(record.confidence),
        ai_analysis=record.ai_analysis,
        created_at=record.created_at,
    )


class SqlRepository:
    """
    Base for repositories over a synchronous SQLAlchemy session.

    Each query runs in the default executor with its own session, so
    concurrent awaits overlap and the event loop stays free.
    """

    def __init__(self, db_service: DatabaseService):
        self.db_service = db_service

    async def _run(self, query: Callable[..., T], *args) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(self._in_session, query, *args))

    def _in_session(self, query: Callable[..., T], *args) -> T:
        session = self.db_service.get_session()
        try:
            return query(session, *args)
        finally:
            session.close()


class SqlTeamRepository(SqlRepository, TeamRepository):
    """Team lookups backed by the `teams` table."""

    async def get_team_by_id(self, team_id: int) -> Optional[Team]:
        return await self._run(self._team_by_id, team_id)

    async def get_all_teams(self) -> list[Team]:
        return await self._run(self._all_teams)

    async def get_teams_by_league(self, league: str) -> list[Team]:
        return await self._run(self._teams_by_league, league)

    async def get_team_by_name(self, name: str) -> Optional[Team]:
        return await self._run(self._team_by_name, name)

    @staticmethod
    def _team_by_id(session: Session, team_id: int) -> Optional[Team]:
        record = session.get(TeamModel, team_id)
        return _to_team(record) if record else None

    @staticmethod
    def _all_teams(session: Session) -> list[Team]:
        records = session.query(TeamModel).order_by(TeamModel.name).all()
        return [_to_team(r) for r in records]

    @staticmethod
    def _teams_by_league(session: Session, league: str) -> list[Team]:
        records = session.query(TeamModel).filter(
            TeamModel.league == league,
        ).order_by(TeamModel.name).all()
        return [_to_team(r) for r in records]

    @staticmethod
    def _team_by_name(session: Session, name: str) -> Optional[Team]:
        record = session.query(TeamModel).filter(TeamModel.name == name).first()
        return _to_team(record) if record else None


class SqlMatchRepository(SqlRepository, MatchRepository):
    """Match history and fixtures backed by the `matches` table."""

    async def get_completed_matches(self, team_id: int) -> list[Match]:
        """
        Get completed matches where the team played home or away, most recent first.
        The form window is applied by the domain layer, not here.
        """
        return await self._run(self._completed_matches, team_id)

    async def get_upcoming_matches(self) -> list[Match]:
        return await self._run(self._upcoming_matches)

    @staticmethod
    def _completed_matches(session: Session, team_id: int) -> list[Match]:
        records = session.query(MatchModel).filter(
            or_(MatchModel.home_team_id == team_id, MatchModel.away_team_id == team_id),
            MatchModel.completed.is_(True),
        ).order_by(MatchModel.match_date.desc(), MatchModel.id.desc()).all()
        return [_to_match(r) for r in records]

    @staticmethod
    def _upcoming_matches(session: Session) -> list[Match]:
        records = session.query(MatchModel).filter(
            MatchModel.completed.is_(False),
        ).order_by(MatchModel.match_date, MatchModel.id).all()
        return [_to_match(r) for r in records]


class SqlPredictionRepository(SqlRepository, PredictionRepository):
    """Result sink and prediction history backed by the `predictions` table."""

    async def save(self, result: PredictionResult) -> PredictionResult:
        return await self._run(self._save, result)

    async def get_all(self) -> list[PredictionResult]:
        return await self._run(self._query, None, PredictionModel.id)

    async def get_by_id(self, prediction_id: int) -> Optional[PredictionResult]:
        return await self._run(self._by_id, prediction_id)

    async def get_recent(self, limit: int = 10) -> list[PredictionResult]:
        return await self._run(self._query, None, None, limit)

    async def get_by_teams(self, home_team_id: int, away_team_id: int) -> list[PredictionResult]:
        return await self._run(self._query, and_(
            PredictionModel.home_team_id == home_team_id,
            PredictionModel.away_team_id == away_team_id,
        ))

    async def get_by_team(self, team_id: int) -> list[PredictionResult]:
        return await self._run(self._query, or_(
            PredictionModel.home_team_id == team_id,
            PredictionModel.away_team_id == team_id,
        ))

    async def get_by_confidence(self, confidence: ConfidenceLevel) -> list[PredictionResult]:
        return await self._run(self._query, PredictionModel.confidence == confidence.value)

    @staticmethod
    def _save(session: Session, result: PredictionResult) -> PredictionResult:
        record = PredictionModel(
            home_team_id=result.home_team_id,
            away_team_id=result.away_team_id,
            home_team_name=result.home_team_name,
            away_team_name=result.away_team_name,
            home_win_prob=result.probabilities.home_win,
            draw_prob=result.probabilities.draw,
            away_win_prob=result.probabilities.away_win,
            predicted_home_xg=result.predicted_home_xg,
            predicted_away_xg=result.predicted_away_xg,
            ai_analysis=result.ai_analysis,
            confidence=result.confidence.value,
            created_at=result.created_at,
        )
        try:
            session.add(record)
            session.commit()
            session.refresh(record)
            return _to_prediction(record)
        except Exception as e:
            session.rollback()
            logger.error(f"Failed to save prediction: {e}")
            raise

    @staticmethod
    def _by_id(session: Session, prediction_id: int) -> Optional[PredictionResult]:
        record = session.get(PredictionModel, prediction_id)
        return _to_prediction(record) if record else None

    @staticmethod
    def _query(session: Session, criterion=None, order_by=None, limit: Optional[int] = None) -> list[PredictionResult]:
        """Filtered predictions, newest first unless an ordering is given."""
        query = session.query(PredictionModel)
        if criterion is not None:
            query = query.filter(criterion)
        if order_by is not None:
            query = query.order_by(order_by)
        else:
            query = query.order_by(PredictionModel.created_at.desc(), PredictionModel.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return [_to_prediction(r) for r in query.all()]
