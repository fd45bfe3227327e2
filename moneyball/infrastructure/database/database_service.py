"""
Database Service

Owns the SQLAlchemy engine and session factory for the prediction store.
"""

import logging
from typing import Optional
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from moneyball.config import DATABASE_URL

logger = logging.getLogger(__name__)

Base = declarative_base()


class DatabaseService:
    """Engine, session factory and schema creation for one database URL."""

    def __init__(self, db_url: Optional[str] = None):
        self.db_url = db_url or DATABASE_URL
        url = make_url(self.db_url)

        # Repository queries run on executor threads
        connect_args = {"check_same_thread": False} if url.get_backend_name() == "sqlite" else {}
        self.engine = create_engine(url, pool_pre_ping=True, connect_args=connect_args)
        self.session_factory = sessionmaker(bind=self.engine, autoflush=False)

        logger.info(f"Database ready: {url.render_as_string(hide_password=True)}")

    def create_tables(self):
        """Create the teams, matches and predictions tables if missing."""
        # Models register themselves on Base when imported
        from moneyball.infrastructure.database import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created")

    def get_session(self) -> Session:
        return self.session_factory()
