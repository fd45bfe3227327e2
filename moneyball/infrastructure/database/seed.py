"""
Sample data for local development: ten Premier League teams with season stats.
"""

import logging

from moneyball.infrastructure.database.database_service import DatabaseService
from moneyball.infrastructure.database.models import TeamModel

logger = logging.getLogger(__name__)

# (name, average_xg, average_xa, goals_scored, goals_conceded, wins, draws, losses)
SAMPLE_TEAMS = [
    ("Manchester City", 2.40, 1.80, 66, 28, 22, 5, 3),
    ("Arsenal", 2.20, 1.70, 62, 30, 19, 8, 3),
    ("Liverpool", 2.30, 1.75, 64, 32, 20, 6, 4),
    ("Manchester United", 1.90, 1.50, 52, 38, 16, 8, 6),
    ("Chelsea", 1.85, 1.55, 50, 40, 15, 9, 6),
    ("Tottenham", 2.00, 1.60, 54, 42, 17, 7, 6),
    ("Newcastle", 1.80, 1.40, 48, 36, 15, 7, 8),
    ("Brighton", 1.75, 1.45, 46, 44, 14, 8, 8),
    ("Aston Villa", 1.70, 1.35, 44, 46, 13, 9, 8),
    ("West Ham", 1.60, 1.30, 42, 48, 12, 8, 10),
]


def seed_sample_teams(db_service: DatabaseService, league: str = "Premier League") -> int:
    """
    Insert the sample teams if the teams table is empty.

    Returns:
        Number of teams inserted
    """
    session = db_service.get_session()
    try:
        if session.query(TeamModel).count() > 0:
            logger.info("Teams table already populated, skipping seed")
            return 0

        for name, avg_xg, avg_xa, scored, conceded, wins, draws, losses in SAMPLE_TEAMS:
            played = wins + draws + losses
            session.add(TeamModel(
                name=name,
                league=league,
                average_xg=avg_xg,
                average_xa=avg_xa,
                average_goals_conceded=round(conceded / played, 2),
                goals_scored=scored,
                goals_conceded=conceded,
                wins=wins,
                draws=draws,
                losses=losses,
            ))
        session.commit()
        logger.info(f"Seeded {len(SAMPLE_TEAMS)} teams")
        return len(SAMPLE_TEAMS)
    except Exception as e:
        session.rollback()
        logger.error(f"Failed to seed teams: {e}")
        raise
    finally:
        session.close()
