#!/usr/bin/env python3
"""
Match Prediction Script
Predicts a match between two stored teams and prints the result as JSON.

Usage:
    python scripts/predict_match.py --seed --home 1 --away 2
    python scripts/predict_match.py --home 1 --away 2 --ai
    python scripts/predict_match.py --recent
    python scripts/predict_match.py --teams --league "Premier League"
    python scripts/predict_match.py --team Arsenal
    python scripts/predict_match.py --upcoming
    python scripts/predict_match.py --team-predictions 1
"""
import sys
import os
import json
import asyncio
import argparse
import logging

# Add parent directory to path to import the package
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from moneyball.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def print_json(payload) -> None:
    if isinstance(payload, list):
        payload = [item.model_dump(mode="json") for item in payload]
    else:
        payload = payload.model_dump(mode="json")
    print(json.dumps(payload, indent=2))


async def run_command(args: argparse.Namespace) -> int:
    from moneyball.application.dtos.dtos import PredictionRequestDTO
    from moneyball.dependencies import (
        get_predict_match_use_case,
        get_prediction_history_use_case,
        get_teams_use_case,
        get_upcoming_matches_use_case,
    )

    if args.recent:
        print_json(await get_prediction_history_use_case().get_recent())
        return 0
    if args.team_predictions is not None:
        print_json(await get_prediction_history_use_case().get_by_team(args.team_predictions))
        return 0
    if args.teams:
        print_json(await get_teams_use_case().list_teams(args.league))
        return 0
    if args.team:
        print_json(await get_teams_use_case().get_by_name(args.team))
        return 0
    if args.upcoming:
        print_json(await get_upcoming_matches_use_case().execute())
        return 0

    if args.home is None or args.away is None:
        logger.error("--home and --away are required unless a listing option is given")
        return 2

    request = PredictionRequestDTO(
        home_team_id=args.home,
        away_team_id=args.away,
        include_ai_analysis=args.ai,
    )
    print_json(await get_predict_match_use_case().execute(request))
    return 0


async def main(args: argparse.Namespace) -> int:
    from moneyball.dependencies import get_database_service, get_commentary_provider
    from moneyball.domain.exceptions import PredictionException
    from moneyball.infrastructure.database.seed import seed_sample_teams

    db_service = get_database_service()
    db_service.create_tables()
    if args.seed:
        seed_sample_teams(db_service)

    try:
        return await run_command(args)
    except PredictionException as e:
        logger.error(f"Prediction failed: {e}")
        return 1
    finally:
        await get_commentary_provider().close()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Predict a football match from recent form")
    parser.add_argument("--home", type=int, help="Home team ID")
    parser.add_argument("--away", type=int, help="Away team ID")
    parser.add_argument("--ai", action="store_true", help="Include Gemini analysis")
    parser.add_argument("--seed", action="store_true", help="Insert sample teams into an empty database")
    parser.add_argument("--recent", action="store_true", help="List the most recent predictions")
    parser.add_argument("--team-predictions", type=int, metavar="TEAM_ID",
                        help="List predictions involving a team")
    parser.add_argument("--teams", action="store_true", help="List teams")
    parser.add_argument("--league", help="Restrict --teams to one league")
    parser.add_argument("--team", metavar="NAME", help="Show a team by name")
    parser.add_argument("--upcoming", action="store_true", help="List matches not yet played")
    return parser.parse_args(argv)


if __name__ == "__main__":
    configure_logging()
    sys.exit(asyncio.run(main(parse_args())))
