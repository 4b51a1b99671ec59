#!/usr/bin/env python3
"""
Seed an empty portal with the default teams and starter notices.
"""

import os
import sys

# Add the parent directory to the path so we can import from api
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.seed import SEED_TEAMS, SEED_NOTICES
from services.mongodb import get_mongodb_service, close_mongodb_connection
from services.teams import TeamService
from services.notices import NoticeService


def seed_data(year: int):
    """Insert default records; collections that already hold data are left alone."""
    print(f"Seeding portal data for {year}...")

    mongo_svc = get_mongodb_service()
    team_svc = TeamService(mongo_svc, default_year=year)
    notice_svc = NoticeService(mongo_svc)

    teams = team_svc.seed_teams(SEED_TEAMS, year)
    print(f"  teams added: {teams}" if teams else "  teams already present, skipped")

    notices = notice_svc.seed_notices(SEED_NOTICES)
    print(f"  notices added: {notices}" if notices else "  notices already present, skipped")

    for rank, team in team_svc.list_teams(year):
        print(f"  {rank:>2}. {team.name:<24} {team.total_score:>4}")

    print("Seeding complete")


if __name__ == "__main__":
    try:
        seed_data(int(os.getenv("DEFAULT_TEAM_YEAR", "2025")))
    finally:
        close_mongodb_connection()
