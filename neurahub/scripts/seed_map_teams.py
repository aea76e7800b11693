"""
Seed Map Teams Script
This script populates the map_teams table from the map teams config.
Safe to run repeatedly: rows are upserted by id and teams dropped from the
config are removed.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from neurahub.config.map_teams_config import MAP_TEAMS
from neurahub.database.supabase_client import SupabaseClient
from supabase import Client
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def to_row(team: dict) -> dict:
    """Config entry -> map_teams row. Stored coordinates are the unshifted city coordinates."""
    return {
        "id": team["id"],
        "number": team["number"],
        "name": team["name"],
        "location": team["location"],
        "description": team["description"],
        "lat": team["lat"],
        "lng": team["lng"],
        "website": team["website"],
        "awards": team["awards"],
        "logo": team["logo"],
    }


def seed_map_teams(supabase: Client) -> int:
    """Upsert every configured team"""
    logger.info("Seeding map teams...")

    rows = [to_row(team) for team in MAP_TEAMS]
    supabase.table("map_teams").upsert(rows, on_conflict="id").execute()

    logger.info(f"Map teams seeded: {len(rows)} upserted")
    return len(rows)


def prune_map_teams(supabase: Client) -> int:
    """Remove teams that are no longer in the config"""
    configured_ids = {team["id"] for team in MAP_TEAMS}
    existing = supabase.table("map_teams").select("id").execute()
    stale_ids = [row["id"] for row in (existing.data or []) if row["id"] not in configured_ids]

    if stale_ids:
        supabase.table("map_teams")\
            .delete()\
            .in_("id", stale_ids)\
            .execute()
        logger.info(f"Removed {len(stale_ids)} teams no longer in config")
    return len(stale_ids)


def main():
    """Main function to seed the map teams"""
    try:
        supabase = SupabaseClient.get_service_client()

        logger.info("Starting map teams seeding...")
        count = seed_map_teams(supabase)
        removed = prune_map_teams(supabase)

        logger.info("Seeding completed successfully!")
        logger.info(f"Total: {count} teams processed, {removed} removed")

    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
