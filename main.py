import argparse
import asyncio
import json
import logging
import sys
from os import getenv
from pathlib import Path

from dotenv import load_dotenv

from debt_walk.config import DEFAULT_ACTIVITY_NAME, DEFAULT_GOAL_MILES, ClientConfig
from debt_walk.orchestrator import AuthOrchestrator
from debt_walk.utils import configure_logging

# Load environment from .env (if present)
load_dotenv(encoding="utf-8")

logger = logging.getLogger(__name__)


def load_config() -> ClientConfig | None:
    """Build the ClientConfig from the environment, or None if incomplete."""
    client_id = getenv("STRAVA_CLIENT_ID")
    client_secret = getenv("STRAVA_CLIENT_SECRET")
    redirect_uri = getenv("STRAVA_REDIRECT_URI")
    if not client_id or not client_secret or not redirect_uri:
        logger.critical(
            "Missing Strava credentials. Please set STRAVA_CLIENT_ID, STRAVA_CLIENT_SECRET and "
            "STRAVA_REDIRECT_URI in your environment or .env file."
        )
        return None

    athlete_id = getenv("STRAVA_ATHLETE_ID")
    try:
        return ClientConfig(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            athlete_id=int(athlete_id) if athlete_id else None,
            goal_miles=float(getenv("GOAL_MILES", str(DEFAULT_GOAL_MILES))),
            activity_name=getenv("ACTIVITY_NAME", DEFAULT_ACTIVITY_NAME),
            store_file=Path(getenv("STORE_FILE", ".strava_session.json")),
        )
    except ValueError as e:
        logger.critical(f"Invalid configuration value: {e}")
        return None


async def run_auth(config: ClientConfig, location: str) -> int:
    async with AuthOrchestrator(config) as orchestrator:
        result = await orchestrator.initialize(location)
        if result is None:
            print("No authorization code found. Open this URL to authorize:")
            print(orchestrator.authorization_url)
            return 1
        print(json.dumps(result.to_dict(), indent=2))
        return 0 if result.success else 1


async def run_stats(config: ClientConfig) -> int:
    async with AuthOrchestrator(config) as orchestrator:
        saved = orchestrator.load_session()
        if saved is None:
            print("Not authenticated. Open this URL to authorize, then run `auth <callback-url>`:")
            print(orchestrator.authorization_url)
            return 1
        stats = await orchestrator.get_stats(saved.access_token, progress=True)

    print(f"\n--- {config.activity_name} Report ---")
    print(f"  Activities: {stats.activity_count}")
    print(f"  Total distance: {stats.total_distance} mi")
    print(f"  Remaining: {stats.remaining_miles:.2f} of {config.goal_miles:g} mi")
    for view in stats.activities:
        print(f"  {view.date}  {view.distance} mi  {view.elevation_gain} m  (#{view.id})")
    print("------------------------\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Track Debt Walk miles on Strava.")
    parser.add_argument("-v", "--verbose", action="store_true", help="show progress messages in the terminal")
    sub = parser.add_subparsers(dest="command", required=True)
    auth = sub.add_parser("auth", help="handle the OAuth redirect URL")
    auth.add_argument("location", nargs="?", default="", help="URL Strava redirected to")
    sub.add_parser("stats", help="print progress against the goal")
    args = parser.parse_args(argv)

    configure_logging(getenv("LOG_FILE", "debt_walk.log"), truncate=True, verbose=args.verbose)

    config = load_config()
    if config is None:
        return 2

    try:
        if args.command == "auth":
            return asyncio.run(run_auth(config, args.location))
        return asyncio.run(run_stats(config))
    except KeyboardInterrupt:
        print("\nStopped by user.")
        return 130
    except Exception as e:
        logger.critical(f"Fatal Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
