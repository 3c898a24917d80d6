"""
Namibia Hockey data layer - command line entry point.

Reads go to Supabase first and fall back to the local cache (and then to
built-in defaults) when the backend is unreachable.
"""

import argparse
import asyncio
import getpass
import logging
import sys

from adapters.cli.loader import AppContainer, build_container
from config.features import features
from config.settings import settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stderr),
    ],
)
logger = logging.getLogger(__name__)

# Set DEBUG level only for our app loggers, not for noisy libraries
if features.DEBUG_MODE:
    for name in ['adapters', 'core', 'infrastructure', '__main__']:
        logging.getLogger(name).setLevel(logging.DEBUG)
# Silence noisy HTTP logs
logging.getLogger('httpx').setLevel(logging.WARNING)
logging.getLogger('httpcore').setLevel(logging.WARNING)


async def show_teams(app: AppContainer, args) -> int:
    result = await app.team_service.get_teams_with_source()
    for team in result.data:
        print(f"{team.id or '-':>14}  {team.name:<24} {team.division:<12} {team.coach:<20} players={team.players_count or 0}")
    logger.info(f"{len(result.data)} teams ({result.source.value})")
    return 0


async def show_players(app: AppContainer, args) -> int:
    if args.team:
        players = await app.player_service.get_players_by_team(args.team)
    else:
        players = await app.player_service.get_players()
    for p in players:
        print(f"{p.id:>14}  #{p.jersey_number:<3} {p.name:<24} {p.position:<12} team={p.team_id}")
    return 0


async def show_events(app: AppContainer, args) -> int:
    if args.upcoming:
        events = await app.event_service.get_upcoming_events()
    else:
        events = await app.event_service.get_events()
    for e in events:
        print(f"{e.id:>14}  {e.date[:10]} {e.time:<5}  {e.title} @ {e.location} [{e.type}/{e.status}]")
    return 0


async def sign_in(app: AppContainer, args) -> int:
    password = args.password or getpass.getpass("Password: ")
    result = await app.auth_service.sign_in(args.email, password)
    if not result.ok:
        print(f"Sign in failed: {result.error}", file=sys.stderr)
        return 1
    print(f"Signed in as {result.user.email} ({result.user.id})")
    return 0


async def sign_out(app: AppContainer, args) -> int:
    result = await app.auth_service.sign_out()
    if not result.ok:
        logger.warning(f"Remote sign out failed: {result.error} (local session cleared)")
    print("Signed out")
    return 0


async def whoami(app: AppContainer, args) -> int:
    result = await app.auth_service.get_current_user()
    if not result.ok:
        print(result.error, file=sys.stderr)
        return 1
    print(f"{result.user.email} ({result.user.id})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hockey", description=__doc__.strip().splitlines()[0])
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("teams", help="list teams").set_defaults(handler=show_teams)

    players = sub.add_parser("players", help="list players")
    players.add_argument("--team", help="only players of this team id")
    players.set_defaults(handler=show_players)

    events = sub.add_parser("events", help="list events")
    events.add_argument("--upcoming", action="store_true", help="only events from today on")
    events.set_defaults(handler=show_events)

    login = sub.add_parser("sign-in", help="sign in with email and password")
    login.add_argument("email")
    login.add_argument("--password")
    login.set_defaults(handler=sign_in)

    sub.add_parser("sign-out", help="end the stored session").set_defaults(handler=sign_out)
    sub.add_parser("whoami", help="show the signed-in user").set_defaults(handler=whoami)
    return parser


async def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logger.debug("Feature Flags:")
    for key, value in features.to_dict().items():
        logger.debug(f"  {key}: {value}")

    app = build_container(settings)
    try:
        await app.start()
        return await args.handler(app, args)
    finally:
        await app.close()


def run() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Stopped by user (Ctrl+C)")


if __name__ == "__main__":
    run()
