import sys
import argparse
import json
import time
from pathlib import Path
from typing import List, Optional, Sequence

# --- Settings/Logging ---
from fantrax_setup.logging.setup import setup_logging
from fantrax_setup.config.settings import settings

setup_logging()

import httpx
from loguru import logger
from rich import print
from rich.panel import Panel
from rich.table import Table
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from fantrax_setup.errors import LeagueSetupError
from fantrax_setup.models.league_setup import LeagueSetup
from fantrax_setup.models.matchup import MatchupPair
from fantrax_setup.scrapers.league_setup_scraper import LeagueSetupClient
from fantrax_setup.serialization.form_serializer import (
    MATCHUPS_FIELD,
    DIVISIONS_FIELD,
    build_form_payload,
)
from fantrax_setup.services.schedule_editor import matchups_equal, replace_period_matchups
from fantrax_setup.services.schedule_file import (
    changed_periods,
    load_schedule_csv,
    parse_period_range,
)


def fetch_with_retry(client: LeagueSetupClient) -> LeagueSetup:
    """Fetches the setup snapshot, retrying transport failures.

    Only the GET is retried; a submission is never repeated automatically.
    """
    fetch = retry(
        stop=stop_after_attempt(settings.fetch_retry_attempts),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )(client.fetch_league_setup)
    return fetch()


def matchups_table(setup: LeagueSetup, pairs: Sequence[MatchupPair], title: str) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Away")
    table.add_column("Home")
    for idx, pair in enumerate(pairs):
        table.add_row(str(idx), setup.team_label(pair.away_team_id), setup.team_label(pair.home_team_id))
    return table


def parse_pairs(tokens: List[str]) -> List[MatchupPair]:
    try:
        return [MatchupPair.from_token(token) for token in tokens]
    except ValueError as e:
        raise SystemExit(f"error: {e}")


def cmd_show(client: LeagueSetupClient, args: argparse.Namespace) -> None:
    setup = fetch_with_retry(client)

    teams = Table(title=f"Teams ({len(setup.teams)})")
    for column in ("Short", "Name", "Team id", "Owners"):
        teams.add_column(column)
    for team in setup.teams:
        teams.add_row(team.short_name, team.name, team.team_id, str(len(team.owners)))
    print(teams)

    for division in setup.divisions:
        members = ", ".join(setup.team_label(tid) for tid in division.team_ids) or "-"
        print(Panel(members, title=f"{division.name} ({len(division.team_ids)} teams)"))

    periods = setup.sorted_periods()
    print(f"[bold]Matchups:[/bold] {len(periods)} periods ({periods[0]} to {periods[-1]})")
    if args.period is not None:
        print(matchups_table(setup, setup.matchups_for(args.period), f"Period {args.period}"))


def cmd_dump_payload(client: LeagueSetupClient, args: argparse.Namespace) -> None:
    setup = fetch_with_retry(client)
    payload = build_form_payload(setup, args.period)
    decoded = json.dumps(payload.to_decoded_dict(), indent=2, ensure_ascii=False)

    if args.out:
        args.out.write_text(decoded, encoding="utf-8")
        args.out.with_suffix(".txt").write_text(payload.encode(), encoding="utf-8")
        logger.success(f"Saved decoded payload to {args.out} and raw body to {args.out.with_suffix('.txt')}")
    else:
        sys.stdout.write(decoded + "\n")

    print(
        Panel(
            f"{len(payload)} unique keys\n"
            f"{MATCHUPS_FIELD} entries: {len(payload.get_all(MATCHUPS_FIELD))}\n"
            f"{DIVISIONS_FIELD} entries: {len(payload.get_all(DIVISIONS_FIELD))}",
            title="Payload summary",
        )
    )


def cmd_set_period(client: LeagueSetupClient, args: argparse.Namespace) -> None:
    pairs = parse_pairs(args.pairs)
    setup = fetch_with_retry(client)
    updated = replace_period_matchups(setup, args.period, pairs)

    print(matchups_table(setup, setup.matchups_for(args.period), f"Period {args.period}: current"))
    print(matchups_table(updated, updated.matchups_for(args.period), f"Period {args.period}: new"))

    if matchups_equal(setup.matchups_for(args.period), pairs):
        logger.info(f"Period {args.period} already has these matchups; nothing to submit.")
        return
    if args.dry_run:
        logger.info("Dry run: not submitting.")
        return
    client.submit(build_form_payload(updated, args.period))


def cmd_upload(client: LeagueSetupClient, args: argparse.Namespace) -> None:
    target = load_schedule_csv(args.file)
    period_range = parse_period_range(args.periods) if args.periods else None
    setup = fetch_with_retry(client)

    periods = changed_periods(setup, target, period_range)
    logger.info(f"{len(periods)} periods differ from the league schedule")
    if args.dry_run:
        for period in periods:
            print(matchups_table(setup, setup.matchups_for(period), f"Period {period}: current"))
            print(matchups_table(setup, target[period], f"Period {period}: new"))
        logger.info("Dry run complete. Run without --dry-run to upload.")
        return

    for count, period in enumerate(periods, start=1):
        logger.info(f"Uploading period {period} ({count}/{len(periods)})")
        # Stops at the first failure; earlier periods stay saved remotely
        setup = client.set_period_matchups(setup, period, target[period])
        if count < len(periods):
            time.sleep(settings.upload_delay_seconds)
    logger.success(f"Uploaded {len(periods)} periods")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect and edit the matchup schedule of a Fantrax league."
    )
    parser.add_argument("--league-id", help="Overrides FANTRAX_LEAGUE_ID")
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Print teams, divisions and periods")
    show.add_argument("--period", type=int, help="Also print this period's matchups")
    show.set_defaults(handler=cmd_show)

    dump = sub.add_parser("dump-payload", help="Build the submission without sending it")
    dump.add_argument("--period", type=int, required=True)
    dump.add_argument("--out", type=Path, help="Write decoded JSON here (raw body next to it)")
    dump.set_defaults(handler=cmd_dump_payload)

    set_period = sub.add_parser("set-period", help="Replace one period's matchups")
    set_period.add_argument("--period", type=int, required=True)
    set_period.add_argument("pairs", nargs="+", metavar="AWAY_HOME", help="e.g. abc_def or abc_-1 for a bye")
    set_period.add_argument("--dry-run", action="store_true")
    set_period.set_defaults(handler=cmd_set_period)

    upload = sub.add_parser("upload", help="Upload changed periods from a schedule CSV")
    upload.add_argument("file", type=Path)
    upload.add_argument("--periods", help="Inclusive range such as 1-142")
    upload.add_argument("--dry-run", action="store_true")
    upload.set_defaults(handler=cmd_upload)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        with LeagueSetupClient(args.league_id) as client:
            args.handler(client, args)
    except LeagueSetupError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except httpx.HTTPError as e:
        logger.error(f"Network error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
