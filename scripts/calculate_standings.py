#!/usr/bin/env python3
"""
Calculate championship standings from finished matches
"""
import asyncio
import argparse
import json
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from supabase import create_client
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
import logging

from config.settings import (
    DEBUG_MODE,
    LOG_LEVEL,
    PROJECT_NAME,
    VERSION,
    STANDINGS_CONFIG,
    SUPABASE_URL,
    SUPABASE_SERVICE_ROLE_KEY,
    SUPABASE_KEY,
)
from leaguedesk.base import Zone
from leaguedesk.standings import (
    DataUnavailable,
    StandingsConfig,
    StandingsError,
    StandingsTable,
    compute_all_championships,
    compute_championship_standings,
    standings_to_records,
)

# Configure logging for progress visibility
logging.basicConfig(
    level=logging.DEBUG if DEBUG_MODE else getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format='%(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

console = Console()

ZONE_STYLES = {
    Zone.QUALIFICATION: "green",
    Zone.NEUTRAL: None,
    Zone.RELEGATION: "red",
}


def render_table(table: StandingsTable, title: str) -> Table:
    """Build a rich table for one championship"""
    out = Table(title=title, show_lines=False)
    out.add_column("#", justify="right", style="bold")
    out.add_column("Team")
    for header in ["P", "W", "D", "L", "GF", "GA", "GD"]:
        out.add_column(header, justify="right")
    out.add_column("PTS", justify="right", style="bold")

    for entry in table.entries:
        gd = f"+{entry.goal_difference}" if entry.goal_difference > 0 else str(entry.goal_difference)
        out.add_row(
            str(entry.position),
            entry.team.name,
            str(entry.played),
            str(entry.won),
            str(entry.drawn),
            str(entry.lost),
            str(entry.goals_for),
            str(entry.goals_against),
            gd,
            str(entry.points),
            style=ZONE_STYLES[entry.zone],
        )
    return out


def print_standings(table: StandingsTable, as_json: bool):
    if as_json:
        console.print_json(json.dumps(standings_to_records(table)))
        return

    if not table.entries:
        console.print("[yellow]No teams registered in this championship[/yellow]")
        return

    console.print(render_table(table, f"Championship {table.championship_id}"))
    if table.unknown_references:
        console.print(
            f"[yellow]{len(table.unknown_references)} match sides referenced unregistered teams "
            f"and were skipped[/yellow]"
        )


async def main():
    parser = argparse.ArgumentParser(description="Calculate championship standings")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--championship-id", help="Championship to compute")
    target.add_argument("--all", action="store_true", help="Compute every active championship")
    parser.add_argument("--json", action="store_true", help="Print records as JSON")
    args = parser.parse_args()

    key = SUPABASE_SERVICE_ROLE_KEY or SUPABASE_KEY
    if not SUPABASE_URL or not key:
        console.print("[red]SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY (or SUPABASE_KEY) must be set[/red]")
        return 2

    supabase = create_client(SUPABASE_URL, key)
    cfg = StandingsConfig(
        QUALIFICATION_BAND=STANDINGS_CONFIG['qualification_band'],
        RELEGATION_BAND=STANDINGS_CONFIG['relegation_band'],
    )

    if not args.json:
        console.print(Panel.fit(f"[bold]{PROJECT_NAME} standings[/bold] v{VERSION}"))

    if args.all:
        try:
            result = await compute_all_championships(supabase, cfg)
        except DataUnavailable as e:
            console.print(f"[red]Data unavailable: {e.reason}[/red]")
            return 1
        for table in result["tables"].values():
            print_standings(table, args.json)
        for cid, error in result["failures"].items():
            console.print(f"[red]Championship {cid} failed: {error}[/red]")
        return 1 if result["failures"] else 0

    try:
        table = await compute_championship_standings(supabase, args.championship_id, cfg)
    except DataUnavailable as e:
        console.print(f"[red]Data unavailable: {e.reason}[/red]")
        return 1
    except (StandingsError, ValueError) as e:
        console.print(f"[red]Cannot compute standings: {e}[/red]")
        return 1

    print_standings(table, args.json)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
