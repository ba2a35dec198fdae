"""Dashboard overview: headline counts, recent results and upcoming fixtures"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from config.settings import DASHBOARD_CONFIG, DATA_ADAPTER_CONFIG
from leaguedesk.base import Championship, ChampionshipStatus, Match, MatchStatus, Team
from leaguedesk.standings.data_adapter import (
    DataUnavailable,
    record_to_championship,
    record_to_match,
    record_to_team,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSummary:
    active_championships: int
    total_teams: int
    upcoming_matches: int
    finished_matches: int
    recent_results: Tuple[Match, ...]
    next_fixtures: Tuple[Match, ...]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def summarize_dashboard(
    championships: Iterable[Championship],
    teams: Iterable[Team],
    matches: Iterable[Match],
    now: Optional[datetime] = None,
    recent_limit: int = DASHBOARD_CONFIG['recent_limit'],
    upcoming_limit: int = DASHBOARD_CONFIG['upcoming_limit'],
) -> DashboardSummary:
    """
    Build the dashboard overview.

    Upcoming means scheduled with a kickoff after `now`, soonest first.
    Recent results are finished matches, latest first; undated ones sort last.
    Naive datetimes are treated as UTC.
    """
    now = _as_utc(now or datetime.now(timezone.utc))
    matches = list(matches)

    active = sum(1 for c in championships if c.status is ChampionshipStatus.ACTIVE)
    total_teams = len({t.id for t in teams})

    upcoming = sorted(
        (
            m for m in matches
            if m.status is MatchStatus.SCHEDULED
            and m.match_date is not None
            and _as_utc(m.match_date) > now
        ),
        key=lambda m: (_as_utc(m.match_date), m.id),
    )

    finished = [m for m in matches if m.is_finished]
    dated = sorted(
        (m for m in finished if m.match_date is not None),
        key=lambda m: (_as_utc(m.match_date), m.id),
        reverse=True,
    )
    undated = [m for m in finished if m.match_date is None]

    return DashboardSummary(
        active_championships=active,
        total_teams=total_teams,
        upcoming_matches=len(upcoming),
        finished_matches=len(finished),
        recent_results=tuple((dated + undated)[:recent_limit]),
        next_fixtures=tuple(upcoming[:upcoming_limit]),
    )


def group_matches_by_round(matches: Iterable[Match]) -> Dict[int, List[Match]]:
    """Group matches by round number, rounds ascending, input order kept within a round"""
    grouped: Dict[int, List[Match]] = {}
    for match in matches:
        grouped.setdefault(match.round, []).append(match)
    return {rnd: grouped[rnd] for rnd in sorted(grouped)}


async def fetch_dashboard_summary(
    supabase_client,
    now: Optional[datetime] = None,
    match_limit: int = DASHBOARD_CONFIG['match_fetch_limit'],
) -> DashboardSummary:
    """Fetch active championships, teams and the latest matches, then summarise"""
    try:
        champ_result = supabase_client.table(DATA_ADAPTER_CONFIG['championships_table']).select(
            '*'
        ).eq('status', ChampionshipStatus.ACTIVE.value).execute()
        teams_result = supabase_client.table(DATA_ADAPTER_CONFIG['teams_table']).select('*').execute()
        matches_result = supabase_client.table(DATA_ADAPTER_CONFIG['matches_table']).select(
            '*'
        ).order('match_date', desc=True).limit(match_limit).execute()
    except Exception as e:
        raise DataUnavailable(None, f"dashboard fetch failed: {e}") from e

    championships = [record_to_championship(r) for r in champ_result.data or []]
    teams = [record_to_team(r) for r in teams_result.data or []]
    matches = [record_to_match(r) for r in matches_result.data or []]

    logger.info(
        f"📊 Dashboard: {len(championships)} active championships, "
        f"{len(teams)} teams, {len(matches)} matches"
    )
    return summarize_dashboard(championships, teams, matches, now=now)
