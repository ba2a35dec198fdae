"""Data adapter to convert between Supabase records and standings inputs/outputs"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Optional, Any

import pandas as pd

from config.settings import DATA_ADAPTER_CONFIG
from leaguedesk.base import (
    BaseMatchSource,
    Championship,
    ChampionshipFormat,
    ChampionshipStatus,
    EventType,
    Match,
    MatchEvent,
    MatchStatus,
    Player,
    PlayerPosition,
    ScoringRules,
    Team,
)
from leaguedesk.standings.engine import StandingsTable, scoring_rules_for

logger = logging.getLogger(__name__)

# Column order of the presentation frame
STANDINGS_COLUMNS = [
    "position", "team_id", "team_name", "played", "won", "drawn", "lost",
    "goals_for", "goals_against", "goal_difference", "points", "zone",
]


class DataUnavailable(Exception):
    """The match/team store could not deliver a snapshot.

    Distinct from an empty table: callers must surface it as such.
    """

    def __init__(self, championship_id: Optional[str], reason: str):
        self.championship_id = championship_id
        self.reason = reason
        target = f" for championship {championship_id}" if championship_id else ""
        super().__init__(f"Data unavailable{target}: {reason}")


@dataclass(frozen=True)
class StandingsSnapshot:
    """Everything the standings engine needs for one championship"""
    championship: Championship
    rules: ScoringRules
    teams: List[Team]
    matches: List[Match]


# =========================
# Record converters
# =========================
def _optional_int(value) -> Optional[int]:
    if value is None or pd.isna(value):
        return None
    # Non-integral floats are kept so validation can reject them
    if isinstance(value, float) and not value.is_integer():
        return value
    return int(value)


def _parse_datetime(value) -> Optional[datetime]:
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value
    return pd.to_datetime(value).to_pydatetime()


def _parse_date(value) -> Optional[date]:
    if value is None or value == '':
        return None
    if isinstance(value, date):
        return value
    return pd.to_datetime(value).date()


def record_to_team(record: Dict[str, Any]) -> Team:
    """Convert a `teams` row to a Team"""
    return Team(
        id=str(record['id']),
        name=str(record.get('name') or '').strip(),
        city=record.get('city'),
        stadium=record.get('stadium'),
        badge_url=record.get('badge_url'),
    )


def record_to_match(record: Dict[str, Any]) -> Match:
    """
    Convert a `matches` row to a Match.

    Unknown status values raise ValueError; scores are kept as None when
    missing so that the engine can reject incomplete finished matches.
    """
    return Match(
        id=str(record['id']),
        home_team_id=str(record['home_team_id']),
        away_team_id=str(record['away_team_id']),
        status=MatchStatus(record.get('status') or MatchStatus.SCHEDULED.value),
        home_score=_optional_int(record.get('home_score')),
        away_score=_optional_int(record.get('away_score')),
        round=int(record.get('round') or 1),
        championship_id=str(record['championship_id']) if record.get('championship_id') else None,
        match_date=_parse_datetime(record.get('match_date')),
        location=record.get('location'),
    )


def record_to_championship(record: Dict[str, Any]) -> Championship:
    """Convert a `championships` row to a Championship"""
    return Championship(
        id=str(record['id']),
        name=str(record.get('name') or ''),
        format=ChampionshipFormat(record.get('format') or ChampionshipFormat.ROUND_ROBIN.value),
        status=ChampionshipStatus(record.get('status') or ChampionshipStatus.UPCOMING.value),
        points_victory=_optional_int(record.get('points_victory')),
        points_draw=_optional_int(record.get('points_draw')),
        points_defeat=_optional_int(record.get('points_defeat')),
        max_teams=_optional_int(record.get('max_teams')),
        start_date=_parse_date(record.get('start_date')),
        end_date=_parse_date(record.get('end_date')),
    )


def record_to_player(record: Dict[str, Any]) -> Player:
    return Player(
        id=str(record['id']),
        team_id=str(record['team_id']),
        name=str(record.get('name') or ''),
        position=PlayerPosition(record['position']),
        shirt_number=_optional_int(record.get('shirt_number')),
        age=_optional_int(record.get('age')),
    )


def record_to_event(record: Dict[str, Any]) -> MatchEvent:
    return MatchEvent(
        id=str(record['id']),
        match_id=str(record['match_id']),
        player_id=str(record['player_id']),
        event_type=EventType(record['event_type']),
        minute=_optional_int(record.get('minute')),
    )


# =========================
# Supabase fetch
# =========================
async def fetch_championship(supabase_client, championship_id: str) -> Championship:
    """Fetch a single championship record"""
    try:
        result = supabase_client.table(DATA_ADAPTER_CONFIG['championships_table']).select(
            '*'
        ).eq('id', championship_id).single().execute()
    except Exception as e:
        raise DataUnavailable(championship_id, f"championship fetch failed: {e}") from e

    if not result.data:
        raise DataUnavailable(championship_id, "championship not found")
    return record_to_championship(result.data)


async def fetch_registered_teams(supabase_client, championship_id: str) -> List[Team]:
    """Fetch the teams registered in a championship (championship_teams join teams)"""
    try:
        result = supabase_client.table(DATA_ADAPTER_CONFIG['championship_teams_table']).select(
            'team_id, teams(*)'
        ).eq('championship_id', championship_id).execute()
    except Exception as e:
        raise DataUnavailable(championship_id, f"teams fetch failed: {e}") from e

    teams = []
    for row in result.data or []:
        team_record = row.get('teams')
        if not team_record:
            logger.warning(f"⚠️ championship_teams row without team record: {row.get('team_id')}")
            continue
        teams.append(record_to_team(team_record))
    return teams


async def fetch_finished_matches(supabase_client, championship_id: str) -> List[Match]:
    """Fetch matches with status 'finished' for a championship"""
    try:
        result = supabase_client.table(DATA_ADAPTER_CONFIG['matches_table']).select(
            '*'
        ).eq('championship_id', championship_id).eq(
            'status', MatchStatus.FINISHED.value
        ).execute()
    except Exception as e:
        raise DataUnavailable(championship_id, f"matches fetch failed: {e}") from e

    return [record_to_match(row) for row in result.data or []]


async def fetch_standings_snapshot(supabase_client, championship_id: str) -> StandingsSnapshot:
    """
    Fetch championship, registered teams and finished matches.

    Raises:
        DataUnavailable: any fetch failed
        MissingScoringRules: the championship has no point values configured
    """
    championship = await fetch_championship(supabase_client, championship_id)
    rules = scoring_rules_for(championship)
    teams = await fetch_registered_teams(supabase_client, championship_id)
    matches = await fetch_finished_matches(supabase_client, championship_id)

    logger.info(
        f"📥 Snapshot for {championship.name}: {len(teams)} teams, {len(matches)} finished matches"
    )
    return StandingsSnapshot(championship=championship, rules=rules, teams=teams, matches=matches)


async def fetch_active_championship_ids(supabase_client) -> List[str]:
    try:
        result = supabase_client.table(DATA_ADAPTER_CONFIG['championships_table']).select(
            'id'
        ).eq('status', ChampionshipStatus.ACTIVE.value).execute()
    except Exception as e:
        raise DataUnavailable(None, f"championships fetch failed: {e}") from e
    return [str(row['id']) for row in result.data or []]


class SupabaseMatchSource(BaseMatchSource):
    """BaseMatchSource backed by a Supabase client"""

    def __init__(self, supabase_client):
        self.client = supabase_client

    async def get_championship(self, championship_id: str) -> Championship:
        return await fetch_championship(self.client, championship_id)

    async def get_registered_teams(self, championship_id: str) -> List[Team]:
        return await fetch_registered_teams(self.client, championship_id)

    async def get_finished_matches(self, championship_id: str) -> List[Match]:
        return await fetch_finished_matches(self.client, championship_id)


# =========================
# Output converters
# =========================
def standings_to_records(table: StandingsTable) -> List[Dict[str, Any]]:
    """Convert a StandingsTable to plain dicts (JSON-serialisable)"""
    return [
        {
            'position': entry.position,
            'team_id': entry.team.id,
            'team_name': entry.team.name,
            'played': entry.played,
            'won': entry.won,
            'drawn': entry.drawn,
            'lost': entry.lost,
            'goals_for': entry.goals_for,
            'goals_against': entry.goals_against,
            'goal_difference': entry.goal_difference,
            'points': entry.points,
            'zone': entry.zone.value,
        }
        for entry in table.entries
    ]


def standings_to_frame(table: StandingsTable) -> pd.DataFrame:
    """Convert a StandingsTable to a DataFrame ordered by position"""
    return pd.DataFrame(standings_to_records(table), columns=STANDINGS_COLUMNS)
