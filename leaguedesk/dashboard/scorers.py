"""Top scorers table built from match events"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

import pandas as pd

from config.settings import DASHBOARD_CONFIG, DATA_ADAPTER_CONFIG
from leaguedesk.base import EventType, MatchEvent, Player, Team
from leaguedesk.standings.data_adapter import (
    DataUnavailable,
    record_to_event,
    record_to_player,
    record_to_team,
)

logger = logging.getLogger(__name__)

COUNTED_EVENTS = [EventType.GOAL.value, EventType.ASSIST.value]


@dataclass(frozen=True)
class TopScorer:
    player: Player
    team: Optional[Team]
    goals: int
    assists: int


def top_scorers(
    events: Iterable[MatchEvent],
    players: Iterable[Player],
    teams: Iterable[Team],
    limit: Optional[int] = DASHBOARD_CONFIG['top_scorers_limit'],
) -> List[TopScorer]:
    """
    Rank players by goals, then assists, then name.

    Events for players not in `players` are dropped. Players with neither a
    goal nor an assist are not listed.
    """
    players_by_id = {p.id: p for p in players}
    teams_by_id = {t.id: t for t in teams}

    df = pd.DataFrame(
        [{"player_id": e.player_id, "event_type": e.event_type.value} for e in events],
        columns=["player_id", "event_type"],
    )
    df = df[df["event_type"].isin(COUNTED_EVENTS)]

    unknown = ~df["player_id"].isin(list(players_by_id))
    if unknown.any():
        logger.warning(f"⚠️ Dropping {int(unknown.sum())} events for unknown players")
        df = df[~unknown]

    if df.empty:
        return []

    counts = (
        pd.crosstab(df["player_id"], df["event_type"])
        .reindex(columns=COUNTED_EVENTS, fill_value=0)
        .rename(columns={EventType.GOAL.value: "goals", EventType.ASSIST.value: "assists"})
        .reset_index()
    )
    counts["player_name"] = counts["player_id"].map(lambda pid: players_by_id[pid].name)
    counts = counts.sort_values(
        ["goals", "assists", "player_name", "player_id"],
        ascending=[False, False, True, True],
    )
    if limit is not None:
        counts = counts.head(limit)

    return [
        TopScorer(
            player=players_by_id[row.player_id],
            team=teams_by_id.get(players_by_id[row.player_id].team_id),
            goals=int(row.goals),
            assists=int(row.assists),
        )
        for row in counts.itertuples(index=False)
    ]


async def fetch_top_scorers(
    supabase_client,
    limit: Optional[int] = DASHBOARD_CONFIG['top_scorers_limit'],
) -> List[TopScorer]:
    """Fetch goal/assist events with players and teams, then rank"""
    try:
        events_result = supabase_client.table(DATA_ADAPTER_CONFIG['events_table']).select(
            '*'
        ).in_('event_type', COUNTED_EVENTS).execute()
        players_result = supabase_client.table(DATA_ADAPTER_CONFIG['players_table']).select('*').execute()
        teams_result = supabase_client.table(DATA_ADAPTER_CONFIG['teams_table']).select('*').execute()
    except Exception as e:
        raise DataUnavailable(None, f"scorers fetch failed: {e}") from e

    events = [record_to_event(r) for r in events_result.data or []]
    players = [record_to_player(r) for r in players_result.data or []]
    teams = [record_to_team(r) for r in teams_result.data or []]
    return top_scorers(events, players, teams, limit=limit)
