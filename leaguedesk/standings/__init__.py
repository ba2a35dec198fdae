"""Standings engine and championship table calculations"""

from leaguedesk.standings.engine import (
    StandingsConfig,
    StandingsTable,
    StandingsError,
    MissingScoringRules,
    IncompleteMatchData,
    InvalidTeamData,
    UnknownTeamReference,
    aggregate_results,
    rank_entries,
    classify_zones,
    compute_standings,
    scoring_rules_for,
)
from leaguedesk.standings.data_adapter import (
    DataUnavailable,
    StandingsSnapshot,
    SupabaseMatchSource,
    fetch_standings_snapshot,
    standings_to_frame,
    standings_to_records,
)
from leaguedesk.standings.calculator import (
    compute_from_snapshot,
    compute_championship_standings,
    compute_all_championships,
)

__all__ = [
    'StandingsConfig',
    'StandingsTable',
    'StandingsError',
    'MissingScoringRules',
    'IncompleteMatchData',
    'InvalidTeamData',
    'UnknownTeamReference',
    'aggregate_results',
    'rank_entries',
    'classify_zones',
    'compute_standings',
    'scoring_rules_for',
    'DataUnavailable',
    'StandingsSnapshot',
    'SupabaseMatchSource',
    'fetch_standings_snapshot',
    'standings_to_frame',
    'standings_to_records',
    'compute_from_snapshot',
    'compute_championship_standings',
    'compute_all_championships',
]
