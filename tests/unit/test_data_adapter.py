"""
Unit tests for the Supabase match record source and record converters
"""
from datetime import date, datetime

import pytest

from leaguedesk.base import (
    ChampionshipFormat,
    ChampionshipStatus,
    EventType,
    MatchStatus,
    PlayerPosition,
    ScoringRules,
    Team,
    Zone,
)
from leaguedesk.standings.data_adapter import (
    STANDINGS_COLUMNS,
    DataUnavailable,
    SupabaseMatchSource,
    fetch_finished_matches,
    fetch_registered_teams,
    fetch_standings_snapshot,
    record_to_championship,
    record_to_event,
    record_to_match,
    record_to_player,
    record_to_team,
    standings_to_frame,
    standings_to_records,
)
from leaguedesk.standings.engine import IncompleteMatchData, MissingScoringRules, compute_standings


CHAMPIONSHIP_ROW = {
    'id': 'c1',
    'name': 'Summer League',
    'start_date': '2024-03-01',
    'end_date': '2024-11-30',
    'format': 'round_robin',
    'max_teams': 16,
    'points_victory': 3,
    'points_draw': 1,
    'points_defeat': 0,
    'tiebreaker_criteria': ['goal_difference'],
    'status': 'active',
}

TEAM_ROWS = [
    {'id': 'a', 'name': 'Atletico', 'city': 'Recife', 'stadium': 'Arena'},
    {'id': 'b', 'name': 'Botafogo', 'city': 'Natal', 'stadium': 'Campo'},
]

MATCH_ROWS = [
    {'id': 'm1', 'championship_id': 'c1', 'home_team_id': 'a', 'away_team_id': 'b', 'round': 1,
     'match_date': '2024-03-10T16:00:00+00:00', 'status': 'finished', 'home_score': 2, 'away_score': 0},
    {'id': 'm2', 'championship_id': 'c1', 'home_team_id': 'b', 'away_team_id': 'a', 'round': 2,
     'match_date': '2024-03-17T16:00:00+00:00', 'status': 'scheduled', 'home_score': None, 'away_score': None},
    {'id': 'm3', 'championship_id': 'c2', 'home_team_id': 'a', 'away_team_id': 'b', 'round': 1,
     'match_date': '2024-03-11T16:00:00+00:00', 'status': 'finished', 'home_score': 0, 'away_score': 5},
]


@pytest.fixture
def tables():
    return {
        'championships': [CHAMPIONSHIP_ROW],
        'championship_teams': [
            {'championship_id': 'c1', 'team_id': row['id'], 'teams': row} for row in TEAM_ROWS
        ],
        'matches': MATCH_ROWS,
    }


class TestRecordConverters:

    def test_record_to_team(self):
        team = record_to_team(TEAM_ROWS[0])
        assert team == Team(id='a', name='Atletico', city='Recife', stadium='Arena')

    def test_record_to_match_finished(self):
        match = record_to_match(MATCH_ROWS[0])
        assert match.status is MatchStatus.FINISHED
        assert (match.home_score, match.away_score) == (2, 0)
        assert match.round == 1
        assert match.championship_id == 'c1'
        assert isinstance(match.match_date, datetime)

    def test_record_to_match_keeps_missing_scores(self):
        match = record_to_match(MATCH_ROWS[1])
        assert match.status is MatchStatus.SCHEDULED
        assert match.home_score is None
        assert match.away_score is None

    def test_record_to_match_rejects_unknown_status(self):
        with pytest.raises(ValueError):
            record_to_match({**MATCH_ROWS[0], 'status': 'abandoned'})

    def test_record_to_match_keeps_fractional_scores(self):
        match = record_to_match({**MATCH_ROWS[0], 'home_score': 2.7, 'away_score': 1.0})
        assert match.home_score == 2.7
        assert match.away_score == 1
        assert isinstance(match.away_score, int)

    def test_fractional_score_is_incomplete(self):
        teams = [record_to_team(row) for row in TEAM_ROWS]
        match = record_to_match({**MATCH_ROWS[0], 'home_score': 2.7})
        with pytest.raises(IncompleteMatchData):
            compute_standings(ScoringRules(3, 1, 0), teams, [match])

    def test_record_to_championship(self):
        championship = record_to_championship(CHAMPIONSHIP_ROW)
        assert championship.format is ChampionshipFormat.ROUND_ROBIN
        assert championship.status is ChampionshipStatus.ACTIVE
        assert (championship.points_victory, championship.points_draw, championship.points_defeat) == (3, 1, 0)
        assert championship.start_date == date(2024, 3, 1)

    def test_record_to_championship_without_points(self):
        row = {**CHAMPIONSHIP_ROW, 'points_draw': None}
        assert record_to_championship(row).points_draw is None

    def test_record_to_player_and_event(self):
        player = record_to_player({'id': 'p1', 'team_id': 'a', 'name': 'Rivaldo',
                                   'position': 'forward', 'shirt_number': 10, 'age': 24})
        event = record_to_event({'id': 'e1', 'match_id': 'm1', 'player_id': 'p1',
                                 'event_type': 'goal', 'minute': 33})
        assert player.position is PlayerPosition.FORWARD
        assert event.event_type is EventType.GOAL
        assert event.minute == 33

    def test_record_to_event_rejects_unknown_type(self):
        with pytest.raises(ValueError):
            record_to_event({'id': 'e1', 'match_id': 'm1', 'player_id': 'p1', 'event_type': 'own_goal'})


class TestSnapshotFetch:

    @pytest.mark.asyncio
    async def test_snapshot_contents(self, make_supabase, tables):
        snapshot = await fetch_standings_snapshot(make_supabase(tables), 'c1')

        assert snapshot.championship.name == 'Summer League'
        assert snapshot.rules == ScoringRules(3, 1, 0)
        assert [t.id for t in snapshot.teams] == ['a', 'b']
        assert [m.id for m in snapshot.matches] == ['m1']

    @pytest.mark.asyncio
    async def test_only_finished_matches_of_championship(self, make_supabase, tables):
        matches = await fetch_finished_matches(make_supabase(tables), 'c1')
        assert all(m.status is MatchStatus.FINISHED for m in matches)
        assert all(m.championship_id == 'c1' for m in matches)

    @pytest.mark.asyncio
    async def test_registered_teams_skip_rows_without_team(self, make_supabase, tables):
        tables['championship_teams'].append({'championship_id': 'c1', 'team_id': 'gone', 'teams': None})
        teams = await fetch_registered_teams(make_supabase(tables), 'c1')
        assert [t.id for t in teams] == ['a', 'b']

    @pytest.mark.asyncio
    async def test_fetch_failure_is_data_unavailable(self, make_supabase, tables):
        client = make_supabase(tables, error=ConnectionError("connection reset"))
        with pytest.raises(DataUnavailable) as exc_info:
            await fetch_standings_snapshot(client, 'c1')
        assert exc_info.value.championship_id == 'c1'
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    async def test_unknown_championship_is_data_unavailable(self, make_supabase, tables):
        with pytest.raises(DataUnavailable):
            await fetch_standings_snapshot(make_supabase(tables), 'missing')

    @pytest.mark.asyncio
    async def test_championship_without_points(self, make_supabase, tables):
        tables['championships'] = [{**CHAMPIONSHIP_ROW, 'points_victory': None}]
        with pytest.raises(MissingScoringRules):
            await fetch_standings_snapshot(make_supabase(tables), 'c1')

    @pytest.mark.asyncio
    async def test_empty_championship_is_not_an_error(self, make_supabase, tables):
        tables['championship_teams'] = []
        tables['matches'] = []
        snapshot = await fetch_standings_snapshot(make_supabase(tables), 'c1')
        assert snapshot.teams == []
        assert snapshot.matches == []

    @pytest.mark.asyncio
    async def test_match_source(self, make_supabase, tables):
        source = SupabaseMatchSource(make_supabase(tables))

        championship = await source.get_championship('c1')
        teams = await source.get_registered_teams('c1')
        matches = await source.get_finished_matches('c1')

        assert championship.id == 'c1'
        assert len(teams) == 2
        assert [m.id for m in matches] == ['m1']


class TestOutputConverters:

    @pytest.fixture
    def table(self):
        teams = [record_to_team(row) for row in TEAM_ROWS]
        matches = [record_to_match(MATCH_ROWS[0])]
        return compute_standings(ScoringRules(3, 1, 0), teams, matches, championship_id='c1')

    def test_records(self, table):
        records = standings_to_records(table)
        assert records[0] == {
            'position': 1,
            'team_id': 'a',
            'team_name': 'Atletico',
            'played': 1,
            'won': 1,
            'drawn': 0,
            'lost': 0,
            'goals_for': 2,
            'goals_against': 0,
            'goal_difference': 2,
            'points': 3,
            'zone': Zone.QUALIFICATION.value,
        }

    def test_frame(self, table):
        df = standings_to_frame(table)
        assert list(df.columns) == STANDINGS_COLUMNS
        assert list(df['team_name']) == ['Atletico', 'Botafogo']
        assert list(df['position']) == [1, 2]

    def test_empty_frame_keeps_columns(self):
        empty = compute_standings(ScoringRules(3, 1, 0), [], [])
        df = standings_to_frame(empty)
        assert df.empty
        assert list(df.columns) == STANDINGS_COLUMNS


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
