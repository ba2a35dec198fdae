from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple
import logging
import numpy as np
import pandas as pd

from leaguedesk.base import (
    Championship,
    Match,
    ScoringRules,
    StandingsEntry,
    Team,
    Zone,
)
from leaguedesk.utils.validators import MatchValidator, TeamValidator

logger = logging.getLogger(__name__)


# =========================
# Configuration
# =========================
@dataclass
class StandingsConfig:
    # Zone bands (fixed league-wide, not per championship)
    QUALIFICATION_BAND: int = 4
    RELEGATION_BAND: int = 3


# Side-centric columns (one row per team per finished match)
SIDE_COLUMNS = ["match_id", "side", "team_id", "gf", "ga"]

# Per-team counters produced by the aggregation pass
STAT_COLUMNS = [
    "played", "won", "drawn", "lost",
    "goals_for", "goals_against", "goal_difference",
]

# Tie-break cascade. team_id only matters if two registered teams share a name.
SORT_KEYS = ["points", "goal_difference", "goals_for", "team_name", "team_id"]
SORT_ASCENDING = [False, False, False, True, True]


# =========================
# Errors
# =========================
class StandingsError(Exception):
    """Base class for standings computation errors"""


class MissingScoringRules(StandingsError):
    """Scoring configuration absent for the target championship"""

    def __init__(self, championship_id: Optional[str] = None):
        self.championship_id = championship_id
        target = f" for championship {championship_id}" if championship_id else ""
        super().__init__(f"Scoring rules missing{target}")


class InvalidTeamData(StandingsError, ValueError):
    """A registered team is malformed or registered twice"""

    def __init__(self, team_id: str, reason: str):
        self.team_id = team_id
        self.reason = reason
        super().__init__(f"Invalid team {team_id!r}: {reason}")


class IncompleteMatchData(StandingsError):
    """A finished match lacks one or both valid scores"""

    def __init__(self, match_id: str, reason: Optional[str] = None):
        self.match_id = match_id
        self.reason = reason
        super().__init__(f"Finished match {match_id} has incomplete data: {reason}")


@dataclass(frozen=True)
class UnknownTeamReference:
    """Finished match side pointing at a team outside the registered set.

    Non-fatal: only the unknown side is skipped.
    """
    match_id: str
    team_id: str
    side: str


@dataclass(frozen=True)
class StandingsTable:
    """Ordered standings plus the data-consistency issues met on the way"""
    entries: Tuple[StandingsEntry, ...]
    unknown_references: Tuple[UnknownTeamReference, ...] = ()
    championship_id: Optional[str] = None

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index):
        return self.entries[index]


# =========================
# Utilities
# =========================
def scoring_rules_for(championship: Optional[Championship]) -> ScoringRules:
    """Build ScoringRules from a championship record.

    Raises MissingScoringRules when the record is absent or any of the three
    point values is unset.
    """
    if championship is None:
        raise MissingScoringRules()
    values = (championship.points_victory, championship.points_draw, championship.points_defeat)
    if any(v is None for v in values):
        raise MissingScoringRules(championship.id)
    return ScoringRules(win_points=values[0], draw_points=values[1], loss_points=values[2])


def _registered_frame(teams: Iterable[Team]) -> pd.DataFrame:
    validator = TeamValidator()
    seen = set()
    rows = []
    for team in teams:
        is_valid, error = validator.validate(team)
        if not is_valid:
            raise InvalidTeamData(team.id, error)
        if team.id in seen:
            raise InvalidTeamData(team.id, "duplicate team id")
        seen.add(team.id)
        rows.append({"team_id": team.id, "team_name": team.name})
    return pd.DataFrame(rows, columns=["team_id", "team_name"])


def _match_sides(matches: Iterable[Match]) -> pd.DataFrame:
    """Expand finished matches into home and away perspective rows"""
    validator = MatchValidator()
    rows = []
    skipped = 0
    for match in matches:
        if not match.is_finished:
            skipped += 1
            continue
        is_valid, error = validator.validate(match)
        if not is_valid:
            raise IncompleteMatchData(match.id, error)

        rows.append({
            "match_id": match.id,
            "side": "home",
            "team_id": match.home_team_id,
            "gf": match.home_score,
            "ga": match.away_score,
        })
        rows.append({
            "match_id": match.id,
            "side": "away",
            "team_id": match.away_team_id,
            "gf": match.away_score,
            "ga": match.home_score,
        })

    if skipped:
        logger.debug(f"Ignored {skipped} matches that are not finished")

    return pd.DataFrame(rows, columns=SIDE_COLUMNS).astype({"gf": "int64", "ga": "int64"})


# =========================
# Stage 1: aggregation
# =========================
def aggregate_results(
    teams: Iterable[Team],
    matches: Iterable[Match],
) -> Tuple[pd.DataFrame, List[UnknownTeamReference]]:
    """
    Fold finished matches into per-team counters.

    Returns:
        (team_stats, unknown_references) where team_stats has one row per
        registered team, in registration order, with columns
        team_id, team_name + STAT_COLUMNS.
    """
    registered = _registered_frame(teams)
    sides = _match_sides(matches)

    known = sides["team_id"].isin(registered["team_id"])
    unknown = [
        UnknownTeamReference(match_id=row.match_id, team_id=row.team_id, side=row.side)
        for row in sides[~known].itertuples(index=False)
    ]
    for ref in unknown:
        logger.warning(
            f"⚠️ Match {ref.match_id} references unregistered {ref.side} team {ref.team_id} - side skipped"
        )
    sides = sides[known].copy()

    # Outcome per side
    sides["won"] = np.where(sides["gf"] > sides["ga"], 1, 0)
    sides["drawn"] = np.where(sides["gf"] == sides["ga"], 1, 0)
    sides["lost"] = np.where(sides["gf"] < sides["ga"], 1, 0)

    grouped = sides.groupby("team_id")
    totals = grouped[["won", "drawn", "lost", "gf", "ga"]].sum()
    totals["played"] = grouped.size()
    totals = totals.rename(columns={"gf": "goals_for", "ga": "goals_against"})

    # Teams without finished matches keep all-zero counters
    team_index = pd.Index(registered["team_id"], name="team_id")
    totals = totals.reindex(team_index, fill_value=0).fillna(0).astype("int64")
    totals["goal_difference"] = totals["goals_for"] - totals["goals_against"]

    team = registered.merge(totals.reset_index(), on="team_id", how="left")
    return team[["team_id", "team_name"] + STAT_COLUMNS], unknown


# =========================
# Stage 2: ranking
# =========================
def rank_entries(team_stats: pd.DataFrame, rules: Optional[ScoringRules]) -> pd.DataFrame:
    """Add points and 1-based positions, ordered by the tie-break cascade"""
    if rules is None:
        raise MissingScoringRules()

    ranked = team_stats.copy()
    ranked["points"] = (
        ranked["won"] * rules.win_points
        + ranked["drawn"] * rules.draw_points
        + ranked["lost"] * rules.loss_points
    ).astype("int64")

    ranked = ranked.sort_values(SORT_KEYS, ascending=SORT_ASCENDING).reset_index(drop=True)
    ranked["position"] = np.arange(1, len(ranked) + 1, dtype="int64")
    return ranked


# =========================
# Stage 3: zones
# =========================
def classify_zones(ranked: pd.DataFrame, cfg: Optional[StandingsConfig] = None) -> pd.DataFrame:
    """
    Label positions: qualification for the top band, relegation for the bottom
    band, neutral otherwise. When the bands overlap (small leagues) a position
    in both is qualification.
    """
    cfg = cfg or StandingsConfig()
    out = ranked.copy()
    total = len(out)

    qualifies = out["position"] <= cfg.QUALIFICATION_BAND
    relegated = out["position"] > total - cfg.RELEGATION_BAND
    out["zone"] = np.select(
        [qualifies, relegated],
        [Zone.QUALIFICATION.value, Zone.RELEGATION.value],
        default=Zone.NEUTRAL.value,
    )
    return out


# =========================
# Pipeline
# =========================
def compute_standings(
    rules: Optional[ScoringRules],
    teams: Iterable[Team],
    matches: Iterable[Match],
    cfg: Optional[StandingsConfig] = None,
    championship_id: Optional[str] = None,
) -> StandingsTable:
    """
    Compute a championship table from one snapshot.

    Args:
        rules: Points for victory/draw/defeat (None raises MissingScoringRules)
        teams: Registered teams; every team gets exactly one entry
        matches: Matches of the championship; only finished ones count
        cfg: Zone band configuration
        championship_id: Carried onto the result and error messages

    Returns:
        StandingsTable with entries ordered by position
    """
    cfg = cfg or StandingsConfig()
    if rules is None:
        raise MissingScoringRules(championship_id)

    teams = list(teams)
    team_stats, unknown = aggregate_results(teams, matches)
    ranked = rank_entries(team_stats, rules)
    classified = classify_zones(ranked, cfg)

    teams_by_id = {team.id: team for team in teams}
    entries = tuple(
        StandingsEntry(
            position=int(row.position),
            team=teams_by_id[row.team_id],
            played=int(row.played),
            won=int(row.won),
            drawn=int(row.drawn),
            lost=int(row.lost),
            goals_for=int(row.goals_for),
            goals_against=int(row.goals_against),
            goal_difference=int(row.goal_difference),
            points=int(row.points),
            zone=Zone(row.zone),
        )
        for row in classified.itertuples(index=False)
    )

    return StandingsTable(
        entries=entries,
        unknown_references=tuple(unknown),
        championship_id=championship_id,
    )
