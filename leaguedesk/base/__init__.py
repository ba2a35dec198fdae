"""Base classes and records for LeagueDesk components"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, date
from enum import Enum
from typing import List, Optional


class MatchStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"
    POSTPONED = "postponed"


class ChampionshipFormat(str, Enum):
    ROUND_ROBIN = "round_robin"
    SINGLE_ELIMINATION = "single_elimination"
    DOUBLE_ELIMINATION = "double_elimination"
    GROUP_KNOCKOUT = "group_knockout"


class ChampionshipStatus(str, Enum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    FINISHED = "finished"


class PlayerPosition(str, Enum):
    GOALKEEPER = "goalkeeper"
    DEFENDER = "defender"
    MIDFIELDER = "midfielder"
    FORWARD = "forward"


class EventType(str, Enum):
    GOAL = "goal"
    YELLOW_CARD = "yellow_card"
    RED_CARD = "red_card"
    ASSIST = "assist"


class Zone(str, Enum):
    """Table zone attached to a standings position"""
    QUALIFICATION = "qualification"
    NEUTRAL = "neutral"
    RELEGATION = "relegation"


@dataclass(frozen=True)
class Team:
    """Registered team"""
    id: str
    name: str
    city: Optional[str] = None
    stadium: Optional[str] = None
    badge_url: Optional[str] = None


@dataclass(frozen=True)
class Match:
    """Single fixture between two teams.

    Scores stay None until the match has been played. A match with status
    FINISHED is expected to carry both scores as non-negative integers.
    """
    id: str
    home_team_id: str
    away_team_id: str
    status: MatchStatus
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    round: int = 1
    championship_id: Optional[str] = None
    match_date: Optional[datetime] = None
    location: Optional[str] = None

    def __post_init__(self):
        # Raises ValueError for values outside MatchStatus
        object.__setattr__(self, "status", MatchStatus(self.status))

    @property
    def is_finished(self) -> bool:
        return self.status is MatchStatus.FINISHED


@dataclass(frozen=True)
class ScoringRules:
    """Points awarded per result.

    victory >= draw >= defeat is the usual shape but is not enforced; only
    negative values are rejected.
    """
    win_points: int
    draw_points: int
    loss_points: int

    def __post_init__(self):
        for field_name in ("win_points", "draw_points", "loss_points"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"Invalid scoring rule: {field_name} = {value!r}")


@dataclass(frozen=True)
class Championship:
    """Championship record as stored by the dashboard"""
    id: str
    name: str
    format: ChampionshipFormat = ChampionshipFormat.ROUND_ROBIN
    status: ChampionshipStatus = ChampionshipStatus.UPCOMING
    points_victory: Optional[int] = None
    points_draw: Optional[int] = None
    points_defeat: Optional[int] = None
    max_teams: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def __post_init__(self):
        object.__setattr__(self, "format", ChampionshipFormat(self.format))
        object.__setattr__(self, "status", ChampionshipStatus(self.status))


@dataclass(frozen=True)
class Player:
    id: str
    team_id: str
    name: str
    position: PlayerPosition
    shirt_number: Optional[int] = None
    age: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "position", PlayerPosition(self.position))


@dataclass(frozen=True)
class MatchEvent:
    id: str
    match_id: str
    player_id: str
    event_type: EventType
    minute: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "event_type", EventType(self.event_type))


@dataclass(frozen=True)
class StandingsEntry:
    """One row of a computed standings table (derived, never persisted)"""
    position: int
    team: Team
    played: int
    won: int
    drawn: int
    lost: int
    goals_for: int
    goals_against: int
    goal_difference: int
    points: int
    zone: Zone = Zone.NEUTRAL


class BaseMatchSource(ABC):
    """Base class for match record sources.

    A source delivers already-resolved snapshots; the standings engine never
    calls it directly.
    """

    @abstractmethod
    async def get_championship(self, championship_id: str) -> Championship:
        """Fetch a championship record"""
        pass

    @abstractmethod
    async def get_registered_teams(self, championship_id: str) -> List[Team]:
        """Fetch teams registered in a championship"""
        pass

    @abstractmethod
    async def get_finished_matches(self, championship_id: str) -> List[Match]:
        """Fetch matches with status 'finished' for a championship"""
        pass


class BaseValidator(ABC):
    """Base class for data validators"""

    @abstractmethod
    def validate(self, data) -> tuple[bool, Optional[str]]:
        """Validate data, return (is_valid, error_message)"""
        pass
