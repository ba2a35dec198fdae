"""Data validation for LeagueDesk"""
from typing import Tuple, Optional

from leaguedesk.base import BaseValidator, Match, MatchStatus, Team


def _is_valid_score(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


class MatchValidator(BaseValidator):
    """Validate match data"""

    def validate(self, data: Match) -> Tuple[bool, Optional[str]]:
        """Validate match data"""
        errors = []

        # Required fields
        for field in ['id', 'home_team_id', 'away_team_id']:
            if not getattr(data, field, None):
                errors.append(f"Missing required field: {field}")

        if data.home_team_id and data.home_team_id == data.away_team_id:
            errors.append(f"Team cannot play itself: {data.home_team_id}")

        # Finished matches must carry both scores
        if data.status is MatchStatus.FINISHED:
            for field in ['home_score', 'away_score']:
                score = getattr(data, field)
                if score is None:
                    errors.append(f"Missing score: {field}")
                elif not _is_valid_score(score):
                    errors.append(f"Invalid score: {field} = {score!r}")

        return len(errors) == 0, '; '.join(errors) if errors else None


class TeamValidator(BaseValidator):
    """Validate team data"""

    def validate(self, data: Team) -> Tuple[bool, Optional[str]]:
        """Validate team data"""
        errors = []

        if not data.id:
            errors.append("Missing required field: id")
        if not data.name or not str(data.name).strip():
            errors.append("Missing required field: name")

        return len(errors) == 0, '; '.join(errors) if errors else None
