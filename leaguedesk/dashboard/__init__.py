"""Dashboard overview and player statistics"""

from leaguedesk.dashboard.summary import (
    DashboardSummary,
    summarize_dashboard,
    group_matches_by_round,
    fetch_dashboard_summary,
)
from leaguedesk.dashboard.scorers import TopScorer, top_scorers, fetch_top_scorers

__all__ = [
    'DashboardSummary',
    'summarize_dashboard',
    'group_matches_by_round',
    'fetch_dashboard_summary',
    'TopScorer',
    'top_scorers',
    'fetch_top_scorers',
]
