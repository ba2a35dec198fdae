"""LeagueDesk Configuration Settings"""
from dotenv import load_dotenv
import os

# Load environment variables
load_dotenv()

# Project Info
PROJECT_NAME = "LeagueDesk"
VERSION = "1.0.0"

# Database
# Environment detection: local vs production
USE_LOCAL_SUPABASE = os.getenv("USE_LOCAL_SUPABASE", "false").lower() == "true"

if USE_LOCAL_SUPABASE:
    # Local Supabase instance (for development/testing)
    SUPABASE_URL = os.getenv("SUPABASE_URL", "http://localhost:54321")
    SUPABASE_KEY = os.getenv("SUPABASE_KEY")
    SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
else:
    # Production Supabase instance
    SUPABASE_URL = os.getenv("SUPABASE_URL")
    SUPABASE_KEY = os.getenv("SUPABASE_KEY")
    SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

# Standings Configuration (aligned with StandingsConfig)
# Band sizes are fixed league-wide, never read from a championship record.
STANDINGS_CONFIG = {
    'qualification_band': 4,  # StandingsConfig.QUALIFICATION_BAND
    'relegation_band': 3,     # StandingsConfig.RELEGATION_BAND
}

# Supabase table names used by the match record source
DATA_ADAPTER_CONFIG = {
    'championships_table': 'championships',
    'teams_table': 'teams',
    'championship_teams_table': 'championship_teams',
    'matches_table': 'matches',
    'players_table': 'players',
    'events_table': 'match_events',
}

# Dashboard
DASHBOARD_CONFIG = {
    'match_fetch_limit': int(os.getenv("DASHBOARD_MATCH_LIMIT", 50)),
    'recent_limit': 5,
    'upcoming_limit': 5,
    'top_scorers_limit': int(os.getenv("TOP_SCORERS_LIMIT", 10)),
}

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG_MODE = os.getenv("DEBUG_MODE", "false").lower() == "true"
