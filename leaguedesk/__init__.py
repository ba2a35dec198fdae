"""LeagueDesk - championship standings and league dashboard backend"""
