from src.scoring.match_log import MatchLog
from src.scoring.models import (
    MatchRecord,
    PlayerMatchStats,
    PlayerPerformance,
    ScoredPerformance,
    StandingRow,
)
from src.scoring.points_calculator import PointsCalculator
from src.scoring.standings import StandingsAggregator, weighted_total

__all__ = [
    "MatchLog",
    "MatchRecord",
    "PlayerMatchStats",
    "PlayerPerformance",
    "PointsCalculator",
    "ScoredPerformance",
    "StandingRow",
    "StandingsAggregator",
    "weighted_total",
]
