"""Fantasy points from a raw scorecard line.

Produces the raw ``points`` consumed by the standings aggregator, with the
Player-of-the-Match bonus already included. Batting, bowling and fielding
are scored independently and summed.
"""

import logging
from typing import List, Optional, Tuple

from src.scoring.config import (
    BOUNDARY_BONUS,
    CATCH_BONUS,
    CATCH_BONUS_THRESHOLD,
    DUCK_PENALTY,
    ECONOMY_BANDS,
    ECONOMY_MIN_OVERS,
    MAIDEN_BONUS,
    POINTS_PER_CATCH,
    POINTS_PER_RUN,
    POINTS_PER_STUMPING,
    POINTS_PER_WICKET,
    POTM_BONUS,
    RUN_MILESTONES,
    RUN_OUT_ASSISTED,
    RUN_OUT_DIRECT,
    STRIKE_RATE_BANDS,
    STRIKE_RATE_MIN_BALLS,
    WICKET_HAULS,
)
from src.scoring.models import PlayerMatchStats, PlayerPerformance

logger = logging.getLogger(__name__)

Band = Tuple[Optional[float], Optional[float], int]


def overs_to_balls(overs: float) -> int:
    """Convert cricket overs notation (``3.4`` = 3 overs 4 balls) to balls."""
    whole = int(overs)
    extra = int(round((overs - whole) * 10))
    if extra > 5:
        raise ValueError(f"Invalid overs value {overs!r}: at most 5 extra balls")
    return whole * 6 + extra


def _band_points(value: float, bands: List[Band]) -> int:
    for lower, upper, points in bands:
        if (lower is None or value >= lower) and (upper is None or value < upper):
            return points
    return 0


def _highest_threshold(value: int, thresholds: List[Tuple[int, int]]) -> int:
    for threshold, points in thresholds:
        if value >= threshold:
            return points
    return 0


class PointsCalculator:
    """Scores a PlayerMatchStats line and explains the result."""

    def batting_points(self, stats: PlayerMatchStats) -> List[Tuple[str, int]]:
        items = []
        if stats.runs:
            items.append((f"{stats.runs} runs", stats.runs * POINTS_PER_RUN))
        if stats.fours:
            items.append((f"{stats.fours}x4", stats.fours * BOUNDARY_BONUS["fours"]))
        if stats.sixes:
            items.append((f"{stats.sixes}x6", stats.sixes * BOUNDARY_BONUS["sixes"]))
        if stats.runs == 0 and stats.balls_faced >= 1:
            items.append(("duck", DUCK_PENALTY))

        milestone = _highest_threshold(stats.runs, RUN_MILESTONES)
        if milestone:
            items.append(("milestone", milestone))

        if stats.balls_faced >= STRIKE_RATE_MIN_BALLS:
            strike_rate = stats.runs * 100.0 / stats.balls_faced
            sr_points = _band_points(strike_rate, STRIKE_RATE_BANDS)
            if sr_points:
                items.append((f"SR {strike_rate:.1f}", sr_points))
        return items

    def bowling_points(self, stats: PlayerMatchStats) -> List[Tuple[str, int]]:
        items = []
        if stats.wickets:
            items.append((f"{stats.wickets} wkts", stats.wickets * POINTS_PER_WICKET))
        if stats.maidens:
            items.append((f"{stats.maidens} maidens", stats.maidens * MAIDEN_BONUS))

        haul = _highest_threshold(stats.wickets, WICKET_HAULS)
        if haul:
            items.append(("haul", haul))

        balls = overs_to_balls(stats.overs)
        if balls >= overs_to_balls(ECONOMY_MIN_OVERS):
            economy = stats.runs_conceded * 6.0 / balls
            econ_points = _band_points(economy, ECONOMY_BANDS)
            if econ_points:
                items.append((f"econ {economy:.2f}", econ_points))
        return items

    def fielding_points(self, stats: PlayerMatchStats) -> List[Tuple[str, int]]:
        items = []
        if stats.catches:
            items.append((f"{stats.catches} ct", stats.catches * POINTS_PER_CATCH))
            if stats.catches >= CATCH_BONUS_THRESHOLD:
                items.append(("catch bonus", CATCH_BONUS))
        if stats.stumpings:
            items.append((f"{stats.stumpings} st", stats.stumpings * POINTS_PER_STUMPING))
        if stats.run_outs_direct:
            items.append(("run-out direct", stats.run_outs_direct * RUN_OUT_DIRECT))
        if stats.run_outs_assisted:
            items.append(("run-out assist", stats.run_outs_assisted * RUN_OUT_ASSISTED))
        return items

    def score(self, stats: PlayerMatchStats) -> PlayerPerformance:
        """Build a performance with raw points and a breakdown string."""
        items = (
            self.batting_points(stats)
            + self.bowling_points(stats)
            + self.fielding_points(stats)
        )
        if stats.is_potm:
            items.append(("POTM", POTM_BONUS))

        total = sum(points for _, points in items)
        breakdown = ", ".join(f"{label} {points:+d}" for label, points in items)
        logger.debug("Scored %s: %d (%s)", stats.player_name, total, breakdown)

        return PlayerPerformance(
            player_name=stats.player_name,
            points=total,
            is_potm=stats.is_potm,
            breakdown=breakdown or "no contribution",
        )

    def score_all(self, lines: List[PlayerMatchStats]) -> List[PlayerPerformance]:
        return [self.score(line) for line in lines]
