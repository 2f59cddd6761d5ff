"""Standings aggregation - weighted fantasy points rolled up per franchise.

Each performance is attributed to a franchise in two tiers: the franchise id
snapshotted when the match was recorded, then the player's current owner.
Anything that resolves to neither lands in an explicit Free Agent bucket so
no points are silently lost.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from src.auction_engine.auction_state import (
    AuctionState,
    Franchise,
    Player,
    normalize_name,
)
from src.scoring.config import (
    CAPTAIN_MULTIPLIER,
    DEFAULT_MULTIPLIER,
    FREE_AGENT,
    VICE_CAPTAIN_MULTIPLIER,
)
from src.scoring.models import (
    MatchRecord,
    PlayerPerformance,
    ScoredPerformance,
    StandingRow,
)

logger = logging.getLogger(__name__)

PERFORMANCE_LOG_COLUMNS = [
    "match", "date", "player", "franchise", "franchise_id",
    "points", "multiplier", "total", "potm", "breakdown",
]

_SORT_COLUMNS = {
    "match": "match",
    "player": "player",
    "franchise": "franchise",
    "points": "points",
    "total": "total",
}


def weighted_total(points: float, multiplier: float) -> int:
    """``points * multiplier`` rounded half away from zero."""
    product = Decimal(str(points)) * Decimal(str(multiplier))
    return int(product.to_integral_value(rounding=ROUND_HALF_UP))


class StandingsAggregator:
    """Turns match records into weighted points and franchise standings.

    Reads ownership and captaincy from the live AuctionState; never mutates
    it.
    """

    def __init__(self, state: AuctionState):
        self.state = state

    # ------------------------------------------------------------------
    # Attribution
    # ------------------------------------------------------------------

    def build_name_index(self) -> Dict[str, Player]:
        """Normalized name -> player. The first player with a name wins."""
        index: Dict[str, Player] = {}
        for player in self.state.players:
            key = normalize_name(player.name)
            if key in index:
                logger.warning(
                    "Duplicate player name %r: performances map to %s",
                    player.name,
                    index[key].player_id,
                )
                continue
            index[key] = player
        return index

    def resolve_franchise(
        self, perf: PlayerPerformance, index: Dict[str, Player]
    ) -> Tuple[Optional[Franchise], Optional[Player]]:
        """Owning franchise (or None for Free Agent) and the matched player."""
        player = index.get(normalize_name(perf.player_name))

        snapshot = perf.franchise_id_snapshot
        if snapshot and snapshot != FREE_AGENT:
            franchise = self.state.find_franchise(snapshot)
            if franchise is not None:
                return franchise, player

        if player is not None and player.team_id is not None:
            return self.state.get_franchise(player.team_id), player

        return None, player

    def multiplier_for(
        self,
        record: MatchRecord,
        perf: PlayerPerformance,
        franchise: Optional[Franchise],
        player: Optional[Player],
    ) -> float:
        """Captaincy multiplier for one performance.

        Phase-fixed records keep whatever was recorded; live records use the
        franchise's current captain and vice-captain.
        """
        if record.is_phase_fixed:
            if perf.multiplier_applied is None:
                return DEFAULT_MULTIPLIER
            return perf.multiplier_applied

        if franchise is None or player is None:
            return DEFAULT_MULTIPLIER
        if franchise.captain_id == player.player_id:
            return CAPTAIN_MULTIPLIER
        if franchise.vice_captain_id == player.player_id:
            return VICE_CAPTAIN_MULTIPLIER
        return DEFAULT_MULTIPLIER

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score_record(
        self, record: MatchRecord, index: Optional[Dict[str, Player]] = None
    ) -> List[ScoredPerformance]:
        index = self.build_name_index() if index is None else index
        scored = []
        for perf in record.performances:
            franchise, player = self.resolve_franchise(perf, index)
            multiplier = self.multiplier_for(record, perf, franchise, player)
            scored.append(
                ScoredPerformance(
                    match_number=record.match_number,
                    date=record.date,
                    player_name=perf.player_name,
                    player_id=player.player_id if player else None,
                    franchise_id=franchise.franchise_id if franchise else FREE_AGENT,
                    franchise_name=franchise.name if franchise else FREE_AGENT,
                    points=perf.points,
                    multiplier=multiplier,
                    total=weighted_total(perf.points, multiplier),
                    is_potm=perf.is_potm,
                    breakdown=perf.breakdown,
                )
            )
        return scored

    def scored_performances(
        self,
        records: Iterable[MatchRecord],
        match_numbers: Optional[Iterable[int]] = None,
        franchise_id: Optional[str] = None,
    ) -> List[ScoredPerformance]:
        """Every scored performance, optionally filtered by match or franchise."""
        wanted = None if match_numbers is None else set(match_numbers)
        index = self.build_name_index()

        rows = []
        for record in records:
            if wanted is not None and record.match_number not in wanted:
                continue
            for row in self.score_record(record, index):
                if franchise_id is None or row.franchise_id == franchise_id:
                    rows.append(row)
        return rows

    # ------------------------------------------------------------------
    # Standings
    # ------------------------------------------------------------------

    def franchise_totals(
        self,
        records: Iterable[MatchRecord],
        match_numbers: Optional[Iterable[int]] = None,
    ) -> Dict[str, int]:
        """Total weighted points per franchise id, plus the Free Agent bucket."""
        totals = {f.franchise_id: 0 for f in self.state.franchises}
        totals[FREE_AGENT] = 0
        for row in self.scored_performances(records, match_numbers):
            totals[row.franchise_id] += row.total
        return totals

    def leaderboard(
        self,
        records: Iterable[MatchRecord],
        match_numbers: Optional[Iterable[int]] = None,
    ) -> List[StandingRow]:
        """Franchises by total points, highest first; ties by franchise id."""
        totals = self.franchise_totals(records, match_numbers)
        ordered = sorted(
            self.state.franchises,
            key=lambda f: (-totals[f.franchise_id], f.franchise_id),
        )

        rows = []
        leader = totals[ordered[0].franchise_id] if ordered else 0
        previous = leader
        for position, franchise in enumerate(ordered, start=1):
            points = totals[franchise.franchise_id]
            rows.append(
                StandingRow(
                    rank=position,
                    franchise_id=franchise.franchise_id,
                    franchise_name=franchise.name,
                    total_points=points,
                    behind_previous=previous - points,
                    behind_leader=leader - points,
                )
            )
            previous = points
        return rows

    def performance_log(
        self,
        records: Iterable[MatchRecord],
        match_number: Optional[int] = None,
        franchise_id: Optional[str] = None,
        sort_by: str = "match",
        descending: bool = True,
    ) -> pd.DataFrame:
        """Flat, sortable table of scored performances.

        Defaults to the most recent match first.
        """
        if sort_by not in _SORT_COLUMNS:
            raise ValueError(
                f"Invalid sort_by {sort_by!r}. Must be one of: {sorted(_SORT_COLUMNS)}"
            )

        match_numbers = None if match_number is None else [match_number]
        rows = [
            {
                "match": r.match_number,
                "date": r.date,
                "player": r.player_name,
                "franchise": r.franchise_name,
                "franchise_id": r.franchise_id,
                "points": r.points,
                "multiplier": r.multiplier,
                "total": r.total,
                "potm": r.is_potm,
                "breakdown": r.breakdown,
            }
            for r in self.scored_performances(records, match_numbers, franchise_id)
        ]
        df = pd.DataFrame(rows, columns=PERFORMANCE_LOG_COLUMNS)
        if df.empty:
            return df

        column = _SORT_COLUMNS[sort_by]
        key = (lambda s: s.str.lower()) if pd.api.types.is_string_dtype(df[column]) else None
        return df.sort_values(
            column, ascending=not descending, kind="stable", key=key
        ).reset_index(drop=True)
