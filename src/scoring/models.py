"""Data models for match scoring and standings."""

from dataclasses import dataclass, field
from typing import List, Optional

from src.scoring.config import FREE_AGENT


@dataclass
class PlayerPerformance:
    """One player's fantasy output in one match.

    ``points`` is the raw total with any Player-of-the-Match bonus already
    included. ``player_name`` is matched case-insensitively against the pool.
    """

    player_name: str
    points: float
    is_potm: bool = False
    breakdown: str = ""
    franchise_id_snapshot: Optional[str] = None
    multiplier_applied: Optional[float] = None


@dataclass
class MatchRecord:
    """All performances recorded for one match."""

    match_number: int
    date: str
    performances: List[PlayerPerformance] = field(default_factory=list)
    is_phase_fixed: bool = False
    url: str = ""


@dataclass
class ScoredPerformance:
    """A performance resolved to a franchise with its multiplier applied."""

    match_number: int
    date: str
    player_name: str
    player_id: Optional[str]
    franchise_id: str
    franchise_name: str
    points: float
    multiplier: float
    total: int
    is_potm: bool
    breakdown: str

    @property
    def is_free_agent(self) -> bool:
        return self.franchise_id == FREE_AGENT


@dataclass
class StandingRow:
    """A franchise's place on the leaderboard."""

    rank: int
    franchise_id: str
    franchise_name: str
    total_points: int
    behind_previous: int
    behind_leader: int


@dataclass
class PlayerMatchStats:
    """Raw scorecard line for one player in one match."""

    player_name: str
    runs: int = 0
    balls_faced: int = 0
    fours: int = 0
    sixes: int = 0
    overs: float = 0.0
    maidens: int = 0
    runs_conceded: int = 0
    wickets: int = 0
    catches: int = 0
    stumpings: int = 0
    run_outs_direct: int = 0
    run_outs_assisted: int = 0
    is_potm: bool = False
