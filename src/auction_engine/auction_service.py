"""Auction service - the single process-scoped owner of auction state.

Every command runs under one re-entrant lock, so commands from several admin
clients are serialized and the reservation ceiling always reads a fresh
budget. Successful mutations are written to disk before the lock is
released. Queries take the same lock and hand back copies, so a viewer never
sees a sale half-applied.
"""

import copy
import logging
import random
from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import Dict, Iterator, List, Optional

import pandas as pd

from src.auction_engine.auction_controller import AuctionController
from src.auction_engine.auction_initializer import AuctionInitializer
from src.auction_engine.auction_rules import AuctionRules, InvalidTransitionError
from src.auction_engine.auction_state import (
    AuctionState,
    Bid,
    Franchise,
    LotResult,
    Player,
)
from src.auction_engine.reports import AuctionReports
from src.auction_engine.retention_draw import DrawResult, RetentionDraw
from src.auction_engine.roster_manager import RosterManager
from src.auction_engine.state_persistence import StatePersistence
from src.scoring.match_log import MatchLog
from src.scoring.models import MatchRecord, StandingRow
from src.scoring.standings import StandingsAggregator

logger = logging.getLogger(__name__)


class AuctionService:
    """Facade the UI layer calls into.

    Loads saved state at construction (or starts a fresh season when nothing
    is saved) and rewrites the documents after every successful mutation.
    """

    def __init__(
        self,
        persistence: Optional[StatePersistence] = None,
        initializer: Optional[AuctionInitializer] = None,
        rng: Optional[random.Random] = None,
    ):
        self._lock = RLock()
        self.persistence = persistence or StatePersistence()
        self.rng = rng or random.Random()
        self.initializer = initializer or AuctionInitializer(rng=self.rng)

        state = self.persistence.load_state(self.initializer.rules)
        if state is None:
            logger.info("No saved auction found, starting a new season")
            state = self.initializer.create_season()
        self._bind(state, self.persistence.load_match_records())
        self._save()

    def _bind(self, state: AuctionState, match_records: List[MatchRecord]):
        self.state = state
        self.rules = AuctionRules(state)
        self.roster = RosterManager(state)
        self.controller = AuctionController(state, rng=self.rng)
        self.draw = RetentionDraw(state, rng=self.rng)
        self.reports = AuctionReports(state)
        self.aggregator = StandingsAggregator(state)
        self.match_log = MatchLog(state, match_records)

    def _save(self):
        self.persistence.save_state(self.state, self.match_log.records)

    def _require_not_under_hammer(self, player_id: str):
        if self.controller.is_open and self.controller.current_player_id == player_id:
            player = self.state.get_player(player_id)
            logger.warning("Rejected: %s is under the hammer", player.name)
            raise InvalidTransitionError(
                f"{player.name} is under the hammer; finalize or skip the lot first"
            )

    @contextmanager
    def _command(self, save: bool = True) -> Iterator[None]:
        """Serialize a command; persist and re-check invariants on success."""
        with self._lock:
            yield
            if save:
                self.state.check_invariants()
                self._save()

    # ------------------------------------------------------------------
    # Live auction
    # ------------------------------------------------------------------

    def open_auction(self, player_id: str) -> Player:
        with self._command(save=False):
            return copy.deepcopy(self.controller.open_auction(player_id))

    def draw_next_player(self) -> Optional[Player]:
        with self._command(save=False):
            return copy.deepcopy(self.controller.draw_next_player())

    def place_bid(self, franchise_id: str) -> Bid:
        with self._command(save=False):
            return self.controller.place_bid(franchise_id)

    def finalize_sale(self, override_price: Optional[float] = None) -> LotResult:
        with self._command():
            return self.controller.finalize_sale(override_price)

    def skip(self) -> LotResult:
        with self._command(save=False):
            return self.controller.skip()

    def add_bid_observer(self, callback):
        with self._lock:
            self.controller.add_observer(callback)

    # ------------------------------------------------------------------
    # Roster commands
    # ------------------------------------------------------------------

    def sell(self, player_id: str, franchise_id: str, price: float) -> Player:
        """Direct, non-competitive assignment at a fixed price."""
        with self._command():
            self._require_not_under_hammer(player_id)
            player = self.state.get_player(player_id)
            is_valid, error = self.rules.validate_direct_sale(franchise_id, player, price)
            if not is_valid:
                logger.warning("Direct sale rejected: %s", error)
                raise error
            return copy.deepcopy(self.roster.sell(player_id, franchise_id, price))

    def release(self, player_id: str) -> Player:
        with self._command():
            return copy.deepcopy(self.roster.release(player_id))

    def move(self, player_id: str, to_franchise_id: str) -> Player:
        with self._command():
            return copy.deepcopy(self.roster.move(player_id, to_franchise_id))

    def reprice(self, player_id: str, new_price: float) -> Player:
        with self._command():
            return copy.deepcopy(self.roster.reprice(player_id, new_price))

    def set_captaincy(
        self,
        franchise_id: str,
        captain_id: Optional[str],
        vice_captain_id: Optional[str],
    ) -> Franchise:
        with self._command():
            return copy.deepcopy(
                self.roster.set_captaincy(franchise_id, captain_id, vice_captain_id)
            )

    # ------------------------------------------------------------------
    # Retention draw
    # ------------------------------------------------------------------

    def eligible_franchises(self, player_id: str) -> List[Franchise]:
        with self._lock:
            return copy.deepcopy(self.draw.eligible_franchises(player_id))

    def resolve_draw(self, player_id: str, interested_ids: List[str]) -> DrawResult:
        with self._command():
            self._require_not_under_hammer(player_id)
            return self.draw.resolve_draw(player_id, interested_ids)

    # ------------------------------------------------------------------
    # Matches and standings
    # ------------------------------------------------------------------

    def record_match_performance(self, record: MatchRecord) -> MatchRecord:
        with self._command():
            return copy.deepcopy(self.match_log.record_match_performance(record))

    def freeze_match(self, match_number: int) -> MatchRecord:
        with self._command():
            return copy.deepcopy(self.match_log.freeze_match(match_number))

    def leaderboard(self, match_numbers: Optional[List[int]] = None) -> List[StandingRow]:
        with self._lock:
            return self.aggregator.leaderboard(self.match_log.records, match_numbers)

    def franchise_totals(self, match_numbers: Optional[List[int]] = None) -> Dict[str, int]:
        with self._lock:
            return self.aggregator.franchise_totals(self.match_log.records, match_numbers)

    def performance_log(self, **filters) -> pd.DataFrame:
        with self._lock:
            return self.aggregator.performance_log(self.match_log.records, **filters)

    def match_numbers(self) -> List[int]:
        """Recorded match numbers, most recent first, for match filters."""
        with self._lock:
            return self.match_log.match_numbers()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def snapshot(self) -> AuctionState:
        """Deep copy of the whole state, consistent as of one instant."""
        with self._lock:
            return copy.deepcopy(self.state)

    def list_unsold_players(self, **filters) -> List[Player]:
        with self._lock:
            return copy.deepcopy(self.reports.list_unsold_players(**filters))

    def list_franchises(self) -> List[Dict]:
        with self._lock:
            return copy.deepcopy(self.reports.list_franchises())

    def category_stats(self) -> pd.DataFrame:
        with self._lock:
            return self.reports.category_stats()

    def export_table(self) -> pd.DataFrame:
        with self._lock:
            return self.reports.export_table()

    def export_csv(self, path: Path) -> Path:
        with self._lock:
            return self.reports.export_csv(path)

    # ------------------------------------------------------------------
    # Season lifecycle
    # ------------------------------------------------------------------

    def reset_season(self, clear_matches: bool = False) -> AuctionState:
        """Recreate the initial players and franchises, owners retained.

        Match records survive unless ``clear_matches`` is set; performances
        keep their franchise snapshot, so they still count when the ids
        match the new season's franchises.
        """
        with self._command():
            if clear_matches:
                self.match_log.clear()
            self.persistence.clear()
            self._bind(self.initializer.create_season(), self.match_log.records)
            logger.info(
                "Season reset (%d match records kept)", len(self.match_log.records)
            )
            return copy.deepcopy(self.state)
