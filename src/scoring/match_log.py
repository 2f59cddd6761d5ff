"""Append-only log of match records."""

import copy
import logging
from typing import List, Optional

from src.auction_engine.auction_rules import InvalidTransitionError
from src.auction_engine.auction_state import AuctionState, normalize_name
from src.scoring.config import FREE_AGENT
from src.scoring.models import MatchRecord
from src.scoring.standings import StandingsAggregator

logger = logging.getLogger(__name__)


class MatchLog:
    """Holds every match record for the season, most recent first on read."""

    def __init__(self, state: AuctionState, records: Optional[List[MatchRecord]] = None):
        self.state = state
        self.records: List[MatchRecord] = list(records or [])

    def record_match_performance(self, record: MatchRecord) -> MatchRecord:
        """Append a match record.

        The log keeps its own copy. On a live record, performances without a
        franchise snapshot are stamped with the player's current owner (or
        Free Agent), so later trades do not rewrite who earned the points.
        Phase-fixed records are stored as given.

        Raises:
            InvalidTransitionError: A record with this match number exists.
        """
        if self.get(record.match_number) is not None:
            logger.warning("Duplicate match number %d rejected", record.match_number)
            raise InvalidTransitionError(
                f"Match {record.match_number} has already been recorded"
            )

        record = copy.deepcopy(record)
        if not record.is_phase_fixed:
            owners = {
                normalize_name(p.name): p.team_id
                for p in reversed(self.state.players)
            }
            for perf in record.performances:
                if perf.franchise_id_snapshot is None:
                    perf.franchise_id_snapshot = (
                        owners.get(normalize_name(perf.player_name)) or FREE_AGENT
                    )

        self.records.append(record)
        logger.info(
            "Recorded match %d (%s): %d performances",
            record.match_number,
            record.date,
            len(record.performances),
        )
        return record

    def freeze_match(self, match_number: int) -> MatchRecord:
        """Bake the current captaincy multipliers into a record.

        After freezing, changes of captain no longer affect this match.
        """
        record = self.get(match_number)
        if record is None:
            raise KeyError(f"Unknown match {match_number}")
        if record.is_phase_fixed:
            raise InvalidTransitionError(f"Match {match_number} is already phase-fixed")

        aggregator = StandingsAggregator(self.state)
        index = aggregator.build_name_index()
        for perf in record.performances:
            franchise, player = aggregator.resolve_franchise(perf, index)
            perf.multiplier_applied = aggregator.multiplier_for(
                record, perf, franchise, player
            )
        record.is_phase_fixed = True

        logger.info("Match %d phase-fixed", match_number)
        return record

    def get(self, match_number: int) -> Optional[MatchRecord]:
        for record in self.records:
            if record.match_number == match_number:
                return record
        return None

    def match_numbers(self) -> List[int]:
        """Recorded match numbers, most recent first."""
        return sorted({r.match_number for r in self.records}, reverse=True)

    def clear(self):
        self.records = []
