"""Retention draw - assigning a player outside open bidding."""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from src.auction_engine.auction_rules import AuctionRules, DrawIneligibleError
from src.auction_engine.auction_state import AuctionState, Franchise
from src.auction_engine.roster_manager import RosterManager

logger = logging.getLogger(__name__)


@dataclass
class DrawResult:
    """A resolved retention: who won, what they paid, and who was in the hat."""

    player_id: str
    franchise_id: str
    price: float
    pool: List[str] = field(default_factory=list)

    @property
    def was_contested(self) -> bool:
        return len(self.pool) > 1


class RetentionDraw:
    """Resolves retentions at the fixed category price.

    A single interested franchise gets the player outright. When several
    franchises want the same player, one is sampled uniformly from exactly
    the interested set. Any suspense animation belongs to the UI.
    """

    def __init__(self, state: AuctionState, rng: Optional[random.Random] = None):
        self.state = state
        self.rules = AuctionRules(state)
        self.roster = RosterManager(state)
        self.rng = rng or random.Random()

    def eligible_franchises(self, player_id: str) -> List[Franchise]:
        """Franchises allowed to enter the draw for this player."""
        player = self.state.get_player(player_id)
        if player.is_sold:
            return []
        return [
            f for f in self.state.franchises
            if self.rules.is_draw_eligible(f.franchise_id, player.category)
        ]

    def resolve_draw(self, player_id: str, interested_ids: List[str]) -> DrawResult:
        """Pick the winner among ``interested_ids`` and commit the retention.

        Raises:
            DrawIneligibleError: The interested set is empty or contains a
                franchise that is not eligible.
            InvalidTransitionError: The player is already sold.
            InsufficientBudgetError: The winner can no longer pay the fixed
                retention price. Nothing is committed.
        """
        player = self.state.get_player(player_id)
        pool = list(dict.fromkeys(interested_ids))
        if not pool:
            raise DrawIneligibleError(f"No franchise has registered interest in {player.name}")

        for franchise_id in pool:
            is_valid, error = self.rules.validate_draw_entry(franchise_id, player)
            if not is_valid:
                logger.warning("Draw rejected for %s: %s", player.name, error)
                raise error

        winner_id = pool[0] if len(pool) == 1 else self.rng.choice(pool)
        price = self.state.rules.get_rule(player.category).retention_price

        is_valid, error = self.rules.validate_retention_payment(winner_id, price)
        if not is_valid:
            logger.warning("Retention rejected for %s: %s", player.name, error)
            raise error

        self.roster.sell(player.player_id, winner_id, price)
        logger.info(
            "Retention draw for %s: %s wins from %d interested",
            player.name,
            self.state.get_franchise(winner_id).name,
            len(pool),
        )
        return DrawResult(
            player_id=player.player_id,
            franchise_id=winner_id,
            price=price,
            pool=pool,
        )
