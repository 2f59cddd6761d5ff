"""Roster mutations - the only code that changes ownership and budgets."""

import logging
from typing import Optional

from src.auction_engine.auction_rules import (
    AuctionRules,
    InvalidTransitionError,
    NotOwnedError,
)
from src.auction_engine.auction_state import AuctionState, Franchise, Player

logger = logging.getLogger(__name__)


class RosterManager:
    """Atomic roster operations over an AuctionState.

    ``sell`` is the bare commit step used after a caller has validated the
    sale. ``release``, ``move`` and ``reprice`` validate first and raise an
    AuctionError without touching state when a rule is broken.
    """

    def __init__(self, state: AuctionState):
        self.state = state
        self.rules = AuctionRules(state)

    def sell(self, player_id: str, franchise_id: str, price: float) -> Player:
        """Commit a sale: mark the player sold and debit the franchise."""
        player = self.state.get_player(player_id)
        franchise = self.state.get_franchise(franchise_id)
        assert not player.is_sold, f"{player.name} is already sold"

        player.is_sold = True
        player.team_id = franchise.franchise_id
        player.sold_price = round(price, 2)
        franchise.debit(price)

        logger.info(
            "SOLD: %s (%s) -> %s for %.2fL (budget left %.2fL)",
            player.name,
            player.category,
            franchise.name,
            price,
            franchise.budget,
        )
        return player

    def release(self, player_id: str) -> Player:
        """Return a sold player to the pool and refund the owner."""
        player = self.state.get_player(player_id)
        if not player.is_sold:
            logger.warning("Release rejected: %s is not sold", player.name)
            raise NotOwnedError(f"{player.name} is not owned by any franchise")

        franchise = self.state.get_franchise(player.team_id)
        refund = player.sold_price

        franchise.credit(refund)
        franchise.clear_captaincy_of(player.player_id)
        player.is_sold = False
        player.team_id = None
        player.sold_price = None

        logger.info(
            "RELEASED: %s from %s, refunded %.2fL", player.name, franchise.name, refund
        )
        return player

    def move(self, player_id: str, to_franchise_id: str) -> Player:
        """Move a sold player between franchises at the current valuation."""
        player = self.state.get_player(player_id)
        is_valid, error = self.rules.validate_move(player, to_franchise_id)
        if not is_valid:
            logger.warning("Move rejected: %s", error)
            raise error

        source = self.state.get_franchise(player.team_id)
        destination = self.state.get_franchise(to_franchise_id)
        valuation = player.sold_price

        destination.debit(valuation)
        source.credit(valuation)
        source.clear_captaincy_of(player.player_id)
        player.team_id = destination.franchise_id

        logger.info(
            "MOVED: %s from %s to %s at %.2fL",
            player.name,
            source.name,
            destination.name,
            valuation,
        )
        return player

    def reprice(self, player_id: str, new_price: float) -> Player:
        """Change a sold player's valuation, settling the difference."""
        player = self.state.get_player(player_id)
        is_valid, error = self.rules.validate_reprice(player, new_price)
        if not is_valid:
            logger.warning("Reprice rejected: %s", error)
            raise error

        franchise = self.state.get_franchise(player.team_id)
        old_price = player.sold_price

        franchise.credit(old_price)
        franchise.debit(new_price)
        player.sold_price = round(new_price, 2)

        logger.info(
            "REPRICED: %s (%s) %.2fL -> %.2fL",
            player.name,
            franchise.name,
            old_price,
            new_price,
        )
        return player

    def set_captaincy(
        self,
        franchise_id: str,
        captain_id: Optional[str],
        vice_captain_id: Optional[str],
    ) -> Franchise:
        """Designate captain and vice-captain from the franchise's roster."""
        franchise = self.state.get_franchise(franchise_id)

        if captain_id is not None and captain_id == vice_captain_id:
            raise InvalidTransitionError(
                "Captain and vice-captain must be different players"
            )

        for player_id in (captain_id, vice_captain_id):
            if player_id is None:
                continue
            player = self.state.get_player(player_id)
            if player.team_id != franchise_id:
                raise NotOwnedError(f"{player.name} does not play for {franchise.name}")

        franchise.captain_id = captain_id
        franchise.vice_captain_id = vice_captain_id
        logger.info(
            "Captaincy for %s: C=%s VC=%s", franchise.name, captain_id, vice_captain_id
        )
        return franchise
