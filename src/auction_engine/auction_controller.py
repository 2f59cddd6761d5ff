"""Auction controller - drives one player at a time from open to sold."""

import logging
import random
from typing import Callable, List, Optional

from src.auction_engine.auction_rules import AuctionRules, InvalidTransitionError
from src.auction_engine.auction_state import (
    AuctionState,
    Bid,
    LotResult,
    Player,
    from_cents,
    normalize_name,
    to_cents,
)
from src.auction_engine.budget_calculator import BudgetCalculator
from src.auction_engine.config import MARQUEE_ORDER
from src.auction_engine.roster_manager import RosterManager

logger = logging.getLogger(__name__)

BidObserver = Callable[[str, float], None]


class AuctionController:
    """Bidding state machine for the live auction room.

    ``IDLE`` -> ``open_auction`` -> ``OPEN`` -> ``finalize_sale`` or ``skip``
    -> ``IDLE``. Every bid and hammer price is checked against the
    reservation ceiling, recomputed from the live state each time.
    """

    IDLE = "IDLE"
    OPEN = "OPEN"
    SOLD = "SOLD"
    SKIPPED = "SKIPPED"

    def __init__(
        self,
        state: AuctionState,
        marquee_order: Optional[List[str]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.state = state
        self.rules = AuctionRules(state)
        self.budget = BudgetCalculator(state)
        self.roster = RosterManager(state)
        self.marquee_order = list(MARQUEE_ORDER if marquee_order is None else marquee_order)
        self.rng = rng or random.Random()

        self.phase = self.IDLE
        self.current_player_id: Optional[str] = None
        self.current_bid = 0.0
        self.leading_bidder: Optional[str] = None
        self.bid_history: List[Bid] = []
        self.results: List[LotResult] = []
        self._observers: List[BidObserver] = []

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def add_observer(self, callback: BidObserver):
        """Register ``callback(franchise_id, amount)`` for accepted bids."""
        self._observers.append(callback)

    def remove_observer(self, callback: BidObserver):
        self._observers.remove(callback)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def open_auction(self, player_id: str) -> Player:
        """Put a player under the hammer at their base price."""
        if self.phase != self.IDLE:
            raise InvalidTransitionError(
                f"Cannot open a new auction while {self.current_player.name} is live"
            )

        player = self.state.get_player(player_id)
        if player.is_sold:
            raise InvalidTransitionError(f"{player.name} has already been sold")

        self.phase = self.OPEN
        self.current_player_id = player.player_id
        self.current_bid = player.base_price
        self.leading_bidder = None
        self.bid_history = []

        logger.info(
            "Auction opened: %s (%s) at %.2fL",
            player.name,
            player.category,
            player.base_price,
        )
        return player

    def next_bid_amount(self) -> float:
        """Amount the next bid would commit to."""
        self._require_open("bid")
        player = self.current_player
        if self.leading_bidder is None:
            return player.base_price
        increment = self.state.rules.get_rule(player.category).increment
        return from_cents(to_cents(self.current_bid) + to_cents(increment))

    def place_bid(self, franchise_id: str) -> Bid:
        """Raise the price by one step on behalf of ``franchise_id``.

        Raises:
            InvalidTransitionError: No player is open, the franchise is
                unknown or already leading, or the player was sold meanwhile.
            QuotaExceededError: The franchise's category slots are full.
            InsufficientBudgetError: The next amount exceeds its ceiling.
        """
        self._require_open("bid")
        player = self.current_player
        amount = self.next_bid_amount()

        is_valid, error = self.rules.validate_bid(
            franchise_id, player, amount, self.leading_bidder
        )
        if not is_valid:
            logger.warning("Bid rejected for %s: %s", player.name, error)
            raise error

        bid = Bid.create(franchise_id, amount)
        self.current_bid = amount
        self.leading_bidder = franchise_id
        self.bid_history.append(bid)

        logger.info(
            "Bid: %s -> %.2fL on %s",
            self.state.get_franchise(franchise_id).name,
            amount,
            player.name,
        )
        for callback in list(self._observers):
            callback(franchise_id, amount)

        return bid

    def finalize_sale(self, override_price: Optional[float] = None) -> LotResult:
        """Sell the open player to the leading bidder.

        Args:
            override_price: Hammer price entered by the operator. Defaults to
                the current bid. Must sit on the category increment grid.

        Raises:
            InvalidTransitionError: No open player, no bids yet, or the player
                was sold meanwhile.
            QuotaExceededError: The leader filled the category after bidding.
            BelowBasePriceError, InvalidIncrementError,
            InsufficientBudgetError: The price breaks a rule; the auction
                stays open.
        """
        self._require_open("finalize")
        if self.leading_bidder is None:
            raise InvalidTransitionError("Cannot finalize a sale without a bid")

        player = self.current_player
        price = self.current_bid if override_price is None else override_price

        is_valid, error = self.rules.validate_sale_price(
            self.leading_bidder, player, price
        )
        if not is_valid:
            logger.warning("Sale rejected for %s: %s", player.name, error)
            raise error

        self.roster.sell(player.player_id, self.leading_bidder, price)
        result = LotResult(
            player_id=player.player_id,
            outcome=self.SOLD,
            franchise_id=self.leading_bidder,
            price=player.sold_price,
            bids=list(self.bid_history),
        )
        self.results.append(result)
        self._reset_lot()
        return result

    def skip(self) -> LotResult:
        """Close the open auction without a sale."""
        self._require_open("skip")
        result = LotResult(
            player_id=self.current_player_id,
            outcome=self.SKIPPED,
            bids=list(self.bid_history),
        )
        logger.info("Auction skipped: %s", self.current_player.name)
        self.results.append(result)
        self._reset_lot()
        return result

    def draw_next_player(self) -> Optional[Player]:
        """Open the next player: marquee names in order, then at random.

        Returns None when every player has been sold.
        """
        unsold = self.state.unsold_players()
        if not unsold:
            logger.info("No unsold players left to draw")
            return None

        by_name = {}
        for player in unsold:
            by_name.setdefault(normalize_name(player.name), player)

        for name in self.marquee_order:
            marquee_player = by_name.get(normalize_name(name))
            if marquee_player is not None:
                return self.open_auction(marquee_player.player_id)

        return self.open_auction(self.rng.choice(unsold).player_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self.phase == self.OPEN

    @property
    def current_player(self) -> Optional[Player]:
        if self.current_player_id is None:
            return None
        return self.state.get_player(self.current_player_id)

    def max_spendable(self, franchise_id: str) -> float:
        """Ceiling for ``franchise_id`` on the player currently open."""
        self._require_open("query the ceiling")
        return self.budget.max_spendable(franchise_id, self.current_player.category)

    def _require_open(self, action: str):
        if self.phase != self.OPEN:
            raise InvalidTransitionError(f"Cannot {action}: no player is under the hammer")

    def _reset_lot(self):
        self.phase = self.IDLE
        self.current_player_id = None
        self.current_bid = 0.0
        self.leading_bidder = None
        self.bid_history = []
