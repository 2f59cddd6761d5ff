"""Auction rule enforcement and validation of bids, sales and roster moves."""

from typing import Optional, Tuple

from src.auction_engine.auction_state import (
    AuctionState,
    Franchise,
    Player,
    from_cents,
    to_cents,
)
from src.auction_engine.budget_calculator import BudgetCalculator


class AuctionError(Exception):
    """Raised when an auction command violates a rule.

    Every subclass is a recoverable rejection: the command did not mutate
    state and the message is meant for the operator.
    """

    pass


class InsufficientBudgetError(AuctionError):
    pass


class QuotaExceededError(AuctionError):
    pass


class InvalidIncrementError(AuctionError):
    pass


class BelowBasePriceError(AuctionError):
    pass


class NotOwnedError(AuctionError):
    pass


class InvalidTransitionError(AuctionError):
    pass


class ImmovableOwnerError(AuctionError):
    pass


class DrawIneligibleError(AuctionError):
    pass


Verdict = Tuple[bool, Optional[AuctionError]]

_OK: Verdict = (True, None)


class AuctionRules:
    """Enforces all auction rules.

    Each ``validate_*`` method returns ``(is_valid, error)``; the error is the
    exception the caller should raise, so callers decide whether to raise,
    log, or just grey out a button.
    """

    def __init__(self, state: AuctionState):
        self.state = state
        self.budget = BudgetCalculator(state)

    def validate_bid(
        self,
        franchise_id: str,
        player: Player,
        amount: float,
        leading_bidder: Optional[str],
    ) -> Verdict:
        """Validate that ``franchise_id`` may bid ``amount`` on ``player``."""
        franchise = self.state.find_franchise(franchise_id)
        if franchise is None:
            return False, InvalidTransitionError(f"Unknown franchise {franchise_id!r}")

        if player.is_sold:
            return False, InvalidTransitionError(f"{player.name} has already been sold")

        if leading_bidder == franchise_id:
            return False, InvalidTransitionError(
                f"{franchise.name} is already the leading bidder"
            )

        quota_valid, quota_error = self._validate_quota(franchise, player.category)
        if not quota_valid:
            return False, quota_error

        if not self.budget.can_afford(franchise_id, player.category, amount):
            reserve = self.budget.reserve(franchise_id, player.category)
            return False, InsufficientBudgetError(
                f"{franchise.name} must reserve {reserve:.2f}L for other "
                f"required players"
            )

        return _OK

    def validate_sale_price(
        self, franchise_id: str, player: Player, price: float
    ) -> Verdict:
        """Validate a hammer price for the leading bidder."""
        rule = self.state.rules.get_rule(player.category)
        franchise = self.state.get_franchise(franchise_id)

        if player.is_sold:
            return False, InvalidTransitionError(f"{player.name} has already been sold")

        # Rosters can change between the leading bid and the hammer
        quota_valid, quota_error = self._validate_quota(franchise, player.category)
        if not quota_valid:
            return False, quota_error

        if to_cents(price) < to_cents(player.base_price):
            return False, BelowBasePriceError(
                f"Final price cannot be lower than the player's base price of "
                f"{player.base_price:.2f}L"
            )

        step = to_cents(rule.increment)
        if (to_cents(price) - to_cents(player.base_price)) % step != 0:
            return False, InvalidIncrementError(
                f"Final price for Category {player.category} must follow the "
                f"{rule.increment:.2f}L bidding increment"
            )

        ceiling = self.budget.max_spendable(franchise_id, player.category)
        if to_cents(price) > to_cents(ceiling):
            return False, InsufficientBudgetError(
                f"{franchise.name} only has {ceiling:.2f}L available for this slot"
            )

        return _OK

    def validate_direct_sale(
        self, franchise_id: str, player: Player, price: float
    ) -> Verdict:
        """Validate a non-competitive assignment at a fixed price."""
        if player.is_sold:
            return False, InvalidTransitionError(f"{player.name} has already been sold")

        franchise = self.state.get_franchise(franchise_id)
        quota_valid, quota_error = self._validate_quota(franchise, player.category)
        if not quota_valid:
            return False, quota_error

        if to_cents(price) < to_cents(player.base_price):
            return False, BelowBasePriceError(
                f"Price cannot be lower than the player's base price of "
                f"{player.base_price:.2f}L"
            )

        if to_cents(franchise.budget) < to_cents(price):
            return False, InsufficientBudgetError(
                f"{franchise.name} has insufficient budget ({franchise.budget:.2f}L)"
            )

        return _OK

    def validate_move(self, player: Player, to_franchise_id: str) -> Verdict:
        """Validate reassigning a sold player to another franchise."""
        if not player.is_sold:
            return False, NotOwnedError(f"{player.name} is not owned by any franchise")

        destination = self.state.get_franchise(to_franchise_id)
        if player.team_id == to_franchise_id:
            return False, InvalidTransitionError(
                f"{player.name} already plays for {destination.name}"
            )

        source = self.state.get_franchise(player.team_id)
        for franchise in (source, destination):
            if self.state.is_owner_fixture(player, franchise):
                return False, ImmovableOwnerError(
                    f"Owners like {player.name} cannot be moved from their "
                    f"home franchise"
                )

        quota_valid, quota_error = self._validate_quota(destination, player.category)
        if not quota_valid:
            return False, quota_error

        if to_cents(destination.budget) < to_cents(player.sold_price):
            return False, InsufficientBudgetError(
                f"{destination.name} has insufficient budget"
            )

        return _OK

    def validate_reprice(self, player: Player, new_price: float) -> Verdict:
        """Validate a new valuation for a sold player.

        The player stays on the roster, so the reserve covers only the other
        open slots; the old price is refunded before the new one is charged.
        """
        if not player.is_sold:
            return False, NotOwnedError(f"{player.name} is not owned by any franchise")

        base_price = self.state.rules.get_rule(player.category).base_price
        if to_cents(new_price) < to_cents(base_price):
            return False, BelowBasePriceError(
                f"Valuation must be at least {base_price:.2f}L"
            )

        franchise = self.state.get_franchise(player.team_id)
        reserve = self.budget.reserve_cents(franchise.franchise_id)
        available = to_cents(franchise.budget) + to_cents(player.sold_price) - reserve
        if to_cents(new_price) > available:
            return False, InsufficientBudgetError(
                f"Update failed. Must reserve {from_cents(reserve):.2f}L for "
                f"remaining squad slots"
            )

        return _OK

    def is_draw_eligible(self, franchise_id: str, category: str) -> bool:
        """Whether a franchise may enter a retention draw for ``category``.

        Stricter than the quota check: owning any player of the category
        already rules a franchise out.
        """
        quota = self.state.rules.get_rule(category).quota
        owned = self.state.category_count(franchise_id, category)
        return owned < quota and owned == 0

    def validate_draw_entry(self, franchise_id: str, player: Player) -> Verdict:
        if player.is_sold:
            return False, InvalidTransitionError(f"{player.name} has already been sold")
        if not self.is_draw_eligible(franchise_id, player.category):
            franchise = self.state.get_franchise(franchise_id)
            return False, DrawIneligibleError(
                f"{franchise.name} is not eligible for the Category "
                f"{player.category} draw"
            )
        return _OK

    def validate_retention_payment(self, franchise_id: str, price: float) -> Verdict:
        franchise = self.state.get_franchise(franchise_id)
        if to_cents(franchise.budget) < to_cents(price):
            return False, InsufficientBudgetError(
                f"{franchise.name} has insufficient budget for this retention"
            )
        return _OK

    def _validate_quota(self, franchise: Franchise, category: str) -> Verdict:
        """Check the franchise still has a slot in ``category``."""
        quota = self.state.rules.get_rule(category).quota
        owned = self.state.category_count(franchise.franchise_id, category)
        if owned >= quota:
            return False, QuotaExceededError(
                f"{franchise.name} has already reached the limit for "
                f"Category {category} ({owned}/{quota})"
            )
        return _OK
