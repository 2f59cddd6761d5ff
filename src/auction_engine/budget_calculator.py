"""Budget reservation - how much a franchise may commit right now."""

from typing import Dict, Optional

from src.auction_engine.auction_state import AuctionState, from_cents, to_cents


class BudgetCalculator:
    """Computes reservation ceilings and roster occupancy.

    A franchise must always be able to fill every remaining mandatory slot at
    the category floor price. The ceiling for a purchase is the current budget
    minus that floor-price reserve. Nothing is cached: both budget and
    occupancy change between calls.
    """

    def __init__(self, state: AuctionState):
        self.state = state

    def reserve_cents(
        self, franchise_id: str, filling_category: Optional[str] = None
    ) -> int:
        """Floor-price cost of every open slot, in cents.

        The slot being filled in ``filling_category`` is excluded from its own
        reservation.
        """
        total = 0
        for category, rule in self.state.rules.categories.items():
            remaining = rule.quota - self.state.category_count(franchise_id, category)
            if category == filling_category and remaining > 0:
                remaining -= 1
            if remaining > 0:
                total += remaining * to_cents(rule.base_price)
        return total

    def reserve(self, franchise_id: str, filling_category: Optional[str] = None) -> float:
        return from_cents(self.reserve_cents(franchise_id, filling_category))

    def max_spendable_cents(self, franchise_id: str, category: str) -> int:
        franchise = self.state.get_franchise(franchise_id)
        return to_cents(franchise.budget) - self.reserve_cents(franchise_id, category)

    def max_spendable(self, franchise_id: str, category: str) -> float:
        """Reservation ceiling for a player of ``category``."""
        return from_cents(self.max_spendable_cents(franchise_id, category))

    def can_afford(self, franchise_id: str, category: str, amount: float) -> bool:
        return to_cents(amount) <= self.max_spendable_cents(franchise_id, category)

    def get_roster_summary(self, franchise_id: str) -> Dict[str, Dict]:
        """Occupancy of each category, most scarce first."""
        summary = {}
        for category in self.state.rules.ordered_categories():
            quota = self.state.rules.categories[category].quota
            owned = self.state.category_count(franchise_id, category)
            summary[category] = {
                "owned": owned,
                "quota": quota,
                "remaining": max(0, quota - owned),
            }
        return summary

    def is_qualified(self, franchise_id: str) -> bool:
        """Whether every category quota is filled."""
        return all(
            entry["owned"] >= entry["quota"]
            for entry in self.get_roster_summary(franchise_id).values()
        )
