"""Auction state data models - single source of truth for ownership and budgets."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from src.auction_engine.config import (
    BID_INCREMENT_RATE,
    CATEGORY_BASE_PRICES,
    CATEGORY_QUOTAS,
    CATEGORY_RANKS,
    CATEGORY_RETENTION_PRICES,
    OWNER_RETENTION_MULTIPLIER,
    STARTING_BUDGET,
)


def to_cents(amount: float) -> int:
    """Convert a lakh amount to integer cents, absorbing float drift."""
    return int(round(amount * 100))


def from_cents(cents: int) -> float:
    return round(cents / 100, 2)


def normalize_name(name: str) -> str:
    return name.strip().lower()


@dataclass
class CategoryRule:
    """Static rules for one scarcity category."""

    category: str
    quota: int
    base_price: float
    retention_price: float
    rank: int

    @property
    def increment(self) -> float:
        """Bid step: a fixed fraction of the base price."""
        return from_cents(to_cents(self.base_price * BID_INCREMENT_RATE))


@dataclass
class LeagueRules:
    """League-wide auction configuration."""

    starting_budget: float
    categories: Dict[str, CategoryRule] = field(default_factory=dict)
    owner_retention_multiplier: float = OWNER_RETENTION_MULTIPLIER

    @classmethod
    def default(cls) -> "LeagueRules":
        categories = {
            cat: CategoryRule(
                category=cat,
                quota=CATEGORY_QUOTAS[cat],
                base_price=CATEGORY_BASE_PRICES[cat],
                retention_price=CATEGORY_RETENTION_PRICES[cat],
                rank=CATEGORY_RANKS[cat],
            )
            for cat in CATEGORY_QUOTAS
        }
        return cls(starting_budget=STARTING_BUDGET, categories=categories)

    def get_rule(self, category: str) -> CategoryRule:
        """Get rules for a category."""
        if category not in self.categories:
            raise ValueError(f"Unknown category {category!r}")
        return self.categories[category]

    def ordered_categories(self) -> List[str]:
        """Categories sorted most scarce first."""
        return sorted(self.categories, key=lambda c: self.categories[c].rank)

    def total_roster_size(self) -> int:
        return sum(rule.quota for rule in self.categories.values())


@dataclass
class Player:
    """A player in the auction pool."""

    player_id: str
    name: str
    category: str
    skill: str
    base_price: float
    country: str = "India"
    rating: int = 0
    is_sold: bool = False
    team_id: Optional[str] = None
    sold_price: Optional[float] = None

    @property
    def valuation(self) -> float:
        """Sold price once sold, base price while in the pool."""
        return self.sold_price if self.is_sold else self.base_price


@dataclass
class Franchise:
    """A franchise and its purse."""

    franchise_id: str
    name: str
    starting_budget: float
    budget: float
    color: str = ""
    icon: str = ""
    captain_id: Optional[str] = None
    vice_captain_id: Optional[str] = None

    def debit(self, amount: float):
        self.budget = from_cents(to_cents(self.budget) - to_cents(amount))

    def credit(self, amount: float):
        self.budget = from_cents(to_cents(self.budget) + to_cents(amount))

    def clear_captaincy_of(self, player_id: str):
        """Drop a captain/vice-captain designation held by ``player_id``."""
        if self.captain_id == player_id:
            self.captain_id = None
        if self.vice_captain_id == player_id:
            self.vice_captain_id = None


@dataclass
class Bid:
    """A single accepted bid on the player under the hammer."""

    franchise_id: str
    amount: float
    timestamp: str

    @classmethod
    def create(cls, franchise_id: str, amount: float):
        return cls(
            franchise_id=franchise_id,
            amount=amount,
            timestamp=datetime.now().isoformat(),
        )


@dataclass
class LotResult:
    """Outcome of one player's auction."""

    player_id: str
    outcome: str  # "SOLD" or "SKIPPED"
    franchise_id: Optional[str] = None
    price: Optional[float] = None
    bids: List[Bid] = field(default_factory=list)


@dataclass
class AuctionState:
    """Complete auction state.

    Rosters are not stored: a franchise's roster is the filter of players whose
    ``team_id`` matches it. That is an O(n) scan per query, which is fine for a
    pool of tens of players and keeps a single place to mutate ownership.
    """

    rules: LeagueRules
    players: List[Player]
    franchises: List[Franchise]
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())

    def find_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def get_player(self, player_id: str) -> Player:
        """Get player by ID."""
        player = self.find_player(player_id)
        if player is None:
            raise KeyError(f"Unknown player {player_id!r}")
        return player

    def find_franchise(self, franchise_id: str) -> Optional[Franchise]:
        for franchise in self.franchises:
            if franchise.franchise_id == franchise_id:
                return franchise
        return None

    def get_franchise(self, franchise_id: str) -> Franchise:
        """Get franchise by ID."""
        franchise = self.find_franchise(franchise_id)
        if franchise is None:
            raise KeyError(f"Unknown franchise {franchise_id!r}")
        return franchise

    def roster(self, franchise_id: str) -> List[Player]:
        """Players currently owned by the franchise, in pool order."""
        return [p for p in self.players if p.team_id == franchise_id]

    def category_count(self, franchise_id: str, category: str) -> int:
        """Number of players of ``category`` owned by the franchise."""
        return sum(
            1 for p in self.players
            if p.team_id == franchise_id and p.category == category
        )

    def unsold_players(self) -> List[Player]:
        return [p for p in self.players if not p.is_sold]

    def is_owner_fixture(self, player: Player, franchise: Franchise) -> bool:
        """Whether ``player`` is the franchise owner playing for their own side."""
        return normalize_name(player.name) == normalize_name(franchise.name)

    def check_invariants(self):
        """Assert the invariants every committed state must satisfy.

        Violations are programming errors, never user-facing rejections.
        """
        for player in self.players:
            assert player.is_sold == (player.team_id is not None), (
                f"{player.name}: sold flag disagrees with team_id"
            )
            assert player.is_sold == (player.sold_price is not None), (
                f"{player.name}: sold flag disagrees with sold_price"
            )
            if player.team_id is not None:
                assert self.find_franchise(player.team_id) is not None, (
                    f"{player.name}: owned by unknown franchise {player.team_id}"
                )

        for franchise in self.franchises:
            assert to_cents(franchise.budget) >= 0, (
                f"{franchise.name}: negative budget {franchise.budget}"
            )
            spent = sum(to_cents(p.sold_price) for p in self.roster(franchise.franchise_id))
            assert to_cents(franchise.budget) + spent == to_cents(
                franchise.starting_budget
            ), f"{franchise.name}: budget ledger out of balance"
            for category, rule in self.rules.categories.items():
                owned = self.category_count(franchise.franchise_id, category)
                assert owned <= rule.quota, (
                    f"{franchise.name}: {owned} {category} players exceeds quota {rule.quota}"
                )
