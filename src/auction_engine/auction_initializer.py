"""Season initialization - builds the player pool and franchises, retains owners."""

import json
import logging
import random
import re
from pathlib import Path
from typing import Dict, List, Optional

from src.auction_engine.auction_state import (
    AuctionState,
    Franchise,
    LeagueRules,
    Player,
    from_cents,
    normalize_name,
    to_cents,
)
from src.auction_engine.config import (
    CATEGORY_RATINGS,
    DEFAULT_FRANCHISES,
    DEFAULT_PLAYER_POOL,
    PLAYER_SKILLS,
)
from src.auction_engine.roster_manager import RosterManager

logger = logging.getLogger(__name__)


def make_player_id(name: str) -> str:
    """Stable id derived from the player's name, e.g. ``p-jigar-shah``."""
    return "p-" + re.sub(r"\s+", "-", name.strip().lower())


class AuctionInitializer:
    """Handles creation of a fresh auction season."""

    def __init__(
        self,
        rules: Optional[LeagueRules] = None,
        rng: Optional[random.Random] = None,
    ):
        self.rules = rules or LeagueRules.default()
        self.rng = rng or random.Random()

    def create_season(
        self,
        franchises: Optional[List[Dict]] = None,
        player_pool: Optional[Dict[str, List]] = None,
    ) -> AuctionState:
        """
        Create a new auction season.

        Args:
            franchises: Franchise specs ``{"franchise_id", "name", "color",
                "icon"}``. Defaults to the configured league.
            player_pool: Mapping of category to player names, or to dicts
                with ``name`` and optional ``skill``/``country``.

        Returns:
            AuctionState with every owner already retained by their franchise.
        """
        franchises = DEFAULT_FRANCHISES if franchises is None else franchises
        player_pool = DEFAULT_PLAYER_POOL if player_pool is None else player_pool
        self._validate_inputs(franchises, player_pool)

        players = self._build_players(player_pool)
        franchise_objs = [
            Franchise(
                franchise_id=spec["franchise_id"],
                name=spec["name"],
                starting_budget=self.rules.starting_budget,
                budget=self.rules.starting_budget,
                color=spec.get("color", ""),
                icon=spec.get("icon", ""),
            )
            for spec in franchises
        ]

        state = AuctionState(rules=self.rules, players=players, franchises=franchise_objs)
        retained = self.retain_owners(state)

        logger.info(
            "Created season: %d franchises, %d players, %d owners retained",
            len(franchise_objs),
            len(players),
            retained,
        )
        return state

    def retain_owners(self, state: AuctionState) -> int:
        """Sell each owner player to their own franchise at the owner multiple.

        One-time initialization step. Returns the number of owners retained.
        """
        roster = RosterManager(state)
        retained = 0
        for franchise in state.franchises:
            owner = next(
                (
                    p for p in state.players
                    if not p.is_sold
                    and normalize_name(p.name) == normalize_name(franchise.name)
                ),
                None,
            )
            if owner is None:
                continue
            price = from_cents(
                to_cents(owner.base_price * self.rules.owner_retention_multiplier)
            )
            roster.sell(owner.player_id, franchise.franchise_id, price)
            retained += 1
        return retained

    def load_player_pool(self, path: Path) -> Dict[str, List]:
        """Load a player pool from a JSON file.

        The file holds ``{"players": [{"name": ..., "category": ...}, ...]}``.
        """
        if not path.exists():
            raise FileNotFoundError(f"No player pool found at {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        pool: Dict[str, List] = {}
        try:
            for entry in data["players"]:
                pool.setdefault(entry["category"], []).append(entry)
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed player pool file {path}: missing key {e}") from e

        logger.info("Loaded %d players from %s", sum(len(v) for v in pool.values()), path)
        return pool

    def _build_players(self, player_pool: Dict[str, List]) -> List[Player]:
        players = []
        for category in self.rules.ordered_categories():
            rule = self.rules.categories[category]
            for entry in player_pool.get(category, []):
                spec = {"name": entry} if isinstance(entry, str) else entry
                players.append(
                    Player(
                        player_id=make_player_id(spec["name"]),
                        name=spec["name"],
                        category=category,
                        skill=spec.get("skill") or self.rng.choice(PLAYER_SKILLS),
                        base_price=rule.base_price,
                        country=spec.get("country", "India"),
                        rating=CATEGORY_RATINGS.get(category, 0),
                    )
                )
        return players

    def _validate_inputs(self, franchises: List[Dict], player_pool: Dict[str, List]):
        """Validate season configuration inputs."""
        if not franchises:
            raise ValueError("At least one franchise is required")

        franchise_ids = [f["franchise_id"] for f in franchises]
        if len(set(franchise_ids)) != len(franchise_ids):
            raise ValueError(f"Duplicate franchise ids: {franchise_ids}")

        unknown = set(player_pool) - set(self.rules.categories)
        if unknown:
            raise ValueError(f"Player pool has unknown categories: {sorted(unknown)}")

        seen = set()
        for entries in player_pool.values():
            for entry in entries:
                name = entry if isinstance(entry, str) else entry["name"]
                player_id = make_player_id(name)
                if player_id in seen:
                    raise ValueError(f"Duplicate player in pool: {name!r}")
                seen.add(player_id)
