"""Read-only views over the auction: player registry, squads, export table."""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from src.auction_engine.auction_state import AuctionState, Player
from src.auction_engine.budget_calculator import BudgetCalculator
from src.auction_engine.config import CATEGORY_LABELS

logger = logging.getLogger(__name__)

REMAINING_BUDGET_LABEL = "[REMAINING BUDGET]"
EXPORT_COLUMNS = ["Franchise", "Player", "Category", "Valuation (L)"]
VALID_SORT_KEYS = {"name", "category", "skill", "valuation"}


class AuctionReports:
    """Queries the UI renders: never mutates state."""

    def __init__(self, state: AuctionState):
        self.state = state
        self.budget = BudgetCalculator(state)

    def list_unsold_players(
        self,
        sort_by: str = "name",
        descending: bool = False,
        category: Optional[str] = None,
        skill: Optional[str] = None,
        name_contains: Optional[str] = None,
    ) -> List[Player]:
        """Unsold players, filtered and sorted. Ties fall back to name."""
        return self.list_players(
            sort_by, descending, category, skill, name_contains, unsold_only=True
        )

    def list_players(
        self,
        sort_by: str = "name",
        descending: bool = False,
        category: Optional[str] = None,
        skill: Optional[str] = None,
        name_contains: Optional[str] = None,
        unsold_only: bool = False,
    ) -> List[Player]:
        if sort_by not in VALID_SORT_KEYS:
            raise ValueError(
                f"Invalid sort_by {sort_by!r}. Must be one of: {sorted(VALID_SORT_KEYS)}"
            )

        players = [
            p for p in self.state.players
            if (not unsold_only or not p.is_sold)
            and (category is None or p.category == category)
            and (skill is None or p.skill == skill)
            and (name_contains is None or name_contains.lower() in p.name.lower())
        ]

        # Two passes: the name tiebreak always ascends
        players.sort(key=lambda p: p.name.lower())
        players.sort(key=self._sort_key(sort_by), reverse=descending)
        return players

    def _sort_key(self, sort_by: str):
        ranks = {c: r.rank for c, r in self.state.rules.categories.items()}
        if sort_by == "category":
            return lambda p: ranks.get(p.category, 99)
        if sort_by == "valuation":
            return lambda p: p.valuation
        if sort_by == "skill":
            return lambda p: p.skill.lower()
        return lambda p: p.name.lower()

    def list_franchises(self) -> List[Dict]:
        """Each franchise with roster, occupancy, qualification and purse."""
        total_required = self.state.rules.total_roster_size()
        summaries = []
        for franchise in self.state.franchises:
            roster = self.state.roster(franchise.franchise_id)
            occupancy = self.budget.get_roster_summary(franchise.franchise_id)
            summaries.append(
                {
                    "franchise_id": franchise.franchise_id,
                    "name": franchise.name,
                    "budget": franchise.budget,
                    "spent": round(franchise.starting_budget - franchise.budget, 2),
                    "roster": roster,
                    "occupancy": occupancy,
                    "status": " | ".join(
                        f"{cat}: {o['owned']}/{o['quota']}" for cat, o in occupancy.items()
                    ),
                    "is_qualified": self.budget.is_qualified(franchise.franchise_id),
                    "needs_count": total_required - len(roster),
                    "captain_id": franchise.captain_id,
                    "vice_captain_id": franchise.vice_captain_id,
                }
            )
        return summaries

    def category_stats(self) -> pd.DataFrame:
        """Unsold count, sold count and average hammer price per category."""
        rows = []
        for category in self.state.rules.ordered_categories():
            in_category = [p for p in self.state.players if p.category == category]
            sold = [p.sold_price for p in in_category if p.is_sold]
            rows.append(
                {
                    "category": category,
                    "label": CATEGORY_LABELS.get(category, "STANDARD"),
                    "unsold": len(in_category) - len(sold),
                    "sold": len(sold),
                    "total_sold_price": round(sum(sold), 2),
                    "average_sold_price": round(sum(sold) / len(sold), 2) if sold else 0.0,
                }
            )
        return pd.DataFrame(rows)

    def export_table(self) -> pd.DataFrame:
        """One row per owned player, then a remaining-budget row per franchise."""
        rows = []
        for franchise in self.state.franchises:
            for player in self.state.roster(franchise.franchise_id):
                rows.append(
                    {
                        "Franchise": franchise.name,
                        "Player": player.name,
                        "Category": player.category,
                        "Valuation (L)": f"{player.sold_price:.2f}",
                    }
                )
            rows.append(
                {
                    "Franchise": franchise.name,
                    "Player": REMAINING_BUDGET_LABEL,
                    "Category": "-",
                    "Valuation (L)": f"{franchise.budget:.2f}",
                }
            )
        return pd.DataFrame(rows, columns=EXPORT_COLUMNS)

    def export_csv(self, path: Path) -> Path:
        """Write the export table to CSV."""
        path.parent.mkdir(parents=True, exist_ok=True)
        table = self.export_table()
        table.to_csv(path, index=False)
        logger.info("Exported %d rows to %s", len(table), path)
        return path
