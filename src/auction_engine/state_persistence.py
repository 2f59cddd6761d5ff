"""State persistence - save and load the auction documents to/from JSON files.

Three flat documents live side by side in the storage directory:
``players.json``, ``franchises.json`` and ``match_records.json``. They are
rewritten after every mutation; there is no schema versioning.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from src.auction_engine.auction_state import AuctionState, Franchise, LeagueRules, Player
from src.auction_engine.config import AUCTION_DATA_DIR
from src.scoring.models import MatchRecord, PlayerPerformance

logger = logging.getLogger(__name__)

PLAYERS_FILE = "players.json"
FRANCHISES_FILE = "franchises.json"
MATCH_RECORDS_FILE = "match_records.json"


class StatePersistence:
    """Handles saving and loading auction state to/from JSON files."""

    def __init__(self, storage_dir: Optional[Path] = None):
        self.storage_dir = storage_dir or AUCTION_DATA_DIR
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def save_state(
        self, state: AuctionState, match_records: Optional[List[MatchRecord]] = None
    ) -> Path:
        """Write the player, franchise and match documents.

        Returns:
            The storage directory.
        """
        self._write(PLAYERS_FILE, [self._player_to_dict(p) for p in state.players])
        self._write(
            FRANCHISES_FILE, [self._franchise_to_dict(f) for f in state.franchises]
        )
        if match_records is not None:
            self._write(
                MATCH_RECORDS_FILE, [self._match_to_dict(m) for m in match_records]
            )

        logger.debug(
            "Saved %d players, %d franchises to %s",
            len(state.players),
            len(state.franchises),
            self.storage_dir,
        )
        return self.storage_dir

    def load_state(self, rules: Optional[LeagueRules] = None) -> Optional[AuctionState]:
        """Load the auction state.

        Returns:
            AuctionState if both documents exist and parse, None otherwise.
        """
        players_data = self._read(PLAYERS_FILE)
        franchises_data = self._read(FRANCHISES_FILE)
        if players_data is None or franchises_data is None:
            return None

        try:
            players = [self._dict_to_player(d) for d in players_data]
            franchises = [self._dict_to_franchise(d) for d in franchises_data]
        except (KeyError, TypeError) as e:
            raise ValueError(
                f"Malformed auction document in {self.storage_dir}: missing key {e}"
            ) from e

        logger.info(
            "Loaded auction from %s (%d players, %d franchises)",
            self.storage_dir,
            len(players),
            len(franchises),
        )
        return AuctionState(
            rules=rules or LeagueRules.default(),
            players=players,
            franchises=franchises,
        )

    def load_match_records(self) -> List[MatchRecord]:
        """Load the match log; missing or corrupt files yield an empty list."""
        data = self._read(MATCH_RECORDS_FILE)
        if data is None:
            return []

        records = []
        for entry in data:
            try:
                records.append(self._dict_to_match(entry))
            except (KeyError, TypeError) as e:
                logger.warning("Skipping malformed match record %r: %s", entry, e)
        return records

    def clear(self) -> bool:
        """Delete the player and franchise documents.

        The match log is left alone. Returns True if anything was deleted.
        """
        deleted = False
        for name in (PLAYERS_FILE, FRANCHISES_FILE):
            path = self.storage_dir / name
            if path.exists():
                path.unlink()
                deleted = True
        if deleted:
            logger.info("Cleared saved auction in %s", self.storage_dir)
        return deleted

    def _write(self, name: str, payload: List[Dict]):
        filepath = self.storage_dir / name
        tmp_path = filepath.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        tmp_path.replace(filepath)

    def _read(self, name: str) -> Optional[List[Dict]]:
        filepath = self.storage_dir / name
        if not filepath.exists():
            return None
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt auction file %s: %s", filepath, e)
            return None

    @staticmethod
    def _player_to_dict(player: Player) -> Dict:
        return {
            "player_id": player.player_id,
            "name": player.name,
            "category": player.category,
            "skill": player.skill,
            "base_price": player.base_price,
            "country": player.country,
            "rating": player.rating,
            "is_sold": player.is_sold,
            "team_id": player.team_id,
            "sold_price": player.sold_price,
        }

    @staticmethod
    def _dict_to_player(data: Dict) -> Player:
        return Player(
            player_id=data["player_id"],
            name=data["name"],
            category=data["category"],
            skill=data["skill"],
            base_price=data["base_price"],
            country=data.get("country", "India"),
            rating=data.get("rating", 0),
            is_sold=data.get("is_sold", False),
            team_id=data.get("team_id"),
            sold_price=data.get("sold_price"),
        )

    @staticmethod
    def _franchise_to_dict(franchise: Franchise) -> Dict:
        return {
            "franchise_id": franchise.franchise_id,
            "name": franchise.name,
            "starting_budget": franchise.starting_budget,
            "budget": franchise.budget,
            "color": franchise.color,
            "icon": franchise.icon,
            "captain_id": franchise.captain_id,
            "vice_captain_id": franchise.vice_captain_id,
        }

    @staticmethod
    def _dict_to_franchise(data: Dict) -> Franchise:
        return Franchise(
            franchise_id=data["franchise_id"],
            name=data["name"],
            starting_budget=data["starting_budget"],
            budget=data["budget"],
            color=data.get("color", ""),
            icon=data.get("icon", ""),
            captain_id=data.get("captain_id"),
            vice_captain_id=data.get("vice_captain_id"),
        )

    @staticmethod
    def _match_to_dict(record: MatchRecord) -> Dict:
        return {
            "match_number": record.match_number,
            "date": record.date,
            "url": record.url,
            "is_phase_fixed": record.is_phase_fixed,
            "performances": [
                {
                    "player_name": p.player_name,
                    "points": p.points,
                    "is_potm": p.is_potm,
                    "breakdown": p.breakdown,
                    "franchise_id_snapshot": p.franchise_id_snapshot,
                    "multiplier_applied": p.multiplier_applied,
                }
                for p in record.performances
            ],
        }

    @staticmethod
    def _dict_to_match(data: Dict) -> MatchRecord:
        return MatchRecord(
            match_number=data["match_number"],
            date=data["date"],
            url=data.get("url", ""),
            is_phase_fixed=data.get("is_phase_fixed", False),
            performances=[
                PlayerPerformance(
                    player_name=p["player_name"],
                    points=p["points"],
                    is_potm=p.get("is_potm", False),
                    breakdown=p.get("breakdown", ""),
                    franchise_id_snapshot=p.get("franchise_id_snapshot"),
                    multiplier_applied=p.get("multiplier_applied"),
                )
                for p in data["performances"]
            ],
        )
