"""Tests for auction state data models."""

import pytest

from src.auction_engine.auction_state import (
    Franchise,
    LeagueRules,
    Player,
    from_cents,
    normalize_name,
    to_cents,
)
from src.auction_engine.roster_manager import RosterManager


class TestMoney:
    def test_to_cents_absorbs_float_drift(self):
        assert to_cents(0.1 + 0.2) == 30
        assert to_cents(1.1 * 3) == 330

    def test_from_cents(self):
        assert from_cents(2250) == 22.5
        assert from_cents(-5) == -0.05

    def test_franchise_debit_credit(self):
        franchise = Franchise("F1", "Falcons", 50.0, 50.0)
        franchise.debit(0.1)
        franchise.debit(0.2)
        assert franchise.budget == 49.7
        franchise.credit(0.3)
        assert franchise.budget == 50.0


class TestLeagueRules:
    def test_default_categories(self):
        rules = LeagueRules.default()
        assert rules.starting_budget == 50.0
        assert rules.ordered_categories() == ["A+", "A", "B", "C"]
        assert rules.total_roster_size() == 11

    def test_default_prices(self):
        rules = LeagueRules.default()
        assert rules.get_rule("A+").base_price == 5.0
        assert rules.get_rule("A").retention_price == 13.0
        assert rules.get_rule("C").quota == 4

    def test_increment_is_ten_percent_of_base(self):
        rules = LeagueRules.default()
        assert [rules.get_rule(c).increment for c in rules.ordered_categories()] == [
            0.5,
            0.3,
            0.2,
            0.1,
        ]

    def test_unknown_category(self):
        with pytest.raises(ValueError, match="Unknown category"):
            LeagueRules.default().get_rule("Z")


class TestPlayer:
    def test_valuation_is_base_until_sold(self):
        player = Player("p-x", "X", "A", "Batter", 3.0)
        assert player.valuation == 3.0
        player.is_sold, player.team_id, player.sold_price = True, "F1", 4.2
        assert player.valuation == 4.2

    def test_normalize_name(self):
        assert normalize_name("  Raju Bhai ") == "raju bhai"


class TestAuctionState:
    def test_lookup(self, state):
        assert state.get_player("p-ace-one").name == "Ace One"
        assert state.get_franchise("F2").name == "Hawks"
        assert state.find_player("p-missing") is None
        assert state.find_franchise("F9") is None

    def test_unknown_lookup_raises(self, state):
        with pytest.raises(KeyError):
            state.get_player("p-missing")
        with pytest.raises(KeyError):
            state.get_franchise("F9")

    def test_roster_derived_from_team_id(self, state):
        roster = RosterManager(state)
        roster.sell("p-gold-one", "F1", 3.0)
        roster.sell("p-bronze-one", "F1", 1.0)
        roster.sell("p-ace-one", "F2", 5.0)
        assert [p.player_id for p in state.roster("F1")] == [
            "p-gold-one",
            "p-bronze-one",
        ]
        assert state.category_count("F1", "A") == 1
        assert state.category_count("F1", "A+") == 0
        assert len(state.unsold_players()) == 13

    def test_owner_fixture_matches_case_insensitively(self, state):
        franchise = state.get_franchise("F1")
        assert state.is_owner_fixture(Player("p-f", "falcons ", "C", "Batter", 1.0), franchise)
        assert not state.is_owner_fixture(state.get_player("p-ace-one"), franchise)


class TestInvariants:
    def test_fresh_state_is_consistent(self, state):
        state.check_invariants()

    def test_after_sales_is_consistent(self, state):
        roster = RosterManager(state)
        roster.sell("p-ace-one", "F1", 12.5)
        roster.sell("p-gold-one", "F2", 3.3)
        state.check_invariants()

    def test_detects_ledger_mismatch(self, state):
        state.get_franchise("F1").budget = 49.0
        with pytest.raises(AssertionError, match="ledger"):
            state.check_invariants()

    def test_detects_inconsistent_sold_flag(self, state):
        state.get_player("p-ace-one").is_sold = True
        with pytest.raises(AssertionError, match="sold flag"):
            state.check_invariants()

    def test_detects_quota_overflow(self, state):
        roster = RosterManager(state)
        for player_id in ["p-ace-one", "p-ace-two", "p-ace-three"]:
            roster.sell(player_id, "F1", 5.0)
        with pytest.raises(AssertionError, match="exceeds quota"):
            state.check_invariants()
