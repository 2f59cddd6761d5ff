"""Tests for the budget reservation calculator."""

from src.auction_engine.auction_state import (
    AuctionState,
    CategoryRule,
    Franchise,
    LeagueRules,
    Player,
)
from src.auction_engine.budget_calculator import BudgetCalculator
from src.auction_engine.roster_manager import RosterManager
from tests.conftest import make_state


# ── Helpers ──────────────────────────────────────────────────────────


def _populate_all_categories(state):
    """F1 owns one A+, one A, one B and two C players: 31.00L left."""
    roster = RosterManager(state)
    roster.sell("p-ace-one", "F1", 10.0)
    roster.sell("p-gold-one", "F1", 5.0)
    roster.sell("p-silver-one", "F1", 2.0)
    roster.sell("p-bronze-one", "F1", 1.0)
    roster.sell("p-bronze-two", "F1", 1.0)
    return roster


def _make_two_category_state():
    """C: quota 2 at 2.00; B: quota 1 at 1.50. Two franchises, 12.00 each."""
    rules = LeagueRules(
        starting_budget=12.0,
        categories={
            "B": CategoryRule("B", quota=1, base_price=1.5, retention_price=4.0, rank=1),
            "C": CategoryRule("C", quota=2, base_price=2.0, retention_price=5.0, rank=2),
        },
    )
    players = [
        Player(f"p-c{i}", f"C{i}", "C", "Batter", 2.0) for i in range(1, 4)
    ] + [Player("p-b1", "B1", "B", "Bowler", 1.5)]
    franchises = [
        Franchise("A", "Alpha", 12.0, 12.0),
        Franchise("Z", "Zulu", 12.0, 12.0),
    ]
    return AuctionState(rules=rules, players=players, franchises=franchises)


# ── Reservation ──────────────────────────────────────────────────────


class TestReserve:
    def test_empty_roster_reserves_every_slot(self, state):
        calc = BudgetCalculator(state)
        # 2*5 + 3*3 + 2*2 + 4*1
        assert calc.reserve("F1") == 27.0

    def test_filling_category_excludes_own_slot(self, state):
        calc = BudgetCalculator(state)
        assert calc.reserve("F1", "A+") == 22.0
        assert calc.reserve("F1", "C") == 26.0

    def test_full_category_reserves_nothing(self, state):
        roster = RosterManager(state)
        roster.sell("p-ace-one", "F1", 5.0)
        roster.sell("p-ace-two", "F1", 5.0)
        calc = BudgetCalculator(state)
        # A+ full: no reserve and no negative slot for the category being filled
        assert calc.reserve("F1", "A+") == 17.0


class TestMaxSpendable:
    def test_empty_franchise_ceiling(self, state):
        calc = BudgetCalculator(state)
        assert calc.max_spendable("F1", "A+") == 28.0

    def test_worked_example_all_categories_populated(self, state):
        _populate_all_categories(state)
        calc = BudgetCalculator(state)
        assert state.get_franchise("F1").budget == 31.0
        # A+ 1*5 + A 2*3 + B (1-1)*2 + C 2*1 = 13
        assert calc.max_spendable("F1", "B") == 18.0
        # A+ (1-1)*5 + A 2*3 + B 1*2 + C 2*1 = 10
        assert calc.max_spendable("F1", "A+") == 21.0
        # A+ 1*5 + A 2*3 + B 1*2 + C (2-1)*1 = 14
        assert calc.max_spendable("F1", "C") == 17.0

    def test_two_franchises_sharing_a_category(self):
        state = _make_two_category_state()
        roster = RosterManager(state)
        roster.sell("p-c1", "A", 2.0)
        roster.sell("p-c2", "Z", 4.0)
        calc = BudgetCalculator(state)

        assert state.get_franchise("A").budget == 10.0
        assert state.get_franchise("Z").budget == 8.0
        # C: (2-1-1)*2.00 = 0; B still open: 1.50
        assert calc.max_spendable("A", "C") == 8.5
        assert calc.max_spendable("Z", "C") == 6.5

    def test_never_cached(self, state):
        calc = BudgetCalculator(state)
        before = calc.max_spendable("F1", "A+")
        RosterManager(state).sell("p-gold-one", "F1", 10.0)
        after = calc.max_spendable("F1", "A+")
        assert before == 28.0
        # Budget down 10, one A slot (3.00) no longer reserved
        assert after == 21.0

    def test_can_afford_at_exact_ceiling(self, state):
        calc = BudgetCalculator(state)
        assert calc.can_afford("F1", "A+", 28.0) is True
        assert calc.can_afford("F1", "A+", 28.01) is False


class TestCeilingMonotonicity:
    def test_purchases_in_other_categories_never_raise_ceiling(self):
        state = make_state()
        roster = RosterManager(state)
        calc = BudgetCalculator(state)
        ceilings = [calc.max_spendable("F1", "A+")]
        for player_id, price in [
            ("p-gold-one", 3.0),
            ("p-gold-two", 4.5),
            ("p-silver-one", 2.0),
            ("p-bronze-one", 1.0),
            ("p-bronze-two", 1.3),
        ]:
            roster.sell(player_id, "F1", price)
            ceilings.append(calc.max_spendable("F1", "A+"))
        assert ceilings == sorted(ceilings, reverse=True)

    def test_fixed_budget_ceiling_rises_by_freed_base_price(self):
        state = make_state()
        calc = BudgetCalculator(state)
        before = calc.max_spendable("F1", "A+")
        RosterManager(state).sell("p-silver-one", "F1", 2.0)
        state.get_franchise("F1").credit(2.0)  # hold budget fixed
        assert calc.max_spendable("F1", "A+") == before + 2.0


# ── Roster summary ──────────────────────────────────────────────────


class TestRosterSummary:
    def test_summary_ordered_by_scarcity(self, state):
        summary = BudgetCalculator(state).get_roster_summary("F1")
        assert list(summary) == ["A+", "A", "B", "C"]
        assert summary["A"] == {"owned": 0, "quota": 3, "remaining": 3}

    def test_summary_counts_owned(self, state):
        _populate_all_categories(state)
        summary = BudgetCalculator(state).get_roster_summary("F1")
        assert summary["C"] == {"owned": 2, "quota": 4, "remaining": 2}

    def test_not_qualified_until_every_quota_filled(self, state):
        calc = BudgetCalculator(state)
        assert calc.is_qualified("F1") is False

    def test_qualified_with_full_roster(self):
        state = make_state(starting_budget=100.0)
        roster = RosterManager(state)
        for player_id in [
            "p-ace-one", "p-ace-two",
            "p-gold-one", "p-gold-two", "p-gold-three",
            "p-silver-one", "p-silver-two",
            "p-bronze-one", "p-bronze-two", "p-bronze-three", "p-bronze-four",
        ]:
            player = state.get_player(player_id)
            roster.sell(player_id, "F1", player.base_price)
        assert BudgetCalculator(state).is_qualified("F1") is True
