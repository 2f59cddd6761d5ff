"""Tests for the fantasy points calculator."""

import pytest

from src.scoring.models import PlayerMatchStats
from src.scoring.points_calculator import PointsCalculator, overs_to_balls


@pytest.fixture
def calc():
    return PointsCalculator()


class TestOversToBalls:
    @pytest.mark.parametrize(
        "overs, balls", [(0, 0), (0.5, 5), (2.0, 12), (3.4, 22), (4, 24)]
    )
    def test_notation(self, overs, balls):
        assert overs_to_balls(overs) == balls

    def test_rejects_six_extra_balls(self):
        with pytest.raises(ValueError, match="at most 5"):
            overs_to_balls(3.6)


class TestBatting:
    def test_half_century_with_boundaries(self, calc):
        stats = PlayerMatchStats("Ace One", runs=52, balls_faced=30, fours=5, sixes=2)
        # 52 runs + 5 + 4 boundary bonus + 8 milestone + 6 for SR 173.3
        assert calc.score(stats).points == 75

    def test_only_highest_milestone_counts(self, calc):
        stats = PlayerMatchStats("Ace One", runs=100, balls_faced=80)
        items = dict(calc.batting_points(stats))
        assert items["milestone"] == 32

    def test_duck(self, calc):
        stats = PlayerMatchStats("Gold One", runs=0, balls_faced=3)
        performance = calc.score(stats)
        assert performance.points == -2
        assert performance.breakdown == "duck -2"

    def test_slow_innings_penalised(self, calc):
        stats = PlayerMatchStats("Gold One", runs=6, balls_faced=10)
        assert calc.score(stats).points == 2

    def test_strike_rate_needs_minimum_balls(self, calc):
        stats = PlayerMatchStats("Gold One", runs=1, balls_faced=9)
        assert calc.score(stats).points == 1


class TestBowling:
    def test_three_wicket_spell(self, calc):
        stats = PlayerMatchStats(
            "Silver One", overs=4, maidens=1, runs_conceded=18, wickets=3
        )
        # 75 wickets + 12 maiden + 8 haul + 6 for economy 4.5
        assert calc.score(stats).points == 101

    def test_expensive_spell(self, calc):
        stats = PlayerMatchStats("Silver One", overs=2, runs_conceded=24)
        assert calc.score(stats).points == -6

    def test_economy_needs_two_overs(self, calc):
        stats = PlayerMatchStats("Silver One", overs=1.5, runs_conceded=30)
        assert calc.score(stats).points == 0


class TestFielding:
    def test_catches_and_stumping(self, calc):
        stats = PlayerMatchStats("Bronze One", catches=3, stumpings=1)
        # 24 catches + 4 bonus + 12 stumping
        assert calc.score(stats).points == 40

    def test_run_outs(self, calc):
        stats = PlayerMatchStats("Bronze One", run_outs_direct=1, run_outs_assisted=2)
        assert calc.score(stats).points == 24


class TestScore:
    def test_potm_bonus_included(self, calc):
        performance = calc.score(PlayerMatchStats("Ace Two", is_potm=True))
        assert performance.points == 100
        assert performance.is_potm is True
        assert performance.breakdown == "POTM +100"

    def test_no_contribution(self, calc):
        performance = calc.score(PlayerMatchStats("Ace Two"))
        assert performance.points == 0
        assert performance.breakdown == "no contribution"
        assert performance.franchise_id_snapshot is None

    def test_breakdown_lists_every_item(self, calc):
        stats = PlayerMatchStats("Ace One", runs=31, balls_faced=8, fours=2, catches=1)
        assert calc.score(stats).breakdown == "31 runs +31, 2x4 +2, milestone +4, 1 ct +8"

    def test_score_all_keeps_order(self, calc):
        lines = [PlayerMatchStats("A", runs=10), PlayerMatchStats("B", wickets=1)]
        assert [(p.player_name, p.points) for p in calc.score_all(lines)] == [
            ("A", 10),
            ("B", 25),
        ]
