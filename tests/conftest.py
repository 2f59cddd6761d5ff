"""Shared fixtures for the auction engine test suite."""

import random

import pytest

from src.auction_engine.auction_initializer import AuctionInitializer
from src.auction_engine.auction_state import LeagueRules

# Three franchises whose names match no player, so nobody is auto-retained.
TEST_FRANCHISES = [
    {"franchise_id": "F1", "name": "Falcons", "color": "#111111", "icon": "eagle"},
    {"franchise_id": "F2", "name": "Hawks", "color": "#222222", "icon": "lion"},
    {"franchise_id": "F3", "name": "Owls", "color": "#333333", "icon": "shield"},
]

TEST_POOL = {
    "A+": [
        {"name": "Ace One", "skill": "Batter"},
        {"name": "Ace Two", "skill": "Bowler"},
        {"name": "Ace Three", "skill": "All-Rounder"},
        {"name": "Ace Four", "skill": "WK-Batter"},
    ],
    "A": [
        {"name": "Gold One", "skill": "Batter"},
        {"name": "Gold Two", "skill": "Bowler"},
        {"name": "Gold Three", "skill": "Batter"},
        {"name": "Gold Four", "skill": "All-Rounder"},
    ],
    "B": [
        {"name": "Silver One", "skill": "Bowler"},
        {"name": "Silver Two", "skill": "Batter"},
        {"name": "Silver Three", "skill": "WK-Batter"},
    ],
    "C": [
        {"name": "Bronze One", "skill": "Batter"},
        {"name": "Bronze Two", "skill": "Bowler"},
        {"name": "Bronze Three", "skill": "Batter"},
        {"name": "Bronze Four", "skill": "All-Rounder"},
        {"name": "Bronze Five", "skill": "Bowler"},
    ],
}


def make_state(starting_budget=None, franchises=None, pool=None):
    """Fresh auction state for the small test league."""
    rules = LeagueRules.default()
    if starting_budget is not None:
        rules.starting_budget = starting_budget
    initializer = AuctionInitializer(rules=rules, rng=random.Random(7))
    return initializer.create_season(
        franchises=TEST_FRANCHISES if franchises is None else franchises,
        player_pool=TEST_POOL if pool is None else pool,
    )


@pytest.fixture
def state():
    return make_state()


@pytest.fixture
def rng():
    return random.Random(1234)
