"""Tests for the report runner."""

import random

import pandas as pd

from src.auction_engine.auction_service import AuctionService
from src.auction_engine.run_report import run_report
from src.auction_engine.state_persistence import StatePersistence
from src.scoring.models import MatchRecord, PlayerPerformance


class TestRunReport:
    def test_writes_portfolios_and_standings(self, tmp_path):
        storage = tmp_path / "auction"
        service = AuctionService(StatePersistence(storage), rng=random.Random(3))
        service.record_match_performance(
            MatchRecord(1, "2026-04-12", [PlayerPerformance("Kartik", 44)])
        )

        outputs = run_report(storage, tmp_path / "exports")

        assert set(outputs) == {"portfolios", "standings"}
        portfolios = pd.read_csv(outputs["portfolios"])
        # Six owners plus six remaining-budget rows
        assert len(portfolios) == 12

        standings = pd.read_csv(outputs["standings"])
        assert list(standings.columns) == [
            "Rank", "Franchise", "Points", "Behind Previous", "Behind Leader",
        ]
        assert standings.iloc[0]["Franchise"] == "Kartik"
        assert standings.iloc[0]["Points"] == 44
        assert len(standings) == 6

    def test_fresh_storage_creates_season(self, tmp_path):
        outputs = run_report(tmp_path / "auction", tmp_path / "exports")
        assert outputs["standings"].exists()
        assert (tmp_path / "auction" / "players.json").exists()
