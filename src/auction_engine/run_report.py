"""Export squads and standings from the saved auction.

Usage:
    python -m src.auction_engine.run_report [storage_dir] [output_dir]

Examples:
    python -m src.auction_engine.run_report
    python -m src.auction_engine.run_report data/auction data/exports
"""

import logging
import sys
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from src.auction_engine.auction_service import AuctionService
from src.auction_engine.config import AUCTION_DATA_DIR, EXPORTS_DIR
from src.auction_engine.state_persistence import StatePersistence
from src.logging_config import setup_logging
from src.scoring.config import FREE_AGENT

logger = logging.getLogger(__name__)


def run_report(
    storage_dir: Optional[Path] = None,
    output_dir: Optional[Path] = None,
) -> Dict[str, Path]:
    """Write the portfolio and standings CSVs.

    Args:
        storage_dir: Directory holding the auction documents.
            Defaults to ``data/auction``.
        output_dir: Directory for CSV output. Defaults to ``data/exports``.

    Returns:
        Mapping of report name to the written file.
    """
    storage_dir = storage_dir or AUCTION_DATA_DIR
    output_dir = output_dir or EXPORTS_DIR
    output_dir.mkdir(parents=True, exist_ok=True)

    service = AuctionService(StatePersistence(storage_dir))

    portfolios = service.export_csv(output_dir / "portfolios.csv")

    standings = pd.DataFrame(
        [
            {
                "Rank": row.rank,
                "Franchise": row.franchise_name,
                "Points": row.total_points,
                "Behind Previous": row.behind_previous,
                "Behind Leader": row.behind_leader,
            }
            for row in service.leaderboard()
        ]
    )
    standings_file = output_dir / "standings.csv"
    standings.to_csv(standings_file, index=False)

    free_agent_points = service.franchise_totals().get(FREE_AGENT, 0)
    if free_agent_points:
        logger.info("  Unattributed (Free Agent) points: %d", free_agent_points)

    logger.info("Reports complete! Output: %s", output_dir)
    return {"portfolios": portfolios, "standings": standings_file}


if __name__ == "__main__":
    setup_logging()

    storage_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    output_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    try:
        outputs = run_report(storage_dir, output_dir)
        for name, path in outputs.items():
            print(f"{name}: {path}")
    except Exception:
        logger.exception("Report failed")
        sys.exit(1)
