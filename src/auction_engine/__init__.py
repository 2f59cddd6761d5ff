from src.auction_engine.auction_controller import AuctionController
from src.auction_engine.auction_initializer import AuctionInitializer
from src.auction_engine.auction_rules import (
    AuctionError,
    AuctionRules,
    BelowBasePriceError,
    DrawIneligibleError,
    ImmovableOwnerError,
    InsufficientBudgetError,
    InvalidIncrementError,
    InvalidTransitionError,
    NotOwnedError,
    QuotaExceededError,
)
from src.auction_engine.auction_state import (
    AuctionState,
    Bid,
    CategoryRule,
    Franchise,
    LeagueRules,
    LotResult,
    Player,
)
from src.auction_engine.budget_calculator import BudgetCalculator
from src.auction_engine.reports import AuctionReports
from src.auction_engine.retention_draw import DrawResult, RetentionDraw
from src.auction_engine.roster_manager import RosterManager
from src.auction_engine.state_persistence import StatePersistence

__all__ = [
    "AuctionController",
    "AuctionError",
    "AuctionInitializer",
    "AuctionReports",
    "AuctionRules",
    "AuctionState",
    "BelowBasePriceError",
    "Bid",
    "BudgetCalculator",
    "CategoryRule",
    "DrawIneligibleError",
    "DrawResult",
    "Franchise",
    "ImmovableOwnerError",
    "InsufficientBudgetError",
    "InvalidIncrementError",
    "InvalidTransitionError",
    "LeagueRules",
    "LotResult",
    "NotOwnedError",
    "Player",
    "QuotaExceededError",
    "RetentionDraw",
    "RosterManager",
    "StatePersistence",
]
