"""Sportsbook bet history ingestion: markup -> classified Wagers."""
from .pipeline.html_pipeline import (
    BetHistoryError,
    DocumentParseError,
    UnsupportedBookError,
    get_adapter,
    parse_document,
    registered_books,
)
from .processing.classification import classify_bet, classify_leg, determine_type
from .processors.wager_data import BetResult, BetType, Leg, MarketCategory, OverUnder, Wager

__version__ = "0.1.0"

__all__ = [
    "BetHistoryError",
    "BetResult",
    "BetType",
    "DocumentParseError",
    "Leg",
    "MarketCategory",
    "OverUnder",
    "UnsupportedBookError",
    "Wager",
    "classify_bet",
    "classify_leg",
    "determine_type",
    "get_adapter",
    "parse_document",
    "registered_books",
]
