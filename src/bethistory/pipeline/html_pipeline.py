"""Bet history processing pipeline

Turns one bet history document into an ordered list of classified Wagers:

    containers -> header/footer -> leg tree -> assembly -> classification

Each wager container is processed in isolation. A failure inside one card
is logged with its best-effort reference id and the card is skipped; the
rest of the document still parses.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Type, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from ..config.settings import get_settings
from ..parsers.adapter import SportsbookAdapter
from ..parsers.dom import Node
from ..parsers.draftkings_html import DraftKingsAdapter
from ..parsers.fanduel_html import FanDuelAdapter
from ..parsers.leg_tree import LegTreeBuilder, legs_from_summary
from ..parsers.metadata import extract_footer_meta, extract_header_info, parse_odds
from ..processing.classification import classify_wager
from ..processors.wager_assembler import CardFields, assemble_wager
from ..processors.wager_data import Wager
from ..utils.logger import null_logger

ADAPTERS: Dict[str, Type[SportsbookAdapter]] = {
    DraftKingsAdapter.BOOK: DraftKingsAdapter,
    FanDuelAdapter.BOOK: FanDuelAdapter,
}


class BetHistoryError(Exception):
    """Base error for bet history ingestion."""


class DocumentParseError(BetHistoryError):
    """The input is not a markup document."""


class UnsupportedBookError(BetHistoryError):
    """No adapter is registered for the requested book."""


def registered_books() -> List[str]:
    return sorted(ADAPTERS)


def get_adapter(book: str) -> SportsbookAdapter:
    for name, adapter_cls in ADAPTERS.items():
        if name.lower() == (book or "").strip().lower():
            return adapter_cls()
    raise UnsupportedBookError(f"no parser registered for book {book!r}; known: {', '.join(registered_books())}")


def _as_root(document: Union[str, bytes, Tag]) -> Node:
    if isinstance(document, Tag):
        return Node(document)
    if isinstance(document, (str, bytes)):
        # lxml builds the tree only; scripts are not run and nothing is fetched
        return Node(BeautifulSoup(document, "lxml"))
    raise DocumentParseError(f"expected markup text or a parsed tree, got {type(document).__name__}")


class BetHistoryPipeline:
    """Extracts wagers from one book family's bet history markup."""

    def __init__(self, book: Optional[str] = None, logger: Any = None):
        settings = get_settings()
        self.adapter = get_adapter(book or settings.ingest.default_book)
        self.log = logger or null_logger()
        self.tz_name = settings.ingest.book_timezone
        self.excerpt_chars = settings.ingest.raw_excerpt_chars
        self.legs = LegTreeBuilder(self.adapter, logger=self.log)

    def extract_wager(self, card: Node) -> Wager:
        adapter = self.adapter
        header = extract_header_info(card, adapter, self.tz_name)
        footer = extract_footer_meta(card, adapter)
        bet_type = adapter.detect_bet_type(card)

        odds_el = adapter.wager_odds_node(card)
        title = adapter.wager_title_node(card)
        subtitle = adapter.wager_subtitle_node(card)

        legs = ()
        if bet_type is not None and bet_type.is_parlay_family:
            legs = tuple(self.legs.build(node, footer.result) for node in adapter.top_level_legs(card))
            if not legs:
                self.log.info("Collapsed parlay card; rebuilding legs from summary", bet_id=header.bet_id)
                legs = legs_from_summary(adapter.summary_text(card), footer.result)

        fields = CardFields(
            book=adapter.BOOK,
            header=header,
            footer=footer,
            bet_type=bet_type,
            market=subtitle.text() if subtitle else "",
            target=title.text() if title else "",
            odds=parse_odds(odds_el.text()) if odds_el else None,
            leagues=adapter.detect_leagues(card),
            legs=legs,
            raw_excerpt=card.text()[: self.excerpt_chars],
        )
        return classify_wager(assemble_wager(fields))

    def parse(self, document: Union[str, bytes, Tag]) -> List[Wager]:
        root = _as_root(document)
        cards = self.adapter.wager_containers(root)
        self.log.info("Found wager containers", book=self.adapter.BOOK, count=len(cards))

        wagers: List[Wager] = []
        for index, card in enumerate(cards):
            try:
                wagers.append(self.extract_wager(card))
            except Exception as e:
                self.log.error(
                    "Wager extraction failed",
                    bet_id=_best_effort_id(card, self.adapter),
                    card_test_id=card.attr(self.adapter.TEST_ID),
                    index=index,
                    error=str(e),
                    exc_info=True,
                )

        self.log.info("Parsed wagers", book=self.adapter.BOOK, parsed=len(wagers), skipped=len(cards) - len(wagers))
        return wagers


def _best_effort_id(card: Node, adapter: SportsbookAdapter) -> str:
    bet_id = adapter.reference_id_text(card)
    if bet_id:
        return bet_id
    test_id = card.attr(adapter.TEST_ID) or ""
    return test_id[len(adapter.CARD_PREFIX):] if test_id.startswith(adapter.CARD_PREFIX) else test_id


def parse_document(document: Union[str, bytes, Tag], book: Optional[str] = None, logger: Any = None) -> List[Wager]:
    """Parse a bet history document into Wagers in document order.

    Args:
        document: markup text or an already parsed BeautifulSoup tree
        book: sportsbook name (defaults to DEFAULT_BOOK)
        logger: structlog-style logger; events are dropped when omitted

    Raises:
        DocumentParseError: document is not markup
        UnsupportedBookError: no adapter for book
    """
    return BetHistoryPipeline(book=book, logger=logger).parse(document)
