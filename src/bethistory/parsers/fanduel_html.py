"""FanDuel bet history markup adapter.

FanDuel's "My Bets" list is a <ul> of <li> rows with no test ids:

    <li>  selection row: leg rows, odds                     </li>
    <li>  $10.00 TOTAL WAGER  $19.09 WON ON FANDUEL
          BET ID: O/0242888/0027982  PLACED: 11/18/2025 11:09PM ET </li>

A single is split over a selection row and the footer row that follows
it. A parlay ("3 leg parlay") keeps header, legs and footer in one row.
Leg rows are divs carrying an aria-label; odds are span[aria-label^="Odds"];
leg results are tick/cross icons.
"""
from __future__ import annotations

import re
from typing import List, Optional, Tuple

from ..processors.leg_normalizer import normalize_bet_type
from ..processors.wager_data import BetType
from .adapter import SportsbookAdapter
from .dom import Node, merge_nodes
from .metadata import parse_money

BET_ID_RE = re.compile(r"BET\s*ID:?\s*([A-Z0-9/\-]+)", re.I)
PLACED_RE = re.compile(
    r"PLACED:?\s*(\d{1,2}/\d{1,2}/\d{4},?\s+\d{1,2}:\d{2}(?::\d{2})?\s*[AP]M(?:\s+[A-Z]{2,4}\b)?)", re.I
)
PLACED_RAW_RE = re.compile(r"PLACED:?\s*(.+?)(?=\s+BET\s*ID|$)", re.I)
LEG_PARLAY_RE = re.compile(r"\b\d+\s+leg\s+parlay\b", re.I)
SGP_INCLUDES_RE = re.compile(r"includes:?\s*\d+\s+same\s+game\s+parlays?", re.I)
PROMO_RE = re.compile(r"(same\s+game\s+)?parlay\s+available", re.I)
AMOUNT_RE = re.compile(r"\$\s*[\d,]+(?:\.\d+)?")

STAKE_LABELS: Tuple[str, ...] = ("TOTAL WAGER", "WAGER", "STAKE")
WON_LABELS: Tuple[str, ...] = ("WON ON FANDUEL", "WON", "PAID")
RETURNED_LABELS: Tuple[str, ...] = ("RETURNED", "REFUNDED")
FOOTER_LABELS = frozenset(STAKE_LABELS + WON_LABELS + RETURNED_LABELS)

ODDS_SPAN = 'span[aria-label^="Odds"]'
TEXT_SPAN = "span:not([aria-label])"


class FanDuelAdapter(SportsbookAdapter):
    BOOK = "FanDuel"
    WIN_COLOR = "#128000"
    LOSS_COLOR = "#D22839"

    # -- containers -----------------------------------------------------

    @staticmethod
    def _is_footer_row(row: Node) -> bool:
        return BET_ID_RE.search(row.text()) is not None

    def _carries_selection(self, row: Node) -> bool:
        if LEG_PARLAY_RE.search(row.text()):
            return True
        return row.select_one(ODDS_SPAN) is not None or bool(row.descendants_matching(self.is_leg_candidate))

    def _header_row(self, rows: List[Node], index: int) -> Optional[Node]:
        """Nearest earlier sibling row, unless another wager's footer comes first."""
        footer = rows[index]
        for row in reversed(rows[:index]):
            if row.parent != footer.parent:
                continue
            if self._is_footer_row(row):
                return None
            return row
        return None

    def wager_containers(self, root: Node) -> List[Node]:
        """One node per BET ID footer row; a single's selection row is merged in front of it."""
        rows = ([root] if root.name == "li" else []) + root.select("li")
        cards: List[Node] = []
        seen = set()
        for index, row in enumerate(rows):
            if not self._is_footer_row(row):
                continue
            if any(self._is_footer_row(inner) for inner in row.select("li")):
                continue
            bet_id = self.reference_id_text(row)
            if bet_id in seen:
                continue
            if bet_id:
                seen.add(bet_id)
            header = None if self._carries_selection(row) else self._header_row(rows, index)
            cards.append(merge_nodes(header, row) if header is not None else row)
        return cards

    def is_leg_candidate(self, node: Node) -> bool:
        if node.name != "div":
            return False
        label = node.attr("aria-label") or ""
        return bool(label) and not label.lower().startswith("odds") and not PROMO_RE.search(label)

    # -- header / footer ----------------------------------------------------

    def reference_id_text(self, card: Node) -> Optional[str]:
        m = BET_ID_RE.search(card.text())
        return m.group(1) if m else None

    def placed_at_text(self, card: Node) -> Optional[str]:
        text = card.text()
        m = PLACED_RE.search(text) or PLACED_RAW_RE.search(text)
        return m.group(1).strip() if m else None

    def _labeled_amount(self, card: Node, labels: Tuple[str, ...]) -> Optional[str]:
        """Dollar amount shown next to the first label present ("$10.00" above "TOTAL WAGER")."""
        labeled = [n for n in card.select("span, div") if n.text().upper() in labels]
        for label in labels:
            for node in labeled:
                if node.text().upper() != label or node.parent is None:
                    continue
                m = AMOUNT_RE.search(node.parent.text())
                if m:
                    return m.group(0)
        text = card.text()
        for label in labels:
            m = re.search(r"(\$\s*[\d,]+(?:\.\d+)?)\s*" + re.escape(label) + r"\b", text, re.I)
            if m:
                return m.group(1)
        return None

    def stake_text(self, card: Node) -> Optional[str]:
        return self._labeled_amount(card, STAKE_LABELS)

    def payout_text(self, card: Node) -> Optional[str]:
        return self._labeled_amount(card, WON_LABELS) or self._labeled_amount(card, RETURNED_LABELS)

    def status_text(self, card: Node) -> Optional[str]:
        """FanDuel shows no status word; derive one from which amount label is present."""
        won = parse_money(self._labeled_amount(card, WON_LABELS))
        if won is not None:
            return "Won" if won > 0 else "Lost"
        stake = parse_money(self.stake_text(card))
        returned = parse_money(self._labeled_amount(card, RETURNED_LABELS))
        if returned is not None:
            if returned == 0:
                return "Lost"
            if stake is not None and abs(returned - stake) < 0.005:
                return "Void"
            if stake is not None and returned > stake:
                return "Won"
            return ""
        lower = card.text().lower()
        if "finished" in lower or "settled" in lower:
            return "Lost"
        return ""

    # -- wager-level regions ----------------------------------------------

    def bet_type_text(self, card: Node) -> str:
        return PROMO_RE.sub(" ", card.text())

    def detect_bet_type(self, card: Node) -> Optional[BetType]:
        if SGP_INCLUDES_RE.search(self.bet_type_text(card)):
            return BetType.SGP_PLUS
        return super().detect_bet_type(card)

    def _loose_spans(self, card: Node) -> List[Node]:
        """Text spans outside leg rows that are not footer labels, amounts or identifiers."""
        spans = []
        for span in self.own_select(card, TEXT_SPAN):
            text = span.text()
            if not text or "$" in text or text.upper() in FOOTER_LABELS:
                continue
            if BET_ID_RE.search(text) or text.upper().startswith("PLACED"):
                continue
            spans.append(span)
        return spans

    def _single_leg(self, card: Node) -> Optional[Node]:
        legs = self.top_level_legs(card)
        if len(legs) != 1 or LEG_PARLAY_RE.search(card.text()):
            return None
        return legs[0]

    def wager_title_node(self, card: Node) -> Optional[Node]:
        leg = self._single_leg(card)
        if leg is not None:
            return self.leg_title_node(leg)
        loose = self._loose_spans(card)
        for span in loose:
            if LEG_PARLAY_RE.search(span.text()) or normalize_bet_type(span.text()) is not None:
                return span
        return loose[0] if loose else None

    def wager_subtitle_node(self, card: Node) -> Optional[Node]:
        leg = self._single_leg(card)
        if leg is not None:
            return self.leg_subtitle_node(leg)
        title = self.wager_title_node(card)
        rest = [span for span in self._loose_spans(card) if span != title]
        for span in rest:
            if "," in span.text():
                return span
        return rest[0] if rest else None

    def wager_odds_node(self, card: Node) -> Optional[Node]:
        odds = self.own_select_one(card, ODDS_SPAN)
        if odds is not None:
            return odds
        leg = self._single_leg(card)
        return self.leg_odds_node(leg) if leg is not None else None

    # -- leg-level regions --------------------------------------------------

    def leg_title_node(self, leg: Node) -> Optional[Node]:
        spans = self.own_select(leg, TEXT_SPAN)
        return spans[0] if spans else None

    def leg_subtitle_node(self, leg: Node) -> Optional[Node]:
        spans = self.own_select(leg, TEXT_SPAN)
        return spans[1] if len(spans) > 1 else None

    def leg_odds_node(self, leg: Node) -> Optional[Node]:
        return self.own_select_one(leg, ODDS_SPAN)
