"""Sportsbook adapter base.

Everything that depends on how a book renders its "My Bets" page lives in
an adapter: how wager containers are found, which nodes are leg
candidates, where the text regions, odds and status icons sit, and which
colors mean win/loss. Extraction logic elsewhere only talks to adapters.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from ..processing import patterns
from ..processors.leg_normalizer import normalize_bet_type
from ..processors.wager_data import BetType
from .dom import Node, attr_prefix


class SportsbookAdapter:
    """Book-specific predicates and selectors. Subclasses fill in the details."""

    BOOK = ""
    TEST_ID = "data-test-id"
    CARD_PREFIX = ""
    WIN_COLOR = ""
    LOSS_COLOR = ""

    # -- containers -----------------------------------------------------

    def wager_containers(self, root: Node) -> List[Node]:
        """Outermost nodes whose test id starts with the card prefix, in document order."""
        is_card = attr_prefix(self.TEST_ID, self.CARD_PREFIX)
        candidates = [root] if is_card(root) else []
        candidates.extend(root.descendants_matching(is_card))
        return [node for node in candidates if node.closest(is_card) is None]

    def is_leg_candidate(self, node: Node) -> bool:
        raise NotImplementedError

    def own_select(self, scope: Node, selector: str) -> List[Node]:
        """Matches under scope that are not inside a nested leg candidate."""
        owned = []
        for found in scope.select(selector):
            owner = found.closest(self.is_leg_candidate, stop=scope)
            if owner is None or owner == scope:
                owned.append(found)
        return owned

    def own_select_one(self, scope: Node, selector: str) -> Optional[Node]:
        owned = self.own_select(scope, selector)
        return owned[0] if owned else None

    def leg_body(self, card: Node) -> Node:
        return card

    def top_level_legs(self, card: Node) -> List[Node]:
        body = self.leg_body(card)
        return [
            node for node in body.descendants_matching(self.is_leg_candidate)
            if node.closest(self.is_leg_candidate, stop=body) is None
        ]

    def has_nested_groups(self, card: Node) -> bool:
        return any(
            any(self.is_leg_candidate(d) for d in leg.descendants())
            for leg in self.top_level_legs(card)
        )

    # -- header / footer --------------------------------------------------

    def placed_at_node(self, card: Node) -> Optional[Node]:
        return None

    def reference_id_node(self, card: Node) -> Optional[Node]:
        return None

    def stake_node(self, card: Node) -> Optional[Node]:
        return None

    def payout_node(self, card: Node) -> Optional[Node]:
        return None

    def status_node(self, card: Node) -> Optional[Node]:
        return None

    # Text hooks read by the metadata extractors. None means "not displayed".

    def placed_at_text(self, card: Node) -> Optional[str]:
        node = self.placed_at_node(card)
        return node.text() if node is not None else None

    def reference_id_text(self, card: Node) -> Optional[str]:
        node = self.reference_id_node(card)
        return node.text() if node is not None else None

    def stake_text(self, card: Node) -> Optional[str]:
        node = self.stake_node(card)
        return node.text() if node is not None else None

    def payout_text(self, card: Node) -> Optional[str]:
        node = self.payout_node(card)
        return node.text() if node is not None else None

    def status_text(self, card: Node) -> Optional[str]:
        node = self.status_node(card)
        return node.text() if node is not None else None

    # -- wager-level regions ----------------------------------------------

    def wager_title_node(self, card: Node) -> Optional[Node]:
        raise NotImplementedError

    def wager_subtitle_node(self, card: Node) -> Optional[Node]:
        raise NotImplementedError

    def wager_odds_node(self, card: Node) -> Optional[Node]:
        raise NotImplementedError

    def has_sgp_marker(self, card: Node) -> bool:
        return False

    def league_logo_urls(self, card: Node) -> List[str]:
        return [n.attr("src") or "" for n in card.select('img[src*="/teams/"]')]

    # -- leg-level regions --------------------------------------------------

    def leg_subtitle_node(self, leg: Node) -> Optional[Node]:
        raise NotImplementedError

    def leg_title_node(self, leg: Node) -> Optional[Node]:
        raise NotImplementedError

    def leg_odds_node(self, leg: Node) -> Optional[Node]:
        raise NotImplementedError

    def status_icon(self, leg: Node) -> Optional[Node]:
        return self.own_select_one(leg, "svg")

    # -- derived signals ------------------------------------------------------

    def summary_text(self, card: Node) -> str:
        subtitle = self.wager_subtitle_node(card)
        if subtitle is not None and subtitle.text():
            return subtitle.text()
        title = self.wager_title_node(card)
        return title.text() if title is not None else ""

    def bet_type_text(self, card: Node) -> str:
        """Card text scanned for bet-type wording."""
        return card.text()

    def detect_bet_type(self, card: Node) -> Optional[BetType]:
        """Parlay-family type of a card, or None for a single.

        Priority: "SGPx" text, nested leg groups, SGP marker element,
        subtitle wording, card wording, more than one top-level leg.
        """
        card_text = self.bet_type_text(card)
        if "sgpx" in card_text.lower():
            return BetType.SGP_PLUS
        if self.has_nested_groups(card):
            return BetType.SGP_PLUS
        if self.has_sgp_marker(card):
            return BetType.SGP
        subtitle = self.wager_subtitle_node(card)
        hinted = normalize_bet_type(subtitle.text() if subtitle is not None else "")
        if hinted is not None:
            return hinted
        hinted = normalize_bet_type(card_text)
        if hinted is not None:
            return hinted
        if len(self.top_level_legs(card)) > 1:
            return BetType.PARLAY
        return None

    def detect_leagues(self, card: Node) -> Tuple[str, ...]:
        leagues: List[str] = []
        for url in self.league_logo_urls(card):
            m = patterns.LOGO_LEAGUE.search(url)
            if m:
                league = m.group(1).upper()
                if league not in leagues:
                    leagues.append(league)
        return tuple(leagues)
