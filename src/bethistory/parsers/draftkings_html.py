"""DraftKings bet history markup adapter.

DraftKings marks bet cards with data-test-id="bet-card-{id}" and legs with
data-test-id="selection-list-item". An SGPx card nests "N Pick SGP" groups,
each a selection-list-item holding its own selection-list-items.
"""
from __future__ import annotations

from typing import Optional

from .adapter import SportsbookAdapter
from .dom import Node, attr_prefix


class DraftKingsAdapter(SportsbookAdapter):
    BOOK = "DraftKings"
    CARD_PREFIX = "bet-card-"
    LEG_ITEM = "selection-list-item"
    WIN_COLOR = "#53D337"
    LOSS_COLOR = "#E9344A"

    def is_leg_candidate(self, node: Node) -> bool:
        return node.attr(self.TEST_ID) == self.LEG_ITEM

    def leg_body(self, card: Node) -> Node:
        body = card.select_one('div[id$="-body"]')
        return body if body is not None else card

    def placed_at_node(self, card: Node) -> Optional[Node]:
        return card.select_one('span[data-test-id^="bet-reference-"][data-test-id$="-0"]')

    def reference_id_node(self, card: Node) -> Optional[Node]:
        return card.select_one('span[data-test-id^="bet-reference-"][data-test-id$="-1"]')

    def stake_node(self, card: Node) -> Optional[Node]:
        return card.select_one('span[data-test-id^="bet-stake-"]')

    def payout_node(self, card: Node) -> Optional[Node]:
        return card.select_one('span[data-test-id^="bet-returns-"]')

    def status_node(self, card: Node) -> Optional[Node]:
        return card.select_one('div[data-test-id^="bet-details-status-"]')

    def wager_title_node(self, card: Node) -> Optional[Node]:
        return card.select_one('span[data-test-id^="bet-details-title-"]')

    def wager_subtitle_node(self, card: Node) -> Optional[Node]:
        return card.select_one('span[data-test-id^="bet-details-subtitle-"]')

    def wager_odds_node(self, card: Node) -> Optional[Node]:
        return card.select_one('span[data-test-id^="bet-details-displayOdds-"]')

    def has_sgp_marker(self, card: Node) -> bool:
        return bool(card.descendants_matching(attr_prefix(self.TEST_ID, "sgp-")))

    def leg_subtitle_node(self, leg: Node) -> Optional[Node]:
        return self.own_select_one(leg, 'div[data-test-id^="bet-selection-subtitle-"]')

    def leg_title_node(self, leg: Node) -> Optional[Node]:
        return self.own_select_one(leg, 'div[data-test-id^="bet-selection-title-"]')

    def leg_odds_node(self, leg: Node) -> Optional[Node]:
        return self.own_select_one(leg, 'div[data-test-id^="bet-selection-displayOdds-"]')
