"""Leg tree construction for one wager container.

Walks leg-candidate nodes recursively. A candidate that holds a further
list of candidates becomes a group leg (same-game-parlay inside an SGPx);
everything else is a leaf. Recursion stops at MAX_LEG_DEPTH with a
sentinel leg so that adversarially deep markup always terminates.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Callable, FrozenSet, Iterable, List, Optional, Tuple

from ..processing import patterns
from ..processors.leg_normalizer import normalize_leg, normalize_spaces
from ..processors.wager_data import BetResult, Leg, OverUnder
from ..utils.logger import null_logger
from .dom import Node
from .metadata import parse_odds

if TYPE_CHECKING:
    from .adapter import SportsbookAdapter

MAX_LEG_DEPTH = 10
UNKNOWN_MARKET = "Unknown Market"


@dataclass(frozen=True)
class IconState:
    """What a status icon says about a leg: semantic text and paint colors."""
    semantic: str = ""
    colors: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class ResultRule:
    name: str
    predicate: Callable[[IconState], bool]
    result: BetResult


def _semantic(pattern: str) -> Callable[[IconState], bool]:
    rx = re.compile(pattern, re.I)
    return lambda state: bool(rx.search(state.semantic))


def _color(color: str) -> Callable[[IconState], bool]:
    wanted = color.upper()
    return lambda state: wanted in state.colors


# Class/label tokens first; they are the most explicit encoding
SEMANTIC_RULES: Tuple[ResultRule, ...] = (
    ResultRule("semantic-loss", _semantic(r"\bloss\b|\blost\b|\bx sign\b|\bcross circle\b"), BetResult.LOSS),
    ResultRule("semantic-win", _semantic(r"\bwin\b|\bwon\b|\btick circle\b"), BetResult.WIN),
    ResultRule("semantic-push", _semantic(r"\bpush\b|\bvoid\b|\bwarning\b"), BetResult.PUSH),
    ResultRule("semantic-pending", _semantic(r"\bpending\b"), BetResult.PENDING),
)


def build_result_rules(win_color: str, loss_color: str) -> Tuple[ResultRule, ...]:
    """Semantic rules followed by the book's two-color icon convention."""
    return SEMANTIC_RULES + (
        ResultRule("color-loss", _color(loss_color), BetResult.LOSS),
        ResultRule("color-win", _color(win_color), BetResult.WIN),
    )


def infer_result(state: Optional[IconState], rules: Iterable[ResultRule], default: BetResult) -> BetResult:
    if state is not None:
        for rule in rules:
            if rule.predicate(state):
                return rule.result
    return default


def aggregate_group_result(results: Iterable[BetResult]) -> BetResult:
    """loss > pending > win (all win/push, one or more win) > push."""
    results = list(results)
    if not results:
        return BetResult.PENDING
    if BetResult.LOSS in results:
        return BetResult.LOSS
    if BetResult.PENDING in results:
        return BetResult.PENDING
    if BetResult.WIN in results:
        return BetResult.WIN
    return BetResult.PUSH


def legs_from_summary(summary: str, default_result: BetResult) -> Tuple[Leg, ...]:
    """Rebuild minimal legs from a collapsed card's one-line summary.

    "Jordan Hawkins Points 18+, PHO Suns -3.5, Total Over 225.5" -> three legs.
    Fragments without a trailing number are kept as market-only legs.
    """
    legs: List[Leg] = []
    for fragment in (summary or "").split(","):
        fragment = normalize_spaces(fragment)
        if not fragment:
            continue
        m = patterns.SUMMARY_FRAGMENT.match(fragment)
        if not m:
            legs.append(Leg(market=fragment, result=default_result))
            continue
        prefix = m.group("prefix").strip()
        target = m.group("number") + (m.group("plus") or "")
        if m.group("ou"):
            target = f"{m.group('ou').title()} {target}"
        norm = normalize_leg(prefix, target)
        legs.append(
            Leg(
                market=prefix or fragment,
                target=target,
                over_under=norm.over_under,
                result=default_result,
                entities=(norm.entity_name,) if norm.entity_name else (),
                stat_type=norm.stat_type or None,
            )
        )
    return tuple(legs)


class LegTreeBuilder:
    """Builds Leg trees from leg-candidate nodes of one book family."""

    def __init__(self, adapter: "SportsbookAdapter", logger: Any = None):
        self.adapter = adapter
        self.log = logger or null_logger()
        self.rules = build_result_rules(adapter.WIN_COLOR, adapter.LOSS_COLOR)

    def nested_candidates(self, node: Node) -> List[Node]:
        """Sibling list of leg candidates nested under node, or [] for a leaf."""
        is_leg = self.adapter.is_leg_candidate
        for descendant in node.descendants():
            if is_leg(descendant):
                container = descendant.parent
                if container is None:
                    return []
                return container.children_matching(is_leg)
        return []

    def icon_state(self, node: Node) -> Optional[IconState]:
        icon = self.adapter.status_icon(node)
        if icon is None:
            return None
        semantic_parts = [icon.attr(name) or "" for name in ("class", "aria-label", "data-test-id", "id")]
        title = icon.select_one("title")
        if title is not None:
            semantic_parts.append(title.text())
        colors = set()
        for shape in [icon] + icon.select("circle, path"):
            for paint in ("stroke", "fill"):
                value = shape.attr(paint)
                if value:
                    colors.add(value.strip().upper())
        return IconState(semantic=" ".join(semantic_parts).replace("-", " ").replace("_", " "), colors=frozenset(colors))

    def build(self, node: Node, default_result: BetResult, depth: int = 0) -> Leg:
        if depth >= MAX_LEG_DEPTH:
            self.log.warning("Leg nesting exceeds depth limit", depth=depth, limit=MAX_LEG_DEPTH)
            return Leg.depth_sentinel(default_result)

        nested = self.nested_candidates(node)
        if nested:
            return self._build_group(node, nested, default_result, depth)
        return self._build_leaf(node, default_result)

    def _build_group(self, node: Node, nested: List[Node], default_result: BetResult, depth: int) -> Leg:
        children = tuple(self.build(child, default_result, depth + 1) for child in nested)

        # Groups keep their summary label ("2 Pick SGP") in market, never in target
        title = self.adapter.leg_title_node(node)
        subtitle = self.adapter.leg_subtitle_node(node)
        market = (title.text() if title else "") or (subtitle.text() if subtitle else "")

        odds_el = self.adapter.leg_odds_node(node)
        odds = parse_odds(odds_el.text()) if odds_el else None
        if odds is not None:
            children = tuple(c if c.is_group_leg else replace(c, odds=None) for c in children)

        return Leg(
            market=market or UNKNOWN_MARKET,
            odds=odds,
            result=aggregate_group_result(c.result for c in children),
            is_group_leg=True,
            children=children,
        )

    def _build_leaf(self, node: Node, default_result: BetResult) -> Leg:
        subtitle = self.adapter.leg_subtitle_node(node)
        title = self.adapter.leg_title_node(node)
        market = subtitle.text() if subtitle else ""
        target = title.text() if title else ""

        odds_el = self.adapter.leg_odds_node(node)
        odds = parse_odds(odds_el.text()) if odds_el else None

        result = infer_result(self.icon_state(node), self.rules, default_result)
        norm = normalize_leg(market, target)

        return Leg(
            market=market or UNKNOWN_MARKET,
            target=target or None,
            over_under=norm.over_under,
            odds=odds,
            result=result,
            entities=(norm.entity_name,) if norm.entity_name else (),
            stat_type=norm.stat_type or None,
        )
