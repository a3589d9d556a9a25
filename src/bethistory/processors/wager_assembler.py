"""Wager assembly from extracted card fields.

Works on plain values only (no markup), so single and parlay assembly can
be tested without building documents.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..parsers.metadata import FooterMeta, HeaderInfo
from .leg_normalizer import normalize_leg, strip_live_marker
from .wager_data import BetResult, BetType, Leg, Wager

MULTI_SPORT = "Multi"
UNKNOWN_SPORT = "Unknown"


@dataclass(frozen=True)
class CardFields:
    """Raw values pulled from one wager container by a book adapter."""
    book: str
    header: HeaderInfo
    footer: FooterMeta
    bet_type: Optional[BetType] = None  # None means single
    market: str = ""
    target: str = ""
    odds: Optional[int] = None
    leagues: Tuple[str, ...] = ()
    legs: Tuple[Leg, ...] = ()
    raw_excerpt: str = ""


def resolve_sport(leagues: Tuple[str, ...]) -> str:
    if not leagues:
        return UNKNOWN_SPORT
    if len(leagues) == 1:
        return leagues[0]
    return MULTI_SPORT


def resolve_payout(footer: FooterMeta) -> Optional[float]:
    """A card with no payout line has paid nothing yet; unparsable text stays None."""
    if not footer.payout_displayed and footer.result in (BetResult.LOSS, BetResult.PENDING):
        return 0.0
    return footer.payout


def leg_description(leg: Leg) -> str:
    return f"{leg.market} {leg.target}" if leg.target else leg.market


def assemble_single(fields: CardFields) -> Wager:
    market, is_live = strip_live_marker(fields.market)
    target = fields.target
    if not market and target:
        # Title-only card: the title is the selection itself
        market, target = target, ""
    norm = normalize_leg(market, target)

    leg = Leg(
        market=market,
        target=target or None,
        over_under=norm.over_under,
        odds=fields.odds,
        result=fields.footer.result,
        entities=(norm.entity_name,) if norm.entity_name else (),
        stat_type=norm.stat_type or None,
    )

    return Wager(
        bet_id=fields.header.bet_id,
        placed_at=fields.header.placed_at,
        book=fields.book,
        bet_type=BetType.LIVE if is_live else BetType.SINGLE,
        sport=fields.leagues[0] if fields.leagues else UNKNOWN_SPORT,
        description=leg_description(leg),
        is_live=is_live,
        legs=(leg,),
        odds=fields.odds,
        stake=fields.footer.stake,
        payout=resolve_payout(fields.footer),
        result=fields.footer.result,
        type=norm.stat_type or None,
        name=norm.entity_name or None,
        name_is_team=norm.entity_is_team,
        line=norm.line or None,
        over_under=norm.over_under,
        raw_excerpt=fields.raw_excerpt,
    )


def assemble_parlay(fields: CardFields) -> Wager:
    leaves = [leaf for leg in fields.legs for leaf in leg.leaves() if not leaf.depth_exceeded]
    description = ", ".join(leg_description(leaf) for leaf in leaves)

    return Wager(
        bet_id=fields.header.bet_id,
        placed_at=fields.header.placed_at,
        book=fields.book,
        bet_type=fields.bet_type or BetType.PARLAY,
        sport=resolve_sport(fields.leagues),
        description=description,
        legs=fields.legs,
        odds=fields.odds,
        stake=fields.footer.stake,
        payout=resolve_payout(fields.footer),
        result=fields.footer.result,
        raw_excerpt=fields.raw_excerpt,
    )


def assemble_wager(fields: CardFields) -> Wager:
    if fields.bet_type is not None and fields.bet_type.is_parlay_family:
        return assemble_parlay(fields)
    return assemble_single(fields)
