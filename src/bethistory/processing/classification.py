"""
Market classification for wagers and bare legs.

This is the only place category/type decisions are made. The extraction
pipeline and any storage-side migration both go through classify_bet, so a
stored record with a missing or unknown category is re-classified here
rather than by a parallel implementation.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple

from ..config.settings import get_settings
from ..processors.leg_normalizer import is_team_name
from ..processors.wager_data import BetType, Leg, MarketCategory, Wager
from . import patterns


@dataclass(frozen=True)
class ClassificationInput:
    """Read-only projection of a wager that classification is allowed to see."""
    bet_type: BetType
    description: str = ""
    name: Optional[str] = None
    name_is_team: bool = False
    type: Optional[str] = None
    legs: Tuple[Leg, ...] = ()
    sport: str = "Unknown"

    @classmethod
    def of(cls, bet: Any) -> "ClassificationInput":
        if isinstance(bet, cls):
            return bet
        if isinstance(bet, Wager):
            return cls(
                bet_type=bet.bet_type,
                description=bet.description,
                name=bet.name,
                name_is_team=bet.name_is_team,
                type=bet.type,
                legs=bet.legs,
                sport=bet.sport,
            )
        if isinstance(bet, Mapping):
            bet_type = BetType.coerce(bet.get("bet_type") or bet.get("betType"), BetType.OTHER)
            legs = bet.get("legs") or ()
            return cls(
                bet_type=bet_type,
                description=bet.get("description") or "",
                name=bet.get("name"),
                name_is_team=bool(bet.get("name_is_team")),
                type=bet.get("type"),
                legs=tuple(leg if isinstance(leg, Leg) else Leg.from_dict(leg) for leg in legs),
                sport=bet.get("sport") or "Unknown",
            )
        raise TypeError(f"cannot classify object of type {type(bet).__name__}")


# ---------------------------------------------------------------------------
# Matching helpers
# ---------------------------------------------------------------------------

def _phrase(text: str) -> str:
    """Lowercase, punctuation and hyphens to single spaces."""
    return re.sub(r"[^a-z0-9]+", " ", (text or "").lower()).strip()


@lru_cache(maxsize=None)
def _word_re(keyword: str) -> "re.Pattern[str]":
    return re.compile(r"\b" + re.escape(_phrase(keyword)) + r"\b")


def _matches_any(text: str, keywords: Iterable[str]) -> bool:
    phrase = _phrase(text)
    return any(_word_re(k).search(phrase) for k in keywords)


def _first_mapping(text: str, table: Sequence[Tuple[str, str]]) -> Optional[str]:
    phrase = _phrase(text)
    for pattern, code in table:
        if _word_re(pattern).search(phrase):
            return code
    return None


def _has_td_token(text: str) -> bool:
    return "td" in _phrase(text).split(" ")


_PROP_TYPE_CODES = frozenset(
    [code for _, code in patterns.STAT_TYPE_PATTERNS if code not in patterns.MAIN_MARKET_STAT_TYPES]
    + list(patterns.PROP_TYPE_ALIASES.values())
    + [code for table in patterns.STAT_TYPE_TABLES.values() for _, code in table]
)

_NAME_STOP_WORDS = patterns.MARKET_LABEL_WORDS


def _leading_name(description: str) -> str:
    """Leading run of capitalized words before the first market word or number.

    "LeBron James Over 25.5 Points" -> "LeBron James"; single words do not count.
    """
    words = []
    for token in (description or "").split():
        if token.lower() in _NAME_STOP_WORDS or not token[0].isalpha() or not token[0].isupper():
            break
        words.append(token)
    return " ".join(words) if len(words) >= 2 else ""


# ---------------------------------------------------------------------------
# Wager-level predicates
# ---------------------------------------------------------------------------

def is_future(description: str) -> bool:
    return _matches_any(description, patterns.FUTURES_KEYWORDS)


def is_main_market(description: str) -> bool:
    if _matches_any(description, patterns.MAIN_MARKET_KEYWORDS):
        return True
    return bool(patterns.TRAILING_SPREAD.search((description or "").strip()))


def has_strong_prop_keyword(description: str, strong_keywords: Optional[Iterable[str]] = None) -> bool:
    if strong_keywords is None:
        strong_keywords = get_settings().classification.strong_prop_keywords
    return _matches_any(description, strong_keywords)


def resolved_entity(bet: ClassificationInput) -> str:
    """Entity the bet is on: the stored name, else a leading name in the description."""
    if bet.name and bet.name.strip():
        return bet.name.strip()
    return _leading_name(bet.description)


def _entity_is_side(bet: ClassificationInput) -> bool:
    """No entity, or the entity is a team (taken from the selection, or a known nickname)."""
    if bet.name and bet.name.strip() and bet.name_is_team:
        return True
    entity = resolved_entity(bet)
    return not entity or is_team_name(entity)


def has_prop_signal(bet: ClassificationInput) -> bool:
    if resolved_entity(bet):
        return True
    if bet.type and bet.type.strip() in _PROP_TYPE_CODES:
        return True
    if any(leaf.entities for leg in bet.legs for leaf in leg.leaves()):
        return True
    return _matches_any(bet.description, patterns.PROP_KEYWORDS)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def classify_bet(bet: Any, strong_keywords: Optional[Iterable[str]] = None) -> MarketCategory:
    """Assign one of the four market categories. First matching rule wins.

    1. parlay-family bet types -> Parlays
    2. futures keywords -> Futures
    3. single/live/other with main-market wording -> Main Markets, unless a
       strong prop keyword is present or the entity is a player
    4. any prop signal -> Props
    5. Main Markets
    """
    bet = ClassificationInput.of(bet)

    if bet.bet_type.is_parlay_family:
        return MarketCategory.PARLAYS

    if is_future(bet.description):
        return MarketCategory.FUTURES

    if bet.bet_type in (BetType.SINGLE, BetType.LIVE, BetType.OTHER):
        if is_main_market(bet.description) and not has_strong_prop_keyword(bet.description, strong_keywords):
            if _entity_is_side(bet):
                return MarketCategory.MAIN_MARKETS

    if has_prop_signal(bet):
        return MarketCategory.PROPS

    return MarketCategory.MAIN_MARKETS


def classify_leg(market: str, sport: str) -> str:
    """Category for a bare leg market string (legacy legs with no wager context)."""
    if not market:
        return MarketCategory.PROPS.value

    lower = market.lower()
    if _matches_any(market, patterns.FUTURES_KEYWORDS):
        return MarketCategory.FUTURES.value

    if _matches_any(market, patterns.MAIN_MARKET_KEYWORDS):
        if "player" not in lower and "prop" not in lower:
            return MarketCategory.MAIN_MARKETS.value

    # "TD" is a triple-double in basketball and a touchdown elsewhere; both are props
    return MarketCategory.PROPS.value


def determine_type(market: str, category: Any, sport: str) -> str:
    """Fine type code within a category.

    Unmatched text comes back unchanged so a manually corrected type
    survives re-classification.
    """
    category_value = category.value if isinstance(category, MarketCategory) else str(category)
    normalized = re.sub(r"\s+", " ", (market or "").lower()).strip()

    if category_value == MarketCategory.PROPS.value:
        alias = patterns.PROP_TYPE_ALIASES.get(normalized)
        if alias:
            return alias
        if sport in patterns.BASKETBALL_SPORTS and _has_td_token(market):
            return "TD"
        table = patterns.STAT_TYPE_TABLES.get(sport) or patterns.STAT_TYPE_TABLES[patterns.DEFAULT_STAT_TABLE_SPORT]
        code = _first_mapping(market, table)
        if code:
            return code
        return market

    if category_value == MarketCategory.MAIN_MARKETS.value:
        return _first_mapping(market, patterns.MAIN_MARKET_TYPES) or market

    if category_value == MarketCategory.FUTURES.value:
        return _first_mapping(market, patterns.FUTURES_TYPES) or market

    return market


def classify_wager(wager: Wager, strong_keywords: Optional[Iterable[str]] = None) -> Wager:
    """Return a copy of wager with market_category and type filled in."""
    category = classify_bet(wager, strong_keywords)
    if category is MarketCategory.PARLAYS:
        return wager.with_classification(category, None)

    market = wager.legs[0].market if len(wager.legs) == 1 else wager.description
    type_code = determine_type(market, category, wager.sport)
    return wager.with_classification(category, type_code)


def ensure_market_category(bet: Any, stored: Any = None) -> MarketCategory:
    """Trust a stored category only if it is one of the four; otherwise re-classify."""
    if stored is None and isinstance(bet, Wager):
        stored = bet.market_category
    category = MarketCategory.coerce(stored)
    if category is not None:
        return category
    return classify_bet(bet)
