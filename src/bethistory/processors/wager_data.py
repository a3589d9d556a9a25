"""
Normalized data structures for wagers extracted from bet history pages.

Provides a book-independent schema for wagers and their leg trees so that
downstream statistics and export code never see book-specific markup.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple

from ..utils.logger import get_module_logger

logger = get_module_logger(__name__)


class BetType(str, Enum):
    SINGLE = "single"
    PARLAY = "parlay"
    SGP = "sgp"
    SGP_PLUS = "sgp_plus"
    LIVE = "live"
    OTHER = "other"

    @property
    def is_parlay_family(self) -> bool:
        return self in (BetType.PARLAY, BetType.SGP, BetType.SGP_PLUS)

    @classmethod
    def coerce(cls, value: Any, default: "BetType") -> "BetType":
        """Member for value; empty values give default, unknown wording ("teaser") gives OTHER."""
        if isinstance(value, cls):
            return value
        if not value:
            return default
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class BetResult(str, Enum):
    WIN = "win"
    LOSS = "loss"
    PUSH = "push"
    PENDING = "pending"


class MarketCategory(str, Enum):
    PROPS = "Props"
    MAIN_MARKETS = "Main Markets"
    FUTURES = "Futures"
    PARLAYS = "Parlays"

    @classmethod
    def coerce(cls, value: Any) -> Optional["MarketCategory"]:
        """Return the member matching value, or None if it is outside the enumeration."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class OverUnder(str, Enum):
    OVER = "Over"
    UNDER = "Under"


DEPTH_EXCEEDED_MARKET = "Nested legs beyond depth limit"


@dataclass(frozen=True)
class Leg:
    """One selection within a wager. Either a leaf or a group of child legs."""
    market: str
    result: BetResult = BetResult.PENDING
    target: Optional[str] = None
    over_under: Optional[OverUnder] = None
    odds: Optional[int] = None  # None inside a group that carries combined odds
    entities: Tuple[str, ...] = ()
    stat_type: Optional[str] = None
    is_group_leg: bool = False
    children: Tuple["Leg", ...] = ()
    depth_exceeded: bool = False

    @classmethod
    def depth_sentinel(cls, result: BetResult) -> "Leg":
        return cls(market=DEPTH_EXCEEDED_MARKET, result=result, depth_exceeded=True)

    def leaves(self) -> Iterator["Leg"]:
        """Yield leaf legs in document order."""
        if self.is_group_leg:
            for child in self.children:
                yield from child.leaves()
        else:
            yield self

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "market": self.market,
            "target": self.target,
            "over_under": self.over_under.value if self.over_under else None,
            "odds": self.odds,
            "result": self.result.value,
            "entities": list(self.entities),
            "stat_type": self.stat_type,
            "is_group_leg": self.is_group_leg,
        }
        if self.is_group_leg:
            data["children"] = [c.to_dict() for c in self.children]
        if self.depth_exceeded:
            data["depth_exceeded"] = True
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Leg":
        ou = data.get("over_under")
        return cls(
            market=data.get("market") or "",
            target=data.get("target"),
            over_under=OverUnder(ou) if ou else None,
            odds=data.get("odds"),
            result=BetResult(data.get("result") or BetResult.PENDING.value),
            entities=tuple(data.get("entities") or ()),
            stat_type=data.get("stat_type"),
            is_group_leg=bool(data.get("is_group_leg")),
            children=tuple(cls.from_dict(c) for c in data.get("children") or ()),
            depth_exceeded=bool(data.get("depth_exceeded")),
        )


@dataclass(frozen=True)
class Wager:
    """One bet slip. Built once per extraction pass and never mutated."""

    # Core identification
    bet_id: str
    placed_at: str  # ISO instant, or the raw displayed text when unparsable
    book: str = "DraftKings"
    settled_at: Optional[str] = None

    # Shape
    bet_type: BetType = BetType.SINGLE
    sport: str = "Unknown"
    description: str = ""
    is_live: bool = False
    legs: Tuple[Leg, ...] = ()

    # Money
    odds: Optional[int] = None
    stake: Optional[float] = None
    payout: Optional[float] = None
    result: BetResult = BetResult.PENDING

    # Classification
    market_category: Optional[MarketCategory] = None
    type: Optional[str] = None
    name: Optional[str] = None
    name_is_team: bool = False  # name is the side taken, not a player
    line: Optional[str] = None
    over_under: Optional[OverUnder] = None

    # Diagnostics only
    raw_excerpt: str = field(default="", compare=False)

    @property
    def leaf_legs(self) -> Tuple[Leg, ...]:
        return tuple(leaf for leg in self.legs for leaf in leg.leaves())

    @property
    def has_group_legs(self) -> bool:
        return any(leg.is_group_leg for leg in self.legs)

    def with_classification(self, category: MarketCategory, type_code: Optional[str]) -> "Wager":
        return replace(self, market_category=category, type=type_code or None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dict, handling enums and nested legs."""
        data = asdict(self)
        data["bet_type"] = self.bet_type.value
        data["result"] = self.result.value
        data["market_category"] = self.market_category.value if self.market_category else None
        data["over_under"] = self.over_under.value if self.over_under else None
        data["legs"] = [leg.to_dict() for leg in self.legs]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Wager":
        """Create a Wager from a stored dict.

        A record whose market_category is missing or not one of the four
        categories is re-classified before being trusted.
        """
        from ..processing.classification import ensure_market_category

        ou = data.get("over_under")
        wager = cls(
            bet_id=str(data.get("bet_id") or ""),
            placed_at=str(data.get("placed_at") or ""),
            book=data.get("book") or "DraftKings",
            settled_at=data.get("settled_at"),
            bet_type=BetType.coerce(data.get("bet_type"), BetType.SINGLE),
            sport=data.get("sport") or "Unknown",
            description=data.get("description") or "",
            is_live=bool(data.get("is_live")),
            legs=tuple(Leg.from_dict(leg) for leg in data.get("legs") or ()),
            odds=data.get("odds"),
            stake=data.get("stake"),
            payout=data.get("payout"),
            result=BetResult(data.get("result") or BetResult.PENDING.value),
            market_category=None,
            type=data.get("type"),
            name=data.get("name"),
            name_is_team=bool(data.get("name_is_team")),
            line=data.get("line"),
            over_under=OverUnder(ou) if ou else None,
            raw_excerpt=data.get("raw_excerpt") or "",
        )
        stored = data.get("market_category")
        category = ensure_market_category(wager, stored)
        if MarketCategory.coerce(stored) is None:
            logger.info("Re-classified stored wager", bet_id=wager.bet_id, stored=stored, category=category.value)
        return replace(wager, market_category=category)
