"""Wager identity and settlement footer extraction.

Field-level failures never abort a wager: unparsable dates keep their raw
text, unparsable money is None (not 0), unknown status text is pending.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..utils.logger import get_module_logger

from ..processors.wager_data import BetResult
from .dom import Node

if TYPE_CHECKING:
    from .adapter import SportsbookAdapter

logger = get_module_logger(__name__)

PLACED_AT_RE = re.compile(
    r"^([A-Za-z]+)\.?\s+(\d{1,2}),\s*(\d{4}),?\s+(\d{1,2}):(\d{2})(?::(\d{2}))?\s*(AM|PM)$",
    re.I,
)
# FanDuel: "11/18/2025 11:09PM ET"
NUMERIC_PLACED_AT_RE = re.compile(
    r"^(\d{1,2})\/(\d{1,2})\/(\d{4}),?\s+(\d{1,2}):(\d{2})(?::(\d{2}))?\s*(AM|PM)(?:\s+([A-Z]{2,4}))?$",
    re.I,
)
MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

# US zone abbreviations shown next to placed-at times
ZONE_ABBREVIATIONS = {
    "ET": "America/New_York", "EST": "America/New_York", "EDT": "America/New_York",
    "CT": "America/Chicago", "CST": "America/Chicago", "CDT": "America/Chicago",
    "MT": "America/Denver", "MST": "America/Denver", "MDT": "America/Denver",
    "PT": "America/Los_Angeles", "PST": "America/Los_Angeles", "PDT": "America/Los_Angeles",
}

STATUS_RESULTS = {
    "won": BetResult.WIN,
    "lost": BetResult.LOSS,
    "void": BetResult.PUSH,
}


@dataclass(frozen=True)
class HeaderInfo:
    bet_id: str
    placed_at: str


@dataclass(frozen=True)
class FooterMeta:
    stake: Optional[float]
    payout: Optional[float]
    result: BetResult
    payout_displayed: bool = True


def parse_money(raw: Optional[str]) -> Optional[float]:
    cleaned = re.sub(r"[^0-9.\-]", "", raw or "")
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_odds(raw: Optional[str]) -> Optional[int]:
    """American odds text ("−112", "+150") -> int, None when unparsable."""
    text = re.sub(r"\s+", "", raw or "").replace("−", "-").replace("+", "")
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def _zone(tz_name: str):
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown book timezone; using UTC", tz=tz_name)
        return timezone.utc


def _split_placed_at(text: str):
    """(year, month, day, hour, minute, second, meridiem, zone) or None."""
    m = PLACED_AT_RE.match(text)
    if m:
        month_str, day, year, hour, minute, second, meridiem = m.groups()
        month = MONTHS.get(month_str.lower()[:3])
        if month is None:
            return None
        return int(year), month, int(day), hour, minute, second, meridiem, None
    m = NUMERIC_PLACED_AT_RE.match(text)
    if m:
        month, day, year, hour, minute, second, meridiem, zone = m.groups()
        return int(year), int(month), int(day), hour, minute, second, meridiem, zone
    return None


def parse_placed_at(raw: Optional[str], tz_name: str = "UTC") -> Optional[str]:
    """Parse a book-local placed-at time into a UTC ISO instant.

    Accepts "Nov 18, 2025, 11:11:19 PM" (zone from tz_name) and
    "11/18/2025 11:09PM ET" (a shown zone abbreviation wins over tz_name).
    Returns None on failure; callers keep the raw text.
    """
    if not raw:
        return None
    parts = _split_placed_at(raw.strip())
    if parts is None:
        return None

    year, month, day, hour, minute, second, meridiem, zone = parts
    hour_i = int(hour)
    if hour_i < 1 or hour_i > 12:
        return None
    if meridiem.upper() == "PM" and hour_i != 12:
        hour_i += 12
    elif meridiem.upper() == "AM" and hour_i == 12:
        hour_i = 0

    if zone and zone.upper() in ZONE_ABBREVIATIONS:
        tz_name = ZONE_ABBREVIATIONS[zone.upper()]
    tz = _zone(tz_name)

    try:
        local = datetime(year, month, day, hour_i, int(minute), int(second or 0), tzinfo=tz)
    except ValueError:
        return None
    return local.astimezone(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


def result_from_status(status_text: Optional[str]) -> BetResult:
    return STATUS_RESULTS.get((status_text or "").strip().lower(), BetResult.PENDING)


def extract_header_info(card: Node, adapter: "SportsbookAdapter", tz_name: str = "UTC") -> HeaderInfo:
    date_str = adapter.placed_at_text(card) or ""
    bet_id = adapter.reference_id_text(card) or ""
    placed_at = parse_placed_at(date_str, tz_name) or date_str
    return HeaderInfo(bet_id=bet_id, placed_at=placed_at)


def extract_footer_meta(card: Node, adapter: "SportsbookAdapter") -> FooterMeta:
    payout_text = adapter.payout_text(card)
    return FooterMeta(
        stake=parse_money(adapter.stake_text(card)),
        payout=parse_money(payout_text),
        result=result_from_status(adapter.status_text(card)),
        payout_displayed=payout_text is not None,
    )
