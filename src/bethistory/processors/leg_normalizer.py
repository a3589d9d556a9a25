"""Leg normalization: free-text market/target strings -> canonical tuple.

    "Jordan Hawkins Points", "18+"   -> ("Pts", "Jordan Hawkins", "18+", Over)
    "Spread", "PHO Suns +2.5"         -> ("Spread", "PHO Suns", "+2.5", None)
    "Total Points", "Over 235.5"      -> ("Pts", "", "235.5", Over)
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from ..processing import patterns
from .wager_data import BetType, OverUnder


@dataclass(frozen=True)
class NormalizedLeg:
    stat_type: str
    entity_name: str
    line: str
    over_under: Optional[OverUnder]
    entity_is_team: bool = False  # entity came from the selection (a side), not the market


def normalize_spaces(text: Optional[str]) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def detect_stat_type(market: str) -> str:
    """Return the stat code for market text, or "" when nothing matches."""
    for pattern, code in patterns.STAT_TYPE_PATTERNS:
        if pattern.search(market or ""):
            return code
    return ""


def extract_player_name(market: str) -> str:
    """Strip stat suffixes and thresholds; accept what is left only if it looks like a name."""
    if not market:
        return ""
    name = market.strip()
    for suffix in patterns.STAT_SUFFIX_PATTERNS:
        name = suffix.sub("", name).strip()

    words = name.split()
    if len(words) < 2 or not all(w[0].isupper() for w in words):
        return ""
    # "Point Spread", "Run Line", "Alternate Spread" are market labels
    if detect_stat_type(name) in patterns.MAIN_MARKET_STAT_TYPES:
        return ""
    if any(w.lower() in patterns.MARKET_LABEL_WORDS for w in words):
        return ""
    return name


def extract_team_name(target: str) -> str:
    if not target:
        return ""
    cleaned = patterns.TRAILING_LINE.sub("", target).strip()
    if patterns.OVER_UNDER_ONLY.match(cleaned) or not re.search(r"[A-Za-z]", cleaned):
        return ""
    return cleaned


def extract_team_nickname(team_name: str) -> str:
    """"PHO Suns" -> "Suns", "POR Trail Blazers" -> "Trail Blazers"; unknown names come back unchanged."""
    cleaned = normalize_spaces(team_name)
    if not cleaned:
        return ""
    words = cleaned.split(" ")
    if len(words) >= 2:
        last_two = f"{words[-2]} {words[-1]}".lower()
        if last_two in patterns.TEAM_NICKNAMES:
            return " ".join(words[-2:])
    if words[-1].lower() in patterns.TEAM_NICKNAMES:
        return words[-1]
    return cleaned


def is_team_name(name: Optional[str]) -> bool:
    """True when the last word(s) of name are a known team nickname."""
    cleaned = normalize_spaces(name)
    if not cleaned:
        return False
    nickname = extract_team_nickname(cleaned)
    return nickname.lower() in patterns.TEAM_NICKNAMES


def extract_entity(market: str, target: Optional[str] = None) -> Tuple[str, bool]:
    """Entity for a leg and whether it is a side taken from the selection text."""
    name = extract_player_name(market)
    if name:
        return name, is_team_name(name)
    team = extract_team_name(target or "")
    return team, bool(team)


def extract_name_and_type(market: str, target: Optional[str] = None) -> Tuple[str, str]:
    name, _ = extract_entity(market, target)
    return name, detect_stat_type(market)


def extract_line_and_ou(target: Optional[str]) -> Tuple[str, Optional[OverUnder]]:
    """Pull the line and over/under out of target text.

    Order matters: "Over/Under N", then "N+" (implicit Over), then a
    trailing signed number (spread, no over/under).
    """
    if not target:
        return "", None

    m = patterns.OVER_LINE.match(target)
    if m:
        return m.group(1), OverUnder.OVER
    m = patterns.UNDER_LINE.match(target)
    if m:
        return m.group(1), OverUnder.UNDER
    m = patterns.PROP_THRESHOLD.search(target)
    if m:
        return m.group(1) + "+", OverUnder.OVER
    m = patterns.SIGNED_LINE.search(target)
    if m:
        return m.group(1), None
    return "", None


def normalize_leg(market: str, target: Optional[str] = None) -> NormalizedLeg:
    name, is_team = extract_entity(market, target)
    line, ou = extract_line_and_ou(target)
    return NormalizedLeg(
        stat_type=detect_stat_type(market), entity_name=name, line=line, over_under=ou, entity_is_team=is_team
    )


def normalize_bet_type(text: Optional[str]) -> Optional[BetType]:
    """Map book wording to a parlay-family bet type. DraftKings says "SGPx" where others say "SGP+"."""
    if not text:
        return None
    lower = str(text).strip().lower()
    if not lower:
        return None
    if any(t in lower for t in patterns.SGP_PLUS_TOKENS):
        return BetType.SGP_PLUS
    if any(t in lower for t in patterns.SGP_TOKENS):
        return BetType.SGP
    if any(t in lower for t in patterns.PARLAY_TOKENS):
        return BetType.PARLAY
    return None


def strip_live_marker(market: str) -> Tuple[str, bool]:
    """Remove "Live"/"Live Betting" from market text. Returns (text, was_live)."""
    if not patterns.LIVE_MARKER.search(market or ""):
        return market, False
    return normalize_spaces(patterns.LIVE_MARKER.sub("", market, count=1)), True
