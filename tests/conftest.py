"""Shared fixtures: synthetic DraftKings- and FanDuel-shaped bet history markup."""
import itertools
from typing import Iterable, Optional

import pytest
from bs4 import BeautifulSoup

from bethistory.config.settings import get_settings
from bethistory.parsers.dom import Node
from bethistory.parsers.draftkings_html import DraftKingsAdapter
from bethistory.parsers.fanduel_html import FanDuelAdapter

WIN = DraftKingsAdapter.WIN_COLOR
LOSS = DraftKingsAdapter.LOSS_COLOR
FD_WIN = FanDuelAdapter.WIN_COLOR
FD_LOSS = FanDuelAdapter.LOSS_COLOR


class DKMarkup:
    """Builds bet cards the way the DraftKings "My Bets" page renders them."""

    def __init__(self):
        self._ids = itertools.count(1)

    def icon(self, color: Optional[str] = None, css_class: str = "") -> str:
        if color is None and not css_class:
            return ""
        circle = f'<circle cx="8" cy="8" r="7" stroke="{color}"></circle>' if color else ""
        return f'<svg class="{css_class}" viewBox="0 0 16 16">{circle}</svg>'

    def leaf(self, market: str, target: str = "", odds: str = "", icon: str = "") -> str:
        k = next(self._ids)
        parts = [f'<div data-test-id="bet-selection-subtitle-{k}">{market}</div>']
        if target:
            parts.append(f'<div data-test-id="bet-selection-title-{k}">{target}</div>')
        if odds:
            parts.append(f'<div data-test-id="bet-selection-displayOdds-{k}">{odds}</div>')
        parts.append(icon)
        return '<div data-test-id="selection-list-item">' + "".join(parts) + "</div>"

    def group(self, title: str, children: Iterable[str], odds: str = "") -> str:
        k = next(self._ids)
        odds_html = f'<div data-test-id="bet-selection-displayOdds-{k}">{odds}</div>' if odds else ""
        return (
            '<div data-test-id="selection-list-item">'
            f'<div data-test-id="bet-selection-title-{k}">{title}</div>{odds_html}'
            f'<div class="sgp-legs">{"".join(children)}</div>'
            "</div>"
        )

    def nested_chain(self, levels: int) -> str:
        html = self.leaf("Innermost Player Points", "10+")
        for level in range(levels - 1):
            html = self.group(f"Level {levels - 1 - level}", [html])
        return html

    def card(
        self,
        bet_id: str,
        title: str = "",
        subtitle: str = "",
        odds: str = "",
        status: str = "",
        stake: Optional[str] = "Wager: $10.00",
        payout: Optional[str] = None,
        placed: str = "Nov 18, 2025, 11:11:19 PM",
        legs: Iterable[str] = (),
        leagues: Iterable[str] = ("nba",),
        sgp_marker: bool = False,
    ) -> str:
        parts = []
        if title:
            parts.append(f'<span data-test-id="bet-details-title-{bet_id}">{title}</span>')
        if subtitle:
            parts.append(f'<span data-test-id="bet-details-subtitle-{bet_id}">{subtitle}</span>')
        if odds:
            parts.append(f'<span data-test-id="bet-details-displayOdds-{bet_id}">{odds}</span>')
        if sgp_marker:
            parts.append(f'<div data-test-id="sgp-badge-{bet_id}"></div>')
        if status:
            parts.append(f'<div data-test-id="bet-details-status-{bet_id}">{status}</div>')
        for league in leagues:
            parts.append(f'<img src="https://sportsbook.draftkings.com/static/logos/teams/{league}/logo.png">')
        parts.append(f'<div id="{bet_id}-body">{"".join(legs)}</div>')
        if stake is not None:
            parts.append(f'<span data-test-id="bet-stake-{bet_id}">{stake}</span>')
        if payout is not None:
            parts.append(f'<span data-test-id="bet-returns-{bet_id}">{payout}</span>')
        parts.append(f'<span data-test-id="bet-reference-{bet_id}-0">{placed}</span>')
        parts.append(f'<span data-test-id="bet-reference-{bet_id}-1">{bet_id}</span>')
        return f'<div data-test-id="bet-card-{bet_id}">' + "".join(parts) + "</div>"

    def document(self, *cards: str) -> str:
        return "<html><body><main>" + "".join(cards) + "</main></body></html>"

    def node(self, html: str, selector: str = "div") -> Node:
        return Node(BeautifulSoup(html, "lxml")).select_one(selector)

    # Canned wagers used by several test modules

    def single_spread(self, bet_id: str = "DK100") -> str:
        return self.card(
            bet_id,
            title="PHO Suns +2.5",
            subtitle="Spread",
            odds="−110",
            status="Won",
            payout="Paid: $19.09",
            legs=[self.leaf("Spread", "PHO Suns +2.5", "−110", self.icon(WIN))],
        )

    def flat_parlay(self, bet_id: str = "DK200") -> str:
        return self.card(
            bet_id,
            title="2 Pick Parlay",
            subtitle="Jordan Hawkins Points 18+, Paul George Assists 5+",
            odds="+264",
            status="Lost",
            legs=[
                self.leaf("Jordan Hawkins Points", "18+", "−150", self.icon(WIN)),
                self.leaf("Paul George Assists", "5+", "+120", self.icon(LOSS)),
            ],
        )

    def sgpx(self, bet_id: str = "DK300") -> str:
        return self.card(
            bet_id,
            title="SGPx",
            subtitle="2 Same Game Parlays",
            odds="+1200",
            status="Open",
            payout="To Pay: $130.00",
            legs=[
                self.group("2 Pick SGP", [
                    self.leaf("Devin Booker Points", "25+", "+110", self.icon(WIN)),
                    self.leaf("Kevin Durant Rebounds", "6+", "−120"),
                ], odds="+250"),
                self.group("3 Pick SGP", [
                    self.leaf("Spread", "PHO Suns +2.5", "−110", self.icon(WIN)),
                    self.leaf("Moneyline", "LA Lakers", "+140", self.icon(WIN)),
                    self.leaf("Total", "Over 225.5", "−105", self.icon(css_class="icon-push")),
                ]),
            ],
        )


@pytest.fixture
def dk():
    return DKMarkup()


class FDMarkup:
    """Builds rows the way the FanDuel "My Bets" list renders them."""

    ICONS = {
        "won": f'<svg id="tick-circle" viewBox="0 0 16 16"><path fill="{FD_WIN}"></path></svg>',
        "lost": f'<svg id="cross-circle" viewBox="0 0 16 16"><path fill="{FD_LOSS}"></path></svg>',
        "void": '<svg id="warning" viewBox="0 0 16 16"><path fill="#C15400"></path></svg>',
    }

    def icon(self, result: str) -> str:
        return self.ICONS[result]

    def odds(self, odds: str) -> str:
        return f'<span aria-label="Odds {odds}">{odds}</span>' if odds else ""

    def leg(self, selection: str, market: str = "", odds: str = "", icon: str = "") -> str:
        label = ", ".join(p for p in (selection, market, odds) if p)
        market_html = f"<span>{market}</span>" if market else ""
        return f'<div aria-label="{label}"><span>{selection}</span>{market_html}{self.odds(odds)}{icon}</div>'

    def group(self, title: str, children: Iterable[str], odds: str = "") -> str:
        return f'<div aria-label="{title}"><span>{title}</span>{self.odds(odds)}<div>{"".join(children)}</div></div>'

    def footer(
        self,
        bet_id: str,
        stake: Optional[str] = "$10.00",
        won: Optional[str] = None,
        returned: Optional[str] = None,
        placed: str = "11/18/2025 11:09PM ET",
    ) -> str:
        parts = []
        if stake is not None:
            parts.append(f"<div><span>{stake}</span><span>TOTAL WAGER</span></div>")
        if won is not None:
            parts.append(f"<div><span>{won}</span><span>WON ON FANDUEL</span></div>")
        if returned is not None:
            parts.append(f"<div><span>{returned}</span><span>RETURNED</span></div>")
        parts.append(f"<span>BET ID: {bet_id}</span><span>PLACED: {placed}</span>")
        return "".join(parts)

    def single(self, bet_id: str, leg: str, header_extra: str = "", **footer) -> str:
        """Selection row followed by its footer row."""
        return f"<li>{header_extra}{leg}</li><li>{self.footer(bet_id, **footer)}</li>"

    def parlay(
        self, bet_id: str, title: str, legs: Iterable[str] = (), summary: str = "", odds: str = "", **footer
    ) -> str:
        """Header, legs and footer in one row."""
        summary_html = f"<span>{summary}</span>" if summary else ""
        return (
            f"<li><span>{title}</span>{summary_html}{self.odds(odds)}"
            f"<div>{''.join(legs)}</div>{self.footer(bet_id, **footer)}</li>"
        )

    def document(self, *rows: str) -> str:
        return "<html><body><main><ul>" + "".join(rows) + "</ul></main></body></html>"


@pytest.fixture
def fd():
    return FDMarkup()


class RecordingLogger:
    """Stands in for a structlog logger and keeps every call."""

    def __init__(self):
        self.events = []

    def _record(self, level, event, **kw):
        self.events.append((level, event, kw))

    def debug(self, event, **kw):
        self._record("debug", event, **kw)

    def info(self, event, **kw):
        self._record("info", event, **kw)

    def warning(self, event, **kw):
        self._record("warning", event, **kw)

    def error(self, event, **kw):
        self._record("error", event, **kw)


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    for var in ("LOG_LEVEL", "LOG_FILE", "DEFAULT_BOOK", "BOOK_TIMEZONE", "RAW_EXCERPT_CHARS", "CLASSIFICATION_YAML"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
