"""Tests for wager header and settlement footer extraction."""
import pytest

from bethistory.parsers.draftkings_html import DraftKingsAdapter
from bethistory.parsers.fanduel_html import FanDuelAdapter
from bethistory.parsers.metadata import (
    extract_footer_meta,
    extract_header_info,
    parse_money,
    parse_odds,
    parse_placed_at,
    result_from_status,
)
from bethistory.processors.wager_data import BetResult


@pytest.mark.parametrize("status,expected", [
    ("Won", BetResult.WIN),
    ("won", BetResult.WIN),
    ("Lost", BetResult.LOSS),
    ("Void", BetResult.PUSH),
    ("Open", BetResult.PENDING),
    ("Cashed Out", BetResult.PENDING),
    ("", BetResult.PENDING),
    (None, BetResult.PENDING),
])
def test_result_from_status(status, expected):
    assert result_from_status(status) is expected


def test_parse_money():
    assert parse_money("Wager: $10.00") == 10.0
    assert parse_money("$1,234.50") == 1234.5
    assert parse_money("") is None
    assert parse_money(None) is None
    assert parse_money("--") is None


def test_parse_odds_handles_unicode_minus_and_plus():
    assert parse_odds("−112") == -112
    assert parse_odds("+150") == 150
    assert parse_odds(" -105 ") == -105
    assert parse_odds("EVEN") is None
    assert parse_odds("") is None


def test_parse_placed_at_to_utc_instant():
    assert parse_placed_at("Nov 18, 2025, 11:11:19 PM") == "2025-11-18T23:11:19Z"
    assert parse_placed_at("Sept 3, 2025, 12:05 AM") == "2025-09-03T00:05:00Z"
    assert parse_placed_at("Jan 1, 2025 12:00 PM") == "2025-01-01T12:00:00Z"


def test_parse_placed_at_applies_book_timezone():
    assert parse_placed_at("Nov 18, 2025, 11:11:19 PM", "America/New_York") == "2025-11-19T04:11:19Z"


def test_parse_placed_at_numeric_with_zone_abbreviation():
    assert parse_placed_at("11/18/2025 11:09PM ET") == "2025-11-19T04:09:00Z"
    assert parse_placed_at("7/4/2025 1:05PM PT") == "2025-07-04T20:05:00Z"
    # a shown zone wins over the configured book zone
    assert parse_placed_at("11/18/2025 11:09PM ET", "America/Chicago") == "2025-11-19T04:09:00Z"
    assert parse_placed_at("11/18/2025 11:09PM") == "2025-11-18T23:09:00Z"
    assert parse_placed_at("11/31/2025 11:09PM ET") is None


def test_parse_placed_at_rejects_bad_input():
    assert parse_placed_at("Yesterday") is None
    assert parse_placed_at("Feb 30, 2025, 1:00 PM") is None
    assert parse_placed_at("Nov 18, 2025, 13:00 PM") is None
    assert parse_placed_at("") is None


def test_header_keeps_raw_date_when_unparsable(dk):
    card = dk.node(dk.card("DK1", placed="Yesterday 9:14 PM"))
    header = extract_header_info(card, DraftKingsAdapter())
    assert header.bet_id == "DK1"
    assert header.placed_at == "Yesterday 9:14 PM"


def test_footer_meta(dk):
    card = dk.node(dk.card("DK2", status="Won", stake="Wager: $5.00", payout="Paid: $12.50"))
    footer = extract_footer_meta(card, DraftKingsAdapter())
    assert footer.stake == 5.0
    assert footer.payout == 12.5
    assert footer.result is BetResult.WIN
    assert footer.payout_displayed


def test_footer_meta_without_payout_line(dk):
    card = dk.node(dk.card("DK3", status="Lost", payout=None))
    footer = extract_footer_meta(card, DraftKingsAdapter())
    assert footer.payout is None
    assert footer.result is BetResult.LOSS
    assert not footer.payout_displayed


@pytest.mark.parametrize("amounts,stake,payout,result", [
    ({"won": "$38.18"}, 20.0, 38.18, BetResult.WIN),
    ({"won": "$0.00"}, 20.0, 0.0, BetResult.LOSS),
    ({"returned": "$0.00"}, 20.0, 0.0, BetResult.LOSS),
    ({"returned": "$20.00"}, 20.0, 20.0, BetResult.PUSH),
    ({}, 20.0, None, BetResult.PENDING),
])
def test_fanduel_footer_labels(dk, fd, amounts, stake, payout, result):
    card = dk.node("<ul><li>" + fd.footer("FD1", stake="$20.00", **amounts) + "</li></ul>", "li")
    footer = extract_footer_meta(card, FanDuelAdapter())
    assert footer.stake == stake
    assert footer.payout == payout
    assert footer.result is result
    assert footer.payout_displayed is (payout is not None)


def test_fanduel_header(dk, fd):
    card = dk.node("<ul><li>" + fd.footer("O/0242888/0027982") + "</li></ul>", "li")
    header = extract_header_info(card, FanDuelAdapter(), "UTC")
    assert header.bet_id == "O/0242888/0027982"
    assert header.placed_at == "2025-11-19T04:09:00Z"
