"""Tests for the wager data model."""
import json

from bethistory.processors.wager_data import BetResult, BetType, Leg, MarketCategory, OverUnder, Wager


def _sgp_wager(**overrides):
    group = Leg(
        market="2 Pick SGP",
        odds=250,
        result=BetResult.WIN,
        is_group_leg=True,
        children=(
            Leg(market="Devin Booker Points", target="25+", over_under=OverUnder.OVER, result=BetResult.WIN,
                entities=("Devin Booker",), stat_type="Pts"),
            Leg(market="Spread", target="PHO Suns +2.5", result=BetResult.PUSH, entities=("PHO Suns",)),
        ),
    )
    fields = dict(
        bet_id="DK300",
        placed_at="2025-11-18T23:11:19Z",
        bet_type=BetType.SGP_PLUS,
        sport="NBA",
        description="Devin Booker Points 25+, Spread PHO Suns +2.5",
        legs=(group, Leg(market="Moneyline", target="LA Lakers", odds=140, result=BetResult.WIN)),
        odds=1200,
        stake=10.0,
        payout=130.0,
        result=BetResult.WIN,
        market_category=MarketCategory.PARLAYS,
    )
    fields.update(overrides)
    return Wager(**fields)


def test_leaf_legs_flatten_groups_in_order():
    wager = _sgp_wager()
    assert wager.has_group_legs
    assert [leg.market for leg in wager.leaf_legs] == ["Devin Booker Points", "Spread", "Moneyline"]


def test_to_dict_is_json_ready():
    data = _sgp_wager().to_dict()
    json.dumps(data)
    assert data["bet_type"] == "sgp_plus"
    assert data["market_category"] == "Parlays"
    assert data["legs"][0]["is_group_leg"] is True
    assert data["legs"][0]["children"][0]["over_under"] == "Over"
    assert "children" not in data["legs"][1]


def test_from_dict_restores_leg_tree():
    original = _sgp_wager()
    restored = Wager.from_dict(original.to_dict())
    assert restored == original


def test_from_dict_reclassifies_invalid_category():
    data = {
        "bet_id": "DK9",
        "placed_at": "Nov 18, 2025",
        "bet_type": "single",
        "description": "LeBron James Over 25.5 Points",
        "market_category": "Player Props",
    }
    assert Wager.from_dict(data).market_category is MarketCategory.PROPS

    data.pop("market_category")
    assert Wager.from_dict(data).market_category is MarketCategory.PROPS


def test_from_dict_keeps_valid_category():
    data = _sgp_wager(bet_type=BetType.SINGLE, market_category=MarketCategory.FUTURES).to_dict()
    assert Wager.from_dict(data).market_category is MarketCategory.FUTURES


def test_depth_sentinel():
    leg = Leg.depth_sentinel(BetResult.LOSS)
    assert leg.depth_exceeded
    assert leg.result is BetResult.LOSS
    assert list(leg.leaves()) == [leg]
    assert leg.to_dict()["depth_exceeded"] is True


def test_from_dict_maps_unknown_bet_type_to_other():
    data = {
        "bet_id": "DK10",
        "placed_at": "2025-11-18T23:11:19Z",
        "bet_type": "teaser",
        "description": "PHO Suns +8.5",
        "market_category": "Main Markets",
    }
    wager = Wager.from_dict(data)
    assert wager.bet_type is BetType.OTHER
    assert wager.market_category is MarketCategory.MAIN_MARKETS


def test_from_dict_defaults_missing_bet_type_to_single():
    wager = Wager.from_dict({"bet_id": "DK11", "placed_at": "", "description": "Moneyline LA Lakers"})
    assert wager.bet_type is BetType.SINGLE


def test_name_is_team_survives_round_trip():
    wager = _sgp_wager(bet_type=BetType.SINGLE, name="Gonzaga Bulldogs", name_is_team=True)
    assert Wager.from_dict(wager.to_dict()).name_is_team is True


def test_bet_type_coerce():
    assert BetType.coerce("sgp", BetType.SINGLE) is BetType.SGP
    assert BetType.coerce(BetType.LIVE, BetType.SINGLE) is BetType.LIVE
    assert BetType.coerce(None, BetType.SINGLE) is BetType.SINGLE
    assert BetType.coerce("round robin", BetType.SINGLE) is BetType.OTHER
