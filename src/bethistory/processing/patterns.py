"""Static pattern tables shared by the leg normalizer and the classifier.

Everything here is data. Tables whose order matters are tuples and are
scanned first-match-wins: combined stats appear before the individual
stats they contain, longer phrases before their substrings.
"""
from __future__ import annotations

import re
from typing import Dict, FrozenSet, Pattern, Tuple

# ---------------------------------------------------------------------------
# Stat types recognized in raw leg market text
# ---------------------------------------------------------------------------

STAT_TYPE_PATTERNS: Tuple[Tuple[Pattern[str], str], ...] = tuple(
    (re.compile(p, re.I), code)
    for p, code in (
        # combined before individual
        (r"points.*rebounds.*assists|\bpts.*reb.*ast\b|\bpra\b", "PRA"),
        (r"points.*rebounds|\bpts.*reb\b", "PR"),
        (r"points.*assists|\bpts.*ast\b", "PA"),
        (r"rebounds.*assists|\breb.*ast\b", "RA"),
        (r"steals.*blocks|\bstl.*blk\b|\bstocks\b", "Stocks"),
        # special props
        (r"first\s*(basket|field\s*goal|fg)", "FB"),
        (r"double[\s-]*double", "DD"),
        (r"triple[\s-]*double", "TD"),
        # individual
        (r"three\s*pointers?\s*made|made\s*threes|3[\s-]*pointers?|\bthrees\b|\b3pt\b", "3pt"),
        (r"\bpoints\b|\bpts\b", "Pts"),
        (r"\bassists\b|\bast\b", "Ast"),
        (r"\brebounds\b|\breb\b", "Reb"),
        (r"\bsteals\b|\bstl\b", "Stl"),
        (r"\bblocks\b|\bblk\b", "Blk"),
        (r"\bturnovers\b", "TO"),
        # main markets
        (r"\bspread\b|\brun\s*line\b|\bpuck\s*line\b", "Spread"),
        (r"\btotals?\b", "Total"),
        (r"\bmoney\s*line\b|\bml\b", "Moneyline"),
    )
)

MAIN_MARKET_STAT_TYPES: FrozenSet[str] = frozenset({"Spread", "Total", "Moneyline"})

# Suffixes stripped from "<Player Name> <Stat>" market text, in order
STAT_SUFFIX_PATTERNS: Tuple[Pattern[str], ...] = (
    # "Jalen Brunson - Alt Points", "Nikola Jokic To Record A Triple Double"
    re.compile(r"\s+-\s+.*$"),
    re.compile(r"\s+to\s+(record|score)\b.*$", re.I),
    re.compile(
        r"\s+(points\s*\+?\s*rebounds\s*\+?\s*assists|points\s*\+?\s*rebounds|points\s*\+?\s*assists"
        r"|rebounds\s*\+?\s*assists|points|pts|assists|ast|rebounds|reb|steals|stl|blocks|blk"
        r"|three\s*pointers?\s*made|threes?|turnovers|double[\s-]*double|triple[\s-]*double"
        r"|first\s*basket|fb)$",
        re.I,
    ),
    re.compile(r"\s+\d+\+?$"),
)

# ---------------------------------------------------------------------------
# Bet type vocabulary
# ---------------------------------------------------------------------------

SGP_PLUS_TOKENS: Tuple[str, ...] = ("sgpx", "sgp+", "sgp plus", "same game parlay+", "same game parlay plus")
SGP_TOKENS: Tuple[str, ...] = ("sgp", "same game parlay")
PARLAY_TOKENS: Tuple[str, ...] = ("parlay",)
LIVE_MARKER = re.compile(r"\bLive Betting\b|\bLive\b", re.I)

# ---------------------------------------------------------------------------
# Wager-level keyword sets (matched on word boundaries)
# ---------------------------------------------------------------------------

FUTURES_KEYWORDS: Tuple[str, ...] = (
    "to win",
    "award",
    "mvp",
    "dpoy",
    "roy",
    "champion",
    "championship",
    "outright",
    "win total",
    "win totals",
    "make playoffs",
    "miss playoffs",
    "nba finals",
    "super bowl",
    "world series",
    "stanley cup",
)

MAIN_MARKET_KEYWORDS: Tuple[str, ...] = (
    "moneyline",
    "money line",
    "ml",
    "spread",
    "point spread",
    "total",
    "totals",
    "over",
    "under",
    "run line",
    "puck line",
)

# Words that make a capitalized phrase a market label rather than a name
MARKET_LABEL_WORDS: FrozenSet[str] = frozenset(
    [word for keyword in MAIN_MARKET_KEYWORDS for word in keyword.split()]
    + ["alternate", "alt", "betting", "line", "game"]
)

PROP_KEYWORDS: Tuple[str, ...] = (
    "triple double",
    "triple-double",
    "double double",
    "double-double",
    "first basket",
    "first field goal",
    "first fg",
    "top scorer",
    "top points",
    "top pts",
    "points",
    "pts",
    "rebounds",
    "reb",
    "assists",
    "ast",
    "made threes",
    "threes",
    "3pt",
    "3-pointers",
    "steals",
    "stl",
    "blocks",
    "blk",
    "turnovers",
    "pra",
    "pr",
    "ra",
    "pa",
    "stocks",
    "player",
    "prop",
    "to record",
    "to score",
    "yards",
    "touchdown",
    "td",
    "receiving",
    "rushing",
    "passing",
    "home runs",
    "strikeouts",
    "hits",
    "runs",
    "goals",
    "shots on goal",
)

# Trailing spread shape ("-7.5", "+3") at the end of a description
TRAILING_SPREAD = re.compile(r"[+-]\d{1,3}(\.5)?$")

# ---------------------------------------------------------------------------
# Type tables
# ---------------------------------------------------------------------------

PROP_TYPE_ALIASES: Dict[str, str] = {
    "fb": "FB",
    "first basket": "FB",
    "first field goal": "FB",
    "first fg": "FB",
    "top pts": "Top Pts",
    "top scorer": "Top Pts",
    "top points": "Top Pts",
    "top points scorer": "Top Pts",
    "dd": "DD",
    "double double": "DD",
    "double-double": "DD",
    "triple double": "TD",
    "triple-double": "TD",
}

BASKETBALL_SPORTS: FrozenSet[str] = frozenset({"NBA", "WNBA", "CBB", "NCAAB"})

_NBA_STAT_TABLE: Tuple[Tuple[str, str], ...] = (
    ("points rebounds assists", "PRA"),
    ("pts reb ast", "PRA"),
    ("points rebounds", "PR"),
    ("pts reb", "PR"),
    ("rebounds assists", "RA"),
    ("reb ast", "RA"),
    ("points assists", "PA"),
    ("pts ast", "PA"),
    ("steals blocks", "Stocks"),
    ("stl blk", "Stocks"),
    ("first basket", "FB"),
    ("first field goal", "FB"),
    ("first fg", "FB"),
    ("top scorer", "Top Pts"),
    ("top points", "Top Pts"),
    ("top pts", "Top Pts"),
    ("double double", "DD"),
    ("triple double", "TD"),
    ("three pointers made", "3pt"),
    ("made threes", "3pt"),
    ("3 pointers", "3pt"),
    ("threes", "3pt"),
    ("3pt", "3pt"),
    ("points", "Pts"),
    ("pts", "Pts"),
    ("rebounds", "Reb"),
    ("reb", "Reb"),
    ("assists", "Ast"),
    ("ast", "Ast"),
    ("steals", "Stl"),
    ("stl", "Stl"),
    ("blocks", "Blk"),
    ("blk", "Blk"),
    ("turnovers", "TO"),
)

STAT_TYPE_TABLES: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "NBA": _NBA_STAT_TABLE,
    "WNBA": _NBA_STAT_TABLE,
    "CBB": _NBA_STAT_TABLE,
    "NCAAB": _NBA_STAT_TABLE,
    "NFL": (
        ("passing yards", "Pass Yds"),
        ("rushing yards", "Rush Yds"),
        ("receiving yards", "Rec Yds"),
        ("passing touchdowns", "Pass TD"),
        ("anytime touchdown scorer", "ATTD"),
        ("anytime touchdown", "ATTD"),
        ("anytime td", "ATTD"),
        ("receptions", "Rec"),
        ("interceptions", "Int"),
    ),
    "MLB": (
        ("home runs", "HR"),
        ("strikeouts", "K"),
        ("total bases", "TB"),
        ("hits", "Hits"),
        ("rbis", "RBI"),
    ),
    "NHL": (
        ("shots on goal", "SOG"),
        ("goals", "Goals"),
        ("saves", "Saves"),
        ("points", "Pts"),
    ),
}
DEFAULT_STAT_TABLE_SPORT = "NBA"

MAIN_MARKET_TYPES: Tuple[Tuple[str, str], ...] = (
    ("point spread", "Spread"),
    ("spread", "Spread"),
    ("run line", "Spread"),
    ("puck line", "Spread"),
    ("totals", "Total"),
    ("total", "Total"),
    ("over", "Total"),
    ("under", "Total"),
    ("money line", "Moneyline"),
    ("moneyline", "Moneyline"),
    ("ml", "Moneyline"),
)

FUTURES_TYPES: Tuple[Tuple[str, str], ...] = (
    ("nba finals", "NBA Finals"),
    ("super bowl", "Super Bowl"),
    ("world series", "World Series"),
    ("stanley cup", "Stanley Cup"),
    ("wcc", "WCC"),
    ("ecc", "ECC"),
    ("win totals", "Win Total"),
    ("win total", "Win Total"),
    ("make playoffs", "Make Playoffs"),
    ("miss playoffs", "Miss Playoffs"),
    ("mvp", "MVP"),
    ("dpoy", "DPOY"),
    ("roy", "ROY"),
    ("championship", "Champion"),
    ("champion", "Champion"),
)

# ---------------------------------------------------------------------------
# Name shapes
# ---------------------------------------------------------------------------

TEAM_NICKNAMES: FrozenSet[str] = frozenset({
    # NBA
    "hawks", "celtics", "nets", "hornets", "bulls", "cavaliers", "cavs",
    "mavericks", "mavs", "nuggets", "pistons", "warriors", "rockets",
    "pacers", "clippers", "lakers", "grizzlies", "grizz", "heat", "bucks",
    "timberwolves", "wolves", "pelicans", "pels", "knicks", "thunder",
    "magic", "76ers", "sixers", "suns", "trail blazers", "blazers", "kings",
    "spurs", "raptors", "raps", "jazz", "wizards", "wiz",
    # NFL
    "cardinals", "falcons", "ravens", "bills", "panthers", "bears",
    "bengals", "browns", "cowboys", "broncos", "lions", "packers",
    "texans", "colts", "jaguars", "jags", "chiefs", "raiders",
    "chargers", "rams", "dolphins", "vikings", "vikes", "patriots", "pats",
    "saints", "giants", "jets", "eagles", "steelers", "49ers", "niners",
    "seahawks", "buccaneers", "bucs", "titans", "commanders",
    # MLB
    "diamondbacks", "d-backs", "braves", "orioles", "red sox", "cubs",
    "white sox", "reds", "guardians", "rockies", "tigers", "astros",
    "royals", "angels", "dodgers", "marlins", "brewers", "twins", "mets",
    "yankees", "athletics", "phillies", "pirates", "padres", "mariners",
    "rays", "rangers", "blue jays", "nationals",
    # NHL
    "ducks", "bruins", "sabres", "flames", "hurricanes", "blackhawks",
    "avalanche", "blue jackets", "stars", "red wings", "oilers",
    "wild", "canadiens", "habs", "predators", "devils", "islanders",
    "senators", "flyers", "penguins", "sharks", "kraken", "blues",
    "lightning", "maple leafs", "leafs", "canucks", "golden knights",
    "capitals", "caps", "mammoth",
})

# Trailing line on a team target ("PHO Suns +2.5"); keeps digits inside names like "76ers"
TRAILING_LINE = re.compile(r"\s+[+\-]?\d+(?:\.\d+)?\+?\s*$")
OVER_UNDER_ONLY = re.compile(r"^(over|under)$", re.I)

OVER_LINE = re.compile(r"^Over\s*([+-]?\d+\.?\d*)", re.I)
UNDER_LINE = re.compile(r"^Under\s*([+-]?\d+\.?\d*)", re.I)
PROP_THRESHOLD = re.compile(r"(\d+)\+")
SIGNED_LINE = re.compile(r"([+-]?\d+(?:\.\d+)?)\s*$")

# Collapsed card summary fragment: "(prefix)? (Over|Under)? (signed number)(+)?"
SUMMARY_FRAGMENT = re.compile(
    r"^(?P<prefix>.*?)\s*(?:(?P<ou>Over|Under)\s+)?(?P<number>[+-]?\d+(?:\.\d+)?)(?P<plus>\+)?$",
    re.I,
)

# League from team logo URLs: /teams/{league}/{team}.png
LOGO_LEAGUE = re.compile(r"/teams/([a-z]+)/", re.I)
