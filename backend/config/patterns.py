"""
Pattern tables for claim extraction, categorization and the deterministic
override pre-check. Kept as data so they can be tested and tuned in isolation.
"""
import re

OPINION_MARKERS = (
    "i think",
    "i believe",
    "i feel",
    "i guess",
    "i suppose",
    "in my opinion",
    "in my view",
    "it seems",
    "seems like",
    "probably",
    "maybe",
    "might",
    "perhaps",
    "allegedly",
    "supposedly",
    "reportedly",
    "could be",
)

OPINION_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(marker) for marker in OPINION_MARKERS) + r")\b",
    re.IGNORECASE
)

# A period after an initial ("U.S.") or a listed abbreviation does not end a
# sentence, and a new sentence must start with a capital letter.
SENTENCE_ABBREVIATIONS = ("Dr", "Mr", "Mrs", "Ms", "Prof", "St", "Mt", "Jr", "Sr", "Inc", "Corp", "Co", "vs")
_ABBREVIATION_GUARD = r"(?<!\b[A-Z]\.)" + "".join(rf"(?<!\b{abbr}\.)" for abbr in SENTENCE_ABBREVIATIONS)
CLAUSE_SPLIT_PATTERN = re.compile(r"(?<=[.!?])" + _ABBREVIATION_GUARD + r"\s+(?=[A-Z\"'])|;\s*")

# Statements are split into clauses first; a clause matching any shape below
# becomes a candidate claim. Order: quantitative, temporal/founding,
# comparative/superlative, definitional.
CLAIM_PATTERNS = (
    (
        "quantitative",
        re.compile(r"\b\d[\d,.]*\s*(?:%|percent\b|per cent\b|million\b|billion\b|trillion\b|thousand\b)", re.IGNORECASE),
    ),
    (
        "quantitative",
        re.compile(
            r"\b\d[\d,.]*\s+(?:miles|kilometers|kilometres|meters|metres|pounds|kilograms|degrees|dollars|euros|people|years)\b",
            re.IGNORECASE
        ),
    ),
    (
        "temporal",
        re.compile(
            r"\b(?:founded|established|created|started|born|died|built|signed|opened|launched|invented|discovered)\b"
            r"(?:\s+\S+){0,8}?\s+\d{4}\b",
            re.IGNORECASE
        ),
    ),
    (
        "temporal",
        re.compile(r"\b(?:in|since|during|before|after)\s+\d{4}\b", re.IGNORECASE),
    ),
    (
        "comparative",
        re.compile(
            r"\b(?:is|are|was|were|has|have|had)\s+(?:the\s+)?"
            r"(?:more|less|higher|lower|larger|smaller|bigger|greater|fewer|older|younger|"
            r"largest|smallest|biggest|highest|lowest|tallest|longest|oldest|first|most|least)\b",
            re.IGNORECASE
        ),
    ),
    (
        "definitional",
        re.compile(r"\b[A-Z][\w'-]*(?:\s+[A-Z][\w'-]*)*\s+(?:is|are|was|were)\s+(?:a|an|the)\s+\w+"),
    ),
)

FACTUAL_INDICATORS = (
    "according to",
    "census",
    "founded in",
    "established in",
    "studies show",
    "research indicates",
    "research shows",
    "it is known that",
    "statistics",
    "data shows",
    "survey",
    "official figures",
)

MIN_CLAIM_LENGTH = 10
MAX_CLAIMS = 3

# First matching category wins, in this order
CATEGORY_KEYWORDS = (
    ("institutional", ("university", "college", "institute", "school", "academy", "hospital")),
    ("demographic", ("population", "million", "billion", "people", "census", "residents", "inhabitants", "citizens")),
    ("economic", ("dollar", "economy", "gdp", "revenue", "inflation", "unemployment", "budget", "trade", "income")),
    ("scientific", ("study", "research", "scientists", "found", "discovered", "experiment", "species", "climate")),
    ("political", ("election", "vote", "president", "government", "congress", "senate", "parliament", "minister")),
)

COUNTRIES = (
    (re.compile(r"\bunited states\b|\bu\.s\.(?:a\.)?|\busa\b", re.IGNORECASE), "united states", "USA"),
    (re.compile(r"\bchina\b", re.IGNORECASE), "china", "CHN"),
    (re.compile(r"\bindia\b", re.IGNORECASE), "india", "IND"),
    (re.compile(r"\bjapan\b", re.IGNORECASE), "japan", "JPN"),
    (re.compile(r"\bgermany\b", re.IGNORECASE), "germany", "DEU"),
    (re.compile(r"\bfrance\b", re.IGNORECASE), "france", "FRA"),
    (re.compile(r"\buk\b|\bunited kingdom\b|\bbritain\b", re.IGNORECASE), "united kingdom", "GBR"),
    (re.compile(r"\bcanada\b", re.IGNORECASE), "canada", "CAN"),
    (re.compile(r"\baustralia\b", re.IGNORECASE), "australia", "AUS"),
    (re.compile(r"\bbrazil\b", re.IGNORECASE), "brazil", "BRA"),
    (re.compile(r"\brussia\b", re.IGNORECASE), "russia", "RUS"),
)

# keyword -> World Bank indicator code
INDICATORS = (
    ("population", "SP.POP.TOTL"),
    ("gdp", "NY.GDP.MKTP.CD"),
    ("economy", "NY.GDP.MKTP.CD"),
    ("growth", "NY.GDP.MKTP.KD.ZG"),
    ("inflation", "FP.CPI.TOTL.ZG"),
    ("unemployment", "SL.UEM.TOTL.ZS"),
    ("life expectancy", "SP.DYN.LE00.IN"),
)

# Indicators reported as percentages; claims about them state a rate, not a magnitude
PERCENT_INDICATORS = frozenset({"NY.GDP.MKTP.KD.ZG", "FP.CPI.TOTL.ZG", "SL.UEM.TOTL.ZS"})

CLAIMED_MAGNITUDE_PATTERN = re.compile(
    r"(\d+(?:,\d{3})*(?:\.\d+)?)\s*(trillion|billion|million|thousand)\b", re.IGNORECASE
)
CLAIMED_PERCENT_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(?:%|percent\b|per cent\b)", re.IGNORECASE)
MAGNITUDE_MULTIPLIERS = {"thousand": 1e3, "million": 1e6, "billion": 1e9, "trillion": 1e12}

VALUE_MISMATCH_MARKER = "differs from the claimed"

# (pattern, score, reason)
FALSEHOOD_PATTERNS = (
    (re.compile(r"100%\s+of\s+people", re.IGNORECASE), 0.9,
     "Absolute statements about human behavior are rarely accurate"),
    (re.compile(r"everyone\s+(?:believes|thinks|knows)", re.IGNORECASE), 0.8,
     "Universal claims about human behavior are usually false"),
    (re.compile(r"\ball\s+(?:people|humans|everyone)\b", re.IGNORECASE), 0.8,
     "Universal claims are rarely accurate"),
    (re.compile(r"\bnever\s+(?:tell|say|do)\b", re.IGNORECASE), 0.7,
     "Absolute negative statements are usually false"),
    (re.compile(r"\balways\s+(?:tell|say|do)\b", re.IGNORECASE), 0.7,
     "Absolute positive statements are usually false"),
    (re.compile(r"population.*exactly\s+\d{1,2}\s*$", re.IGNORECASE), 0.8,
     "Population numbers are never exact small integers"),
    (re.compile(r"\b\d{1,2}\s+people\s+live\b", re.IGNORECASE), 0.7,
     "Very small population numbers are usually wrong"),
    (re.compile(r"all\s+politicians\s+are\s+corrupt", re.IGNORECASE), 0.9,
     "Universal political claims are usually false"),
    (re.compile(r"never\s+tell\s+the\s+truth", re.IGNORECASE), 0.8,
     "Absolute negative claims about groups are usually false"),
    (re.compile(r"\ball\s+(?:democrats|republicans|liberals|conservatives)\b", re.IGNORECASE), 0.7,
     "Universal political group claims are usually false"),
    (re.compile(r"100%.*believe.*internet", re.IGNORECASE), 0.95,
     "No one believes 100% of what they read online"),
    (re.compile(r"everything.*internet.*true", re.IGNORECASE), 0.9,
     "Not everything on the internet is true"),
    (re.compile(r"studies\s+show.*100%", re.IGNORECASE), 0.8,
     "Studies rarely show 100% of anything"),
)

# (pattern, canonical fact)
ESTABLISHED_FACTS = (
    (re.compile(r"\bearth\b.*\b(?:orbits|revolves around|goes around)\b.*\bsun\b", re.IGNORECASE),
     "The Earth orbits the Sun"),
    (re.compile(r"\bwater\b.*\bboils\b.*\b100\s*(?:°\s*c|degrees celsius|degrees c)\b", re.IGNORECASE),
     "Water boils at 100 degrees Celsius at sea level"),
    (re.compile(r"\bwater\b.*\bfreezes\b.*\b0\s*(?:°\s*c|degrees celsius|degrees c)\b", re.IGNORECASE),
     "Water freezes at 0 degrees Celsius at sea level"),
    (re.compile(r"declaration of independence.*\b(?:signed|adopted)\b.*\b1776\b", re.IGNORECASE),
     "The Declaration of Independence was adopted in 1776"),
    (re.compile(r"world war (?:ii|2|two)\b.*\bended\b.*\b1945\b", re.IGNORECASE),
     "World War II ended in 1945"),
    (re.compile(r"\bmoon landing\b.*\b1969\b|\b1969\b.*\bmoon landing\b|apollo 11.*\b1969\b", re.IGNORECASE),
     "Apollo 11 landed on the Moon in 1969"),
    (re.compile(r"\bearth\b.*\bis\b.*\b(?:round|spherical|an oblate spheroid)\b", re.IGNORECASE),
     "The Earth is roughly spherical"),
    (re.compile(r"\bspeed of light\b.*\b(?:299,?792|300,?000)\b", re.IGNORECASE),
     "The speed of light in vacuum is about 299,792 km/s"),
)

# Evidence wording that signals the topic is contested
DISPUTE_MARKERS = ("disputed", "dispute", "contradict", "controversial", "debated", VALUE_MISMATCH_MARKER)

OBVIOUS_INACCURACY_ISSUE = "This statement contains obvious inaccuracies"
