from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ScoringConfig:
    RELEVANCE_WEIGHT: float = 0.6
    CREDIBILITY_WEIGHT: float = 0.4

    EXACT_MATCH_WEIGHT: int = 2
    PARTIAL_MATCH_WEIGHT: int = 1
    MIN_TOKEN_LENGTH: int = 4

    MAX_EVIDENCE_ITEMS: int = 5


@dataclass(frozen=True)
class AggregationConfig:
    # Source buckets used by the fallback heuristic
    HIGH_QUALITY_CREDIBILITY: float = 0.8
    RELEVANT_THRESHOLD: float = 0.5
    HIGH_OVERALL_THRESHOLD: float = 0.6

    BASE_ACCURACY: float = 0.3
    MAX_HEURISTIC_CONFIDENCE: float = 0.9
    MAX_SOURCES_FOR_FULL_DENSITY: int = 5

    ACCURACY_WEIGHT: float = 0.6
    CONFIDENCE_WEIGHT: float = 0.3
    COUNT_BONUS_PER_SOURCE: float = 0.04
    COUNT_BONUS_CAP: float = 0.2
    CREDIBILITY_BONUS_WEIGHT: float = 0.1
    CREDIBILITY_BONUS_CAP: float = 0.1
    MAX_FINAL_CONFIDENCE: float = 0.95

    CONFIDENCE_THRESHOLD: float = 0.6

    ACCURATE_THRESHOLD: float = 0.7
    LIKELY_ACCURATE_THRESHOLD: float = 0.4


@dataclass(frozen=True)
class DefaultVerdicts:
    NO_CLAIMS_CONFIDENCE: float = 0.2
    NO_SOURCES_CONFIDENCE: float = 0.3
    NO_EVIDENCE_CONFIDENCE: float = 0.3
    ERROR_CONFIDENCE: float = 0.25

    NO_CLAIMS_ISSUE: str = "No verifiable claims found"
    NO_SOURCES_ISSUE: str = "No enabled sources for this fact type"
    NO_EVIDENCE_ISSUE: str = "No evidence found in enabled sources"
    ERROR_ISSUE: str = "Error during fact-checking"


@dataclass(frozen=True)
class OverrideConfig:
    FALSEHOOD_CONFIDENCE: float = 0.1
    ESTABLISHED_CONFIDENCE: float = 0.99
    # Falsehood patterns only trigger above this score
    FALSEHOOD_TRIGGER_SCORE: float = 0.7


@dataclass(frozen=True)
class DomainCredibilityTable:
    """Static per-domain trust weights, matched on the domain suffix."""
    WEIGHTS: Tuple[Tuple[str, float], ...] = (
        ("factcheck.org", 0.9),
        ("snopes.com", 0.9),
        ("politifact.com", 0.9),
        ("fullfact.org", 0.9),
        ("worldbank.org", 0.95),
        ("who.int", 0.95),
        ("un.org", 0.95),
        ("oecd.org", 0.9),
        ("nist.gov", 0.95),
        ("iso.org", 0.95),
        ("census.gov", 0.95),
        ("nature.com", 0.9),
        ("science.org", 0.9),
        ("reuters.com", 0.85),
        ("apnews.com", 0.85),
        ("bbc.co.uk", 0.8),
        ("bbc.com", 0.8),
        ("britannica.com", 0.85),
        ("wikipedia.org", 0.8),
        ("generativelanguage.googleapis.com", 0.7),
    )
    SUFFIX_WEIGHTS: Tuple[Tuple[str, float], ...] = (
        (".gov", 0.95),
        (".mil", 0.95),
        (".int", 0.9),
        (".edu", 0.85),
        (".ac.uk", 0.85),
        (".org", 0.6),
    )
    DEFAULT: float = 0.5

    def get_weight_for_domain(self, domain: str) -> float:
        domain = (domain or "").lower().strip()
        if domain.startswith("www."):
            domain = domain[4:]
        if not domain:
            return self.DEFAULT
        for known, weight in self.WEIGHTS:
            if domain == known or domain.endswith("." + known):
                return weight
        for suffix, weight in self.SUFFIX_WEIGHTS:
            if domain.endswith(suffix):
                return weight
        return self.DEFAULT


@dataclass(frozen=True)
class APITimeouts:
    """Per-source timeout defaults, in seconds."""
    WIKIPEDIA: float = 5.0
    WORLD_BANK: float = 8.0
    FACT_CHECK: float = 8.0
    WEB_SEARCH: float = 8.0
    AI_ANALYSIS: float = 15.0
    PIPELINE: float = 10.0


@dataclass(frozen=True)
class RateLimitDefaults:
    """Requests admitted per source per minute."""
    WIKIPEDIA: int = 200
    WORLD_BANK: int = 200
    FACT_CHECK: int = 60
    WEB_SEARCH: int = 100
    AI_ANALYSIS: int = 20


@dataclass(frozen=True)
class CacheConfig:
    TTL_SECONDS: float = 15 * 60
    MAX_ENTRIES: int = 500


SCORING_CONFIG = ScoringConfig()
AGGREGATION_CONFIG = AggregationConfig()
DEFAULT_VERDICTS = DefaultVerdicts()
OVERRIDE_CONFIG = OverrideConfig()
SOURCE_WEIGHTS = DomainCredibilityTable()
API_TIMEOUTS = APITimeouts()
RATE_LIMITS_PER_MINUTE = RateLimitDefaults()
CACHE_CONFIG = CacheConfig()
