from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from config import logger
from config.constants import OVERRIDE_CONFIG
from config.patterns import ESTABLISHED_FACTS, FALSEHOOD_PATTERNS, OBVIOUS_INACCURACY_ISSUE


class OverrideKind(str, Enum):
    FALSEHOOD = "falsehood"
    ESTABLISHED = "established"


@dataclass(frozen=True)
class Override:
    """Deterministic verdict substance for a known-pattern claim."""
    kind: OverrideKind
    confidence: float
    issues: Tuple[str, ...] = field(default_factory=tuple)
    suggestions: Tuple[str, ...] = field(default_factory=tuple)
    explanation: str = ""

    @property
    def is_falsehood(self) -> bool:
        return self.kind == OverrideKind.FALSEHOOD


def score_falsehood(statement: str) -> Tuple[float, List[str]]:
    """Return the highest matching falsehood score and every matching reason."""
    text = (statement or "").strip().rstrip(".!?")
    score = 0.0
    reasons = []
    for pattern, pattern_score, reason in FALSEHOOD_PATTERNS:
        if pattern.search(text):
            score = max(score, pattern_score)
            reasons.append(reason)
    return score, reasons


def match_established_fact(statement: str) -> Optional[str]:
    for pattern, fact in ESTABLISHED_FACTS:
        if pattern.search(statement or ""):
            return fact
    return None


def check_overrides(statement: str) -> Optional[Override]:
    score, reasons = score_falsehood(statement)
    if score > OVERRIDE_CONFIG.FALSEHOOD_TRIGGER_SCORE:
        logger.info(f"Obvious falsehood detected (score={score}): {'; '.join(reasons)}")
        return Override(
            kind=OverrideKind.FALSEHOOD,
            confidence=OVERRIDE_CONFIG.FALSEHOOD_CONFIDENCE,
            issues=(OBVIOUS_INACCURACY_ISSUE, *reasons),
            suggestions=(
                "This statement contains obvious falsehoods",
                "Avoid making universal claims without evidence",
                "Verify specific claims with reliable sources",
            ),
            explanation=f"Matches a known falsehood pattern: {reasons[0]}",
        )

    fact = match_established_fact(statement)
    if fact:
        logger.info(f"Well-established fact detected: {fact}")
        return Override(
            kind=OverrideKind.ESTABLISHED,
            confidence=OVERRIDE_CONFIG.ESTABLISHED_CONFIDENCE,
            suggestions=("This is a well-established fact",),
            explanation=f"Well-established fact: {fact}",
        )

    return None
