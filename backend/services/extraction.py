import re
from typing import List, Tuple

from config.patterns import (
    CATEGORY_KEYWORDS,
    CLAIM_PATTERNS,
    CLAUSE_SPLIT_PATTERN,
    FACTUAL_INDICATORS,
    MAX_CLAIMS,
    MIN_CLAIM_LENGTH,
    OPINION_PATTERN,
)
from models.claims import Claim, ClaimCategory

_CATEGORY_PATTERNS = [
    (ClaimCategory(name), re.compile(r"\b(?:" + "|".join(re.escape(k) for k in keywords) + r")", re.IGNORECASE))
    for name, keywords in CATEGORY_KEYWORDS
]


def contains_opinion_marker(statement: str) -> bool:
    return bool(OPINION_PATTERN.search(statement or ""))


def categorize(statement: str) -> ClaimCategory:
    """Return the first category whose keyword set matches the statement."""
    for category, pattern in _CATEGORY_PATTERNS:
        if pattern.search(statement or ""):
            return category
    return ClaimCategory.GENERAL


def split_clauses(statement: str) -> List[str]:
    clauses = []
    for part in CLAUSE_SPLIT_PATTERN.split(statement or ""):
        clause = part.strip().rstrip(".!?;:,").strip()
        if clause:
            clauses.append(clause)
    return clauses


def _merge_candidate(candidates: List[str], candidate: str):
    """Add a candidate, keeping the longer text when one contains the other."""
    key = candidate.lower()
    for existing in candidates:
        if key in existing.lower():
            return
    contained = [i for i, existing in enumerate(candidates) if existing.lower() in key]
    if contained:
        candidates[contained[0]] = candidate
        for i in reversed(contained[1:]):
            del candidates[i]
    else:
        candidates.append(candidate)


def find_candidate_claims(statement: str) -> List[str]:
    clauses = split_clauses(statement)
    candidates: List[str] = []
    for _shape, pattern in CLAIM_PATTERNS:
        for clause in clauses:
            if len(clause) < MIN_CLAIM_LENGTH:
                continue
            if pattern.search(clause):
                _merge_candidate(candidates, clause)
    return candidates[:MAX_CLAIMS]


def has_factual_indicator(statement: str) -> bool:
    lowered = (statement or "").lower()
    return any(indicator in lowered for indicator in FACTUAL_INDICATORS)


def extract_claims(statement: str, context: str = "") -> Tuple[List[Claim], ClaimCategory]:
    """
    Turn a raw statement into zero or more verifiable claims plus a category.

    Opinions yield no claims. When no claim shape matches but the statement
    carries a factual indicator, the whole statement is the sole claim.
    """
    statement = (statement or "").strip()
    category = categorize(statement)

    if not statement or contains_opinion_marker(statement):
        return [], category

    texts = find_candidate_claims(statement)
    if not texts and has_factual_indicator(statement):
        texts = [statement]

    claims = [Claim(text=text, category=category, originating_context=context or "") for text in texts]
    return claims, category
