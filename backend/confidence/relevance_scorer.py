import re
from typing import List, Set

from config.constants import SCORING_CONFIG, ScoringConfig

_TOKEN = re.compile(r"\w+")


class RelevanceScorer:
    """Token-overlap relevance between a claim and an evidence text."""

    def __init__(self, config: ScoringConfig = SCORING_CONFIG):
        self.config = config

    def tokenize(self, text: str) -> List[str]:
        """Unique lower-cased word tokens (any script) longer than the minimum, in order."""
        seen: Set[str] = set()
        tokens = []
        for token in _TOKEN.findall((text or "").lower()):
            if len(token) >= self.config.MIN_TOKEN_LENGTH and token not in seen:
                seen.add(token)
                tokens.append(token)
        return tokens

    def score(self, claim_text: str, evidence_text: str) -> float:
        """
        Score relevance in [0, 1].

        Each claim token earns the exact weight when it appears verbatim in the
        evidence, otherwise the partial weight when it is a substring of an
        evidence token or the reverse.
        """
        claim_tokens = self.tokenize(claim_text)
        if not claim_tokens:
            return 0.0

        evidence_tokens = set(self.tokenize(evidence_text))
        total = 0
        for token in claim_tokens:
            if token in evidence_tokens:
                total += self.config.EXACT_MATCH_WEIGHT
            elif any(token in other or other in token for other in evidence_tokens):
                total += self.config.PARTIAL_MATCH_WEIGHT

        max_total = self.config.EXACT_MATCH_WEIGHT * len(claim_tokens)
        return min(1.0, total / max_total)
