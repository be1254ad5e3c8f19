from typing import Sequence
from models.evidence import EvidenceResult


class CredibilityScorer:
    """Calculates average source credibility over a set of evidence."""

    def __init__(self, default: float = 0.0):
        """
        Initialize credibility scorer.

        Args:
            default: Value returned when there is no evidence
        """
        self.default = default

    def score(self, evidence: Sequence[EvidenceResult]) -> float:
        """
        Calculate mean credibility from 0.0 to 1.0.

        Args:
            evidence: Evidence items already annotated with a credibility weight

        Returns:
            Average credibility weight
        """
        if not evidence:
            return self.default
        return sum(item.credibility_weight for item in evidence) / len(evidence)
