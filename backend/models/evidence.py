from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EvidenceResult:
    """One item of evidence returned by an adapter."""
    source_id: str
    title: str
    url: Optional[str]
    content: str
    domain: str
    credibility_weight: float


@dataclass(frozen=True)
class ScoredEvidence(EvidenceResult):
    relevance_score: float = 0.0
    overall_score: float = 0.0

    @property
    def rank_score(self) -> float:
        return self.relevance_score * self.credibility_weight
