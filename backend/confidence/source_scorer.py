from dataclasses import asdict
from typing import List, Sequence, Optional

from config import logger
from config.constants import SCORING_CONFIG, ScoringConfig
from models.claims import Claim
from models.evidence import EvidenceResult, ScoredEvidence
from .relevance_scorer import RelevanceScorer


class SourceScorer:
    """Scores evidence against a claim, removes duplicates and keeps the best items."""

    def __init__(
        self,
        relevance_scorer: RelevanceScorer = None,
        config: ScoringConfig = SCORING_CONFIG,
        max_items: Optional[int] = None
    ):
        self.relevance_scorer = relevance_scorer or RelevanceScorer(config)
        self.config = config
        self.max_items = max_items or config.MAX_EVIDENCE_ITEMS

    def score(self, claim: Claim, evidence: EvidenceResult) -> ScoredEvidence:
        relevance = self.relevance_scorer.score(claim.text, f"{evidence.title} {evidence.content}")
        overall = (
            relevance * self.config.RELEVANCE_WEIGHT
            + evidence.credibility_weight * self.config.CREDIBILITY_WEIGHT
        )
        return ScoredEvidence(
            **asdict(evidence),
            relevance_score=round(relevance, 4),
            overall_score=round(min(1.0, overall), 4),
        )

    @staticmethod
    def dedupe(evidence: Sequence[EvidenceResult]) -> List[EvidenceResult]:
        """Drop items whose (domain, title) was already seen, case-insensitively."""
        seen = set()
        unique = []
        for item in evidence:
            key = (item.domain.lower(), item.title.lower())
            if key in seen:
                continue
            seen.add(key)
            unique.append(item)
        return unique

    def score_all(self, claim: Claim, evidence: Sequence[EvidenceResult]) -> List[ScoredEvidence]:
        """Dedupe, score and rank evidence by relevance x credibility, truncated to max_items."""
        unique = self.dedupe(evidence)
        scored = [self.score(claim, item) for item in unique]
        ranked = sorted(scored, key=lambda s: s.rank_score, reverse=True)
        kept = ranked[:self.max_items]
        logger.info(
            f"Scored {len(evidence)} evidence items ({len(unique)} unique), kept {len(kept)} "
            f"for claim: {claim.text[:80]}"
        )
        return kept

    def merge(self, ranked_lists: Sequence[Sequence[ScoredEvidence]]) -> List[ScoredEvidence]:
        """Combine per-claim rankings, keeping the best-ranked copy of each duplicate."""
        combined = sorted(
            (item for ranked in ranked_lists for item in ranked),
            key=lambda s: s.rank_score,
            reverse=True
        )
        return self.dedupe(combined)[:self.max_items]
