from typing import Iterable, List, Optional, Sequence

from config import logger
from config.constants import AGGREGATION_CONFIG
from confidence import ConfidenceScorer
from models.claims import Claim
from models.evidence import ScoredEvidence
from models.verdicts import Analysis, SourceLink, Verdict
from .overrides import Override


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result


def _unique_links(evidence: Sequence[ScoredEvidence]) -> List[SourceLink]:
    seen = set()
    links = []
    for item in evidence:
        if item.url and item.url not in seen:
            seen.add(item.url)
            links.append(SourceLink(source=item.source_id, url=item.url))
    return links


class Aggregator:
    """Combines scored evidence, an optional analysis and an optional override into a Verdict."""

    def __init__(self, confidence_scorer: ConfidenceScorer = None, threshold: float = None):
        self.confidence_scorer = confidence_scorer or ConfidenceScorer()
        self.threshold = AGGREGATION_CONFIG.CONFIDENCE_THRESHOLD if threshold is None else threshold

    def aggregate(
        self,
        claim: Claim,
        scored: Sequence[ScoredEvidence],
        analysis: Optional[Analysis] = None,
        override: Optional[Override] = None
    ) -> Verdict:
        """
        Build the Verdict for one verification call.

        Without an analysis the deterministic heuristic is used. An override
        replaces confidence, issues, suggestions and explanation, while sources
        and links still come from the evidence.
        """
        if override is not None:
            confidence = override.confidence
            issues = list(override.issues)
            suggestions = list(override.suggestions)
            explanation = override.explanation
        else:
            analysis = analysis or self.confidence_scorer.heuristic_analysis(scored)
            confidence = self.confidence_scorer.final_confidence(analysis, scored)
            issues = analysis.issues
            suggestions = analysis.suggestions
            explanation = analysis.explanation

        issues = _unique(issues)
        verdict = Verdict(
            confidence=confidence,
            has_issues=bool(issues) or confidence < self.threshold,
            issues=tuple(issues),
            suggestions=tuple(_unique(suggestions)),
            sources=tuple(_unique(item.source_id for item in scored)),
            source_links=tuple(_unique_links(scored)),
            explanation=explanation,
            source_count=len(scored),
            status=self.confidence_scorer.get_status(confidence, issues),
        )
        logger.info(
            f"Aggregated verdict for '{claim.text[:80]}': confidence={verdict.confidence}, "
            f"status={verdict.status.value}, sources={len(verdict.sources)}"
        )
        return verdict
