from typing import Sequence
from config import logger
from config.constants import AGGREGATION_CONFIG, AggregationConfig
from config.patterns import DISPUTE_MARKERS, OBVIOUS_INACCURACY_ISSUE
from models.evidence import ScoredEvidence
from models.verdicts import Analysis, FactStatus
from .credibility_scorer import CredibilityScorer
from .density_scorer import EvidenceDensityScorer

LIMITED_EVIDENCE_ISSUE = "Limited relevant evidence found"
DISPUTED_ISSUE = "Information may be disputed or debated"


class ConfidenceScorer:
    def __init__(
        self,
        credibility_scorer: CredibilityScorer = None,
        density_scorer: EvidenceDensityScorer = None,
        config: AggregationConfig = AGGREGATION_CONFIG
    ):
        self.credibility_scorer = credibility_scorer or CredibilityScorer()
        self.density_scorer = density_scorer or EvidenceDensityScorer(config)
        self.config = config

    def heuristic_analysis(self, scored: Sequence[ScoredEvidence]) -> Analysis:
        """
        Judge a claim from its scored evidence alone, without an AI adapter.

        Accuracy follows the first matching rule: two or more strong overall
        sources, then a high-quality source with at least two relevant ones,
        then any relevant source, else the base accuracy.
        """
        n = len(scored)
        avg_credibility = self.credibility_scorer.score(scored)
        avg_relevance = sum(s.relevance_score for s in scored) / n if n else 0.0
        avg_overall = sum(s.overall_score for s in scored) / n if n else 0.0

        high_quality = [s for s in scored if s.credibility_weight >= self.config.HIGH_QUALITY_CREDIBILITY]
        relevant = [s for s in scored if s.relevance_score >= self.config.RELEVANT_THRESHOLD]
        high_overall = [s for s in scored if s.overall_score >= self.config.HIGH_OVERALL_THRESHOLD]

        if len(high_overall) >= 2:
            accuracy = min(0.9, 0.5 + 0.4 * avg_overall)
        elif high_quality and len(relevant) >= 2:
            accuracy = min(0.8, 0.4 + 0.3 * avg_credibility + 0.2 * avg_relevance)
        elif relevant:
            accuracy = min(0.7, 0.35 + 0.3 * avg_relevance)
        else:
            accuracy = self.config.BASE_ACCURACY

        confidence = min(
            self.config.MAX_HEURISTIC_CONFIDENCE,
            0.8 * avg_credibility + 0.2 * self.density_scorer.score(scored)
        )

        issues = []
        if not relevant:
            issues.append(LIMITED_EVIDENCE_ISSUE)
        if any(marker in s.content.lower() for s in relevant for marker in DISPUTE_MARKERS):
            issues.append(DISPUTED_ISSUE)

        if issues:
            suggestions = ["Verify with additional sources"]
        else:
            suggestions = ["Information appears to be accurate"]

        explanation = (
            f"Based on {n} source(s) with average credibility {avg_credibility:.2f} "
            f"and average relevance {avg_relevance:.2f}."
        )
        logger.info(
            f"Heuristic analysis: accuracy={accuracy:.2f}, confidence={confidence:.2f}, "
            f"high_quality={len(high_quality)}, relevant={len(relevant)}, high_overall={len(high_overall)}"
        )
        return Analysis(
            accuracy=round(accuracy, 4),
            confidence=round(confidence, 4),
            issues=issues,
            suggestions=suggestions,
            explanation=explanation,
        )

    def final_confidence(self, analysis: Analysis, scored: Sequence[ScoredEvidence]) -> float:
        """Blend analysis accuracy/confidence with evidence count and credibility bonuses."""
        avg_credibility = self.credibility_scorer.score(scored)
        count_bonus = self.density_scorer.count_bonus(len(scored))
        credibility_bonus = min(
            self.config.CREDIBILITY_BONUS_CAP,
            self.config.CREDIBILITY_BONUS_WEIGHT * avg_credibility
        )
        final = (
            self.config.ACCURACY_WEIGHT * analysis.accuracy
            + self.config.CONFIDENCE_WEIGHT * analysis.confidence
            + count_bonus
            + credibility_bonus
        )
        return round(max(0.0, min(self.config.MAX_FINAL_CONFIDENCE, final)), 2)

    def get_status(self, confidence: float, issues: Sequence[str]) -> FactStatus:
        if OBVIOUS_INACCURACY_ISSUE in issues:
            return FactStatus.INACCURATE
        if confidence >= self.config.ACCURATE_THRESHOLD:
            return FactStatus.MIXED if issues else FactStatus.ACCURATE
        if confidence >= self.config.LIKELY_ACCURATE_THRESHOLD:
            return FactStatus.LIKELY_ACCURATE
        return FactStatus.UNVERIFIED
