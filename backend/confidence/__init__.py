from .confidence_scorer import ConfidenceScorer
from .credibility_scorer import CredibilityScorer
from .density_scorer import EvidenceDensityScorer
from .relevance_scorer import RelevanceScorer
from .source_scorer import SourceScorer

__all__ = [
    "ConfidenceScorer",
    "CredibilityScorer",
    "EvidenceDensityScorer",
    "RelevanceScorer",
    "SourceScorer",
]
