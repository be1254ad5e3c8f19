from typing import Sequence
from config.constants import AGGREGATION_CONFIG, AggregationConfig


class EvidenceDensityScorer:
    """Calculates evidence density and the count bonus from the number of sources."""

    def __init__(self, config: AggregationConfig = AGGREGATION_CONFIG):
        self.config = config

    def score(self, evidence: Sequence) -> float:
        """
        Calculate evidence density from 0.0 to 1.0.

        Density reaches 1.0 once MAX_SOURCES_FOR_FULL_DENSITY items are present.
        """
        if not evidence:
            return 0.0
        return min(1.0, len(evidence) / self.config.MAX_SOURCES_FOR_FULL_DENSITY)

    def count_bonus(self, source_count: int) -> float:
        return min(self.config.COUNT_BONUS_CAP, self.config.COUNT_BONUS_PER_SOURCE * source_count)
