from enum import Enum


class SourceKind(str, Enum):
    """Closed set of evidence providers the pipeline knows how to dispatch."""
    WIKIPEDIA = "wikipedia"
    WORLD_BANK = "world_bank"
    FACT_CHECK = "fact_check"
    WEB_SEARCH = "web_search"
    AI_ANALYSIS = "ai_analysis"
