from typing import Dict, List, Optional, Type

from config import Settings, get_settings
from models.sources import SourceKind
from .base import SourceAdapter, EvidenceAdapter
from .wikipedia import WikipediaAdapter
from .worldbank import WorldBankAdapter
from .factcheck import FactCheckAdapter
from .websearch import WebSearchAdapter
from .gemini import GeminiAnalysisAdapter

EVIDENCE_ADAPTER_TYPES: Dict[SourceKind, Type[EvidenceAdapter]] = {
    SourceKind.WIKIPEDIA: WikipediaAdapter,
    SourceKind.WORLD_BANK: WorldBankAdapter,
    SourceKind.FACT_CHECK: FactCheckAdapter,
    SourceKind.WEB_SEARCH: WebSearchAdapter,
}


def build_evidence_adapters(settings: Optional[Settings] = None) -> List[EvidenceAdapter]:
    """Instantiate every evidence adapter, in dispatch order, from settings."""
    settings = settings or get_settings()
    configs = settings.source_configs()
    return [adapter_type(configs[kind]) for kind, adapter_type in EVIDENCE_ADAPTER_TYPES.items()]


def build_analysis_adapter(settings: Optional[Settings] = None) -> GeminiAnalysisAdapter:
    settings = settings or get_settings()
    return GeminiAnalysisAdapter(settings.source_configs()[SourceKind.AI_ANALYSIS])


__all__ = [
    "SourceAdapter",
    "EvidenceAdapter",
    "WikipediaAdapter",
    "WorldBankAdapter",
    "FactCheckAdapter",
    "WebSearchAdapter",
    "GeminiAnalysisAdapter",
    "EVIDENCE_ADAPTER_TYPES",
    "build_evidence_adapters",
    "build_analysis_adapter",
]
