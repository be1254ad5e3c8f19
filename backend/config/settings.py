from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from models.sources import SourceKind
from .constants import API_TIMEOUTS, CACHE_CONFIG, RATE_LIMITS_PER_MINUTE, SCORING_CONFIG, AGGREGATION_CONFIG


@dataclass(frozen=True)
class SourceConfig:
    """Per-source configuration consumed by an adapter."""
    enabled: bool = True
    api_key: Optional[str] = None
    max_per_minute: int = 60
    timeout: float = 10.0
    requires_key: bool = False
    extra: Dict[str, str] = field(default_factory=dict)


class Settings(BaseSettings):
    """Loads all environment variables into a single, accessible object."""
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    WIKIPEDIA_ENABLED: bool = True
    WIKIPEDIA_MAX_PER_MINUTE: int = RATE_LIMITS_PER_MINUTE.WIKIPEDIA
    WIKIPEDIA_TIMEOUT: float = API_TIMEOUTS.WIKIPEDIA

    WORLD_BANK_ENABLED: bool = True
    WORLD_BANK_MAX_PER_MINUTE: int = RATE_LIMITS_PER_MINUTE.WORLD_BANK
    WORLD_BANK_TIMEOUT: float = API_TIMEOUTS.WORLD_BANK

    FACT_CHECK_ENABLED: bool = True
    FACT_CHECK_API_KEY: Optional[str] = None
    FACT_CHECK_MAX_PER_MINUTE: int = RATE_LIMITS_PER_MINUTE.FACT_CHECK
    FACT_CHECK_TIMEOUT: float = API_TIMEOUTS.FACT_CHECK

    WEB_SEARCH_ENABLED: bool = False
    WEB_SEARCH_API_KEY: Optional[str] = None
    WEB_SEARCH_ENGINE_ID: Optional[str] = None
    WEB_SEARCH_MAX_PER_MINUTE: int = RATE_LIMITS_PER_MINUTE.WEB_SEARCH
    WEB_SEARCH_TIMEOUT: float = API_TIMEOUTS.WEB_SEARCH

    GEMINI_ENABLED: bool = False
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com"
    GEMINI_MAX_PER_MINUTE: int = RATE_LIMITS_PER_MINUTE.AI_ANALYSIS
    GEMINI_TIMEOUT: float = API_TIMEOUTS.AI_ANALYSIS

    CACHE_TTL_SECONDS: float = CACHE_CONFIG.TTL_SECONDS
    CACHE_MAX_ENTRIES: int = CACHE_CONFIG.MAX_ENTRIES
    PIPELINE_TIMEOUT: float = API_TIMEOUTS.PIPELINE
    CONFIDENCE_THRESHOLD: float = AGGREGATION_CONFIG.CONFIDENCE_THRESHOLD
    MAX_EVIDENCE_ITEMS: int = SCORING_CONFIG.MAX_EVIDENCE_ITEMS

    @property
    def GEMINI_ENDPOINT(self) -> str:
        return f"{self.GEMINI_BASE_URL}/v1beta/models/{self.GEMINI_MODEL}:generateContent"

    def source_configs(self) -> Dict[SourceKind, SourceConfig]:
        return {
            SourceKind.WIKIPEDIA: SourceConfig(
                enabled=self.WIKIPEDIA_ENABLED,
                max_per_minute=self.WIKIPEDIA_MAX_PER_MINUTE,
                timeout=self.WIKIPEDIA_TIMEOUT,
            ),
            SourceKind.WORLD_BANK: SourceConfig(
                enabled=self.WORLD_BANK_ENABLED,
                max_per_minute=self.WORLD_BANK_MAX_PER_MINUTE,
                timeout=self.WORLD_BANK_TIMEOUT,
            ),
            SourceKind.FACT_CHECK: SourceConfig(
                enabled=self.FACT_CHECK_ENABLED,
                api_key=self.FACT_CHECK_API_KEY,
                max_per_minute=self.FACT_CHECK_MAX_PER_MINUTE,
                timeout=self.FACT_CHECK_TIMEOUT,
                requires_key=True,
            ),
            SourceKind.WEB_SEARCH: SourceConfig(
                enabled=self.WEB_SEARCH_ENABLED and bool(self.WEB_SEARCH_ENGINE_ID),
                api_key=self.WEB_SEARCH_API_KEY,
                max_per_minute=self.WEB_SEARCH_MAX_PER_MINUTE,
                timeout=self.WEB_SEARCH_TIMEOUT,
                requires_key=True,
                extra={"engine_id": self.WEB_SEARCH_ENGINE_ID or ""},
            ),
            SourceKind.AI_ANALYSIS: SourceConfig(
                enabled=self.GEMINI_ENABLED,
                api_key=self.GEMINI_API_KEY,
                max_per_minute=self.GEMINI_MAX_PER_MINUTE,
                timeout=self.GEMINI_TIMEOUT,
                requires_key=True,
                extra={"endpoint": self.GEMINI_ENDPOINT},
            ),
        }

    def rate_limits(self) -> Dict[str, int]:
        return {kind.value: config.max_per_minute for kind, config in self.source_configs().items()}


@lru_cache()
def get_settings() -> Settings:
    return Settings()
