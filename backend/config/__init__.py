import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

from .constants import (
    SCORING_CONFIG,
    AGGREGATION_CONFIG,
    DEFAULT_VERDICTS,
    OVERRIDE_CONFIG,
    SOURCE_WEIGHTS,
    API_TIMEOUTS,
    CACHE_CONFIG,
)
from .settings import Settings, SourceConfig, get_settings


def check_api_keys_on_startup(settings: Settings = None):
    """Log which evidence sources are usable with the current configuration."""
    settings = settings or get_settings()
    disabled = []
    missing_keys = []
    for kind, config in settings.source_configs().items():
        if not config.enabled:
            disabled.append(kind.value)
        elif config.requires_key and not config.api_key:
            missing_keys.append(kind.value)

    if missing_keys:
        logger.warning(f"Sources enabled but missing API keys (treated as disabled): {', '.join(missing_keys)}")
    if disabled:
        logger.info(f"Sources disabled by configuration: {', '.join(disabled)}")
    if not missing_keys:
        logger.info("All enabled sources are configured.")


__all__ = [
    "logger",
    "Settings",
    "SourceConfig",
    "get_settings",
    "check_api_keys_on_startup",
    "SCORING_CONFIG",
    "AGGREGATION_CONFIG",
    "DEFAULT_VERDICTS",
    "OVERRIDE_CONFIG",
    "SOURCE_WEIGHTS",
    "API_TIMEOUTS",
    "CACHE_CONFIG",
]
