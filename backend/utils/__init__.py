from .parsing import extract_json_block, parse_numeric_value, format_magnitude
from .rate_limiter import SourceRateLimiter, RateWindow
from .cache import ResultCache, CacheEntry

__all__ = [
    "extract_json_block",
    "parse_numeric_value",
    "format_magnitude",
    "SourceRateLimiter",
    "RateWindow",
    "ResultCache",
    "CacheEntry",
]
