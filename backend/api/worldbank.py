from typing import List, Optional, Tuple
import httpx

from config import logger
from config.patterns import (
    CLAIMED_MAGNITUDE_PATTERN,
    CLAIMED_PERCENT_PATTERN,
    COUNTRIES,
    INDICATORS,
    MAGNITUDE_MULTIPLIERS,
    PERCENT_INDICATORS,
    VALUE_MISMATCH_MARKER,
)
from exceptions import DataSourceException
from models.claims import Claim, ClaimCategory
from models.evidence import EvidenceResult
from models.sources import SourceKind
from utils.parsing import format_magnitude, parse_numeric_value
from .base import EvidenceAdapter

INDICATOR_URL = "https://api.worldbank.org/v2/country/{country}/indicator/{indicator}"
DATA_PAGE_URL = "https://data.worldbank.org/indicator/{indicator}?locations={iso2}"
# Relative gap between the claimed and reported figures still counted as a match
VALUE_TOLERANCE = 0.1


def extract_country(statement: str) -> Optional[Tuple[str, str]]:
    """Return (country name, ISO3 code) for the first known country mentioned."""
    for pattern, name, code in COUNTRIES:
        if pattern.search(statement):
            return name, code
    return None


def extract_indicator(statement: str) -> Optional[Tuple[str, str]]:
    lowered = statement.lower()
    for keyword, code in INDICATORS:
        if keyword in lowered:
            return keyword, code
    return None


def extract_claimed_value(statement: str, indicator_code: str) -> Optional[float]:
    """
    Return the figure a claim asserts for an indicator.

    Percentage indicators read "5%" or "5 percent"; all others need a magnitude
    word ("1.4 billion") so years and ordinals are never taken as the figure.
    """
    if indicator_code in PERCENT_INDICATORS:
        match = CLAIMED_PERCENT_PATTERN.search(statement)
        return parse_numeric_value(match.group(1)) if match else None

    match = CLAIMED_MAGNITUDE_PATTERN.search(statement)
    if not match:
        return None
    number = parse_numeric_value(match.group(1))
    if number is None:
        return None
    return number * MAGNITUDE_MULTIPLIERS[match.group(2).lower()]


def compare_with_claim(value: float, claimed: Optional[float]) -> str:
    if claimed is None:
        return ""
    if abs(value - claimed) <= VALUE_TOLERANCE * abs(value):
        return f" This matches the claimed {format_magnitude(claimed)}."
    return f" This {VALUE_MISMATCH_MARKER} {format_magnitude(claimed)}."


class WorldBankAdapter(EvidenceAdapter):
    """Statistical indicator lookups against the World Bank v2 API."""

    kind = SourceKind.WORLD_BANK
    categories = frozenset({ClaimCategory.DEMOGRAPHIC, ClaimCategory.ECONOMIC})

    async def _fetch(self, client: httpx.AsyncClient, claim: Claim, category: ClaimCategory) -> List[EvidenceResult]:
        country = extract_country(claim.text)
        indicator = extract_indicator(claim.text)
        if not country or not indicator:
            logger.info(f"No country or indicator found for World Bank lookup: {claim.text[:80]}")
            return []

        country_name, country_code = country
        _keyword, indicator_code = indicator
        claimed = extract_claimed_value(claim.text, indicator_code)
        url = INDICATOR_URL.format(country=country_code, indicator=indicator_code)
        payload = await self._get_json(client, url, params={"format": "json", "mrnev": 1})

        # Errors come back as a single-element list holding a "message" block
        if isinstance(payload, list) and payload and isinstance(payload[0], dict) and "message" in payload[0]:
            reason = "; ".join(m.get("value", "") for m in payload[0]["message"]) or "error payload"
            raise DataSourceException(self.source_id, reason)
        if not isinstance(payload, list) or len(payload) < 2 or not payload[1]:
            logger.info(f"World Bank returned no data for {country_code}/{indicator_code}")
            return []

        results = []
        for row in payload[1]:
            value = parse_numeric_value(row.get("value"))
            if value is None:
                continue
            indicator_name = row.get("indicator", {}).get("value", indicator_code)
            name = row.get("country", {}).get("value", country_name.title())
            iso2 = row.get("country", {}).get("id", "")
            year = row.get("date", "")
            content = (
                f"{indicator_name} for {name} in {year}: {value:,.2f} "
                f"({format_magnitude(value)}). Source: World Bank World Development Indicators."
                f"{compare_with_claim(value, claimed)}"
            )
            results.append(self._make_result(
                title=f"World Bank: {indicator_name} ({name}, {year})",
                url=DATA_PAGE_URL.format(indicator=indicator_code, iso2=iso2),
                content=content,
            ))
        return results
