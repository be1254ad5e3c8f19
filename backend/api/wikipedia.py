import re
from typing import List
from urllib.parse import quote
import httpx

from config import logger
from config.patterns import COUNTRIES
from models.claims import Claim, ClaimCategory
from models.evidence import EvidenceResult
from models.sources import SourceKind
from .base import EvidenceAdapter

SUMMARY_URL = "https://en.wikipedia.org/api/rest_v1/page/summary/{title}"
MAX_SEARCH_TERMS = 5
MAX_LOOKUPS = 2

_PROPER_NOUN = re.compile(r"\b[A-Z][a-z]+\b")
_ENTITY = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+")
_YEAR = re.compile(r"\b\d{4}\b")
_NUMBER = re.compile(r"\b\d+(?:\.\d+)?\b")


def extract_search_terms(statement: str) -> List[str]:
    """
    Pick encyclopedia lookup terms from a statement.

    Multi-word entities rank first, then longer single terms; sentence-initial
    capitalized words are kept since they are often the subject.
    """
    terms: List[str] = []

    for entity in _ENTITY.findall(statement):
        if entity not in terms:
            terms.append(entity)
    for noun in _PROPER_NOUN.findall(statement):
        if noun not in terms:
            terms.append(noun)

    years = _YEAR.findall(statement)
    terms.extend(y for y in years if y not in terms)
    terms.extend(n for n in _NUMBER.findall(statement) if n not in years and n not in terms)

    for pattern, name, _code in COUNTRIES:
        match = pattern.search(statement)
        if match and match.group(0) not in terms and name.title() not in terms:
            terms.append(match.group(0))

    if "population" in statement.lower() and "population" not in terms:
        terms.append("population")

    unique_terms = [t for t in terms if len(t) >= 2]
    unique_terms.sort(key=lambda t: (len(t.split()), len(t)), reverse=True)
    return unique_terms[:MAX_SEARCH_TERMS]


class WikipediaAdapter(EvidenceAdapter):
    """Encyclopedic lookups against the Wikipedia REST summary endpoint."""

    kind = SourceKind.WIKIPEDIA

    async def _fetch(self, client: httpx.AsyncClient, claim: Claim, category: ClaimCategory) -> List[EvidenceResult]:
        terms = extract_search_terms(claim.text)
        if not terms:
            logger.info(f"No searchable terms found in claim: {claim.text[:80]}")
            return []

        results = []
        for term in terms[:MAX_LOOKUPS]:
            url = SUMMARY_URL.format(title=quote(term.replace(" ", "_"), safe=""))
            data = await self._get_json(client, url, allow_not_found=True)
            if not data or not isinstance(data, dict):
                logger.info(f"No Wikipedia article for term '{term}'")
                continue
            if data.get("type") == "disambiguation":
                logger.info(f"Skipping Wikipedia disambiguation page for '{term}'")
                continue

            extract = data.get("extract")
            if not extract:
                continue

            title = data.get("title", term)
            page_url = (
                data.get("content_urls", {}).get("desktop", {}).get("page")
                or f"https://en.wikipedia.org/wiki/{quote(title.replace(' ', '_'))}"
            )
            results.append(self._make_result(title=title, url=page_url, content=extract))

        return results
