from typing import List
import httpx

from config import logger
from models.claims import Claim, ClaimCategory
from models.evidence import EvidenceResult
from models.sources import SourceKind
from .base import EvidenceAdapter

CLAIMS_SEARCH_URL = "https://factchecktools.googleapis.com/v1alpha1/claims:search"
PAGE_SIZE = 5


class FactCheckAdapter(EvidenceAdapter):
    """Published fact-check reviews from the Google Fact Check Tools API."""

    kind = SourceKind.FACT_CHECK
    requires_api_key = True

    async def _fetch(self, client: httpx.AsyncClient, claim: Claim, category: ClaimCategory) -> List[EvidenceResult]:
        params = {
            "query": claim.text,
            "key": self.config.api_key,
            "languageCode": "en",
            "pageSize": PAGE_SIZE,
        }
        data = await self._get_json(client, CLAIMS_SEARCH_URL, params=params)
        claims = data.get("claims", []) if isinstance(data, dict) else []
        if not claims:
            logger.info(f"No published fact-checks for claim: {claim.text[:80]}")
            return []

        results = []
        for item in claims:
            reviewed_text = item.get("text", "")
            for review in item.get("claimReview", []) or []:
                url = review.get("url")
                if not url:
                    continue
                publisher = (review.get("publisher") or {}).get("name", "Unknown publisher")
                rating = review.get("textualRating", "Unrated")
                content = f"{publisher} rated the claim \"{reviewed_text}\" as: {rating}."
                results.append(self._make_result(
                    title=review.get("title") or f"{publisher} fact-check",
                    url=url,
                    content=content,
                ))
        return results
