from typing import List
import httpx

from config import logger
from models.claims import Claim, ClaimCategory
from models.evidence import EvidenceResult
from models.sources import SourceKind
from .base import EvidenceAdapter

CUSTOM_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"
NUM_RESULTS = 5


class WebSearchAdapter(EvidenceAdapter):
    """General web results from the Google Custom Search JSON API."""

    kind = SourceKind.WEB_SEARCH
    requires_api_key = True

    @property
    def engine_id(self) -> str:
        return self.config.extra.get("engine_id", "")

    @property
    def enabled(self) -> bool:
        return super().enabled and bool(self.engine_id)

    async def _fetch(self, client: httpx.AsyncClient, claim: Claim, category: ClaimCategory) -> List[EvidenceResult]:
        params = {
            "key": self.config.api_key,
            "cx": self.engine_id,
            "q": claim.text,
            "num": NUM_RESULTS,
        }
        data = await self._get_json(client, CUSTOM_SEARCH_URL, params=params)
        items = data.get("items", []) if isinstance(data, dict) else []
        if not items:
            logger.info(f"Web search returned no results for: {claim.text[:80]}")
            return []

        return [
            self._make_result(
                title=item.get("title", ""),
                url=item.get("link"),
                content=item.get("snippet", ""),
                domain=(item.get("displayLink") or "").lower() or None,
            )
            for item in items
            if item.get("link")
        ]
