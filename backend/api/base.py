import asyncio
import json
from abc import ABC, abstractmethod
from typing import FrozenSet, List, Optional
from urllib.parse import urlparse
import httpx

from config import SourceConfig, logger
from config.constants import SOURCE_WEIGHTS, DomainCredibilityTable
from exceptions import DataSourceException, RateLimitException
from utils.retry import async_retry
from models.claims import Claim, ClaimCategory
from models.evidence import EvidenceResult
from models.sources import SourceKind

class SourceAdapter(ABC):
    """Configuration, enablement and credibility lookup shared by every provider."""

    kind: SourceKind
    requires_api_key: bool = False
    # None means the adapter is general-purpose
    categories: Optional[FrozenSet[ClaimCategory]] = None

    def __init__(self, config: SourceConfig, weights: DomainCredibilityTable = SOURCE_WEIGHTS):
        self.config = config
        self.weights = weights

    @property
    def source_id(self) -> str:
        return self.kind.value

    @property
    def enabled(self) -> bool:
        if not self.config.enabled:
            return False
        if self.requires_api_key and not self.config.api_key:
            return False
        return True

    def supports(self, category: ClaimCategory) -> bool:
        return self.categories is None or category in self.categories

    def credibility_for(self, domain: str) -> float:
        return self.weights.get_weight_for_domain(domain)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.config.timeout)

class EvidenceAdapter(SourceAdapter):
    """
    Uniform evidence interface: query(claim, category) -> [EvidenceResult].

    query never raises for provider problems; timeouts, HTTP errors and
    malformed payloads are logged and turned into an empty list.
    """

    async def query(self, claim: Claim, category: ClaimCategory) -> List[EvidenceResult]:
        if not self.enabled:
            logger.debug(f"{self.source_id} is disabled, skipping")
            return []

        try:
            async with self._client() as client:
                return await asyncio.wait_for(
                    self._fetch(client, claim, category),
                    timeout=self.config.timeout
                )
        except asyncio.TimeoutError:
            logger.warning(f"{self.source_id} timed out after {self.config.timeout}s")
        except httpx.HTTPStatusError as e:
            logger.error("%s HTTP error %s: %s", self.source_id, e.response.status_code, e.response.text[:200])
        except httpx.RequestError as e:
            logger.error("%s request error: %s", self.source_id, str(e))
        except json.JSONDecodeError:
            logger.error("%s returned invalid JSON", self.source_id)
        except (RateLimitException, DataSourceException) as e:
            logger.warning(e.message, extra=e.details)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error("%s returned a malformed payload: %s", self.source_id, e)
        return []

    @abstractmethod
    async def _fetch(
        self,
        client: httpx.AsyncClient,
        claim: Claim,
        category: ClaimCategory
    ) -> List[EvidenceResult]:
        """Issue the provider call(s) and map the payload to evidence."""

    @async_retry(max_attempts=2, base_delay=0.25, exceptions=(httpx.TransportError,))
    async def _get_json(self, client: httpx.AsyncClient, url: str, params: Optional[dict] = None, allow_not_found: bool = False):
        r = await client.get(url, params=params)
        if allow_not_found and r.status_code == 404:
            return None
        if r.status_code == 429:
            raise RateLimitException(self.source_id, self.config.max_per_minute)
        r.raise_for_status()
        return r.json()

    def _make_result(self, title: str, url: Optional[str], content: str, domain: Optional[str] = None) -> EvidenceResult:
        if domain is None:
            domain = urlparse(url).netloc.lower() if url else ""
        return EvidenceResult(
            source_id=self.source_id,
            title=(title or "").strip(),
            url=url or None,
            content=(content or "").strip(),
            domain=domain,
            credibility_weight=self.credibility_for(domain),
        )
