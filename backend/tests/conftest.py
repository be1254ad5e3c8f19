import asyncio
import pytest
import os
import sys
from pathlib import Path
from typing import List, Optional
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent))

from api.base import EvidenceAdapter
from config.settings import SourceConfig
from models.evidence import EvidenceResult
from models.sources import SourceKind


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Keep tests off real providers regardless of the developer's environment."""
    env_vars = {
        "FACT_CHECK_ENABLED": "false",
        "WEB_SEARCH_ENABLED": "false",
        "GEMINI_ENABLED": "false",
        "GEMINI_MODEL": "gemini-2.5-flash",
    }
    previous = {key: os.environ.get(key) for key in env_vars}
    for key, value in env_vars.items():
        os.environ[key] = value
    yield
    for key, value in previous.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Enable every source with fake credentials."""
    env_vars = {
        "FACT_CHECK_ENABLED": "true",
        "FACT_CHECK_API_KEY": "test_fact_check_key",
        "WEB_SEARCH_ENABLED": "true",
        "WEB_SEARCH_API_KEY": "test_search_key",
        "WEB_SEARCH_ENGINE_ID": "test_engine",
        "GEMINI_ENABLED": "true",
        "GEMINI_API_KEY": "test_gemini_key",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


class FakeAdapter(EvidenceAdapter):
    """In-memory adapter returning canned evidence, counting its calls."""

    def __init__(
        self,
        kind: SourceKind = SourceKind.WIKIPEDIA,
        results: Optional[List[EvidenceResult]] = None,
        enabled: bool = True,
        categories=None,
        delay: float = 0.0
    ):
        super().__init__(SourceConfig(enabled=enabled, timeout=5.0))
        self.kind = kind
        self.categories = categories
        self.results = results or []
        self.delay = delay
        self.calls = []

    async def query(self, claim, category):
        self.calls.append((claim, category))
        if self.delay:
            await asyncio.sleep(self.delay)
        return list(self.results)

    async def _fetch(self, client, claim, category):
        return list(self.results)


def make_evidence(
    title: str = "Stanford University",
    content: str = "",
    url: Optional[str] = "https://en.wikipedia.org/wiki/Stanford_University",
    domain: str = "en.wikipedia.org",
    credibility: float = 0.8,
    source_id: str = "wikipedia",
) -> EvidenceResult:
    return EvidenceResult(
        source_id=source_id,
        title=title,
        url=url,
        content=content,
        domain=domain,
        credibility_weight=credibility,
    )


@pytest.fixture
def fake_adapter_factory():
    return FakeAdapter


@pytest.fixture
def evidence_factory():
    return make_evidence


@pytest.fixture
def stanford_evidence():
    return make_evidence(
        content=(
            "Stanford University, officially Leland Stanford Junior University, is a private "
            "research university in Stanford, California. It was founded in 1885 by Leland "
            "Stanford and his wife, Jane Stanford."
        ),
    )


@pytest.fixture
def mock_httpx_client():
    """Mock httpx.AsyncClient for API calls."""
    mock_client = MagicMock()
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.raise_for_status = MagicMock()
    mock_client.get = AsyncMock(return_value=mock_response)
    mock_client.post = AsyncMock(return_value=mock_response)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


@pytest.fixture
def test_client():
    """Create a TestClient for FastAPI app."""
    import main
    return TestClient(main.app)


@pytest.fixture
def sample_wikipedia_response():
    return {
        "type": "standard",
        "title": "Stanford University",
        "extract": (
            "Stanford University is a private research university in Stanford, California. "
            "It was founded in 1885 by Leland and Jane Stanford."
        ),
        "content_urls": {
            "desktop": {"page": "https://en.wikipedia.org/wiki/Stanford_University"}
        },
    }


@pytest.fixture
def sample_world_bank_response():
    return [
        {"page": 1, "pages": 1, "per_page": 50, "total": 1},
        [
            {
                "indicator": {"id": "SP.POP.TOTL", "value": "Population, total"},
                "country": {"id": "IN", "value": "India"},
                "countryiso3code": "IND",
                "date": "2023",
                "value": 1428627663,
            }
        ],
    ]


@pytest.fixture
def sample_fact_check_response():
    return {
        "claims": [
            {
                "text": "The Great Wall of China is visible from space",
                "claimReview": [
                    {
                        "publisher": {"name": "Snopes", "site": "snopes.com"},
                        "url": "https://www.snopes.com/fact-check/great-wall-from-space/",
                        "title": "Is the Great Wall of China Visible from Space?",
                        "textualRating": "False",
                    }
                ],
            }
        ]
    }


@pytest.fixture
def sample_web_search_response():
    return {
        "items": [
            {
                "title": "Stanford History",
                "link": "https://www.stanford.edu/about/history/",
                "snippet": "Stanford was founded in 1885 by Leland and Jane Stanford.",
                "displayLink": "www.stanford.edu",
            },
            {"title": "No link result", "snippet": "dropped"},
        ]
    }


@pytest.fixture
def sample_gemini_response():
    """Sample Gemini API response."""
    return {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {
                            "text": '{"accuracy": 0.9, "confidence": 0.8, "issues": [], '
                                    '"suggestions": ["Information appears to be accurate"], '
                                    '"explanation": "Wikipedia confirms the 1885 founding."}'
                        }
                    ]
                }
            }
        ]
    }

