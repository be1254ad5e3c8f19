import pytest
import httpx
from unittest.mock import AsyncMock, MagicMock, patch

from api import (
    FactCheckAdapter,
    GeminiAnalysisAdapter,
    WebSearchAdapter,
    WikipediaAdapter,
    WorldBankAdapter,
    build_evidence_adapters,
)
from api.wikipedia import extract_search_terms
from api.worldbank import extract_claimed_value, extract_country, extract_indicator
from config.settings import Settings, SourceConfig
from models.claims import Claim, ClaimCategory
from models.evidence import ScoredEvidence
from models.sources import SourceKind

STANFORD = Claim(
    text="Stanford University was founded in 1885 by Leland Stanford",
    category=ClaimCategory.INSTITUTIONAL,
)
INDIA = Claim(text="The population of India is 1.4 billion", category=ClaimCategory.DEMOGRAPHIC)


class TestSearchTermExtraction:
    def test_entities_rank_first(self):
        terms = extract_search_terms(STANFORD.text)
        assert terms[:2] == ["Stanford University", "Leland Stanford"]
        assert len(terms) <= 5

    def test_includes_years_and_population(self):
        terms = extract_search_terms("the population grew in 1990")
        assert "1990" in terms
        assert "population" in terms

    def test_country_and_indicator(self):
        assert extract_country(INDIA.text) == ("india", "IND")
        assert extract_indicator(INDIA.text) == ("population", "SP.POP.TOTL")
        assert extract_country("The moon is bright") is None

    def test_claimed_value_needs_magnitude_or_percent(self):
        assert extract_claimed_value(INDIA.text, "SP.POP.TOTL") == pytest.approx(1.4e9)
        assert extract_claimed_value("China has 1,400 million residents", "SP.POP.TOTL") == pytest.approx(1.4e9)
        assert extract_claimed_value("The population of India in 2023", "SP.POP.TOTL") is None
        assert extract_claimed_value("Unemployment in Canada is 5.4%", "SL.UEM.TOTL.ZS") == pytest.approx(5.4)
        assert extract_claimed_value("Unemployment in Canada is 5.4 million", "SL.UEM.TOTL.ZS") is None


@pytest.mark.asyncio
class TestWikipediaAdapter:
    async def test_successful_query(self, mock_httpx_client, sample_wikipedia_response):
        adapter = WikipediaAdapter(SourceConfig(timeout=5.0))
        mock_httpx_client.get.return_value.json.return_value = sample_wikipedia_response

        with patch("api.base.httpx.AsyncClient", return_value=mock_httpx_client):
            results = await adapter.query(STANFORD, ClaimCategory.INSTITUTIONAL)

        assert mock_httpx_client.get.call_count == 2
        first_url = mock_httpx_client.get.call_args_list[0].args[0]
        assert first_url.endswith("/page/summary/Stanford_University")
        assert results[0].title == "Stanford University"
        assert results[0].url == "https://en.wikipedia.org/wiki/Stanford_University"
        assert results[0].domain == "en.wikipedia.org"
        assert results[0].credibility_weight == 0.8
        assert results[0].source_id == "wikipedia"

    async def test_disambiguation_skipped(self, mock_httpx_client):
        adapter = WikipediaAdapter(SourceConfig())
        mock_httpx_client.get.return_value.json.return_value = {"type": "disambiguation", "extract": "may refer to"}

        with patch("api.base.httpx.AsyncClient", return_value=mock_httpx_client):
            results = await adapter.query(STANFORD, ClaimCategory.INSTITUTIONAL)

        assert results == []

    async def test_not_found_returns_empty(self, mock_httpx_client):
        adapter = WikipediaAdapter(SourceConfig())
        mock_httpx_client.get.return_value.status_code = 404

        with patch("api.base.httpx.AsyncClient", return_value=mock_httpx_client):
            results = await adapter.query(STANFORD, ClaimCategory.INSTITUTIONAL)

        assert results == []

    async def test_http_error_returns_empty(self, mock_httpx_client):
        adapter = WikipediaAdapter(SourceConfig())
        mock_response = mock_httpx_client.get.return_value
        mock_response.status_code = 500
        mock_response.text = "Internal Server Error"
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Server error", request=MagicMock(), response=mock_response
        )

        with patch("api.base.httpx.AsyncClient", return_value=mock_httpx_client):
            results = await adapter.query(STANFORD, ClaimCategory.INSTITUTIONAL)

        assert results == []

    async def test_provider_rate_limit_absorbed(self, mock_httpx_client):
        adapter = WikipediaAdapter(SourceConfig(max_per_minute=200))
        mock_httpx_client.get.return_value.status_code = 429

        with patch("api.base.httpx.AsyncClient", return_value=mock_httpx_client):
            results = await adapter.query(STANFORD, ClaimCategory.INSTITUTIONAL)

        assert results == []
        assert mock_httpx_client.get.call_count == 1

    async def test_transport_error_is_retried_then_absorbed(self, mock_httpx_client):
        adapter = WikipediaAdapter(SourceConfig())
        mock_httpx_client.get.side_effect = httpx.ConnectError("Connection refused")

        with patch("api.base.httpx.AsyncClient", return_value=mock_httpx_client), \
                patch("utils.retry.asyncio.sleep", new=AsyncMock()):
            results = await adapter.query(STANFORD, ClaimCategory.INSTITUTIONAL)

        assert results == []
        assert mock_httpx_client.get.call_count == 2

    async def test_disabled_makes_no_call(self):
        adapter = WikipediaAdapter(SourceConfig(enabled=False))

        with patch("api.base.httpx.AsyncClient") as mock_client_class:
            results = await adapter.query(STANFORD, ClaimCategory.INSTITUTIONAL)

        assert results == []
        mock_client_class.assert_not_called()


@pytest.mark.asyncio
class TestWorldBankAdapter:
    async def test_successful_query(self, mock_httpx_client, sample_world_bank_response):
        adapter = WorldBankAdapter(SourceConfig())
        mock_httpx_client.get.return_value.json.return_value = sample_world_bank_response

        with patch("api.base.httpx.AsyncClient", return_value=mock_httpx_client):
            results = await adapter.query(INDIA, ClaimCategory.DEMOGRAPHIC)

        url = mock_httpx_client.get.call_args.args[0]
        assert url == "https://api.worldbank.org/v2/country/IND/indicator/SP.POP.TOTL"
        assert len(results) == 1
        assert "1.43 billion" in results[0].content
        assert results[0].domain == "data.worldbank.org"
        assert results[0].credibility_weight == 0.95
        assert "This matches the claimed 1.40 billion." in results[0].content
        assert "differs" not in results[0].content

    async def test_mismatched_figure_noted(self, mock_httpx_client, sample_world_bank_response):
        adapter = WorldBankAdapter(SourceConfig())
        mock_httpx_client.get.return_value.json.return_value = sample_world_bank_response
        claim = Claim(text="The population of India is 3 billion", category=ClaimCategory.DEMOGRAPHIC)

        with patch("api.base.httpx.AsyncClient", return_value=mock_httpx_client):
            results = await adapter.query(claim, ClaimCategory.DEMOGRAPHIC)

        assert "This differs from the claimed 3.00 billion." in results[0].content

    async def test_no_claimed_figure_adds_no_comparison(self, mock_httpx_client, sample_world_bank_response):
        adapter = WorldBankAdapter(SourceConfig())
        mock_httpx_client.get.return_value.json.return_value = sample_world_bank_response
        claim = Claim(text="India reported its population in 2023", category=ClaimCategory.DEMOGRAPHIC)

        with patch("api.base.httpx.AsyncClient", return_value=mock_httpx_client):
            results = await adapter.query(claim, ClaimCategory.DEMOGRAPHIC)

        assert results[0].content.endswith("Source: World Bank World Development Indicators.")

    async def test_error_payload_returns_empty(self, mock_httpx_client):
        adapter = WorldBankAdapter(SourceConfig())
        mock_httpx_client.get.return_value.json.return_value = [{"message": [{"id": "120", "value": "Invalid value"}]}]

        with patch("api.base.httpx.AsyncClient", return_value=mock_httpx_client):
            results = await adapter.query(INDIA, ClaimCategory.DEMOGRAPHIC)

        assert results == []

    async def test_malformed_rows_absorbed(self, mock_httpx_client):
        adapter = WorldBankAdapter(SourceConfig())
        mock_httpx_client.get.return_value.json.return_value = [{}, ["not-a-row"]]

        with patch("api.base.httpx.AsyncClient", return_value=mock_httpx_client):
            results = await adapter.query(INDIA, ClaimCategory.DEMOGRAPHIC)

        assert results == []

    async def test_no_country_skips_call(self, mock_httpx_client):
        adapter = WorldBankAdapter(SourceConfig())
        claim = Claim(text="The population grew by 3 million", category=ClaimCategory.DEMOGRAPHIC)

        with patch("api.base.httpx.AsyncClient", return_value=mock_httpx_client):
            results = await adapter.query(claim, ClaimCategory.DEMOGRAPHIC)

        assert results == []
        mock_httpx_client.get.assert_not_called()


@pytest.mark.asyncio
class TestFactCheckAdapter:
    async def test_successful_query(self, mock_httpx_client, sample_fact_check_response):
        adapter = FactCheckAdapter(SourceConfig(api_key="test_key", requires_key=True))
        mock_httpx_client.get.return_value.json.return_value = sample_fact_check_response
        claim = Claim(text="The Great Wall of China is visible from space")

        with patch("api.base.httpx.AsyncClient", return_value=mock_httpx_client):
            results = await adapter.query(claim, ClaimCategory.GENERAL)

        params = mock_httpx_client.get.call_args.kwargs["params"]
        assert params["key"] == "test_key"
        assert params["query"] == claim.text
        assert len(results) == 1
        assert "rated the claim" in results[0].content
        assert "False" in results[0].content
        assert results[0].credibility_weight == 0.9

    async def test_missing_key_disables(self):
        adapter = FactCheckAdapter(SourceConfig(api_key=None, requires_key=True))
        assert not adapter.enabled

        with patch("api.base.httpx.AsyncClient") as mock_client_class:
            results = await adapter.query(STANFORD, ClaimCategory.GENERAL)

        assert results == []
        mock_client_class.assert_not_called()


@pytest.mark.asyncio
class TestWebSearchAdapter:
    async def test_successful_query(self, mock_httpx_client, sample_web_search_response):
        config = SourceConfig(api_key="test_key", requires_key=True, extra={"engine_id": "engine"})
        adapter = WebSearchAdapter(config)
        mock_httpx_client.get.return_value.json.return_value = sample_web_search_response

        with patch("api.base.httpx.AsyncClient", return_value=mock_httpx_client):
            results = await adapter.query(STANFORD, ClaimCategory.INSTITUTIONAL)

        assert mock_httpx_client.get.call_args.kwargs["params"]["cx"] == "engine"
        assert len(results) == 1
        assert results[0].domain == "www.stanford.edu"
        assert results[0].credibility_weight == 0.85


def make_scored(content: str) -> ScoredEvidence:
    return ScoredEvidence(
        source_id="wikipedia",
        title="Stanford University",
        url="https://en.wikipedia.org/wiki/Stanford_University",
        content=content,
        domain="en.wikipedia.org",
        credibility_weight=0.8,
        relevance_score=1.0,
        overall_score=0.92,
    )


@pytest.mark.asyncio
class TestGeminiAnalysisAdapter:
    def _adapter(self, api_key="test_gemini_key"):
        config = SourceConfig(
            api_key=api_key,
            requires_key=True,
            timeout=15.0,
            extra={"endpoint": "https://generativelanguage.googleapis.com/v1beta/models/test:generateContent"},
        )
        return GeminiAnalysisAdapter(config)

    async def test_successful_analysis(self, mock_httpx_client, sample_gemini_response):
        mock_httpx_client.post.return_value.json.return_value = sample_gemini_response

        with patch("api.gemini.httpx.AsyncClient", return_value=mock_httpx_client):
            analysis = await self._adapter().analyze(STANFORD, [make_scored("Founded in 1885.")])

        assert analysis.accuracy == 0.9
        assert analysis.confidence == 0.8
        assert analysis.issues == []
        prompt = mock_httpx_client.post.call_args.kwargs["json"]["contents"][0]["parts"][0]["text"]
        assert STANFORD.text in prompt
        assert "Founded in 1885." in prompt

    async def test_http_error_returns_none(self, mock_httpx_client):
        mock_response = mock_httpx_client.post.return_value
        mock_response.status_code = 429
        mock_response.text = "Too many requests"
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Rate limited", request=MagicMock(), response=mock_response
        )

        with patch("api.gemini.httpx.AsyncClient", return_value=mock_httpx_client):
            analysis = await self._adapter().analyze(STANFORD, [])

        assert analysis is None

    async def test_unparseable_text_returns_none(self, mock_httpx_client):
        mock_httpx_client.post.return_value.json.return_value = {
            "candidates": [{"content": {"parts": [{"text": "I cannot answer that."}]}}]
        }

        with patch("api.gemini.httpx.AsyncClient", return_value=mock_httpx_client):
            analysis = await self._adapter().analyze(STANFORD, [])

        assert analysis is None

    async def test_out_of_range_values_rejected(self, mock_httpx_client):
        mock_httpx_client.post.return_value.json.return_value = {
            "candidates": [{"content": {"parts": [{"text": '{"accuracy": 7, "confidence": 0.5}'}]}}]
        }

        with patch("api.gemini.httpx.AsyncClient", return_value=mock_httpx_client):
            analysis = await self._adapter().analyze(STANFORD, [])

        assert analysis is None

    async def test_missing_key_makes_no_call(self):
        with patch("api.gemini.httpx.AsyncClient") as mock_client_class:
            analysis = await self._adapter(api_key=None).analyze(STANFORD, [])

        assert analysis is None
        mock_client_class.assert_not_called()


class TestAdapterRegistry:
    def test_world_bank_supports_only_statistical_categories(self):
        adapter = WorldBankAdapter(SourceConfig())
        assert adapter.supports(ClaimCategory.ECONOMIC)
        assert not adapter.supports(ClaimCategory.INSTITUTIONAL)

    def test_web_search_requires_engine_id(self):
        adapter = WebSearchAdapter(SourceConfig(api_key="test_key", requires_key=True))
        assert not adapter.enabled

    def test_build_from_settings(self):
        settings = Settings(_env_file=None, FACT_CHECK_ENABLED=True, FACT_CHECK_API_KEY="key", WEB_SEARCH_ENABLED=True)
        adapters = build_evidence_adapters(settings)

        kinds = [a.kind for a in adapters]
        assert kinds == [SourceKind.WIKIPEDIA, SourceKind.WORLD_BANK, SourceKind.FACT_CHECK, SourceKind.WEB_SEARCH]
        enabled = {a.kind: a.enabled for a in adapters}
        assert enabled[SourceKind.FACT_CHECK]
        # No engine id configured
        assert not enabled[SourceKind.WEB_SEARCH]

    def test_rate_limits_from_settings(self):
        settings = Settings(_env_file=None, WIKIPEDIA_MAX_PER_MINUTE=5)
        limits = settings.rate_limits()
        assert limits["wikipedia"] == 5
        assert limits["world_bank"] == 200

    def test_startup_report_lists_missing_keys(self, caplog):
        from config import check_api_keys_on_startup

        settings = Settings(_env_file=None, FACT_CHECK_ENABLED=True, FACT_CHECK_API_KEY=None)
        with caplog.at_level("INFO", logger="config"):
            check_api_keys_on_startup(settings)

        assert "missing API keys" in caplog.text
        assert "fact_check" in caplog.text
        assert "web_search" in caplog.text
