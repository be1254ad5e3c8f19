import asyncio
import json
from typing import Any, Dict, Optional, Sequence
import httpx
from pydantic import ValidationError

from config import logger
from exceptions import LLMException
from models.claims import Claim
from models.evidence import ScoredEvidence
from models.sources import SourceKind
from models.verdicts import Analysis
from prompts import FACT_ANALYSIS_PROMPT
from utils.parsing import extract_json_block
from utils.retry import async_retry
from .base import SourceAdapter

MAX_CONTEXT_LENGTH = 12000


@async_retry(max_attempts=2, exceptions=(httpx.TransportError,))
async def _post_generate(endpoint: str, api_key: str, body: Dict[str, Any], timeout: float) -> Dict[str, Any]:
    headers = {"Content-Type": "application/json", "x-goog-api-key": api_key}
    async with httpx.AsyncClient(timeout=timeout) as client:
        response = await client.post(endpoint, headers=headers, json=body)
        response.raise_for_status()
        return response.json()


async def call_gemini(prompt: str, api_key: str, endpoint: str, timeout: float = 15.0) -> Dict[str, Any]:
    """Send a single-turn prompt to Gemini and return {"raw": ..., "text": ...}."""
    if not api_key:
        logger.critical("GEMINI_API_KEY not configured.")
        raise LLMException("API key not configured", recoverable=False)

    body = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {"temperature": 0.1, "responseMimeType": "application/json"},
    }
    try:
        data = await _post_generate(endpoint, api_key, body, timeout)
    except httpx.HTTPStatusError as e:
        logger.error("Gemini HTTP error %s for URL %s: %s", e.response.status_code, e.request.url, e.response.text)
        raise LLMException(f"HTTP {e.response.status_code}", recoverable=True)
    except httpx.RequestError as e:
        logger.error("Gemini request error: %s", str(e))
        raise LLMException(f"Request failed: {str(e)}", recoverable=True)
    except json.JSONDecodeError:
        logger.error("Gemini returned a non-JSON body")
        raise LLMException("Invalid JSON in response", recoverable=True)

    text = ""
    try:
        if isinstance(data, dict):
            candidates = data.get("candidates", [])
            if isinstance(candidates, list) and candidates:
                content = candidates[0].get("content", {})
                parts = content.get("parts", [])
                if isinstance(parts, list) and parts:
                    text = parts[0].get("text", "")
            if not text:
                text = data.get("output", "") or data.get("text", "")
    except (AttributeError, IndexError, TypeError) as e:
        logger.error("Error parsing Gemini response structure: %s. Response: %s", e, data)
        text = json.dumps(data)
    return {"raw": data, "text": text or json.dumps(data)}


def build_evidence_context(evidence: Sequence[ScoredEvidence]) -> str:
    parts = []
    for idx, item in enumerate(evidence):
        source_id = f"Source_{idx + 1}"
        parts.append(
            f"<{source_id}>\nSource Title: {item.title}\nURL: {item.url or 'N/A'}\n"
            f"Credibility: {item.credibility_weight:.2f}\nSnippet: {item.content}\n</{source_id}>"
        )
    context = "\n---\n".join(parts) or "No evidence was retrieved."
    if len(context) > MAX_CONTEXT_LENGTH:
        context = context[:MAX_CONTEXT_LENGTH] + "\n... [Context Truncated]"
    return context


class GeminiAnalysisAdapter(SourceAdapter):
    """
    AI analysis of a claim against already-scored evidence.

    Unlike the evidence adapters this produces an Analysis rather than
    evidence items. Any failure yields None so the caller can fall back to
    the heuristic.
    """

    kind = SourceKind.AI_ANALYSIS
    requires_api_key = True

    @property
    def endpoint(self) -> str:
        return self.config.extra.get("endpoint", "")

    async def analyze(self, claim: Claim, evidence: Sequence[ScoredEvidence]) -> Optional[Analysis]:
        if not self.enabled:
            return None

        prompt = FACT_ANALYSIS_PROMPT.format(
            claim=claim.text,
            context=claim.originating_context or "None",
            evidence=build_evidence_context(evidence),
        )
        try:
            response = await asyncio.wait_for(
                call_gemini(prompt, self.config.api_key, self.endpoint, timeout=self.config.timeout),
                timeout=self.config.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"AI analysis timed out after {self.config.timeout}s")
            return None
        except LLMException as e:
            logger.warning(e.message, extra=e.details)
            return None

        parsed = extract_json_block(response.get("text", ""))
        if not parsed:
            logger.error("AI analysis response did not contain a JSON object")
            return None
        try:
            return Analysis.model_validate(parsed)
        except ValidationError as e:
            logger.error("AI analysis JSON failed validation: %s", e)
            return None
