import asyncio
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from config import API_TIMEOUTS, DEFAULT_VERDICTS, Settings, get_settings, logger
from exceptions import PipelineFailure
from api import EvidenceAdapter, GeminiAnalysisAdapter, build_analysis_adapter, build_evidence_adapters
from confidence import ConfidenceScorer, SourceScorer
from models.claims import Claim, ClaimCategory
from models.evidence import EvidenceResult, ScoredEvidence
from models.verdicts import Analysis, Verdict
from utils.cache import ResultCache
from utils.rate_limiter import SourceRateLimiter
from .aggregation import Aggregator
from .extraction import contains_opinion_marker, extract_claims
from .orchestration import dispatch_queries
from .overrides import check_overrides

DEFAULT_SUGGESTION = "Verify this information with additional sources"


class VerificationOutcome(str, Enum):
    FROM_CACHE = "from_cache"
    FRESH = "fresh"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass(frozen=True)
class VerificationResult:
    verdict: Verdict
    outcome: VerificationOutcome
    category: ClaimCategory = ClaimCategory.GENERAL
    claims: Tuple[Claim, ...] = field(default_factory=tuple)


class VerificationService:
    """
    Runs one statement through cache, extraction, source fan-out, scoring
    and aggregation.

    The cache and rate limiter are shared across calls and injected by the
    caller. run() never raises: unexpected faults become a fixed
    low-confidence verdict that is not cached.
    """

    def __init__(
        self,
        adapters: Sequence[EvidenceAdapter],
        cache: ResultCache,
        rate_limiter: SourceRateLimiter,
        source_scorer: SourceScorer = None,
        aggregator: Aggregator = None,
        analysis_adapter: Optional[GeminiAnalysisAdapter] = None,
        pipeline_timeout: float = API_TIMEOUTS.PIPELINE
    ):
        self.adapters = list(adapters)
        self.cache = cache
        self.rate_limiter = rate_limiter
        self.source_scorer = source_scorer or SourceScorer()
        self.aggregator = aggregator or Aggregator()
        self.analysis_adapter = analysis_adapter
        self.pipeline_timeout = pipeline_timeout

    @property
    def confidence_scorer(self) -> ConfidenceScorer:
        return self.aggregator.confidence_scorer

    async def verify(self, statement: str, context: str = "") -> Verdict:
        result = await self.run(statement, context)
        return result.verdict

    async def run(self, statement: str, context: str = "") -> VerificationResult:
        start_time = time.monotonic()
        try:
            result = await self._run(statement, context or "", start_time)
        except PipelineFailure as e:
            logger.error(e.message, extra=e.details)
            result = self._failed()
        except Exception:
            logger.exception("Unexpected error during verification.")
            result = self._failed()

        duration = round(time.monotonic() - start_time, 2)
        logger.info(
            f"Verification of '{(statement or '')[:50]}' finished as {result.outcome.value} "
            f"in {duration} seconds (confidence={result.verdict.confidence})."
        )
        return result

    async def _run(self, statement: str, context: str, start_time: float) -> VerificationResult:
        key = self.cache.make_key(statement, context)
        cached = self.cache.get(key)
        if cached is not None:
            if not isinstance(cached, Verdict):
                raise PipelineFailure("cache_check", f"cache returned {type(cached).__name__} instead of a Verdict")
            # A hit reports the same claims and category as the fresh call
            claims, category = extract_claims(statement, context)
            return VerificationResult(
                verdict=cached, outcome=VerificationOutcome.FROM_CACHE, category=category, claims=tuple(claims)
            )

        claims, category = extract_claims(statement, context)
        override = None if contains_opinion_marker(statement) else check_overrides(statement)
        if not claims and override is not None:
            claims = [Claim(text=statement.strip(), category=category, originating_context=context)]

        if not claims:
            verdict = self._default_verdict(
                DEFAULT_VERDICTS.NO_CLAIMS_CONFIDENCE,
                DEFAULT_VERDICTS.NO_CLAIMS_ISSUE,
                "The statement does not contain a checkable factual claim."
            )
            return self._finish(key, verdict, VerificationOutcome.DEGRADED, category, claims)

        subject = Claim(text=statement.strip(), category=category, originating_context=context)
        adapters = [a for a in self.adapters if a.enabled and a.supports(category)]
        if not adapters:
            logger.info(f"No enabled sources for category '{category.value}'.")
            if override is not None:
                verdict = self.aggregator.aggregate(subject, [], override=override)
                return self._finish(key, verdict, VerificationOutcome.FRESH, category, claims)
            verdict = self._default_verdict(
                DEFAULT_VERDICTS.NO_SOURCES_CONFIDENCE,
                DEFAULT_VERDICTS.NO_SOURCES_ISSUE,
                f"No evidence source is enabled for {category.value} claims."
            )
            return self._finish(key, verdict, VerificationOutcome.DEGRADED, category, claims)

        jobs = []
        for claim in claims:
            for adapter in adapters:
                if self.rate_limiter.try_acquire(adapter.source_id):
                    jobs.append((adapter, claim))
                else:
                    logger.warning(f"Rate limit reached for {adapter.source_id}, skipping query.")

        results = await dispatch_queries(jobs, category, timeout=self.pipeline_timeout)
        scored = self._score(results)

        if not scored:
            if override is not None:
                verdict = self.aggregator.aggregate(subject, [], override=override)
                return self._finish(key, verdict, VerificationOutcome.FRESH, category, claims)
            verdict = self._default_verdict(
                DEFAULT_VERDICTS.NO_EVIDENCE_CONFIDENCE,
                DEFAULT_VERDICTS.NO_EVIDENCE_ISSUE,
                "None of the enabled sources returned evidence for this statement."
            )
            return self._finish(key, verdict, VerificationOutcome.DEGRADED, category, claims)

        analysis = None
        if override is None:
            remaining = self.pipeline_timeout - (time.monotonic() - start_time)
            analysis = await self._analyze(subject, scored, remaining)

        verdict = self.aggregator.aggregate(subject, scored, analysis=analysis, override=override)
        return self._finish(key, verdict, VerificationOutcome.FRESH, category, claims)

    def _score(self, results: Sequence[Tuple[Claim, List[EvidenceResult]]]) -> List[ScoredEvidence]:
        by_claim: Dict[Claim, List[EvidenceResult]] = {}
        for claim, evidence in results:
            by_claim.setdefault(claim, []).extend(evidence)
        ranked = [self.source_scorer.score_all(claim, evidence) for claim, evidence in by_claim.items()]
        return self.source_scorer.merge(ranked)

    async def _analyze(self, claim: Claim, scored: Sequence[ScoredEvidence], remaining: float) -> Optional[Analysis]:
        adapter = self.analysis_adapter
        if adapter is None or not adapter.enabled:
            return None
        if remaining <= 0:
            logger.warning("No time left in the pipeline budget for AI analysis.")
            return None
        if not self.rate_limiter.try_acquire(adapter.source_id):
            logger.warning(f"Rate limit reached for {adapter.source_id}, using heuristic analysis.")
            return None
        try:
            return await asyncio.wait_for(adapter.analyze(claim, scored), timeout=remaining)
        except asyncio.TimeoutError:
            logger.warning(f"AI analysis exceeded the remaining pipeline budget ({remaining:.2f}s).")
            return None

    def _failed(self) -> VerificationResult:
        verdict = self._default_verdict(
            DEFAULT_VERDICTS.ERROR_CONFIDENCE,
            DEFAULT_VERDICTS.ERROR_ISSUE,
            "An unexpected error occurred while checking this statement."
        )
        return VerificationResult(verdict=verdict, outcome=VerificationOutcome.FAILED)

    def _default_verdict(self, confidence: float, issue: str, explanation: str) -> Verdict:
        return Verdict(
            confidence=confidence,
            has_issues=True,
            issues=(issue,),
            suggestions=(DEFAULT_SUGGESTION,),
            explanation=explanation,
            source_count=0,
            status=self.confidence_scorer.get_status(confidence, [issue]),
        )

    def _finish(
        self,
        key: str,
        verdict: Verdict,
        outcome: VerificationOutcome,
        category: ClaimCategory,
        claims: Sequence[Claim]
    ) -> VerificationResult:
        self.cache.put(key, verdict)
        return VerificationResult(verdict=verdict, outcome=outcome, category=category, claims=tuple(claims))


def build_verification_service(settings: Optional[Settings] = None) -> VerificationService:
    """Wire adapters, cache, limiter and scorers from settings."""
    settings = settings or get_settings()
    return VerificationService(
        adapters=build_evidence_adapters(settings),
        cache=ResultCache(settings.CACHE_TTL_SECONDS, settings.CACHE_MAX_ENTRIES),
        rate_limiter=SourceRateLimiter(settings.rate_limits()),
        source_scorer=SourceScorer(max_items=settings.MAX_EVIDENCE_ITEMS),
        aggregator=Aggregator(threshold=settings.CONFIDENCE_THRESHOLD),
        analysis_adapter=build_analysis_adapter(settings),
        pipeline_timeout=settings.PIPELINE_TIMEOUT,
    )
