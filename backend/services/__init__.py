from .extraction import extract_claims, categorize, contains_opinion_marker
from .overrides import Override, OverrideKind, check_overrides
from .aggregation import Aggregator
from .orchestration import dispatch_queries
from .verification_service import (
    VerificationOutcome,
    VerificationResult,
    VerificationService,
    build_verification_service,
)

__all__ = [
    "extract_claims",
    "categorize",
    "contains_opinion_marker",
    "Override",
    "OverrideKind",
    "check_overrides",
    "Aggregator",
    "dispatch_queries",
    "VerificationOutcome",
    "VerificationResult",
    "VerificationService",
    "build_verification_service",
]
