from .claims import (
    Claim,
    ClaimCategory,
    VerifyRequest,
)
from .evidence import (
    EvidenceResult,
    ScoredEvidence,
)
from .sources import SourceKind
from .verdicts import (
    Analysis,
    FactStatus,
    SourceLink,
    Verdict,
    VerificationResponse,
)

__all__ = [
    "Claim",
    "ClaimCategory",
    "VerifyRequest",

    "EvidenceResult",
    "ScoredEvidence",
    "SourceKind",

    "Analysis",
    "FactStatus",
    "SourceLink",
    "Verdict",
    "VerificationResponse",
]
