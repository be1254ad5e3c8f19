from enum import Enum
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class FactStatus(str, Enum):
    ACCURATE = "accurate"
    LIKELY_ACCURATE = "likely_accurate"
    MIXED = "mixed"
    INACCURATE = "inaccurate"
    UNVERIFIED = "unverified"


class SourceLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    url: str


class Analysis(BaseModel):
    """Structured judgment on a claim, from an LLM or the fallback heuristic."""
    accuracy: float = Field(0.5, ge=0.0, le=1.0)
    confidence: float = Field(0.5, ge=0.0, le=1.0)
    issues: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    explanation: str = ""


class Verdict(BaseModel):
    """Final, cacheable output of one verification call."""
    model_config = ConfigDict(frozen=True)

    confidence: float = Field(..., ge=0.0, le=1.0)
    has_issues: bool
    issues: Tuple[str, ...] = ()
    suggestions: Tuple[str, ...] = ()
    sources: Tuple[str, ...] = ()
    source_links: Tuple[SourceLink, ...] = ()
    explanation: str = ""
    source_count: int = 0
    status: FactStatus = FactStatus.UNVERIFIED


class VerificationResponse(BaseModel):
    """Complete response from /verify endpoint."""
    statement: str
    context: str
    category: Optional[str] = None
    outcome: str
    verdict: Verdict
