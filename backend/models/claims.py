from dataclasses import dataclass
from enum import Enum
from pydantic import BaseModel, Field, field_validator


class ClaimCategory(str, Enum):
    INSTITUTIONAL = "institutional"
    DEMOGRAPHIC = "demographic"
    ECONOMIC = "economic"
    SCIENTIFIC = "scientific"
    POLITICAL = "political"
    GENERAL = "general"


@dataclass(frozen=True)
class Claim:
    """A single verifiable proposition extracted from a statement."""
    text: str
    category: ClaimCategory = ClaimCategory.GENERAL
    originating_context: str = ""


class VerifyRequest(BaseModel):
    """Request body for /verify endpoint with validation."""
    statement: str = Field(..., min_length=3, max_length=5000)
    context: str = Field("", max_length=5000)

    @field_validator("statement")
    @classmethod
    def sanitize_statement(cls, v):
        from utils.validation import InputValidator

        return InputValidator.sanitize_statement(v)

    @field_validator("context")
    @classmethod
    def sanitize_context(cls, v):
        from utils.validation import InputValidator

        return InputValidator.sanitize_context(v)

    model_config = {
        "json_schema_extra": {
            "example": {
                "statement": "Stanford University was founded in 1885 by Leland Stanford.",
                "context": "https://example.com/history"
            }
        }
    }
