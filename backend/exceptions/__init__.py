from typing import Optional, Dict, Any

class FactLensException(Exception):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

class APIException(FactLensException):
    pass

class RateLimitException(APIException):
    def __init__(self, source: str, limit: int):
        super().__init__(
            f"Rate limit exceeded for {source}",
            {"source": source, "limit": limit}
        )

class LLMException(APIException):
    def __init__(self, reason: str, recoverable: bool = True):
        super().__init__(
            f"LLM service error: {reason}",
            {"reason": reason, "recoverable": recoverable}
        )

class DataSourceException(APIException):
    def __init__(self, source: str, reason: str, recoverable: bool = True):
        super().__init__(
            f"Data source {source} failed: {reason}",
            {"source": source, "reason": reason, "recoverable": recoverable}
        )

class PipelineFailure(FactLensException):
    def __init__(self, stage: str, reason: str):
        super().__init__(
            f"Verification pipeline failed during {stage}: {reason}",
            {"stage": stage, "reason": reason}
        )
