from functools import lru_cache
from typing import Any, Dict, List
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import check_api_keys_on_startup, logger
from middleware.context import RequestContextMiddleware, get_request_id
from models.claims import VerifyRequest
from models.verdicts import VerificationResponse
from services import VerificationService, build_verification_service


@lru_cache()
def get_verification_service() -> VerificationService:
    """Process-wide service; the cache and rate limiter live as long as the app."""
    return build_verification_service()


app = FastAPI(title="FactLens API")

@app.on_event("startup")
async def startup_event():
    check_api_keys_on_startup()

app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def health_check():
    return {"status": "ok", "message": "FactLens API is running."}


@app.get("/sources")
async def list_sources(service: VerificationService = Depends(get_verification_service)) -> List[Dict[str, Any]]:
    adapters = list(service.adapters)
    if service.analysis_adapter is not None:
        adapters.append(service.analysis_adapter)
    return [
        {
            "source": adapter.source_id,
            "enabled": adapter.enabled,
            "requires_api_key": adapter.requires_api_key,
            "categories": sorted(c.value for c in adapter.categories) if adapter.categories else None,
            "remaining_this_minute": service.rate_limiter.remaining(adapter.source_id),
        }
        for adapter in adapters
    ]


@app.post("/verify", response_model=VerificationResponse)
async def verify(
    req: VerifyRequest,
    service: VerificationService = Depends(get_verification_service)
) -> VerificationResponse:
    logger.info(f"Verifying statement: {req.statement[:80]}", extra={"request_id": get_request_id()})
    result = await service.run(req.statement, req.context)
    return VerificationResponse(
        statement=req.statement,
        context=req.context,
        category=result.category.value,
        outcome=result.outcome.value,
        verdict=result.verdict,
    )
