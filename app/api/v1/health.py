# app/api/v1/health.py
from fastapi import APIRouter, Depends

from app.ai.agents.extractor import FinancialExtractor
from app.core.deps import get_extractor
from app.schemas.api import HealthResponse

health_router = APIRouter()


@health_router.get("/health", response_model=HealthResponse)
def health(extractor: FinancialExtractor = Depends(get_extractor)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        models=extractor.model_candidates,
    )
