import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.documents import MISSING_INPUT_ERROR, documents_router
from app.api.v1.export import export_router
from app.api.v1.health import health_router
from app.core.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    from app.ai.agents.extractor import FinancialExtractor

    app.state.extractor = FinancialExtractor(
        model_candidates=settings.GEMINI_MODELS,
        fallback_on_any_error=settings.FALLBACK_ON_ANY_ERROR,
    )
    logger.info(
        "Extractor ready. Candidate models: %s (fallback on any error: %s)",
        ", ".join(settings.GEMINI_MODELS),
        settings.FALLBACK_ON_ANY_ERROR,
    )
    yield
    logger.info("Shutting down.")


app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Only the upload form is validated by FastAPI; a malformed one is missing its inputs.
    logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": MISSING_INPUT_ERROR})


app.include_router(health_router, prefix="/v1", tags=["health"])
app.include_router(documents_router, prefix="/v1", tags=["documents"])
app.include_router(export_router, prefix="/v1", tags=["export"])
