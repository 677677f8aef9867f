import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from starlette.concurrency import run_in_threadpool

from app.core.deps import get_document_service
from app.schemas.api import ErrorResponse
from app.schemas.domain import FinancialData
from app.services.document_service import DocumentService

logger = logging.getLogger(__name__)

MISSING_INPUT_ERROR = "File and API Key are required"

documents_router = APIRouter()


@documents_router.post(
    "/process-document",
    response_model=FinancialData,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def process_document(
    file: Optional[UploadFile] = File(None),
    apiKey: Optional[str] = Form(None),
    service: DocumentService = Depends(get_document_service),
) -> FinancialData:
    if file is None or not apiKey:
        raise HTTPException(status_code=400, detail=MISSING_INPUT_ERROR)

    try:
        content = await file.read()
        result = await run_in_threadpool(
            service.process, apiKey, content, file.content_type, file.filename
        )
    except Exception as e:
        logger.exception("Error processing document")
        raise HTTPException(status_code=500, detail=str(e) or "Failed to process document")

    if result.error or result.data is None:
        raise HTTPException(status_code=500, detail=result.error or "Failed to process document")

    return result.data
