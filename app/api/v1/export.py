import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from app.core.deps import get_export_service
from app.schemas.api import ErrorResponse
from app.schemas.domain import FinancialData
from app.services.export_service import XLSX_MEDIA_TYPE, ExportService, content_disposition

logger = logging.getLogger(__name__)

export_router = APIRouter()


@export_router.post(
    "/download-excel",
    response_class=Response,
    responses={
        200: {"content": {XLSX_MEDIA_TYPE: {}}},
        500: {"model": ErrorResponse},
    },
)
async def download_excel(
    request: Request,
    service: ExportService = Depends(get_export_service),
) -> Response:
    # Body is parsed by hand so malformed payloads surface as 500 {"error": ...}.
    try:
        payload = await request.json()
        data = FinancialData.model_validate(payload)
        content, filename = await run_in_threadpool(service.export, data)
    except Exception as e:
        logger.exception("Error generating Excel")
        raise HTTPException(status_code=500, detail=str(e) or "Failed to generate Excel")

    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": content_disposition(filename)},
    )
