from fastapi import Depends, Request

from app.ai.agents.extractor import FinancialExtractor
from app.services.document_service import DocumentService
from app.services.export_service import ExportService


def get_extractor(request: Request) -> FinancialExtractor:
    extractor = getattr(request.app.state, "extractor", None)
    if extractor is None:
        raise RuntimeError("Extractor not initialized. Did lifespan run?")
    return extractor


def get_document_service(extractor: FinancialExtractor = Depends(get_extractor)) -> DocumentService:
    return DocumentService(extractor)


def get_export_service() -> ExportService:
    return ExportService()
