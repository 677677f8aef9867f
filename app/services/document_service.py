"""Servico de processamento de documentos enviados pela API.

Normaliza o arquivo recebido para o par (bytes, MIME) esperado pelo extrator
e delega a extracao ao `FinancialExtractor`.
"""

import logging
import mimetypes
from typing import Optional

from app.ai.agents.extractor import FinancialExtractor
from app.schemas.domain import ExtractionResult

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


def resolve_mime_type(content_type: Optional[str], filename: Optional[str]) -> str:
    """Resumo:
        Determina o tipo MIME do upload.

    Args:
        content_type (Optional[str]): Content-Type informado no multipart.
        filename (Optional[str]): Nome original do arquivo.

    Returns:
        str: Content-Type informado, o inferido pela extensao ou o generico.
    """
    if content_type and content_type != DEFAULT_MIME_TYPE:
        return content_type
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed
    return content_type or DEFAULT_MIME_TYPE


class DocumentService:
    """Encapsula uma extracao de documento por requisicao."""

    def __init__(self, extractor: FinancialExtractor):
        self.extractor = extractor

    def process(
        self,
        api_key: str,
        file_content: bytes,
        content_type: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> ExtractionResult:
        """Resumo:
            Executa a extracao para um arquivo recebido.

        Args:
            api_key (str): Chave Gemini da requisicao; usada apenas nesta chamada.
            file_content (bytes): Conteudo do arquivo.
            content_type (Optional[str]): Content-Type do upload.
            filename (Optional[str]): Nome do arquivo, usado para inferir o MIME.

        Returns:
            ExtractionResult: Resultado do extrator, com `data` ou `error`.
        """
        mime_type = resolve_mime_type(content_type, filename)
        logger.info("Processing document %s (%s, %d bytes)", filename or "<unnamed>", mime_type, len(file_content))
        return self.extractor.extract(api_key, file_content, mime_type)
