"""Servico de exportacao de extracoes para planilha Excel."""

import logging
import re
from urllib.parse import quote

from app.export.spreadsheet import render_workbook
from app.schemas.domain import FinancialData

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_UNSAFE_FILENAME_CHARS = re.compile(r'["\\/\r\n]')


def export_filename(data: FinancialData) -> str:
    company = data.company_name or "Financial_Data"
    year = data.year or "Report"
    return _UNSAFE_FILENAME_CHARS.sub("_", f"{company}_{year}.xlsx")


def content_disposition(filename: str) -> str:
    """Attachment header; non latin-1 names also get an RFC 5987 `filename*`."""
    try:
        filename.encode("latin-1")
    except UnicodeEncodeError:
        fallback = filename.encode("ascii", "replace").decode("ascii").replace("?", "_")
        return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
    return f'attachment; filename="{filename}"'


class ExportService:

    def export(self, data: FinancialData) -> tuple[bytes, str]:
        """Resumo:
            Gera a planilha e o nome de arquivo para download.

        Args:
            data (FinancialData): Extracao a exportar.

        Returns:
            tuple[bytes, str]: Conteudo xlsx e nome do arquivo.
        """
        filename = export_filename(data)
        content = render_workbook(data)
        logger.info("Rendered %s (%d bytes)", filename, len(content))
        return content, filename
