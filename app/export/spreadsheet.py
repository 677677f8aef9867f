import io
from typing import Any, List, Tuple

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from app.schemas.domain import FinancialData, FinancialLineItem

INCOME_SHEET = "Income Statement"
QUALITATIVE_SHEET = "Qualitative Analysis"

# (attribute, header) in output order; description and value are always written.
LINE_ITEM_COLUMNS = [
    ("description", "description"),
    ("value", "value"),
    ("currency", "currency"),
    ("unit", "unit"),
    ("original_description", "originalDescription"),
]
REQUIRED_COLUMNS = {"description", "value"}

HEADER_FILL = PatternFill(start_color="1F4E79", end_color="1F4E79", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True)


def _write_header(ws: Worksheet, headers: List[str]) -> None:
    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT


def _write_value(ws: Worksheet, row: int, column: int, value: Any):
    cell = ws.cell(row=row, column=column, value=value)
    # Text starting with "=" must stay text, not become a formula.
    if isinstance(value, str):
        cell.data_type = "s"
    return cell


def _line_item_columns(items: List[FinancialLineItem]) -> List[Tuple[str, str]]:
    return [
        (attr, header)
        for attr, header in LINE_ITEM_COLUMNS
        if attr in REQUIRED_COLUMNS or any(getattr(item, attr) is not None for item in items)
    ]


def qualitative_rows(data: FinancialData) -> List[Tuple[str, Any]]:
    """Category/Details pairs in sheet order."""
    rows = [
        ("Management Sentiment", data.sentiment),
        ("Confidence Level", data.confidence_detail),
        ("Forward Guidance", data.forward_guidance),
        ("Capacity Utilization", data.capacity_utilization),
    ]
    rows += [(f"Key Positive {i}", p) for i, p in enumerate(data.key_positives, 1)]
    rows += [(f"Key Concern {i}", c) for i, c in enumerate(data.key_concerns, 1)]
    rows += [(f"Growth Initiative {i}", g) for i, g in enumerate(data.growth_initiatives, 1)]
    return rows


def populate_income_sheet(ws: Worksheet, items: List[FinancialLineItem]) -> None:
    columns = _line_item_columns(items)
    _write_header(ws, [header for _, header in columns])

    for row, item in enumerate(items, 2):
        for col, (attr, _) in enumerate(columns, 1):
            _write_value(ws, row, col, getattr(item, attr))

    for col, (attr, _) in enumerate(columns, 1):
        width = 40 if attr in ("description", "original_description") else 16
        ws.column_dimensions[get_column_letter(col)].width = width


def populate_qualitative_sheet(ws: Worksheet, data: FinancialData) -> None:
    _write_header(ws, ["Category", "Details"])

    for row, (category, details) in enumerate(qualitative_rows(data), 2):
        _write_value(ws, row, 1, category)
        cell = _write_value(ws, row, 2, details)
        cell.alignment = Alignment(wrap_text=True, vertical="top")

    ws.column_dimensions["A"].width = 25
    ws.column_dimensions["B"].width = 90


def render_workbook(data: FinancialData) -> bytes:
    """Build the two-sheet xlsx workbook for an extraction and return its bytes."""
    wb = Workbook()

    ws_income = wb.active
    ws_income.title = INCOME_SHEET
    populate_income_sheet(ws_income, data.income_statement)

    ws_qualitative = wb.create_sheet(QUALITATIVE_SHEET)
    populate_qualitative_sheet(ws_qualitative, data)

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
