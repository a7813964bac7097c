"""Excel export of the loaded resource list."""
from typing import Sequence
import logging

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ..types import EXPORT_COLUMNS, Resource

logger = logging.getLogger(__name__)

SHEET_TITLE = 'AWS Resources'
DEFAULT_EXPORT_PATH = 'aws-resources.xlsx'

COLOR_HEADER_BG = "4472C4"
COLOR_HEADER_FG = "FFFFFF"
NUMBER_FORMAT_CURRENCY = "#,##0.00"


def _thin_border() -> Border:
    thin_side = Side(style="thin", color="808080")
    return Border(left=thin_side, right=thin_side, top=thin_side, bottom=thin_side)


def write_workbook(resources: Sequence[Resource], path: str = DEFAULT_EXPORT_PATH) -> str:
    """
    Write one row per resource to an .xlsx file.

    Columns follow ``EXPORT_COLUMNS``; detail keys that do not apply to a
    resource's type are left empty.

    Args:
        resources: Resources to export
        path: Destination file

    Returns:
        The path written
    """
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE

    header_font = Font(bold=True, color=COLOR_HEADER_FG)
    header_fill = PatternFill(start_color=COLOR_HEADER_BG, end_color=COLOR_HEADER_BG, fill_type="solid")
    border = _thin_border()

    sheet.append(EXPORT_COLUMNS)
    for cell in sheet[1]:
        cell.font = header_font
        cell.fill = header_fill
        cell.border = border
        cell.alignment = Alignment(horizontal="center", vertical="center")

    cost_column = EXPORT_COLUMNS.index('cost') + 1
    for resource in resources:
        row = resource.to_row()
        sheet.append([row[column] for column in EXPORT_COLUMNS])
        sheet.cell(row=sheet.max_row, column=cost_column).number_format = NUMBER_FORMAT_CURRENCY

    for index, column in enumerate(EXPORT_COLUMNS, start=1):
        width = max(
            [len(column)] + [len(str(cell.value)) for cell in sheet[get_column_letter(index)] if cell.value is not None]
        )
        sheet.column_dimensions[get_column_letter(index)].width = min(width + 2, 60)

    sheet.freeze_panes = "A2"
    workbook.save(path)
    logger.info(f"Exported {len(resources)} resources to {path}", extra={'resource_count': len(resources)})
    return path
