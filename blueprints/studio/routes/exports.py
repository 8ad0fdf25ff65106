"""Export routes (month schedule Excel export)."""

import io
from typing import Iterable

from flask import Response
from flask_login import login_required
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from blueprints.studio.routes.calendar import month_from_request
from blueprints.studio.services.snapshot_service import get_snapshot
from models.calendar import month_label
from models.records import Slot, Template
from models.slot import slot_summary
from utils.api_response import api_error
from utils.decorators import backend_errors
from utils.helpers import get_weekday_name_ja, timestamped_filename
from utils.messages import MESSAGES

XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

HEADERS = [
    '日付', '曜日', '開始', '終了', 'レッスン名', '講師',
    '予約', '定員', 'キャンセル待ち', '料金', '公開',
]


def register_routes(bp):
    """Register export routes on the blueprint."""

    @bp.route('/export/month')
    @login_required
    @backend_errors
    def export_month():
        """
        Export a month's active slots to Excel.

        Query params:
            year, month: Month to export (default: current)
        """
        month_args = month_from_request()
        if month_args is None:
            return api_error(MESSAGES['invalid_month'])
        year, month = month_args

        snapshot = get_snapshot()
        prefix = f'{year}-{month:02d}-'
        slots = sorted(
            (s for s in snapshot.slots if s.is_active and s.date.startswith(prefix)),
            key=lambda s: (s.date, s.start)
        )

        content = build_schedule_workbook(year, month, slots, snapshot.templates)
        filename = timestamped_filename(f'schedule_{year}_{month:02d}', 'xlsx')
        return Response(
            content,
            mimetype=XLSX_MIMETYPE,
            headers={'Content-Disposition': f'attachment; filename={filename}'}
        )


def build_schedule_workbook(
    year: int,
    month: int,
    slots: Iterable[Slot],
    templates: Iterable[Template]
) -> bytes:
    """
    Render the month schedule as an .xlsx file.

    Args:
        year: Year of the schedule
        month: Month of the schedule (1-12)
        slots: Slots to list, already filtered and ordered
        templates: Templates for capacity inheritance

    Returns:
        Workbook bytes
    """
    templates = list(templates)
    summaries = [slot_summary(s, templates) for s in slots]

    wb = Workbook()
    ws = wb.active
    ws.title = f'{year}-{month:02d}'

    # Styles
    header_font = Font(bold=True, color="FFFFFF", size=11)
    header_fill = PatternFill(start_color="442C2E", end_color="442C2E", fill_type="solid")
    thin_border = Border(
        left=Side(style='thin', color="D4D4D4"),
        right=Side(style='thin', color="D4D4D4"),
        top=Side(style='thin', color="D4D4D4"),
        bottom=Side(style='thin', color="D4D4D4")
    )
    center = Alignment(horizontal="center", vertical="center")
    waitlist_font = Font(bold=True, color="C62828")

    # Title row
    ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=len(HEADERS))
    title_cell = ws.cell(row=1, column=1, value=f'レッスンスケジュール {month_label(year, month)}')
    title_cell.font = Font(bold=True, size=14)
    title_cell.alignment = center

    ws.merge_cells(start_row=2, start_column=1, end_row=2, end_column=len(HEADERS))
    ws.cell(row=2, column=1, value=f'合計: {len(summaries)} 枠').alignment = center

    # Headers (row 4)
    header_row = 4
    for col, header in enumerate(HEADERS, 1):
        cell = ws.cell(row=header_row, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = center
        cell.border = thin_border

    ws.freeze_panes = f'A{header_row + 1}'

    for row_idx, item in enumerate(summaries, header_row + 1):
        values = [
            item['date'],
            get_weekday_name_ja(item['date']),
            item['start_time'],
            item['end_time'],
            item['lesson_name'],
            item['teacher_name'],
            item['reserved'],
            item['capacity'],
            item['waitlist'],
            item['price'],
            '公開' if item['is_public'] else '非公開',
        ]
        for col, value in enumerate(values, 1):
            cell = ws.cell(row=row_idx, column=col, value=value)
            cell.border = thin_border
        if item['has_waitlist']:
            ws.cell(row=row_idx, column=9).font = waitlist_font

    column_widths = [12, 6, 8, 8, 24, 14, 8, 8, 14, 10, 8]
    for idx, width in enumerate(column_widths, 1):
        ws.column_dimensions[ws.cell(row=header_row, column=idx).column_letter].width = width

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()
