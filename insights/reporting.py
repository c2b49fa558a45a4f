import io
import logging

import pandas as pd
from django.http import HttpResponse
from django.utils import timezone
from django.utils.formats import date_format

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
SHEET_NAME = 'Registrations'

EXPORT_COLUMNS = [
    'Customer ID', 'Name', 'Mobile Number', 'Category', 'Address', 'Panchayath',
    'Ward', 'Agent/PRO', 'Status', 'Applied Date', 'Updated Date',
]


def format_date(value):
    return date_format(timezone.localtime(value).date(), 'SHORT_DATE_FORMAT')


def export_rows(records):
    return [
        [
            record.customer_id,
            record.name,
            record.mobile_number,
            record.category,
            record.address,
            record.panchayath,
            record.ward,
            record.agent_pro or '',
            record.status,
            format_date(record.created_at),
            format_date(record.updated_at),
        ]
        for record in records
    ]


def export_filename(today=None):
    today = today or timezone.localdate()
    return f"registrations_{today.isoformat()}.xlsx"


def export_workbook(records, today=None):
    """Render ``records`` as a single-sheet workbook, preserving their order.

    Returns ``(filename, content)``. An empty ``records`` still yields the
    header row.
    """
    df = pd.DataFrame(export_rows(records), columns=EXPORT_COLUMNS)

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)

    buffer.seek(0)
    return export_filename(today), buffer.read()


def build_export_response(records, today=None):
    filename, content = export_workbook(records, today)
    response = HttpResponse(content, content_type=XLSX_CONTENT_TYPE)
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    logger.info("Exported %d registrations to %s", len(records), filename)
    return response
