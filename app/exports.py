# app/exports.py
"""
Export renderers for a single relevé: PDF (WeasyPrint) and Excel (openpyxl).
"""

import os
from io import BytesIO
from pathlib import Path

from flask import render_template

from utils import format_value, payload_items

PDF_MIMETYPE = 'application/pdf'
XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

# export type -> (file extension, mimetype)
EXPORT_TYPES = {
    'pdf': ('pdf', PDF_MIMETYPE),
    'excel': ('xlsx', XLSX_MIMETYPE),
}


def _logo(logo_path):
    if logo_path and os.path.exists(logo_path):
        return logo_path
    return None


def _field_rows(releve):
    return [(label, format_value(getattr(releve, name))) for name, label in releve.FIELDS]


def _cell_value(value):
    # worksheet cells only hold scalars
    if isinstance(value, (list, dict)):
        return format_value(value)
    return value


def render_pdf_html(releve, logo_path=None):
    """HTML source of the PDF export. Needs an application context for the template."""
    logo = _logo(logo_path)
    return render_template('releve_pdf.html',
                           releve=releve,
                           fields=_field_rows(releve),
                           payload=[(k, format_value(v)) for k, v in payload_items(releve.payload)],
                           logo_uri=Path(logo).resolve().as_uri() if logo else None)


def render_pdf(releve, logo_path=None):
    """Render a relevé as PDF bytes."""
    from weasyprint import HTML

    return HTML(string=render_pdf_html(releve, logo_path)).write_pdf()


def render_workbook(releve, logo_path=None):
    """Render a relevé as an .xlsx workbook, returned as a rewound BytesIO."""
    from openpyxl import Workbook
    from openpyxl.drawing.image import Image
    from openpyxl.styles import Font, PatternFill, Alignment
    from openpyxl.utils import get_column_letter

    wb = Workbook()
    ws = wb.active
    ws.title = 'Relevé'

    logo = _logo(logo_path)
    if logo:
        img = Image(logo)
        img.width, img.height = 150, 60
        ws.add_image(img, 'A1')
        ws.row_dimensions[1].height = 48

    # Row 1 is left empty for the logo
    ws.append([])
    ws.append(['Champ', 'Valeur'])

    header_fill = PatternFill(start_color='366092', end_color='366092', fill_type='solid')
    header_font = Font(bold=True, color='FFFFFF')
    for cell in ws[2]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal='center', vertical='center')

    for name, label in releve.FIELDS:
        ws.append([label, getattr(releve, name)])

    ws.append([])
    ws.append(['Données spécifiques'])
    ws.cell(row=ws.max_row, column=1).font = Font(bold=True)

    for key, value in payload_items(releve.payload):
        ws.append([key, _cell_value(value)])

    # Auto-size columns
    for i, col in enumerate(ws.columns, 1):
        max_length = max((len(str(cell.value)) for cell in col if cell.value is not None), default=0)
        ws.column_dimensions[get_column_letter(i)].width = min(max_length + 2, 50)

    bio = BytesIO()
    wb.save(bio)
    bio.seek(0)
    return bio
