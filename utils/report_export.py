from datetime import datetime
from decimal import Decimal
from io import BytesIO

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from utils.ledger import sum_field, to_decimal

REPORT_TYPES = ("summary", "debtors")

TITLES = {
    "summary": "Business Summary",
    "debtors": "Outstanding Customer Debt",
}


def _money(value) -> str:
    return f"${float(value):,.2f}"

def _as_text(rows):
    return [[_money(v) if isinstance(v, Decimal) else str(v) for v in row] for row in rows]

def _summary_rows(data):
    return [
        ["Customers", data["total_customers"]],
        ["Inventory items", data["total_inventory"]],
        ["Low stock items", data["low_stock_items"]],
        ["Total sales", to_decimal(data["total_transactions"])],
        ["Total payments", to_decimal(data["total_payments"])],
        ["Outstanding debt", to_decimal(data["total_debt"])],
    ]

def _recent_rows(data):
    rows = [["Customer", "Item", "Qty", "Total"]]
    for t in data["recent_transactions"]:
        rows.append([t["customer_name"], t["item_name"], t["quantity"], to_decimal(t["total"])])
    return rows

def _debtor_rows(debtors):
    rows = [["Customer", "Debt"]]
    for d in debtors:
        rows.append([d["name"], to_decimal(d["debt"])])
    rows.append(["Total", sum_field(debtors, "debt")])
    return rows


def generate_pdf_report(report_type: str, data) -> bytes:
    """
    Render a report as PDF.

    ``data`` is the summary dict for ``summary`` and the list of debtor dicts
    for ``debtors``.
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        rightMargin=72,
        leftMargin=72,
        topMargin=72,
        bottomMargin=72
    )
    elements = []
    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        'TitleStyle',
        parent=styles['Title'],
        fontSize=16,
        textColor=colors.navy,
        spaceAfter=12
    )
    heading_style = ParagraphStyle(
        'HeadingStyle',
        parent=styles['Heading3'],
        fontSize=12,
        textColor=colors.navy,
        spaceBefore=12,
        spaceAfter=6
    )

    elements.append(Paragraph(TITLES[report_type], title_style))
    elements.append(Paragraph(f"Generated {datetime.now().strftime('%d %B %Y %H:%M')}", styles['Normal']))
    elements.append(Spacer(1, 20))

    total_row_style = [
        ('ALIGN', (0, 0), (0, -1), 'LEFT'),
        ('ALIGN', (-1, 0), (-1, -1), 'RIGHT'),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('LINEBELOW', (0, 0), (-1, 0), 1, colors.black),
    ]

    if report_type == "summary":
        elements.append(Paragraph("Overview", heading_style))
        overview = Table(_as_text(_summary_rows(data)), colWidths=[4*inch, 2*inch])
        overview.setStyle(TableStyle([
            ('ALIGN', (0, 0), (0, -1), 'LEFT'),
            ('ALIGN', (1, 0), (1, -1), 'RIGHT'),
            ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
            ('BACKGROUND', (0, -1), (-1, -1), colors.lightgrey),
            ('LINEABOVE', (0, -1), (-1, -1), 1, colors.black),
        ]))
        elements.append(overview)

        elements.append(Paragraph("Top Debtors", heading_style))
        debtors = Table(_as_text(_debtor_rows(data["top_debtors"])), colWidths=[4*inch, 2*inch])
        debtors.setStyle(TableStyle(total_row_style + [
            ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
            ('LINEABOVE', (0, -1), (-1, -1), 1, colors.black),
        ]))
        elements.append(debtors)

        elements.append(Paragraph("Recent Sales", heading_style))
        recent = Table(_as_text(_recent_rows(data)), colWidths=[2*inch, 2*inch, 0.75*inch, 1.25*inch])
        recent.setStyle(TableStyle(total_row_style))
        elements.append(recent)
    else:
        table = Table(_as_text(_debtor_rows(data)), colWidths=[4*inch, 2*inch])
        table.setStyle(TableStyle(total_row_style + [
            ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
            ('BACKGROUND', (0, -1), (-1, -1), colors.lightgrey),
            ('LINEABOVE', (0, -1), (-1, -1), 1, colors.black),
        ]))
        elements.append(table)

    doc.build(elements)
    return buffer.getvalue()


def generate_excel_report(report_type: str, data) -> bytes:
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Summary" if report_type == "summary" else "Debtors"

    title_font = Font(name='Arial', size=14, bold=True, color='000080')
    header_font = Font(name='Arial', size=11, bold=True)
    normal_font = Font(name='Arial', size=10)
    header_fill = PatternFill(start_color='E0E0E0', end_color='E0E0E0', fill_type='solid')
    border = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    ws["A1"] = TITLES[report_type]
    ws["A1"].font = title_font
    ws["A2"] = f"Generated {datetime.now().strftime('%d %B %Y %H:%M')}"

    current_row = 4

    def write_table(rows, start_row):
        row_number = start_row
        for index, row in enumerate(rows):
            for col, value in enumerate(row, start=1):
                cell = ws.cell(row=row_number, column=col)
                cell.value = value
                if isinstance(value, str):
                    # names come from user input; keep them out of formula parsing
                    cell.data_type = 's'
                else:
                    cell.alignment = Alignment(horizontal='right')
                    if isinstance(value, Decimal):
                        cell.number_format = '#,##0.00'
                cell.font = header_font if index == 0 else normal_font
                cell.border = border
                if index == 0:
                    cell.fill = header_fill
            row_number += 1
        return row_number + 1

    if report_type == "summary":
        current_row = write_table([["Metric", "Value"]] + _summary_rows(data), current_row)
        current_row = write_table(_debtor_rows(data["top_debtors"]), current_row)
        write_table(_recent_rows(data), current_row)
    else:
        write_table(_debtor_rows(data), current_row)

    for col in range(1, 5):
        ws.column_dimensions[get_column_letter(col)].width = 24

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
