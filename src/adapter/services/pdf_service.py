"""ReportLab PDF Generation Service Implementation

Implements invoice and receipt documents using ReportLab library.
"""

from io import BytesIO
from xml.sax.saxutils import escape
from typing import List, Dict
from decimal import Decimal

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.app.services.invoice_notifier import format_long_date
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.money import format_currency
from src.domain.payment_status import remaining_balance
from src.domain.receipt import Receipt

PRIMARY = colors.HexColor("#2C3E50")
MUTED = colors.HexColor("#7F8C8D")
GRID = colors.HexColor("#BDC3C7")

STATUS_COLORS = {
    InvoiceStatus.PAID: colors.HexColor("#27AE60"),
    InvoiceStatus.PARTIALLY_PAID: colors.HexColor("#F39C12"),
    InvoiceStatus.OVERDUE: colors.HexColor("#E74C3C"),
    InvoiceStatus.CANCELLED: colors.HexColor("#95A5A6"),
}


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Renders A4 invoices (with payment history) and payment receipts.
    """

    def _document(self, buffer: BytesIO) -> SimpleDocTemplate:
        return SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
        )

    def _styles(self) -> Dict[str, ParagraphStyle]:
        styles = getSampleStyleSheet()
        return {
            "title": ParagraphStyle(
                "TitleStyle",
                parent=styles["Heading1"],
                fontSize=24,
                spaceAfter=10,
                textColor=PRIMARY,
            ),
            "heading": ParagraphStyle(
                "DocumentHeading",
                parent=styles["Heading2"],
                fontSize=14,
                spaceAfter=12,
                textColor=PRIMARY,
            ),
            "header": ParagraphStyle(
                "HeaderStyle",
                parent=styles["Normal"],
                fontSize=10,
                textColor=MUTED,
            ),
            "normal": ParagraphStyle("NormalStyle", parent=styles["Normal"], fontSize=10),
            "bold": ParagraphStyle(
                "BoldStyle",
                parent=styles["Normal"],
                fontSize=10,
                fontName="Helvetica-Bold",
            ),
            "footer": ParagraphStyle(
                "FooterNote",
                parent=styles["Normal"],
                fontSize=9,
                textColor=colors.HexColor("#95A5A6"),
            ),
        }

    def _details_table(self, rows: List[List[str]]) -> Table:
        table = Table(rows, colWidths=[45 * mm, 110 * mm])
        table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), MUTED),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        return table

    def _grid_table(self, rows: List[List[str]], col_widths: List[float]) -> Table:
        table = Table(rows, colWidths=col_widths)
        table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), PRIMARY),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 10),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    # Data rows
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    ("GRID", (0, 0), (-1, -1), 0.5, GRID),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F8F9F9")],
                    ),
                ]
            )
        )
        return table

    def _totals_table(self, rows: List[List[str]]) -> Table:
        table = Table(rows, colWidths=[105 * mm, 30 * mm, 35 * mm])
        table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (1, 0), (-1, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                    ("LINEABOVE", (1, 0), (-1, 0), 1.5, PRIMARY),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                ]
            )
        )
        return table

    def _status_paragraph(self, status: InvoiceStatus, base: ParagraphStyle) -> Paragraph:
        color = STATUS_COLORS.get(status, PRIMARY)
        style = ParagraphStyle("StatusStyle", parent=base, textColor=color, fontName="Helvetica-Bold")
        return Paragraph(status.value.replace("_", " ").upper(), style)

    def generate_invoice(
        self,
        invoice: Invoice,
        receipts: List[Receipt],
        paid_amount: Decimal,
        company_name: str,
        company_address: str,
    ) -> bytes:
        buffer = BytesIO()
        doc = self._document(buffer)
        styles = self._styles()
        elements = []
        currency = invoice.currency

        # Header
        elements.append(Paragraph(escape(company_name), styles["title"]))
        elements.append(Paragraph(escape(company_address), styles["header"]))
        elements.append(Spacer(1, 10 * mm))
        elements.append(Paragraph(f"INVOICE #{invoice.invoice_number}", styles["heading"]))
        elements.append(self._status_paragraph(invoice.status, styles["normal"]))
        elements.append(Spacer(1, 5 * mm))

        elements.append(
            self._details_table(
                [
                    ["Invoice:", invoice.invoice_name],
                    ["Date:", format_long_date(invoice.issue_date)],
                    ["Due:", f"{format_long_date(invoice.due_on())} (Net {invoice.due_date})"],
                    ["Currency:", currency.value],
                ]
            )
        )
        elements.append(Spacer(1, 8 * mm))

        # Parties
        parties = Table(
            [
                [Paragraph("From:", styles["bold"]), Paragraph("Bill To:", styles["bold"])],
                [Paragraph(escape(invoice.from_name), styles["normal"]), Paragraph(escape(invoice.client_name), styles["normal"])],
                [Paragraph(escape(invoice.from_email), styles["normal"]), Paragraph(escape(invoice.client_email), styles["normal"])],
                [Paragraph(escape(invoice.from_address), styles["normal"]), Paragraph(escape(invoice.client_address), styles["normal"])],
            ],
            colWidths=[85 * mm, 85 * mm],
        )
        parties.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))
        elements.append(parties)
        elements.append(Spacer(1, 10 * mm))

        # Line item
        line_total = Decimal(invoice.invoice_item_rate) * invoice.invoice_item_quantity
        elements.append(
            self._grid_table(
                [
                    ["Description", "Quantity", "Rate", "Amount"],
                    [
                        invoice.invoice_item_description,
                        str(invoice.invoice_item_quantity),
                        format_currency(invoice.invoice_item_rate, currency),
                        format_currency(line_total, currency),
                    ],
                ],
                [80 * mm, 25 * mm, 30 * mm, 35 * mm],
            )
        )
        elements.append(Spacer(1, 5 * mm))

        # Totals, paid and remaining come from the ledger
        remaining = remaining_balance(Decimal(invoice.total), paid_amount)
        elements.append(
            self._totals_table(
                [
                    ["", "Total:", format_currency(invoice.total, currency)],
                    ["", "Paid:", format_currency(paid_amount, currency)],
                    ["", "Balance Due:", format_currency(remaining, currency)],
                ]
            )
        )

        # Payment history
        if receipts:
            elements.append(Spacer(1, 10 * mm))
            elements.append(Paragraph("Payment History", styles["heading"]))
            history = [["Receipt", "Date", "Method", "Amount"]]
            for receipt in receipts:
                history.append(
                    [
                        receipt.receipt_number,
                        receipt.payment_date.isoformat(),
                        receipt.payment_method,
                        format_currency(receipt.amount, currency),
                    ]
                )
            elements.append(self._grid_table(history, [45 * mm, 35 * mm, 50 * mm, 40 * mm]))

        if invoice.note:
            elements.append(Spacer(1, 10 * mm))
            elements.append(Paragraph("Note:", styles["bold"]))
            elements.append(Paragraph(escape(invoice.note), styles["normal"]))

        elements.append(Spacer(1, 15 * mm))
        elements.append(Paragraph("<i>Thank you for your business.</i>", styles["footer"]))

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes

    def generate_receipt(
        self,
        receipt: Receipt,
        invoice: Invoice,
        paid_amount: Decimal,
        company_name: str,
        company_address: str,
    ) -> bytes:
        buffer = BytesIO()
        doc = self._document(buffer)
        styles = self._styles()
        elements = []
        currency = invoice.currency

        elements.append(Paragraph(escape(company_name), styles["title"]))
        elements.append(Paragraph(escape(company_address), styles["header"]))
        elements.append(Spacer(1, 10 * mm))
        elements.append(Paragraph(f"PAYMENT RECEIPT {receipt.receipt_number}", styles["heading"]))

        elements.append(
            self._details_table(
                [
                    ["Received From:", invoice.client_name],
                    ["Email:", invoice.client_email],
                    ["Payment Date:", format_long_date(receipt.payment_date)],
                    ["Payment Method:", receipt.payment_method],
                    ["Reference:", receipt.reference or "-"],
                    ["For Invoice:", f"#{invoice.invoice_number} {invoice.invoice_name}"],
                ]
            )
        )
        elements.append(Spacer(1, 10 * mm))

        remaining = remaining_balance(Decimal(invoice.total), paid_amount)
        elements.append(
            self._totals_table(
                [
                    ["", "Amount Paid:", format_currency(receipt.amount, currency)],
                    ["", "Invoice Total:", format_currency(invoice.total, currency)],
                    ["", "Total Paid:", format_currency(paid_amount, currency)],
                    ["", "Balance:", format_currency(remaining, currency)],
                ]
            )
        )

        if receipt.note:
            elements.append(Spacer(1, 10 * mm))
            elements.append(Paragraph("Note:", styles["bold"]))
            elements.append(Paragraph(escape(receipt.note), styles["normal"]))

        elements.append(Spacer(1, 15 * mm))
        elements.append(
            Paragraph(
                "<i>This receipt confirms payment received against the invoice above.</i>",
                styles["footer"],
            )
        )

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
