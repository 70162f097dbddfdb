"""ReportLab PDF Generation Service Implementation

Implements invoice PDF rendering using ReportLab library.
"""

from io import BytesIO
from typing import List, Optional
from xml.sax.saxutils import escape

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
from src.domain.business_profile import BusinessProfile
from src.domain.client import Client
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line import InvoiceLine

COLUMN_WIDTHS = [80 * mm, 20 * mm, 35 * mm, 35 * mm]


def format_hours(hours) -> str:
    return f"{hours:,.6f}".rstrip("0").rstrip(".")


def format_money(currency: str, amount) -> str:
    return f"{currency} {amount:,.2f}"


def paragraphs(lines: List[Optional[str]], style: ParagraphStyle) -> List[Paragraph]:
    return [Paragraph(escape(line), style) for line in lines if line]


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Layout: sender block, invoice details, bill-to block, line items,
    subtotal/tax/total, then payment instructions and notes.
    """

    def render_invoice(
        self,
        invoice: Invoice,
        client: Client,
        invoice_lines: List[InvoiceLine],
        profile: Optional[BusinessProfile] = None,
    ) -> bytes:
        """
        Render an invoice PDF

        Args:
            invoice: Invoice entity with billing details
            client: Client being billed
            invoice_lines: Line items of the invoice
            profile: Sender business details (optional)

        Returns:
            PDF document as bytes
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=f"Invoice {invoice.number}",
        )

        styles = getSampleStyleSheet()
        elements = []

        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=24,
            spaceAfter=10,
            textColor=colors.HexColor("#2C3E50"),
        )
        label_style = ParagraphStyle(
            "LabelStyle",
            parent=styles["Heading2"],
            fontSize=14,
            textColor=colors.HexColor("#2980B9"),
            spaceAfter=20,
        )
        header_style = ParagraphStyle(
            "HeaderStyle",
            parent=styles["Normal"],
            fontSize=10,
            textColor=colors.HexColor("#7F8C8D"),
        )
        normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontSize=10,
        )
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )

        # Sender
        if profile:
            elements.append(Paragraph(escape(profile.display_name), title_style))
            elements.extend(
                paragraphs(
                    [profile.address, profile.email, profile.phone, profile.website],
                    header_style,
                )
            )
        else:
            elements.append(Paragraph("Invoice", title_style))
        elements.append(Spacer(1, 10 * mm))

        status = InvoiceStatus(invoice.status)
        elements.append(Paragraph(f"INVOICE {escape(invoice.number)}", label_style))

        # Invoice details
        invoice_info = [
            ["Invoice Number:", invoice.number],
            ["Status:", status.value.upper()],
            ["Issue Date:", invoice.issue_date.strftime("%Y-%m-%d")],
            ["Due Date:", invoice.due_date.strftime("%Y-%m-%d") if invoice.due_date else "On receipt"],
            ["Currency:", invoice.currency],
        ]

        if invoice.paid_at:
            invoice_info.append(["Paid:", invoice.paid_at.strftime("%Y-%m-%d %H:%M:%S UTC")])

        invoice_table = Table(invoice_info, colWidths=[40 * mm, 100 * mm])
        invoice_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#7F8C8D")),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )

        elements.append(invoice_table)
        elements.append(Spacer(1, 10 * mm))

        # Bill to
        elements.append(Paragraph("Bill To:", bold_style))
        elements.extend(
            paragraphs([client.name, client.address, client.email, client.phone], normal_style)
        )
        elements.append(Spacer(1, 10 * mm))

        # Line items
        line_data = [["Description", "Hours", "Rate", "Amount"]]
        for line in sorted(invoice_lines, key=lambda item: item.position):
            line_data.append(
                [
                    Paragraph(escape(line.description), normal_style),
                    format_hours(line.hours),
                    format_money(invoice.currency, line.hourly_rate),
                    format_money(invoice.currency, line.amount),
                ]
            )

        line_table = Table(line_data, colWidths=COLUMN_WIDTHS, repeatRows=1)
        line_table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2C3E50")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 10),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    # Data rows
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    # Grid
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
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

        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        # Totals
        total_data = [
            ["", "", "Subtotal:", format_money(invoice.currency, invoice.subtotal)],
            ["", "", f"Tax ({invoice.tax_rate:.2f}%):",
             format_money(invoice.currency, invoice.total - invoice.subtotal)],
            ["", "", "Total:", format_money(invoice.currency, invoice.total)],
        ]
        total_table = Table(total_data, colWidths=COLUMN_WIDTHS)
        total_table.setStyle(
            TableStyle(
                [
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                    ("FONTNAME", (2, -1), (-1, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (2, -1), (-1, -1), 11),
                    ("LINEABOVE", (2, -1), (-1, -1), 1.5, colors.HexColor("#2C3E50")),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )

        elements.append(total_table)
        elements.append(Spacer(1, 15 * mm))

        footer_style = ParagraphStyle(
            "FooterNote",
            parent=styles["Normal"],
            fontSize=9,
            textColor=colors.HexColor("#95A5A6"),
        )

        if profile and profile.payment_instructions:
            elements.append(Paragraph("Payment Instructions:", bold_style))
            elements.append(Paragraph(escape(profile.payment_instructions), normal_style))
            elements.append(Spacer(1, 5 * mm))

        notes = invoice.notes or (profile.invoice_notes if profile else None)
        if notes:
            elements.append(Paragraph(f"<i>{escape(notes)}</i>", footer_style))

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
