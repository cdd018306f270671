"""PDF bill statement export.

The statement is a presentation artifact only: it is rendered from a
:class:`BillResponse` already returned by the Billing API and is never
read back.
"""

from __future__ import annotations

import asyncio
import io
from datetime import datetime, timezone
from pathlib import Path

import structlog
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from utility_billing.core.exceptions import ExportError
from utility_billing.core.types import BillResponse
from utility_billing.utils.formatting import (
    format_currency,
    format_percentage,
    format_rate,
    format_timestamp,
    format_units,
)

logger = structlog.get_logger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = A4
CENTER_X = PAGE_WIDTH / 2
LEFT = 20 * mm
INDENT = 30 * mm
RIGHT = 190 * mm


def _y(top_mm: float) -> float:
    """Convert a distance from the top edge (mm) to a reportlab y coordinate."""
    return PAGE_HEIGHT - top_mm * mm


def render_bill_pdf(bill: BillResponse) -> bytes:
    """Render *bill* as a one-page A4 statement and return the PDF bytes."""
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    c.setTitle("Utility Bill Statement")

    c.setFont("Helvetica", 20)
    c.drawCentredString(CENTER_X, _y(20), "Utility Bill Statement")

    c.setFont("Helvetica", 10)
    c.drawCentredString(CENTER_X, _y(30), f"Generated: {format_timestamp(bill.calculated_at)}")

    c.setLineWidth(0.5)
    c.line(LEFT, _y(35), RIGHT, _y(35))

    c.setFont("Helvetica", 12)
    y = 50.0
    c.drawString(LEFT, _y(y), "Consumption Details:")
    y += 10
    c.drawString(INDENT, _y(y), f"Units Consumed: {format_units(bill.units_consumed)}")
    y += 8
    c.drawString(INDENT, _y(y), f"Rate per Unit: {format_rate(bill.rate_per_unit)}")

    y += 15
    c.drawString(LEFT, _y(y), "Charges Breakdown:")
    y += 10
    c.drawString(INDENT, _y(y), f"Subtotal (Units × Rate): {format_currency(bill.subtotal)}")
    y += 8
    c.drawString(
        INDENT,
        _y(y),
        f"VAT ({format_percentage(bill.vat_percentage)}): {format_currency(bill.vat_amount)}",
    )
    y += 8
    c.drawString(
        INDENT, _y(y), f"Fixed Service Charge: {format_currency(bill.fixed_service_charge)}"
    )

    y += 15
    c.setLineWidth(0.3)
    c.line(LEFT, _y(y), RIGHT, _y(y))

    y += 10
    c.setFont("Helvetica-Bold", 14)
    c.drawString(INDENT, _y(y), f"Total Amount Payable: {format_currency(bill.total_amount)}")

    c.setFont("Helvetica", 8)
    c.drawCentredString(CENTER_X, _y(280), "Thank you for your business!")

    c.showPage()
    c.save()
    return buffer.getvalue()


def bill_pdf_filename(now: datetime | None = None) -> str:
    """``utility-bill-<epoch milliseconds>.pdf``"""
    moment = now or datetime.now(timezone.utc)
    return f"utility-bill-{int(moment.timestamp() * 1000)}.pdf"


async def export_bill_pdf(
    bill: BillResponse,
    directory: str | Path = ".",
    *,
    now: datetime | None = None,
) -> Path:
    """Write the statement for *bill* into *directory* using :func:`asyncio.to_thread`.

    Returns:
        Path of the written file.

    Raises:
        ExportError: If the file cannot be written.
    """
    dest = Path(directory) / bill_pdf_filename(now)
    payload = render_bill_pdf(bill)

    def _write() -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(payload)

    try:
        await asyncio.to_thread(_write)
    except OSError as exc:
        raise ExportError(f"Could not write bill statement to {dest}: {exc}") from exc
    logger.info("bill_pdf_exported", path=str(dest))
    return dest
