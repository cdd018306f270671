"""Tests for export/pdf.py — PDF bill statement."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest
import structlog

from utility_billing.core.exceptions import ExportError
from utility_billing.core.types import BillResponse
from utility_billing.export.pdf import bill_pdf_filename, export_bill_pdf, render_bill_pdf


@pytest.fixture
def bill(bill_payload: Any) -> BillResponse:
    return BillResponse.model_validate(bill_payload(units=100))


def test_render_returns_pdf_document(bill: BillResponse) -> None:
    data = render_bill_pdf(bill)
    assert data.startswith(b"%PDF")
    assert data.rstrip().endswith(b"%%EOF")


def test_render_is_one_page(bill: BillResponse) -> None:
    assert b"/Count 1" in render_bill_pdf(bill)


def test_filename_uses_epoch_milliseconds() -> None:
    assert bill_pdf_filename(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)) == "utility-bill-1000.pdf"
    moment = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
    assert bill_pdf_filename(moment) == "utility-bill-1792411200000.pdf"


def test_filename_defaults_to_now() -> None:
    name = bill_pdf_filename()
    assert name.startswith("utility-bill-")
    assert name.endswith(".pdf")
    assert name.removeprefix("utility-bill-").removesuffix(".pdf").isdigit()


async def test_export_writes_file(tmp_path: Path, bill: BillResponse) -> None:
    moment = datetime(1970, 1, 1, 0, 0, 2, tzinfo=timezone.utc)
    with structlog.testing.capture_logs() as logs:
        path = await export_bill_pdf(bill, tmp_path / "statements", now=moment)

    assert path == tmp_path / "statements" / "utility-bill-2000.pdf"
    assert path.read_bytes().startswith(b"%PDF")
    assert logs[-1]["event"] == "bill_pdf_exported"


async def test_export_failure_raises_export_error(tmp_path: Path, bill: BillResponse) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")
    with pytest.raises(ExportError, match="Could not write bill statement"):
        await export_bill_pdf(bill, blocker)
