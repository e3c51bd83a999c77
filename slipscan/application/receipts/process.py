"""Receipt processing workflow orchestration."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Literal

from slipscan.domain.receipt import ParsedReceipt, ReceiptRecord
from slipscan.receipt.ocr_result_parser import ReceiptParseError, parse_receipt
from slipscan.runtime import get_logger, load_store_category_rules
from slipscan.runtime.ocr_client import OCRServiceUnavailable, call_ocr_service, save_ocr_text
from slipscan.runtime.receipt_storage import save_receipt_record

logger = get_logger(__name__)

ProcessStatus = Literal[
    "file_not_found",
    "ocr_unavailable",
    "failed",
    "processed",
]

NO_TEXT_ERROR = "No text detected in the image"


@dataclass(frozen=True)
class ReceiptProcessRequest:
    """Inputs for running the receipt processing workflow."""

    image_path: Path
    ocr_url: str
    user_id: str | None = None
    # Replaces the OCR service call; receives the image path, returns its text.
    extract_text: Callable[[Path], str] | None = None
    records_dir: Path | None = None


@dataclass(frozen=True)
class ReceiptProcessResult:
    """Outcome from receipt processing workflow."""

    status: ProcessStatus
    record: ReceiptRecord | None = None
    record_path: Path | None = None
    error: str | None = None

    @property
    def receipt(self) -> ParsedReceipt | None:
        return self.record.receipt if self.record is not None else None


def _save_failed(
    request: ReceiptProcessRequest,
    record_id: str,
    created_at: datetime,
    error: str,
) -> ReceiptProcessResult:
    record = ReceiptRecord(
        id=record_id,
        image_path=str(request.image_path),
        processing_status="failed",
        created_at=created_at,
        ocr_text=error,
        user_id=request.user_id,
        error=error,
    )
    record_path = save_receipt_record(record, request.records_dir)
    return ReceiptProcessResult(status="failed", record=record, record_path=record_path, error=error)


def run_receipt_processing(request: ReceiptProcessRequest) -> ReceiptProcessResult:
    """Run processing flow: OCR -> parse -> save record (processed or failed)."""
    if not request.image_path.exists():
        return ReceiptProcessResult(
            status="file_not_found",
            error=f"Receipt file not found: {request.image_path}",
        )

    record_id = uuid.uuid4().hex
    created_at = datetime.now()

    if request.extract_text is not None:
        ocr_text = request.extract_text(request.image_path)
    else:
        try:
            ocr_text = call_ocr_service(request.image_path, request.ocr_url)
        except OCRServiceUnavailable as exc:
            return ReceiptProcessResult(status="ocr_unavailable", error=str(exc))
        save_ocr_text(ocr_text, request.image_path)

    if not ocr_text.strip():
        logger.warning("OCR returned no text for %s", request.image_path)
        return _save_failed(request, record_id, created_at, NO_TEXT_ERROR)

    try:
        receipt = parse_receipt(ocr_text, category_rules=load_store_category_rules())
    except ReceiptParseError as exc:
        logger.warning("Receipt parsing failed for %s: %s", request.image_path, exc)
        return _save_failed(request, record_id, created_at, str(exc))

    record = ReceiptRecord(
        id=record_id,
        image_path=str(request.image_path),
        processing_status="processed",
        created_at=created_at,
        ocr_text=ocr_text,
        user_id=request.user_id,
        receipt=receipt,
    )
    record_path = save_receipt_record(record, request.records_dir)
    return ReceiptProcessResult(status="processed", record=record, record_path=record_path)
