"""Runtime helpers for calling the OCR service (non-parsing)."""

import mimetypes
import time
from pathlib import Path

import httpx

from slipscan.runtime.logging import get_logger
from slipscan.runtime.paths import get_paths

logger = get_logger(__name__)

DEFAULT_OCR_URL = "http://localhost:8001"
DEFAULT_OCR_TIMEOUT = 60.0


class OCRServiceUnavailable(RuntimeError):
    """Raised when the OCR service cannot be reached or returns an error."""


def _extract_text(payload: object) -> str:
    if not isinstance(payload, dict):
        raise OCRServiceUnavailable("OCR service returned an unexpected payload")
    for key in ("full_text", "text"):
        value = payload.get(key)
        if isinstance(value, str):
            return value
    return ""


def call_ocr_service(
    image_path: Path,
    ocr_url: str,
    *,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_OCR_TIMEOUT,
) -> str:
    """
    Send a receipt image to the OCR service and return the recognized text.

    Args:
        image_path: Receipt image on disk
        ocr_url: Base URL of the OCR service; the request goes to {ocr_url}/ocr
        client: Optional httpx client (tests inject one with a mock transport)
        timeout: Request timeout in seconds

    Returns:
        Full recognized text; empty string when the service found none.

    Raises:
        OCRServiceUnavailable: on connection failure or non-200 response.
    """
    ocr_url = ocr_url.rstrip("/")
    logger.info("Sending receipt to OCR service at %s...", ocr_url)

    image_bytes = image_path.read_bytes()
    content_type = mimetypes.guess_type(image_path.name)[0] or "application/octet-stream"
    files = {"file": (image_path.name, image_bytes, content_type)}

    try:
        start_time = time.time()
        if client is None:
            response = httpx.post(f"{ocr_url}/ocr", files=files, timeout=timeout)
        else:
            response = client.post(f"{ocr_url}/ocr", files=files, timeout=timeout)
        elapsed_time = time.time() - start_time
        logger.info("OCR service returned in %.2f seconds", elapsed_time)
    except httpx.RequestError as e:
        logger.error("Failed to connect to OCR service: %s", e)
        raise OCRServiceUnavailable(f"Failed to connect to OCR service: {e}") from e

    if response.status_code != 200:
        # Response body may carry receipt text; log the status only.
        logger.error("OCR service error: %s", response.status_code)
        raise OCRServiceUnavailable(f"OCR service error: {response.status_code}")

    try:
        payload = response.json()
    except ValueError as e:
        raise OCRServiceUnavailable("OCR service returned invalid JSON") from e

    return _extract_text(payload)


def save_ocr_text(text: str, image_path: Path, ocr_dir: Path | None = None) -> Path:
    """Save raw OCR text for debugging."""
    target_dir = ocr_dir if ocr_dir is not None else get_paths().receipts_ocr_text
    target_dir.mkdir(parents=True, exist_ok=True)
    ocr_text_path = target_dir / f"{image_path.stem}.txt"
    ocr_text_path.write_text(text)
    logger.debug("OCR text saved to: %s", ocr_text_path)
    return ocr_text_path
