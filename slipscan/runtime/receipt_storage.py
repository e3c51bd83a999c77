"""Storage and retrieval of receipt records.

Every processed or failed receipt is one JSON file:

    receipts/
    ├── records/    - One JSON record per receipt (processed or failed)
    └── ocr_text/   - Raw OCR text kept for debugging

Record filenames follow YYYY-MM-DD_store_amount.json so a directory listing
is readable without opening files; the record id inside the file is the
stable identifier.
"""

import json
from pathlib import Path

from slipscan.domain.receipt import ReceiptRecord
from slipscan.runtime.logging import get_logger
from slipscan.runtime.paths import get_paths

logger = get_logger(__name__)

RECORD_SUFFIX = ".json"


def _records_dir(records_dir: Path | None) -> Path:
    target = records_dir if records_dir is not None else get_paths().receipts_records
    target.mkdir(parents=True, exist_ok=True)
    return target


def generate_record_filename(record: ReceiptRecord) -> str:
    """
    Generate filename for a record file.

    Format: YYYY-MM-DD_store_amount.json
    Failed records use the upload date and "failed" in place of the store;
    receipts whose date was not printed use "unknown-date".
    """
    receipt = record.receipt
    if receipt is None:
        return f"{record.created_at:%Y-%m-%d}_failed_{record.id[:8]}{RECORD_SUFFIX}"

    if receipt.date_is_placeholder:
        date_str = "unknown-date"
    else:
        date_str = receipt.date.strftime("%Y-%m-%d")

    store_clean = receipt.store_name.lower()
    store_clean = "".join(c if c.isalnum() else "_" for c in store_clean)
    store_clean = "_".join(filter(None, store_clean.split("_")))
    if not store_clean:
        store_clean = "unknown"
    if len(store_clean) > 30:
        store_clean = store_clean[:30]

    amount_str = f"{record.total:.2f}".replace(".", "_")
    return f"{date_str}_{store_clean}_{amount_str}{RECORD_SUFFIX}"


def save_receipt_record(record: ReceiptRecord, records_dir: Path | None = None) -> Path:
    """
    Save a record to the records directory.

    Returns:
        Path to the saved file
    """
    target_dir = _records_dir(records_dir)
    filename = generate_record_filename(record)
    filepath = target_dir / filename

    # Handle filename collisions by appending a counter
    counter = 1
    base_name = filepath.stem
    while filepath.exists():
        filepath = target_dir / f"{base_name}_{counter}{RECORD_SUFFIX}"
        counter += 1

    filepath.write_text(json.dumps(record.to_dict(), indent=2))
    logger.info("Saved %s receipt record to %s", record.processing_status, filepath)
    return filepath


def load_receipt_record(filepath: Path) -> ReceiptRecord:
    """Load a single record; raises FileNotFoundError or ValueError for bad files."""
    if not filepath.exists():
        raise FileNotFoundError(f"Receipt record not found: {filepath}")
    data = json.loads(filepath.read_text())
    return ReceiptRecord.from_dict(data)


def list_receipt_records(records_dir: Path | None = None) -> list[tuple[Path, ReceiptRecord]]:
    """
    Load every record in the records directory.

    Unreadable files are logged and skipped so one bad file does not hide
    the rest.
    """
    target_dir = _records_dir(records_dir)
    results: list[tuple[Path, ReceiptRecord]] = []
    for filepath in sorted(target_dir.glob(f"*{RECORD_SUFFIX}")):
        try:
            results.append((filepath, load_receipt_record(filepath)))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Failed to load %s: %s", filepath, e)
    return results


def find_receipt_record(record_id: str, records_dir: Path | None = None) -> tuple[Path, ReceiptRecord] | None:
    """Find a record by id. Returns (path, record) or None."""
    for filepath, record in list_receipt_records(records_dir):
        if record.id == record_id:
            return filepath, record
    return None


def delete_receipt_record(
    record_id: str,
    *,
    delete_image: bool = False,
    records_dir: Path | None = None,
) -> bool:
    """
    Delete a record by id.

    Args:
        record_id: Record identifier
        delete_image: Also remove the receipt image the record points at

    Returns:
        True if a record was deleted, False if no record has that id.
    """
    found = find_receipt_record(record_id, records_dir)
    if found is None:
        return False

    filepath, record = found
    filepath.unlink()
    logger.info("Deleted receipt record %s", filepath)

    if delete_image and record.image_path:
        image_path = Path(record.image_path)
        if image_path.exists():
            image_path.unlink()
            logger.info("Deleted receipt image %s", image_path)
    return True
