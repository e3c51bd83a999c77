"""Data models for receipt parsing."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Literal

UNKNOWN_STORE = "Unknown Store"


class ReceiptCategory(str, Enum):
    """Spending category derived from the store name."""

    GROCERIES = "groceries"
    RESTAURANT = "restaurant"
    GAS = "gas"
    PHARMACY = "pharmacy"
    RETAIL = "retail"
    OTHER = "other"


class PaymentMethod(str, Enum):
    """How the receipt was paid."""

    CASH = "cash"
    CARD = "card"
    DIGITAL = "digital"
    OTHER = "other"


ProcessingStatus = Literal["pending", "processed", "failed"]


@dataclass
class LineItem:
    """A single line item on a receipt."""

    name: str
    price: float
    quantity: float = 1

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "price": self.price, "quantity": self.quantity}


@dataclass
class ReceiptWarning:
    """Parser warning attached to a nearby item position."""

    message: str
    # Insert warning after this item index when displaying. None means no anchor.
    after_item_index: int | None = None


@dataclass
class ParsedReceipt:
    """Structured receipt data extracted from OCR text."""

    store_name: str
    date: datetime
    date_is_placeholder: bool = False
    items: list[LineItem] = field(default_factory=list)
    subtotal: float | None = None
    tax: float | None = None
    total: float | None = None
    category: ReceiptCategory = ReceiptCategory.OTHER
    payment_method: PaymentMethod = PaymentMethod.OTHER
    warnings: list[ReceiptWarning] = field(default_factory=list)

    @property
    def items_sum(self) -> float:
        return sum(item.line_total for item in self.items)

    def to_dict(self) -> dict[str, Any]:
        return {
            "store_name": self.store_name,
            "date": self.date.isoformat(),
            "date_is_placeholder": self.date_is_placeholder,
            "items": [item.to_dict() for item in self.items],
            "subtotal": self.subtotal,
            "tax": self.tax,
            "total": self.total,
            "category": self.category.value,
            "payment_method": self.payment_method.value,
            "warnings": [
                {"message": w.message, "after_item_index": w.after_item_index} for w in self.warnings
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ParsedReceipt":
        return cls(
            store_name=data.get("store_name") or UNKNOWN_STORE,
            date=datetime.fromisoformat(data["date"]),
            date_is_placeholder=bool(data.get("date_is_placeholder", False)),
            items=[
                LineItem(name=i["name"], price=float(i["price"]), quantity=float(i.get("quantity", 1)))
                for i in data.get("items", [])
            ],
            subtotal=data.get("subtotal"),
            tax=data.get("tax"),
            total=data.get("total"),
            category=ReceiptCategory(data.get("category", ReceiptCategory.OTHER.value)),
            payment_method=PaymentMethod(data.get("payment_method", PaymentMethod.OTHER.value)),
            warnings=[
                ReceiptWarning(message=w["message"], after_item_index=w.get("after_item_index"))
                for w in data.get("warnings", [])
            ],
        )


@dataclass
class ReceiptRecord:
    """A receipt as handed to storage: parse output plus upload metadata."""

    id: str
    image_path: str
    processing_status: ProcessingStatus
    created_at: datetime
    ocr_text: str = ""
    user_id: str | None = None
    receipt: ParsedReceipt | None = None
    error: str | None = None

    @property
    def total(self) -> float:
        """Money value used for filtering and analytics (failed records count as 0)."""
        if self.receipt is None or self.receipt.total is None:
            return 0.0
        return self.receipt.total

    @property
    def effective_date(self) -> datetime:
        """Receipt date when parsed, upload time otherwise."""
        if self.receipt is None:
            return self.created_at
        return self.receipt.date

    @property
    def category(self) -> ReceiptCategory:
        if self.receipt is None:
            return ReceiptCategory.OTHER
        return self.receipt.category

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "image_path": self.image_path,
            "processing_status": self.processing_status,
            "created_at": self.created_at.isoformat(),
            "ocr_text": self.ocr_text,
            "user_id": self.user_id,
            "receipt": self.receipt.to_dict() if self.receipt is not None else None,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReceiptRecord":
        receipt_data = data.get("receipt")
        return cls(
            id=str(data["id"]),
            image_path=str(data.get("image_path", "")),
            processing_status=data.get("processing_status", "pending"),
            created_at=datetime.fromisoformat(data["created_at"]),
            ocr_text=str(data.get("ocr_text", "")),
            user_id=data.get("user_id"),
            receipt=ParsedReceipt.from_dict(receipt_data) if receipt_data else None,
            error=data.get("error"),
        )
