from __future__ import annotations

from datetime import datetime

import pytest

from slipscan.domain.receipt import UNKNOWN_STORE, LineItem, PaymentMethod, ReceiptCategory
from slipscan.receipt.ocr_result_parser import ReceiptParseError, parse_receipt, reconcile_amounts

SCENARIO_A = """CARGILLS FOOD CITY
14/11/2023 11:48:05
NO ITEM QTY PRICE AMOUNT
1 MILK 2.000 500.00 900.00
TOTAL 900.00
"""

SCENARIO_C = """CORNER SHOP
Bread 20.00
Milk 30.00
TOTAL 55.00
"""


def test_parse_receipt_table_layout() -> None:
    receipt = parse_receipt(SCENARIO_A)

    assert "CARGILLS FOOD CITY" in receipt.store_name
    assert receipt.date == datetime(2023, 11, 14, 11, 48, 5)
    assert receipt.date_is_placeholder is False
    assert receipt.items == [LineItem(name="Milk", price=900.0, quantity=2)]
    assert receipt.total == 900.0
    assert receipt.category is ReceiptCategory.GROCERIES


@pytest.mark.parametrize("text", ["", "   \n\t\n  "])
def test_parse_receipt_rejects_text_without_lines(text: str) -> None:
    with pytest.raises(ReceiptParseError):
        parse_receipt(text)


def test_receipt_parse_error_is_a_value_error() -> None:
    assert issubclass(ReceiptParseError, ValueError)


def test_missing_tax_is_derived_from_total() -> None:
    receipt = parse_receipt(SCENARIO_C)

    assert receipt.subtotal == 50.0
    assert receipt.tax == 5.0
    assert receipt.total == 55.0
    assert any("tax" in warning.message for warning in receipt.warnings)


@pytest.mark.parametrize(
    "text",
    [
        "STORE\nTOTAL $12.34",
        "Keells\nBread 5.00\nMilk 7.34\nTOTAL $12.34\nCASH $20.00\nCHANGE $7.66",
        "ITEM PRICE\nSoap 12.34\nSUBTOTAL 12.34\nTOTAL $12.34",
    ],
)
def test_total_line_is_read_exactly(text: str) -> None:
    assert parse_receipt(text).total == 12.34


def test_missing_date_defaults_to_now() -> None:
    before = datetime.now()
    receipt = parse_receipt("Shop\nBread 2.00\nTOTAL 2.00")
    after = datetime.now()

    assert before <= receipt.date <= after
    assert receipt.date_is_placeholder is True


def test_parse_receipt_is_idempotent() -> None:
    first = parse_receipt(SCENARIO_A)
    second = parse_receipt(SCENARIO_A)

    assert first.items == second.items
    assert first.store_name == second.store_name
    assert first.category is second.category
    assert first.payment_method is second.payment_method
    assert first.to_dict() == second.to_dict()


@pytest.mark.parametrize("store_line", ["KEELLS SUPER", "Keells - Kandy", "the keells outlet"])
def test_keells_is_always_groceries(store_line: str) -> None:
    receipt = parse_receipt(f"{store_line}\nVISA\nTOTAL 10.00")

    assert receipt.category is ReceiptCategory.GROCERIES
    assert receipt.payment_method is PaymentMethod.CARD


def test_subtotal_from_items_when_not_printed() -> None:
    receipt = parse_receipt("ITEM PRICE\nApples 3.00\n2 x Pears 1.50\nTOTAL 6.00")

    assert receipt.subtotal == pytest.approx(receipt.items_sum)
    assert receipt.subtotal == 6.0
    assert receipt.tax is None


def test_printed_amounts_are_not_overwritten() -> None:
    receipt = parse_receipt("Shop\nBread 20.00\nSUBTOTAL 19.00\nTAX 1.00\nTOTAL 25.00")

    assert receipt.subtotal == 19.0
    assert receipt.tax == 1.0
    assert receipt.total == 25.0


def test_garbage_text_degrades_to_defaults() -> None:
    receipt = parse_receipt("@@@\n###\n%%%")

    assert receipt.store_name == UNKNOWN_STORE
    assert receipt.items == []
    assert receipt.total is None
    assert receipt.category is ReceiptCategory.OTHER
    assert receipt.payment_method is PaymentMethod.OTHER


def test_custom_category_rules_take_precedence() -> None:
    rules = ((ReceiptCategory.RESTAURANT, ("corner deli",)),)

    receipt = parse_receipt("CORNER DELI\nTOTAL 8.00", category_rules=rules)

    assert receipt.category is ReceiptCategory.RESTAURANT


def test_reconcile_amounts_fills_subtotal_and_tax() -> None:
    items = [LineItem(name="A", price=10.0, quantity=2), LineItem(name="B", price=5.0)]

    amounts = reconcile_amounts(items, subtotal=None, tax=None, total=30.0)

    assert amounts.subtotal == 25.0
    assert amounts.tax == 5.0
    assert amounts.total == 30.0
    assert amounts.derived == ("subtotal", "tax")


def test_reconcile_amounts_leaves_tax_when_total_below_items() -> None:
    amounts = reconcile_amounts([LineItem(name="A", price=10.0)], subtotal=None, tax=None, total=8.0)

    assert amounts.subtotal == 10.0
    assert amounts.tax is None


def test_reconcile_amounts_derives_total() -> None:
    items = [LineItem(name="A", price=10.0, quantity=2), LineItem(name="B", price=5.0)]

    assert reconcile_amounts(items, subtotal=None, tax=2.5, total=None).total == 27.5
    assert reconcile_amounts([], subtotal=10.0, tax=1.0, total=None).total == 11.0
    assert reconcile_amounts([], subtotal=0.0, tax=0.0, total=None).total is None
    assert reconcile_amounts([], subtotal=None, tax=None, total=None).total is None
