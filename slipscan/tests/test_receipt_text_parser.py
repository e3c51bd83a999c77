from slipscan.domain.receipt import LineItem, ReceiptWarning
from slipscan.receipt.ocr_parser.items_text_parser import extract_items


def test_extract_items_reads_four_column_row_with_line_amount() -> None:
    lines = [
        "KEELLS SUPER",
        "Colombo 03",
        "NO ITEM QTY PRICE AMOUNT",
        "1 SUGAR 1,500 300.00 450.00",
        "SUB TOTAL 450.00",
        "Thank you",
    ]

    items = extract_items(lines)

    # Quantity columns use comma as the decimal separator.
    assert items == [LineItem(name="Sugar", price=450.0, quantity=1.5)]


def test_extract_items_joins_name_and_price_split_across_lines() -> None:
    lines = [
        "ITEM PRICE",
        "Fresh Milk",
        "Rs. 250.00",
        "TOTAL 250.00",
    ]

    assert extract_items(lines) == [LineItem(name="Fresh Milk", price=250.0, quantity=1)]


def test_extract_items_reads_quantity_prefixed_rows() -> None:
    assert extract_items(["2 x Coke 300.00"]) == [LineItem(name="Coke", price=300.0, quantity=2)]


def test_extract_items_reads_loose_name_price_rows() -> None:
    items = extract_items(["Tea....120.00", "Rice: Rs.450/="])

    assert [(item.name, item.price) for item in items] == [("Tea", 120.0), ("Rice", 450.0)]


def test_extract_items_ignores_lines_before_table_header() -> None:
    lines = [
        "Bakery Corner 12.00",
        "ITEMS:",
        "Bread Wheat $2.49",
        "TOTAL $2.49",
    ]

    assert extract_items(lines) == [LineItem(name="Bread Wheat", price=2.49, quantity=1)]


def test_extract_items_without_header_scans_whole_receipt() -> None:
    lines = ["CORNER SHOP", "Bread 20.00", "Milk 30.00", "TOTAL 55.00"]

    items = extract_items(lines)

    assert [item.name for item in items] == ["Bread", "Milk"]


def test_footer_boilerplate_closes_item_section() -> None:
    lines = ["Bread 2.50", "-----------", "Gift Card 5.00"]

    assert extract_items(lines) == [LineItem(name="Bread", price=2.5, quantity=1)]


def test_summary_lines_never_become_items() -> None:
    lines = ["ITEM PRICE", "Bread 2.50", "SUBTOTAL 2.50", "TAX 0.25", "TOTAL 2.75", "CASH 5.00", "CHANGE 2.25"]

    assert extract_items(lines) == [LineItem(name="Bread", price=2.5, quantity=1)]


def test_orphan_price_inside_section_produces_warning() -> None:
    warnings: list[ReceiptWarning] = []
    lines = ["ITEM PRICE", "Bread 2.50", "4.99", "TOTAL 7.49"]

    items = extract_items(lines, warning_sink=warnings)

    assert items == [LineItem(name="Bread", price=2.5, quantity=1)]
    assert len(warnings) == 1
    assert "4.99" in warnings[0].message
    assert warnings[0].after_item_index == 0


def test_implausible_item_price_is_dropped_with_warning() -> None:
    warnings: list[ReceiptWarning] = []

    items = extract_items(["ITEM PRICE", "TV 75,000.00"], warning_sink=warnings)

    assert items == []
    assert len(warnings) == 1
    assert "implausible" in warnings[0].message
    assert warnings[0].after_item_index is None


def test_duplicate_rows_are_kept() -> None:
    items = extract_items(["ITEM PRICE", "Milk 1.99", "Milk 1.99", "TOTAL 3.98"])

    assert len(items) == 2


def test_extracted_items_respect_price_and_quantity_bounds() -> None:
    lines = [
        "NO ITEM QTY PRICE AMOUNT",
        "1 RICE 0 100.00 0.00",
        "2 DHAL 1 320.00 320.00",
        "Gold Bar 99,999.00",
        "Candy 0.00",
        "TOTAL 320.00",
    ]

    items = extract_items(lines)

    assert [item.name for item in items] == ["Dhal"]
    assert all(0 < item.price < 50_000 and item.quantity > 0 for item in items)


def test_extract_items_reads_whole_unit_prices() -> None:
    items = extract_items(["SHOP", "Bread 5", "Milk 7", "TOTAL 12"])

    assert items == [LineItem(name="Bread", price=5.0, quantity=1), LineItem(name="Milk", price=7.0, quantity=1)]


def test_zero_padded_numbers_are_not_prices() -> None:
    assert extract_items(["Colombo 03", "Bread 5.00"]) == [LineItem(name="Bread", price=5.0, quantity=1)]


def test_item_count_footer_does_not_reopen_item_section() -> None:
    lines = [
        "KEELLS SUPER",
        "NO ITEM QTY PRICE AMOUNT",
        "1 SUGAR 1.000 300.00 300.00",
        "NET TOTAL 300.00",
        "CASH 500.00",
        "BALANCE 200.00",
        "No. of Items : 1",
        "Nexus Points Earned 3.00",
        "Thank You",
    ]

    assert extract_items(lines) == [LineItem(name="Sugar", price=300.0, quantity=1)]


def test_item_count_footer_without_header_keeps_implicit_section() -> None:
    lines = ["CORNER SHOP", "Bread 20.00", "TOTAL 20.00", "No. of Items : 1", "Points Earned 2.00"]

    assert [item.name for item in extract_items(lines)] == ["Bread"]


def test_rupee_total_without_decimals_closes_item_section() -> None:
    lines = ["CARGILLS", "Rice Rs. 450", "Dhal 320/=", "TOTAL Rs. 770/=", "Paid by VISA Rs. 770"]

    items = extract_items(lines)

    assert [(item.name, item.price) for item in items] == [("Rice", 450.0), ("Dhal", 320.0)]


def test_registration_numbers_do_not_close_item_section() -> None:
    lines = ["VAT Reg No 123456", "ITEM PRICE", "Bread 2.50", "TOTAL 2.50"]

    assert extract_items(lines) == [LineItem(name="Bread", price=2.5, quantity=1)]
