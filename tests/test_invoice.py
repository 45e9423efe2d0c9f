import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

import pytest

from domains.core import NotFoundError, ValidationError
from domains.invoice_hub import (
    TAX_RATE,
    InvoiceDocument,
    InvoiceService,
    coerce_quantity,
    coerce_rate,
)


def test_totals_follow_fixed_tax_rate():
    doc = InvoiceDocument(client_name="Acme")
    doc.add_item("Logo design", quantity=2, rate=150)
    doc.add_item("Brand guide", quantity=1, rate=50)

    totals = doc.totals()
    assert TAX_RATE == Decimal("0.10")
    assert totals.subtotal == Decimal("350")
    assert totals.tax == Decimal("35")
    assert totals.total == Decimal("385")


def test_invalid_quantity_counts_as_zero():
    doc = InvoiceDocument()
    item = doc.add_item("Logo design", quantity=2, rate=100)
    doc.add_item("Brand guide", quantity=1, rate=150)

    updated = doc.update_item(item.id, "quantity", "abc")
    assert updated.quantity == 0
    assert doc.totals().subtotal == Decimal("150")
    assert doc.totals().total == Decimal("165")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("3", 3), ("2.7", 2), (4.0, 4), (-1, 0), ("", 0), (None, 0), ("nan", 0), (True, 0),
        ("sNaN", 0), ("1e3", 1000), ("1e100000000", 0), (10 ** 12, 0), (10 ** 12 - 1, 10 ** 12 - 1),
    ],
)
def test_quantity_coercion(raw, expected):
    assert coerce_quantity(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12.50", Decimal("12.50")), (0.1, Decimal("0.1")), ("-5", Decimal(0)), ("abc", Decimal(0)), ("inf", Decimal(0)),
        ("sNaN", Decimal(0)), ("2.5e2", Decimal("250")), ("1e1000000", Decimal(0)),
        ("100000000000000000000000000", Decimal(0)), ("999999999999.99", Decimal("999999999999.99")),
    ],
)
def test_rate_coercion(raw, expected):
    assert coerce_rate(raw) == expected


def test_oversized_numbers_never_break_totals():
    doc = InvoiceDocument()
    item = doc.add_item("Retainer", quantity=1, rate=100)

    doc.update_item(item.id, "rate", "100000000000000000000000000")
    assert doc.totals().total == Decimal("0.00")

    doc.update_item(item.id, "rate", "1e1000000")
    assert doc.totals().total == Decimal("0.00")

    doc.update_item(item.id, "rate", 100)
    doc.update_item(item.id, "quantity", "1e100000000")
    assert doc.get_item(item.id).quantity == 0
    assert doc.totals().subtotal == Decimal("0.00")


def test_largest_accepted_values_round_to_cents():
    doc = InvoiceDocument()
    doc.add_item("Licence", quantity=10 ** 12 - 1, rate="999999999999.99")
    doc.add_item("Licence", quantity=10 ** 12 - 1, rate="999999999999.99")

    totals = doc.totals()
    subtotal = Decimal("999999999999.99") * (10 ** 12 - 1) * 2
    assert totals.subtotal == subtotal
    assert totals.tax == (subtotal / 10).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    assert totals.total == totals.subtotal + totals.tax


def test_decimal_amounts_are_exact():
    doc = InvoiceDocument()
    doc.add_item(quantity=3, rate=0.1)
    assert doc.totals().subtotal == Decimal("0.30")


def test_new_item_defaults():
    doc = InvoiceDocument()
    item = doc.add_item()
    assert (item.description, item.quantity, item.rate) == ("", 1, Decimal(0))
    assert doc.items == (item,)


def test_unknown_field_is_rejected():
    doc = InvoiceDocument()
    item = doc.add_item()
    with pytest.raises(ValidationError):
        doc.update_item(item.id, "amount", 10)


def test_stale_item_edits_are_ignored():
    doc = InvoiceDocument()
    item = doc.add_item("Keep me", rate=10)
    assert doc.update_item("gone", "rate", 99) is None
    assert doc.remove_item("gone") is False
    assert doc.items == (item,)


def test_remove_item_updates_totals():
    doc = InvoiceDocument()
    first = doc.add_item(rate=100)
    doc.add_item(rate=50)
    assert doc.remove_item(first.id) is True
    assert doc.totals().total == Decimal("55")


def test_default_header():
    doc = InvoiceDocument()
    assert re.fullmatch(r"INV-\d{1,4}", doc.invoice_number)
    assert doc.invoice_date == date.today()

    doc.update_header(client_name="Studio North", invoice_date=date(2024, 6, 1))
    assert doc.to_dict()["client_name"] == "Studio North"
    assert doc.to_dict()["invoice_date"] == "2024-06-01"


def test_service_seeds_consultation_item():
    service = InvoiceService()
    doc = service.create_document(client_name="Acme")

    assert [(i.description, i.quantity, i.rate) for i in doc.items] == [("Design Consultation", 1, Decimal(150))]
    assert doc.totals().total == Decimal("165")


def test_service_lookup_and_delete():
    service = InvoiceService()
    older = service.create_document()
    newer = service.create_document(with_default_item=False)

    assert service.list_documents() == [newer, older]
    assert service.get_document(older.id) is older

    assert service.delete_document(older.id) is True
    with pytest.raises(NotFoundError):
        service.get_document(older.id)
    with pytest.raises(NotFoundError):
        service.add_item(older.id)


def test_invalid_rate_updates_totals_immediately():
    doc = InvoiceDocument()
    item = doc.add_item("Retainer", quantity=2, rate=150)
    assert doc.totals().total == Decimal("330")

    assert doc.update_item(item.id, "rate", "abc").rate == Decimal(0)
    assert doc.totals().total == Decimal("0")
