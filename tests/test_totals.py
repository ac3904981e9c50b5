from checkout_console.services.totals import compute_totals

from .fakes import make_item


def test_totals_without_discount():
    items = [make_item(1, 100000, 2), make_item(2, 50000, 1)]

    totals = compute_totals(items)

    assert totals.subtotal == 250000
    assert totals.discount == 0
    assert totals.tax == 0
    assert totals.total == 250000


def test_totals_with_discount_rate():
    items = [make_item(1, 100000, 2), make_item(2, 50000, 1)]

    totals = compute_totals(items, discount_rate=0.10)

    assert totals.discount == 25000
    assert totals.total == 225000


def test_totals_of_empty_cart():
    totals = compute_totals([], discount_rate=0.2)

    assert totals.subtotal == 0
    assert totals.discount == 0
    assert totals.total == 0


def test_totals_payload_uses_wire_names():
    payload = compute_totals([make_item(1, 10, 3)]).to_payload()

    assert payload == {
        "subtotal_amount": 30,
        "discount_amount": 0,
        "tax_amount": 0,
        "total_amount": 30,
    }
