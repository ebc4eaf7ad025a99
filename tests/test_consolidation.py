from __future__ import annotations

from pickops.domain.orders.aggregates import Order, OrderItem
from pickops.picking.consolidation import consolidate, summarize_pick_list


def test_same_sku_across_orders_becomes_one_row(make_order):
    orders = [
        make_order("o1", items=[("TSH-001", "T-Shirt", 2, "A-01")]),
        make_order("o2", items=[("TSH-001", "T-Shirt", 3, "A-01")]),
        make_order("o3", items=[("TSH-001", "T-Shirt", 1, "A-01")]),
    ]
    items = consolidate(orders)

    assert len(items) == 1
    row = items[0]
    assert row.sku == "TSH-001"
    assert row.total_quantity == 6
    assert [(c.order_id, c.quantity) for c in row.orders] == [("o1", 2), ("o2", 3), ("o3", 1)]
    assert row.orders[0].order_number == "#o1"


def test_quantity_is_conserved(make_order):
    orders = [
        make_order("o1", items=[("A", "Alpha", 2, "B-02"), ("B", "Beta", 1, None)]),
        make_order("o2", items=[("B", "Beta", 4, "C-01"), ("C", "Gamma", 5, "A-09")]),
        make_order("o3", items=[("A", "Alpha", 3, "B-02")]),
    ]
    items = consolidate(orders)

    line_total = sum(line.quantity for o in orders for line in o.items)
    assert sum(ci.total_quantity for ci in items) == line_total
    for ci in items:
        assert ci.total_quantity == sum(c.quantity for c in ci.orders)
    assert len({ci.sku for ci in items}) == len(items)


def test_sorted_by_location_with_missing_locations_first(make_order):
    orders = [
        make_order("o1", items=[("Z", "Zed", 1, "C-01"), ("Y", "Why", 1, None)]),
        make_order("o2", items=[("X", "Ex", 1, "A-01"), ("W", "Dub", 1, None)]),
    ]
    items = consolidate(orders)

    assert [ci.sku for ci in items] == ["Y", "W", "X", "Z"]
    assert items[0].location is None


def test_location_is_never_fabricated_but_taken_from_a_later_line(make_order):
    orders = [
        make_order("o1", items=[("A", "Alpha", 1, None)]),
        make_order("o2", items=[("A", "Alpha", 1, "D-04")]),
        make_order("o3", items=[("B", "Beta", 1, None)]),
    ]
    by_sku = {ci.sku: ci for ci in consolidate(orders)}

    assert by_sku["A"].location == "D-04"
    assert by_sku["B"].location is None


def test_unusable_lines_and_item_less_orders_are_skipped():
    orders = [
        Order(
            id="o1",
            items=[
                OrderItem(sku=None, name="no sku", quantity=2),
                OrderItem(sku="  ", name="blank sku", quantity=2),
                OrderItem(sku="A", name="zero", quantity=0),
                OrderItem(sku="A", name="negative", quantity=-1),
                OrderItem(sku="A", name="missing"),
                OrderItem(sku="A", name="Alpha", quantity=2),
            ],
        ),
        Order(id="o2", item_count=7, items=None),
    ]
    items = consolidate(orders)

    assert len(items) == 1
    assert items[0].total_quantity == 2
    assert [c.order_id for c in items[0].orders] == ["o1"]


def test_duplicate_lines_in_one_order_are_merged(make_order):
    orders = [make_order("o1", items=[("A", "Alpha", 2, "A-01"), ("A", "Alpha", 3, "A-01")])]
    items = consolidate(orders)

    assert items[0].total_quantity == 5
    assert len(items[0].orders) == 1
    assert items[0].orders[0].quantity == 5


def test_pick_list_summary(make_order):
    orders = [
        make_order("o1", items=[("A", "Alpha", 2, None)]),
        make_order("o2", items=[("B", "Beta", 3, None)]),
        make_order("o3", items=[]),
    ]
    summary = summarize_pick_list(orders, consolidate(orders))
    assert (summary.total_orders, summary.total_units, summary.unique_skus) == (3, 5, 2)


def test_order_from_dict_accepts_camel_case():
    order = Order.from_dict(
        {
            "id": 42,
            "orderNumber": "1042",
            "fulfillmentStatus": "PICKING",
            "itemCount": "3",
            "items": [{"sku": "A", "name": "Alpha", "quantity": 3, "location": "A-01"}],
        }
    )
    assert order.id == "42"
    assert order.display_number == "1042"
    assert order.fulfillment_status == "PICKING"
    assert order.item_count == 3
    assert consolidate([order])[0].location == "A-01"


def test_numeric_skus_and_locations_from_json_are_handled():
    orders = [
        Order.from_dict({"id": "o1", "items": [{"sku": 12345, "name": "Numbered", "quantity": 2, "location": 7}]}),
        Order.from_dict({"id": "o2", "items": [{"sku": "12345", "quantity": 1, "location": "A-01"}]}),
        Order.from_dict({"id": "o3", "items": [{"sku": "B", "quantity": 1, "location": "A-01"}]}),
    ]
    items = consolidate(orders)

    assert [(ci.sku, ci.location, ci.total_quantity) for ci in items] == [("12345", "7", 3), ("B", "A-01", 1)]


def test_mixed_location_types_sort_without_error():
    orders = [
        Order(id="o1", items=[OrderItem(sku="A", quantity=1, location=7), OrderItem(sku="B", quantity=1, location="A-01")]),
        Order(id="o2", items=[OrderItem(sku=99, quantity=1)]),
    ]
    items = consolidate(orders)

    assert [ci.sku for ci in items] == ["99", "A", "B"]
    assert items[1].location == "7"


def test_fractional_quantities_are_skipped():
    orders = [
        Order(
            id="o1",
            items=[
                OrderItem(sku="A", quantity=2.5),
                OrderItem(sku="B", quantity=3.0),
                OrderItem(sku="C", quantity="1.5"),
            ],
        )
    ]
    items = consolidate(orders)

    assert [(ci.sku, ci.total_quantity) for ci in items] == [("B", 3)]
