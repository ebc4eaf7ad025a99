from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from pickops.domain.orders.aggregates import Order, OrderItem

logger = logging.getLogger(__name__)


@dataclass
class OrderContribution:
    order_id: str
    order_number: str
    quantity: int


@dataclass
class ConsolidatedItem:
    sku: str
    name: str
    total_quantity: int
    location: str | None = None
    orders: list[OrderContribution] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "sku": self.sku,
            "name": self.name,
            "total_quantity": self.total_quantity,
            "location": self.location,
            "orders": [
                {"order_id": c.order_id, "order_number": c.order_number, "quantity": c.quantity}
                for c in self.orders
            ],
        }


@dataclass(frozen=True)
class PickListSummary:
    total_orders: int
    total_units: int
    unique_skus: int


def _usable_quantity(item: OrderItem) -> int | None:
    qty = item.quantity
    if isinstance(qty, bool) or qty is None:
        return None
    if isinstance(qty, float) and not qty.is_integer():
        return None
    try:
        value = int(qty)
    except (TypeError, ValueError, OverflowError):
        return None
    return value if value > 0 else None


def _location(item: OrderItem) -> str | None:
    if item.location is None:
        return None
    return str(item.location).strip() or None


def _order_lines(order: Order) -> list[tuple[str, OrderItem, int]]:
    """Per-SKU lines of one order, duplicate SKUs summed, first-seen order kept."""
    merged: dict[str, tuple[OrderItem, int]] = {}
    for item in order.items or []:
        sku = str(item.sku).strip() if item.sku is not None else ""
        qty = _usable_quantity(item)
        if not sku or qty is None:
            logger.debug("skipping unusable line order_id=%s sku=%r quantity=%r", order.id, item.sku, item.quantity)
            continue
        if sku in merged:
            first, total = merged[sku]
            merged[sku] = (first, total + qty)
        else:
            merged[sku] = (item, qty)
    return [(sku, item, qty) for sku, (item, qty) in merged.items()]


def consolidate(orders: Iterable[Order]) -> list[ConsolidatedItem]:
    by_sku: dict[str, ConsolidatedItem] = {}
    for order in orders:
        if order.items is None:
            continue
        for sku, item, qty in _order_lines(order):
            contribution = OrderContribution(order_id=order.id, order_number=order.display_number, quantity=qty)
            existing = by_sku.get(sku)
            if existing is None:
                by_sku[sku] = ConsolidatedItem(
                    sku=sku,
                    name=item.name,
                    total_quantity=qty,
                    location=_location(item),
                    orders=[contribution],
                )
                continue
            existing.total_quantity += qty
            existing.orders.append(contribution)
            if existing.location is None:
                existing.location = _location(item)

    # sorted() is stable, so equal locations keep first-seen order.
    return sorted(by_sku.values(), key=lambda ci: ci.location or "")


def summarize_pick_list(orders: Iterable[Order], items: list[ConsolidatedItem]) -> PickListSummary:
    order_list = list(orders)
    return PickListSummary(
        total_orders=len(order_list),
        total_units=sum(ci.total_quantity for ci in items),
        unique_skus=len(items),
    )
