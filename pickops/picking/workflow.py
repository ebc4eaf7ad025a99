from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Protocol

from pickops.classification.rules import Bucket, classify_resolved, needs_picking_resolved, resolve_rules
from pickops.domain.orders.aggregates import Order
from pickops.domain.warehouses.aggregates import FulfillmentRules
from pickops.picking.consolidation import ConsolidatedItem, PickListSummary, consolidate, summarize_pick_list
from pickops.picking.limiter import LimiterConfig, LimitResult, limit
from pickops.picking.progress import ProgressTracker, picked_quantity, remaining_to_pick

logger = logging.getLogger(__name__)


def _order_brief(order: Order) -> dict:
    return {
        "id": order.id,
        "order_number": order.display_number,
        "status": order.status,
        "fulfillment_status": order.fulfillment_status,
        "item_count": order.item_count,
    }


class OrderStatusUpdater(Protocol):
    def set_order_status(self, order_id: str, field: str, value: str) -> None:
        ...


@dataclass
class PickingSnapshot:
    warehouse_id: str
    orders_to_ship: list[Order]
    orders_to_pick: list[Order]
    items_to_ship: int
    items_to_pick: int
    limited: LimitResult[Order]
    picking_orders: list[Order]
    consolidated_items: list[ConsolidatedItem]
    summary: PickListSummary
    picked_skus: set[str]
    packed_order_ids: set[str]
    picked_quantity: int
    remaining_to_pick: int

    @property
    def packed_count(self) -> int:
        return len(self.packed_order_ids)

    def to_dict(self) -> dict:
        return {
            "warehouse_id": self.warehouse_id,
            "orders_to_ship": [_order_brief(o) for o in self.orders_to_ship],
            "orders_to_pick": [_order_brief(o) for o in self.orders_to_pick],
            "items_to_ship": self.items_to_ship,
            "items_to_pick": self.items_to_pick,
            "limit": {
                "total_count": self.limited.total_count,
                "capped_count": self.limited.capped_count,
                "is_limited": self.limited.is_limited,
                "label": self.limited.label,
            },
            "picking_order_ids": [o.id for o in self.picking_orders],
            "consolidated_items": [ci.to_dict() for ci in self.consolidated_items],
            "summary": {
                "total_orders": self.summary.total_orders,
                "total_units": self.summary.total_units,
                "unique_skus": self.summary.unique_skus,
            },
            "picked_skus": sorted(self.picked_skus),
            "packed_order_ids": sorted(self.packed_order_ids),
            "packed_count": self.packed_count,
            "picked_quantity": self.picked_quantity,
            "remaining_to_pick": self.remaining_to_pick,
        }


class PickingWorkflow:
    def __init__(self, tracker: ProgressTracker):
        self.tracker = tracker

    def snapshot(
        self,
        warehouse_id: str,
        orders: Iterable[Order],
        rules: FulfillmentRules | None,
        limiter: LimiterConfig | str | int | None = None,
        selected_order_ids: Iterable[str] | None = None,
    ) -> PickingSnapshot:
        resolved = resolve_rules(rules)
        if resolved.is_default and rules is not None:
            logger.info("warehouse_id=%s has no usable fulfillment rules, using defaults", warehouse_id)

        order_list = list(orders)
        orders_to_ship = [o for o in order_list if classify_resolved(o, resolved) == Bucket.NEEDS_SHIPPING]
        orders_to_pick = [o for o in orders_to_ship if needs_picking_resolved(o, resolved)]
        limited = limit(orders_to_pick, limiter)

        selected = set(selected_order_ids or [])
        if selected:
            picking_orders = [o for o in order_list if o.id in selected]
        else:
            picking_orders = limited.capped

        items = consolidate(picking_orders)
        state = self.tracker.load(warehouse_id)
        items_to_pick = sum(o.item_count for o in orders_to_pick)

        live_ids = {o.id for o in order_list}
        live_skus = {ci.sku for ci in items}
        return PickingSnapshot(
            warehouse_id=warehouse_id,
            orders_to_ship=orders_to_ship,
            orders_to_pick=orders_to_pick,
            items_to_ship=sum(o.item_count for o in orders_to_ship),
            items_to_pick=items_to_pick,
            limited=limited,
            picking_orders=picking_orders,
            consolidated_items=items,
            summary=summarize_pick_list(picking_orders, items),
            picked_skus=state.picked_skus & live_skus,
            packed_order_ids=state.packed_order_ids & live_ids,
            picked_quantity=picked_quantity(items, state.picked_skus),
            remaining_to_pick=remaining_to_pick(items, state.picked_skus, items_to_pick),
        )

    def apply_status_to_packed(
        self,
        warehouse_id: str,
        orders: Iterable[Order],
        updater: OrderStatusUpdater,
        status: str = "PICKING",
        field: str = "fulfillmentStatus",
    ) -> list[str]:
        state = self.tracker.load(warehouse_id)
        targets = [o.id for o in orders if o.id in state.packed_order_ids]
        for order_id in targets:
            updater.set_order_status(order_id, field, status)
        logger.info("set %s=%s on %d packed orders warehouse_id=%s", field, status, len(targets), warehouse_id)
        return targets
