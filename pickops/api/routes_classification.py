from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, Field

from pickops.api.utils import parse_orders
from pickops.classification.catalog import DEFAULT_STATUS_CATALOG, status_label
from pickops.classification.rules import (
    classify_resolved,
    detect_conflicts,
    needs_picking_resolved,
    resolve_rules,
    summarize,
)
from pickops.domain.warehouses.aggregates import FulfillmentRules

router = APIRouter(tags=["classification"])


class ClassifyRequest(BaseModel):
    orders: list[dict] = Field(default_factory=list)
    rules: FulfillmentRules | None = None


@router.get("/statuses")
def list_statuses():
    return {"statuses": [option.model_dump() for option in DEFAULT_STATUS_CATALOG]}


@router.post("/orders/classify")
def classify_orders(request: ClassifyRequest):
    orders = parse_orders(request.orders)
    resolved = resolve_rules(request.rules)

    rows = []
    for order in orders:
        bucket = classify_resolved(order, resolved)
        rows.append(
            {
                "id": order.id,
                "order_number": order.display_number,
                "bucket": bucket.value,
                "needs_picking": needs_picking_resolved(order, resolved),
                "status_label": status_label(order.status),
                "fulfillment_status_label": status_label(order.fulfillment_status),
            }
        )

    return {
        "rules_source": "default" if resolved.is_default else "warehouse",
        "summary": summarize(orders, request.rules).to_dict(),
        "conflicts": detect_conflicts(request.rules) if request.rules is not None else {},
        "orders": rows,
    }
