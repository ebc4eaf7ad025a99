from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from pickops.api.deps import get_limiter_preferences, get_tracker
from pickops.api.utils import parse_orders
from pickops.domain.warehouses.aggregates import FulfillmentRules
from pickops.picking.limiter import LimiterPreferences
from pickops.picking.progress import ProgressTracker
from pickops.picking.workflow import PickingWorkflow

router = APIRouter(tags=["picking"])


class SnapshotRequest(BaseModel):
    orders: list[dict] = Field(default_factory=list)
    rules: FulfillmentRules | None = None
    limit: str | int | None = None
    selected_order_ids: list[str] = Field(default_factory=list)


class LimitUpdateRequest(BaseModel):
    limit: str | int


def _limit_payload(warehouse_id: str, prefs: LimiterPreferences) -> dict:
    cfg = prefs.load(warehouse_id)
    return {
        "warehouse_id": warehouse_id,
        "limit": cfg.serialize(),
        "mode": cfg.mode,
        "value": cfg.effective_limit,
    }


@router.post("/warehouses/{warehouse_id}/picking/snapshot")
def picking_snapshot(
    warehouse_id: str,
    request: SnapshotRequest,
    tracker: ProgressTracker = Depends(get_tracker),
    prefs: LimiterPreferences = Depends(get_limiter_preferences),
):
    orders = parse_orders(request.orders)
    limiter = request.limit if request.limit is not None else prefs.load(warehouse_id)
    snapshot = PickingWorkflow(tracker).snapshot(
        warehouse_id,
        orders,
        request.rules,
        limiter=limiter,
        selected_order_ids=request.selected_order_ids,
    )
    return snapshot.to_dict()


@router.get("/warehouses/{warehouse_id}/picking/state")
def get_picking_state(warehouse_id: str, tracker: ProgressTracker = Depends(get_tracker)):
    return tracker.load(warehouse_id).to_dict()


@router.post("/warehouses/{warehouse_id}/picking/items/{sku}/toggle")
def toggle_item(warehouse_id: str, sku: str, tracker: ProgressTracker = Depends(get_tracker)):
    state = tracker.toggle_item_picked(warehouse_id, sku)
    return {**state.to_dict(), "sku": sku, "picked": sku in state.picked_skus}


@router.post("/warehouses/{warehouse_id}/picking/orders/{order_id}/toggle")
def toggle_order(warehouse_id: str, order_id: str, tracker: ProgressTracker = Depends(get_tracker)):
    state = tracker.toggle_order_packed(warehouse_id, order_id)
    return {**state.to_dict(), "order_id": order_id, "packed": order_id in state.packed_order_ids}


@router.delete("/warehouses/{warehouse_id}/picking/state")
def clear_picking_state(warehouse_id: str, tracker: ProgressTracker = Depends(get_tracker)):
    return tracker.clear(warehouse_id).to_dict()


@router.get("/warehouses/{warehouse_id}/picking/limit")
def get_picking_limit(warehouse_id: str, prefs: LimiterPreferences = Depends(get_limiter_preferences)):
    return _limit_payload(warehouse_id, prefs)


@router.put("/warehouses/{warehouse_id}/picking/limit")
def set_picking_limit(
    warehouse_id: str,
    request: LimitUpdateRequest,
    prefs: LimiterPreferences = Depends(get_limiter_preferences),
):
    prefs.save(warehouse_id, request.limit)
    return _limit_payload(warehouse_id, prefs)
