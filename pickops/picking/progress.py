from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Iterable, Literal

from pickops.persistence.state_store import KeyValueStore
from pickops.picking.consolidation import ConsolidatedItem

logger = logging.getLogger(__name__)

StateKind = Literal["items", "orders"]


@dataclass
class PickingState:
    warehouse_id: str
    picked_skus: set[str] = field(default_factory=set)
    packed_order_ids: set[str] = field(default_factory=set)

    def to_dict(self) -> dict:
        return {
            "warehouse_id": self.warehouse_id,
            "picked_skus": sorted(self.picked_skus),
            "packed_order_ids": sorted(self.packed_order_ids),
        }


def picking_state_key(warehouse_id: str, kind: StateKind, namespace: str | None = None) -> str:
    key = f"picking_{kind}_warehouse_{warehouse_id}"
    return f"{namespace}:{key}" if namespace else key


def _decode_set(raw: str | None) -> set[str]:
    if raw is None:
        return set()
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("discarding corrupt picking state payload")
        return set()
    if not isinstance(data, list):
        logger.warning("discarding picking state payload of type %s", type(data).__name__)
        return set()
    return {str(x) for x in data if isinstance(x, (str, int)) and not isinstance(x, bool)}


def _encode_set(values: set[str]) -> str:
    return json.dumps(sorted(values), separators=(",", ":"))


def picked_quantity(consolidated_items: Iterable[ConsolidatedItem], picked_skus: set[str]) -> int:
    return sum(ci.total_quantity for ci in consolidated_items if ci.sku in picked_skus)


def remaining_to_pick(
    consolidated_items: Iterable[ConsolidatedItem],
    picked_skus: set[str],
    total_items_to_pick: int,
) -> int:
    return max(0, int(total_items_to_pick) - picked_quantity(consolidated_items, picked_skus))


class ProgressTracker:
    """Per-warehouse picked-SKU and packed-order sets backed by a key-value store.

    Every mutation is written through immediately. Reads and writes that fail
    degrade to the in-memory copy held by this tracker, so the current session
    keeps working when storage does not. Concurrent writers for the same
    warehouse are last-write-wins.
    """

    def __init__(self, store: KeyValueStore, namespace: str | None = None):
        self.store = store
        self.namespace = namespace
        self._states: dict[str, PickingState] = {}

    def _read(self, warehouse_id: str, kind: StateKind) -> set[str]:
        key = picking_state_key(warehouse_id, kind, self.namespace)
        try:
            raw = self.store.get(key)
        except Exception as exc:
            logger.warning("picking state read failed key=%s: %s", key, exc)
            return set()
        return _decode_set(raw)

    def _write(self, warehouse_id: str, kind: StateKind, values: set[str]) -> None:
        key = picking_state_key(warehouse_id, kind, self.namespace)
        try:
            self.store.set(key, _encode_set(values))
        except Exception as exc:
            logger.warning("picking state write failed key=%s: %s", key, exc)

    def load(self, warehouse_id: str) -> PickingState:
        state = self._states.get(warehouse_id)
        if state is None:
            state = PickingState(
                warehouse_id=warehouse_id,
                picked_skus=self._read(warehouse_id, "items"),
                packed_order_ids=self._read(warehouse_id, "orders"),
            )
            self._states[warehouse_id] = state
        return state

    def toggle_item_picked(self, warehouse_id: str, sku: str) -> PickingState:
        state = self.load(warehouse_id)
        state.picked_skus ^= {sku}
        self._write(warehouse_id, "items", state.picked_skus)
        logger.debug("toggled picked sku warehouse_id=%s sku=%s picked=%s", warehouse_id, sku, sku in state.picked_skus)
        return state

    def toggle_order_packed(self, warehouse_id: str, order_id: str) -> PickingState:
        state = self.load(warehouse_id)
        state.packed_order_ids ^= {order_id}
        self._write(warehouse_id, "orders", state.packed_order_ids)
        logger.debug(
            "toggled packed order warehouse_id=%s order_id=%s packed=%s",
            warehouse_id,
            order_id,
            order_id in state.packed_order_ids,
        )
        return state

    def clear(self, warehouse_id: str) -> PickingState:
        state = PickingState(warehouse_id=warehouse_id)
        self._states[warehouse_id] = state
        for kind in ("items", "orders"):
            key = picking_state_key(warehouse_id, kind, self.namespace)
            try:
                self.store.delete(key)
            except Exception as exc:
                logger.warning("picking state clear failed key=%s: %s", key, exc)
        logger.info("cleared picking state warehouse_id=%s", warehouse_id)
        return state
