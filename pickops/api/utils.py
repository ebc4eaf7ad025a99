from __future__ import annotations

from typing import Any

from fastapi import HTTPException

from pickops.domain.orders.aggregates import Order


def parse_orders(raw_orders: list[dict[str, Any]]) -> list[Order]:
    orders: list[Order] = []
    for index, raw in enumerate(raw_orders):
        if not raw.get("id"):
            raise HTTPException(status_code=400, detail=f"orders[{index}] is missing an id")
        orders.append(Order.from_dict(raw))
    return orders


def parse_order(raw: dict[str, Any] | None) -> Order | None:
    if raw is None:
        return None
    return parse_orders([raw])[0]
