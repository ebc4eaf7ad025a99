from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _str_or_none(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _int_or_zero(value: Any) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


@dataclass
class OrderItem:
    sku: str | None
    name: str = ""
    quantity: int | None = None
    location: str | None = None


@dataclass
class Order:
    id: str
    order_number: str = ""
    status: str | None = None
    fulfillment_status: str | None = None
    item_count: int = 0
    warehouse_id: str | None = None
    requested_shipping: str | None = None
    platform: str | None = None
    shop_name: str | None = None
    store_name: str | None = None
    store_id: str | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    country: str | None = None
    country_code: str | None = None
    items: list[OrderItem] | None = None

    @property
    def display_number(self) -> str:
        return self.order_number or self.id

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Order":
        raw_items = data.get("items")
        items = None
        if isinstance(raw_items, list):
            items = [
                OrderItem(
                    sku=_str_or_none(item.get("sku")),
                    name=str(item.get("name") or ""),
                    quantity=item.get("quantity"),
                    location=_str_or_none(item.get("location")),
                )
                for item in raw_items
                if isinstance(item, dict)
            ]
        return cls(
            id=str(data["id"]),
            order_number=data.get("order_number") or data.get("orderNumber") or "",
            status=data.get("status"),
            fulfillment_status=data.get("fulfillment_status") or data.get("fulfillmentStatus"),
            item_count=_int_or_zero(data.get("item_count", data.get("itemCount"))),
            warehouse_id=data.get("warehouse_id") or data.get("warehouseId"),
            requested_shipping=data.get("requested_shipping") or data.get("requestedShipping"),
            platform=data.get("platform"),
            shop_name=data.get("shop_name") or data.get("shopName"),
            store_name=data.get("store_name") or data.get("storeName"),
            store_id=data.get("store_id") or data.get("storeId"),
            customer_name=data.get("customer_name") or data.get("customerName"),
            customer_email=data.get("customer_email") or data.get("customerEmail"),
            country=data.get("country"),
            country_code=data.get("country_code") or data.get("countryCode"),
            items=items,
        )
