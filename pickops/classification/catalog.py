from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field


class FulfillmentStatusOption(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    value: str
    label: str
    color: str = "bg-gray-100 text-gray-800"
    needs_shipping: bool = Field(default=False, alias="needsShipping")
    needs_picking: bool = Field(default=False, alias="needsPicking")
    sort_order: int = Field(default=0, alias="sortOrder")


DEFAULT_STATUS_CATALOG: tuple[FulfillmentStatusOption, ...] = (
    FulfillmentStatusOption(value="PENDING", label="Pending", color="bg-gray-100 text-gray-800", needs_shipping=True, needs_picking=True, sort_order=1),
    FulfillmentStatusOption(value="PROCESSING", label="Processing", color="bg-blue-100 text-blue-800", needs_shipping=True, needs_picking=True, sort_order=2),
    FulfillmentStatusOption(value="ASSIGNED", label="Assigned", color="bg-blue-100 text-blue-800", needs_shipping=True, needs_picking=True, sort_order=3),
    FulfillmentStatusOption(value="PICKING", label="Picking", color="bg-yellow-100 text-yellow-800", needs_shipping=True, sort_order=4),
    FulfillmentStatusOption(value="PACKING", label="Packing", color="bg-orange-100 text-orange-800", needs_shipping=True, sort_order=5),
    FulfillmentStatusOption(value="PACKED", label="Packed", color="bg-indigo-100 text-indigo-800", needs_shipping=True, sort_order=6),
    FulfillmentStatusOption(value="READY_TO_SHIP", label="Ready to Ship", color="bg-purple-100 text-purple-800", needs_shipping=True, sort_order=7),
    FulfillmentStatusOption(value="SHIPPED", label="Shipped", color="bg-green-100 text-green-800", sort_order=8),
    FulfillmentStatusOption(value="DELIVERED", label="Delivered", color="bg-green-100 text-green-800", sort_order=9),
    FulfillmentStatusOption(value="CANCELLED", label="Cancelled", color="bg-red-100 text-red-800", sort_order=10),
)

_FALLBACK_COLORS = {
    "PICKING": "bg-yellow-100 text-yellow-800",
    "PACKED": "bg-indigo-100 text-indigo-800",
}


def _find(code: str, catalog: Iterable[FulfillmentStatusOption] | None) -> FulfillmentStatusOption | None:
    for option in catalog if catalog is not None else DEFAULT_STATUS_CATALOG:
        if option.value == code:
            return option
    return None


def status_label(code: str | None, catalog: Iterable[FulfillmentStatusOption] | None = None) -> str:
    if not code:
        return ""
    option = _find(code, catalog)
    if option is not None and option.label:
        return option.label
    return code.replace("_", " ")


def status_color(code: str | None, catalog: Iterable[FulfillmentStatusOption] | None = None) -> str:
    if not code:
        return "bg-gray-100 text-gray-800"
    option = _find(code, catalog)
    if option is not None and option.color:
        return option.color
    return _FALLBACK_COLORS.get(code, "bg-gray-100 text-gray-800")
