from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping

from pydantic import ConfigDict, Field

from pickops.domain.orders.aggregates import Order
from pickops.domain.warehouses.aggregates import Warehouse, WarehouseAddress

SUPPORTED_VARIABLES = ("shop", "warehouse", "code", "platform")

_VARIABLE_RE = re.compile(r"\[(\w+)\]")


class ResolvedAddress(WarehouseAddress):
    model_config = ConfigDict(populate_by_name=True)

    display_name: str = Field(default="", alias="displayName")


@dataclass(frozen=True)
class AddressVariables:
    shop: str | None = None
    warehouse: str | None = None
    code: str | None = None
    platform: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        return {"shop": self.shop, "warehouse": self.warehouse, "code": self.code, "platform": self.platform}


@dataclass(frozen=True)
class VariableValidation:
    valid: bool
    unsupported_variables: list[str]


def used_variables(template: str | None) -> list[str]:
    if not template:
        return []
    seen: list[str] = []
    for name in _VARIABLE_RE.findall(template):
        if name not in seen:
            seen.append(name)
    return seen


def validate_address_variables(template: str | None) -> VariableValidation:
    unsupported = [name for name in used_variables(template) if name.lower() not in SUPPORTED_VARIABLES]
    return VariableValidation(valid=not unsupported, unsupported_variables=unsupported)


def replace_address_variables(template: str | None, variables: AddressVariables) -> str:
    if not template:
        return ""
    result = template
    for name, value in variables.as_dict().items():
        if not value:
            continue
        result = re.sub(re.escape(f"[{name}]"), lambda _m, v=value: v, result, flags=re.IGNORECASE)
    return result


def generate_address_preview(template: str | None, example: AddressVariables | None = None) -> str:
    example = example or AddressVariables()
    return replace_address_variables(
        template,
        AddressVariables(
            shop=example.shop or "Example Shop",
            warehouse=example.warehouse or "Warehouse Name",
            code=example.code or "WH-01",
            platform=example.platform or "Shopify",
        ),
    )


def _shop_name(order: Order, store_names: Mapping[str, str] | None) -> str | None:
    if order.shop_name:
        return order.shop_name
    if order.store_name:
        return order.store_name
    if store_names and order.store_id:
        return store_names.get(order.store_id)
    return None


def select_return_address(warehouse: Warehouse) -> WarehouseAddress:
    if warehouse.use_different_return_address and warehouse.return_address is not None:
        return warehouse.return_address
    return warehouse.address


def resolve_return_address(
    warehouse: Warehouse,
    order: Order | None = None,
    store_names: Mapping[str, str] | None = None,
) -> ResolvedAddress:
    base = select_return_address(warehouse)
    fields = base.model_dump()

    if order is None or not base.name or not _VARIABLE_RE.search(base.name):
        return ResolvedAddress(**fields, display_name=base.name or warehouse.name)

    variables = AddressVariables(
        shop=_shop_name(order, store_names),
        warehouse=warehouse.name,
        code=warehouse.code,
        platform=order.platform,
    )
    display_name = replace_address_variables(base.name, variables)
    fields["name"] = display_name
    return ResolvedAddress(**fields, display_name=display_name)
