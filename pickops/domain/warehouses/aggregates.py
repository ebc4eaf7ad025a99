from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FulfillmentRules(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    to_ship_statuses: list[str] = Field(default_factory=list, alias="toShipStatuses")
    excluded_statuses: list[str] = Field(default_factory=list, alias="excludedStatuses")
    completed_statuses: list[str] = Field(default_factory=list, alias="completedStatuses")
    display_text: str = Field(default="orders to ship", alias="displayText")
    include_completed: bool = Field(default=False, alias="includeCompleted")
    # Fulfillment statuses at which an order no longer needs picking.
    picked_statuses: list[str] | None = Field(default=None, alias="pickedStatuses")


class WarehouseAddress(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    address1: str = ""
    address2: str | None = None
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""
    country_code: str = Field(default="", alias="countryCode")


class WarehouseSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_status_settings: FulfillmentRules | None = Field(default=None, alias="orderStatusSettings")


class Warehouse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    code: str = ""
    address: WarehouseAddress = Field(default_factory=WarehouseAddress)
    settings: WarehouseSettings = Field(default_factory=WarehouseSettings)
    use_different_return_address: bool = Field(default=False, alias="useDifferentReturnAddress")
    return_address: WarehouseAddress | None = Field(default=None, alias="returnAddress")

    @property
    def fulfillment_rules(self) -> FulfillmentRules | None:
        return self.settings.order_status_settings

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Warehouse":
        return cls.model_validate(data)
