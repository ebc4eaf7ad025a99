from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, Field

from pickops.api.utils import parse_order
from pickops.domain.warehouses.aggregates import Warehouse
from pickops.returns.address import (
    AddressVariables,
    generate_address_preview,
    resolve_return_address,
    used_variables,
    validate_address_variables,
)

router = APIRouter(tags=["returns"])


class ResolveAddressRequest(BaseModel):
    warehouse: Warehouse
    order: dict | None = None
    store_names: dict[str, str] = Field(default_factory=dict)


class PreviewAddressRequest(BaseModel):
    template: str = Field(min_length=1)
    shop: str | None = None
    warehouse: str | None = None
    code: str | None = None
    platform: str | None = None


@router.post("/returns/address/resolve")
def resolve_address(request: ResolveAddressRequest):
    resolved = resolve_return_address(request.warehouse, parse_order(request.order), request.store_names)
    return resolved.model_dump()


@router.post("/returns/address/preview")
def preview_address(request: PreviewAddressRequest):
    validation = validate_address_variables(request.template)
    example = AddressVariables(
        shop=request.shop,
        warehouse=request.warehouse,
        code=request.code,
        platform=request.platform,
    )
    return {
        "preview": generate_address_preview(request.template, example),
        "used_variables": used_variables(request.template),
        "valid": validation.valid,
        "unsupported_variables": validation.unsupported_variables,
    }
