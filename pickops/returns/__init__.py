from pickops.returns.address import (
    AddressVariables,
    ResolvedAddress,
    generate_address_preview,
    resolve_return_address,
    validate_address_variables,
)

__all__ = [
    "AddressVariables",
    "ResolvedAddress",
    "generate_address_preview",
    "resolve_return_address",
    "validate_address_variables",
]
