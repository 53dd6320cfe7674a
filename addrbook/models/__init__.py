from addrbook.models.contact import (
    Address,
    AddressType,
    Party,
    PartyType,
    Phone,
    PhoneType,
)

__all__ = [
    "Address",
    "AddressType",
    "Party",
    "PartyType",
    "Phone",
    "PhoneType",
]
