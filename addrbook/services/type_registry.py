"""Fixed code → display-name registries for party, address and phone kinds."""

from __future__ import annotations

import enum

from addrbook.models.contact import AddressType, PartyType, PhoneType

UNKNOWN = "unknown"


class TypeRegistry:
    def __init__(self, enum_cls: type[enum.IntEnum]):
        self._names = {int(member): member.name for member in enum_cls}
        self._accepted = frozenset(code for code in self._names if code != 0)

    @property
    def accepted_codes(self) -> frozenset[int]:
        return self._accepted

    def name_for(self, code: int | None) -> str:
        if code is None:
            return UNKNOWN
        return self._names.get(int(code), UNKNOWN)

    def is_accepted(self, code: int | None) -> bool:
        return code in self._accepted


PARTY_TYPES = TypeRegistry(PartyType)
ADDRESS_TYPES = TypeRegistry(AddressType)
PHONE_TYPES = TypeRegistry(PhoneType)
