"""Request and payload models for the address book operations.

Every request carries ``mservice_id``; the authorization gateway overwrites it
with the tenant from the verified token, so callers may leave it at zero.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class TenantRequest(BaseModel):
    mservice_id: int = 0


# Party requests


class PartyFields(TenantRequest):
    party_type: int = 0
    last_name: str = ""
    middle_name: str = ""
    first_name: str = ""
    nickname: str = ""
    company: str = ""
    email: str = ""


class CreatePartyRequest(PartyFields):
    pass


class UpdatePartyRequest(PartyFields):
    party_id: int
    version: int


class DeletePartyRequest(TenantRequest):
    party_id: int
    version: int


class GetPartyRequest(TenantRequest):
    party_id: int


class GetPartiesRequest(TenantRequest):
    pass


class GetPartyWrapperRequest(TenantRequest):
    party_id: int


# Address requests


class AddressFields(TenantRequest):
    party_id: int
    address_type: int = 0
    address_1: str = ""
    address_2: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country_code: str = "us"


class CreateAddressRequest(AddressFields):
    pass


class UpdateAddressRequest(AddressFields):
    version: int


class DeleteAddressRequest(TenantRequest):
    party_id: int
    address_type: int
    version: int


class GetAddressRequest(TenantRequest):
    party_id: int
    address_type: int


# Phone requests


class PhoneFields(TenantRequest):
    party_id: int
    phone_type: int = 0
    phone_number: str = ""


class CreatePhoneRequest(PhoneFields):
    pass


class UpdatePhoneRequest(PhoneFields):
    version: int


class DeletePhoneRequest(TenantRequest):
    party_id: int
    phone_type: int
    version: int


class GetPhoneRequest(TenantRequest):
    party_id: int
    phone_type: int


class GetServerVersionRequest(BaseModel):
    dummy_param: int = 0


# Payloads


class RecordVersion(BaseModel):
    version: int


class PartyCreated(RecordVersion):
    party_id: int


class AddressCreated(RecordVersion):
    party_id: int
    address_type: int


class PhoneCreated(RecordVersion):
    party_id: int
    phone_type: int


class RecordRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    mservice_id: int
    party_id: int
    created: datetime
    modified: datetime
    version: int


class PartyRead(RecordRead):
    party_type: int
    party_type_name: str = "unknown"
    last_name: str
    middle_name: str
    first_name: str
    nickname: str
    company: str
    email: str


class AddressRead(RecordRead):
    address_type: int
    address_type_name: str = "unknown"
    address_1: str
    address_2: str
    city: str
    state: str
    postal_code: str
    country_code: str


class PhoneRead(RecordRead):
    phone_type: int
    phone_type_name: str = "unknown"
    phone_number: str


class PartyWrapperRead(PartyRead):
    addresses: list[AddressRead] = []
    phones: list[PhoneRead] = []


class ServerVersion(BaseModel):
    server_version: str
    server_uptime: int
