"""Collect the names of every invalid field on a record request."""

from addrbook.models.contact import PartyType
from addrbook.schemas.addrbook import AddressFields, PartyFields, PhoneFields
from addrbook.services.type_registry import ADDRESS_TYPES, PARTY_TYPES, PHONE_TYPES
from addrbook.validators import fields as field_validators


def invalid_party_fields(payload: PartyFields) -> list[str]:
    invalid: list[str] = []
    if not PARTY_TYPES.is_accepted(payload.party_type):
        invalid.append("party_type")

    for name in ("last_name", "first_name"):
        if not field_validators.is_valid_name(getattr(payload, name)):
            invalid.append(name)
    for name in ("middle_name", "nickname"):
        value = getattr(payload, name)
        if value and not field_validators.is_valid_name(value):
            invalid.append(name)

    # a business also needs its company
    if payload.company or payload.party_type == PartyType.business:
        if not field_validators.is_valid_company(payload.company):
            invalid.append("company")
    if not field_validators.is_valid_email(payload.email):
        invalid.append("email")
    return invalid


def invalid_address_fields(payload: AddressFields) -> list[str]:
    invalid: list[str] = []
    if not ADDRESS_TYPES.is_accepted(payload.address_type):
        invalid.append("address_type")
    if not field_validators.is_valid_address_line(payload.address_1):
        invalid.append("address_1")
    if payload.address_2 and not field_validators.is_valid_address_line(payload.address_2):
        invalid.append("address_2")
    if not field_validators.is_valid_city(payload.city):
        invalid.append("city")
    if not field_validators.is_valid_state(payload.state):
        invalid.append("state")
    if not field_validators.is_valid_postal_code(payload.postal_code, payload.country_code):
        invalid.append("postal_code")
    if not field_validators.is_valid_country_code(payload.country_code):
        invalid.append("country_code")
    return invalid


def invalid_phone_fields(payload: PhoneFields) -> list[str]:
    invalid: list[str] = []
    if not PHONE_TYPES.is_accepted(payload.phone_type):
        invalid.append("phone_type")
    if not field_validators.is_valid_phone(payload.phone_number):
        invalid.append("phone_number")
    return invalid
