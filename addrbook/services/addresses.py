from sqlalchemy.orm import Session

from addrbook.context import CallContext
from addrbook.errors import InvalidFields
from addrbook.models.contact import Address
from addrbook.schemas.addrbook import (
    AddressCreated,
    AddressFields,
    AddressRead,
    CreateAddressRequest,
    DeleteAddressRequest,
    GetAddressRequest,
    RecordVersion,
    UpdateAddressRequest,
)
from addrbook.services.records import VersionedRecordStore
from addrbook.services.type_registry import ADDRESS_TYPES
from addrbook.validators.records import invalid_address_fields

ADDRESS_FIELDS = ("address_1", "address_2", "city", "state", "postal_code", "country_code")


def _address_values(payload: AddressFields) -> dict:
    return {name: getattr(payload, name) for name in ADDRESS_FIELDS}


def _address_key(payload) -> dict:
    return {"party_id": payload.party_id, "address_type": payload.address_type}


def to_address_read(address: Address) -> AddressRead:
    read = AddressRead.model_validate(address)
    read.address_type_name = ADDRESS_TYPES.name_for(address.address_type)
    return read


class Addresses(VersionedRecordStore[Address]):
    model = Address
    key_fields = ("party_id", "address_type")

    @classmethod
    def create(cls, db: Session, ctx: CallContext, payload: CreateAddressRequest) -> AddressCreated:
        invalid = invalid_address_fields(payload)
        if invalid:
            raise InvalidFields(invalid)
        cls._insert(
            db,
            ctx,
            payload.mservice_id,
            {**_address_key(payload), **_address_values(payload)},
        )
        return AddressCreated(
            party_id=payload.party_id, address_type=payload.address_type, version=1
        )

    @classmethod
    def update(cls, db: Session, ctx: CallContext, payload: UpdateAddressRequest) -> RecordVersion:
        invalid = invalid_address_fields(payload)
        if invalid:
            raise InvalidFields(invalid)
        version = cls._update_versioned(
            db,
            ctx,
            payload.mservice_id,
            _address_key(payload),
            payload.version,
            _address_values(payload),
        )
        return RecordVersion(version=version)

    @classmethod
    def delete(cls, db: Session, ctx: CallContext, payload: DeleteAddressRequest) -> RecordVersion:
        version = cls._soft_delete(
            db, ctx, payload.mservice_id, _address_key(payload), payload.version
        )
        return RecordVersion(version=version)

    @classmethod
    def get(cls, db: Session, ctx: CallContext, payload: GetAddressRequest) -> AddressRead:
        address = cls._get_active(db, ctx, payload.mservice_id, _address_key(payload))
        return to_address_read(address)

    @classmethod
    def list_for_party(
        cls, db: Session, ctx: CallContext, mservice_id: int, party_id: int
    ) -> list[AddressRead]:
        rows = cls._list_active(
            db, ctx, mservice_id, filters={"party_id": party_id}, order_by="address_type"
        )
        return [to_address_read(row) for row in rows]


addresses = Addresses()
