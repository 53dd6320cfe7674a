from sqlalchemy.orm import Session

from addrbook.context import CallContext
from addrbook.errors import InvalidFields
from addrbook.models.contact import Phone
from addrbook.schemas.addrbook import (
    CreatePhoneRequest,
    DeletePhoneRequest,
    GetPhoneRequest,
    PhoneCreated,
    PhoneRead,
    RecordVersion,
    UpdatePhoneRequest,
)
from addrbook.services.records import VersionedRecordStore
from addrbook.services.type_registry import PHONE_TYPES
from addrbook.validators.records import invalid_phone_fields


def _phone_key(payload) -> dict:
    return {"party_id": payload.party_id, "phone_type": payload.phone_type}


def to_phone_read(phone: Phone) -> PhoneRead:
    read = PhoneRead.model_validate(phone)
    read.phone_type_name = PHONE_TYPES.name_for(phone.phone_type)
    return read


class Phones(VersionedRecordStore[Phone]):
    model = Phone
    key_fields = ("party_id", "phone_type")

    @classmethod
    def create(cls, db: Session, ctx: CallContext, payload: CreatePhoneRequest) -> PhoneCreated:
        invalid = invalid_phone_fields(payload)
        if invalid:
            raise InvalidFields(invalid)
        cls._insert(
            db,
            ctx,
            payload.mservice_id,
            {**_phone_key(payload), "phone_number": payload.phone_number},
        )
        return PhoneCreated(party_id=payload.party_id, phone_type=payload.phone_type, version=1)

    @classmethod
    def update(cls, db: Session, ctx: CallContext, payload: UpdatePhoneRequest) -> RecordVersion:
        invalid = invalid_phone_fields(payload)
        if invalid:
            raise InvalidFields(invalid)
        version = cls._update_versioned(
            db,
            ctx,
            payload.mservice_id,
            _phone_key(payload),
            payload.version,
            {"phone_number": payload.phone_number},
        )
        return RecordVersion(version=version)

    @classmethod
    def delete(cls, db: Session, ctx: CallContext, payload: DeletePhoneRequest) -> RecordVersion:
        version = cls._soft_delete(db, ctx, payload.mservice_id, _phone_key(payload), payload.version)
        return RecordVersion(version=version)

    @classmethod
    def get(cls, db: Session, ctx: CallContext, payload: GetPhoneRequest) -> PhoneRead:
        phone = cls._get_active(db, ctx, payload.mservice_id, _phone_key(payload))
        return to_phone_read(phone)

    @classmethod
    def list_for_party(
        cls, db: Session, ctx: CallContext, mservice_id: int, party_id: int
    ) -> list[PhoneRead]:
        rows = cls._list_active(
            db, ctx, mservice_id, filters={"party_id": party_id}, order_by="phone_type"
        )
        return [to_phone_read(row) for row in rows]


phones = Phones()
