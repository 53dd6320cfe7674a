from sqlalchemy.orm import Session

from addrbook.context import CallContext
from addrbook.errors import InvalidFields
from addrbook.models.contact import Party
from addrbook.schemas.addrbook import (
    CreatePartyRequest,
    DeletePartyRequest,
    GetPartiesRequest,
    GetPartyRequest,
    GetPartyWrapperRequest,
    PartyCreated,
    PartyFields,
    PartyRead,
    PartyWrapperRead,
    RecordVersion,
    UpdatePartyRequest,
)
from addrbook.services.addresses import addresses
from addrbook.services.phones import phones
from addrbook.services.records import VersionedRecordStore
from addrbook.services.type_registry import PARTY_TYPES
from addrbook.validators.records import invalid_party_fields

PARTY_FIELDS = (
    "party_type",
    "last_name",
    "middle_name",
    "first_name",
    "nickname",
    "company",
    "email",
)


def _party_values(payload: PartyFields) -> dict:
    return {name: getattr(payload, name) for name in PARTY_FIELDS}


def to_party_read(party: Party) -> PartyRead:
    read = PartyRead.model_validate(party)
    read.party_type_name = PARTY_TYPES.name_for(party.party_type)
    return read


class Parties(VersionedRecordStore[Party]):
    model = Party
    key_fields = ("party_id",)

    @classmethod
    def create(cls, db: Session, ctx: CallContext, payload: CreatePartyRequest) -> PartyCreated:
        invalid = invalid_party_fields(payload)
        if invalid:
            raise InvalidFields(invalid)
        (party_id,) = cls._insert(db, ctx, payload.mservice_id, _party_values(payload))
        return PartyCreated(party_id=party_id, version=1)

    @classmethod
    def update(cls, db: Session, ctx: CallContext, payload: UpdatePartyRequest) -> RecordVersion:
        invalid = invalid_party_fields(payload)
        if invalid:
            raise InvalidFields(invalid)
        version = cls._update_versioned(
            db,
            ctx,
            payload.mservice_id,
            {"party_id": payload.party_id},
            payload.version,
            _party_values(payload),
        )
        return RecordVersion(version=version)

    @classmethod
    def delete(cls, db: Session, ctx: CallContext, payload: DeletePartyRequest) -> RecordVersion:
        version = cls._soft_delete(
            db, ctx, payload.mservice_id, {"party_id": payload.party_id}, payload.version
        )
        return RecordVersion(version=version)

    @classmethod
    def get(cls, db: Session, ctx: CallContext, payload: GetPartyRequest) -> PartyRead:
        party = cls._get_active(db, ctx, payload.mservice_id, {"party_id": payload.party_id})
        return to_party_read(party)

    @classmethod
    def list(cls, db: Session, ctx: CallContext, payload: GetPartiesRequest) -> list[PartyRead]:
        rows = cls._list_active(db, ctx, payload.mservice_id, order_by="party_id")
        return [to_party_read(row) for row in rows]

    @classmethod
    def get_wrapper(
        cls, db: Session, ctx: CallContext, payload: GetPartyWrapperRequest
    ) -> PartyWrapperRead:
        """Party plus its live addresses and phones.

        Three separate reads; a writer committing between them can leave the
        children newer than the parent.
        """
        party = cls._get_active(db, ctx, payload.mservice_id, {"party_id": payload.party_id})
        wrapper = PartyWrapperRead.model_validate(to_party_read(party).model_dump())
        wrapper.addresses = addresses.list_for_party(
            db, ctx, payload.mservice_id, payload.party_id
        )
        wrapper.phones = phones.list_for_party(db, ctx, payload.mservice_id, payload.party_id)
        return wrapper


parties = Parties()
