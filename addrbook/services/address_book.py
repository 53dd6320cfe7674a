"""The address book capability and its record-store implementation."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from addrbook import __version__
from addrbook.context import CallContext
from addrbook.errors import ErrorCode, ServiceError
from addrbook.schemas.addrbook import (
    AddressCreated,
    AddressRead,
    CreateAddressRequest,
    CreatePartyRequest,
    CreatePhoneRequest,
    DeleteAddressRequest,
    DeletePartyRequest,
    DeletePhoneRequest,
    GetAddressRequest,
    GetPartiesRequest,
    GetPartyRequest,
    GetPartyWrapperRequest,
    GetPhoneRequest,
    GetServerVersionRequest,
    PartyCreated,
    PartyRead,
    PartyWrapperRead,
    PhoneCreated,
    PhoneRead,
    RecordVersion,
    ServerVersion,
    UpdateAddressRequest,
    UpdatePartyRequest,
    UpdatePhoneRequest,
)
from addrbook.schemas.result import Result
from addrbook.services.addresses import addresses
from addrbook.services.parties import parties
from addrbook.services.phones import phones

logger = logging.getLogger(__name__)

T = TypeVar("T")

SERVER_VERSION = f"v{__version__}"


class AddressBookApi(Protocol):
    def create_party(self, ctx: CallContext, req: CreatePartyRequest) -> Result[PartyCreated]: ...

    def update_party(self, ctx: CallContext, req: UpdatePartyRequest) -> Result[RecordVersion]: ...

    def delete_party(self, ctx: CallContext, req: DeletePartyRequest) -> Result[RecordVersion]: ...

    def get_party(self, ctx: CallContext, req: GetPartyRequest) -> Result[PartyRead]: ...

    def get_parties(self, ctx: CallContext, req: GetPartiesRequest) -> Result[list[PartyRead]]: ...

    def get_party_wrapper(
        self, ctx: CallContext, req: GetPartyWrapperRequest
    ) -> Result[PartyWrapperRead]: ...

    def create_address(
        self, ctx: CallContext, req: CreateAddressRequest
    ) -> Result[AddressCreated]: ...

    def update_address(
        self, ctx: CallContext, req: UpdateAddressRequest
    ) -> Result[RecordVersion]: ...

    def delete_address(
        self, ctx: CallContext, req: DeleteAddressRequest
    ) -> Result[RecordVersion]: ...

    def get_address(self, ctx: CallContext, req: GetAddressRequest) -> Result[AddressRead]: ...

    def create_phone(self, ctx: CallContext, req: CreatePhoneRequest) -> Result[PhoneCreated]: ...

    def update_phone(self, ctx: CallContext, req: UpdatePhoneRequest) -> Result[RecordVersion]: ...

    def delete_phone(self, ctx: CallContext, req: DeletePhoneRequest) -> Result[RecordVersion]: ...

    def get_phone(self, ctx: CallContext, req: GetPhoneRequest) -> Result[PhoneRead]: ...

    def get_server_version(
        self, ctx: CallContext, req: GetServerVersionRequest
    ) -> Result[ServerVersion]: ...


class AddressBookService:
    """Runs every operation in its own session and returns a ``Result``."""

    def __init__(self, session_factory: sessionmaker | Callable[[], Session]):
        self._session_factory = session_factory
        self._started_at = time.time()

    def _call(self, handler: Callable[[Session], T]) -> Result[T]:
        try:
            with self._session_factory() as db:
                return Result.success(handler(db))
        except ServiceError as exc:
            return Result.from_error(exc)
        except SQLAlchemyError as exc:
            # session checkout or teardown failed outside any single statement
            logger.error("what=session error=%s", exc)
            return Result.failure(ErrorCode.prepare_failed, str(exc))

    def create_party(self, ctx: CallContext, req: CreatePartyRequest) -> Result[PartyCreated]:
        return self._call(lambda db: parties.create(db, ctx, req))

    def update_party(self, ctx: CallContext, req: UpdatePartyRequest) -> Result[RecordVersion]:
        return self._call(lambda db: parties.update(db, ctx, req))

    def delete_party(self, ctx: CallContext, req: DeletePartyRequest) -> Result[RecordVersion]:
        return self._call(lambda db: parties.delete(db, ctx, req))

    def get_party(self, ctx: CallContext, req: GetPartyRequest) -> Result[PartyRead]:
        return self._call(lambda db: parties.get(db, ctx, req))

    def get_parties(self, ctx: CallContext, req: GetPartiesRequest) -> Result[list[PartyRead]]:
        return self._call(lambda db: parties.list(db, ctx, req))

    def get_party_wrapper(
        self, ctx: CallContext, req: GetPartyWrapperRequest
    ) -> Result[PartyWrapperRead]:
        return self._call(lambda db: parties.get_wrapper(db, ctx, req))

    def create_address(self, ctx: CallContext, req: CreateAddressRequest) -> Result[AddressCreated]:
        return self._call(lambda db: addresses.create(db, ctx, req))

    def update_address(self, ctx: CallContext, req: UpdateAddressRequest) -> Result[RecordVersion]:
        return self._call(lambda db: addresses.update(db, ctx, req))

    def delete_address(self, ctx: CallContext, req: DeleteAddressRequest) -> Result[RecordVersion]:
        return self._call(lambda db: addresses.delete(db, ctx, req))

    def get_address(self, ctx: CallContext, req: GetAddressRequest) -> Result[AddressRead]:
        return self._call(lambda db: addresses.get(db, ctx, req))

    def create_phone(self, ctx: CallContext, req: CreatePhoneRequest) -> Result[PhoneCreated]:
        return self._call(lambda db: phones.create(db, ctx, req))

    def update_phone(self, ctx: CallContext, req: UpdatePhoneRequest) -> Result[RecordVersion]:
        return self._call(lambda db: phones.update(db, ctx, req))

    def delete_phone(self, ctx: CallContext, req: DeletePhoneRequest) -> Result[RecordVersion]:
        return self._call(lambda db: phones.delete(db, ctx, req))

    def get_phone(self, ctx: CallContext, req: GetPhoneRequest) -> Result[PhoneRead]:
        return self._call(lambda db: phones.get(db, ctx, req))

    def get_server_version(
        self, ctx: CallContext, req: GetServerVersionRequest
    ) -> Result[ServerVersion]:
        uptime = int(time.time() - self._started_at)
        return Result.success(ServerVersion(server_version=SERVER_VERSION, server_uptime=uptime))
