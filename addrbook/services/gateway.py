"""Authorization gateway in front of the address book store.

Every operation verifies the caller's token, checks the role claim against the
operation's allowed roles, replaces the request tenant with the token tenant
and only then delegates. Each call is audited whatever the outcome.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TypeVar

from pydantic import BaseModel

from addrbook.context import CallContext
from addrbook.errors import ErrorCode
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
from addrbook.services import audit
from addrbook.services.address_book import AddressBookApi
from addrbook.services.auth import InvalidToken, Role, TokenExpired, TokenVerifier

logger = logging.getLogger(__name__)

TRequest = TypeVar("TRequest", bound=BaseModel)
T = TypeVar("T")

NOT_AUTHORIZED_MESSAGE = "not authorized"
TOKEN_EXPIRED_MESSAGE = "token is expired"

ADMIN_ONLY = frozenset({Role.admin})
WRITERS = frozenset({Role.admin, Role.read_write})
READERS = frozenset({Role.admin, Role.read_write, Role.read_only})

OPERATION_ROLES: dict[str, frozenset[Role]] = {
    "CreateParty": ADMIN_ONLY,
    "UpdateParty": WRITERS,
    "DeleteParty": ADMIN_ONLY,
    "GetParty": READERS,
    "GetParties": READERS,
    "GetPartyWrapper": READERS,
    "CreateAddress": ADMIN_ONLY,
    "UpdateAddress": WRITERS,
    "DeleteAddress": ADMIN_ONLY,
    "GetAddress": READERS,
    "CreatePhone": ADMIN_ONLY,
    "UpdatePhone": WRITERS,
    "DeletePhone": ADMIN_ONLY,
    "GetPhone": READERS,
}


class AuthorizationGateway:
    def __init__(self, inner: AddressBookApi, verifier: TokenVerifier):
        self._inner = inner
        self._verifier = verifier

    def _guarded(
        self,
        endpoint: str,
        ctx: CallContext,
        req: TRequest,
        delegate: Callable[[CallContext, TRequest], Result[T]],
        audit_fields: Callable[[TRequest, Result[T] | None], dict],
    ) -> Result[T]:
        started = time.perf_counter()
        result: Result[T] | None = None
        try:
            result = self._authorize_and_call(endpoint, ctx, req, delegate)
            return result
        finally:
            # an exception escaping the delegate is still audited, as a 500
            error_code = result.error_code if result is not None else ErrorCode.prepare_failed
            audit.record_call(
                endpoint,
                int(error_code),
                time.perf_counter() - started,
                **audit_fields(req, result),
            )

    def _authorize_and_call(self, endpoint, ctx, req, delegate):
        try:
            claims = self._verifier.verify(ctx.token)
        except TokenExpired:
            return Result.failure(ErrorCode.token_expired, TOKEN_EXPIRED_MESSAGE)
        except InvalidToken as exc:
            logger.debug("endpoint=%s token rejected: %s", endpoint, exc)
            return Result.failure(ErrorCode.not_authorized, NOT_AUTHORIZED_MESSAGE)
        except Exception:
            logger.exception("endpoint=%s claim extraction failed", endpoint)
            return Result.failure(ErrorCode.not_authorized, NOT_AUTHORIZED_MESSAGE)

        if claims.role not in OPERATION_ROLES[endpoint]:
            return Result.failure(ErrorCode.not_authorized, NOT_AUTHORIZED_MESSAGE)

        # the tenant always comes from the token, never from the caller
        req.mservice_id = claims.mservice_id
        return delegate(ctx, req)

    # Party

    def create_party(self, ctx: CallContext, req: CreatePartyRequest) -> Result[PartyCreated]:
        return self._guarded(
            "CreateParty",
            ctx,
            req,
            self._inner.create_party,
            lambda r, res: {
                "lastname": r.last_name,
                "company": r.company,
                "partyid": res.data.party_id if res is not None and res.data else None,
            },
        )

    def update_party(self, ctx: CallContext, req: UpdatePartyRequest) -> Result[RecordVersion]:
        return self._guarded(
            "UpdateParty", ctx, req, self._inner.update_party, lambda r, res: {"partyid": r.party_id}
        )

    def delete_party(self, ctx: CallContext, req: DeletePartyRequest) -> Result[RecordVersion]:
        return self._guarded(
            "DeleteParty", ctx, req, self._inner.delete_party, lambda r, res: {"partyid": r.party_id}
        )

    def get_party(self, ctx: CallContext, req: GetPartyRequest) -> Result[PartyRead]:
        return self._guarded(
            "GetParty", ctx, req, self._inner.get_party, lambda r, res: {"partyid": r.party_id}
        )

    def get_parties(self, ctx: CallContext, req: GetPartiesRequest) -> Result[list[PartyRead]]:
        return self._guarded(
            "GetParties",
            ctx,
            req,
            self._inner.get_parties,
            lambda r, res: {"count": len(res.data or []) if res is not None else 0},
        )

    def get_party_wrapper(
        self, ctx: CallContext, req: GetPartyWrapperRequest
    ) -> Result[PartyWrapperRead]:
        return self._guarded(
            "GetPartyWrapper",
            ctx,
            req,
            self._inner.get_party_wrapper,
            lambda r, res: {"partyid": r.party_id},
        )

    # Address

    def create_address(self, ctx: CallContext, req: CreateAddressRequest) -> Result[AddressCreated]:
        return self._guarded(
            "CreateAddress",
            ctx,
            req,
            self._inner.create_address,
            lambda r, res: {"partyid": r.party_id, "addrtype": r.address_type},
        )

    def update_address(self, ctx: CallContext, req: UpdateAddressRequest) -> Result[RecordVersion]:
        return self._guarded(
            "UpdateAddress",
            ctx,
            req,
            self._inner.update_address,
            lambda r, res: {"partyid": r.party_id, "addrtype": r.address_type},
        )

    def delete_address(self, ctx: CallContext, req: DeleteAddressRequest) -> Result[RecordVersion]:
        return self._guarded(
            "DeleteAddress",
            ctx,
            req,
            self._inner.delete_address,
            lambda r, res: {"partyid": r.party_id, "addrtype": r.address_type},
        )

    def get_address(self, ctx: CallContext, req: GetAddressRequest) -> Result[AddressRead]:
        return self._guarded(
            "GetAddress",
            ctx,
            req,
            self._inner.get_address,
            lambda r, res: {"partyid": r.party_id, "addrtype": r.address_type},
        )

    # Phone

    def create_phone(self, ctx: CallContext, req: CreatePhoneRequest) -> Result[PhoneCreated]:
        return self._guarded(
            "CreatePhone",
            ctx,
            req,
            self._inner.create_phone,
            lambda r, res: {"partyid": r.party_id, "phonetype": r.phone_type},
        )

    def update_phone(self, ctx: CallContext, req: UpdatePhoneRequest) -> Result[RecordVersion]:
        return self._guarded(
            "UpdatePhone",
            ctx,
            req,
            self._inner.update_phone,
            lambda r, res: {"partyid": r.party_id, "phonetype": r.phone_type},
        )

    def delete_phone(self, ctx: CallContext, req: DeletePhoneRequest) -> Result[RecordVersion]:
        return self._guarded(
            "DeletePhone",
            ctx,
            req,
            self._inner.delete_phone,
            lambda r, res: {"partyid": r.party_id, "phonetype": r.phone_type},
        )

    def get_phone(self, ctx: CallContext, req: GetPhoneRequest) -> Result[PhoneRead]:
        return self._guarded(
            "GetPhone",
            ctx,
            req,
            self._inner.get_phone,
            lambda r, res: {"partyid": r.party_id, "phonetype": r.phone_type},
        )

    # Health

    def get_server_version(
        self, ctx: CallContext, req: GetServerVersionRequest
    ) -> Result[ServerVersion]:
        started = time.perf_counter()
        result = self._inner.get_server_version(ctx, req)
        audit.record_call("GetServerVersion", result.error_code, time.perf_counter() - started)
        return result
