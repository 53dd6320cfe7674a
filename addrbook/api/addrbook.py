"""RPC-style routes: one POST per address book operation.

Failures are reported in the body's ``error_code``; the HTTP status is 200.
"""

from fastapi import APIRouter, Depends

from addrbook.api.deps import get_call_context, get_gateway
from addrbook.context import CallContext
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
from addrbook.services.gateway import AuthorizationGateway

router = APIRouter(prefix="/addrbook", tags=["addrbook"])


@router.post("/CreateParty", response_model=Result[PartyCreated])
def create_party(
    payload: CreatePartyRequest,
    ctx: CallContext = Depends(get_call_context),
    gateway: AuthorizationGateway = Depends(get_gateway),
):
    return gateway.create_party(ctx, payload)


@router.post("/UpdateParty", response_model=Result[RecordVersion])
def update_party(
    payload: UpdatePartyRequest,
    ctx: CallContext = Depends(get_call_context),
    gateway: AuthorizationGateway = Depends(get_gateway),
):
    return gateway.update_party(ctx, payload)


@router.post("/DeleteParty", response_model=Result[RecordVersion])
def delete_party(
    payload: DeletePartyRequest,
    ctx: CallContext = Depends(get_call_context),
    gateway: AuthorizationGateway = Depends(get_gateway),
):
    return gateway.delete_party(ctx, payload)


@router.post("/GetParty", response_model=Result[PartyRead])
def get_party(
    payload: GetPartyRequest,
    ctx: CallContext = Depends(get_call_context),
    gateway: AuthorizationGateway = Depends(get_gateway),
):
    return gateway.get_party(ctx, payload)


@router.post("/GetParties", response_model=Result[list[PartyRead]])
def get_parties(
    payload: GetPartiesRequest,
    ctx: CallContext = Depends(get_call_context),
    gateway: AuthorizationGateway = Depends(get_gateway),
):
    return gateway.get_parties(ctx, payload)


@router.post("/GetPartyWrapper", response_model=Result[PartyWrapperRead])
def get_party_wrapper(
    payload: GetPartyWrapperRequest,
    ctx: CallContext = Depends(get_call_context),
    gateway: AuthorizationGateway = Depends(get_gateway),
):
    return gateway.get_party_wrapper(ctx, payload)


@router.post("/CreateAddress", response_model=Result[AddressCreated])
def create_address(
    payload: CreateAddressRequest,
    ctx: CallContext = Depends(get_call_context),
    gateway: AuthorizationGateway = Depends(get_gateway),
):
    return gateway.create_address(ctx, payload)


@router.post("/UpdateAddress", response_model=Result[RecordVersion])
def update_address(
    payload: UpdateAddressRequest,
    ctx: CallContext = Depends(get_call_context),
    gateway: AuthorizationGateway = Depends(get_gateway),
):
    return gateway.update_address(ctx, payload)


@router.post("/DeleteAddress", response_model=Result[RecordVersion])
def delete_address(
    payload: DeleteAddressRequest,
    ctx: CallContext = Depends(get_call_context),
    gateway: AuthorizationGateway = Depends(get_gateway),
):
    return gateway.delete_address(ctx, payload)


@router.post("/GetAddress", response_model=Result[AddressRead])
def get_address(
    payload: GetAddressRequest,
    ctx: CallContext = Depends(get_call_context),
    gateway: AuthorizationGateway = Depends(get_gateway),
):
    return gateway.get_address(ctx, payload)


@router.post("/CreatePhone", response_model=Result[PhoneCreated])
def create_phone(
    payload: CreatePhoneRequest,
    ctx: CallContext = Depends(get_call_context),
    gateway: AuthorizationGateway = Depends(get_gateway),
):
    return gateway.create_phone(ctx, payload)


@router.post("/UpdatePhone", response_model=Result[RecordVersion])
def update_phone(
    payload: UpdatePhoneRequest,
    ctx: CallContext = Depends(get_call_context),
    gateway: AuthorizationGateway = Depends(get_gateway),
):
    return gateway.update_phone(ctx, payload)


@router.post("/DeletePhone", response_model=Result[RecordVersion])
def delete_phone(
    payload: DeletePhoneRequest,
    ctx: CallContext = Depends(get_call_context),
    gateway: AuthorizationGateway = Depends(get_gateway),
):
    return gateway.delete_phone(ctx, payload)


@router.post("/GetPhone", response_model=Result[PhoneRead])
def get_phone(
    payload: GetPhoneRequest,
    ctx: CallContext = Depends(get_call_context),
    gateway: AuthorizationGateway = Depends(get_gateway),
):
    return gateway.get_phone(ctx, payload)


@router.post("/GetServerVersion", response_model=Result[ServerVersion])
def get_server_version(
    payload: GetServerVersionRequest | None = None,
    ctx: CallContext = Depends(get_call_context),
    gateway: AuthorizationGateway = Depends(get_gateway),
):
    return gateway.get_server_version(ctx, payload or GetServerVersionRequest())
