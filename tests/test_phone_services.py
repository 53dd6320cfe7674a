"""Tests for phone records keyed by (party, phone type)."""

from addrbook.errors import ErrorCode
from addrbook.models.contact import PhoneType
from addrbook.schemas.addrbook import (
    CreatePhoneRequest,
    DeletePhoneRequest,
    GetPhoneRequest,
    UpdatePhoneRequest,
)


def test_create_and_get_phone(service, ctx, party, cell_phone, tenant):
    assert cell_phone.phone_type == PhoneType.cell
    assert cell_phone.version == 1

    fetched = service.get_phone(
        ctx, GetPhoneRequest(mservice_id=tenant, party_id=party.party_id, phone_type=PhoneType.cell)
    )
    assert fetched.ok
    assert fetched.data.phone_number == "415-555-1234"
    assert fetched.data.phone_type_name == "cell"


def test_missing_phone_type_is_not_found(service, ctx, party, cell_phone, tenant):
    result = service.get_phone(
        ctx, GetPhoneRequest(mservice_id=tenant, party_id=party.party_id, phone_type=PhoneType.work)
    )
    assert result.error_code == ErrorCode.not_found


def test_update_phone_and_reject_stale_version(service, ctx, party, cell_phone, tenant):
    request = UpdatePhoneRequest(
        mservice_id=tenant,
        party_id=party.party_id,
        phone_type=PhoneType.cell,
        phone_number="+1-415-555-9999",
        version=1,
    )
    updated = service.update_phone(ctx, request)
    assert updated.ok
    assert updated.data.version == 2

    stale = service.update_phone(ctx, request.model_copy(update={"phone_number": "415-555-0000"}))
    assert stale.error_code == ErrorCode.not_found

    fetched = service.get_phone(
        ctx, GetPhoneRequest(mservice_id=tenant, party_id=party.party_id, phone_type=PhoneType.cell)
    )
    assert fetched.data.phone_number == "+1-415-555-9999"
    assert fetched.data.version == 2


def test_duplicate_phone_type_fails_execution(service, ctx, party, cell_phone, tenant):
    result = service.create_phone(
        ctx,
        CreatePhoneRequest(
            mservice_id=tenant,
            party_id=party.party_id,
            phone_type=PhoneType.cell,
            phone_number="415-555-2222",
        ),
    )
    assert result.error_code == ErrorCode.execute_failed


def test_invalid_phone_number(service, ctx, party, tenant):
    result = service.create_phone(
        ctx,
        CreatePhoneRequest(
            mservice_id=tenant,
            party_id=party.party_id,
            phone_type=PhoneType.home,
            phone_number="555-1234",
        ),
    )
    assert result.error_code == ErrorCode.invalid_fields
    assert result.error_message == "invalid fields: phone_number"


def test_delete_phone(service, ctx, party, cell_phone, tenant):
    deleted = service.delete_phone(
        ctx,
        DeletePhoneRequest(
            mservice_id=tenant, party_id=party.party_id, phone_type=PhoneType.cell, version=1
        ),
    )
    assert deleted.ok
    assert deleted.data.version == 2

    fetched = service.get_phone(
        ctx, GetPhoneRequest(mservice_id=tenant, party_id=party.party_id, phone_type=PhoneType.cell)
    )
    assert fetched.error_code == ErrorCode.not_found
    update = service.update_phone(
        ctx,
        UpdatePhoneRequest(
            mservice_id=tenant,
            party_id=party.party_id,
            phone_type=PhoneType.cell,
            phone_number="415-555-1234",
            version=2,
        ),
    )
    assert update.error_code == ErrorCode.not_found


def test_phones_are_tenant_scoped(service, ctx, party, cell_phone, tenant):
    result = service.get_phone(
        ctx,
        GetPhoneRequest(mservice_id=tenant + 1, party_id=party.party_id, phone_type=PhoneType.cell),
    )
    assert result.error_code == ErrorCode.not_found


def test_phone_on_another_tenants_party_is_refused(service, ctx, party, tenant):
    def _create(mservice_id, party_id):
        return service.create_phone(
            ctx,
            CreatePhoneRequest(
                mservice_id=mservice_id,
                party_id=party_id,
                phone_type=PhoneType.home,
                phone_number="415-555-3333",
            ),
        )

    foreign = _create(tenant + 1, party.party_id)
    missing = _create(tenant + 1, party.party_id + 1000)
    assert foreign.error_code == ErrorCode.execute_failed
    assert (foreign.error_code, foreign.error_message) == (
        missing.error_code,
        missing.error_message,
    )
    assert _create(tenant, party.party_id).ok
