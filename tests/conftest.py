import time
from typing import Any

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import jwt
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from addrbook.context import CallContext
from addrbook.db import Base, get_engine
from addrbook.models.contact import AddressType, PartyType, PhoneType
from addrbook.schemas.addrbook import (
    CreateAddressRequest,
    CreatePartyRequest,
    CreatePhoneRequest,
)
from addrbook.services.address_book import AddressBookService
from addrbook.services.auth import JWT_ALGORITHM, TokenVerifier
from addrbook.services.gateway import AuthorizationGateway


class _JoseDateTimeProxy:
    def utcnow(self):
        from datetime import datetime, timezone

        return datetime.now(timezone.utc)

    def now(self, tz: Any | None = None):
        from datetime import datetime

        return datetime.now(tz)

    def __getattr__(self, name: str) -> Any:
        from datetime import datetime

        return getattr(datetime, name)


@pytest.fixture(autouse=True)
def _patch_jose_datetime(monkeypatch):
    import jose.jwt as jose_jwt

    monkeypatch.setattr(jose_jwt, "datetime", _JoseDateTimeProxy(), raising=False)


TENANT = 1001


@pytest.fixture()
def tenant():
    return TENANT


@pytest.fixture()
def engine():
    engine = get_engine("sqlite+pysqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def ctx():
    return CallContext()


@pytest.fixture()
def service(session_factory):
    return AddressBookService(session_factory)


def _generate_key_pair() -> tuple[str, str]:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")
    public_pem = key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")
    return private_pem, public_pem


@pytest.fixture(scope="session")
def rsa_keys():
    """Signing key pair shared by the whole run; generation is slow."""
    return _generate_key_pair()


@pytest.fixture(scope="session")
def other_rsa_keys():
    return _generate_key_pair()


@pytest.fixture()
def verifier(rsa_keys):
    return TokenVerifier(rsa_keys[1])


@pytest.fixture()
def make_token(rsa_keys):
    def _make_token(
        role: str | None = "addradmin",
        tenant: Any = TENANT,
        expires_in: int = 300,
        private_key: str | None = None,
        algorithm: str = JWT_ALGORITHM,
        **extra_claims,
    ) -> str:
        claims: dict[str, Any] = {"exp": int(time.time()) + expires_in, **extra_claims}
        if role is not None:
            claims["addrsvc"] = role
        if tenant is not None:
            claims["aid"] = tenant
        return jwt.encode(claims, private_key or rsa_keys[0], algorithm=algorithm)

    return _make_token


@pytest.fixture()
def gateway(service, verifier):
    return AuthorizationGateway(service, verifier)


@pytest.fixture()
def party(service, ctx):
    """A live person record in the default tenant."""
    result = service.create_party(
        ctx,
        CreatePartyRequest(
            mservice_id=TENANT,
            party_type=PartyType.person,
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
        ),
    )
    assert result.ok, result.error_message
    return result.data


@pytest.fixture()
def home_address(service, ctx, party):
    result = service.create_address(
        ctx,
        CreateAddressRequest(
            mservice_id=TENANT,
            party_id=party.party_id,
            address_type=AddressType.home,
            address_1="12 Analytical Way",
            city="San Francisco",
            state="CA",
            postal_code="94105",
            country_code="us",
        ),
    )
    assert result.ok, result.error_message
    return result.data


@pytest.fixture()
def cell_phone(service, ctx, party):
    result = service.create_phone(
        ctx,
        CreatePhoneRequest(
            mservice_id=TENANT,
            party_id=party.party_id,
            phone_type=PhoneType.cell,
            phone_number="415-555-1234",
        ),
    )
    assert result.ok, result.error_message
    return result.data
