"""Bearer token verification and typed claim extraction."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any

from jose import ExpiredSignatureError, jwk, jwt
from jose.exceptions import JOSEError

from addrbook.config import Settings

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "RS256"
ROLE_CLAIM = "addrsvc"
TENANT_CLAIM = "aid"


class Role(str, enum.Enum):
    admin = "addradmin"
    read_write = "addrrw"
    read_only = "addrro"


class InvalidToken(Exception):
    pass


class TokenExpired(InvalidToken):
    pass


@dataclass(frozen=True)
class TokenClaims:
    role: Role
    mservice_id: int

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> TokenClaims:
        role_value = payload.get(ROLE_CLAIM)
        if not isinstance(role_value, str):
            raise InvalidToken(f"missing {ROLE_CLAIM} claim")
        try:
            role = Role(role_value)
        except ValueError as exc:
            raise InvalidToken(f"unknown role {role_value!r}") from exc

        tenant_value = payload.get(TENANT_CLAIM)
        # bool is an int subclass; a boolean tenant is never valid
        if isinstance(tenant_value, bool) or not isinstance(tenant_value, (int, float)):
            raise InvalidToken(f"missing {TENANT_CLAIM} claim")
        return cls(role=role, mservice_id=int(tenant_value))


class TokenVerifier:
    """Verifies RS256 tokens against one public key."""

    def __init__(self, public_key: str):
        try:
            jwk.construct(public_key, JWT_ALGORITHM)
        except JOSEError as exc:
            raise ValueError("JWT public key is not a usable RSA key") from exc
        self._public_key = public_key

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenVerifier:
        return cls(settings.load_public_key())

    def verify(self, token: str | None) -> TokenClaims:
        if not token:
            raise InvalidToken("missing token")
        try:
            payload = jwt.decode(token, self._public_key, algorithms=[JWT_ALGORITHM])
        except ExpiredSignatureError as exc:
            raise TokenExpired("token is expired") from exc
        except JOSEError as exc:
            raise InvalidToken(str(exc)) from exc
        return TokenClaims.from_payload(payload)
