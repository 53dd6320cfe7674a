import enum
from datetime import datetime, timezone

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    ForeignKeyConstraint,
    Index,
    Integer,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from addrbook.db import Base

# SQLite only autoincrements INTEGER PRIMARY KEY columns.
IdentityType = BigInteger().with_variant(Integer, "sqlite")


class PartyType(enum.IntEnum):
    unknown = 0
    person = 1
    business = 2


class AddressType(enum.IntEnum):
    unknown = 0
    home = 1
    shipping = 2


class PhoneType(enum.IntEnum):
    unknown = 0
    home = 1
    work = 2
    cell = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class VersionedRecordMixin:
    """Columns shared by every record: tenant, version and soft-delete state."""

    mservice_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    deleted: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)


def _active_type_index(table: str, type_column: str) -> Index:
    # at most one live row per (tenant, party, type); deleted rows are kept
    return Index(
        f"uq_{table}_active_{type_column}",
        "mservice_id",
        "party_id",
        type_column,
        unique=True,
        sqlite_where=text("is_deleted = 0"),
        postgresql_where=text("is_deleted = false"),
    )


def _owning_party_key(table: str) -> ForeignKeyConstraint:
    # the owning party must belong to the same tenant as the child row
    return ForeignKeyConstraint(
        ["mservice_id", "party_id"],
        ["parties.mservice_id", "parties.party_id"],
        name=f"fk_{table}_party",
    )


class Party(VersionedRecordMixin, Base):
    __tablename__ = "parties"
    __table_args__ = (UniqueConstraint("mservice_id", "party_id", name="uq_parties_tenant_party"),)

    party_id: Mapped[int] = mapped_column(IdentityType, primary_key=True, autoincrement=True)
    party_type: Mapped[int] = mapped_column(Integer, nullable=False, default=PartyType.unknown)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    middle_name: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    first_name: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    nickname: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    company: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")


class Address(VersionedRecordMixin, Base):
    __tablename__ = "addresses"
    __table_args__ = (
        _owning_party_key("addresses"),
        _active_type_index("addresses", "address_type"),
    )

    id: Mapped[int] = mapped_column(IdentityType, primary_key=True, autoincrement=True)
    party_id: Mapped[int] = mapped_column(IdentityType, nullable=False)
    address_type: Mapped[int] = mapped_column(Integer, nullable=False)
    address_1: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    address_2: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    city: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    state: Mapped[str] = mapped_column(String(2), nullable=False, default="")
    postal_code: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    country_code: Mapped[str] = mapped_column(String(2), nullable=False, default="us")


class Phone(VersionedRecordMixin, Base):
    __tablename__ = "phones"
    __table_args__ = (
        _owning_party_key("phones"),
        _active_type_index("phones", "phone_type"),
    )

    id: Mapped[int] = mapped_column(IdentityType, primary_key=True, autoincrement=True)
    party_id: Mapped[int] = mapped_column(IdentityType, nullable=False)
    phone_type: Mapped[int] = mapped_column(Integer, nullable=False)
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False, default="")
