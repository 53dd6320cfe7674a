"""Field syntax predicates.

Each predicate checks one field class against a fixed pattern and returns a
bool. Callers decide which fields are optional and collect every failure.
"""

import re

NAME_PATTERN = re.compile(r"^[A-Za-z-]{1,50}$")
ADDRESS_LINE_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 .-]{0,99}$")
COMPANY_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9 .-]{0,98}[A-Za-z0-9.-])?$")
EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}$"
)
CITY_PATTERN = re.compile(r"^[A-Za-z][A-Za-z .-]{0,49}$")
STATE_PATTERN = re.compile(r"^[A-Za-z]{2}$")
US_POSTAL_PATTERN = re.compile(r"^\d{5}(?:-\d{4})?$")
POSTAL_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 -]{3,18}[A-Za-z0-9]$")
COUNTRY_CODE_PATTERN = re.compile(r"^[a-z]{2}$")
PHONE_PATTERN = re.compile(r"^(?:\+\d{1,4}-)?\d{3}-\d{3}-\d{4}(?:x\d{1,5})?$")


def _matches(pattern: re.Pattern, value: str | None) -> bool:
    return bool(value) and pattern.fullmatch(value) is not None


def is_valid_name(value: str | None) -> bool:
    return _matches(NAME_PATTERN, value)


def is_valid_address_line(value: str | None) -> bool:
    return _matches(ADDRESS_LINE_PATTERN, value)


def is_valid_company(value: str | None) -> bool:
    return _matches(COMPANY_PATTERN, value)


def is_valid_email(value: str | None) -> bool:
    return _matches(EMAIL_PATTERN, value)


def is_valid_city(value: str | None) -> bool:
    return _matches(CITY_PATTERN, value)


def is_valid_state(value: str | None) -> bool:
    return _matches(STATE_PATTERN, value)


def is_valid_postal_code(value: str | None, country_code: str | None) -> bool:
    """US codes must be ZIP or ZIP+4; anything else gets the generic shape."""
    if country_code == "us":
        return _matches(US_POSTAL_PATTERN, value)
    return _matches(POSTAL_PATTERN, value)


def is_valid_country_code(value: str | None) -> bool:
    return _matches(COUNTRY_CODE_PATTERN, value)


def is_valid_phone(value: str | None) -> bool:
    return _matches(PHONE_PATTERN, value)
