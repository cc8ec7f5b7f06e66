from __future__ import annotations

from typing import NamedTuple, Optional

from .models import Address, Phone

# Garbage default country written by the source address book; never a real value.
BOGUS_COUNTRY = "Emacs"


class AddressFields(NamedTuple):
    street: Optional[str]
    street2: Optional[str]
    locality: Optional[str]
    state: Optional[str]
    postal_code: Optional[str]
    country: Optional[str]


def _or_none(value: str) -> Optional[str]:
    return value or None


def address_fields(address: Address) -> AddressFields:
    if not isinstance(address, Address):
        raise TypeError(f"Unsupported address type: {type(address)!r}")
    streets = list(address.streets)
    first = streets[0] if streets else None
    rest = ", ".join(streets[1:]) or None
    country = address.country
    if country in ("", BOGUS_COUNTRY):
        country = ""
    return AddressFields(
        street=first,
        street2=rest,
        locality=_or_none(address.city),
        state=_or_none(address.state),
        postal_code=_or_none(address.postal_code),
        country=_or_none(country),
    )


def address_string(address: Address) -> str:
    if not isinstance(address, Address):
        raise TypeError(f"Unsupported address type: {type(address)!r}")
    parts = list(address.streets) + [
        address.city,
        address.state,
        address.postal_code,
        address.country,
    ]
    return ", ".join(part for part in parts if part)


def phone_string(phone: Phone) -> str:
    """
    Render a phone for display.

    Free-form numbers are used as-is; split North American numbers render as
    ``(415) 555-1212``. A non-empty extension is appended as ``x123``.
    """
    if not isinstance(phone, Phone):
        raise TypeError(f"Unsupported phone type: {type(phone)!r}")
    if phone.number:
        text = phone.number
    elif phone.exchange and phone.suffix:
        local = f"{phone.exchange}-{phone.suffix}"
        text = f"({phone.area_code}) {local}" if phone.area_code else local
    else:
        raise ValueError(f"phone {phone.label!r} has no number to render")
    if phone.extension:
        text = f"{text} x{phone.extension}"
    return text
