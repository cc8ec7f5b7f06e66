from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

Notes = Union[str, Mapping[str, str]]


def _clean(value: Any) -> str:
    return str(value if value is not None else "").strip()


def _coerce(value: Any, kind: Any) -> Any:
    if isinstance(value, kind):
        return value
    if isinstance(value, Mapping):
        return kind.from_mapping(value)
    raise TypeError(f"Unsupported {kind.__name__} payload type: {type(value)!r}")


@dataclass(frozen=True)
class Phone:
    label: str = ""
    number: str = ""
    area_code: str = ""
    exchange: str = ""
    suffix: str = ""
    extension: str = ""

    @staticmethod
    def from_mapping(payload: Dict[str, Any]) -> "Phone":
        return Phone(
            label=_clean(payload.get("label")),
            number=_clean(payload.get("number", payload.get("value"))),
            area_code=_clean(payload.get("area_code")),
            exchange=_clean(payload.get("exchange")),
            suffix=_clean(payload.get("suffix")),
            extension=_clean(payload.get("extension")),
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "label": self.label,
            "number": self.number,
            "area_code": self.area_code,
            "exchange": self.exchange,
            "suffix": self.suffix,
            "extension": self.extension,
        }


@dataclass(frozen=True)
class Address:
    label: str = ""
    streets: Tuple[str, ...] = ()
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""

    @staticmethod
    def from_mapping(payload: Dict[str, Any]) -> "Address":
        streets = payload.get("streets")
        if streets is None:
            street = payload.get("street")
            streets = [street] if street else []
        elif isinstance(streets, str):
            streets = [streets]
        return Address(
            label=_clean(payload.get("label")),
            streets=tuple(_clean(line) for line in streets if _clean(line)),
            city=_clean(payload.get("city")),
            state=_clean(payload.get("state")),
            postal_code=_clean(payload.get("postal_code")),
            country=_clean(payload.get("country")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "streets": list(self.streets),
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "country": self.country,
        }


@dataclass(frozen=True)
class UnhandledItem:
    """A labelled piece of source data with no target attribute."""

    label: str
    text: str

    def render(self) -> str:
        return f"{self.label}: {self.text}"


@dataclass(frozen=True)
class ContactRecord:
    full_name: str = ""
    first_name: str = ""
    last_name: str = ""
    emails: Tuple[str, ...] = ()
    phones: Tuple[Phone, ...] = ()
    addresses: Tuple[Address, ...] = ()
    company: str = ""
    notes: Notes = ""
    aliases: Union[str, Tuple[str, ...]] = ()

    @staticmethod
    def _ensure_email_list(values: Sequence[Any]) -> Tuple[str, ...]:
        emails = []
        for value in values:
            if isinstance(value, Mapping):
                value = value.get("value")
            if value is not None and not isinstance(value, str):
                raise TypeError(f"Unsupported email payload type: {type(value)!r}")
            if _clean(value):
                emails.append(_clean(value))
        return tuple(emails)

    @staticmethod
    def _ensure_phone_list(values: Sequence[Any]) -> Tuple[Phone, ...]:
        return tuple(_coerce(value, Phone) for value in values)

    @staticmethod
    def _ensure_address_list(values: Sequence[Any]) -> Tuple[Address, ...]:
        return tuple(_coerce(value, Address) for value in values)

    @staticmethod
    def _ensure_notes(value: Any) -> Notes:
        if isinstance(value, Mapping):
            return {str(label): _clean(text) for label, text in value.items()}
        return _clean(value)

    @staticmethod
    def _ensure_aliases(value: Any) -> Union[str, Tuple[str, ...]]:
        if isinstance(value, str):
            return value.strip()
        return tuple(_clean(alias) for alias in (value or []) if _clean(alias))

    @classmethod
    def from_mapping(cls, payload: Dict[str, Any]) -> "ContactRecord":
        emails = payload.get("emails", []) or []
        if isinstance(emails, (str, Mapping)):
            emails = [emails]
        return cls(
            full_name=_clean(payload.get("full_name")),
            first_name=_clean(payload.get("first_name")),
            last_name=_clean(payload.get("last_name")),
            emails=cls._ensure_email_list(emails),
            phones=cls._ensure_phone_list(payload.get("phones", []) or []),
            addresses=cls._ensure_address_list(payload.get("addresses", []) or []),
            company=_clean(payload.get("company")),
            notes=cls._ensure_notes(payload.get("notes", "")),
            aliases=cls._ensure_aliases(payload.get("aliases", ())),
        )

    def to_dict(self) -> Dict[str, Any]:
        notes = dict(self.notes) if isinstance(self.notes, Mapping) else self.notes
        aliases = self.aliases if isinstance(self.aliases, str) else list(self.aliases)
        return {
            "full_name": self.full_name,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "emails": list(self.emails),
            "phones": [phone.to_dict() for phone in self.phones],
            "addresses": [address.to_dict() for address in self.addresses],
            "company": self.company,
            "notes": notes,
            "aliases": aliases,
        }

    def note_items(self) -> List[Tuple[str, str]]:
        if isinstance(self.notes, Mapping):
            return list(self.notes.items())
        return []

    def alias_list(self) -> List[str]:
        if isinstance(self.aliases, str):
            return [self.aliases] if self.aliases else []
        return list(self.aliases)
