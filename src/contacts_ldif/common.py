from __future__ import annotations

from typing import Any

from .config_loader import ExportConfig, load_export_config
from .escaping import escape_value, needs_escaping
from .extract import extract, extract_address, extract_note, extract_phone
from .formatting import AddressFields, address_fields, address_string, phone_string
from .ldif import LdifSettings, build_dn, emit_attribute, render_entry
from .models import Address, ContactRecord, Phone, UnhandledItem
from .sources import load_contacts, safe_get, warn_missing
from .transform import record_to_ldif, transform_record

__all__ = [
    "Address",
    "AddressFields",
    "ContactRecord",
    "ExportConfig",
    "LdifSettings",
    "Phone",
    "UnhandledItem",
    "address_fields",
    "address_string",
    "build_dn",
    "emit_attribute",
    "escape_value",
    "extract",
    "extract_address",
    "extract_note",
    "extract_phone",
    "load_contacts",
    "load_export_config",
    "needs_escaping",
    "phone_string",
    "record_to_ldif",
    "render_entry",
    "safe_get",
    "transform_record",
    "warn_missing",
]


def load_config(args: Any) -> ExportConfig:
    return load_export_config(args)


def settings_from_config(config: ExportConfig) -> LdifSettings:
    return LdifSettings(base64_multiline=config.ldif.base64_multiline)


def ensure_contact_record(obj: Any) -> ContactRecord:
    if isinstance(obj, ContactRecord):
        return obj
    if isinstance(obj, dict):
        return ContactRecord.from_mapping(obj)
    raise TypeError(f"Unsupported contact payload type: {type(obj)!r}")
