from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

import pandas as pd
import yaml  # type: ignore[import-untyped]

from .models import ContactRecord

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml", ".json"}


def _coerce_to_string(value: Any) -> str:
    if pd.isna(value):
        return ""
    return str(value or "").strip()


def safe_get(row: Any, key: str) -> str:
    try:
        return _coerce_to_string(row.get(key, ""))
    except (AttributeError, KeyError, TypeError):
        try:
            if hasattr(row, "__contains__") and key in row:
                return _coerce_to_string(row[key])
            return ""
        except (KeyError, TypeError, AttributeError):
            return ""


def warn_missing(path: Optional[str], label: str) -> bool:
    if not path or not os.path.exists(path):
        logger.warning("%s path missing: %s", label, path)
        return True
    return False


def _split_labelled(field: str) -> List[Dict[str, str]]:
    """Split a ``value::label|value2::label2`` field into value/label dicts."""
    entries: List[Dict[str, str]] = []
    for part in field.split("|"):
        if not part.strip():
            continue
        value, _, label = part.partition("::")
        entries.append({"value": value.strip(), "label": label.strip()})
    return entries


def _parse_json_field(raw: str, column: str, row_id: Any) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"row {row_id}: {column} is not valid JSON: {exc}") from exc


def _row_to_payload(row: Any, row_id: Any) -> Dict[str, Any]:
    emails = [entry["value"] for entry in _split_labelled(safe_get(row, "emails"))]
    phones = _split_labelled(safe_get(row, "phones"))
    addresses = _parse_json_field(safe_get(row, "addresses_json"), "addresses_json", row_id)
    notes: Any = _parse_json_field(safe_get(row, "notes_json"), "notes_json", row_id)
    if notes is None:
        notes = safe_get(row, "notes")
    aliases = [alias for alias in safe_get(row, "aliases").split("|") if alias.strip()]
    return {
        "full_name": safe_get(row, "full_name"),
        "first_name": safe_get(row, "first_name"),
        "last_name": safe_get(row, "last_name"),
        "company": safe_get(row, "company"),
        "emails": emails,
        "phones": phones,
        "addresses": addresses or [],
        "notes": notes,
        "aliases": aliases,
    }


def load_contacts_csv(path: Optional[str]) -> List[ContactRecord]:
    if not path or warn_missing(path, "Contacts CSV"):
        return []
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    records = [
        ContactRecord.from_mapping(_row_to_payload(row, idx)) for idx, row in df.iterrows()
    ]
    logger.info("Loaded %d contacts from %s", len(records), path)
    return records


def load_contacts_document(path: Optional[str]) -> List[ContactRecord]:
    if not path or warn_missing(path, "Contacts document"):
        return []
    with open(path, "r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or []
    if isinstance(data, dict):
        data = data.get("contacts", []) or []
    if not isinstance(data, list):
        raise TypeError(f"Unsupported contacts document in {path}: {type(data)!r}")
    records = []
    for payload in data:
        if not isinstance(payload, dict):
            raise TypeError(f"Unsupported contact payload type: {type(payload)!r}")
        records.append(ContactRecord.from_mapping(payload))
    logger.info("Loaded %d contacts from %s", len(records), path)
    return records


def load_contacts(path: Optional[str]) -> List[ContactRecord]:
    if not path:
        logger.warning("No contacts input configured")
        return []
    suffix = os.path.splitext(path)[1].lower()
    if suffix == ".csv":
        return load_contacts_csv(path)
    if suffix in YAML_SUFFIXES:
        return load_contacts_document(path)
    raise ValueError(f"Unsupported contacts file type: {path}")
