from __future__ import annotations

import logging
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from .extract import extract_address, extract_note, extract_phone
from .formatting import address_fields, address_string, phone_string
from .ldif import OBJECT_CLASSES, LdifSettings, build_dn, emit_attribute, render_entry
from .models import Address, ContactRecord, Phone, UnhandledItem

logger = logging.getLogger(__name__)

# Phone and address labels are compared case-insensitively.
WORK_PHONE_LABELS: FrozenSet[str] = frozenset({"work", "office"})
HOME_PHONE_LABELS: FrozenSet[str] = frozenset({"home"})
FAX_LABELS: FrozenSet[str] = frozenset({"fax", "work fax", "home fax", "facsimile"})
PAGER_LABELS: FrozenSet[str] = frozenset({"pager"})
MOBILE_LABELS: FrozenSet[str] = frozenset({"mobile", "cell", "cellular"})

HOME_ADDRESS_LABELS: FrozenSet[str] = frozenset({"home"})
WORK_ADDRESS_LABELS: FrozenSet[str] = frozenset({"work", "office"})

# Note labels are matched exactly; each set lists the spellings seen in the wild.
IM_NOTE_LABELS: FrozenSet[str] = frozenset(
    {"aim", "AIM", "aim-id", "AIM-ID", "AIM ID", "im", "IM"}
)
TITLE_NOTE_LABELS: FrozenSet[str] = frozenset(
    {"title", "Title", "TITLE", "job-title", "Job Title"}
)
DEPARTMENT_NOTE_LABELS: FrozenSet[str] = frozenset(
    {"department", "Department", "dept", "Dept", "group", "Group"}
)
WEB_NOTE_LABELS: FrozenSet[str] = frozenset(
    {"www", "WWW", "web", "Web", "url", "URL", "homepage", "Homepage", "home-page", "Home Page"}
)

# Display labels for leftover notes. ``None`` means the note is never surfaced.
NOTE_LABELS: Dict[str, Optional[str]] = {
    "notes": "Notes",
    "mail-alias": "Mail Alias",
    "anniversary": "Anniversary",
    "birthday": "Birthday",
    "creation-date": None,
    "timestamp": None,
    "cache": None,
}

HOME_ADDRESS_ATTRIBUTES = (
    "homeStreet",
    "mozillaHomeStreet2",
    "mozillaHomeLocalityName",
    "mozillaHomeState",
    "mozillaHomePostalCode",
    "mozillaHomeCountryName",
)
WORK_ADDRESS_ATTRIBUTES = ("street", "mozillaWorkStreet2", "l", "st", "postalCode", "c")


def _check_items(items: Sequence[object], kind: type) -> None:
    for item in items:
        if not isinstance(item, kind):
            raise TypeError(f"Expected {kind.__name__}, got {type(item)!r}: {item!r}")


def _split_emails(
    emails: Sequence[str], unhandled: List[UnhandledItem]
) -> Tuple[Optional[str], Optional[str]]:
    primary = emails[0] if len(emails) > 0 else None
    secondary = emails[1] if len(emails) > 1 else None
    if len(emails) > 2:
        unhandled.append(UnhandledItem("Other Email Addresses", ", ".join(emails[2:])))
    return primary or None, secondary or None


def _collect_leftovers(
    record: ContactRecord,
    phones: Sequence[Phone],
    addresses: Sequence[Address],
    notes: Sequence[Tuple[str, str]],
    unhandled: List[UnhandledItem],
) -> None:
    aliases = record.alias_list()
    if aliases:
        unhandled.append(UnhandledItem("Also Known As", ", ".join(aliases)))
    for phone in phones:
        unhandled.append(UnhandledItem(f'Other Phone "{phone.label}"', phone_string(phone)))
    for address in addresses:
        unhandled.append(
            UnhandledItem(f'Other Address "{address.label}"', address_string(address))
        )
    for label, text in notes:
        display = NOTE_LABELS.get(label, label)
        if display is None or not text:
            continue
        unhandled.append(UnhandledItem(display, text))


def build_description(record: ContactRecord, unhandled: Sequence[UnhandledItem]) -> Optional[str]:
    lines: List[str] = []
    if isinstance(record.notes, str) and record.notes:
        lines.append(record.notes)
    lines.extend(item.render() for item in unhandled)
    return "\n".join(lines) or None


def transform_record(
    record: ContactRecord, settings: Optional[LdifSettings] = None
) -> Optional[List[str]]:
    """
    Map one contact onto the lines of an LDIF entry.

    Returns ``None`` when the contact has neither a name nor an email
    address. Data without a target attribute ends up in ``description``.
    """
    unhandled: List[UnhandledItem] = []
    primary_email, secondary_email = _split_emails(record.emails, unhandled)
    full_name = record.full_name or None

    if not full_name and not primary_email:
        logger.warning("Skipping contact with neither a name nor an email address: %r", record)
        return None

    _check_items(record.phones, Phone)
    _check_items(record.addresses, Address)

    lines: List[Optional[str]] = []

    def emit(attribute: str, value: Optional[str], pre_escaped: bool = False) -> None:
        lines.append(emit_attribute(attribute, value, pre_escaped=pre_escaped, settings=settings))

    emit("dn", build_dn(full_name, primary_email), pre_escaped=True)
    for object_class in OBJECT_CLASSES:
        emit("objectclass", object_class)

    emit("givenName", record.first_name)
    emit("sn", record.last_name)
    emit("cn", full_name)
    emit("mail", primary_email)
    emit("mozillaSecondEmail", secondary_email)

    phones: List[Phone] = list(record.phones)
    for attribute, labels in (
        ("telephoneNumber", WORK_PHONE_LABELS),
        ("homePhone", HOME_PHONE_LABELS),
        ("fax", FAX_LABELS),
        ("pager", PAGER_LABELS),
        ("mobile", MOBILE_LABELS),
    ):
        number, phones = extract_phone(labels, phones)
        emit(attribute, number)

    addresses: List[Address] = list(record.addresses)
    for attributes, labels in (
        (HOME_ADDRESS_ATTRIBUTES, HOME_ADDRESS_LABELS),
        (WORK_ADDRESS_ATTRIBUTES, WORK_ADDRESS_LABELS),
    ):
        address, addresses = extract_address(labels, addresses)
        if address is not None:
            for attribute, value in zip(attributes, address_fields(address)):
                emit(attribute, value)

    notes = record.note_items()
    for attribute, labels in (
        ("nsAIMid", IM_NOTE_LABELS),
        ("title", TITLE_NOTE_LABELS),
        ("department", DEPARTMENT_NOTE_LABELS),
        ("mozillaHomeUrl", WEB_NOTE_LABELS),
    ):
        text, notes = extract_note(labels, notes)
        emit(attribute, text)

    emit("company", record.company)

    _collect_leftovers(record, phones, addresses, notes, unhandled)
    emit("description", build_description(record, unhandled))

    logger.debug(
        "Built entry for %s with %d unhandled items", full_name or primary_email, len(unhandled)
    )
    return [line for line in lines if line is not None]


def record_to_ldif(record: ContactRecord, settings: Optional[LdifSettings] = None) -> Optional[str]:
    lines = transform_record(record, settings)
    if lines is None:
        return None
    return render_entry(lines)
