import pytest

from contacts_ldif.extract import extract, extract_address, extract_note, extract_phone
from contacts_ldif.formatting import address_fields, address_string, phone_string
from contacts_ldif.models import Address, ContactRecord, Phone


def _addresses():
    return [
        Address(label="work", streets=("1 Corp Way",), city="Boston"),
        Address(label="home", streets=("2 Elm St",), city="Quincy"),
        Address(label="cabin", streets=("3 Lake Rd",), city="Tahoe"),
    ]


def test_extract_removes_first_match_and_keeps_order():
    work, home, cabin = _addresses()
    found, remainder = extract({"home"}, [work, home, cabin], case_insensitive=True)
    assert found is home
    assert remainder == [work, cabin]

    again, unchanged = extract({"home"}, remainder, case_insensitive=True)
    assert again is None
    assert unchanged == [work, cabin]


def test_extract_only_takes_the_first_of_several_matches():
    phones = [
        Phone(label="Work", number="555-1000"),
        Phone(label="work", number="555-1001"),
    ]
    first, remainder = extract_phone({"work"}, phones)
    assert first == "555-1000"
    second, remainder = extract_phone({"work"}, remainder)
    assert second == "555-1001"
    assert remainder == []


def test_phone_and_address_labels_ignore_case():
    number, remainder = extract_phone({"office"}, [Phone(label="OFFICE", number="1")])
    assert number == "1"
    assert remainder == []
    address, _ = extract_address({"home"}, [Address(label="Home")])
    assert address == Address(label="Home")


def test_note_labels_are_case_sensitive():
    notes = [("Title", "CTO"), ("title", "Boss")]
    text, remainder = extract_note({"title"}, notes)
    assert text == "Boss"
    assert remainder == [("Title", "CTO")]
    missing, same = extract_note({"TITLE"}, remainder)
    assert missing is None
    assert same == [("Title", "CTO")]


def test_phone_string_renders_split_and_free_form_numbers():
    assert phone_string(Phone(label="work", number="555-1000")) == "555-1000"
    assert (
        phone_string(
            Phone(label="home", area_code="415", exchange="555", suffix="1212", extension="9")
        )
        == "(415) 555-1212 x9"
    )
    assert phone_string(Phone(label="home", exchange="555", suffix="1212")) == "555-1212"


def test_phone_string_rejects_malformed_phones():
    with pytest.raises(ValueError):
        phone_string(Phone(label="work"))
    with pytest.raises(TypeError):
        phone_string("555-1000")  # type: ignore[arg-type]


def test_address_fields_splits_streets_and_drops_bogus_country():
    address = Address(
        label="home",
        streets=("1 Main St", "Apt 2", "Rear"),
        city="Springfield",
        state="IL",
        postal_code="62701",
        country="Emacs",
    )
    assert tuple(address_fields(address)) == (
        "1 Main St",
        "Apt 2, Rear",
        "Springfield",
        "IL",
        "62701",
        None,
    )
    assert address_fields(Address(streets=("1 Main St",), country="US")).street2 is None
    assert address_fields(Address(country="US")).country == "US"
    assert address_fields(Address(country="")).country is None


def test_address_string_joins_non_empty_parts():
    address = Address(label="cabin", streets=("3 Lake Rd",), city="Tahoe", state="CA")
    assert address_string(address) == "3 Lake Rd, Tahoe, CA"
    assert address_string(Address(label="empty")) == ""


def test_contact_record_from_mapping():
    record = ContactRecord.from_mapping(
        {
            "full_name": " Jane Doe ",
            "emails": ["jane@x.com", ""],
            "phones": [{"label": "work", "value": "555-1000"}],
            "addresses": [{"label": "home", "street": "2 Elm St", "city": "Quincy"}],
            "notes": {"title": "CTO"},
            "aliases": "JD",
        }
    )
    assert record.full_name == "Jane Doe"
    assert record.emails == ("jane@x.com",)
    assert record.phones == (Phone(label="work", number="555-1000"),)
    assert record.addresses == (Address(label="home", streets=("2 Elm St",), city="Quincy"),)
    assert record.note_items() == [("title", "CTO")]
    assert record.alias_list() == ["JD"]


def test_contact_record_rejects_bad_phone_payload():
    with pytest.raises(TypeError):
        ContactRecord.from_mapping({"full_name": "X", "phones": ["555-1000"]})


def test_contact_record_reads_labelled_email_payloads():
    record = ContactRecord.from_mapping(
        {
            "full_name": "J",
            "emails": [{"value": "j@x.com", "label": "work"}, "other@x.com", {"label": "home"}],
        }
    )
    assert record.emails == ("j@x.com", "other@x.com")
    with pytest.raises(TypeError):
        ContactRecord.from_mapping({"full_name": "J", "emails": [["j@x.com"]]})


def test_contact_record_to_dict_round_trips():
    record = ContactRecord(
        full_name="Jane Doe",
        first_name="Jane",
        last_name="Doe",
        emails=("jane@x.com", "jd@home.net"),
        phones=(
            Phone(label="work", number="555-1000"),
            Phone(label="home", area_code="415", exchange="555", suffix="1212", extension="9"),
        ),
        addresses=(Address(label="home", streets=("2 Elm St", "Apt 4"), city="Quincy"),),
        company="Acme",
        notes={"title": "CTO", "notes": "likes tea"},
        aliases=("JD", "Janie"),
    )
    assert ContactRecord.from_mapping(record.to_dict()) == record
    free_text = ContactRecord(full_name="Jane Doe", notes="Met at the conference", aliases="JD")
    assert ContactRecord.from_mapping(free_text.to_dict()) == free_text
