import base64

import pytest

from contacts_ldif.escaping import SPECIAL_CHARS, escape_value, needs_escaping
from contacts_ldif.ldif import LdifSettings, build_dn, emit_attribute


@pytest.mark.parametrize(
    "char, escaped",
    [
        (",", "\\2C"),
        ("+", "\\2B"),
        ('"', "\\22"),
        ("\\", "\\5C"),
        ("<", "\\3C"),
        (">", "\\3E"),
        (";", "\\3B"),
    ],
)
def test_special_characters_are_hex_escaped(char, escaped):
    assert char in SPECIAL_CHARS
    assert escape_value(f"ab{char}cd") == f"ab{escaped}cd"


def test_other_characters_are_left_alone_when_escaping():
    assert escape_value("Doe, Jane <jane@x.com>") == "Doe\\2C Jane \\3Cjane@x.com\\3E"


def test_leading_hash_or_space_is_escaped_at_position_zero():
    assert escape_value("#tag") == "\\23tag"
    assert escape_value(" lead") == "\\20lead"
    assert escape_value(" ") == "\\20"


def test_trailing_space_is_moved_to_the_end():
    assert escape_value("trail ") == "trail\\20"
    assert escape_value("a,b ") == "a\\2Cb\\20"
    assert escape_value("# ") == "\\23\\20"


def test_plain_values_pass_through_unchanged():
    assert needs_escaping("jane@x.com") is False
    assert escape_value("jane@x.com") == "jane@x.com"
    assert escape_value("Jane Doe") == "Jane Doe"
    assert escape_value("") == ""


def test_non_ascii_is_narrowed_to_its_low_byte():
    assert escape_value("José") == "Jos\\E9"
    assert escape_value("€5") == "\\AC5"
    assert escape_value("a\nb") == "a\\0Ab"


def test_emit_attribute_modes():
    assert emit_attribute("cn", None) is None
    assert emit_attribute("cn", "") is None
    assert emit_attribute("dn", "cn=A\\2CB", pre_escaped=True) == "dn: cn=A\\2CB"
    assert emit_attribute("cn", "A,B") == "cn: A\\2CB"


def test_multiline_values_use_base64():
    line = emit_attribute("description", "a\nb")
    assert line.startswith("description:: ")
    assert base64.b64decode(line.split(":: ", 1)[1]).decode("utf-8") == "a\nb"
    assert emit_attribute("description", "a\rb").startswith("description:: ")


def test_base64_can_be_disabled_for_debugging():
    settings = LdifSettings(base64_multiline=False)
    assert emit_attribute("description", "a\nb", settings=settings) == "description: a\\0Ab"


def test_build_dn_omits_missing_components():
    assert build_dn("Jane Doe", "jane@x.com") == "cn=Jane Doe,mail=jane@x.com"
    assert build_dn("Doe, Jane", None) == "cn=Doe\\2C Jane"
    assert build_dn(None, "jane@x.com") == "mail=jane@x.com"


def test_printable_ascii_outside_the_special_set_is_not_escaped():
    assert escape_value("a`b{c|d}e~f,") == "a`b{c|d}e~f\\2C"
    assert needs_escaping("a`b{c|d}e~f") is False
