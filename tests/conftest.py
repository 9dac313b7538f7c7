"""Shared test fixtures for the vcard_converter test suite.

WHY: Most test modules need the same small set of realistic vCards in
each revision. Centralizing them here avoids duplication and keeps the
expected values (payload bytes, placeholder year, vendor properties) in
one place.

HOW: Pytest fixtures build Document trees through the document factory,
exactly as a lexer would. A jCard sample covers the JSON adapter.

RULES:
- Every fixture returns a fresh tree; tests may not share mutable state
- Binary payloads are small fixed byte strings with known base64 forms
- The 3.0 fixture uses Apple's extensions so 3.0 → 4.0 rules fire
"""

import base64
import json
from typing import Any, List

import pytest

from vcard_converter.core.document import Document
from vcard_converter.core.ir import Component, Revision


# ---------------------------------------------------------------------------
# Sample payloads
# ---------------------------------------------------------------------------

JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01"
JPEG_BASE64 = base64.b64encode(JPEG_BYTES).decode("ascii")
JPEG_DATA_URI = "data:image/jpeg;base64," + JPEG_BASE64


def build_document(revision: Any, entries: List[tuple]) -> Document:
    """Build a document from (name, value, parameters) tuples.

    VERSION is added first, matching what a lexer produces.
    """
    document = Document(revision=revision)
    document.add(document.create_property("VERSION", document.version))
    for name, value, parameters in entries:
        document.add(document.create_property(name, value, parameters))
    return document


@pytest.fixture
def vcard40_document():
    """A vCard 4.0 with a data: URI photo, a year-less birthday, and KIND=org."""
    return build_document(Revision.VCARD40, [
        ("PRODID", "-//Example//Contacts 1.0//EN", None),
        ("FN", "Example Corp", None),
        ("N", ["Corp", "Example", "", "", ""], None),
        ("KIND", "org", None),
        ("BDAY", "--05-01", None),
        ("PHOTO", JPEG_DATA_URI, None),
        ("TEL", "+1-555-555-0100", {"TYPE": ["work", "voice"], "PREF": "1"}),
        ("item1.EMAIL", "info@example.com", None),
    ])


@pytest.fixture
def vcard30_document():
    """A vCard 3.0 written by Apple's address book."""
    return build_document(Revision.VCARD30, [
        ("PRODID", "-//Apple Inc.//Mac OS X 10.9//EN", None),
        ("FN", "Jane Doe", None),
        ("NAME", "Jane's card", None),
        ("MAILER", "Mail.app", None),
        ("LABEL", "1 Main St", None),
        ("CLASS", "PUBLIC", None),
        ("BDAY", "1604-05-01", {"X-APPLE-OMIT-YEAR": "1604"}),
        ("PHOTO", JPEG_BYTES, {"ENCODING": "b", "TYPE": "JPEG"}),
        ("TEL", "+1-555-555-0199", {"TYPE": ["HOME", "PREF"]}),
        ("X-ABSHOWAS", "COMPANY", None),
    ])


@pytest.fixture
def vcard21_document():
    """A vCard 2.1 with nameless parameters and quoted-printable text."""
    document = Document(revision=Revision.VCARD21)
    document.add(document.create_property("VERSION", "2.1"))
    document.add(document.create_property(
        "NOTE",
        "Café opening hours",
        [
            document.create_parameter(None, "QUOTED-PRINTABLE"),
            document.create_parameter("CHARSET", "UTF-8"),
        ],
    ))
    document.add(document.create_property(
        "TEL",
        "+1-555-555-0142",
        [document.create_parameter(None, "WORK"), document.create_parameter(None, "PREF")],
    ))
    document.add(document.create_property(
        "PHOTO",
        JPEG_BYTES,
        [document.create_parameter(None, "BASE64"), document.create_parameter(None, "JPEG")],
    ))
    return document


@pytest.fixture
def document_with_component():
    """A vCard 3.0 carrying a nested component after its properties."""
    document = build_document(Revision.VCARD30, [("FN", "Nested", None)])
    nested = Component(name="VCARD")
    nested.children.append(document.create_property("FN", "Inner"))
    document.add(nested)
    return document


# ---------------------------------------------------------------------------
# jCard sample
# ---------------------------------------------------------------------------

JCARD_40 = [
    "vcard",
    [
        ["version", {}, "text", "4.0"],
        ["fn", {}, "text", "J. Doe"],
        ["n", {}, "text", ["Doe", "J.", "", "", ""]],
        ["bday", {}, "date-and-or-time", "--05-01"],
        ["kind", {}, "text", "individual"],
        ["tel", {"type": ["work", "voice"], "pref": "1"}, "uri", "tel:+1-555-555-0100"],
        ["email", {"group": "item1"}, "text", "jdoe@example.com"],
        ["categories", {}, "text", "friends", "work"],
        ["photo", {}, "uri", JPEG_DATA_URI],
    ],
]


@pytest.fixture
def jcard40_text():
    """A single vCard 4.0 as jCard JSON text."""
    return json.dumps(JCARD_40)


@pytest.fixture
def jpeg_bytes():
    return JPEG_BYTES


@pytest.fixture
def jpeg_base64():
    return JPEG_BASE64
