"""Configuration constants, value-type tables, and .env loading.

WHY: Centralizes every table that decides how vCard properties are typed
and converted, so they are easy to find, update, and override. Property
maps, vendor extension names, and the placeholder birth year are plain
data structures kept apart from the converter logic, so both humans and
coding agents can modify them confidently.

HOW: python-dotenv loads the .env file on import. The property-name and
value-type-marker tables are module-level dicts keyed by upper-case
names whose values are the textual value-type markers used on the wire
("TEXT", "URI", "DATE-AND-OR-TIME", ...). core.registry turns them into
immutable per-revision registries.

RULES:
- PROPERTY_VALUE_TYPES is shared by all revisions (2.1, 3.0, 4.0)
- Properties in BINARY_TO_URI_IN_40 resolve to URI in 4.0 (BINARY is gone)
- VALUE_TYPE_MARKERS maps an explicit VALUE=... marker to its value type
- Unknown property names fall back to TEXT
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Property name → default value type marker
# ---------------------------------------------------------------------------

PROPERTY_VALUE_TYPES: dict[str, str] = {
    # vCard 2.1 properties and up
    "N": "TEXT",
    "FN": "TEXT",
    "PHOTO": "BINARY",
    "BDAY": "DATE-AND-OR-TIME",
    "ADR": "TEXT",
    "LABEL": "TEXT",
    "TEL": "TEXT",
    "EMAIL": "TEXT",
    "MAILER": "TEXT",
    "GEO": "TEXT",
    "TITLE": "TEXT",
    "ROLE": "TEXT",
    "LOGO": "BINARY",
    "ORG": "TEXT",
    "NOTE": "TEXT",
    "REV": "TIMESTAMP",
    "SOUND": "TEXT",
    "URL": "URI",
    "UID": "TEXT",
    "VERSION": "TEXT",
    "KEY": "TEXT",
    "TZ": "TEXT",
    # vCard 3.0 properties
    "CATEGORIES": "TEXT",
    "SORT-STRING": "TEXT",
    "PRODID": "TEXT",
    "NICKNAME": "TEXT",
    "CLASS": "TEXT",
    # rfc2739 properties
    "FBURL": "URI",
    "CAPURI": "URI",
    "CALURI": "URI",
    "CALADRURI": "URI",
    # rfc4770 properties
    "IMPP": "URI",
    # vCard 4.0 properties
    "SOURCE": "URI",
    "XML": "TEXT",
    "ANNIVERSARY": "DATE-AND-OR-TIME",
    "CLIENTPIDMAP": "TEXT",
    "LANG": "LANGUAGE-TAG",
    "GENDER": "TEXT",
    "KIND": "TEXT",
    "MEMBER": "URI",
    "RELATED": "URI",
    # rfc6474 properties
    "BIRTHPLACE": "TEXT",
    "DEATHPLACE": "TEXT",
    "DEATHDATE": "DATE-AND-OR-TIME",
    # rfc6715 properties
    "EXPERTISE": "TEXT",
    "HOBBY": "TEXT",
    "INTEREST": "TEXT",
    "ORG-DIRECTORY": "TEXT",
}

BINARY_TO_URI_IN_40: frozenset[str] = frozenset(
    name for name, marker in PROPERTY_VALUE_TYPES.items() if marker == "BINARY"
)
"""Properties whose default BINARY type becomes URI in vCard 4.0."""

# ---------------------------------------------------------------------------
# Explicit VALUE=... marker → value type marker
# ---------------------------------------------------------------------------

VALUE_TYPE_MARKERS: dict[str, str] = {
    "BINARY": "BINARY",
    "BOOLEAN": "BOOLEAN",
    "CONTENT-ID": "TEXT",  # vCard 2.1 only
    "DATE": "DATE",
    "DATE-TIME": "DATE-TIME",
    "DATE-AND-OR-TIME": "DATE-AND-OR-TIME",
    "FLOAT": "FLOAT",
    "INTEGER": "INTEGER",
    "LANGUAGE-TAG": "LANGUAGE-TAG",
    "TIMESTAMP": "TIMESTAMP",
    "TEXT": "TEXT",
    "TIME": "TIME",
    "UNKNOWN": "UNKNOWN",  # jCard only
    "URI": "URI",
    "URL": "URI",  # vCard 2.1 only
    "UTC-OFFSET": "UTC-OFFSET",
}

DEFAULT_VALUE_TYPE = "TEXT"

# ---------------------------------------------------------------------------
# Nameless (vCard 2.1) parameter values → guessed parameter name
# ---------------------------------------------------------------------------

NAMELESS_PARAMETER_NAMES: dict[str, frozenset[str]] = {
    "ENCODING": frozenset({"7-BIT", "QUOTED-PRINTABLE", "BASE64"}),
    "TYPE": frozenset({
        # Common types
        "WORK", "HOME", "PREF",
        # Delivery label types
        "DOM", "INTL", "POSTAL", "PARCEL",
        # Telephone types
        "VOICE", "FAX", "MSG", "CELL", "PAGER", "BBS", "MODEM", "CAR",
        "ISDN", "VIDEO",
        # Email types
        "AOL", "APPLELINK", "ATTMAIL", "CIS", "EWORLD", "INTERNET",
        "IBMMAIL", "MCIMAIL", "POWERSHARE", "PRODIGY", "TLX", "X400",
        # Photo / logo format types
        "GIF", "CGM", "WMF", "BMP", "DIB", "PICT", "TIFF", "PDF", "PS",
        "JPEG", "MPEG", "MPEG2", "AVI", "QTIME",
        # Sound types
        "WAVE", "PCM", "AIFF",
        # Key types
        "X509", "PGP",
    }),
    "VALUE": frozenset({"INLINE", "URL", "CONTENT-ID", "CID"}),
}

# ---------------------------------------------------------------------------
# Conversion rules
# ---------------------------------------------------------------------------

REMOVED_IN_40: frozenset[str] = frozenset({"NAME", "MAILER", "LABEL", "CLASS"})
"""Properties that no longer exist in vCard 4.0 and are dropped."""

REGENERATED_PROPERTIES: frozenset[str] = frozenset({"VERSION", "PRODID"})
"""Properties never copied by the converter (the output regenerates them)."""

EMBEDDED_MEDIA_PROPERTIES: frozenset[str] = frozenset({"PHOTO", "LOGO", "SOUND"})
"""Properties whose data: URIs are turned back into BINARY for vCard 3.0."""

IMAGE_TYPES: dict[str, str] = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
}
"""TYPE parameter tokens that map to (and from) an image mimetype."""

DEFAULT_MIMETYPE = "application/octet-stream"

# Apple's address book workarounds for vCard 3.0
ABSHOWAS_PROPERTY = "X-ABSHOWAS"
ABSHOWAS_COMPANY = "COMPANY"
ADDRESSBOOKSERVER_KIND_PROPERTY = "X-ADDRESSBOOKSERVER-KIND"
ADDRESSBOOKSERVER_KIND_GROUP = "GROUP"

OMIT_YEAR_PARAMETER = "X-APPLE-OMIT-YEAR"
OMIT_YEAR_PLACEHOLDER = "1604"
"""Birth year Apple substitutes when a vCard 3.0 date has no year."""

# ---------------------------------------------------------------------------
# jCard serialization
# ---------------------------------------------------------------------------

STRUCTURED_PROPERTIES: frozenset[str] = frozenset({
    "N", "ADR", "ORG", "GENDER", "CLIENTPIDMAP",
})
"""Semicolon-delimited properties, written as a nested array in jCard."""

# ---------------------------------------------------------------------------
# CLI defaults
# ---------------------------------------------------------------------------

DEFAULT_TARGET_VERSION = os.getenv("VCARD_DEFAULT_TARGET", "4.0")
LOG_LEVEL = os.getenv("VCARD_LOG_LEVEL", "WARNING").upper()
