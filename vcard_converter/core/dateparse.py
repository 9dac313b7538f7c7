"""Parser for vCard DATE-AND-OR-TIME values.

WHY: vCard 4.0 (RFC 6350 §4.3.4) allows truncated dates such as
``--0412`` (no year) or ``---12`` (day only). The converter must know
whether a year is present to apply or undo the omit-year workaround, so
it needs the components, not a datetime.

HOW: Two anchored regexes are tried in order: the basic format
(``19850412``, ``--0412``, ``T102200Z``) and then the extended format
(``1985-04-12``, ``--04-12``, ``T10:22:00+01:00``). Matched groups become
the fields of DateAndOrTimeParts; absent groups and ``-`` / ``--``
placeholders become None.

RULES:
- All components are returned as strings, exactly as written
- Milliseconds are accepted and discarded
- A value matching neither format raises InvalidDateValueError
- The empty string parses to all-None components
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from vcard_converter.core.errors import InvalidDateValueError

_BASIC_RE = re.compile(
    r"""
    (?:                                 # date part
        (?:
            (?: (?P<year>[0-9]{4}) (?:-)? | -- )
            (?P<month>[0-9]{2})?
        | --- )
        (?P<date>[0-9]{2})?
    )?
    (?:T                                # time part
        (?P<hour>[0-9]{2} | -)
        (?P<minute>[0-9]{2} | -)?
        (?P<second>[0-9]{2})?
        (?:\.[0-9]{3})?                 # milliseconds
        (?P<timezone> Z | [+-][0-9]{4})?
    )?
    """,
    re.VERBOSE,
)

_EXTENDED_RE = re.compile(
    r"""
    (?:                                 # date part
        (?: (?P<year>[0-9]{4}) - | -- )
        (?P<month>[0-9]{2}) -
        (?P<date>[0-9]{2})
    )?
    (?:T                                # time part
        (?: (?P<hour>[0-9]{2}) : | - )
        (?: (?P<minute>[0-9]{2}) : | - )?
        (?P<second>[0-9]{2})?
        (?:\.[0-9]{3})?                 # milliseconds
        (?P<timezone> Z | [+-][0-9]{2}:[0-9]{2})?
    )?
    """,
    re.VERBOSE,
)

_FIELDS = ("year", "month", "date", "hour", "minute", "second", "timezone")


@dataclass(frozen=True)
class DateAndOrTimeParts:
    """Components of a parsed DATE-AND-OR-TIME value; None when omitted."""

    year: str | None = None
    month: str | None = None
    date: str | None = None
    hour: str | None = None
    minute: str | None = None
    second: str | None = None
    timezone: str | None = None


def parse_vcard_date_and_or_time(value: str) -> DateAndOrTimeParts:
    """Parse a vCard DATE, DATE-TIME or DATE-AND-OR-TIME value.

    Args:
        value: The raw property value, e.g. ``"--05-01"`` or ``"19850412"``.

    Returns:
        DateAndOrTimeParts with None for every omitted component.

    Raises:
        InvalidDateValueError: If the value matches neither format.
    """
    match = _BASIC_RE.fullmatch(value) or _EXTENDED_RE.fullmatch(value)
    if match is None:
        raise InvalidDateValueError(value)

    components = {}
    for name in _FIELDS:
        part = match.group(name)
        components[name] = None if part in (None, "", "-", "--") else part
    return DateAndOrTimeParts(**components)
