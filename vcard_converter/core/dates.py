"""Apple's omit-year convention for dates without a year.

WHY: vCard 4.0 lets BDAY and ANNIVERSARY omit the year (``--05-01``).
vCard 3.0 cannot express that. Apple's address book works around it by
writing a placeholder year (1604) and flagging it with
``X-APPLE-OMIT-YEAR=1604``. Applications that know the extension hide
the year; others just see an unlikely birth year.

HOW: add_placeholder_year() turns a year-less value into
``1604-MM-DD``. remove_placeholder_year() turns it back into ``--MM-DD``
when the year equals the recorded placeholder.

RULES:
- Both functions return None when no rewrite applies
- A value with no year and no month/day (time only) is never rewritten
- Malformed values propagate InvalidDateValueError from the parser
"""

from __future__ import annotations

from vcard_converter.config import OMIT_YEAR_PLACEHOLDER
from vcard_converter.core.dateparse import parse_vcard_date_and_or_time


def add_placeholder_year(
    value: str,
    placeholder: str = OMIT_YEAR_PLACEHOLDER,
) -> str | None:
    """Return ``<placeholder>-MM-DD`` if ``value`` has no year, else None."""
    parts = parse_vcard_date_and_or_time(value)
    if parts.year is not None or parts.month is None or parts.date is None:
        return None
    return "{}-{}-{}".format(placeholder, parts.month, parts.date)


def remove_placeholder_year(value: str, recorded_year: str | None) -> str | None:
    """Return ``--MM-DD`` if the value's year equals ``recorded_year``, else None."""
    parts = parse_vcard_date_and_or_time(value)
    if parts.year is None or parts.year != recorded_year:
        return None
    if parts.month is None or parts.date is None:
        return None
    return "--{}-{}".format(parts.month, parts.date)
