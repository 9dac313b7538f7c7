"""Intermediate representation dataclasses for parsed vCard documents.

WHY: A vCard lexer produces a tree of named properties, each carrying
value parts and parameters. The converter reads one such tree and builds
another for a different revision. The IR gives both sides a single,
well-typed form that does not depend on the text syntax.

HOW: Two enums and three dataclasses:
  - Revision: the closed set of vCard revisions (2.1, 3.0, 4.0)
  - ValueType: the closed set of value types a property can carry
  - Parameter: one named property parameter with one or more parts
  - Property: one named, optionally grouped, typed property
  - Component: a nested component (kept opaque by the converter)

The root container, Document, lives in core.document because it owns the
value-type registry and the property factory.

RULES:
- Property and parameter names are case-insensitive and stored upper-case
- Property parameters are keyed by name; adding an existing name appends parts
- value_type is the property's intrinsic type, fixed at construction
- BINARY properties hold bytes parts; every other type holds str parts
- no_name marks vCard 2.1 parameters that were written without a name
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Union

PartValue = Union[str, bytes]


class Revision(str, enum.Enum):
    """vCard format revisions.

    Inherits from str so the value is the textual VERSION form.
    """

    VCARD21 = "2.1"
    VCARD30 = "3.0"
    VCARD40 = "4.0"

    @classmethod
    def parse(cls, value: object) -> Revision | None:
        """Return the Revision for ``value`` or None when it is not one."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip())
        except ValueError:
            return None


class ValueType(str, enum.Enum):
    """Value types a vCard property can carry.

    The value is the marker written in a VALUE parameter.
    """

    TEXT = "TEXT"
    URI = "URI"
    BINARY = "BINARY"
    DATE = "DATE"
    DATE_TIME = "DATE-TIME"
    DATE_AND_OR_TIME = "DATE-AND-OR-TIME"
    TIMESTAMP = "TIMESTAMP"
    TIME = "TIME"
    BOOLEAN = "BOOLEAN"
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    UTC_OFFSET = "UTC-OFFSET"
    LANGUAGE_TAG = "LANGUAGE-TAG"
    UNKNOWN = "UNKNOWN"

    @property
    def is_date_and_or_time(self) -> bool:
        return self in _DATE_AND_OR_TIME_TYPES


_DATE_AND_OR_TIME_TYPES = frozenset({
    ValueType.DATE,
    ValueType.DATE_TIME,
    ValueType.DATE_AND_OR_TIME,
})


def _as_parts(value: PartValue | Iterable[PartValue] | None) -> list[PartValue]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)):
        return [value]
    return list(value)


@dataclass
class Parameter:
    """A single property parameter such as ``TYPE=WORK,VOICE``.

    RULES:
    - name is upper-cased; it may be empty for an unrecognized nameless value
    - parts keeps the comma-separated values in order
    - no_name is True only for vCard 2.1 parameters written without ``NAME=``
    """

    name: str
    parts: list[str] = field(default_factory=list)
    no_name: bool = False

    def __post_init__(self) -> None:
        self.name = self.name.upper()
        self.parts = [str(part) for part in _as_parts(self.parts)]

    @property
    def value(self) -> str | None:
        """The parameter value, multiple parts joined with a comma."""
        if not self.parts:
            return None
        return ",".join(self.parts)


@dataclass
class Property:
    """A single vCard property.

    WHY: Properties are the unit the converter translates. Each carries
    its own intrinsic value type so the converter can branch on it
    without inspecting the value.

    HOW: Created through Document.create_property(), which consults the
    document's registry for the value type. Direct construction is
    allowed when the value type is already known.

    RULES:
    - name is upper-cased on construction
    - group is the optional ``item1.`` prefix, without the dot
    - parts holds one entry per value part (structured or multi-valued)
    - parameters maps upper-case parameter names to Parameter objects
    """

    name: str
    parts: list[PartValue] = field(default_factory=list)
    parameters: dict[str, Parameter] = field(default_factory=dict)
    value_type: ValueType = ValueType.TEXT
    group: str | None = None

    def __post_init__(self) -> None:
        self.name = self.name.upper()
        self.parts = _as_parts(self.parts)

    @property
    def value(self) -> PartValue | None:
        """The property value.

        A single part is returned as-is; several text parts are joined
        with a comma and several binary parts are concatenated.
        """
        if not self.parts:
            return None
        if len(self.parts) == 1:
            return self.parts[0]
        if all(isinstance(part, bytes) for part in self.parts):
            return b"".join(self.parts)  # type: ignore[arg-type]
        return ",".join(
            part.decode("latin-1") if isinstance(part, bytes) else part
            for part in self.parts
        )

    @value.setter
    def value(self, value: PartValue | Iterable[PartValue] | None) -> None:
        self.parts = _as_parts(value)

    def get_parameter(self, name: str) -> Parameter | None:
        return self.parameters.get(name.upper())

    def add_parameter(
        self,
        name: str,
        value: str | Iterable[str] | None = None,
    ) -> Parameter:
        """Add a parameter, appending parts if one with this name exists."""
        key = name.upper()
        existing = self.parameters.get(key)
        if existing is not None:
            existing.parts.extend(str(part) for part in _as_parts(value))
            return existing
        param = Parameter(name=key, parts=_as_parts(value))
        self.parameters[key] = param
        return param

    def set_parameter(self, name: str, value: str | Iterable[str]) -> Parameter:
        """Replace any parameter with this name."""
        param = Parameter(name=name, parts=_as_parts(value))
        self.parameters[param.name] = param
        return param


@dataclass
class Component:
    """A nested component such as an embedded sub-card.

    The converter does not interpret components; they are copied through.
    """

    name: str
    children: list[Union[Property, Component]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.name = self.name.upper()
