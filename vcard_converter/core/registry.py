"""Value-type registry: which value type a property or marker resolves to.

WHY: The same property name can carry different value types in different
vCard revisions (PHOTO is BINARY in 3.0 but URI in 4.0), and a VALUE
parameter can override the default. Every place that builds a property
needs the same answer, so the lookup lives in one immutable object per
revision.

HOW: ValueTypeRegistry holds two static tables built from config at
import time: property name → ValueType and VALUE marker → ValueType.
registry_for() returns the shared registry for a revision.
guess_parameter_name() recovers the name of a nameless vCard 2.1
parameter from its value.

RULES:
- Registries are frozen and shared; copying a document reuses its registry
- Explicit recognized VALUE marker wins, then the property map, then TEXT
- Unrecognized VALUE markers are ignored
- Unknown revisions get the base (pre-4.0) registry
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from vcard_converter import config
from vcard_converter.core.ir import Revision, ValueType


@dataclass(frozen=True)
class ValueTypeRegistry:
    """Immutable property-name and value-marker lookup tables."""

    property_types: Mapping[str, ValueType]
    value_markers: Mapping[str, ValueType]
    default: ValueType = ValueType.TEXT

    def __copy__(self) -> ValueTypeRegistry:
        return self

    def __deepcopy__(self, memo: dict) -> ValueTypeRegistry:
        return self

    def for_marker(self, marker: str | None) -> ValueType | None:
        """Return the value type for an explicit VALUE marker, if recognized."""
        if not marker:
            return None
        return self.value_markers.get(marker.strip().upper())

    def for_property(self, name: str) -> ValueType:
        """Return the default value type for a property name."""
        return self.property_types.get(name.upper(), self.default)

    def resolve(self, name: str, marker: str | None = None) -> ValueType:
        """Return the effective value type for a property.

        Args:
            name: Property name (any case).
            marker: Explicit VALUE parameter value, or None.

        Returns:
            The marker's value type if recognized, otherwise the
            property's default value type.
        """
        explicit = self.for_marker(marker)
        if explicit is not None:
            return explicit
        return self.for_property(name)


def _build_registry(revision: Revision | None) -> ValueTypeRegistry:
    property_types = {
        name: ValueType(marker)
        for name, marker in config.PROPERTY_VALUE_TYPES.items()
    }
    if revision is Revision.VCARD40:
        # BINARY no longer exists in vCard 4.0
        for name in config.BINARY_TO_URI_IN_40:
            property_types[name] = ValueType.URI
    value_markers = {
        marker: ValueType(value_type)
        for marker, value_type in config.VALUE_TYPE_MARKERS.items()
    }
    return ValueTypeRegistry(
        property_types=property_types,
        value_markers=value_markers,
        default=ValueType(config.DEFAULT_VALUE_TYPE),
    )


BASE_REGISTRY = _build_registry(None)

REGISTRIES: dict[Revision, ValueTypeRegistry] = {
    Revision.VCARD21: BASE_REGISTRY,
    Revision.VCARD30: BASE_REGISTRY,
    Revision.VCARD40: _build_registry(Revision.VCARD40),
}


def registry_for(revision: Revision | str | None) -> ValueTypeRegistry:
    """Return the shared registry for a revision (base registry if unknown)."""
    known = Revision.parse(revision)
    if known is None:
        return BASE_REGISTRY
    return REGISTRIES[known]


def guess_parameter_name(value: str | None) -> str:
    """Guess the name of a vCard 2.1 parameter written without one.

    vCard 2.1 allows ``TEL;WORK;VOICE:...``. The name is implied by the
    value: encodings map to ENCODING, type tokens to TYPE, and value
    markers to VALUE. Unrecognized values get an empty name.
    """
    if not value:
        return ""
    token = value.strip().upper()
    for name, values in config.NAMELESS_PARAMETER_NAMES.items():
        if token in values:
            return name
    return ""
