"""The vCard document container and its property/parameter factory.

WHY: Properties must be typed consistently with the revision of the
document they belong to. Building them through the document guarantees
they are typed by that document's registry rather than by whoever
happened to construct them.

HOW: Document is a dataclass holding the revision, the ordered children,
and a reference to the shared ValueTypeRegistry for its revision.
create_property() resolves the value type (explicit override, VALUE
parameter, then registry default) and returns a new Property.
create_parameter() does the same for parameters, guessing the name of
nameless vCard 2.1 parameters.

RULES:
- Children keep insertion order; order is meaningful
- The registry is chosen once, from the revision, at construction
- revision may be a raw string when the source declared an unknown version
- The factory never shares mutable state with its inputs
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Mapping, Optional, Union

from vcard_converter.core.ir import (
    Component,
    Parameter,
    PartValue,
    Property,
    Revision,
    ValueType,
)
from vcard_converter.core.registry import (
    ValueTypeRegistry,
    guess_parameter_name,
    registry_for,
)

ParameterInput = Union[
    Mapping[str, Union[str, Iterable[str]]],
    Iterable[Parameter],
    None,
]


@dataclass
class Document:
    """A complete vCard.

    RULES:
    - revision: a Revision, or the raw VERSION string when unrecognized
    - children: properties and sub-components in source order
    - registry: excluded from equality; shared, never mutated
    """

    revision: Union[Revision, str]
    children: List[Union[Property, Component]] = field(default_factory=list)
    registry: Optional[ValueTypeRegistry] = field(
        default=None, repr=False, compare=False,
    )
    name: str = "VCARD"

    def __post_init__(self) -> None:
        known = Revision.parse(self.revision)
        if known is not None:
            self.revision = known
        if self.registry is None:
            self.registry = registry_for(self.revision)

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    def create_property(
        self,
        name: str,
        value: PartValue | Iterable[PartValue] | None = None,
        parameters: ParameterInput = None,
        value_type: ValueType | str | None = None,
        group: str | None = None,
    ) -> Property:
        """Create a property typed by this document's registry.

        Args:
            name: Property name, any case. A ``group.`` prefix is split off.
            value: One value part or a list of parts.
            parameters: Either a name → value mapping or Parameter objects.
            value_type: Explicit value type (ValueType or marker string).
                Takes precedence over a VALUE parameter.
            group: Property group, if not given as a name prefix.

        Returns:
            A new Property with its intrinsic value type resolved.
        """
        if "." in name and group is None:
            group, name = name.split(".", 1)

        prop = Property(name=name, parts=value, group=group)
        for param in _iter_parameters(parameters):
            existing = prop.get_parameter(param.name)
            if existing is None:
                prop.parameters[param.name] = Parameter(
                    name=param.name, parts=param.parts, no_name=param.no_name,
                )
            else:
                existing.parts.extend(param.parts)

        prop.value_type = self._resolve_value_type(prop, value_type)
        return prop

    def create_parameter(
        self,
        name: str | None,
        value: str | Iterable[str] | None = None,
    ) -> Parameter:
        """Create a parameter; a None name is guessed from the value.

        vCard 2.1 permits ``TEL;HOME:...`` where the parameter name is
        implied. Such parameters are flagged with ``no_name``.
        """
        if name is None:
            first = value if isinstance(value, str) else next(iter(value or []), None)
            return Parameter(
                name=guess_parameter_name(first),
                parts=value,  # type: ignore[arg-type]
                no_name=True,
            )
        return Parameter(name=name, parts=value)  # type: ignore[arg-type]

    def _resolve_value_type(
        self,
        prop: Property,
        value_type: ValueType | str | None,
    ) -> ValueType:
        if isinstance(value_type, ValueType):
            return value_type
        marker = value_type
        if marker is None:
            value_param = prop.get_parameter("VALUE")
            marker = value_param.value if value_param is not None else None
        return self.registry.resolve(prop.name, marker)

    # ------------------------------------------------------------------
    # Container
    # ------------------------------------------------------------------

    @property
    def version(self) -> str:
        """Textual form of the revision, e.g. ``"4.0"``."""
        if isinstance(self.revision, Revision):
            return self.revision.value
        return str(self.revision)

    def add(self, child: Union[Property, Component]) -> None:
        self.children.append(child)

    def properties(self) -> Iterator[Property]:
        for child in self.children:
            if isinstance(child, Property):
                yield child

    def select(self, name: str) -> List[Property]:
        """Return all properties with this name, in document order."""
        key = name.upper()
        return [prop for prop in self.properties() if prop.name == key]

    def first(self, name: str) -> Property | None:
        matches = self.select(name)
        return matches[0] if matches else None


def _iter_parameters(parameters: ParameterInput) -> Iterator[Parameter]:
    if not parameters:
        return
    if isinstance(parameters, Mapping):
        for name, value in parameters.items():
            yield Parameter(name=name, parts=value)  # type: ignore[arg-type]
        return
    for param in parameters:
        yield param


def new_document(revision: Union[Revision, str]) -> Document:
    """Create an empty document whose VERSION property matches its revision."""
    document = Document(revision=revision)
    document.add(document.create_property("VERSION", document.version))
    return document
