"""Adapter: jCard (RFC 7095) JSON ↔ Document tree.

WHY: The converter works on an in-memory document tree and never parses
text itself. jCard is the JSON rendering of vCard, so it gives the CLI
and tests a lossless, easily produced input/output format without a
mimedir lexer.

HOW: Input is decoded with json and validated against the bundled JSON
schema (jsonschema) before any document is built. Each property entry
``[name, {params}, type, value, ...]`` becomes a Property created by the
document factory; the ``version`` property decides the revision. Output
reverses the mapping.

RULES:
- Input may be a single vCard (``["vcard", [...]]``) or a list of them
- The ``group`` parameter carries the property group
- The entry type becomes the property's value type unless it is "unknown";
  a type other than the property's default is recorded as a VALUE parameter
- BINARY values are base64 text in JSON and bytes in memory
- Structured properties (N, ADR, ORG, ...) are written as a nested array
- A VALUE parameter is never written; the entry type carries it
- Invalid JSON or schema violations raise InvalidJCardError
"""

from __future__ import annotations

import base64
import binascii
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import jsonschema

from vcard_converter.config import STRUCTURED_PROPERTIES
from vcard_converter.core.document import Document
from vcard_converter.core.errors import InvalidJCardError
from vcard_converter.core.ir import Component, Parameter, PartValue, Property, ValueType

_SCHEMA_PATH = Path(__file__).resolve().parent / "jcard_schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def _get_schema() -> Dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


def is_single_vcard(data: Any) -> bool:
    """True if ``data`` is one jCard object rather than a list of them."""
    return isinstance(data, list) and bool(data) and data[0] == "vcard"


def _scalar_to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        # Multiple values inside one structured component
        return ",".join(_scalar_to_text(item) for item in value)
    return str(value)


def _entry_parts(values: List[Any]) -> List[str]:
    if len(values) == 1 and isinstance(values[0], list):
        return [_scalar_to_text(item) for item in values[0]]
    return [_scalar_to_text(item) for item in values]


def _read_property(document: Document, entry: List[Any]) -> Property:
    name, raw_params, type_name = entry[0], dict(entry[1]), entry[2]
    group = raw_params.pop("group", None)
    if isinstance(group, list):
        group = group[0] if group else None

    parameters = [
        Parameter(name=param_name, parts=param_value)
        for param_name, param_value in raw_params.items()
    ]
    marker: Optional[str] = type_name.upper()
    if marker == ValueType.UNKNOWN.value:
        marker = None

    parts: List[PartValue] = list(_entry_parts(entry[3:]))
    prop = document.create_property(
        name, parts, parameters, value_type=marker, group=group,
    )
    if (
        prop.get_parameter("VALUE") is None
        and prop.value_type is not document.registry.for_property(prop.name)
    ):
        prop.set_parameter("VALUE", prop.value_type.value)
    if prop.value_type is ValueType.BINARY:
        try:
            prop.parts = [base64.b64decode(part) for part in parts]
        except (binascii.Error, ValueError) as exc:
            raise InvalidJCardError(
                "Property {} has an invalid base64 value".format(prop.name)
            ) from exc
    return prop


def _read_component(document: Document, data: List[Any]) -> Component:
    component = Component(name=data[0])
    for entry in data[1]:
        component.children.append(_read_property(document, entry))
    for sub in data[2] if len(data) > 2 else []:
        component.children.append(_read_component(document, sub))
    return component


def document_from_jcard(data: List[Any]) -> Document:
    """Build a Document from one already-validated jCard object.

    Raises:
        InvalidJCardError: If the vCard has no version property.
    """
    version = next(
        (entry[3] for entry in data[1] if entry[0].upper() == "VERSION"),
        None,
    )
    if version is None:
        raise InvalidJCardError("jCard has no version property")

    document = Document(revision=_scalar_to_text(version))
    for entry in data[1]:
        document.add(_read_property(document, entry))
    for sub in data[2] if len(data) > 2 else []:
        document.add(_read_component(document, sub))
    return document


def read_jcard(data: Any) -> List[Document]:
    """Validate decoded jCard JSON and build documents from it.

    Raises:
        InvalidJCardError: If the data does not match the jCard schema.
    """
    try:
        jsonschema.validate(instance=data, schema=_get_schema())
    except jsonschema.ValidationError as exc:
        raise InvalidJCardError("Invalid jCard: {}".format(exc.message)) from exc

    if is_single_vcard(data):
        return [document_from_jcard(data)]
    return [document_from_jcard(item) for item in data]


def loads(text: str) -> List[Document]:
    """Parse jCard JSON text into documents."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidJCardError("Invalid JSON: {}".format(exc)) from exc
    return read_jcard(data)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def _write_part(part: PartValue) -> str:
    if isinstance(part, bytes):
        return base64.b64encode(part).decode("ascii")
    return part


def _write_property(prop: Property) -> List[Any]:
    params: Dict[str, Union[str, List[str]]] = {}
    if prop.group:
        params["group"] = prop.group
    for param in prop.parameters.values():
        if param.name == "VALUE":
            continue
        key = param.name.lower()
        params[key] = param.parts[0] if len(param.parts) == 1 else list(param.parts)

    values = [_write_part(part) for part in prop.parts] or [""]
    entry: List[Any] = [prop.name.lower(), params, prop.value_type.value.lower()]
    if prop.name in STRUCTURED_PROPERTIES and len(values) > 1:
        entry.append(values)
    else:
        entry.extend(values)
    return entry


def _write_component(name: str, children: Sequence[Any]) -> List[Any]:
    properties = [_write_property(c) for c in children if isinstance(c, Property)]
    components = [
        _write_component(c.name, c.children)
        for c in children if isinstance(c, Component)
    ]
    result: List[Any] = [name.lower(), properties]
    if components:
        result.append(components)
    return result


def document_to_jcard(document: Document) -> List[Any]:
    """Render a Document as a jCard object (JSON-compatible lists/dicts)."""
    return _write_component(document.name, document.children)


def dumps(
    documents: Union[Document, Sequence[Document]],
    indent: Optional[int] = None,
) -> str:
    """Serialize one document as a jCard object, or several as a list."""
    if isinstance(documents, Document):
        data: Any = document_to_jcard(documents)
    else:
        data = [document_to_jcard(doc) for doc in documents]
    return json.dumps(data, indent=indent, ensure_ascii=False)
