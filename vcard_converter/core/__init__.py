"""Core document model, value-type registry, and version conversion.

WHY: The core package is the stable heart of the converter: the IR
dataclasses, the registry that types properties, and the rules that
move a vCard from one revision to another. Adapters and the CLI only
read and write documents; all conversion semantics live here.

HOW: ir.py defines the data structures, registry.py and document.py type
and build properties, encoding.py / dates.py / parameters.py hold the
individual transformation rules, and converter.py orchestrates them.

RULES:
- No I/O in this package
- Source documents are read-only; every conversion builds a new tree
- Registries are built once at import and never mutated
"""

from vcard_converter.core.converter import VCardConverter, convert
from vcard_converter.core.document import Document, new_document
from vcard_converter.core.ir import Component, Parameter, Property, Revision, ValueType

__all__ = [
    "Component",
    "Document",
    "Parameter",
    "Property",
    "Revision",
    "ValueType",
    "VCardConverter",
    "convert",
    "new_document",
]
