"""Adapter modules for converting between the document tree and external formats.

WHY: The core works on an in-memory document tree and never reads or
writes text. Adapters bridge that tree and concrete serializations so
each side can evolve independently.

HOW: Each adapter module provides read and write functions that map the
external representation to Document / Property / Parameter objects and
back.

RULES:
- Adapters validate their input before building documents
- Adapters must not modify the documents they write
- Each adapter lives in its own module under this package
"""

from vcard_converter.adapters.jcard import dumps, loads

__all__ = ["dumps", "loads"]
