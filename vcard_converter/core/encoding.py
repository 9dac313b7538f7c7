"""BINARY ↔ data: URI transcoding for PHOTO, LOGO and SOUND.

WHY: vCard 4.0 dropped the BINARY value type; inline media must be a
``data:`` URI instead. vCard 3.0 supports URIs too, but many 3.0
consumers only understand ``ENCODING=b`` BINARY values, so data: URIs
are turned back into BINARY when going down to 3.0.

HOW: binary_to_uri() base64-encodes the payload behind a mimetype
inferred from the TYPE parameter, and returns the TYPE parameter with
the image tokens removed. uri_to_binary() splits a data: URI into
mimetype and payload, decodes base64 payloads, and sets ENCODING=b plus
TYPE=JPEG/PNG/GIF where the mimetype allows.

RULES:
- Neither function mutates the source property or parameter list
- binary_to_uri: first JPEG/PNG/GIF token picks the mimetype; all such
  tokens are removed; an emptied TYPE parameter is dropped
- binary_to_uri: default mimetype is application/octet-stream
- uri_to_binary: returns None for anything that is not a data: URI
- uri_to_binary: a data: URI without "," or with bad base64 raises
  InvalidDataUriError
"""

from __future__ import annotations

import base64
import binascii
from typing import List, Optional, Tuple

from vcard_converter.config import DEFAULT_MIMETYPE, IMAGE_TYPES
from vcard_converter.core.document import Document
from vcard_converter.core.errors import InvalidDataUriError
from vcard_converter.core.ir import Parameter, Property, ValueType

DATA_URI_SCHEME = "data:"

_MIMETYPE_TO_TYPE = {mimetype: token for token, mimetype in IMAGE_TYPES.items()}


def binary_to_uri(
    output: Document,
    prop: Property,
    parameters: List[Parameter],
) -> Tuple[Property, List[Parameter]]:
    """Convert a BINARY property to a data: URI property.

    Args:
        output: The document the new property will belong to.
        prop: The source BINARY property.
        parameters: Source parameters still to be carried over.

    Returns:
        The new URI property and the parameter list with the TYPE
        parameter filtered (or removed).
    """
    new_property = output.create_property(prop.name, value_type=ValueType.URI)

    mimetype = DEFAULT_MIMETYPE
    remaining: List[Parameter] = []
    for param in parameters:
        if param.name != "TYPE":
            remaining.append(param)
            continue

        kept_types = []
        matched: Optional[str] = None
        for part in param.parts:
            token = part.upper()
            if token in IMAGE_TYPES:
                if matched is None:
                    matched = IMAGE_TYPES[token]
            else:
                kept_types.append(part)
        if matched is not None:
            mimetype = matched

        # Type tokens that are not image formats are still meaningful
        if kept_types:
            remaining.append(Parameter(name=param.name, parts=kept_types))

    payload = prop.value
    if payload is None:
        payload = b""
    elif isinstance(payload, str):
        payload = payload.encode("utf-8")

    new_property.value = "{}{};base64,{}".format(
        DATA_URI_SCHEME,
        mimetype,
        base64.b64encode(payload).decode("ascii"),
    )
    return new_property, remaining


def uri_to_binary(output: Document, prop: Property) -> Optional[Property]:
    """Convert a data: URI property to a BINARY property.

    Args:
        output: The document the new property will belong to.
        prop: The source URI property.

    Returns:
        The new BINARY property, or None if the value is not a data: URI
        (the caller then copies the property as a plain URI).

    Raises:
        InvalidDataUriError: If the data: URI is malformed.
    """
    value = prop.value
    if not isinstance(value, str) or not value.startswith(DATA_URI_SCHEME):
        return None

    separator = value.find(",")
    if separator == -1:
        raise InvalidDataUriError(value, "missing ',' before the payload")

    mimetype = value[len(DATA_URI_SCHEME):separator]
    payload = value[separator + 1:]

    if ";" in mimetype:
        # Anything after ";" is the transport (base64)
        mimetype = mimetype[:mimetype.index(";")]
        try:
            data = base64.b64decode(payload)
        except (binascii.Error, ValueError) as exc:
            raise InvalidDataUriError(value, "payload is not valid base64") from exc
    else:
        data = payload.encode("utf-8")

    new_property = output.create_property(
        prop.name,
        data,
        value_type=ValueType.BINARY,
    )
    new_property.add_parameter("ENCODING", "b")
    image_type = _MIMETYPE_TO_TYPE.get(mimetype.lower())
    if image_type is not None:
        new_property.add_parameter("TYPE", image_type)
    return new_property
