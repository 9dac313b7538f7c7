"""Conversion of vCard documents between revisions 2.1, 3.0 and 4.0.

WHY: Address books exchange vCards in different revisions. A CardDAV
server storing 4.0 must still hand 3.0 to older clients, and 2.1/3.0
imports should be upgraded to 4.0. Each revision change renames, drops
or re-encodes specific properties and parameters, and the rules interact
(value types, media encoding, year-less birthdays, PREF handling, Apple
extensions).

HOW: VCardConverter.convert() validates the revisions, creates a fresh
output document with the target VERSION, and translates each source
property in order:
  1. Resolve the effective value type (VALUE parameter, else intrinsic).
  2. Apply the target's property rules (3.0 or 4.0); a rule either drops
     the property, builds a replacement, or declines.
  3. Otherwise copy generically: same name, parts and value type.
  4. Copy the group, translate parameters for the target.
  5. Add an explicit VALUE parameter when the chosen value type differs
     from the target's default for that property name.

RULES:
- The source document is never modified; output shares no mutable state
- Same source and target revision → deep copy, no rules applied
- Sources: 2.1, 3.0, 4.0. Targets: 3.0, 4.0. Anything else raises
- VERSION and PRODID are never copied
- Sub-components are copied through unchanged, in order
- Any error aborts the whole conversion
"""

from __future__ import annotations

import copy
import logging
from typing import List, Optional, Tuple, Union

from vcard_converter import config
from vcard_converter.core.dates import add_placeholder_year, remove_placeholder_year
from vcard_converter.core.document import Document, new_document
from vcard_converter.core.encoding import binary_to_uri, uri_to_binary
from vcard_converter.core.errors import (
    UnsupportedSourceRevisionError,
    UnsupportedTargetRevisionError,
)
from vcard_converter.core.ir import Component, Parameter, Property, Revision, ValueType
from vcard_converter.core.parameters import (
    translate_parameters_30,
    translate_parameters_40,
)

logger = logging.getLogger(__name__)

SOURCE_REVISIONS = frozenset({Revision.VCARD21, Revision.VCARD30, Revision.VCARD40})
TARGET_REVISIONS = frozenset({Revision.VCARD30, Revision.VCARD40})


class _Drop:
    """Marker returned by a property rule to remove the property."""


_DROP = _Drop()

RuleResult = Union[_Drop, Tuple[Optional[Property], List[Parameter]]]


def _revision_text(revision: object) -> str:
    known = Revision.parse(revision)
    if known is not None:
        return known.value
    return str(revision).strip()


def _text_value(prop: Property) -> str:
    value = prop.value
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", "replace")
    return value


class VCardConverter:
    """Converts vCard documents to vCard 3.0 or 4.0.

    Stateless; one instance may be shared across threads.
    """

    def convert(
        self,
        document: Document,
        target_revision: Union[Revision, str],
    ) -> Document:
        """Convert ``document`` to ``target_revision``.

        Args:
            document: The source vCard. Not modified.
            target_revision: Revision.VCARD30 / VCARD40 or "3.0" / "4.0".

        Returns:
            A new Document in the target revision.

        Raises:
            UnsupportedSourceRevisionError: Source is not 2.1, 3.0 or 4.0.
            UnsupportedTargetRevisionError: Target is not 3.0 or 4.0.
            InvalidDateValueError: A date property could not be parsed.
            InvalidDataUriError: A data: URI is malformed.
        """
        if _revision_text(document.revision) == _revision_text(target_revision):
            return copy.deepcopy(document)

        source = Revision.parse(document.revision)
        if source not in SOURCE_REVISIONS:
            raise UnsupportedSourceRevisionError(document.revision)
        target = Revision.parse(target_revision)
        if target not in TARGET_REVISIONS:
            raise UnsupportedTargetRevisionError(target_revision)

        output = new_document(target)
        converted = 0
        for child in document.children:
            if isinstance(child, Component):
                output.add(copy.deepcopy(child))
                continue
            new_property = self._convert_property(document, output, child, target)
            if new_property is not None:
                output.add(new_property)
                converted += 1

        logger.info(
            "Converted vCard %s -> %s (%d properties kept of %d)",
            source.value, target.value, converted,
            sum(1 for _ in document.properties()),
        )
        return output

    def _convert_property(
        self,
        source: Document,
        output: Document,
        prop: Property,
        target: Revision,
    ) -> Optional[Property]:
        # Skipping these, those are automatically added.
        if prop.name in config.REGENERATED_PROPERTIES:
            return None

        parameters = [p for p in prop.parameters.values() if p.name != "VALUE"]

        value_type: Optional[ValueType] = None
        value_param = prop.get_parameter("VALUE")
        if value_param is not None:
            value_type = source.registry.for_marker(value_param.value)
        if value_type is None:
            value_type = prop.value_type

        if target is Revision.VCARD30:
            outcome = self._apply_rules_30(output, prop, value_type, parameters)
        else:
            outcome = self._apply_rules_40(output, prop, value_type, parameters)

        if isinstance(outcome, _Drop):
            logger.debug("Dropping %s for vCard %s", prop.name, target.value)
            return None

        new_property, parameters = outcome
        if new_property is None:
            new_property = output.create_property(
                prop.name,
                list(prop.parts),
                value_type=value_type,
                group=prop.group,
            )
        elif new_property.name != prop.name:
            logger.debug("Replaced %s with %s", prop.name, new_property.name)

        new_property.group = prop.group

        if target is Revision.VCARD40:
            additions = translate_parameters_40(parameters)
        else:
            additions = translate_parameters_30(parameters)
        for param in additions:
            new_property.add_parameter(param.name, param.parts)

        # A VALUE parameter is only needed when the value type is not the
        # default the target document would pick for this name.
        reference = output.create_property(new_property.name)
        if reference.value_type is not new_property.value_type:
            new_property.set_parameter("VALUE", new_property.value_type.value)

        return new_property

    def _apply_rules_30(
        self,
        output: Document,
        prop: Property,
        value_type: ValueType,
        parameters: List[Parameter],
    ) -> RuleResult:
        if value_type is ValueType.URI and prop.name in config.EMBEDDED_MEDIA_PROPERTIES:
            # Only data: URIs are converted; other URIs are copied as-is.
            return uri_to_binary(output, prop), parameters

        if value_type.is_date_and_or_time:
            # vCard 3.0 dates need a year. Apple's workaround writes 1604
            # and flags it so the year can be hidden again.
            new_value = add_placeholder_year(_text_value(prop))
            if new_value is None:
                return None, parameters
            new_property = output.create_property(
                prop.name,
                new_value,
                {config.OMIT_YEAR_PARAMETER: config.OMIT_YEAR_PLACEHOLDER},
                value_type,
            )
            return new_property, parameters

        if prop.name == "KIND":
            kind = _text_value(prop).lower()
            if kind == "individual":
                # Individual is implied
                return _DROP
            if kind == "org":
                return output.create_property(
                    config.ABSHOWAS_PROPERTY, config.ABSHOWAS_COMPANY,
                ), parameters
            if kind == "group":
                return output.create_property(
                    config.ADDRESSBOOKSERVER_KIND_PROPERTY,
                    config.ADDRESSBOOKSERVER_KIND_GROUP,
                ), parameters

        return None, parameters

    def _apply_rules_40(
        self,
        output: Document,
        prop: Property,
        value_type: ValueType,
        parameters: List[Parameter],
    ) -> RuleResult:
        if prop.name in config.REMOVED_IN_40:
            return _DROP

        if value_type is ValueType.BINARY:
            return binary_to_uri(output, prop, parameters)

        omit_year = next(
            (p for p in parameters if p.name == config.OMIT_YEAR_PARAMETER),
            None,
        )
        if value_type.is_date_and_or_time and omit_year is not None:
            # The flag is stripped whether or not the year matched.
            parameters = [p for p in parameters if p is not omit_year]
            new_value = remove_placeholder_year(_text_value(prop), omit_year.value)
            if new_value is None:
                return None, parameters
            return output.create_property(
                prop.name, new_value, value_type=value_type,
            ), parameters

        if (
            prop.name == config.ABSHOWAS_PROPERTY
            and _text_value(prop).upper() == config.ABSHOWAS_COMPANY
        ):
            return output.create_property("KIND", "org"), parameters

        if (
            prop.name == config.ADDRESSBOOKSERVER_KIND_PROPERTY
            and _text_value(prop).upper() == config.ADDRESSBOOKSERVER_KIND_GROUP
        ):
            return output.create_property("KIND", "group"), parameters

        return None, parameters


def convert(document: Document, target_revision: Union[Revision, str]) -> Document:
    """Convert a vCard document to vCard 3.0 or 4.0.

    Convenience wrapper around VCardConverter().convert().
    """
    return VCardConverter().convert(document, target_revision)
