"""Parameter translation rules for vCard 3.0 and 4.0 targets.

WHY: Several parameters changed meaning between revisions. vCard 4.0
replaced ``TYPE=PREF`` with ``PREF=1`` and dropped ENCODING and CHARSET;
vCard 3.0 has no PREF parameter and no quoted-printable encoding.

HOW: Each translator takes the source parameters and returns a new list
of Parameter additions for the target property. Additions with the same
name are meant to be applied one by one (Property.add_parameter), which
appends their parts to a single parameter.

RULES:
- The input list and its Parameter objects are never modified
- Every returned Parameter has no_name cleared, even if its name is empty
- 4.0: each TYPE part equal to PREF (any case) becomes its own PREF=1
  addition; other TYPE parts become individual TYPE additions
- 4.0: ENCODING and CHARSET are dropped
- 3.0: ENCODING=QUOTED-PRINTABLE is dropped, other encodings are kept
- 3.0: PREF=1 becomes TYPE=PREF; any other PREF value is dropped
- Everything else is copied by name and parts
"""

from __future__ import annotations

from typing import Iterable, List

from vcard_converter.core.ir import Parameter


def _copy(param: Parameter) -> Parameter:
    # vCard 2.1 allowed parameters with no name
    return Parameter(name=param.name, parts=list(param.parts), no_name=False)


def translate_parameters_40(parameters: Iterable[Parameter]) -> List[Parameter]:
    """Translate source parameters for a vCard 4.0 property."""
    translated: List[Parameter] = []
    for param in parameters:
        if param.name == "TYPE":
            for part in param.parts:
                if part.upper() == "PREF":
                    translated.append(Parameter(name="PREF", parts=["1"]))
                else:
                    translated.append(Parameter(name="TYPE", parts=[part]))
        elif param.name in ("ENCODING", "CHARSET"):
            # These no longer exist in vCard 4
            continue
        else:
            translated.append(_copy(param))
    return translated


def translate_parameters_30(parameters: Iterable[Parameter]) -> List[Parameter]:
    """Translate source parameters for a vCard 3.0 property."""
    translated: List[Parameter] = []
    for param in parameters:
        if param.name == "ENCODING":
            # Quoted-printable only existed in vCard 2.1
            if (param.value or "").upper() != "QUOTED-PRINTABLE":
                translated.append(_copy(param))
        elif param.name == "PREF":
            if param.value == "1":
                translated.append(Parameter(name="TYPE", parts=["PREF"]))
        else:
            translated.append(_copy(param))
    return translated
