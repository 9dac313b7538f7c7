"""Unit tests for per-target parameter translation.

WHY: PREF, ENCODING and CHARSET changed between revisions. Getting them
wrong either loses the preferred number or leaves parameters that a
strict 4.0 parser rejects.

HOW: translate_parameters_30() and translate_parameters_40() are called
on hand-built Parameter lists.

RULES:
- Input parameters must be unchanged after translation.
"""

from vcard_converter.core.ir import Parameter
from vcard_converter.core.parameters import (
    translate_parameters_30,
    translate_parameters_40,
)


def _pairs(parameters):
    return [(p.name, p.parts) for p in parameters]


class TestTranslate40:
    """Parameters for a vCard 4.0 target."""

    def test_type_split_and_pref_mapped(self):
        params = [Parameter(name="TYPE", parts=["HOME", "pref", "VOICE"])]
        assert _pairs(translate_parameters_40(params)) == [
            ("TYPE", ["HOME"]),
            ("PREF", ["1"]),
            ("TYPE", ["VOICE"]),
        ]

    def test_encoding_and_charset_dropped(self):
        params = [
            Parameter(name="ENCODING", parts=["QUOTED-PRINTABLE"]),
            Parameter(name="CHARSET", parts=["UTF-8"]),
            Parameter(name="LANGUAGE", parts=["en"]),
        ]
        assert _pairs(translate_parameters_40(params)) == [("LANGUAGE", ["en"])]

    def test_no_name_cleared(self):
        params = [Parameter(name="X-FOO", parts=["bar"], no_name=True)]
        assert translate_parameters_40(params)[0].no_name is False

    def test_input_untouched(self):
        param = Parameter(name="TYPE", parts=["PREF"], no_name=True)
        translate_parameters_40([param])
        assert param == Parameter(name="TYPE", parts=["PREF"], no_name=True)


class TestTranslate30:
    """Parameters for a vCard 3.0 target."""

    def test_quoted_printable_dropped(self):
        params = [Parameter(name="ENCODING", parts=["quoted-printable"])]
        assert translate_parameters_30(params) == []

    def test_other_encodings_kept(self):
        params = [Parameter(name="ENCODING", parts=["BASE64"])]
        assert _pairs(translate_parameters_30(params)) == [("ENCODING", ["BASE64"])]

    def test_pref_1_becomes_type_pref(self):
        params = [Parameter(name="PREF", parts=["1"])]
        assert _pairs(translate_parameters_30(params)) == [("TYPE", ["PREF"])]

    def test_other_pref_dropped(self):
        params = [Parameter(name="PREF", parts=["3"])]
        assert translate_parameters_30(params) == []

    def test_everything_else_copied(self):
        params = [
            Parameter(name="TYPE", parts=["work", "voice"], no_name=True),
            Parameter(name="CHARSET", parts=["UTF-8"]),
        ]
        translated = translate_parameters_30(params)
        assert _pairs(translated) == [("TYPE", ["work", "voice"]), ("CHARSET", ["UTF-8"])]
        assert all(not p.no_name for p in translated)
        assert translated[0].parts is not params[0].parts
