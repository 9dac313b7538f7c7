"""Tests for the vcard-convert command-line interface.

WHY: The CLI is the primary entry point for batch conversions. It must
keep stdout clean for piping, exit non-zero on bad input, and preserve
the shape (single object or list) of the input file.

HOW: main() is called with explicit argv; files live in tmp_path and
output is captured with capsys.

RULES:
- main() always exits via SystemExit; tests assert on the code.
"""

import io
import json

import pytest

from vcard_converter.cli import build_parser, main


def _write(tmp_path, data, name="contacts.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _run(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


class TestParser:
    """Argument parsing and defaults."""

    def test_defaults(self):
        args = build_parser().parse_args(["in.json"])
        assert args.input_file == "in.json"
        assert args.output is None
        assert args.indent == 2

    def test_rejects_legacy_target(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            build_parser().parse_args(["in.json", "--target", "2.1"])
        assert excinfo.value.code == 2
        assert "invalid choice" in capsys.readouterr().err


class TestConversion:
    """End-to-end runs over jCard files."""

    def test_single_vcard_to_stdout(self, tmp_path, capsys, jcard40_text):
        path = tmp_path / "card.json"
        path.write_text(jcard40_text, encoding="utf-8")

        assert _run([str(path), "--target", "3.0"]) == 0

        captured = capsys.readouterr()
        data = json.loads(captured.out)
        assert data[0] == "vcard"
        assert data[1][0] == ["version", {}, "text", "3.0"]
        assert "Read 1 vCard(s)" in captured.err

    def test_list_keeps_shape(self, tmp_path, capsys):
        path = _write(tmp_path, [
            ["vcard", [["version", {}, "text", "3.0"], ["fn", {}, "text", "A"]]],
            ["vcard", [["version", {}, "text", "2.1"], ["fn", {}, "text", "B"]]],
        ])

        assert _run([str(path), "--target", "4.0"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert len(data) == 2
        assert all(card[1][0][3] == "4.0" for card in data)

    def test_output_file(self, tmp_path, capsys):
        source = _write(tmp_path, ["vcard", [
            ["version", {}, "text", "3.0"],
            ["bday", {"x-apple-omit-year": "1604"}, "date-and-or-time", "1604-05-01"],
        ]])
        target = tmp_path / "out.json"

        assert _run([str(source), "--target", "4.0", "--output", str(target)]) == 0

        assert capsys.readouterr().out == ""
        data = json.loads(target.read_text(encoding="utf-8"))
        assert data[1][1] == ["bday", {}, "date-and-or-time", "--05-01"]

    def test_reads_stdin(self, monkeypatch, capsys, jcard40_text):
        monkeypatch.setattr("sys.stdin", io.StringIO(jcard40_text))

        assert _run(["-", "--target", "4.0", "--indent", "0"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert [entry[0] for entry in data[1]][:3] == ["version", "fn", "n"]


class TestErrors:
    """Bad input prints an error and exits 1."""

    def test_missing_file(self, tmp_path, capsys):
        assert _run([str(tmp_path / "nope.json")]) == 1
        assert "Error: File not found" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        assert _run([str(path)]) == 1
        assert "Error: Invalid JSON" in capsys.readouterr().err

    def test_schema_violation(self, tmp_path, capsys):
        path = _write(tmp_path, {"vcard": []})
        assert _run([str(path)]) == 1
        assert "Error: Invalid jCard" in capsys.readouterr().err

    def test_unsupported_source_revision(self, tmp_path, capsys):
        path = _write(tmp_path, ["vcard", [["version", {}, "text", "5.0"]]])
        assert _run([str(path), "--target", "4.0"]) == 1
        assert "Error: Only vCard 2.1, 3.0 and 4.0" in capsys.readouterr().err

    def test_malformed_date(self, tmp_path, capsys):
        path = _write(tmp_path, ["vcard", [
            ["version", {}, "text", "4.0"],
            ["bday", {}, "date-and-or-time", "sometime"],
        ]])
        assert _run([str(path), "--target", "3.0"]) == 1
        assert "Invalid vCard date-time string" in capsys.readouterr().err
