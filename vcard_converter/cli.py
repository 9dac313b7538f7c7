"""Command-line interface for the vCard Version Converter.

WHY: Users need a simple way to upgrade or downgrade a batch of contacts
from the terminal. The CLI wires together the jCard reader, the version
converter, and the jCard writer behind a single command.

HOW: Uses argparse to accept an input jCard file, the target revision,
an optional output path, and logging options. Every vCard in the input
is converted; the result keeps the input's shape (a single jCard object
or a list). Status messages go to stderr; converted JSON goes to the
output file or stdout.

RULES:
- Positional argument: input jCard file path ("-" reads stdin)
- --target: 3.0 or 4.0 (default from VCARD_DEFAULT_TARGET, else 4.0)
- --output: write to a file instead of stdout
- Status output goes to stderr (not stdout)
- Any conversion or input error prints "Error: ..." and exits 1
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from vcard_converter.adapters.jcard import dumps, is_single_vcard, read_jcard
from vcard_converter.config import DEFAULT_TARGET_VERSION, LOG_LEVEL
from vcard_converter.core.converter import VCardConverter
from vcard_converter.core.document import Document

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr.

    Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise FileNotFoundError("File not found: {}".format(path))
    return path.read_text(encoding="utf-8")


def _convert_all(documents: List[Document], target: str) -> List[Document]:
    converter = VCardConverter()
    converted = []
    for index, document in enumerate(documents, start=1):
        result = converter.convert(document, target)
        logger.debug("vCard %d: %s -> %s", index, document.version, result.version)
        converted.append(result)
    return converted


def run(args: argparse.Namespace) -> int:
    """Execute one conversion run and return the process exit code."""
    try:
        text = _read_input(args.input_file)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError("Invalid JSON: {}".format(exc)) from exc

        documents = read_jcard(data)
        _status("Read {} vCard(s) from {}".format(len(documents), args.input_file))

        converted = _convert_all(documents, args.target)
        if is_single_vcard(data):
            content = dumps(converted[0], indent=args.indent)
        else:
            content = dumps(converted, indent=args.indent)
    except (FileNotFoundError, ValueError) as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(content + "\n", encoding="utf-8")
        _status("Saved {} vCard(s) as vCard {} to {}".format(
            len(converted), args.target, output_path,
        ))
    else:
        sys.stdout.write(content + "\n")
        sys.stdout.flush()
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Separated from main() so tests can inspect the parser directly.
    """
    parser = argparse.ArgumentParser(
        prog="vcard-convert",
        description="Convert jCard (JSON vCard) files between vCard "
                    "revisions 2.1, 3.0 and 4.0.",
    )

    parser.add_argument(
        "input_file",
        help="Path to a jCard JSON file, or '-' to read stdin.",
    )

    parser.add_argument(
        "--target",
        choices=["3.0", "4.0"],
        default=DEFAULT_TARGET_VERSION,
        help="Target vCard version (default: %(default)s).",
    )

    parser.add_argument(
        "--output",
        default=None,
        help="Write the converted jCard to this file (default: stdout).",
    )

    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: %(default)s).",
    )

    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: %(default)s).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    sys.exit(run(args))


if __name__ == "__main__":
    main()
