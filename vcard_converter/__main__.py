"""Package entry point for ``python -m vcard_converter``.

WHY: Users run the converter as ``python -m vcard_converter card.json
--target 3.0``. Python's ``-m`` flag looks for ``__main__.py`` inside
the package and executes it.

HOW: Delegates to the CLI's main() function.
"""

from vcard_converter.cli import main

if __name__ == "__main__":
    main()
