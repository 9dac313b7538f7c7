"""vCard Version Converter: rewrites vCards between revisions 2.1, 3.0 and 4.0.

WHY: Contact data travels between systems that speak different vCard
revisions. Each revision renamed, removed, or re-encoded properties and
parameters, so a faithful conversion needs more than rewriting VERSION.

HOW: Three layers: read (jCard adapter builds the document tree),
convert (core rules per target revision), write (jCard adapter again).
The core never touches text; any lexer that builds the same tree can
use it.

RULES:
- convert() is the only entry point for conversion
- Conversion targets are 3.0 and 4.0; 2.1 is accepted as input only
- The input document is never modified
"""

__version__ = "0.1.0"
