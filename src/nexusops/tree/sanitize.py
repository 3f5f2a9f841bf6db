"""Value sanitization for node text."""

from __future__ import annotations

import unicodedata

# Line breaks and non-whitespace control characters (NUL, ESC, DEL, C1) are
# deleted; whitespace controls survive until the collapse in sanitize_value.
_DELETE = {
    code: None
    for code in [*range(0x20), *range(0x7F, 0xA0)]
    if unicodedata.category(chr(code)) == "Cc" and not chr(code).isspace()
}
_TRANSLATION = str.maketrans({"\r": None, "\n": None, "\t": " ", **_DELETE})


def sanitize_value(raw: str) -> str:
    """Flatten source text into a single line with single spaces.

    Carriage returns and newlines are dropped outright (not replaced by a
    space), as are control characters that are not whitespace, e.g. NUL or
    ESC. Tabs become spaces, then every whitespace run collapses to one
    space and the ends are trimmed. The result holds no control characters.
    Idempotent and never raises.
    """
    return " ".join(raw.translate(_TRANSLATION).split())
