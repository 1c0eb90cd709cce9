"""Literal escaping for generated binding expressions and delimiter patterns."""

import re

# Order matters: backslash first so later escapes are not doubled.
_JS_STRING_REPLACEMENTS = (
    ("\\", "\\\\"),
    ("'", "\\'"),
    ("\r", "\\r"),
    ("\n", "\\n"),
    ('"', "&quot;"),
    (",", "\\x2c"),
)


def escape_js_chars(text: str) -> str:
    """
    Escape text for the inside of a single-quoted expression string literal.

    Double quotes become ``&quot;`` so the literal survives inside a
    double-quoted attribute, and commas become ``\\x2c`` so they are never
    read as directive clause separators.
    """
    for old, new in _JS_STRING_REPLACEMENTS:
        text = text.replace(old, new)
    return text


def escape_js_string(text: str) -> str:
    """Quote text as a single-quoted expression string literal."""
    return f"'{escape_js_chars(text)}'"


def escape_pattern(text: str) -> str:
    """Escape text for literal use inside a regular expression."""
    return re.escape(text)
