"""Unquoting for string literal tokens."""

from __future__ import annotations

_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "t": "\t",
    "r": "\r",
}


def unquote(s: str) -> str:
    """Strip the enclosing quotes from *s* and decode backslash escapes.

    The tokenizer hands string literals over in their original quoted form;
    processors call this explicitly when they want the text value.

    ``\\b \\f \\n \\t \\r`` are decoded; any other escaped character is kept
    as-is, so ``\\"`` becomes ``"`` and ``\\\\`` becomes ``\\``.
    """
    chars: list[str] = []
    end = len(s) - 1
    i = 1
    while i < end:
        ch = s[i]
        if ch == "\\" and i + 1 < len(s):
            i += 1
            ch = s[i]
            chars.append(_ESCAPES.get(ch, ch))
        else:
            chars.append(ch)
        i += 1
    return "".join(chars)
