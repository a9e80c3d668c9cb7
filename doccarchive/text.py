"""Text helpers for change log titles."""

from __future__ import annotations

# Punctuation that may appear inside or after the first word without
# preventing capitalization.
_ALLOWED_PUNCTUATION = frozenset(",.!?:;'-")


def capitalize_first_word(text: str) -> str:
    """Capitalize the first word of ``text`` when it is safe to do so.

    Words that already contain an uppercase letter (``iPad``) or characters
    outside of letters, digits and common punctuation are returned unchanged.
    Hyphenated parts of the first word are each capitalized (``Twenty-One``).
    Surrounding whitespace is preserved.
    """

    stripped = text.lstrip()
    if not stripped:
        return text
    leading = text[: len(text) - len(stripped)]

    word_end = 0
    while word_end < len(stripped) and not stripped[word_end].isspace():
        word_end += 1
    word, rest = stripped[:word_end], stripped[word_end:]

    if any(char.isupper() for char in word):
        return text
    if any(not char.isalnum() and char not in _ALLOWED_PUNCTUATION for char in word):
        return text

    capitalized = "-".join(part[:1].upper() + part[1:] for part in word.split("-"))
    return f"{leading}{capitalized}{rest}"


__all__ = ["capitalize_first_word"]
