"""Interned string table shared by the compiler and the VM."""

from __future__ import annotations

MAX_CHARS = 100000

_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
    "?": "?",
}


def unescape(chars: str) -> str:
    """Replace backslash escapes in string-literal text.

    A doubled backslash is kept doubled, an unknown escape is dropped, and
    the final character is always copied as is.
    """
    out: list[str] = []
    last = len(chars) - 1
    index = 0
    while index < len(chars):
        char = chars[index]
        if index == last:
            out.append(char)
        elif char == "\\" and chars[index + 1] == "\\":
            out.append("\\\\")
        elif char == "\\":
            index += 1
            out.append(_ESCAPES.get(chars[index], ""))
        else:
            out.append(char)
        index += 1
    return "".join(out)


def _size(chars: str) -> int:
    return len(chars.encode("utf-8"))


class TextTable:
    """Strings addressed by their offset in one contiguous text buffer.

    Each stored string takes its encoded length plus one terminator slot,
    so offsets match a flat, null-separated layout. Offset 0 holds
    ``"Empty"``.
    """

    def __init__(self) -> None:
        self._strings: dict[int, str] = {}
        self._next = 0
        self._store("Empty")

    def _store(self, text: str) -> int:
        offset = self._next
        self._strings[offset] = text
        self._next += _size(text) + 1
        return offset

    def intern(self, chars: str) -> int:
        """Return the offset of ``chars``, storing it unescaped if new."""
        for offset, stored in self._strings.items():
            if stored == chars:
                return offset
        if self._next + _size(chars) + 1 >= MAX_CHARS:
            raise OverflowError("text table is full")
        return self._store(unescape(chars))

    def get(self, index: float) -> str:
        """Return the string stored at offset ``index``."""
        offset = int(index)
        try:
            return self._strings[offset]
        except KeyError:
            raise IndexError(f"no string at text offset {offset}") from None

    def __len__(self) -> int:
        return self._next