"""Loading XPM pixmaps into 32-bit images."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from os import PathLike
from typing import Iterable, Iterator, List, Sequence, Union

from woodquest.colors import text_to_rgb

TRANSPARENT = 0xFF000000
"""Pixel value written for the XPM colour ``None``."""

_BITS_PER_PIXEL = 32
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be turned into an image."""


@dataclass
class Image:
    """A ZPixmap-style image: rows of 32-bit pixels in a flat byte buffer."""

    width: int
    height: int
    bpp: int = _BITS_PER_PIXEL
    byte_order: int = 0
    data: bytearray = field(default=None, repr=False)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("image dimensions must be positive")
        if self.bpp % 8:
            raise ValueError("bits per pixel must be a multiple of 8")
        if self.data is None:
            self.data = bytearray(self.size_line * self.height)
        elif len(self.data) < self.size_line * self.height:
            raise ValueError("pixel buffer is too small for the image")

    @property
    def bytes_per_pixel(self) -> int:
        return self.bpp // 8

    @property
    def size_line(self) -> int:
        """Number of bytes in one row of the buffer."""
        return self.width * self.bytes_per_pixel

    @property
    def _endianness(self) -> str:
        return "big" if self.byte_order else "little"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the image")
        return y * self.size_line + x * self.bytes_per_pixel

    def set_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` at column ``x`` of row ``y``."""
        opp = self.bytes_per_pixel
        start = self._offset(x, y)
        value = color & ((1 << (8 * opp)) - 1)
        self.data[start:start + opp] = value.to_bytes(opp, self._endianness)

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel value stored at column ``x`` of row ``y``."""
        opp = self.bytes_per_pixel
        start = self._offset(x, y)
        return int.from_bytes(self.data[start:start + opp], self._endianness)


def split_words(text: str) -> List[str]:
    """Split ``text`` on runs of spaces and tabs."""
    return [word for word in re.split(r"[ \t]+", text) if word]


def _find_unquoted(text: str, find: str) -> int:
    """Index of the first ``find`` in ``text`` that is not inside quotes."""
    quoted = False
    last = len(text) - len(find)
    for index, char in enumerate(text):
        if index > last:
            break
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(find, index):
            return index
    return -1


def _blank(text: str, start: int, length: int) -> str:
    stop = min(len(text), start + length)
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C-style comments outside quoted strings with spaces.

    The text keeps its length. A line comment is blanked together with the
    newline that ends it.
    """
    while (begin := _find_unquoted(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        span = 3 if end == -1 else end + 2 - begin
        text = _blank(text, begin, span)
    while (begin := _find_unquoted(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        span = 2 if end == -1 else end + 1 - begin
        text = _blank(text, begin, span)
    return text


def quoted_lines(text: str) -> Iterator[str]:
    """Yield the contents of successive double-quoted strings in ``text``."""
    pos = 0
    while True:
        opening = text.find('"', pos)
        if opening == -1:
            return
        closing = text.find('"', opening + 1)
        if closing == -1:
            return
        yield text[opening + 1:closing]
        pos = closing + 1


def _atoi(word: str) -> int:
    match = _LEADING_INT.match(word)
    return int(match.group(1)) if match else 0


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"XPM data ends before the {what}") from None


def _parse_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if width <= 0 or height <= 0 or ncolors <= 0 or cpp <= 0:
        raise XpmError(f"invalid XPM header: {line!r}")
    return width, height, ncolors, cpp


def _parse_color(line: str, cpp: int) -> int:
    words = split_words(line[cpp:])
    try:
        index = words.index("c") + 1
    except ValueError:
        raise XpmError(f"colour line has no 'c' entry: {line!r}") from None
    if index >= len(words):
        raise XpmError(f"colour line has no value after 'c': {line!r}")
    extra = words[index + 1] if index + 1 < len(words) else None
    return text_to_rgb(words[index], extra)


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from XPM lines: header, colour table, then pixel rows."""
    source = iter(lines)
    width, height, ncolors, cpp = _parse_header(_next_line(source, "header"))
    # With one or two characters per pixel a later definition replaces an
    # earlier one; with more, the first definition of a key is kept.
    keep_last = cpp <= 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(source, "colour table")
        color = _parse_color(line, cpp)
        key = line[:cpp]
        if keep_last or key not in palette:
            palette[key] = color

    image = Image(width, height)
    for y in range(height):
        row = _next_line(source, "pixel rows")
        for x in range(width):
            color = palette.get(row[x * cpp:(x + 1) * cpp], 0)
            if color == -1:
                color = TRANSPARENT
            image.set_pixel(x, y, color)
    return image


def xpm_to_image(data: Sequence[str]) -> Image:
    """Build an image from in-memory XPM strings."""
    return parse_xpm(data)


def xpm_file_to_image(path: Union[str, "PathLike[str]"]) -> Image:
    """Load an XPM file from disk."""
    try:
        with open(path, encoding="latin-1") as handle:
            text = handle.read()
    except OSError as exc:
        raise XpmError(f"cannot read XPM file {path!s}: {exc}") from exc
    return parse_xpm(quoted_lines(strip_comments(text)))