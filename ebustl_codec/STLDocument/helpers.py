"""
EBU STL Helpers - STLDocument
- Forward-only byte cursor used by the GSI and TTI parsers
- Fixed-width field packing used by the serializers
"""

import io
import struct
import warnings
from typing import Union

from ebustl_codec.STLDocument.exceptions import (
    STLFieldError,
    STLIncompleteError,
    STLTextTruncatedWarning,
)
from ebustl_codec.STLDocument.text_codec import LegacyTextCodec


class ByteCursor:
    """
    Bounds-checked sequential reader over an in-memory buffer.

    Every read either returns exactly the requested number of bytes or
    raises STLIncompleteError; the cursor never moves backwards.
    """

    def __init__(self, data: Union[bytes, io.BytesIO]):
        self._buffer = data if isinstance(data, io.BytesIO) else io.BytesIO(data)

    def remaining(self) -> int:
        with self._buffer.getbuffer() as view:
            return view.nbytes - self._buffer.tell()

    def read(self, size: int) -> bytes:
        chunk = self._buffer.read(size)
        if len(chunk) < size:
            raise STLIncompleteError(
                f"expected {size} bytes at offset {self._buffer.tell() - len(chunk)}, "
                f"got {len(chunk)}"
            )
        return chunk

    def read_u8(self) -> int:
        return self.read(1)[0]

    def read_u16_le(self) -> int:
        return struct.unpack("<H", self.read(2))[0]

    def read_ascii(self, size: int) -> str:
        return self.read(size).decode("ascii", errors="replace")

    def read_text(self, size: int, codec: LegacyTextCodec) -> str:
        """Read a space padded text field."""
        return codec.decode(self.read(size)).rstrip(" ")

    def read_number(self, size: int, field: str) -> int:
        """Read a fixed-width ASCII decimal field; every byte must be a digit."""
        raw = self.read(size)
        if not raw.isdigit():
            raise STLFieldError(raw.decode("ascii", errors="replace"), field)
        return int(raw)


# ------------------------------------------------------------------ #
# Field packing
# ------------------------------------------------------------------ #
def pack_text(value: str, width: int, codec: LegacyTextCodec, field: str) -> bytes:
    """
    Encode a text field and right-pad it with spaces to `width`.
    Over-long values are cut to the field width.
    """
    encoded = codec.encode(value or "")
    if len(encoded) > width:
        warnings.warn(
            f"{field} is {len(encoded)} bytes long, truncating to {width} bytes",
            STLTextTruncatedWarning,
            stacklevel=4,
        )
        encoded = encoded[:width]
    return encoded.ljust(width, b" ")


def pack_number(value: int, width: int, field: str) -> bytes:
    """Render a counter as zero-padded ASCII decimal of exactly `width` digits."""
    largest = 10**width - 1
    if not 0 <= value <= largest:
        warnings.warn(
            f"{field} value {value} does not fit {width} digits, clamping",
            STLTextTruncatedWarning,
            stacklevel=4,
        )
        value = min(max(value, 0), largest)
    return f"{value:0{width}d}".encode("ascii")
