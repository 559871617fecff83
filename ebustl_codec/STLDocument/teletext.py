"""
Teletext framing of the 112-byte TTI Text Field.

Layout written by encode_text_field:

    [0x0D] 0x0B 0x0B <text, lines joined by 0x8A> 0x0A 0x0A 0x8A 0x8F...

0x0D (double height) is only present when requested. Bytes in the ranges
0x00-0x1F and 0x80-0x9F are control codes; everything else is text in the
character set selected by the Character Code Table.
"""

import warnings
from typing import Tuple

from ebustl_codec.models import CharacterCodeTable, EBUSTLControlCode
from ebustl_codec.STLDocument.exceptions import STLTextTruncatedWarning
from ebustl_codec.STLDocument.text_codec import LegacyTextCodec

TEXT_FIELD_SIZE = 112

START_OF_TEXT = bytes([EBUSTLControlCode.START_BOX, EBUSTLControlCode.START_BOX])
END_OF_TEXT = bytes(
    [EBUSTLControlCode.END_BOX, EBUSTLControlCode.END_BOX, EBUSTLControlCode.NEWLINE]
)

REPLACEMENT_BYTE = ord("?")


def is_control_byte(byte: int) -> bool:
    return byte <= 0x1F or 0x80 <= byte <= 0x9F


def _strip_control_bytes(raw: bytes) -> bytes:
    return bytes(REPLACEMENT_BYTE if is_control_byte(b) else b for b in raw)


def encode_text_field(
    text: str, double_height: bool, cct: CharacterCodeTable
) -> Tuple[bytes, bool]:
    """
    Frame `text` into exactly 112 bytes.

    Returns the field and whether the text had to be truncated to fit.
    """
    codec = LegacyTextCodec.for_character_code_table(cct)
    content = bytes([EBUSTLControlCode.NEWLINE]).join(
        _strip_control_bytes(codec.encode(line)) for line in text.splitlines()
    )

    leading = START_OF_TEXT
    if double_height:
        leading = bytes([EBUSTLControlCode.DOUBLE_HEIGHT]) + leading

    budget = TEXT_FIELD_SIZE - len(END_OF_TEXT) - len(leading)
    truncated = len(content) > budget
    if truncated:
        warnings.warn(
            f"Subtitle text is {len(content)} bytes long, only {budget} fit "
            f"in the text field; truncating",
            STLTextTruncatedWarning,
            stacklevel=3,
        )
        content = content[:budget]

    field = leading + content + END_OF_TEXT
    return field.ljust(TEXT_FIELD_SIZE, bytes([EBUSTLControlCode.UNUSED_SPACE])), truncated


def decode_text_field(field: bytes, cct: CharacterCodeTable) -> str:
    """
    Extract readable text from a Text Field.

    Runs of text bytes are decoded each time a control byte is reached.
    0x8A adds a CR/LF line break and 0x8F ends decoding; other control
    codes are skipped. Text after the last control byte is not decoded.
    """
    codec = LegacyTextCodec.for_character_code_table(cct)
    parts = []
    start = 0
    for i, byte in enumerate(field):
        if not is_control_byte(byte):
            continue
        if start != i:
            parts.append(codec.decode(field[start:i]))
        if byte == EBUSTLControlCode.UNUSED_SPACE:
            break
        if byte == EBUSTLControlCode.NEWLINE:
            parts.append("\r\n")
        start = i + 1
    return "".join(parts)
