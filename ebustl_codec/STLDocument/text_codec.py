"""
Legacy single-byte character sets used by EBU STL.

The GSI Character Code Table picks the codec for TTI text fields; the GSI
Code Page Number picks the codec for the GSI's own text fields. Both are
served by LegacyTextCodec, which never raises on bad input.
"""

import codecs
from typing import Dict

from ebustl_codec.models import (
    CCT_CODECS,
    CPN_CODECS,
    CharacterCodeTable,
    CodePageNumber,
)


class LegacyTextCodec:
    """Lossy, never-failing wrapper around one 8-bit Python codec."""

    def __init__(self, encoding: str):
        # Fail early on a bad codec name rather than on first use
        self.encoding = codecs.lookup(encoding).name

    @classmethod
    def for_character_code_table(cls, cct: CharacterCodeTable) -> "LegacyTextCodec":
        return _CCT_TEXT_CODECS[cct]

    @classmethod
    def for_code_page(cls, cpn: CodePageNumber) -> "LegacyTextCodec":
        return _CPN_TEXT_CODECS[cpn]

    def decode(self, data: bytes) -> str:
        # Unmapped bytes become U+FFFD
        return data.decode(self.encoding, errors="replace")

    def encode(self, text: str) -> bytes:
        # Characters outside the set become "?"
        return text.encode(self.encoding, errors="replace")

    def __repr__(self) -> str:
        return f"LegacyTextCodec({self.encoding!r})"


_CCT_TEXT_CODECS: Dict[CharacterCodeTable, LegacyTextCodec] = {
    cct: LegacyTextCodec(name) for cct, name in CCT_CODECS.items()
}

_CPN_TEXT_CODECS: Dict[CodePageNumber, LegacyTextCodec] = {
    cpn: LegacyTextCodec(name) for cpn, name in CPN_CODECS.items()
}
