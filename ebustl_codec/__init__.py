"""
ebustl_codec - read and write EBU STL (Tech 3264-E) subtitle files.

This is the public API; the subpackages are namespace packages without
re-exports of their own.

    from ebustl_codec import parse_stl, Time

    doc = parse_stl(raw)
    doc.add_subtitle(Time(0, 0, 1, 0), Time(0, 0, 3, 0), "Hello")
"""

from ebustl_codec.models import (
    CharacterCodeTable,
    CodePageNumber,
    CumulativeStatus,
    DiskFormatCode,
    DisplayStandardCode,
    JustificationCode,
    Time,
    TimeCodeStatus,
    TTIFormat,
)
from ebustl_codec.STLDocument.exceptions import (
    CharacterCodeTableError,
    CodePageNumberError,
    CumulativeStatusError,
    DiskFormatCodeError,
    DisplayStandardCodeError,
    STLCapacityError,
    STLFieldError,
    STLIncompleteError,
    STLIOError,
    STLParseError,
    STLTextTruncatedWarning,
    STLValidationWarning,
    TimeCodeStatusError,
)
from ebustl_codec.STLDocument.parsers.gsi_parser import GSIBlock
from ebustl_codec.STLDocument.parsers.tti_parser import TTIBlock
from ebustl_codec.STLDocument.STLDocument import (
    STLDocument,
    parse_stl,
    parse_stl_from_file,
    serialize_stl,
)

__all__ = [
    "CharacterCodeTable",
    "CharacterCodeTableError",
    "CodePageNumber",
    "CodePageNumberError",
    "CumulativeStatus",
    "CumulativeStatusError",
    "DiskFormatCode",
    "DiskFormatCodeError",
    "DisplayStandardCode",
    "DisplayStandardCodeError",
    "GSIBlock",
    "JustificationCode",
    "STLCapacityError",
    "STLDocument",
    "STLFieldError",
    "STLIOError",
    "STLIncompleteError",
    "STLParseError",
    "STLTextTruncatedWarning",
    "STLValidationWarning",
    "TTIBlock",
    "TTIFormat",
    "Time",
    "TimeCodeStatus",
    "TimeCodeStatusError",
    "parse_stl",
    "parse_stl_from_file",
    "serialize_stl",
]
