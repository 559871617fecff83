from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Union

from ebustl_codec.models import (
    EBU_LANGUAGE_CODES,
    CharacterCodeTable,
    CodePageNumber,
    DiskFormatCode,
    DisplayStandardCode,
    TimeCodeStatus,
)
from ebustl_codec.STLDocument.exceptions import (
    CharacterCodeTableError,
    CodePageNumberError,
    DiskFormatCodeError,
    DisplayStandardCodeError,
    STLIncompleteError,
    TimeCodeStatusError,
)
from ebustl_codec.STLDocument.helpers import ByteCursor, pack_number, pack_text
from ebustl_codec.STLDocument.text_codec import LegacyTextCodec

GSI_SIZE = 1024


def _today() -> str:
    return datetime.now().strftime("%y%m%d")


def decode_language_code(lc: str) -> Optional[str]:
    """
    Decode EBU language code from the 2-character LC field.
    The field contains a hex value as ASCII (e.g., "09" for English).
    """
    lc = (lc or "").strip()
    if not lc:
        return None
    try:
        return EBU_LANGUAGE_CODES.get(int(lc, 16))
    except ValueError:
        return None


@dataclass
class GSIBlock:
    """General Subtitle Information block (first 1024 bytes of a file)."""

    code_page_number: CodePageNumber = CodePageNumber.CPN_850
    disk_format_code: DiskFormatCode = DiskFormatCode.STL25_01
    display_standard_code: DisplayStandardCode = DisplayStandardCode.LEVEL_1_TELETEXT
    character_code_table: CharacterCodeTable = CharacterCodeTable.LATIN
    language_code: str = "0F"
    original_programme_title: str = ""
    original_episode_title: str = ""
    translated_programme_title: str = ""
    translated_episode_title: str = ""
    translators_name: str = ""
    translators_contact_details: str = ""
    subtitle_list_reference_code: str = ""
    creation_date: str = field(default_factory=_today)
    revision_date: str = field(default_factory=_today)
    revision_number: str = "00"
    total_number_of_tti_blocks: int = 0
    total_number_of_subtitles: int = 0
    total_number_of_subtitle_groups: int = 1
    maximum_number_of_displayable_characters: int = 40
    maximum_number_of_displayable_rows: int = 23
    time_code_status: TimeCodeStatus = TimeCodeStatus.INTENDED_FOR_USE
    time_code_start_of_programme: str = "00000000"
    time_code_first_in_cue: str = "00000000"
    total_number_of_disks: int = 1
    disk_sequence_number: int = 1
    country_of_origin: str = ""
    publisher: str = ""
    editors_name: str = ""
    editors_contact_details: str = ""
    spare_bytes: str = ""
    user_defined_area: str = ""

    @property
    def frame_rate(self) -> int:
        return self.disk_format_code.fps

    @property
    def language(self) -> Optional[str]:
        return decode_language_code(self.language_code) or None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code_page_number": int(self.code_page_number),
            "disk_format_code": self.disk_format_code.value,
            "character_code_table": self.character_code_table.value,
            "title": self.original_programme_title,
            "programme_name": self.original_episode_title,
            "language": self.language,
            "frame_rate": self.frame_rate,
            "total_number_of_subtitles": self.total_number_of_subtitles,
        }


# ------------------------------------------------------------------ #
# GSI layout
# ------------------------------------------------------------------ #
# (attribute, width, kind) in wire order. "text" fields go through the
# code page codec, "number" fields are zero-padded ASCII decimal.
GSI_LAYOUT = (
    ("code_page_number", 3, "cpn"),  # 0-2
    ("disk_format_code", 8, "dfc"),  # 3-10
    ("display_standard_code", 1, "dsc"),  # 11
    ("character_code_table", 2, "cct"),  # 12-13
    ("language_code", 2, "text"),  # 14-15
    ("original_programme_title", 32, "text"),  # 16-47
    ("original_episode_title", 32, "text"),  # 48-79
    ("translated_programme_title", 32, "text"),  # 80-111
    ("translated_episode_title", 32, "text"),  # 112-143
    ("translators_name", 32, "text"),  # 144-175
    ("translators_contact_details", 32, "text"),  # 176-207
    ("subtitle_list_reference_code", 16, "text"),  # 208-223
    ("creation_date", 6, "text"),  # 224-229
    ("revision_date", 6, "text"),  # 230-235
    ("revision_number", 2, "text"),  # 236-237
    ("total_number_of_tti_blocks", 5, "number"),  # 238-242
    ("total_number_of_subtitles", 5, "number"),  # 243-247
    ("total_number_of_subtitle_groups", 3, "number"),  # 248-250
    ("maximum_number_of_displayable_characters", 2, "number"),  # 251-252
    ("maximum_number_of_displayable_rows", 2, "number"),  # 253-254
    ("time_code_status", 1, "tcs"),  # 255
    ("time_code_start_of_programme", 8, "text"),  # 256-263
    ("time_code_first_in_cue", 8, "text"),  # 264-271
    ("total_number_of_disks", 1, "number"),  # 272
    ("disk_sequence_number", 1, "number"),  # 273
    ("country_of_origin", 3, "text"),  # 274-276
    ("publisher", 32, "text"),  # 277-308
    ("editors_name", 32, "text"),  # 309-340
    ("editors_contact_details", 32, "text"),  # 341-372
    ("spare_bytes", 75, "text"),  # 373-447
    ("user_defined_area", 576, "text"),  # 448-1023
)


def _parse_code_page_number(cursor: ByteCursor) -> CodePageNumber:
    raw = cursor.read_ascii(3)
    try:
        return CodePageNumber(int(raw))
    except ValueError:
        raise CodePageNumberError(int(raw) if raw.isdigit() else raw) from None


def _parse_coded(cursor: ByteCursor, kind: str) -> Any:
    if kind == "dfc":
        raw: Union[str, int] = cursor.read_ascii(8)
        enum_cls, error_cls = DiskFormatCode, DiskFormatCodeError
    elif kind == "dsc":
        raw = cursor.read_u8()
        enum_cls, error_cls = DisplayStandardCode, DisplayStandardCodeError
    elif kind == "cct":
        raw = cursor.read_ascii(2)
        enum_cls, error_cls = CharacterCodeTable, CharacterCodeTableError
    else:
        raw = cursor.read_u8()
        enum_cls, error_cls = TimeCodeStatus, TimeCodeStatusError
    try:
        return enum_cls(raw)
    except ValueError:
        raise error_cls(raw) from None


# ------------------------------------------------------------------ #
# General Subtitle Information (GSI) parsing
# ------------------------------------------------------------------ #
def parse_gsi(gsi: Union[bytes, ByteCursor]) -> GSIBlock:
    """
    Parse a complete GSI block.

    Fields are read in wire order; the first invalid field aborts the
    parse with an error naming that field.
    """
    if isinstance(gsi, ByteCursor):
        cursor = ByteCursor(gsi.read(GSI_SIZE))
    else:
        if len(gsi) < GSI_SIZE:
            raise STLIncompleteError(
                f"GSI block must be {GSI_SIZE} bytes, got {len(gsi)}"
            )
        cursor = ByteCursor(gsi[:GSI_SIZE])

    values: Dict[str, Any] = {}
    codec: Optional[LegacyTextCodec] = None
    for name, width, kind in GSI_LAYOUT:
        if kind == "cpn":
            values[name] = _parse_code_page_number(cursor)
            codec = LegacyTextCodec.for_code_page(values[name])
        elif kind == "text":
            values[name] = cursor.read_text(width, codec)
        elif kind == "number":
            values[name] = cursor.read_number(width, name)
        else:
            values[name] = _parse_coded(cursor, kind)

    return GSIBlock(**values)


def serialize_gsi(gsi: GSIBlock) -> bytes:
    """Serialize a GSI block to exactly 1024 bytes."""
    codec = LegacyTextCodec.for_code_page(gsi.code_page_number)
    parts = []
    for name, width, kind in GSI_LAYOUT:
        value = getattr(gsi, name)
        if kind == "text":
            parts.append(pack_text(value, width, codec, name))
        elif kind == "number":
            parts.append(pack_number(value, width, name))
        elif kind in ("dsc", "tcs"):
            parts.append(bytes([value]))
        else:
            parts.append(value.serialize())
    return b"".join(parts)
