"""
EBU STL Models - Data structures and type definitions.

Contains:
- Closed-set enums for GSI and TTI coded fields (value = wire code)
- Control codes used in the TTI Text Field
- Time and TTIFormat value types
- Lookup tables for language codes and character sets
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict


# =============================================================================
# GSI Coded Fields
# =============================================================================


class CodePageNumber(IntEnum):
    """Code Page Number (CPN), GSI bytes 0-2. Selects the GSI text codec."""

    CPN_437 = 437  # United States
    CPN_850 = 850  # Multilingual
    CPN_860 = 860  # Portugal
    CPN_863 = 863  # Canada-French
    CPN_865 = 865  # Nordic

    def serialize(self) -> bytes:
        return f"{self.value:03d}".encode("ascii")


class DiskFormatCode(Enum):
    """Disk Format Code (DFC), GSI bytes 3-10."""

    STL25_01 = "STL25.01"
    STL30_01 = "STL30.01"

    @property
    def fps(self) -> int:
        return 25 if self is DiskFormatCode.STL25_01 else 30

    def serialize(self) -> bytes:
        return self.value.encode("ascii")


class DisplayStandardCode(IntEnum):
    """Display Standard Code (DSC), GSI byte 11."""

    BLANK = 0x20
    OPEN_SUBTITLING = 0x30
    LEVEL_1_TELETEXT = 0x31
    LEVEL_2_TELETEXT = 0x32


class CharacterCodeTable(Enum):
    """Character Code Table (CCT), GSI bytes 12-13. Selects the TTI text codec."""

    LATIN = "00"
    LATIN_CYRILLIC = "01"
    LATIN_ARABIC = "02"
    LATIN_GREEK = "03"
    LATIN_HEBREW = "04"

    def serialize(self) -> bytes:
        return self.value.encode("ascii")


class TimeCodeStatus(IntEnum):
    """Time Code Status (TCS), GSI byte 255."""

    NOT_INTENDED_FOR_USE = 0x30
    INTENDED_FOR_USE = 0x31


# =============================================================================
# TTI Coded Fields
# =============================================================================


class CumulativeStatus(IntEnum):
    """Cumulative Status (CS), TTI byte 4."""

    NOT_PART_OF_A_SET = 0x00
    FIRST_IN_SET = 0x01
    INTERMEDIATE_IN_SET = 0x02
    LAST_IN_SET = 0x03


class JustificationCode(IntEnum):
    """EBU STL Justification codes"""

    UNCHANGED = 0x00
    LEFT = 0x01
    CENTERED = 0x02
    RIGHT = 0x03


# Map justification codes to caption layout alignment
JUSTIFICATION_NAMES = {
    JustificationCode.LEFT: "left",
    JustificationCode.CENTERED: "center",
    JustificationCode.RIGHT: "right",
}


# =============================================================================
# EBU STL Control Codes (for Text Field)
# =============================================================================


class EBUSTLControlCode(IntEnum):
    """EBU STL Text Field control codes used by the framing codec"""

    END_BOX = 0x0A
    START_BOX = 0x0B
    NORMAL_HEIGHT = 0x0C
    DOUBLE_HEIGHT = 0x0D

    # Line break
    NEWLINE = 0x8A

    # Unused space (filler)
    UNUSED_SPACE = 0x8F


# =============================================================================
# Timing and Formatting
# =============================================================================


@dataclass(frozen=True)
class Time:
    """A TTI time code: one raw byte each for hours, minutes, seconds, frames."""

    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    frames: int = 0

    @classmethod
    def from_frames(cls, total_frames: int, fps: int) -> "Time":
        """Split an absolute frame count into a time code."""
        total_seconds, frames = divmod(total_frames, fps)
        hours, rem = divmod(total_seconds, 3600)
        minutes, seconds = divmod(rem, 60)
        return cls(hours, minutes, seconds, frames)

    def to_seconds(self, fps: float) -> float:
        return self.hours * 3600 + self.minutes * 60 + self.seconds + self.frames / fps

    def format_fps(self, fps: int) -> str:
        """
        Format as HH:MM:SS,mmm with the frame count converted to
        milliseconds at the given frame-rate.
        """
        millis = int(self.frames * 1000 // fps)
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d},{millis:03d}"

    def serialize(self) -> bytes:
        return bytes([self.hours, self.minutes, self.seconds, self.frames])

    def __str__(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}:{self.frames:02d}"


@dataclass
class TTIFormat:
    """Layout options applied to a subtitle added to a document."""

    justification_code: int = JustificationCode.CENTERED
    vertical_position: int = 19
    double_height: bool = True


# EBU Tech 3264 Language Code mapping (hex code -> ISO 639-1)
EBU_LANGUAGE_CODES: Dict[int, str] = {
    0x00: "",  # Unknown/not specified
    0x01: "sq",  # Albanian
    0x02: "br",  # Breton
    0x03: "ca",  # Catalan
    0x04: "hr",  # Croatian
    0x05: "cy",  # Welsh
    0x06: "cs",  # Czech
    0x07: "da",  # Danish
    0x08: "de",  # German
    0x09: "en",  # English
    0x0A: "es",  # Spanish
    0x0B: "eo",  # Esperanto
    0x0C: "et",  # Estonian
    0x0D: "eu",  # Basque
    0x0E: "fo",  # Faroese
    0x0F: "fr",  # French
    0x10: "fy",  # Frisian
    0x11: "ga",  # Irish
    0x12: "gd",  # Gaelic (Scottish)
    0x13: "gl",  # Galician
    0x14: "is",  # Icelandic
    0x15: "it",  # Italian
    0x16: "lb",  # Luxembourgish
    0x17: "lt",  # Lithuanian
    0x18: "lv",  # Latvian
    0x19: "mk",  # Macedonian
    0x1A: "mt",  # Maltese
    0x1B: "nl",  # Dutch
    0x1C: "no",  # Norwegian
    0x1D: "oc",  # Occitan
    0x1E: "pl",  # Polish
    0x1F: "pt",  # Portuguese
    0x20: "ro",  # Romanian
    0x21: "rm",  # Romansh
    0x22: "sr",  # Serbian
    0x23: "sk",  # Slovak
    0x24: "sl",  # Slovenian
    0x25: "fi",  # Finnish
    0x26: "sv",  # Swedish
    0x27: "tr",  # Turkish
    0x28: "nl-BE",  # Flemish
    0x29: "wa",  # Walloon
    # Extended codes (0x7F+)
    0x7F: "am",  # Amharic
    0x80: "ar",  # Arabic
    0x81: "hy",  # Armenian
    0x82: "as",  # Assamese
    0x83: "az",  # Azerbaijani
    0x84: "bm",  # Bambara
    0x85: "be",  # Belarusian
    0x86: "bn",  # Bengali
    0x87: "bg",  # Bulgarian
    0x88: "my",  # Burmese
    0x89: "zh",  # Chinese
    0x8A: "cpe",  # Creole (generic)
    0x8B: "ka",  # Georgian
    0x8C: "el",  # Greek
    0x8D: "gu",  # Gujarati
    0x8E: "gn",  # Guarani
    0x8F: "ha",  # Hausa
    0x90: "he",  # Hebrew
    0x91: "hi",  # Hindi
    0x92: "id",  # Indonesian
    0x93: "ja",  # Japanese
    0x94: "kn",  # Kannada
    0x95: "kk",  # Kazakh
    0x96: "km",  # Khmer
    0x97: "ko",  # Korean
    0x98: "lo",  # Lao
    0x99: "la",  # Latin
    0x9A: "ms",  # Malay
    0x9B: "ml",  # Malayalam
    0x9C: "mr",  # Marathi
    0x9D: "mo",  # Moldavian
    0x9E: "ne",  # Nepali
    0x9F: "or",  # Oriya
    0xA0: "pap",  # Papiamento
    0xA1: "fa",  # Persian
    0xA2: "pa",  # Punjabi
    0xA3: "ps",  # Pushto
    0xA4: "qu",  # Quechua
    0xA5: "ru",  # Russian
    0xA6: "sm",  # Samoan
    0xA7: "sn",  # Shona
    0xA8: "si",  # Sinhalese
    0xA9: "so",  # Somali
    0xAA: "sw",  # Swahili
    0xAB: "tl",  # Tagalog
    0xAC: "ta",  # Tamil
    0xAD: "te",  # Telugu
    0xAE: "th",  # Thai
    0xAF: "uk",  # Ukrainian
    0xB0: "ur",  # Urdu
    0xB1: "uz",  # Uzbek
    0xB2: "vi",  # Vietnamese
    0xB3: "zu",  # Zulu
}


# CCT (Character Code Table) to Python codec mapping
CCT_CODECS: Dict[CharacterCodeTable, str] = {
    CharacterCodeTable.LATIN: "latin-1",  # Latin (ISO 6937 approximated as Latin-1)
    CharacterCodeTable.LATIN_CYRILLIC: "iso8859-5",  # Latin/Cyrillic
    CharacterCodeTable.LATIN_ARABIC: "iso8859-6",  # Latin/Arabic
    CharacterCodeTable.LATIN_GREEK: "iso8859-7",  # Latin/Greek
    CharacterCodeTable.LATIN_HEBREW: "iso8859-8",  # Latin/Hebrew
}


# CPN (Code Page Number) to Python codec mapping, used for GSI text fields
CPN_CODECS: Dict[CodePageNumber, str] = {
    CodePageNumber.CPN_437: "cp437",
    CodePageNumber.CPN_850: "cp850",
    CodePageNumber.CPN_860: "cp860",
    CodePageNumber.CPN_863: "cp863",
    CodePageNumber.CPN_865: "cp865",
}
