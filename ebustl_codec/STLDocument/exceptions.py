"""
Errors raised while decoding EBU STL data, and warning categories for
non-fatal problems found while encoding it.
"""

from typing import Any


class STLValidationWarning(UserWarning):
    """Non-fatal problem with STL data."""


class STLTextTruncatedWarning(STLValidationWarning):
    """Text did not fit its fixed-width field and was cut."""


class STLParseError(ValueError):
    """Base class for every STL decoding failure."""


class STLIOError(STLParseError):
    """Reading or writing an STL file failed."""


class STLIncompleteError(STLParseError):
    def __init__(self, message: str = "file may be incomplete or corrupted"):
        super().__init__(f"Error parsing STL data, {message}")


class STLFieldError(STLParseError):
    """A field holds a value outside its encoding rule."""

    label = "field"

    def __init__(self, value: Any, field: str = ""):
        self.value = value
        self.field = field or self.label
        super().__init__(f"Error parsing {self.field}: {value!r}")


class CodePageNumberError(STLFieldError):
    label = "Code Page Number"


class DiskFormatCodeError(STLFieldError):
    label = "Disk Format Code"


class DisplayStandardCodeError(STLFieldError):
    label = "Display Standard Code"


class CharacterCodeTableError(STLFieldError):
    label = "Character Code Table"


class TimeCodeStatusError(STLFieldError):
    label = "Time Code Status"


class CumulativeStatusError(STLFieldError):
    label = "Cumulative Status"


class STLCapacityError(ValueError):
    """The document cannot hold another TTI block."""
