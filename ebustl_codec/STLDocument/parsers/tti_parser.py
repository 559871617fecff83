import io
import struct
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from ebustl_codec.models import (
    JUSTIFICATION_NAMES,
    CharacterCodeTable,
    CumulativeStatus,
    Time,
    TTIFormat,
)
from ebustl_codec.STLDocument.exceptions import CumulativeStatusError
from ebustl_codec.STLDocument.helpers import ByteCursor
from ebustl_codec.STLDocument.teletext import (
    TEXT_FIELD_SIZE,
    decode_text_field,
    encode_text_field,
)

TTI_SIZE = 128
MAX_SUBTITLE_NUMBER = 0xFFFF


@dataclass
class TTIBlock:
    """Text and Timing Information block: one 128-byte subtitle record."""

    subtitle_group_number: int
    subtitle_number: int
    extension_block_number: int
    cumulative_status: CumulativeStatus
    time_code_in: Time
    time_code_out: Time
    vertical_position: int
    justification_code: int
    comment_flag: int
    text_field: bytes
    # Copy of the GSI CCT so the block can decode its own text
    character_code_table: CharacterCodeTable = CharacterCodeTable.LATIN
    truncated: bool = field(default=False, compare=False)

    @classmethod
    def new(
        cls,
        subtitle_number: int,
        time_code_in: Time,
        time_code_out: Time,
        text: str,
        fmt: TTIFormat,
        cct: CharacterCodeTable,
    ) -> "TTIBlock":
        """Build a single-block subtitle with its text framed for the given CCT."""
        text_field, truncated = encode_text_field(text, fmt.double_height, cct)
        return cls(
            subtitle_group_number=0,
            subtitle_number=subtitle_number,
            extension_block_number=0xFF,
            cumulative_status=CumulativeStatus.NOT_PART_OF_A_SET,
            time_code_in=time_code_in,
            time_code_out=time_code_out,
            vertical_position=fmt.vertical_position,
            justification_code=fmt.justification_code,
            comment_flag=0,
            text_field=text_field,
            character_code_table=cct,
            truncated=truncated,
        )

    @property
    def text(self) -> str:
        return decode_text_field(self.text_field, self.character_code_table)

    def to_dict(self, fps: float = 25.0) -> Dict[str, Any]:
        return {
            "subtitle_number": self.subtitle_number,
            "start": round(self.time_code_in.to_seconds(fps) * 1_000_000),
            "start_timecode": str(self.time_code_in),
            "end": round(self.time_code_out.to_seconds(fps) * 1_000_000),
            "end_timecode": str(self.time_code_out),
            "text": self.text,
            "layout": {
                "vertical_position": self.vertical_position,
                "text_align": JUSTIFICATION_NAMES.get(self.justification_code),
            },
        }


# ------------------------------------------------------------------ #
# TTI parsing
# ------------------------------------------------------------------ #
def _parse_time(cursor: ByteCursor) -> Time:
    hours, minutes, seconds, frames = cursor.read(4)
    return Time(hours, minutes, seconds, frames)


def parse_tti_block(
    tti: Union[bytes, ByteCursor], cct: CharacterCodeTable = CharacterCodeTable.LATIN
) -> TTIBlock:
    """
    Parse one 128-byte TTI block.

    TTI layout:
     0:      SGN  (Subtitle Group Number)
     1-2:    SN   (Subtitle Number, little-endian)
     3:      EBN  (Extension Block Number)
     4:      CS   (Cumulative Status: 0=single,1=first,2=intermediate,3=last)
     5-8:    TCI  (In-cue  HH:MM:SS:FF, 1 byte per field)
     9-12:   TCO  (Out-cue HH:MM:SS:FF, 1 byte per field)
     13:     VP   (Vertical Position)
     14:     JC   (Justification Code)
     15:     CF   (Comment Flag)
     16-127: TF   (Text Field, kept raw)
    """
    source = tti if isinstance(tti, ByteCursor) else ByteCursor(tti)
    # Take the whole block first so a short tail is reported as incomplete
    cursor = ByteCursor(source.read(TTI_SIZE))

    sgn = cursor.read_u8()
    sn = cursor.read_u16_le()
    ebn = cursor.read_u8()
    cs_raw = cursor.read_u8()
    try:
        cs = CumulativeStatus(cs_raw)
    except ValueError:
        raise CumulativeStatusError(cs_raw) from None
    tci = _parse_time(cursor)
    tco = _parse_time(cursor)
    vp = cursor.read_u8()
    jc = cursor.read_u8()
    cf = cursor.read_u8()
    tf = cursor.read(TEXT_FIELD_SIZE)

    return TTIBlock(
        subtitle_group_number=sgn,
        subtitle_number=sn,
        extension_block_number=ebn,
        cumulative_status=cs,
        time_code_in=tci,
        time_code_out=tco,
        vertical_position=vp,
        justification_code=jc,
        comment_flag=cf,
        text_field=tf,
        character_code_table=cct,
    )


def parse_tti_blocks(
    buffer: io.BytesIO, cct: CharacterCodeTable = CharacterCodeTable.LATIN
) -> List[TTIBlock]:
    """
    Parse 128-byte TTI blocks until the buffer is exhausted.

    Running out of data exactly on a block boundary ends the list; a
    trailing partial block raises STLIncompleteError.
    """
    cursor = ByteCursor(buffer)
    blocks: List[TTIBlock] = []
    while cursor.remaining():
        blocks.append(parse_tti_block(cursor, cct))
    return blocks


def serialize_tti(tti: TTIBlock) -> bytes:
    """Pack a TTI block into exactly 128 bytes."""
    return b"".join(
        [
            bytes([tti.subtitle_group_number]),
            struct.pack("<H", tti.subtitle_number),
            bytes([tti.extension_block_number, tti.cumulative_status]),
            tti.time_code_in.serialize(),
            tti.time_code_out.serialize(),
            bytes([tti.vertical_position, tti.justification_code, tti.comment_flag]),
            tti.text_field,
        ]
    )
