"""
STLDocument - EBU STL (.stl) binary reader and writer.

Supports EBU TECH 3264-E (EBU STL file) format:
- GSI block (first 1024 bytes): encoding selection and programme metadata
- TTI blocks (128 bytes each, at least one): timing, layout and text

Parsing is all-or-nothing: the first invalid field raises an STLParseError
and no partial document is returned. Serializing a parsed document gives
back the same bytes, field for field.

    doc = parse_stl(raw)
    doc.add_subtitle(Time(0, 0, 1, 0), Time(0, 0, 3, 0), "Hello")
    raw = doc.serialize()
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ebustl_codec.models import Time, TTIFormat
from ebustl_codec.STLDocument.exceptions import (
    STLCapacityError,
    STLIncompleteError,
    STLIOError,
)
from ebustl_codec.STLDocument.parsers.gsi_parser import (
    GSI_SIZE,
    GSIBlock,
    parse_gsi,
    serialize_gsi,
)
from ebustl_codec.STLDocument.parsers.tti_parser import (
    MAX_SUBTITLE_NUMBER,
    TTIBlock,
    parse_tti_blocks,
    serialize_tti,
)


@dataclass
class STLDocument:
    """One GSI block followed by TTI blocks in presentation order."""

    gsi: GSIBlock = field(default_factory=GSIBlock)
    ttis: List[TTIBlock] = field(default_factory=list)

    # --------------------------------------------------------------------- #
    # Public API
    # --------------------------------------------------------------------- #
    @classmethod
    def parse(cls, raw: bytes) -> STLDocument:
        """
        Parse STL binary bytes into a document.
        """
        buffer = io.BytesIO(raw)

        # GSI block (first 1024 bytes)
        gsi = parse_gsi(buffer.read(GSI_SIZE))

        # TTI blocks (remaining 128-byte records)
        ttis = parse_tti_blocks(buffer, gsi.character_code_table)
        if not ttis:
            raise STLIncompleteError("no TTI blocks after the GSI block")

        return cls(gsi=gsi, ttis=ttis)

    def add_subtitle(
        self,
        time_code_in: Time,
        time_code_out: Time,
        text: str,
        fmt: Optional[TTIFormat] = None,
    ) -> TTIBlock:
        """
        Append a subtitle and update the GSI counters.

        The new block's subtitle number is the updated TTI block count, so
        the first subtitle of a fresh document is number 1. Text that does
        not fit the text field is truncated; the returned block then has
        `truncated` set and an STLTextTruncatedWarning is emitted.
        STLCapacityError is raised, before anything changes, once the
        subtitle number would no longer fit its 16-bit field.
        """
        if self.gsi.total_number_of_tti_blocks >= MAX_SUBTITLE_NUMBER:
            raise STLCapacityError(
                f"Subtitle number {self.gsi.total_number_of_tti_blocks + 1} does not "
                f"fit the 16-bit SN field"
            )
        self.gsi.total_number_of_tti_blocks += 1
        tti = TTIBlock.new(
            self.gsi.total_number_of_tti_blocks,
            time_code_in,
            time_code_out,
            text,
            fmt or TTIFormat(),
            self.gsi.character_code_table,
        )
        self.gsi.total_number_of_subtitles += 1
        self.ttis.append(tti)
        return tti

    def serialize(self) -> bytes:
        """GSI bytes followed by every TTI block, 1024 + 128 * N bytes."""
        return serialize_gsi(self.gsi) + b"".join(serialize_tti(t) for t in self.ttis)

    def write_to_file(self, path: str) -> None:
        data = self.serialize()
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise STLIOError(f"Could not write STL file {path}: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        fps = self.gsi.frame_rate
        return {
            "captions": [t.to_dict(fps) for t in self.ttis],
            "fps": fps,
            "gsi": self.gsi.to_dict(),
        }

    def __str__(self) -> str:
        lines = [
            f"Programme Title: {self.gsi.original_programme_title}",
            f"Episode Title: {self.gsi.original_episode_title}",
            f"cct: {self.gsi.character_code_table.name} lc: {self.gsi.language_code}",
        ]
        for tti in self.ttis:
            lines.append(
                f"{tti.time_code_in} --> {tti.time_code_out} sn:{tti.subtitle_number} "
                f"cs:{tti.cumulative_status.name} [{tti.text!r}]"
            )
        return "\n".join(lines)


def parse_stl(raw: bytes) -> STLDocument:
    return STLDocument.parse(raw)


def serialize_stl(document: STLDocument) -> bytes:
    return document.serialize()


def parse_stl_from_file(path: str) -> STLDocument:
    """Read a whole file into memory and parse it."""
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise STLIOError(f"Could not read STL file {path}: {e}") from e
    return STLDocument.parse(raw)
