import warnings

import pytest
from ebustl_codec.models import (
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
    STLFieldError,
    STLIncompleteError,
    STLParseError,
    STLTextTruncatedWarning,
    TimeCodeStatusError,
)
from ebustl_codec.STLDocument.parsers.gsi_parser import (
    GSIBlock,
    decode_language_code,
    parse_gsi,
    serialize_gsi,
)
from helpers_for_testing import make_gsi_block


# =============================================================================
# Tests for decode_language_code
# =============================================================================


class TestDecodeLanguageCode:
    """Tests for EBU language code decoding."""

    def test_decode_english_code(self):
        """Should decode 0x09 as English (en)."""
        assert decode_language_code("09") == "en"

    def test_decode_french_code(self):
        """Should decode 0x0F as French (fr)."""
        assert decode_language_code("0F") == "fr"

    def test_decode_lowercase_hex(self):
        """Should handle lowercase hex values."""
        assert decode_language_code("0f") == "fr"

    def test_decode_unknown_code_returns_empty(self):
        """Should return empty string for unknown code 0x00."""
        assert decode_language_code("00") == ""

    def test_decode_empty_returns_none(self):
        """Should return None for an empty field."""
        assert decode_language_code("  ") is None

    def test_decode_invalid_hex_returns_none(self):
        """Should return None for invalid hex string."""
        assert decode_language_code("ZZ") is None


# =============================================================================
# Tests for parse_gsi - Fields
# =============================================================================


class TestParseGsi:
    """Tests for GSI block parsing."""

    def test_parse_coded_fields(self):
        """Should map coded fields to their enum members."""
        gsi = parse_gsi(make_gsi_block(cpn=b"865", dfc=b"STL30.01", cct=b"03"))

        assert gsi.code_page_number is CodePageNumber.CPN_865
        assert gsi.disk_format_code is DiskFormatCode.STL30_01
        assert gsi.display_standard_code is DisplayStandardCode.LEVEL_1_TELETEXT
        assert gsi.character_code_table is CharacterCodeTable.LATIN_GREEK
        assert gsi.time_code_status is TimeCodeStatus.INTENDED_FOR_USE

    def test_parse_text_fields_without_padding(self):
        """Text fields should be returned without their space padding."""
        gsi = parse_gsi(make_gsi_block(title=b"My Title", episode_title=b"Ep 1"))

        assert gsi.original_programme_title == "My Title"
        assert gsi.original_episode_title == "Ep 1"
        assert gsi.translated_programme_title == ""
        assert gsi.country_of_origin == "FRA"
        assert gsi.creation_date == "240101"
        assert gsi.time_code_start_of_programme == "10000000"

    def test_parse_counters(self):
        """Counters should be parsed as integers."""
        gsi = parse_gsi(make_gsi_block(tnb=b"00123", tns=b"00120", tng=b"002"))

        assert gsi.total_number_of_tti_blocks == 123
        assert gsi.total_number_of_subtitles == 120
        assert gsi.total_number_of_subtitle_groups == 2
        assert gsi.maximum_number_of_displayable_characters == 40
        assert gsi.maximum_number_of_displayable_rows == 23
        assert gsi.total_number_of_disks == 1
        assert gsi.disk_sequence_number == 1

    def test_text_decoded_with_code_page(self):
        """Text fields should be decoded with the code page, not the CCT."""
        gsi = parse_gsi(make_gsi_block(cpn=b"850", cct=b"01", title=b"Caf\x82"))

        assert gsi.original_programme_title == "Café"

    def test_language_and_frame_rate(self):
        """Derived helpers should expose language and frame-rate."""
        gsi = parse_gsi(make_gsi_block(language_code=b"0F", dfc=b"STL30.01"))

        assert gsi.language == "fr"
        assert gsi.frame_rate == 30
        assert isinstance(gsi.frame_rate, int)

    def test_to_dict(self):
        """to_dict should expose the commonly useful fields."""
        info = parse_gsi(make_gsi_block(title=b"Title")).to_dict()

        assert info["disk_format_code"] == "STL25.01"
        assert info["title"] == "Title"
        assert info["character_code_table"] == "00"
        assert info["language"] == "en"
        assert info["frame_rate"] == 25


# =============================================================================
# Tests for parse_gsi - Validation
# =============================================================================


class TestParseGsiValidation:
    """Tests for GSI field validation failures."""

    def test_unsupported_code_page(self):
        """Code page 999 should fail with the Code Page Number error."""
        with pytest.raises(CodePageNumberError) as exc_info:
            parse_gsi(make_gsi_block(cpn=b"999"))

        assert exc_info.value.value == 999

    def test_non_numeric_code_page(self):
        """A non-numeric code page should fail with the Code Page Number error."""
        with pytest.raises(CodePageNumberError, match="Code Page Number"):
            parse_gsi(make_gsi_block(cpn=b"abc"))

    def test_unknown_disk_format_code(self):
        """Unknown DFC should fail and report the offending string."""
        with pytest.raises(DiskFormatCodeError, match="STL24.01"):
            parse_gsi(make_gsi_block(dfc=b"STL24.01"))

    def test_unknown_display_standard_code(self):
        """DSC outside blank/0/1/2 should fail."""
        with pytest.raises(DisplayStandardCodeError):
            parse_gsi(make_gsi_block(dsc=0x33))

    @pytest.mark.parametrize("cct", [b"05", b"10", b"  "])
    def test_unknown_character_code_table(self, cct):
        """CCT outside 00-04 should fail."""
        with pytest.raises(CharacterCodeTableError):
            parse_gsi(make_gsi_block(cct=cct))

    def test_unknown_time_code_status(self):
        """TCS other than '0' or '1' should fail."""
        with pytest.raises(TimeCodeStatusError):
            parse_gsi(make_gsi_block(tcs=0x32))

    def test_non_numeric_counter(self):
        """A counter containing spaces should fail naming the field."""
        with pytest.raises(STLFieldError) as exc_info:
            parse_gsi(make_gsi_block(tnb=b" 0001"))

        assert exc_info.value.field == "total_number_of_tti_blocks"

    def test_non_numeric_disk_count(self):
        """Single-digit fields should be validated as digits."""
        with pytest.raises(STLFieldError, match="total_number_of_disks"):
            parse_gsi(make_gsi_block(tnd=b"x"))

    def test_short_block_is_incomplete(self):
        """Fewer than 1024 bytes should fail as incomplete."""
        with pytest.raises(STLIncompleteError, match="GSI block must be 1024 bytes"):
            parse_gsi(make_gsi_block()[:1000])

    def test_errors_are_value_errors(self):
        """Parse errors should be catchable as ValueError."""
        with pytest.raises(ValueError):
            parse_gsi(b"")
        assert issubclass(CodePageNumberError, STLParseError)


# =============================================================================
# Tests for serialize_gsi
# =============================================================================


class TestSerializeGsi:
    """Tests for GSI block serialization."""

    def test_round_trip_is_byte_identical(self):
        """Parsing then serializing should reproduce the original bytes."""
        raw = make_gsi_block(cpn=b"437", cct=b"04", title=b"\x82t\x82", publisher=b"Pub")

        assert serialize_gsi(parse_gsi(raw)) == raw

    def test_default_block_layout(self):
        """A default block should carry the documented defaults at fixed offsets."""
        raw = serialize_gsi(GSIBlock(creation_date="240102", revision_date="240103"))

        assert len(raw) == 1024
        assert raw[0:3] == b"850"
        assert raw[3:11] == b"STL25.01"
        assert raw[11] == 0x31
        assert raw[12:14] == b"00"
        assert raw[14:16] == b"0F"
        assert raw[224:238] == b"24010224010300"
        assert raw[238:255] == b"00000000000014023"
        assert raw[255] == 0x31
        assert raw[256:274] == b"000000000000000011"
        assert raw[274:] == b" " * 750

    def test_text_fields_are_space_padded(self):
        """Short text should be right-padded with spaces."""
        raw = serialize_gsi(GSIBlock(original_programme_title="Short"))

        assert raw[16:48] == b"Short" + b" " * 27

    def test_text_encoded_with_code_page(self):
        """Text should be encoded with the code page."""
        raw = serialize_gsi(
            GSIBlock(code_page_number=CodePageNumber.CPN_850, publisher="é")
        )

        assert raw[277] == 0x82

    def test_oversized_text_is_truncated_with_warning(self):
        """Over-long text should be cut to its width and keep the block 1024 bytes."""
        with pytest.warns(STLTextTruncatedWarning, match="original_programme_title"):
            raw = serialize_gsi(GSIBlock(original_programme_title="x" * 40))

        assert len(raw) == 1024
        assert raw[16:48] == b"x" * 32
        assert raw[48:80] == b" " * 32

    def test_oversized_counter_is_clamped_with_warning(self):
        """A counter wider than its field should be clamped."""
        with pytest.warns(STLTextTruncatedWarning, match="total_number_of_subtitle_groups"):
            raw = serialize_gsi(GSIBlock(total_number_of_subtitle_groups=1000))

        assert raw[248:251] == b"999"

    def test_fitting_fields_do_not_warn(self):
        """Serializing a default block should not emit warnings."""
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            serialize_gsi(GSIBlock())

        assert len(w) == 0
