"""Tests for report value formatting."""

import pytest

from sysdive.reporters.formatting import (
    BYTE_UNITS,
    RULE,
    field_line,
    format_bytes,
    format_number,
    header,
    show,
    subheader,
    with_unit,
    yes_no,
)


class TestFormatBytes:
    def test_one_kilobyte(self):
        assert format_bytes(1024) == "1 KB"

    def test_fractional_kilobytes(self):
        assert format_bytes(1536) == "1.5 KB"

    def test_zero(self):
        assert format_bytes(0) == "0 Bytes"

    def test_none(self):
        assert format_bytes(None) == "N/A"

    def test_small_count_stays_in_bytes(self):
        assert format_bytes(512) == "512 Bytes"
        assert format_bytes(1) == "1 Bytes"

    def test_gigabytes(self):
        assert format_bytes(16 * 1024**3) == "16 GB"

    def test_rounds_to_two_decimals(self):
        # 1000 * 1000 * 1000 bytes = 953.674... MB
        assert format_bytes(1_000_000_000) == "953.67 MB"

    def test_trailing_zero_dropped(self):
        # 1.1 KB exactly is not representable; 1.10 must not keep the zero
        assert format_bytes(1126.4) == "1.1 KB"

    def test_petabytes(self):
        assert format_bytes(3 * 1024**5) == "3 PB"

    def test_beyond_table_clamps_to_petabytes(self):
        assert format_bytes(2048 * 1024**5) == "2048 PB"

    def test_rounding_carries_into_next_unit(self):
        assert format_bytes(1024**2 - 1) == "1 MB"

    @pytest.mark.parametrize("num_bytes", [1, 1023, 1024, 5000, 10**6, 10**9, 123456789012, 10**15])
    def test_magnitude_in_range(self, num_bytes):
        value, unit = format_bytes(num_bytes).split(" ")
        assert unit in BYTE_UNITS
        assert 1 <= float(value) < 1024


class TestFormatNumber:
    def test_integral_float(self):
        assert format_number(3.0) == "3"

    def test_plain_float(self):
        assert format_number(2.5) == "2.5"

    def test_int(self):
        assert format_number(42) == "42"

    def test_places_half_up(self):
        assert format_number(0.125, places=2) == "0.13"

    def test_places_strips_zeros(self):
        assert format_number(2.0, places=2) == "2"
        assert format_number(100.0, places=2) == "100"


class TestShow:
    def test_none(self):
        assert show(None) == "N/A"

    def test_empty_string(self):
        assert show("") == "N/A"

    def test_zero_is_not_missing(self):
        assert show(0) == "0"
        assert show(0.0) == "0"

    def test_string_passthrough(self):
        assert show("x86_64") == "x86_64"

    def test_float(self):
        assert show(4.7) == "4.7"

    def test_whitespace_is_a_value(self):
        assert show(" ") == " "


class TestYesNo:
    def test_defaults(self):
        assert yes_no(True) == "Yes"
        assert yes_no(False) == "No"
        assert yes_no(None) == "No"

    def test_custom_pair(self):
        assert yes_no(True, yes="Supported") == "Supported"
        assert yes_no(True, yes="Yes (Primary)") == "Yes (Primary)"


class TestLayout:
    def test_header(self):
        assert header("BLUETOOTH") == f"\n{'=' * 60}\n[ BLUETOOTH ]\n{'=' * 60}\n"
        assert len(RULE) == 60

    def test_subheader(self):
        assert subheader("CPU CACHE") == "\n--- CPU CACHE ---\n"

    def test_field_line_top_level(self):
        assert field_line("Manufacturer", "LENOVO") == "Manufacturer : LENOVO\n"
        assert field_line("Model", "21CB") == "Model        : 21CB\n"

    def test_field_line_indented(self):
        assert field_line("Size", "8 GB", indent="  ") == "  Size       : 8 GB\n"
        assert field_line("Clock Speed", "5200 MHz", indent="  ") == "  Clock Speed: 5200 MHz\n"

    def test_with_unit(self):
        assert with_unit(5200, " MHz") == "5200 MHz"
        assert with_unit(None, " MHz") == "N/A MHz"
