"""
Tests for the P<date>T<time> duration codec.

Covers: canonical encoding, permissive decoding, round trips,
and rejection of malformed input.
"""

import os
import pytest

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../src"))

from nanomeasure.core.codec import decode, encode
from nanomeasure.core.duration import Duration
from nanomeasure.core.errors import (
    DurationSyntaxError,
    IntErrorKind,
    MeasureError,
    MeasureOverflow,
    ParseIntError,
)
from nanomeasure.core.measurement import Measurement


def total(*durations):
    """Sum durations into a single Measurement."""
    result = Measurement.zero()
    for duration in durations:
        result = result + Measurement(duration)
    return result


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

class TestEncode:
    def test_zero(self):
        assert encode(Measurement.zero()) == "P0DT0H0M0S"

    def test_hours_and_minutes(self):
        assert encode(total(Duration.hours(3), Duration.minutes(3))) == "P0DT3H3M0S"

    def test_every_field_is_emitted(self):
        assert encode(total(Duration.days(2), Duration.hours(5), Duration.seconds(7))) \
            == "P2DT5H0M7S"

    def test_weeks_are_emitted_as_days(self):
        assert encode(total(Duration.weeks(2))) == "P14DT0H0M0S"

    def test_hours_do_not_roll_into_days_twice(self):
        assert encode(total(Duration.hours(49))) == "P2DT1H0M0S"

    def test_sub_second_remainder_is_truncated(self):
        assert encode(total(Duration.milliseconds(61_999))) == "P0DT0H1M1S"

    def test_negative_components_carry_sign(self):
        assert encode(total(Duration.seconds(-3_661))) == "P0DT-1H-1M-1S"


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

class TestDecode:
    def test_canonical_string(self):
        assert decode("P0DT3H3M0S") == total(Duration.hours(3), Duration.minutes(3))

    @pytest.mark.parametrize("text, expected", [
        ("PT", Measurement.zero()),
        ("P0DT", Measurement.zero()),
        ("P1WT", total(Duration.days(7))),
        ("P1W2DT3S", total(Duration.weeks(1), Duration.days(2), Duration.seconds(3))),
        ("PT90M", total(Duration.minutes(90))),
        ("P1D1DT", total(Duration.days(2))),
        ("P2HT1D", total(Duration.hours(2), Duration.days(1))),
        ("PT5S4H", total(Duration.seconds(5), Duration.hours(4))),
        ("PT007S", total(Duration.seconds(7))),
    ])
    def test_permissive_grammar(self, text, expected):
        assert decode(text) == expected

    @pytest.mark.parametrize("text", [
        "X0DT0H0M0S",
        "",
        "p0dt0h0m0s",
        "0DT0H0M0S",
    ])
    def test_missing_leading_p(self, text):
        with pytest.raises(DurationSyntaxError):
            decode(text)

    @pytest.mark.parametrize("text", ["P", "P0D", "P0D0H0M0S"])
    def test_missing_time_designator(self, text):
        with pytest.raises(DurationSyntaxError):
            decode(text)

    def test_unknown_unit_letter(self):
        with pytest.raises(DurationSyntaxError) as excinfo:
            decode("P0DT0Z0M0S")
        assert "'Z'" in str(excinfo.value)

    def test_lowercase_unit_is_unknown(self):
        with pytest.raises(DurationSyntaxError):
            decode("P0dT0H")

    def test_missing_unit_letter(self):
        with pytest.raises(DurationSyntaxError):
            decode("P0DT5")

    def test_non_digit_count_is_a_numeric_error(self):
        with pytest.raises(ParseIntError) as excinfo:
            decode("P0DTXH")
        assert excinfo.value.kind is IntErrorKind.EMPTY

    def test_signed_count_is_rejected(self):
        with pytest.raises(ParseIntError):
            decode("PT-5S")

    def test_count_beyond_64_bits(self):
        with pytest.raises(ParseIntError) as excinfo:
            decode("P99999999999999999999DT")
        assert excinfo.value.kind is IntErrorKind.OVERFLOW

    def test_long_zero_padded_count_is_accepted(self):
        assert decode("PT" + "0" * 5_000 + "1S") == total(Duration.seconds(1))

    def test_very_long_count_is_an_overflow(self):
        with pytest.raises(ParseIntError) as excinfo:
            decode("PT" + "9" * 5_000 + "S")
        assert excinfo.value.kind is IntErrorKind.OVERFLOW

    def test_single_token_out_of_range(self):
        with pytest.raises(MeasureOverflow):
            decode("P9223372036854775807WT")

    def test_accumulated_total_out_of_range(self):
        assert decode("P106751991167DT") == total(Duration.days(106_751_991_167))
        with pytest.raises(MeasureOverflow):
            decode("P106751991167D106751991167DT")

    def test_all_failures_are_measure_errors(self):
        for text in ("X", "PXT", "P1QT", "P106751991167D106751991167DT"):
            with pytest.raises(MeasureError):
                decode(text)

    def test_failures_are_value_errors_except_overflow(self):
        with pytest.raises(ValueError):
            decode("P0DT0Z0M0S")
        with pytest.raises(OverflowError):
            decode("P9223372036854775807WT")


# ---------------------------------------------------------------------------
# Round trips
# ---------------------------------------------------------------------------

class TestRoundTrip:
    @pytest.mark.parametrize("value", [
        Measurement.zero(),
        total(Duration.seconds(59)),
        total(Duration.days(3), Duration.hours(4), Duration.minutes(5), Duration.seconds(6)),
        total(Duration.weeks(3), Duration.seconds(1)),
        total(Duration.seconds(10**12)),
    ])
    def test_decode_inverts_encode(self, value):
        assert decode(encode(value)) == value

    def test_sub_second_precision_is_lost(self):
        value = total(Duration.seconds(5), Duration.milliseconds(250))
        assert decode(encode(value)) == total(Duration.seconds(5))

    @pytest.mark.parametrize("text", [
        "P0DT0H0M0S",
        "P0DT3H3M0S",
        "P21DT0H0M1S",
        "P365DT23H59M59S",
    ])
    def test_reencoding_canonical_strings_is_idempotent(self, text):
        assert encode(decode(text)) == text

    def test_reencoding_normalizes_hand_written_input(self):
        assert encode(decode("P1WT90M")) == "P7DT1H30M0S"
