"""Format registry, dispatch and public API tests."""

import logging
from collections.abc import Iterator
from typing import get_type_hints

import pytest

import pystardate
from pystardate import (
    FORMATS,
    BatchResult,
    CalendarDate,
    CodecName,
    IntermediateTime,
    InvalidPrecisionError,
    MalformedDateError,
    Outcome,
    Result,
    UnknownFormatError,
    UnrecognizedDateError,
    ValueOutOfRangeError,
    convert,
    convert_all,
    decode,
    encode,
    from_gregorian,
    get_format,
)
from pystardate._constants import TNG_EPOCH, UNIX_EPOCH
from pystardate._dispatch import decode_token, select_formats

VALID_TOKENS = {
    "[47]12345.67": CodecName.STARDATE,
    "[-30]0458.96": CodecName.STARDATE,
    "2023=06=02T12:30:45": CodecName.JULIAN,
    "2023-06-15T12:30:45": CodecName.GREGORIAN,
    "2023*06*15": CodecName.QUADCENT,
    "U1686832245": CodecName.UNIX,
    "u-0xff": CodecName.UNIX,
}


class TestRegistry:
    def test_selectors_in_order(self):
        assert [f.selector for f in FORMATS] == ["s", "j", "g", "q", "u", "x"]

    def test_hex_is_output_only(self):
        assert [f.selector for f in FORMATS if not f.decodes] == ["x"]

    @pytest.mark.parametrize(
        "key, name",
        [
            ("s", CodecName.STARDATE),
            ("j", CodecName.JULIAN),
            ("g", CodecName.GREGORIAN),
            ("q", CodecName.QUADCENT),
            ("u", CodecName.UNIX),
            ("x", CodecName.UNIX_HEX),
            ("gregorian", CodecName.GREGORIAN),
            ("unix-hex", CodecName.UNIX_HEX),
        ],
    )
    def test_get_format(self, key, name):
        assert get_format(key).name == name

    def test_unknown_format(self):
        with pytest.raises(UnknownFormatError) as exc_info:
            get_format("z")
        assert "'z'" in exc_info.value.internal()

    def test_select_formats_registry_order(self):
        assert [f.selector for f in select_formats("gxs")] == ["s", "g", "x"]

    def test_select_formats_duplicates(self):
        assert [f.selector for f in select_formats(["g", "gregorian", "g"])] == ["g"]

    def test_select_formats_default(self):
        assert [f.selector for f in select_formats(())] == ["s"]


class TestGrammarExclusivity:
    @pytest.mark.parametrize("token, source", VALID_TOKENS.items())
    def test_exactly_one_decoder(self, token, source):
        accepted = [f.name for f in FORMATS if f.decodes and f.codec.decode(token) is not None]
        assert accepted == [source]

    @pytest.mark.parametrize("token, source", VALID_TOKENS.items())
    def test_decode_token(self, token, source):
        fmt, _ = decode_token(token)
        assert fmt.name == source

    @pytest.mark.parametrize("token", ["garbage", "", "2023/06/15", "1686832245", "[47", "47]1"])
    def test_unmatched_everywhere(self, token):
        assert all(f.codec.decode(token) is None for f in FORMATS)
        with pytest.raises(UnrecognizedDateError) as exc_info:
            decode_token(token)
        assert exc_info.value.token == token


class TestConvert:
    def test_multiple_outputs(self):
        result = convert("U0", formats="sjg")
        assert result.ok
        assert result.outcome is Outcome.SUCCESS
        assert result.outputs == ("[-36]9350.00", "1969=12=19T00:00:00", "1970-01-01T00:00:00")
        assert result.source == CodecName.UNIX
        assert result.time == IntermediateTime(UNIX_EPOCH)

    def test_outputs_follow_registry_order(self):
        assert convert("U0", formats="gs").outputs == ("[-36]9350.00", "1970-01-01T00:00:00")

    def test_line(self):
        assert convert("U0", formats="ux").line == "U0 U0x0"

    def test_default_format(self):
        assert convert("2323-01-01").outputs == ("[21]00000.00",)

    def test_empty_selection_uses_default(self):
        assert convert("2323-01-01", formats="").outputs == ("[21]00000.00",)

    def test_precision(self):
        assert convert("[47]12345.678901", precision=6).outputs == ("[47]12345.678901",)
        assert convert("[47]12345.678901", precision=0).outputs == ("[47]12345",)

    def test_unmatched(self):
        result = convert("garbage")
        assert not result.ok
        assert result.outcome is Outcome.UNMATCHED
        assert result.outputs == ()
        assert isinstance(result.error, UnrecognizedDateError)

    def test_out_of_range(self):
        result = convert("2023-13-01")
        assert result.outcome is Outcome.OUT_OF_RANGE
        assert result.error.field == "month"
        assert str(result.error) == "month is out of range"

    def test_malformed_is_out_of_range(self):
        result = convert("U12x")
        assert result.outcome is Outcome.OUT_OF_RANGE
        assert isinstance(result.error, MalformedDateError)

    def test_invalid_precision_raises(self):
        with pytest.raises(InvalidPrecisionError):
            convert("U0", precision=7)
        with pytest.raises(InvalidPrecisionError):
            convert("garbage", precision=-1)

    def test_unknown_format_raises(self):
        with pytest.raises(UnknownFormatError):
            convert("U0", formats="sz")

    def test_logs_rejection(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="pystardate._dispatch"):
            convert("2023-13-01")
        assert "month is out of range: 2023-13-01" in caplog.text

    @pytest.mark.parametrize(
        "token, field",
        [
            ("[" + "1" * 5000 + "]0000", "date"),
            ("[21]" + "1" * 5000, "integer"),
            ("2023-01-01T" + "1" * 5000 + ":00", "hour"),
        ],
    )
    def test_oversized_digits_out_of_range(self, token, field):
        result = convert(token)
        assert result.outcome is Outcome.OUT_OF_RANGE
        assert result.error.field == field


class TestConvertAll:
    def test_failures_do_not_stop_batch(self):
        batch = convert_all(["garbage", "U0", "[20]5006"], formats="g")
        assert len(batch) == 3
        assert batch.failed
        outcomes = [r.outcome for r in batch]
        assert outcomes == [Outcome.UNMATCHED, Outcome.SUCCESS, Outcome.OUT_OF_RANGE]
        assert batch.results[1].outputs == ("1970-01-01T00:00:00",)

    def test_oversized_digits_do_not_stop_batch(self):
        batch = convert_all(["[21]" + "1" * 5000, "U0"], formats="u")
        assert [r.outcome for r in batch] == [Outcome.OUT_OF_RANGE, Outcome.SUCCESS]
        assert batch.results[1].line == "U0"

    def test_all_succeed(self):
        batch = convert_all(["U0", "[0]0000"])
        assert not batch.failed

    def test_empty(self):
        batch = convert_all([])
        assert len(batch) == 0
        assert not batch.failed

    def test_formats_iterator_reused(self):
        batch = convert_all(["U0", "U1"], formats=iter("u"))
        assert [r.line for r in batch] == ["U0", "U1"]

    def test_iterates_results(self):
        batch = convert_all(["U0"])
        assert all(isinstance(r, Result) for r in batch)
        assert get_type_hints(BatchResult.__iter__)["return"] == Iterator[Result]


class TestPublicApi:
    def test_decode(self):
        assert decode("U0x0") == IntermediateTime(UNIX_EPOCH)

    def test_decode_unrecognised(self):
        with pytest.raises(UnrecognizedDateError):
            decode("garbage")

    def test_decode_out_of_range(self):
        with pytest.raises(ValueOutOfRangeError) as exc_info:
            decode("[19]10000")
        assert exc_info.value.field == "integer"

    def test_encode(self):
        time = IntermediateTime(UNIX_EPOCH)
        assert encode(time) == "[-36]9350.00"
        assert encode(time, "gregorian") == "1970-01-01T00:00:00"
        assert encode(time, "x") == "U0x0"

    def test_encode_precision(self):
        assert encode(IntermediateTime(TNG_EPOCH), precision=0) == "[21]00000"
        with pytest.raises(InvalidPrecisionError):
            encode(IntermediateTime(TNG_EPOCH), "g", precision=7)

    def test_encode_unknown_format(self):
        with pytest.raises(UnknownFormatError):
            encode(IntermediateTime(TNG_EPOCH), "z")

    def test_from_gregorian(self):
        assert from_gregorian(CalendarDate(1970, 1, 1)) == IntermediateTime(UNIX_EPOCH)

    def test_from_gregorian_validates(self):
        with pytest.raises(ValueOutOfRangeError):
            from_gregorian(CalendarDate(2023, 6, 15, 25))

    def test_readme_example(self):
        assert encode(decode("2323-01-01"), "s", precision=0) == "[21]00000"

    def test_version(self):
        assert isinstance(pystardate.__version__, str)

    def test_exports(self):
        for name in pystardate.__all__:
            assert hasattr(pystardate, name)
