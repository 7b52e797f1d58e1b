import pytest

from prusa_connect_exporter.duration import (
    MAX_DURATION,
    DurationOverflowError,
    DurationParseError,
    MissingUnitError,
    MissingValueError,
    UnknownUnitError,
    parse_duration,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("", 0),
        ("1h", 3600),
        ("1h 30m 5s", 5405),
        ("2h 5m", 7500),
        ("1d", 86400),
        ("1h30m", 5400),
        ("30s 40s", 70),
        ("  15m", 900),
        ("0s", 0),
        ("007m", 420),
    ],
)
def test_parse_duration_valid(value: str, expected: int) -> None:
    assert parse_duration(value) == expected


def test_parse_duration_is_repeatable() -> None:
    assert parse_duration("3h 2m 1s") == parse_duration("3h 2m 1s") == 10921


def test_unknown_unit_reports_unit() -> None:
    with pytest.raises(UnknownUnitError) as excinfo:
        parse_duration("5x")

    assert excinfo.value.unit == "x"
    assert excinfo.value.value == "5x"
    assert 'unknown unit "x"' in str(excinfo.value)


@pytest.mark.parametrize("value", ["1H", "10min", "1ms", "2h 5M", "1.5h"])
def test_unit_text_must_match_exactly(value: str) -> None:
    with pytest.raises(UnknownUnitError):
        parse_duration(value)


@pytest.mark.parametrize("value", ["abc", " ", "h", "1h m", "-5s"])
def test_missing_value(value: str) -> None:
    with pytest.raises(MissingValueError):
        parse_duration(value)


@pytest.mark.parametrize("value", ["5", "1h 30", "5 s"])
def test_missing_unit(value: str) -> None:
    with pytest.raises(MissingUnitError):
        parse_duration(value)


def test_tabs_are_not_separators() -> None:
    with pytest.raises(UnknownUnitError):
        parse_duration("1h\t5m")


def test_maximum_total_is_accepted() -> None:
    assert parse_duration(f"{MAX_DURATION}s") == MAX_DURATION


def test_token_after_maximum_total_overflows() -> None:
    with pytest.raises(DurationOverflowError):
        parse_duration(f"{MAX_DURATION}s 1s")


def test_oversized_number_overflows() -> None:
    with pytest.raises(DurationOverflowError):
        parse_duration(f"{MAX_DURATION + 1}s")

    with pytest.raises(DurationOverflowError):
        parse_duration("9" * 30 + "s")


def test_scaled_value_overflows() -> None:
    with pytest.raises(DurationOverflowError):
        parse_duration(f"{MAX_DURATION // 60 + 1}m")


def test_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        parse_duration("soon")

    assert issubclass(DurationOverflowError, DurationParseError)
