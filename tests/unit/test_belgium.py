from __future__ import annotations

import pytest

from payref.reference.belgium import belgian_check_value, normalize_belgian, parse_belgian, validate_belgian
from payref.reference.outcome import ErrorKind, MalformedReference, Scheme
from payref.reference.settings import ValidationSettings


def test_normalize_removes_markers_and_slashes_anywhere() -> None:
    assert normalize_belgian("  +++090/9337/55493+++ ") == "090933755493"
    assert normalize_belgian("***090/9337/55493***") == "090933755493"
    assert normalize_belgian("+++090/93***37/55493") == "090933755493"


@pytest.mark.parametrize(
    "body, expected",
    [
        ("0909337554", "93"),
        ("0123456789", "39"),
        ("0000000105", "08"),
        ("0000000000", "97"),
        ("0000000097", "97"),
        ("1234567890", "02"),
    ],
)
def test_belgian_check_value(body: str, expected: str) -> None:
    assert belgian_check_value(body) == expected


@pytest.mark.parametrize(
    "value",
    [
        "+++090/9337/55493+++",
        "***090/9337/55493***",
        "+++012/3456/78939+++",
        "+++000/0000/10508+++",
        "+++000/0000/09797+++",
        "+++090/9337/55493+++   ",
    ],
)
def test_valid_references(value: str) -> None:
    out = validate_belgian(value)
    assert out.valid is True
    assert out.error_message is None
    assert out.scheme is Scheme.BELGIUM


def test_wrong_check_is_mismatch() -> None:
    out = validate_belgian("+++090/9337/55494+++")
    assert out.valid is False
    assert out.error_kind is ErrorKind.CHECKSUM_MISMATCH
    assert out.error_message == "The payment reference is not a valid reference in Belgium"


def test_remainder_zero_is_not_written_as_00() -> None:
    out = validate_belgian("+++000/0000/09700+++")
    assert out.error_kind is ErrorKind.CHECKSUM_MISMATCH


@pytest.mark.parametrize("value", ["", "+++", "+++***", "+++090/9337/554+++", "+++09A/9337/55493+++"])
def test_malformed_inputs_fail_without_raising(value: str) -> None:
    out = validate_belgian(value)
    assert out.valid is False
    assert out.error_kind is ErrorKind.MALFORMED_INPUT
    assert "Belgium" in out.error_message


def test_parse_splits_body_and_check() -> None:
    ref = parse_belgian("+++090/9337/55493+++")
    assert ref.body == "0909337554"
    assert ref.check == "93"


def test_trailing_digits_rejected_in_strict_mode_only() -> None:
    value = "+++090/9337/554931+++"
    with pytest.raises(MalformedReference):
        parse_belgian(value)

    lenient = ValidationSettings(strict_length=False)
    assert validate_belgian(value, lenient).valid is True


def test_round_trip_with_computed_check() -> None:
    for body in ("0000000001", "5555555555", "9999999999"):
        value = f"+++{body}{belgian_check_value(body)}+++"
        assert validate_belgian(value).valid is True
