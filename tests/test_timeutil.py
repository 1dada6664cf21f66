import pytest

from budgetmod.timeutil import Timestamp, date_ranges_overlap, parse_rfc3339


def test_parse_unix_epoch():
    assert parse_rfc3339("1970-01-01T00:00:00Z") == Timestamp(0)


def test_parse_far_future():
    assert parse_rfc3339("9999-12-31T00:00:00Z") == Timestamp(253402214400)


def test_parse_year_zero():
    assert parse_rfc3339("0000-01-01T00:00:00Z") == Timestamp(-62167219200)


def test_parse_error_case():
    with pytest.raises(ValueError):
        parse_rfc3339("9999-12-31T00:00:00_ErrorCase")


@pytest.mark.parametrize(
    "text",
    [
        "2021-13-01T00:00:00Z",
        "2021-02-29T00:00:00Z",
        "2021-12-01 00:00:00Z",
        "2021-12-01T24:00:00Z",
        "2021-12-01T00:60:00Z",
        "2021-12-01T00:00:00",
        "",
    ],
)
def test_parse_rejects_malformed(text):
    with pytest.raises(ValueError):
        parse_rfc3339(text)


def test_parse_leap_day():
    assert str(parse_rfc3339("2020-02-29T00:00:00Z")) == "2020-02-29T00:00:00Z"


def test_parse_offset_is_normalised():
    assert parse_rfc3339("2021-12-01T02:00:00+02:00") == parse_rfc3339(
        "2021-12-01T00:00:00Z"
    )


def test_parse_fraction():
    assert parse_rfc3339("2021-12-02T00:00:00.001Z").nanos == 1_000_000


@pytest.mark.parametrize(
    "text",
    [
        "0000-01-01T00:00:00Z",
        "9999-12-31T00:00:00Z",
        "2021-12-02T00:00:00.001Z",
        "2021-08-01T12:34:56Z",
    ],
)
def test_string_round_trip(text):
    assert str(parse_rfc3339(text)) == text


def test_ordering():
    assert parse_rfc3339("2021-12-02T00:00:00Z") < parse_rfc3339(
        "2021-12-02T00:00:00.001Z"
    )


def test_invalid_nanos():
    with pytest.raises(ValueError):
        Timestamp(0, 1_000_000_000)


@pytest.mark.parametrize(
    "expected,start_a,end_a,start_b,end_b",
    [
        (False, "2021-12-01T00:00:00Z", "2021-12-02T00:00:00Z", "2021-12-03T00:00:00Z", "2021-12-04T00:00:00Z"),
        (False, "2021-12-01T00:00:00Z", "2021-12-02T00:00:00Z", "2021-12-02T00:00:00Z", "2021-12-03T00:00:00Z"),
        (True, "2021-12-01T00:00:00Z", "2021-12-02T00:00:00.001Z", "2021-12-02T00:00:00Z", "2021-12-03T00:00:00Z"),
        (True, "2021-12-01T00:00:00Z", "2021-12-03T00:00:00Z", "2021-12-02T00:00:00Z", "2021-12-04T00:00:00Z"),
        (True, "2021-12-01T00:00:00Z", "2021-12-03T00:00:00Z", "2021-12-01T00:00:00Z", "2021-12-03T00:00:00Z"),
        (True, "2021-12-02T00:00:00Z", "2021-12-03T00:00:00Z", "2021-12-01T00:00:00Z", "2021-12-04T00:00:00Z"),
    ],
)
def test_date_ranges_overlap(expected, start_a, end_a, start_b, end_b):
    a = (parse_rfc3339(start_a), parse_rfc3339(end_a))
    b = (parse_rfc3339(start_b), parse_rfc3339(end_b))
    assert date_ranges_overlap(*a, *b) is expected
    assert date_ranges_overlap(*b, *a) is expected