import pytest

from aadhaar_ocr.text_cleaner import clean_locally


def test_collapses_whitespace_and_trims():
    assert clean_locally("  RAJ   KUMAR\n\tMALE \r\n") == "RAJ KUMAR MALE"


def test_groups_bare_aadhaar_number():
    assert clean_locally("UID 123456789012 issued") == "UID 1234 5678 9012 issued"


def test_regroups_number_split_across_lines():
    assert clean_locally("1234  5678\n9012") == "1234 5678 9012"


def test_only_first_number_is_grouped():
    assert clean_locally("111122223333 and 444455556666") == "1111 2222 3333 and 444455556666"


def test_thirteen_digits_left_alone():
    assert clean_locally("1234567890123") == "1234567890123"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("DOB 5-8-1990", "DOB 05/08/1990"),
        ("DOB 5/8/90", "DOB 05/08/2090"),
        ("DOB 1 2 1990", "DOB 01/02/1990"),
        ("DOB 15/08/1990", "DOB 15/08/1990"),
    ],
)
def test_standardizes_dates(raw, expected):
    assert clean_locally(raw) == expected


def test_number_and_date_side_by_side():
    assert clean_locally("1234 5678 9012\n15/08/1990") == "1234 5678 9012 15/08/1990"


def test_empty_and_missing_input():
    assert clean_locally("") == ""
    assert clean_locally(None) == ""


@pytest.mark.parametrize(
    "raw",
    [
        "Government of India\nRAJ KUMAR\nDOB: 5-8-90\nMALE\n123456789012",
        "Address: C/O Ram, 12 3 Road, Pune 411001",
        "no digits here",
        "1 2 3 4 5 6 7 8 9 10 11 12",
    ],
)
def test_idempotent(raw):
    once = clean_locally(raw)
    assert clean_locally(once) == once
