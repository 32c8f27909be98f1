import pytest

from core.errors import ValidationError
from core.filtering import (
    filter_listings,
    is_open,
    matches_keywords,
    normalize_keywords,
    parse_closing_date,
)


def test_keywords_are_case_insensitive_and_or_combined(make_listing):
    keywords = ["Engineer", "Clerk"]
    civil = make_listing(post_name="Assistant Director", department="Civil engineering")
    clerk = make_listing(post_name="Senior Clerk", department="Revenue")
    other = make_listing(post_name="Lecturer", department="Education")

    assert matches_keywords(civil, keywords)
    assert matches_keywords(clerk, keywords)
    assert not matches_keywords(other, keywords)


def test_keyword_can_span_post_and_department(make_listing):
    job = make_listing(post_name="Assistant", department="Health")
    assert matches_keywords(job, ["assistant health"])


def test_empty_keyword_set_matches_nothing(make_listing):
    assert not matches_keywords(make_listing(), [])
    assert filter_listings([make_listing()], []) == []


@pytest.mark.parametrize(
    "closing_date,kept",
    [
        ("14-06-2024", False),
        ("15-06-2024", True),
        ("16-06-2024", True),
        ("", True),
        ("TBA", True),  # unparsable dates are kept
        ("31-02-2024", True),  # impossible date is unparsable, kept
        ("1-6-2024", False),  # unpadded day/month still parse
        (" 20 - 06 - 2024 ", True),
    ],
)
def test_closing_date_rule(make_listing, today, closing_date, kept):
    job = make_listing(closing_date=closing_date)
    assert is_open(job, today) is kept


def test_parse_closing_date():
    assert parse_closing_date("15-06-2024").isoformat() == "2024-06-15"
    assert parse_closing_date("2024/06/15") is None
    assert parse_closing_date(None) is None


def test_filter_preserves_order(make_listing, today):
    jobs = [
        make_listing(post_name="Clerk A"),
        make_listing(post_name="Driver"),
        make_listing(post_name="Clerk B", closing_date="01-01-2024"),
        make_listing(post_name="Clerk C", closing_date=""),
    ]
    result = filter_listings(jobs, ["clerk"], today=today)
    assert [j.post_name for j in result] == ["Clerk A", "Clerk C"]


def test_normalize_keywords_strips_and_drops_blanks():
    assert normalize_keywords(["  Clerk ", "", "  ", "Engineer"]) == ("Clerk", "Engineer")


@pytest.mark.parametrize("raw", [None, [], ["", "  "], "Clerk", {"k": "v"}])
def test_normalize_keywords_rejects_missing(raw):
    with pytest.raises(ValidationError) as exc:
        normalize_keywords(raw)
    assert exc.value.message == "Keywords are required"
