import pytest

from novelmeta.plugins.sites.youshu.classifier import (
    RULES,
    PageFeatures,
    RowShape,
    classify,
    looks_like_detail_fragment,
)
from novelmeta.schemas import DEFAULT_AUTHOR, DEFAULT_DESCRIPTION

LISTING_URL = "https://youshu.me/search/articlename/x/1.html"

FULL_ROW = RowShape(author="作者", word_count=10000, description="简介")
FRAGMENT_ROW = RowShape(author="", word_count=0, description="一段很长的简介")
EMPTY_ROW = RowShape(author="", word_count=0, description="")


def features(*rows, url=LISTING_URL, markers=False):
    return PageFeatures(url=url, rows=tuple(rows), has_detail_markers=markers)


@pytest.mark.parametrize(
    "author, word_count, description, expected",
    [
        ("", 0, "简介", True),
        (DEFAULT_AUTHOR, 0, "简介", True),
        ("某人", 0, "简介", False),
        ("", 1200, "简介", False),
        ("", 0, "", False),
        ("", 0, DEFAULT_DESCRIPTION, False),
    ],
)
def test_looks_like_detail_fragment(author, word_count, description, expected):
    assert looks_like_detail_fragment(author, word_count, description) is expected


@pytest.mark.parametrize(
    "url",
    [
        "https://youshu.me/book/12345",
        "https://youshu.me/book/12345.html",
        "https://youshu.me/book/12345/",
        "https://youshu.me/modules/article/articleinfo.php?id=42",
    ],
)
def test_detail_url_wins_regardless_of_rows(url):
    decision = classify(features(FULL_ROW, FULL_ROW, FULL_ROW, url=url))
    assert decision.is_detail_page
    assert decision.rule == "detail-url"


def test_single_fragment_row_is_detail():
    decision = classify(features(FRAGMENT_ROW))
    assert decision.is_detail_page
    assert decision.rule == "single-fragment-row"


def test_single_complete_row_is_listing():
    decision = classify(features(FULL_ROW))
    assert not decision.is_detail_page
    assert decision.rule == "listing"


@pytest.mark.parametrize("rows", [(), (FULL_ROW,)])
def test_markers_with_at_most_one_row_is_detail(rows):
    decision = classify(features(*rows, markers=True))
    assert decision.is_detail_page
    assert decision.rule == "detail-markers"


def test_markers_with_fragment_majority_is_detail():
    decision = classify(
        features(FRAGMENT_ROW, FULL_ROW, FRAGMENT_ROW, FULL_ROW, markers=True)
    )
    assert decision.is_detail_page
    assert decision.rule == "fragment-majority"


def test_majority_only_counts_leading_rows():
    rows = (FULL_ROW, FULL_ROW, FRAGMENT_ROW, FRAGMENT_ROW, FRAGMENT_ROW)
    assert not classify(features(*rows, markers=True)).is_detail_page


def test_fragment_majority_without_markers_is_listing():
    rows = (FRAGMENT_ROW, FRAGMENT_ROW, FRAGMENT_ROW)
    assert not classify(features(*rows)).is_detail_page


def test_empty_page_without_markers_is_listing():
    assert classify(features()).rule == "listing"
    assert classify(features(EMPTY_ROW)).rule == "listing"


def test_rules_are_evaluated_in_order():
    assert [r.name for r in RULES] == [
        "detail-url",
        "single-fragment-row",
        "detail-markers",
        "fragment-majority",
    ]
    decision = classify(features(FRAGMENT_ROW, markers=True))
    assert decision.rule == "single-fragment-row"
