"""
Listing-versus-detail classification for youshu pages.

The site renders list items and a single work's detail view with the same
row fragments, and sometimes answers a search by redirecting to the work
itself. The decision is an ordered list of rules; the first rule whose
predicate holds decides the page type.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import NamedTuple

from novelmeta.schemas import DEFAULT_AUTHOR, DEFAULT_DESCRIPTION

DETAIL_URL_PATTERNS = (
    re.compile(r"/book/\d+(?:\.html)?/?(?:[?#].*)?$"),
    re.compile(r"/modules/article/articleinfo\.php\?(?:.*&)?id=\d+"),
)

# rule 4 looks at this many leading rows
MAJORITY_WINDOW = 3
MAJORITY_THRESHOLD = 2


def looks_like_detail_fragment(author: str, word_count: int, description: str) -> bool:
    """A row with a synopsis but neither author nor word count."""
    return (
        (not author or author == DEFAULT_AUTHOR)
        and word_count <= 0
        and bool(description)
        and description != DEFAULT_DESCRIPTION
    )


@dataclass(frozen=True, slots=True)
class RowShape:
    """Content shape of one listing row, read before titles are checked."""

    author: str
    word_count: int
    description: str

    @property
    def is_detail_fragment(self) -> bool:
        return looks_like_detail_fragment(
            self.author, self.word_count, self.description
        )


@dataclass(frozen=True, slots=True)
class PageFeatures:
    """Everything the rules look at.

    Attributes:
        url: Final URL of the page after redirects.
        rows: Shapes of the rows found by the listing query.
        has_detail_markers: Whether detail-only markup (tab panels or the
            cover container) is present. A large-font title alone is not a
            marker since listing pages carry one too.
    """

    url: str
    rows: tuple[RowShape, ...]
    has_detail_markers: bool


@dataclass(frozen=True, slots=True)
class ClassificationDecision:
    is_detail_page: bool
    rule: str
    reason: str


class Rule(NamedTuple):
    name: str
    predicate: Callable[[PageFeatures], bool]
    is_detail_page: bool
    reason: str


def _detail_url(f: PageFeatures) -> bool:
    return any(p.search(f.url) for p in DETAIL_URL_PATTERNS)


def _single_fragment_row(f: PageFeatures) -> bool:
    return len(f.rows) == 1 and f.rows[0].is_detail_fragment


def _markers_with_few_rows(f: PageFeatures) -> bool:
    return f.has_detail_markers and len(f.rows) <= 1


def _markers_with_fragment_majority(f: PageFeatures) -> bool:
    if not f.has_detail_markers or len(f.rows) < 2:
        return False
    window = f.rows[:MAJORITY_WINDOW]
    return sum(r.is_detail_fragment for r in window) >= MAJORITY_THRESHOLD


RULES: tuple[Rule, ...] = (
    Rule(
        "detail-url",
        _detail_url,
        True,
        "final URL has the shape of a work page",
    ),
    Rule(
        "single-fragment-row",
        _single_fragment_row,
        True,
        "one row with a synopsis but no author or word count",
    ),
    Rule(
        "detail-markers",
        _markers_with_few_rows,
        True,
        "detail markup present with at most one row",
    ),
    Rule(
        "fragment-majority",
        _markers_with_fragment_majority,
        True,
        "detail markup present and most leading rows are detail fragments",
    ),
)

DEFAULT_DECISION = ClassificationDecision(
    is_detail_page=False,
    rule="listing",
    reason="no detail rule matched",
)


def classify(
    features: PageFeatures,
    rules: Sequence[Rule] = RULES,
) -> ClassificationDecision:
    """Evaluate ``rules`` top-down and return the first match.

    Args:
        features: Observations about the page.
        rules: Ordered rules; defaults to :data:`RULES`.

    Returns:
        The decision of the first matching rule, or a listing decision.
    """
    for rule in rules:
        if rule.predicate(features):
            return ClassificationDecision(
                is_detail_page=rule.is_detail_page,
                rule=rule.name,
                reason=rule.reason,
            )
    return DEFAULT_DECISION
