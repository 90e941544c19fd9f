"""
Label/value scanning shared by listing rows, detail pages and whole-page
fallbacks.

The catalogue renders metadata as ``<span class="c_label">作者：</span>``
followed by ``<span class="c_value">...</span>`` inside a ``c_tag`` block.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from novelmeta.libs.html import Node, xclass

RawFieldTable = dict[str, str]

_LABEL_STRIP_RE = re.compile(r"[\s：:]")

DEFAULT_VALUE_PATTERN = r"[^\s，。；;|]+"


def normalize_label(label: str) -> str:
    """Drop whitespace and full/half-width colons from a label."""
    return _LABEL_STRIP_RE.sub("", label)


def scan_label_value_fields(node: Node) -> RawFieldTable:
    """Collect label -> value pairs from every ``c_tag`` block under ``node``.

    Labels are normalized with :func:`normalize_label`. The first non-empty
    value seen for a label is kept.
    """
    table: RawFieldTable = {}
    for block in node.select_all(f"descendant-or-self::*{xclass('c_tag')}"):
        label = ""
        for span in block.children("span"):
            if span.has_class("c_label"):
                label = normalize_label(span.text())
            elif span.has_class("c_value") and label:
                value = span.text()
                if value:
                    table.setdefault(label, value)
    return table


def pick_field(table: RawFieldTable, labels: Iterable[str]) -> str:
    """Return the value of the first label in ``labels`` present in ``table``."""
    for label in labels:
        if value := table.get(label):
            return value
    return ""


def extract_labeled_value(
    text: str,
    labels: Iterable[str],
    value_pattern: str = DEFAULT_VALUE_PATTERN,
) -> str:
    """Find ``<label>：<value>`` in free text, tolerating either colon.

    Args:
        text: Text to search; whitespace is collapsed first.
        labels: Candidate labels, tried in order.
        value_pattern: Regex for the value that follows the colon.

    Returns:
        The first matched value, or ``""``.
    """
    normalized = " ".join(text.split())
    for label in labels:
        m = re.search(
            rf"{re.escape(label)}\s*[：:]\s*({value_pattern})",
            normalized,
            re.IGNORECASE,
        )
        if m and (value := m.group(1).strip()):
            return value
    return ""
