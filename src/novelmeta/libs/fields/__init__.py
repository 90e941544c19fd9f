"""
Pure helpers that turn raw catalogue text into typed record values.
"""

__all__ = [
    "RawFieldTable",
    "extract_labeled_value",
    "normalize_label",
    "pick_field",
    "scan_label_value_fields",
    "normalize_url",
    "to_proxy_image_url",
    "parse_word_count",
]

from .labels import (
    RawFieldTable,
    extract_labeled_value,
    normalize_label,
    pick_field,
    scan_label_value_fields,
)
from .urls import normalize_url, to_proxy_image_url
from .word_count import parse_word_count
