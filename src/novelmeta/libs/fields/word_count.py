import re

_NON_DIGIT_RE = re.compile(r"[^\d]")
_NON_NUMERIC_RE = re.compile(r"[^\d.]")

TEN_THOUSAND = "万"


def parse_word_count(value: str | None) -> int:
    """Convert a displayed word count into an integer.

    Accepts plain digits (``"128000"``), thousands separators (``"128,000"``)
    and the ten-thousand unit (``"35.5万"`` -> ``355000``). Anything that
    cannot be read yields ``0``, which callers treat as unknown.
    """
    text = (value or "").replace(",", "").strip()
    if not text:
        return 0

    if TEN_THOUSAND in text:
        try:
            return round(float(_NON_NUMERIC_RE.sub("", text)) * 10000)
        except ValueError:
            return 0

    digits = _NON_DIGIT_RE.sub("", text)
    return int(digits) if digits else 0
