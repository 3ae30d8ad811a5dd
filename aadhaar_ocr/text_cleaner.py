"""Deterministic local cleanup for raw Aadhaar OCR text.

Used whenever the external cleanup service is unavailable. Every step is a
plain regex rewrite, so the function is total: any input string produces a
string, and running it again on its own output changes nothing.
"""

from __future__ import annotations

import re

# A bare 12-digit run or three groups of four digits, not the tail of a date
_AADHAAR_NUMBER = re.compile(r"(?<!/)\b\d{12}\b|(?<!/)\b\d{4}\s*\d{4}\s*\d{4}\b", re.ASCII)

# D{1,2} sep D{1,2} sep D{2,4}, never glued to other digits or to a "/"
_LOOSE_DATE = re.compile(r"(?<![\d/])(\d{1,2})[/\-\s](\d{1,2})[/\-\s](\d{2,4})(?![\d/])", re.ASCII)


def _format_aadhaar_number(text: str) -> str:
    m = _AADHAAR_NUMBER.search(text)
    if not m:
        return text
    digits = re.sub(r"\s+", "", m.group(0))
    if len(digits) != 12:
        return text
    formatted = f"{digits[:4]} {digits[4:8]} {digits[8:]}"
    return text[:m.start()] + formatted + text[m.end():]


def _standardize_date(m: re.Match) -> str:
    day, month, year = m.group(1), m.group(2), m.group(3)
    if len(year) == 2:
        year = "20" + year
    return f"{day.zfill(2)}/{month.zfill(2)}/{year}"


def clean_locally(raw_text: str) -> str:
    cleaned = re.sub(r"\s+", " ", raw_text or "")
    cleaned = _format_aadhaar_number(cleaned)
    cleaned = _LOOSE_DATE.sub(_standardize_date, cleaned)
    return cleaned.strip()
