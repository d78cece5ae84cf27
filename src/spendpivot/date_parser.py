"""
Date resolution for pasted transaction exports.

Exports mix ISO dates with US and European slash/dash dates. resolve_date()
turns one of those strings into (year, month, day) without ever raising.
"""

import re
from typing import NamedTuple, Optional


class ResolvedDate(NamedTuple):
    """A calendar date recovered from raw text."""
    year: int
    month: int
    day: int


# YYYY-MM-DD or YYYY/MM/DD
_YEAR_FIRST = re.compile(r'^(\d{4})([-/])(\d{1,2})\2(\d{1,2})$')
# N/N/YYYY or N-N-YYYY (month/day or day/month)
_YEAR_LAST = re.compile(r'^(\d{1,2})([-/])(\d{1,2})\2(\d{4})$')


def _valid(year: int, month: int, day: int) -> Optional[ResolvedDate]:
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    return ResolvedDate(year, month, day)


def resolve_date(text: str) -> Optional[ResolvedDate]:
    """Resolve a date string into a ResolvedDate.

    Recognized forms, checked in order:
        YYYY-MM-DD, YYYY/MM/DD  - year first, no ambiguity
        N/N/YYYY, N-N-YYYY      - day/month when the first token is over 12
                                  and the second is not, month/day otherwise

    Args:
        text: Raw date text from an export column

    Returns:
        ResolvedDate, or None when the text has any other shape
    """
    if not text:
        return None
    text = text.strip()

    match = _YEAR_FIRST.match(text)
    if match:
        return _valid(int(match.group(1)), int(match.group(3)), int(match.group(4)))

    match = _YEAR_LAST.match(text)
    if match:
        first = int(match.group(1))
        second = int(match.group(3))
        year = int(match.group(4))
        if first > 12 and second <= 12:
            # 25/04/2025 can only be day/month
            return _valid(year, second, first)
        return _valid(year, first, second)

    return None
