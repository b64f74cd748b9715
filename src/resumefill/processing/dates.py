"""Date answer normalization for date inputs."""

from __future__ import annotations

import re

_ISO_DATE = re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})")
_US_DATE = re.compile(r"(\d{1,2})[/-](\d{1,2})[/-](\d{4})")


def normalize_date_answer(value: str) -> str:
    """Rewrite a date answer as `YYYY-MM-DD` when its format is recognized.

    `YYYY-MM-DD` answers are kept as-is; `MM/DD/YYYY` and `MM-DD-YYYY` are
    reordered and zero-padded. Anything else is returned unchanged.

    Args:
        value (str): Raw answer.

    Returns:
        str: Date formatted for a date input, or the original answer.
    """
    if _ISO_DATE.search(value):
        return value
    match = _US_DATE.search(value)
    if match is None:
        return value
    month, day, year = match.groups()
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"
