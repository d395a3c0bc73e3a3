"""
Query parameter parsing with explicit validation.
"""

from typing import Optional

MAX_PAGE = 10_000
MAX_PER_PAGE = 100


class InvalidParameter(ValueError):
    """A query parameter is missing or malformed; maps to HTTP 400."""


def _is_blank(raw_value) -> bool:
    return raw_value is None or not str(raw_value).strip()


def parse_positive_int(raw_value, name: str, default: int, maximum: int) -> int:
    """Parse an integer in [1, maximum], using ``default`` when the parameter is absent."""
    if _is_blank(raw_value):
        return default
    try:
        parsed = int(str(raw_value).strip())
    except (TypeError, ValueError):
        raise InvalidParameter(f'{name} must be an integer')
    if parsed < 1:
        raise InvalidParameter(f'{name} must be at least 1')
    if parsed > maximum:
        raise InvalidParameter(f'{name} must be at most {maximum}')
    return parsed


def parse_month(raw_value, required: bool = False) -> Optional[int]:
    """Parse a calendar month (1-12). Blank values count as absent."""
    if _is_blank(raw_value):
        if required:
            raise InvalidParameter('Month is required')
        return None
    try:
        month = int(str(raw_value).strip())
    except (TypeError, ValueError):
        raise InvalidParameter('Month must be an integer between 1 and 12')
    if not 1 <= month <= 12:
        raise InvalidParameter('Month must be an integer between 1 and 12')
    return month
