from typing import Tuple

from app.core.exceptions import ValidationError

MAX_PAGE_SIZE = 50


def page_window(page: int, limit: int) -> Tuple[int, int]:
    """Translate a 1-based page number into (skip, limit)"""
    if page < 1:
        raise ValidationError("page must be >= 1")
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")
    return (page - 1) * limit, limit
