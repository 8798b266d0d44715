from __future__ import annotations

from typing import Any

from ..core.config import get_settings


def normalize_limit(value: Any) -> int:
    """Coerce a requested page size; absent, invalid or non-positive means default."""
    default = get_settings().DEFAULT_PAGE_SIZE
    if value is None or isinstance(value, bool):
        return default
    try:
        limit = int(str(value).strip())
    except ValueError:
        return default
    return limit if limit > 0 else default
