"""
Query string reshaping for paginated list proxies.
The admin pages send camelCase paging parameters; the backend expects
snake_case ones.
"""
from typing import Optional

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100


def page_params(
    page: Optional[int] = None,
    per_page: Optional[int] = None,
    size_key: str = "per_page",
) -> dict:
    """
    Build the upstream page / page size pair with defaults applied.

    Args:
        page: 1-based page number (default: 1)
        per_page: Page size (default: 10)
        size_key: Name the upstream endpoint reads the page size from
            (categories and film strip read perPage, the rest per_page)

    Returns:
        dict: {"page": ..., size_key: ...}
    """
    return {
        "page": page or DEFAULT_PAGE,
        size_key: per_page or DEFAULT_PER_PAGE,
    }


def sort_params(sort_by: Optional[str], sort_order: Optional[str], default_by: str = "created_at") -> dict:
    order = (sort_order or "desc").lower()
    if order not in ("asc", "desc"):
        order = "desc"
    return {"sort_by": sort_by or default_by, "sort_order": order}


def drop_empty(params: dict) -> dict:
    """Remove unset optional filters so they are not forwarded as empty strings."""
    return {k: v for k, v in params.items() if v not in (None, "")}
