"""Helpers for handling paginated views."""

from __future__ import annotations

from typing import Dict, List, Union

from flask import request

ITEMS_PER_PAGE = 6
ELLIPSIS = "..."

PageLink = Union[int, str]


def get_page(param: str = "page") -> int:
    """Return the requested page number from the query string.

    Missing, non-numeric and non-positive values fall back to ``1``.
    """

    value = request.args.get(param, type=int)
    if value is None or value < 1:
        return 1
    return value


def total_pages(count: int, per_page: int = ITEMS_PER_PAGE) -> int:
    return max(-(-count // per_page), 0)


def generate_pagination(current_page: int, page_count: int) -> List[PageLink]:
    """Return the page links to render, with ``"..."`` marking gaps.

    Parameters
    ----------
    current_page:
        The page being displayed.
    page_count:
        Total number of pages.

    Returns
    -------
    list
        Page numbers interleaved with :data:`ELLIPSIS` placeholders.
    """

    if page_count <= 7:
        return list(range(1, page_count + 1))
    if current_page <= 3:
        return [1, 2, 3, ELLIPSIS, page_count - 1, page_count]
    if current_page >= page_count - 2:
        return [1, 2, ELLIPSIS, page_count - 2, page_count - 1, page_count]
    return [
        1,
        ELLIPSIS,
        current_page - 1,
        current_page,
        current_page + 1,
        ELLIPSIS,
        page_count,
    ]


def build_pagination_args(*, page_param: str = "page") -> Dict[str, str]:
    """Return the current query arguments minus the page number.

    The result is suitable for ``url_for`` so pagination links keep the
    active search term.
    """

    return {
        key: value
        for key, value in request.args.items()
        if key != page_param and value
    }
