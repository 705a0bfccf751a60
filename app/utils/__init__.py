"""Utility functions for the invoice dashboard."""

from .activity import log_activity
from .formatting import format_currency, format_date_to_local
from .view_cache import revalidate_path

__all__ = [
    "log_activity",
    "format_currency",
    "format_date_to_local",
    "revalidate_path",
]
