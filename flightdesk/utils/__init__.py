"""Utility helpers for the FlightDesk backend."""

from .dates import as_utc, search_day_bounds, to_naive_utc, utc_day_window

__all__ = [
    "as_utc",
    "search_day_bounds",
    "to_naive_utc",
    "utc_day_window",
]
