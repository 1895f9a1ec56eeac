"""FastAPI routers acting as controllers in the MVC architecture."""

from . import bookings, flights

__all__ = ["bookings", "flights"]
