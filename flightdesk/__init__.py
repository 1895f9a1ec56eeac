"""FlightDesk: flight scheduling and seat booking API."""

__version__ = "1.0.0"
