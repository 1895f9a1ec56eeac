"""Configuration for the FlightDesk backend."""
