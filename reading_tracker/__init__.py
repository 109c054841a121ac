"""Reading Tracker: 365-day reading plan progress service and client."""

__version__ = "1.0.0"
