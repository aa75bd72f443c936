"""Personal task board with staleness detection."""

__version__ = "0.1.0"
