"""Spirit Collectors - turn-based monster battle engine."""

__version__ = "0.3.0"
