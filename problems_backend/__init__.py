"""AlgoTracker problems backend: CRUD service for tracked practice problems."""

__version__ = "1.0.0"
