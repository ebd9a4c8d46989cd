"""Synchronize worklog entries between time-tracking providers."""

__version__ = "0.1.0"
