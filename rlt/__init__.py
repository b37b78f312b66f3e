"""Asyncio load testing: suites, a concurrent runner with warm-ups and rate limits, and rolling statistics."""

__version__ = "0.5.0"

__all__ = ["errors", "runner", "stats", "status", "suite", "timewindow", "util"]