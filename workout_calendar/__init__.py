"""
Workout calendar package.

This package provides a month-grid view over logged workouts, a
SQLite-backed workout store, and tools for exporting and plotting
the calendar.
"""

__version__ = "0.1.0"
