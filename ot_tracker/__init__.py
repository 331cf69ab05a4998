"""OT Tracker: occupational therapy assessment scoring and progress tracking."""

__version__ = "0.1.0"
