"""timetrack - track time spent on tasks from a live terminal view."""

__version__ = "1.0.0"
