"""get IT done: personal task manager API."""

__version__ = "1.0.0"
