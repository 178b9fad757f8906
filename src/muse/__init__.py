"""muse: personal weight log with a moving-average trend."""

__version__ = "0.1.0"
