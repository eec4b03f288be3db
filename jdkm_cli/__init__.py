"""Command-line interface for jdkm."""

__version__ = "1.0.0"
