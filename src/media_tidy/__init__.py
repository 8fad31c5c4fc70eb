"""Bulk quarantine and rename of downloaded media files."""

__version__ = "0.1.0"
