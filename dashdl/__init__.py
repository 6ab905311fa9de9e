"""Segmented DASH video downloader for embedded players."""

__version__ = "0.1.0"
