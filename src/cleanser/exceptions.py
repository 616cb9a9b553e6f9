"""Exceptions raised by cleanser."""

from __future__ import annotations


class CleanserError(Exception):
    """Base class for cleanser errors."""


class ScanConfigError(CleanserError):
    """Raised when a scan cannot start: bad root path, no home directory, bad depth."""
