"""Cleanser — find and clear reclaimable disk space."""

__version__ = "0.1.0"
