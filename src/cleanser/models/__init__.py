"""Cleanser data models."""

from cleanser.models.item import CleanableItem, CleanCategory, FileHash, RiskLevel, category_risk
from cleanser.models.scan_result import ScanConfig, ScanResults, ScanSpeed
from cleanser.models.clean_result import CleanResult

__all__ = [
    "CleanCategory",
    "CleanResult",
    "CleanableItem",
    "FileHash",
    "RiskLevel",
    "ScanConfig",
    "ScanResults",
    "ScanSpeed",
    "category_risk",
]
