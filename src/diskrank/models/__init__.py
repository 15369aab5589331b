"""diskrank data models."""

from diskrank.models.result_entry import ResultEntry
from diskrank.models.scan_config import ScanConfig

__all__ = [
    "ResultEntry",
    "ScanConfig",
]
