# ABOUTME: Local filesystem inspection for manifest records
# ABOUTME: Pipeline Stages 2-3: link → site directory → database and table names

"""
Extraction Layer: Turn manifest records into connection details

This layer handles:
- Deriving each site's directory from its manifest link
- Listing site directories and filtering config files by extension
- Heuristic key="value" line parsing for database and table names

Data Flow: manifest/ records → Enriched records → core/ report
"""

from .base import LineMatch, ScanResult
from .connection import ConnectionExtractor, classify_key, scan_line
from .paths import PathResolver, derive_folder

__all__ = [
    "ConnectionExtractor",
    "LineMatch",
    "PathResolver",
    "ScanResult",
    "classify_key",
    "derive_folder",
    "scan_line",
]
