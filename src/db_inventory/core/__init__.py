# ABOUTME: Business logic and orchestration layer
# ABOUTME: Runs manifest fetch, path resolution, connection extraction and output in order

"""
Core Layer: Domain models and workflow orchestration

This layer handles:
- Record and connection models shared by every stage
- Pipeline orchestration and stage ordering
- The service API used by the command line

Data Flow: manifest/ records → extraction/ enrichment → persistence/ output
"""

from .models import Connection, ExtractionStats, InventoryReport, Record

# Import service on-demand to avoid circular imports
# Use: from db_inventory.core.service import InventoryService

__all__ = [
    "Connection",
    "ExtractionStats",
    "InventoryReport",
    "Record",
]
