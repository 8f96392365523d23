# ABOUTME: Output of the finished inventory
# ABOUTME: Pipeline Stage 4: Filtered records → output.json

"""
Persistence Layer: Save the inventory

This layer handles:
- JSON serialization of records with their discovered connections
- Writing the inventory file in the working directory

Data Flow: core/ report → output.json
"""

from .writer import render_inventory, write_inventory

__all__ = [
    "render_inventory",
    "write_inventory",
]
