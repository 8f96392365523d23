# ABOUTME: Retrieval of the remote site manifest
# ABOUTME: Pipeline Stage 1: Manifest endpoint → Record models

from .fetcher import ManifestFetcher

__all__ = [
    "ManifestFetcher",
]
