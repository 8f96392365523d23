# ABOUTME: Fetches the remote site manifest and turns its entries into Record models
# ABOUTME: Any transport, status or shape problem is reported as a single FetchError

import json
from typing import Any

import httpx
from pydantic import ValidationError

from db_inventory.config import get_config
from db_inventory.core.models import Record
from db_inventory.errors import FetchError
from db_inventory.utils.logging import get_logger, log_api_call


class ManifestFetcher:
    """Retrieves the list of sites from the manifest endpoint. This includes an httpx
    client, which callers may inject for testing."""

    def __init__(self, url: str | None = None, client: httpx.AsyncClient | None = None):
        self.url = url or get_config().manifest_url
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers={"User-Agent": "db-inventory/0.1"}
        )
        self.logger = get_logger(__name__)

    @log_api_call("site_manifest")
    async def fetch(self) -> list[Record]:
        """Fetch the manifest and return its records in order.

        Raises:
            FetchError: If the request fails or the body is not a manifest
        """
        try:
            response = await self.http_client.get(self.url, follow_redirects=True)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            self.logger.error("Unable to fetch data from the server", url=self.url, error=str(e))
            raise FetchError(f"Unable to fetch manifest from {self.url}: {e}") from e
        except ValueError as e:
            self.logger.error("Manifest response is not valid JSON", url=self.url, error=str(e))
            raise FetchError(f"Manifest from {self.url} is not valid JSON: {e}") from e

        return self.parse_manifest(payload)

    @staticmethod
    def parse_manifest(payload: Any) -> list[Record]:
        """Build records from a decoded manifest document.

        The record array lives under ``data``. Some exports wrap it a second
        time as a JSON string, so a string value is decoded once more. Entry
        values aren't checked here; a bad ``link`` only affects its own record.
        """
        if not isinstance(payload, dict) or "data" not in payload:
            raise FetchError("Manifest has no 'data' field")

        entries = payload["data"]
        if isinstance(entries, str):
            try:
                entries = json.loads(entries)
            except ValueError as e:
                raise FetchError(f"Manifest 'data' string is not valid JSON: {e}") from e

        if not isinstance(entries, list):
            raise FetchError(f"Manifest 'data' must be an array, got {type(entries).__name__}")

        records: list[Record] = []
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise FetchError(f"Manifest entry {index} is not an object")
            try:
                records.append(Record.model_validate(entry))
            except ValidationError as e:
                raise FetchError(f"Manifest entry {index} is malformed: {e}") from e

        return records

    async def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            await self.http_client.aclose()
