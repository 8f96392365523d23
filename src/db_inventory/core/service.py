# ABOUTME: High-level service API that runs the inventory pipeline end to end
# ABOUTME: Fetch → resolve paths → extract connections → write, each stage finishing before the next

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from db_inventory.config import get_config
from db_inventory.core.models import InventoryReport
from db_inventory.extraction.connection import ConnectionExtractor
from db_inventory.extraction.paths import PathResolver
from db_inventory.manifest.fetcher import ManifestFetcher
from db_inventory.persistence.writer import write_inventory
from db_inventory.utils.logging import get_logger


@dataclass(slots=True)
class InventoryRun:
    """What a completed run produced."""

    report: InventoryReport
    output_path: Path


class InventoryService:
    """Service that builds the site database inventory."""

    def __init__(
        self,
        fetcher: ManifestFetcher | None = None,
        resolver: PathResolver | None = None,
        extractor: ConnectionExtractor | None = None,
        output_file: Path | str | None = None,
    ):
        self.fetcher = fetcher or ManifestFetcher()
        self.resolver = resolver or PathResolver()
        self.extractor = extractor or ConnectionExtractor()
        self.output_file = Path(output_file) if output_file is not None else get_config().output_file
        self.logger = get_logger(__name__)

    async def build_inventory(self) -> InventoryReport:
        """Fetch the manifest and scan every site, without writing anything.

        Raises:
            FetchError: If the manifest cannot be retrieved
        """
        records = await self.fetcher.fetch()
        self.logger.info("Fetched manifest", records=len(records))

        self.resolver.resolve(records)
        report = self.extractor.extract(records)

        self.logger.info("Inventory built", found=len(report.records), total=report.stats.total_records)
        return report

    async def run(self) -> InventoryRun:
        """Build the inventory and write it to the output file.

        Raises:
            FetchError: If the manifest cannot be retrieved
            OutputWriteError: If the output file cannot be written
        """
        report = await self.build_inventory()
        output_path = write_inventory(report.records, self.output_file)
        return InventoryRun(report=report, output_path=output_path)

    async def close(self) -> None:
        await self.fetcher.close()
