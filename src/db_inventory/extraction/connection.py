# ABOUTME: Mines site configuration files for database and table names
# ABOUTME: Pipeline Stage 3: site directory → key="value" lines → Connection per record

import os
from pathlib import Path

from db_inventory.config import get_config
from db_inventory.core.models import Connection, ExtractionStats, InventoryReport, Record
from db_inventory.errors import DirectoryListError, FileReadError, LineParseError
from db_inventory.extraction.base import ConnectionField, LineMatch, ScanResult
from db_inventory.utils.logging import get_logger, with_record_context

# Checked in this order; a key matching both families is a database key.
DATABASE_KEY_MARKERS = ("db_name", "database_name", "database", "db")
TABLE_KEY_MARKERS = ("table", "layout", "table_name", "layout_name")


def classify_key(key: str) -> ConnectionField | None:
    """Map a normalized config key to the connection field it names, if any."""
    if any(marker in key for marker in DATABASE_KEY_MARKERS):
        return "db_name"
    if any(marker in key for marker in TABLE_KEY_MARKERS):
        return "table"
    return None


def _parse_line(line: str) -> LineMatch | None:
    if not line:
        return None

    parts = line.split("=")
    if len(parts) != 2:
        return None

    key = parts[0].strip().lower()
    value = parts[1].strip()

    # Only quoted single-token values, e.g. DB_NAME="sales"
    if not value.startswith('"') or any(char.isspace() for char in value):
        return None

    identifier = value.replace('"', "")
    if not identifier:
        return None

    field = classify_key(key)
    if field is None:
        return None
    return LineMatch(field=field, value=identifier, key=key)


def scan_line(line: str) -> ScanResult[LineMatch | None]:
    """Parse one configuration line.

    A line that simply doesn't name a database or table is a successful scan
    with no value; only unexpected failures come back as errors.
    """
    try:
        return ScanResult.success(_parse_line(line))
    except Exception as e:
        return ScanResult.failure(LineParseError(f"Failed to parse line {line!r}: {e}"))


class ConnectionExtractor:
    """Scans each record's site directory for database and table identifiers.

    Only the top level of the directory is read, and only files with one of
    the configured extensions. Files are treated as newline-separated
    ``key=value`` text regardless of their format.
    """

    def __init__(self, extensions: tuple[str, ...] | None = None):
        self.extensions = tuple(extensions if extensions is not None else get_config().config_extensions)
        self.logger = get_logger(__name__)

    def is_config_file(self, name: str) -> bool:
        return name.endswith(self.extensions)

    def _read_file(self, path: Path) -> str:
        return path.read_text(encoding="utf-8", errors="replace")

    def scan_file(self, path: Path) -> ScanResult[list[LineMatch]]:
        """Read a config file and return its matching lines in order.

        Lines that fail to parse are logged and left out of the result.
        """
        try:
            content = self._read_file(path)
        except OSError as e:
            return ScanResult.failure(FileReadError(f"Failed to read file {path.name}: {e}"))

        matches: list[LineMatch] = []
        for line_number, line in enumerate(content.split("\n"), start=1):
            result = scan_line(line)
            if not result.ok:
                self.logger.warning(
                    "Skipping unparsable line", file=str(path), line_number=line_number, error=str(result.error)
                )
                continue
            if result.value is not None:
                matches.append(result.value)
        return ScanResult.success(matches)

    def list_entries(self, directory: str) -> list[os.DirEntry]:
        """List a site directory in the order the filesystem returns it.

        Raises:
            DirectoryListError: If the directory cannot be read
        """
        try:
            with os.scandir(directory) as entries:
                return list(entries)
        except (OSError, ValueError) as e:
            # os.scandir raises ValueError for a path with an embedded NUL
            raise DirectoryListError(f"Failed to list {directory}: {e}") from e

    def scan_directory(self, directory: str, stats: ExtractionStats | None = None) -> Connection:
        """Collect a Connection from the config files in one directory.

        Stops opening files once both fields are known. The check is made
        between files, so the file that completes the pair is read to its end
        and may still overwrite either field.

        Raises:
            DirectoryListError: If the directory cannot be read
        """
        connection = Connection()
        for entry in self.list_entries(directory):
            if connection.is_complete:
                break
            try:
                if entry.is_dir(follow_symlinks=False):
                    continue
            except OSError as e:
                self.logger.warning("Skipping unreadable entry", file=entry.path, error=str(e))
                continue
            if not self.is_config_file(entry.name):
                continue

            result = self.scan_file(Path(entry.path))
            if not result.ok:
                self.logger.warning("Skipping unreadable file", file=entry.path, error=str(result.error))
                continue

            for match in result.value or []:
                setattr(connection, match.field, match.value)
                if stats is not None:
                    if match.field == "db_name":
                        stats.database_names += 1
                    else:
                        stats.table_names += 1
        return connection

    def extract(self, records: list[Record]) -> InventoryReport:
        """Scan every record's directory and keep those with both identifiers.

        Every record gets a ``connection``, empty when its directory has no
        path or can't be listed. The returned stats are relative to the full
        record count, before filtering.
        """
        stats = ExtractionStats(total_records=len(records))

        for index, record in enumerate(records):
            record.connection = Connection()
            if record.path is None:
                continue
            with with_record_context(index, record.link) as record_logger:
                try:
                    record.connection = self.scan_directory(record.path, stats)
                except DirectoryListError as e:
                    record_logger.warning("Could not scan site directory", path=record.path, error=str(e))
                    continue
                record_logger.debug(
                    "Scanned site directory",
                    path=record.path,
                    db_name=record.connection.db_name,
                    table=record.connection.table,
                )

        self.logger.info(
            stats.summary(),
            database_names=stats.database_names,
            table_names=stats.table_names,
            total_records=stats.total_records,
        )

        found = [record for record in records if record.has_connection]
        return InventoryReport(records=found, stats=stats)
