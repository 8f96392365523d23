# ABOUTME: Writes the filtered inventory to a pretty-printed JSON file
# ABOUTME: Uses a Pydantic TypeAdapter so records serialize with their extra manifest fields

from pathlib import Path

from pydantic import TypeAdapter

from db_inventory.core.models import Record
from db_inventory.errors import OutputWriteError
from db_inventory.utils.logging import get_logger

_records_adapter = TypeAdapter(list[Record])

logger = get_logger(__name__)


def render_inventory(records: list[Record]) -> bytes:
    """Serialize records as a 4-space indented JSON array in manifest key order.

    Manifest values are written as received, nulls included. ``path`` and
    ``connection`` follow them and are left out when never set.
    """
    return _records_adapter.dump_json(records, indent=4)


def write_inventory(records: list[Record], path: Path | str) -> Path:
    """Write the inventory, replacing any existing file, and return its absolute path.

    Raises:
        OutputWriteError: If the file cannot be written
    """
    target = Path(path).absolute()
    try:
        target.write_bytes(render_inventory(records))
    except OSError as e:
        raise OutputWriteError(f"Failed to write inventory to {target}: {e}") from e

    logger.info("File written", path=str(target), records=len(records))
    return target
