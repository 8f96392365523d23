# ABOUTME: Derives each record's local site directory from its manifest link
# ABOUTME: Pipeline Stage 2: link URL → decoded folder name → share path

import re
from urllib.parse import unquote

from db_inventory.config import get_config
from db_inventory.core.models import Record
from db_inventory.errors import PathDerivationError
from db_inventory.utils.logging import get_logger, with_record_context

# A '%' that doesn't start a two-digit hex escape
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_segment(segment: str) -> str:
    """Percent-decode a URL path segment, rejecting malformed escapes.

    Raises:
        PathDerivationError: If an escape is malformed, the bytes aren't UTF-8,
            or the result contains a NUL
    """
    if _MALFORMED_ESCAPE.search(segment):
        raise PathDerivationError(f"Malformed percent-encoding in {segment!r}")
    try:
        decoded = unquote(segment, errors="strict")
    except UnicodeDecodeError as e:
        raise PathDerivationError(f"Percent-encoded bytes in {segment!r} are not UTF-8") from e
    if "\x00" in decoded:
        raise PathDerivationError(f"Decoded segment {segment!r} contains a NUL character")
    return decoded


def derive_folder(link: str, prefix: str) -> str | None:
    """Extract the site folder name from a record link.

    Example: "https://pricing.mardens.com/mard_db/ABC%20Co/x" -> "ABC Co"
    """
    remainder = link.replace(prefix, "", 1)
    folder = decode_segment(remainder.split("/")[0])
    return folder or None


class PathResolver:
    """Annotates records with the local directory their site lives in."""

    def __init__(self, prefix: str | None = None, template: str | None = None):
        config = get_config()
        self.prefix = prefix if prefix is not None else config.link_prefix
        self.template = template if template is not None else config.path_template
        self.logger = get_logger(__name__)

    def path_for(self, link: str) -> str | None:
        """Return the directory for a link, or None when it names no folder."""
        folder = derive_folder(link, self.prefix)
        if folder is None:
            return None
        return self.template.format(folder=folder)

    def resolve(self, records: list[Record]) -> list[Record]:
        """Set ``path`` on every record whose link names a folder.

        Records without a usable link are left untouched and kept in place.
        """
        resolved = 0
        for index, record in enumerate(records):
            if record.link is None:
                continue
            with with_record_context(index, record.link) as logger:
                try:
                    if not isinstance(record.link, str):
                        raise PathDerivationError(f"Link must be a string, got {type(record.link).__name__}")
                    path = self.path_for(record.link)
                except Exception as e:
                    logger.warning("Could not derive site path", error=str(e), error_type=type(e).__name__)
                    continue
                if path is None:
                    logger.debug("Link has no folder segment")
                    continue
                record.path = path
                resolved += 1

        self.logger.info("Resolved site paths", resolved=resolved, total=len(records))
        return records
