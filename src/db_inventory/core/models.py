# ABOUTME: Pydantic models for manifest records and the connection details found for them
# ABOUTME: Records are enriched in place by each pipeline stage and serialized at the end

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    SerializerFunctionWrapHandler,
    ValidatorFunctionWrapHandler,
    model_serializer,
    model_validator,
)


class Connection(BaseModel):
    """Database identifiers discovered in a site's configuration files."""

    db_name: str | None = Field(None, description="Database name found in a database-family key")
    table: str | None = Field(None, description="Table or layout name found in a table-family key")

    @property
    def is_complete(self) -> bool:
        return self.db_name is not None and self.table is not None


class Record(BaseModel):
    """One site entry from the manifest. Unknown manifest keys are kept so the
    inventory carries the site's original metadata alongside what was found.

    ``link`` is taken as-is: a value that isn't a string fails path derivation
    for this record only, not the whole manifest.
    """

    model_config = ConfigDict(extra="allow")

    link: Any = Field(None, description="URL of the site's pricing page")
    path: str | None = Field(None, description="Local directory derived from the link")
    connection: Connection | None = Field(None, description="Identifiers found while scanning the directory")

    _manifest_keys: list[str] = PrivateAttr(default_factory=list)

    @model_validator(mode="wrap")
    @classmethod
    def _remember_manifest_keys(cls, data: Any, handler: ValidatorFunctionWrapHandler) -> "Record":
        record = handler(data)
        if isinstance(data, dict):
            record._manifest_keys = list(data)
        return record

    @model_serializer(mode="wrap")
    def _serialize_in_manifest_order(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # Manifest keys keep their order and values, nulls included; fields the
        # pipeline never filled in are left out.
        data = handler(self)
        ordered = {key: data.pop(key) for key in self._manifest_keys if key in data}
        for key, value in data.items():
            if value is not None:
                ordered[key] = value
        return ordered

    @property
    def has_connection(self) -> bool:
        return self.connection is not None and self.connection.is_complete


class ExtractionStats(BaseModel):
    """Tallies of matching lines across a run.

    Counts are per matching line, not per record, so a site whose files set
    the database name twice contributes two to ``database_names``.
    """

    database_names: int = 0
    table_names: int = 0
    total_records: int = 0

    @staticmethod
    def _percentage(count: int, total: int) -> float:
        return (count / total) * 100 if total else 0.0

    @property
    def database_percentage(self) -> float:
        return self._percentage(self.database_names, self.total_records)

    @property
    def table_percentage(self) -> float:
        return self._percentage(self.table_names, self.total_records)

    def summary(self) -> str:
        return (
            f"Found {self.database_names} ({self.database_percentage:g}%) database names and "
            f"{self.table_names} ({self.table_percentage:g}%) table names out of {self.total_records} items."
        )


class InventoryReport(BaseModel):
    """Records with a complete connection, plus the run's extraction stats."""

    records: list[Record] = Field(default_factory=list)
    stats: ExtractionStats = Field(default_factory=ExtractionStats)
