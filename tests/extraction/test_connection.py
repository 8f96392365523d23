# ABOUTME: Tests for the config-file connection extractor
# ABOUTME: Covers line parsing rules, key classification, directory scanning and the file-level short-circuit

from unittest.mock import patch

import pytest

from db_inventory.core.models import Connection, ExtractionStats, Record
from db_inventory.errors import DirectoryListError, FileReadError, LineParseError
from db_inventory.extraction.connection import ConnectionExtractor, classify_key, scan_line

EXTENSIONS = (".php", ".json")


class TestClassifyKey:
    """Key families - pure substring logic"""

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("db_name", "db_name"),
            ("$database_name", "db_name"),
            ("database", "db_name"),
            ("dbuser", "db_name"),
            ("table", "table"),
            ("table_name", "table"),
            ("layout", "table"),
            ("$layout_name", "table"),
            ("host", None),
            ("password", None),
            ("", None),
        ],
    )
    def test_classify_key(self, key, expected):
        assert classify_key(key) == expected

    def test_database_family_wins_over_table_family(self):
        assert classify_key("db_table") == "db_name"
        assert classify_key("layout_database") == "db_name"


class TestScanLine:
    """Single line parsing - no filesystem"""

    @pytest.mark.parametrize(
        "line,field,value",
        [
            ('DB_NAME="sales"', "db_name", "sales"),
            ('TABLE_NAME="orders"', "table", "orders"),
            ('  Database = "inventory"  ', "db_name", "inventory"),
            ('layout="Web_Prices"', "table", "Web_Prices"),
            ('$db = "sales";', "db_name", "sales;"),
            ('DB_NAME="sales"\r', "db_name", "sales"),
            ('DB_NAME="sa"les"', "db_name", "sales"),
        ],
    )
    def test_matching_lines(self, line, field, value):
        result = scan_line(line)

        assert result.ok
        assert result.value is not None
        assert result.value.field == field
        assert result.value.value == value

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "DB_NAME",
            'DB_NAME="a"="b"',
            'DB_NAME=="sales"',
            "DB_NAME=sales",
            "DB_NAME='sales'",
            'DB_NAME="my sales"',
            'DB_NAME="my\tsales"',
            'DB_NAME=""',
            'HOST="localhost"',
            "<?php",
        ],
    )
    def test_lines_without_a_match(self, line):
        result = scan_line(line)

        assert result.ok
        assert result.value is None

    def test_key_is_normalized(self):
        result = scan_line('  DB_Name  ="sales"')

        assert result.value.key == "db_name"

    def test_unexpected_failure_is_returned_not_raised(self):
        with patch("db_inventory.extraction.connection._parse_line", side_effect=RuntimeError("boom")):
            result = scan_line('DB_NAME="sales"')

        assert not result.ok
        assert result.value is None
        assert isinstance(result.error, LineParseError)
        assert "boom" in str(result.error)


class TestScanFile:
    @pytest.fixture
    def extractor(self):
        return ConnectionExtractor(extensions=EXTENSIONS)

    def test_matches_in_file_order(self, extractor, make_site):
        site = make_site("Store", {"config.php": 'DB_NAME="one"\nignored\nTABLE="t"\nDB_NAME="two"\n'})

        result = extractor.scan_file(site / "config.php")

        assert result.ok
        assert [(m.field, m.value) for m in result.value] == [("db_name", "one"), ("table", "t"), ("db_name", "two")]

    def test_read_failure_is_returned(self, extractor, make_site):
        site = make_site("Store", {"config.php": 'DB_NAME="one"\n'})

        with patch.object(extractor, "_read_file", side_effect=PermissionError("denied")):
            result = extractor.scan_file(site / "config.php")

        assert not result.ok
        assert isinstance(result.error, FileReadError)

    def test_line_failures_are_skipped(self, extractor, make_site):
        site = make_site("Store", {"config.php": 'DB_NAME="one"\nTABLE="t"\n'})

        with patch(
            "db_inventory.extraction.connection._parse_line",
            side_effect=[RuntimeError("bad line"), None, None],
        ):
            result = extractor.scan_file(site / "config.php")

        assert result.ok
        assert result.value == []

    def test_undecodable_bytes_do_not_stop_the_scan(self, extractor, make_site):
        site = make_site("Store", {"config.php": b'\xff\xfe junk\nDB_NAME="sales"\nTABLE="orders"\n'})

        result = extractor.scan_file(site / "config.php")

        assert result.ok
        assert [m.value for m in result.value] == ["sales", "orders"]


class TestScanDirectory:
    @pytest.fixture
    def extractor(self):
        return ConnectionExtractor(extensions=EXTENSIONS)

    def test_finds_both_identifiers(self, extractor, make_site):
        site = make_site("ABC Co", {"config.php": 'DB_NAME="sales"\nTABLE_NAME="orders"\n'})

        connection = extractor.scan_directory(str(site))

        assert connection == Connection(db_name="sales", table="orders")

    def test_identifiers_can_come_from_different_files(self, extractor, make_site):
        site = make_site("Store", {"db.php": 'DB_NAME="sales"\n', "layout.json": 'LAYOUT="Prices"\n'})

        connection = extractor.scan_directory(str(site))

        assert connection == Connection(db_name="sales", table="Prices")

    def test_ignores_other_extensions_and_subdirectories(self, extractor, make_site):
        site = make_site("Store", {"notes.txt": 'DB_NAME="nope"\n', "config.PHP": 'TABLE="nope"\n'})
        nested = site / "backup.php"
        nested.mkdir()
        (nested / "config.php").write_text('DB_NAME="nested"\nTABLE="nested"\n')

        connection = extractor.scan_directory(str(site))

        assert connection == Connection()

    def test_stops_opening_files_once_both_are_found(self, extractor, make_site):
        both = 'DB_NAME="sales"\nTABLE="orders"\n'
        site = make_site("Store", {"a.php": both, "b.php": both, "c.json": both})

        with patch.object(extractor, "_read_file", wraps=extractor._read_file) as read_spy:
            connection = extractor.scan_directory(str(site))

        assert connection.is_complete
        assert read_spy.call_count == 1

    def test_file_completing_the_pair_is_read_to_the_end(self, extractor, make_site):
        site = make_site("Store", {"config.php": 'DB_NAME="first"\nTABLE="orders"\nDB_NAME="second"\n'})

        connection = extractor.scan_directory(str(site))

        assert connection.db_name == "second"
        assert connection.table == "orders"

    def test_unreadable_file_is_skipped(self, extractor, make_site):
        site = make_site("Store", {"config.php": 'DB_NAME="sales"\nTABLE="orders"\n'})

        with patch.object(extractor, "_read_file", side_effect=OSError("locked")):
            connection = extractor.scan_directory(str(site))

        assert connection == Connection()

    def test_counts_every_matching_line(self, extractor, make_site):
        site = make_site("Store", {"config.php": 'DB_NAME="a"\nDATABASE="b"\nTABLE="t"\n'})
        stats = ExtractionStats()

        extractor.scan_directory(str(site), stats)

        assert stats.database_names == 2
        assert stats.table_names == 1

    def test_missing_directory_raises(self, extractor, sites_root):
        with pytest.raises(DirectoryListError):
            extractor.scan_directory(str(sites_root / "missing"))

    def test_nul_in_directory_name_raises_directory_list_error(self, extractor, sites_root):
        with pytest.raises(DirectoryListError):
            extractor.scan_directory(f"{sites_root}/Bad\x00Site")

    def test_custom_extensions(self, make_site):
        site = make_site("Store", {"settings.ini": 'DB_NAME="sales"\nTABLE="orders"\n'})

        connection = ConnectionExtractor(extensions=(".ini",)).scan_directory(str(site))

        assert connection.is_complete


class TestExtract:
    def test_keeps_only_complete_records_in_order(self, make_site, sites_root):
        both = 'DB_NAME="sales"\nTABLE="orders"\n'
        make_site("First", {"config.php": both})
        make_site("Partial", {"config.php": 'DB_NAME="only_db"\n'})
        make_site("Second", {"settings.json": both})

        records = [
            Record(link="first", path=str(sites_root / "First")),
            Record(link="partial", path=str(sites_root / "Partial")),
            Record(link="no-path"),
            Record(link="missing", path=str(sites_root / "Missing")),
            Record(link="second", path=str(sites_root / "Second")),
        ]

        report = ConnectionExtractor(extensions=EXTENSIONS).extract(records)

        assert [record.link for record in report.records] == ["first", "second"]
        assert report.stats == ExtractionStats(database_names=3, table_names=2, total_records=5)

    def test_every_record_gets_a_connection(self, make_site, sites_root):
        make_site("Partial", {"config.php": 'TABLE="orders"\n'})
        records = [
            Record(link="partial", path=str(sites_root / "Partial")),
            Record(link="no-path"),
            Record(link="missing", path=str(sites_root / "Missing")),
        ]

        ConnectionExtractor(extensions=EXTENSIONS).extract(records)

        assert records[0].connection == Connection(table="orders")
        assert records[1].connection == Connection()
        assert records[1].path is None
        assert records[2].connection == Connection()

    def test_empty_manifest(self):
        report = ConnectionExtractor(extensions=EXTENSIONS).extract([])

        assert report.records == []
        assert report.stats.total_records == 0

    def test_path_with_nul_character_is_skipped(self, make_site, sites_root):
        make_site("Good", {"config.php": 'DB_NAME="sales"\nTABLE="orders"\n'})
        records = [
            Record(link="bad", path=f"{sites_root}/Bad\x00Site"),
            Record(link="good", path=str(sites_root / "Good")),
        ]

        report = ConnectionExtractor(extensions=EXTENSIONS).extract(records)

        assert [record.link for record in report.records] == ["good"]
        assert records[0].connection == Connection()
