"""Tests for JSON storage of repository contents."""

from __future__ import annotations

import json
import os
from datetime import date
from pathlib import Path

import pytest

from invctl.domain.items import ElectronicItem, GroceryItem
from invctl.infrastructure.storage import (
    StorageError,
    dump_items,
    load_items,
    parse_items,
    save_items,
)
from tests.conftest import make_electronic, make_grocery


class TestSaveAndLoad:
    def test_round_trip_preserves_variant_fields(self, tmp_path: Path) -> None:
        path = tmp_path / "grocery.json"
        items = [
            make_grocery(101, "Milk", 50, date(2026, 10, 26)),
            make_grocery(102, "Rice", 100, date(2027, 4, 19)),
        ]
        save_items(path, items, GroceryItem)
        assert load_items(path, GroceryItem) == items

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "electronic.json"
        save_items(path, [make_electronic()], ElectronicItem)
        assert path.is_file()

    def test_missing_file_loads_empty(self, tmp_path: Path) -> None:
        assert load_items(tmp_path / "absent.json", ElectronicItem) == []

    def test_document_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "electronic.json"
        save_items(path, [make_electronic(1)], ElectronicItem, indent=4)
        document = json.loads(path.read_text(encoding="utf-8"))
        assert document["kind"] == "electronic"
        assert document["items"][0] == {
            "kind": "electronic",
            "id": 1,
            "name": "Laptop",
            "quantity": 10,
            "brand": "Dell",
            "warranty_months": 24,
        }

    def test_dates_serialized_as_iso(self) -> None:
        raw = dump_items([make_grocery(expiry_date=date(2026, 10, 26))], GroceryItem)
        assert '"expiry_date": "2026-10-26"' in raw

    def test_duplicates_are_not_collapsed(self, tmp_path: Path) -> None:
        """Storage returns every record; the repository decides on duplicates."""
        path = tmp_path / "electronic.json"
        save_items(path, [make_electronic(1), make_electronic(1, name="Tablet")], ElectronicItem)
        assert [i.name for i in load_items(path, ElectronicItem)] == ["Laptop", "Tablet"]

    def test_unwritable_target_raises_storage_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(StorageError) as exc_info:
            save_items(blocker / "electronic.json", [make_electronic()], ElectronicItem)
        assert exc_info.value.path == blocker / "electronic.json"

    def test_non_utf8_file_raises_storage_error(self, tmp_path: Path) -> None:
        path = tmp_path / "electronic.json"
        path.write_bytes(b'{"items": [\xff\xfe]}')
        with pytest.raises(StorageError, match="UTF-8") as exc_info:
            load_items(path, ElectronicItem)
        assert exc_info.value.path == path

    def test_unreadable_file_raises_storage_error(self, tmp_path: Path) -> None:
        path = tmp_path / "electronic.json"
        save_items(path, [make_electronic()], ElectronicItem)
        path.chmod(0)
        try:
            if os.access(path, os.R_OK):
                pytest.skip("running with permissions that ignore file modes")
            with pytest.raises(StorageError):
                load_items(path, ElectronicItem)
        finally:
            path.chmod(0o644)


class TestParseErrors:
    def test_invalid_json(self, tmp_path: Path) -> None:
        with pytest.raises(StorageError, match="invalid JSON"):
            parse_items("{not json", ElectronicItem, source=tmp_path / "x.json")

    def test_missing_items_key(self, tmp_path: Path) -> None:
        with pytest.raises(StorageError, match="'items'"):
            parse_items('{"kind": "electronic"}', ElectronicItem, source=tmp_path / "x.json")

    def test_top_level_list_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(StorageError):
            parse_items("[]", ElectronicItem, source=tmp_path / "x.json")

    def test_kind_mismatch(self, tmp_path: Path) -> None:
        raw = dump_items([make_grocery()], GroceryItem)
        with pytest.raises(StorageError, match="expected 'electronic'"):
            parse_items(raw, ElectronicItem, source=tmp_path / "x.json")

    def test_invalid_record(self, tmp_path: Path) -> None:
        raw = json.dumps({"kind": "electronic", "items": [{"id": 1, "name": "Laptop"}]})
        with pytest.raises(StorageError, match="invalid record") as exc_info:
            parse_items(raw, ElectronicItem, source=tmp_path / "x.json")
        assert exc_info.value.path == tmp_path / "x.json"

    def test_kind_defaults_to_expected(self, tmp_path: Path) -> None:
        raw = json.dumps(
            {"items": [{"id": 1, "name": "Laptop", "quantity": 2, "brand": "HP", "warranty_months": 6}]}
        )
        items = parse_items(raw, ElectronicItem, source=tmp_path / "x.json")
        assert items[0].brand == "HP"
