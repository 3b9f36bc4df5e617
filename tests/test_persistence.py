"""Tests for saving and loading the item collection."""

import json

import pytest

from smartshop.data_store import BackendType, create_data_store
from smartshop.models import ShoppingItem
from smartshop.persistence import (
    STORAGE_SLOT,
    PersistenceBridge,
    dump_items,
    parse_items,
)


class TestSerialization:
    """Tests for the stored format."""

    def test_dump_format(self):
        item = ShoppingItem(id="id-1", name="Milk", category="Dairy", is_bought=True)
        data = json.loads(dump_items([item]))
        assert data == [{"id": "id-1", "name": "Milk", "category": "Dairy", "isBought": True}]

    def test_parse_rejects_duplicate_ids(self):
        blob = json.dumps(
            [
                {"id": "same", "name": "Milk", "category": "Dairy", "isBought": False},
                {"id": "same", "name": "Eggs", "category": "Dairy", "isBought": False},
            ]
        )
        with pytest.raises(ValueError, match="duplicate"):
            parse_items(blob)


class TestPersistenceBridge:
    """Tests for PersistenceBridge."""

    def test_default_slot(self, bridge, temp_data_dir):
        bridge.save([])
        assert bridge.slot == STORAGE_SLOT
        assert (temp_data_dir / f"{STORAGE_SLOT}.json").exists()

    def test_load_without_saved_value(self, bridge):
        assert bridge.load() == []

    def test_round_trip(self, bridge, sample_items):
        bridge.save(sample_items)
        assert bridge.load() == sample_items

    @pytest.mark.parametrize("backend", list(BackendType))
    def test_round_trip_each_backend(self, backend, temp_data_dir, sample_items):
        bridge = PersistenceBridge(create_data_store(backend, data_dir=temp_data_dir))
        bridge.save(sample_items)
        assert bridge.load() == sample_items

    def test_save_overwrites(self, bridge, sample_items):
        bridge.save(sample_items)
        bridge.save(sample_items[:1])
        assert bridge.load() == sample_items[:1]

    @pytest.mark.parametrize(
        "blob",
        [
            "{not json",
            "",
            '{"items": []}',
            '[{"id": "1", "category": "X"}]',
            '[{"id": "1", "name": "", "category": "X", "isBought": false}]',
            '[{"id": "1", "name": "Milk", "category": "X", "isBought": "maybe"}]',
        ],
    )
    def test_corrupt_blob_loads_empty(self, bridge, data_store, blob, caplog):
        data_store.write(STORAGE_SLOT, blob)
        assert bridge.load() == []
        assert "corrupt" in caplog.text

    def test_unreadable_blob_loads_empty(self, bridge, temp_data_dir):
        (temp_data_dir / f"{STORAGE_SLOT}.json").write_bytes(b"\xff\xfe\x00garbage")
        assert bridge.load() == []

    def test_read_error_loads_empty(self, sample_items):
        class BrokenStore:
            def read(self, slot):
                raise OSError("permission denied")

        assert PersistenceBridge(BrokenStore()).load() == []

    def test_damaged_sqlite_file_loads_empty(self, temp_data_dir, caplog):
        (temp_data_dir / "smartshop.db").write_bytes(b"this is not a database" * 100)
        bridge = PersistenceBridge(create_data_store(BackendType.SQLITE, data_dir=temp_data_dir))

        assert bridge.load() == []
        assert "starting empty" in caplog.text
