"""Tests for the flat JSON file store."""

import json
import threading

import pytest

from storefront.core.config import get_settings
from storefront.database import JsonCollection, create_data_files, read_json, write_json


class TestReadWrite:
    def test_missing_file_created_with_fallback(self, tmp_path):
        path = tmp_path / "nested" / "orders.json"

        assert read_json(path, []) == []
        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == []

    def test_existing_file_is_read(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text('[{"id": 1}]', encoding="utf-8")

        assert read_json(path, []) == [{"id": 1}]

    def test_corrupted_file_raises(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(json.JSONDecodeError):
            read_json(path, [])

    def test_write_replaces_document(self, tmp_path):
        path = tmp_path / "data.json"
        write_json(path, [1, 2])
        write_json(path, {"a": "é"})

        assert json.loads(path.read_text(encoding="utf-8")) == {"a": "é"}
        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]


class TestJsonCollection:
    def test_append_keeps_order(self, tmp_path):
        collection = JsonCollection(tmp_path / "orders.json")
        collection.append({"ref": "A"})
        collection.append({"ref": "B"})

        assert collection.all() == [{"ref": "A"}, {"ref": "B"}]

    def test_ensure_does_not_clobber(self, tmp_path):
        collection = JsonCollection(tmp_path / "orders.json")
        collection.append({"ref": "A"})
        collection.ensure()

        assert collection.all() == [{"ref": "A"}]

    def test_concurrent_appends_are_not_lost(self, tmp_path):
        path = tmp_path / "orders.json"
        workers = 8
        per_worker = 25

        def worker(n):
            collection = JsonCollection(path)
            for i in range(per_worker):
                collection.append({"worker": n, "i": i})

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(workers)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        entries = JsonCollection(path).all()
        assert len(entries) == workers * per_worker
        for n in range(workers):
            mine = [e["i"] for e in entries if e["worker"] == n]
            assert mine == list(range(per_worker))


def test_create_data_files(data_dir):
    create_data_files(get_settings())

    assert json.loads((data_dir / "orders.json").read_text()) == []
    assert json.loads((data_dir / "messages.json").read_text()) == []
    assert not (data_dir / "products.json").exists()
