# tests/test_workflow_store.py
from pathlib import Path

import pytest

from workflow_editor.errors import PersistenceError
from workflow_editor.workflow import JsonFileKeyValueStore, PersistenceGateway, Workflow


@pytest.fixture()
def file_store(tmp_path):
    return JsonFileKeyValueStore(tmp_path / "records")


def test_creates_storage_dir(tmp_path):
    store = JsonFileKeyValueStore(tmp_path / "a" / "b")
    assert store.storage_dir.is_dir()


def test_get_missing_returns_none(file_store):
    assert file_store.get("workflow") is None


def test_set_get_delete(file_store):
    file_store.set("workflow", '{"nodes": []}')
    assert file_store.get("workflow") == '{"nodes": []}'
    assert (file_store.storage_dir / "workflow.json").exists()
    assert file_store.delete("workflow") is True
    assert file_store.delete("workflow") is False
    assert file_store.get("workflow") is None


def test_set_leaves_no_temp_files(file_store):
    file_store.set("workflow", "one")
    file_store.set("workflow", "two")
    files = sorted(p.name for p in file_store.storage_dir.iterdir())
    assert files == ["workflow.json"]
    assert file_store.get("workflow") == "two"


def test_keys_are_sanitized(file_store):
    file_store.set("../escape", "x")
    assert (file_store.storage_dir / "escape.json").exists()


def test_unusable_key_rejected(file_store):
    with pytest.raises(PersistenceError):
        file_store.set("///", "x")


def test_gateway_over_file_store(file_store):
    gateway = PersistenceGateway(file_store)
    wf = Workflow.model_validate({"nodes": [{"id": "n1", "type": "input"}]})
    gateway.save(wf)
    assert PersistenceGateway(JsonFileKeyValueStore(file_store.storage_dir)).load() == wf


def test_failed_replace_cleans_up_temp_file(file_store, monkeypatch):
    file_store.set("workflow", "original")

    def refuse(self, target):
        raise OSError("device busy")

    monkeypatch.setattr(Path, "replace", refuse)
    with pytest.raises(PersistenceError):
        file_store.set("workflow", "update")
    monkeypatch.undo()

    assert sorted(p.name for p in file_store.storage_dir.iterdir()) == ["workflow.json"]
    assert file_store.get("workflow") == "original"
