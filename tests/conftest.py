import logging

import pytest

from workflow_editor.config import EditorConfig
from workflow_editor.workflow import (
    EditorSession,
    GraphStore,
    InMemoryKeyValueStore,
    PersistenceGateway,
)


@pytest.fixture(autouse=True)
def _restore_editor_logging():
    """Undo handler/level changes made by ``configure_logging``."""
    root = logging.getLogger("workflow_editor")
    level, handlers = root.level, list(root.handlers)
    yield
    root.setLevel(level)
    root.handlers[:] = handlers


@pytest.fixture()
def store():
    """Empty graph store."""
    return GraphStore()


@pytest.fixture()
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture()
def gateway(kv):
    return PersistenceGateway(kv)


@pytest.fixture()
def session(gateway, tmp_path):
    """Editor session over an in-memory record store."""
    config = EditorConfig(storage_dir=tmp_path, history_limit=100)
    return EditorSession(gateway=gateway, config=config)
