"""
Editor Session — the single-writer dispatcher behind one editor canvas.

Each collaborator gesture (drop, connect, edit, delete, clear) is
processed to completion before the next one:

    GraphStore mutation → HistoryEngine checkpoint → optional save

Loading and importing replace the graph directly and restart history
from the loaded workflow instead of checkpointing it. A failed write
never rolls back the in-memory graph.
"""

from __future__ import annotations

import uuid
from logging import getLogger
from typing import Any, List, Optional

from workflow_editor.config import EditorConfig
from workflow_editor.errors import PersistenceError
from workflow_editor.logging import configure_logging, get_session_logger
from workflow_editor.workflow.analytics import AnalyticsProjection, project_analytics
from workflow_editor.workflow.graph_store import GraphStore, MutationStatus, PositionLike
from workflow_editor.workflow.history import HistoryEngine
from workflow_editor.workflow.persistence import PersistenceGateway
from workflow_editor.workflow.workflow_model import Edge, HistoryState, Node, Workflow
from workflow_editor.workflow.workflow_store import JsonFileKeyValueStore

logger = getLogger(__name__)


class EditorSession:
    """Graph, history and persistence for one editor."""

    def __init__(
        self,
        gateway: Optional[PersistenceGateway] = None,
        config: Optional[EditorConfig] = None,
        session_id: Optional[str] = None,
    ) -> None:
        self._config = config or EditorConfig()
        self._gateway = gateway if gateway is not None else PersistenceGateway(
            record_key=self._config.record_key
        )
        self._store = GraphStore()
        self._history = HistoryEngine(capacity=self._config.history_capacity)
        self._selected_id: Optional[str] = None
        self._dirty = False
        self.last_persistence_error: Optional[PersistenceError] = None
        self.session_id = session_id or str(uuid.uuid4())[:8]
        self._log = get_session_logger(self.session_id)

    @classmethod
    def from_config(cls, config: Optional[EditorConfig] = None) -> "EditorSession":
        """Session backed by the file store configured in ``config``."""
        config = config or EditorConfig.get_default_instance()
        configure_logging(config.log_level)
        gateway = PersistenceGateway(
            JsonFileKeyValueStore(config.storage_dir), record_key=config.record_key
        )
        logger.info(f"Editor session using store at {config.storage_dir}")
        return cls(gateway=gateway, config=config)

    # ── State ──

    @property
    def workflow(self) -> Workflow:
        return self._store.snapshot()

    @property
    def nodes(self) -> List[Node]:
        return self._store.nodes

    @property
    def edges(self) -> List[Edge]:
        return self._store.edges

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def selected_node(self) -> Optional[Node]:
        if self._selected_id is None:
            return None
        return self._store.find_node(self._selected_id)

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def history_state(self) -> HistoryState:
        return self._history.state()

    def analytics(self) -> AnalyticsProjection:
        return project_analytics(self._store.nodes)

    # ── Gestures ──

    def on_drop(self, node_type: str, position: PositionLike) -> Node:
        """A palette item was dropped on the canvas."""
        node = self._store.add_node(node_type, position)
        self._commit("drop", node_id=node.id, type=node_type)
        return node

    def on_connect(self, source: str, target: str) -> Edge:
        edge = self._store.add_edge(source, target)
        self._commit("connect", source=source, target=target)
        return edge

    def on_node_click(self, node_id: str) -> Node:
        """Select a node for the details panel."""
        node = self._store.get_node(node_id)
        self._selected_id = node_id
        return node

    def clear_selection(self) -> None:
        self._selected_id = None

    def on_node_drag_stop(self, node_id: str, position: PositionLike) -> MutationStatus:
        status = self._store.move_node(node_id, position)
        if status.applied:
            self._commit("move", node_id=node_id)
        return status

    def update_node_field(self, node_id: str, key: str, value: Any) -> MutationStatus:
        status = self._store.update_node_field(node_id, key, value)
        if status.applied:
            self._commit("update", node_id=node_id, key=key)
        else:
            self._log.warning(f"update ignored, node {node_id} not found")
        return status

    def rename_node(self, node_id: str, label: str) -> MutationStatus:
        """Set a node's label and save, as the details panel does."""
        status = self.update_node_field(node_id, "label", label)
        if status.applied and not self._config.autosave:
            self._try_save()
        return status

    def delete_node(self, node_id: str) -> MutationStatus:
        status = self._store.delete_node(node_id)
        if status.applied:
            if self._selected_id == node_id:
                self._selected_id = None
            self._commit("delete_node", node_id=node_id)
        return status

    def delete_edge(self, edge_id: str) -> MutationStatus:
        status = self._store.delete_edge(edge_id)
        if status.applied:
            self._commit("delete_edge", edge_id=edge_id)
        return status

    def clear(self) -> None:
        """Empty the canvas and forget the saved record."""
        self._store.clear()
        self._selected_id = None
        self._commit("clear")
        try:
            self._gateway.discard()
        except PersistenceError as e:
            self._record_failure("discard", e)

    # ── History ──

    def undo(self) -> bool:
        workflow = self._history.undo()
        if workflow is None:
            return False
        self._restore(workflow)
        self._log.event("undo")
        return True

    def redo(self) -> bool:
        workflow = self._history.redo()
        if workflow is None:
            return False
        self._restore(workflow)
        self._log.event("redo")
        return True

    # ── Persistence ──

    def save(self) -> None:
        """Write the current graph to the durable record.

        Raises ``PersistenceError``; the graph is untouched either way.
        """
        self._gateway.save(self._store.snapshot())
        self._dirty = False
        self.last_persistence_error = None

    def load(self) -> Workflow:
        """Replace the graph with the stored record (history restarts)."""
        workflow = self._gateway.load()
        self._install(workflow)
        self._dirty = False
        self._log.event("load", nodes=len(workflow.nodes), edges=len(workflow.edges))
        return workflow

    def export_file(self) -> bytes:
        return self._gateway.export_file(self._store.snapshot())

    def import_file(self, data) -> Workflow:
        """Replace the graph with an imported file (history restarts)."""
        workflow = self._gateway.import_file(data)
        self._install(workflow)
        self._dirty = True
        self._log.event("import", nodes=len(workflow.nodes), edges=len(workflow.edges))
        return workflow

    # ── Internals ──

    def _commit(self, action: str, **details: Any) -> None:
        self._history.checkpoint(self._store.snapshot())
        self._dirty = True
        self._log.event(action, **details)
        if self._config.autosave:
            self._try_save()

    def _try_save(self) -> None:
        try:
            self.save()
        except PersistenceError as e:
            self._record_failure("save", e)

    def _record_failure(self, operation: str, error: PersistenceError) -> None:
        self.last_persistence_error = error
        self._log.error(f"{operation} failed, in-memory graph kept: {error}")

    def _restore(self, workflow: Workflow) -> None:
        self._store.replace(workflow)
        if self._selected_id and self._store.find_node(self._selected_id) is None:
            self._selected_id = None
        self._dirty = True

    def _install(self, workflow: Workflow) -> None:
        self._store.replace(workflow)
        self._history.reset(workflow)
        self._selected_id = None
