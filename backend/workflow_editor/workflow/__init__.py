"""
Workflow Engine — state core of the visual workflow editor.

Architecture:
    workflow_model  — Node / Edge / Workflow data models
    graph_store     — Mutable node/edge collections with cascade delete
    history         — Bounded linear undo/redo over graph snapshots
    workflow_store  — Key-value storage port + JSON file backend
    persistence     — Save/load and file export/import of workflows
    analytics       — Chart-ready execution-time projections
    palette         — Node types offered by the editor sidebar
    editor_session  — Gesture dispatcher tying the above together
"""

from workflow_editor.workflow.workflow_model import (
    Edge,
    HistoryState,
    Node,
    NodeData,
    NodeKind,
    Position,
    Workflow,
)
from workflow_editor.workflow.graph_store import GraphStore, MutationStatus
from workflow_editor.workflow.history import HistoryEngine
from workflow_editor.workflow.workflow_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
)
from workflow_editor.workflow.persistence import PersistenceGateway, parse_workflow
from workflow_editor.workflow.analytics import (
    AnalyticsProjection,
    ChartPoint,
    project_analytics,
)
from workflow_editor.workflow.palette import PaletteEntry, get_palette
from workflow_editor.workflow.editor_session import EditorSession

__all__ = [
    "Edge",
    "HistoryState",
    "Node",
    "NodeData",
    "NodeKind",
    "Position",
    "Workflow",
    "GraphStore",
    "MutationStatus",
    "HistoryEngine",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "PersistenceGateway",
    "parse_workflow",
    "AnalyticsProjection",
    "ChartPoint",
    "project_analytics",
    "PaletteEntry",
    "get_palette",
    "EditorSession",
]
