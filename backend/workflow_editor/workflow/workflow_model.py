"""
Workflow Data Models — nodes, edges, and whole-graph snapshots.

These are the serializable data structures that describe
a user-designed workflow graph. They are mutated through
``GraphStore``, snapshotted by ``HistoryEngine`` and persisted
by ``PersistenceGateway``.

The wire layout mirrors the canvas collaborator::

    {"nodes": [{"id", "type", "position": {"x", "y"},
                "data": {"label", "executionTime"?, ...}}],
     "edges": [{"id"?, "source", "target"}]}

Reads are permissive: missing fields fall back to defaults so that
files exported by older editor builds keep loading.
"""

from __future__ import annotations

import copy
import math
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_NODE_TYPE = "default"
EXECUTION_TIME_KEY = "executionTime"


class NodeKind(str, Enum):
    """Node kinds offered by the editor palette.

    ``Node.type`` is a free string; these are the well-known values.
    """
    START = "Start"
    TASK = "Task"
    DECISION = "Decision"
    END = "End"


def coerce_execution_time(value: Any) -> float:
    """Read an ``executionTime`` value as a number of time units.

    The details panel edits the value as text, so numeric strings are
    accepted. Anything else (missing, booleans, NaN, garbage) counts as 0.
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _id_to_str(value: Any) -> Any:
    # Legacy exports carried numeric timestamp ids.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class Position(BaseModel):
    """Canvas coordinate of a node."""

    model_config = ConfigDict(allow_inf_nan=False)

    x: float = 0
    y: float = 0


class NodeData(BaseModel):
    """User-editable payload of a node.

    ``label`` is required by the canvas; every other key is an open
    extension field (``executionTime`` being the one the analytics
    panel reads).
    """

    model_config = ConfigDict(extra="allow")

    label: str = ""

    @property
    def extensions(self) -> Dict[str, Any]:
        """Extension fields beyond ``label``."""
        return dict(self.model_extra or {})

    @property
    def execution_time(self) -> float:
        return coerce_execution_time(self.extensions.get(EXECUTION_TIME_KEY))

    def merged(self, key: str, value: Any) -> "NodeData":
        """Return a new ``NodeData`` with one field replaced."""
        payload = self.model_dump()
        payload[key] = copy.deepcopy(value)
        return NodeData.model_validate(payload)


class Node(BaseModel):
    """A single node placed on the workflow canvas."""

    id: str
    type: str = DEFAULT_NODE_TYPE
    position: Position = Field(default_factory=Position)
    data: NodeData = Field(default_factory=NodeData)

    @model_validator(mode="before")
    @classmethod
    def _default_label(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        node_type = values.get("type") or DEFAULT_NODE_TYPE
        data = values.get("data")
        if data is None:
            return {**values, "data": {"label": node_type}}
        if isinstance(data, dict) and "label" not in data:
            return {**values, "data": {**data, "label": node_type}}
        return values

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return _id_to_str(value)

    @property
    def label(self) -> str:
        return self.data.label


class Edge(BaseModel):
    """A directed edge between two nodes.

    The ``source``/``target`` pair is the semantic identity; ``id`` is
    optional on read because hand-written files often omit it.
    """

    id: Optional[str] = None
    source: str
    target: str

    @field_validator("id", "source", "target", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> Any:
        return _id_to_str(value)

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id


class Workflow(BaseModel):
    """A complete workflow graph: ordered nodes and edges."""

    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_node_ids(self) -> "Workflow":
        seen: set = set()
        for node in self.nodes:
            if node.id in seen:
                raise ValueError(f"Duplicate node id: {node.id}")
            seen.add(node.id)
        return self

    @property
    def is_empty(self) -> bool:
        return not self.nodes and not self.edges

    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]

    def get_node(self, node_id: str) -> Optional[Node]:
        """Find a node by ID."""
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    def get_edges_from(self, node_id: str) -> List[Edge]:
        """Get all edges originating from a node."""
        return [e for e in self.edges if e.source == node_id]

    def get_edges_to(self, node_id: str) -> List[Edge]:
        """Get all edges pointing to a node."""
        return [e for e in self.edges if e.target == node_id]

    def prune_dangling_edges(self) -> List[Edge]:
        """Drop edges whose endpoints are not live nodes.

        Returns the removed edges.
        """
        live = set(self.node_ids())
        kept: List[Edge] = []
        dropped: List[Edge] = []
        for edge in self.edges:
            if edge.source in live and edge.target in live:
                kept.append(edge)
            else:
                dropped.append(edge)
        self.edges = kept
        return dropped

    def copy_deep(self) -> "Workflow":
        """Structurally independent copy, safe to store as a snapshot."""
        return self.model_copy(deep=True)

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready ``{nodes, edges}`` dict in the wire layout."""
        return self.model_dump(mode="json", exclude_none=True)


class HistoryState(BaseModel):
    """Read-only view of the undo/redo history."""

    past: List[Workflow] = Field(default_factory=list)
    present: Workflow = Field(default_factory=Workflow)
    future: List[Workflow] = Field(default_factory=list)
