"""
Graph Store — the canonical node/edge collections of the editor.

All mutations replace ``Node`` values rather than editing them in
place, so snapshots handed out earlier are never altered afterwards.
Mutations that reference a missing id return ``MutationStatus.NOT_FOUND``
instead of silently doing nothing.
"""

from __future__ import annotations

import uuid
from enum import Enum
from logging import getLogger
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as SchemaError

from workflow_editor.errors import FieldValueError, NotFoundError
from workflow_editor.workflow.workflow_model import Edge, Node, NodeData, Position, Workflow

logger = getLogger(__name__)

PositionLike = Union[Position, Dict[str, float]]


class MutationStatus(str, Enum):
    """Outcome of an id-addressed mutation."""
    APPLIED = "applied"
    NOT_FOUND = "not_found"

    @property
    def applied(self) -> bool:
        return self is MutationStatus.APPLIED


def _new_id() -> str:
    return str(uuid.uuid4())[:8]


def _as_position(position: PositionLike) -> Position:
    if isinstance(position, Position):
        position = position.model_dump()
    try:
        return Position.model_validate(position)
    except SchemaError as e:
        raise FieldValueError(f"Invalid position {position!r}: {e}") from e


class GraphStore:
    """Mutable workflow graph: ordered nodes plus ordered edges."""

    def __init__(self, workflow: Optional[Workflow] = None) -> None:
        self._nodes: List[Node] = []
        self._edges: List[Edge] = []
        if workflow is not None:
            self.replace(workflow)

    # ── Read ──
    # Everything handed out is a deep copy; the live graph only changes
    # through the mutation methods below.

    @property
    def nodes(self) -> List[Node]:
        return [n.model_copy(deep=True) for n in self._nodes]

    @property
    def edges(self) -> List[Edge]:
        return [e.model_copy(deep=True) for e in self._edges]

    def has_node(self, node_id: str) -> bool:
        return self._index_of(node_id) is not None

    def find_node(self, node_id: str) -> Optional[Node]:
        index = self._index_of(node_id)
        if index is None:
            return None
        return self._nodes[index].model_copy(deep=True)

    def get_node(self, node_id: str) -> Node:
        """Return a node by ID or raise ``NotFoundError``."""
        node = self.find_node(node_id)
        if node is None:
            raise NotFoundError("Node", node_id)
        return node

    def edges_of(self, node_id: str) -> List[Edge]:
        """All edges incident to a node, in either direction."""
        return [e.model_copy(deep=True) for e in self._edges if e.touches(node_id)]

    def snapshot(self) -> Workflow:
        """Deep copy of the current graph."""
        return Workflow(nodes=self._nodes, edges=self._edges).copy_deep()

    def replace(self, workflow: Workflow) -> None:
        """Install a deep copy of ``workflow`` as the live graph."""
        fresh = workflow.copy_deep()
        self._nodes = list(fresh.nodes)
        self._edges = list(fresh.edges)

    # ── Nodes ──

    def add_node(self, node_type: str, position: PositionLike) -> Node:
        """Append a node of ``node_type`` labelled with the type name."""
        node_id = _new_id()
        while self.has_node(node_id):
            node_id = _new_id()
        node = Node(
            id=node_id,
            type=node_type,
            position=_as_position(position),
            data=NodeData(label=node_type),
        )
        self._nodes.append(node)
        logger.debug(f"Node added: {node_type} ({node_id})")
        return node.model_copy(deep=True)

    def update_node_field(self, node_id: str, key: str, value: Any) -> MutationStatus:
        """Merge one field into a node's ``data``, keeping the others."""
        index = self._index_of(node_id)
        if index is None:
            logger.debug(f"update_node_field: node {node_id} not found")
            return MutationStatus.NOT_FOUND
        node = self._nodes[index]
        try:
            data = node.data.merged(key, value)
        except SchemaError as e:
            raise FieldValueError(f"Invalid value for '{key}': {e}") from e
        self._nodes[index] = node.model_copy(update={"data": data})
        return MutationStatus.APPLIED

    def move_node(self, node_id: str, position: PositionLike) -> MutationStatus:
        index = self._index_of(node_id)
        if index is None:
            return MutationStatus.NOT_FOUND
        node = self._nodes[index]
        self._nodes[index] = node.model_copy(update={"position": _as_position(position)})
        return MutationStatus.APPLIED

    def delete_node(self, node_id: str) -> MutationStatus:
        """Remove a node and cascade-delete every edge touching it."""
        index = self._index_of(node_id)
        if index is None:
            return MutationStatus.NOT_FOUND
        del self._nodes[index]
        before = len(self._edges)
        self._edges = [e for e in self._edges if not e.touches(node_id)]
        logger.debug(
            f"Node deleted: {node_id} (cascaded {before - len(self._edges)} edges)"
        )
        return MutationStatus.APPLIED

    # ── Edges ──

    def add_edge(self, source: str, target: str) -> Edge:
        """Connect two existing nodes.

        Parallel edges and self-loops are kept as drawn.
        """
        for endpoint in (source, target):
            if not self.has_node(endpoint):
                raise NotFoundError("Node", endpoint)
        edge_id = f"e{source}-{target}-{_new_id()}"
        edge = Edge(id=edge_id, source=source, target=target)
        self._edges.append(edge)
        logger.debug(f"Edge added: {source} -> {target} ({edge_id})")
        return edge.model_copy(deep=True)

    def delete_edge(self, edge_id: str) -> MutationStatus:
        for i, e in enumerate(self._edges):
            if e.id == edge_id:
                del self._edges[i]
                return MutationStatus.APPLIED
        return MutationStatus.NOT_FOUND

    def clear(self) -> None:
        """Empty both collections at once."""
        self._nodes, self._edges = [], []

    # ── Internals ──

    def _index_of(self, node_id: str) -> Optional[int]:
        for i, n in enumerate(self._nodes):
            if n.id == node_id:
                return i
        return None
