# tests/test_workflow_model.py
"""
Node/Edge/Workflow model behaviour: permissive defaults, id uniqueness,
execution-time coercion and deep copies.
"""

import pytest
from pydantic import ValidationError as SchemaError

from workflow_editor.workflow.workflow_model import (
    Edge,
    Node,
    NodeData,
    Position,
    Workflow,
    coerce_execution_time,
)


def test_node_label_defaults_to_type_when_data_missing():
    node = Node.model_validate({"id": "1", "type": "output"})
    assert node.data.label == "output"
    assert node.position.x == 0 and node.position.y == 0


def test_node_label_defaults_to_type_when_label_missing():
    node = Node.model_validate({"id": "1", "type": "Task", "data": {"executionTime": 4}})
    assert node.label == "Task"
    assert node.data.execution_time == 4.0


def test_numeric_ids_are_read_as_strings():
    node = Node.model_validate({"id": 1700000000000, "type": "default"})
    edge = Edge.model_validate({"source": 1, "target": 2})
    assert node.id == "1700000000000"
    assert (edge.source, edge.target) == ("1", "2")
    assert edge.id is None


def test_node_data_keeps_extension_fields():
    data = NodeData.model_validate({"label": "A", "executionTime": 3, "owner": "ops"})
    assert data.extensions == {"executionTime": 3, "owner": "ops"}
    assert data.model_dump() == {"label": "A", "executionTime": 3, "owner": "ops"}


def test_merged_returns_new_value():
    data = NodeData.model_validate({"label": "A", "owner": "ops"})
    merged = data.merged("executionTime", 7)
    assert merged.extensions == {"owner": "ops", "executionTime": 7}
    assert data.extensions == {"owner": "ops"}


@pytest.mark.parametrize(
    "raw, expected",
    [
        (5, 5.0),
        (2.5, 2.5),
        ("12", 12.0),
        (" 3.5 ", 3.5),
        ("", 0.0),
        ("abc", 0.0),
        (None, 0.0),
        (True, 0.0),
        (float("nan"), 0.0),
        ([1], 0.0),
    ],
)
def test_coerce_execution_time(raw, expected):
    assert coerce_execution_time(raw) == expected


def test_duplicate_node_ids_rejected():
    with pytest.raises(SchemaError):
        Workflow.model_validate(
            {"nodes": [{"id": "a"}, {"id": "a"}], "edges": []}
        )


def test_prune_dangling_edges():
    wf = Workflow.model_validate(
        {
            "nodes": [{"id": "a"}, {"id": "b"}],
            "edges": [
                {"source": "a", "target": "b"},
                {"source": "a", "target": "ghost"},
            ],
        }
    )
    dropped = wf.prune_dangling_edges()
    assert [e.target for e in dropped] == ["ghost"]
    assert len(wf.edges) == 1


def test_copy_deep_is_independent():
    wf = Workflow.model_validate(
        {"nodes": [{"id": "a", "data": {"label": "A", "tags": ["x"]}}]}
    )
    copy = wf.copy_deep()
    copy.nodes[0].data.model_extra["tags"].append("y")
    copy.nodes[0].position.x = 99
    assert wf.nodes[0].data.extensions["tags"] == ["x"]
    assert wf.nodes[0].position.x == 0


def test_to_payload_wire_layout():
    wf = Workflow.model_validate(
        {
            "nodes": [{"id": "1", "type": "input", "data": {"label": "Start"}, "position": {"x": 1, "y": 2}}],
            "edges": [{"source": "1", "target": "1"}],
        }
    )
    assert wf.to_payload() == {
        "nodes": [
            {"id": "1", "type": "input", "position": {"x": 1.0, "y": 2.0}, "data": {"label": "Start"}}
        ],
        "edges": [{"source": "1", "target": "1"}],
    }


def test_edge_lookups():
    wf = Workflow.model_validate(
        {
            "nodes": [{"id": "a"}, {"id": "b"}],
            "edges": [{"source": "a", "target": "b"}, {"source": "b", "target": "b"}],
        }
    )
    assert len(wf.get_edges_from("a")) == 1
    assert len(wf.get_edges_to("b")) == 2
    assert wf.get_node("b").id == "b"
    assert wf.get_node("zzz") is None


def test_merged_copies_the_value():
    matrix = {"rows": [[1, 2]]}
    data = NodeData(label="A").merged("matrix", matrix)
    matrix["rows"][0].append(3)
    assert data.extensions == {"matrix": {"rows": [[1, 2]]}}


@pytest.mark.parametrize("x", [float("nan"), float("inf"), float("-inf")])
def test_position_rejects_non_finite_coordinates(x):
    with pytest.raises(SchemaError):
        Position(x=x, y=0)
