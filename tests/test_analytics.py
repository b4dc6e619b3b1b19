# tests/test_analytics.py
from workflow_editor.workflow import Node, project_analytics


def _node(node_id, label, time=None):
    data = {"label": label}
    if time is not None:
        data["executionTime"] = time
    return Node.model_validate({"id": node_id, "data": data})


def _values(points):
    return [p.value for p in points]


def test_two_nodes():
    projection = project_analytics([_node("1", "A", 5), _node("2", "B", 3)])
    assert _values(projection.per_node_time) == [5, 3]
    assert _values(projection.cumulative_time) == [0, 8]
    assert _values(projection.share_of_total) == [5, 3]
    assert [p.label for p in projection.per_node_time] == ["A", "B"]


def test_cumulative_uses_previous_raw_time_not_running_total():
    projection = project_analytics(
        [_node("1", "A", 5), _node("2", "B", 3), _node("3", "C", 2)]
    )
    # 3 + 2, not 5 + 3 + 2
    assert _values(projection.cumulative_time) == [0, 8, 5]


def test_missing_and_non_numeric_times_count_as_zero():
    projection = project_analytics(
        [_node("1", "A"), _node("2", "B", "oops"), _node("3", "C", "4")]
    )
    assert _values(projection.per_node_time) == [0, 0, 4]
    assert _values(projection.cumulative_time) == [0, 0, 4]
    assert projection.total_time == 4


def test_empty_node_sequence():
    projection = project_analytics([])
    assert projection.is_empty
    assert projection.per_node_time == []
    assert projection.cumulative_time == []
    assert projection.share_of_total == []
    assert projection.total_time == 0


def test_chart_data_shapes():
    data = project_analytics([_node("1", "A", 5), _node("2", "B", 3)]).to_chart_data()
    assert data["per_node_time"][0] == {"name": "A", "time": 5}
    assert data["cumulative_time"][1] == {"name": "B", "cumulative": 8}
    assert data["share_of_total"][1] == {"name": "B", "value": 3}
