"""
Analytics Projector — chart-ready aggregates of node execution times.

A pure, read-only projection of the node sequence. Topology is
ignored; nodes are reported in canvas order.

The cumulative series is *not* a running total: index 0 is always 0
and every later point is the previous node's own time plus the
current node's own time. This matches what the editor has always
plotted and is kept as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from workflow_editor.workflow.workflow_model import Node


@dataclass(frozen=True)
class ChartPoint:
    label: str
    value: float


@dataclass
class AnalyticsProjection:
    """The three series handed to the charting collaborator."""
    per_node_time: List[ChartPoint] = field(default_factory=list)
    cumulative_time: List[ChartPoint] = field(default_factory=list)
    share_of_total: List[ChartPoint] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.per_node_time

    @property
    def total_time(self) -> float:
        return sum(p.value for p in self.per_node_time)

    def to_chart_data(self) -> Dict[str, List[Dict[str, Any]]]:
        """Serialize for the charting frontend (bar, line and pie)."""
        return {
            "per_node_time": [
                {"name": p.label, "time": p.value} for p in self.per_node_time
            ],
            "cumulative_time": [
                {"name": p.label, "cumulative": p.value} for p in self.cumulative_time
            ],
            "share_of_total": [
                {"name": p.label, "value": p.value} for p in self.share_of_total
            ],
        }


def project_analytics(nodes: Sequence[Node]) -> AnalyticsProjection:
    """Derive per-node, cumulative and share-of-total series."""
    labels = [n.data.label for n in nodes]
    times = [n.data.execution_time for n in nodes]

    cumulative: List[ChartPoint] = []
    for i, label in enumerate(labels):
        value = 0.0 if i == 0 else times[i - 1] + times[i]
        cumulative.append(ChartPoint(label, value))

    return AnalyticsProjection(
        per_node_time=[ChartPoint(l, t) for l, t in zip(labels, times)],
        cumulative_time=cumulative,
        share_of_total=[ChartPoint(l, t) for l, t in zip(labels, times)],
    )
