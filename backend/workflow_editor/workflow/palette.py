"""
Node Palette — the draggable node types shown in the editor sidebar.

Each entry pairs the sidebar label with the canvas node type the drop
event carries (``input``/``default``/``output`` are the canvas's
built-in renderers).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from workflow_editor.workflow.workflow_model import NodeKind


@dataclass(frozen=True)
class PaletteEntry:
    label: str
    node_type: str

    def to_dict(self) -> dict:
        return {"label": self.label, "type": self.node_type}


DEFAULT_PALETTE: List[PaletteEntry] = [
    PaletteEntry(NodeKind.START.value, "input"),
    PaletteEntry(NodeKind.TASK.value, "default"),
    PaletteEntry(NodeKind.DECISION.value, "default"),
    PaletteEntry(NodeKind.END.value, "output"),
]


def get_palette() -> List[PaletteEntry]:
    """Return a copy of the default palette, in sidebar order."""
    return list(DEFAULT_PALETTE)


def find_palette_entry(label: str) -> Optional[PaletteEntry]:
    """Find a palette entry by its (case-insensitive) label."""
    wanted = label.strip().lower()
    for entry in DEFAULT_PALETTE:
        if entry.label.lower() == wanted:
            return entry
    return None
