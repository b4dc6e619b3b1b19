"""
Workflow Editor Errors.

All errors raised by the editor core derive from ``WorkflowEditorError``.
Persistence failures are recoverable: the in-memory graph stays usable
after any of them.
"""

from __future__ import annotations


class WorkflowEditorError(Exception):
    """Base class for workflow editor errors."""


class ValidationError(WorkflowEditorError):
    """A workflow is not in a state that allows the requested operation."""


class ParseError(WorkflowEditorError):
    """Imported or persisted data is not a readable workflow."""


class NotFoundError(WorkflowEditorError):
    """A node or edge id does not exist in the workflow."""

    def __init__(self, kind: str, item_id: str) -> None:
        super().__init__(f"{kind} not found: {item_id}")
        self.kind = kind
        self.item_id = item_id


class PersistenceError(WorkflowEditorError):
    """The durable store could not be read or written."""


class FieldValueError(ValidationError):
    """A node field or coordinate was given a value its schema rejects."""
