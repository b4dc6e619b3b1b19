"""
Persistence Gateway — JSON round-tripping of workflows.

Two destinations share one layout:

* a durable record under a fixed key in a ``KeyValueStore`` (save/load)
* standalone files for export/import

There is no version field; older or hand-written files are read with
permissive defaults (missing ``nodes``/``edges`` become empty, missing
positions/labels are filled in, dangling edges are dropped). Data that
is not a workflow at all raises ``ParseError``.
"""

from __future__ import annotations

import io
import json
from contextlib import contextmanager
from logging import getLogger
from pathlib import Path
from typing import Any, Iterator, Optional, Union

from pydantic import ValidationError as SchemaError

from workflow_editor.errors import ParseError, PersistenceError, ValidationError
from workflow_editor.workflow.workflow_model import Workflow
from workflow_editor.workflow.workflow_store import InMemoryKeyValueStore, KeyValueStore

logger = getLogger(__name__)

DEFAULT_RECORD_KEY = "workflow"


def parse_workflow(raw: Union[str, bytes], source: str = "input") -> Workflow:
    """Parse JSON text into a validated ``Workflow``.

    Raises ``ParseError`` for invalid JSON or a payload that does not
    have the workflow shape.
    """
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        payload = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise ParseError(f"{source} is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise ParseError(
            f"{source} must be a JSON object with 'nodes' and 'edges', "
            f"got {type(payload).__name__}"
        )
    payload = {
        "nodes": _or_empty(payload.get("nodes")),
        "edges": _or_empty(payload.get("edges")),
    }
    try:
        workflow = Workflow.model_validate(payload)
    except SchemaError as e:
        raise ParseError(f"{source} is not a valid workflow: {e}") from e

    dropped = workflow.prune_dangling_edges()
    if dropped:
        logger.warning(
            f"Dropped {len(dropped)} edge(s) from {source} referencing unknown nodes"
        )
    return workflow


def _or_empty(value: Any) -> Any:
    return [] if value is None else value


def dump_workflow(workflow: Workflow, indent: Optional[int] = None) -> str:
    return json.dumps(workflow.to_payload(), indent=indent, ensure_ascii=False)


class PersistenceGateway:
    """Save/load a workflow record and export/import workflow files."""

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        record_key: str = DEFAULT_RECORD_KEY,
    ) -> None:
        self._store = store if store is not None else InMemoryKeyValueStore()
        self._key = record_key

    @property
    def record_key(self) -> str:
        return self._key

    @property
    def store(self) -> KeyValueStore:
        return self._store

    # ── Durable record ──

    def save(self, workflow: Workflow) -> None:
        """Overwrite the stored record with ``workflow``."""
        self._store.set(self._key, dump_workflow(workflow))
        logger.info(
            f"Workflow saved: {len(workflow.nodes)} nodes, {len(workflow.edges)} edges"
        )

    def load(self) -> Workflow:
        """Read the stored record; an absent record is an empty workflow."""
        raw = self._store.get(self._key)
        if raw is None:
            logger.debug(f"No stored record under '{self._key}'")
            return Workflow()
        return parse_workflow(raw, source=f"stored record '{self._key}'")

    def has_saved(self) -> bool:
        return self._store.get(self._key) is not None

    def discard(self) -> bool:
        """Remove the stored record."""
        return self._store.delete(self._key)

    # ── Files ──

    def export_file(self, workflow: Workflow) -> bytes:
        """Pretty-printed JSON bytes of ``workflow``.

        An empty workflow is refused with ``ValidationError``.
        """
        if workflow.is_empty:
            raise ValidationError("Nothing to export: the workflow is empty")
        return dump_workflow(workflow, indent=2).encode("utf-8")

    @contextmanager
    def open_export(self, workflow: Workflow) -> Iterator[io.BytesIO]:
        """Yield the export as an in-memory blob, released on exit."""
        blob = io.BytesIO(self.export_file(workflow))
        try:
            yield blob
        finally:
            blob.close()

    def export_to_path(self, workflow: Workflow, path: Union[str, Path]) -> Path:
        target = Path(path)
        with self.open_export(workflow) as blob:
            try:
                target.write_bytes(blob.getvalue())
            except OSError as e:
                raise PersistenceError(f"Cannot write export {target}: {e}") from e
        logger.info(f"Workflow exported to {target}")
        return target

    def import_file(self, data: Union[bytes, str]) -> Workflow:
        """Parse an exported file's contents."""
        return parse_workflow(data, source="imported file")

    def import_from_path(self, path: Union[str, Path]) -> Workflow:
        source = Path(path)
        try:
            data = source.read_bytes()
        except OSError as e:
            raise PersistenceError(f"Cannot read import {source}: {e}") from e
        workflow = self.import_file(data)
        logger.info(f"Workflow imported from {source}")
        return workflow
