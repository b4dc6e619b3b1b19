"""
Workflow Editor Configuration.

Controls where the durable workflow record lives, how much undo
history is kept, autosave and the log level.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from workflow_editor.config.env_utils import read_env_defaults

_DEFAULT_STORAGE_DIR = Path("~/.workflow_editor").expanduser()


@dataclass
class EditorConfig:
    """Editor core settings."""

    storage_dir: Path = field(default_factory=lambda: _DEFAULT_STORAGE_DIR)
    record_key: str = "workflow"
    history_limit: int = 100
    autosave: bool = False
    log_level: str = "INFO"

    _ENV_MAP = {
        "storage_dir": "WORKFLOW_EDITOR_STORAGE_DIR",
        "record_key": "WORKFLOW_EDITOR_RECORD_KEY",
        "history_limit": "WORKFLOW_EDITOR_HISTORY_LIMIT",
        "autosave": "WORKFLOW_EDITOR_AUTOSAVE",
        "log_level": "WORKFLOW_EDITOR_LOG_LEVEL",
    }

    def __post_init__(self) -> None:
        self.storage_dir = Path(self.storage_dir).expanduser()
        if self.history_limit < 0:
            raise ValueError("history_limit must be >= 0 (0 = unbounded)")
        self.log_level = self.log_level.upper()

    @classmethod
    def get_default_instance(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "EditorConfig":
        defaults = read_env_defaults(cls._ENV_MAP, cls.__dataclass_fields__, environ)
        return cls(**defaults)

    @property
    def history_capacity(self) -> Optional[int]:
        """Capacity for ``HistoryEngine``; ``None`` when unbounded."""
        return self.history_limit or None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "storage_dir": str(self.storage_dir),
            "record_key": self.record_key,
            "history_limit": self.history_limit,
            "autosave": self.autosave,
            "log_level": self.log_level,
        }
