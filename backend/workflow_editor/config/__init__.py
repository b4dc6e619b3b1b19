from workflow_editor.config.editor_config import EditorConfig
from workflow_editor.config.env_utils import parse_bool, read_env_defaults

__all__ = ["EditorConfig", "parse_bool", "read_env_defaults"]
