"""
Environment helpers for config dataclasses.

``read_env_defaults`` builds constructor kwargs for a dataclass from
environment variables, converting each value to the field's type.
"""

from __future__ import annotations

import os
from dataclasses import MISSING, Field
from logging import getLogger
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

logger = getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Not a boolean: {raw!r}")


def _convert(raw: str, default: Any) -> Any:
    if isinstance(default, bool):
        return parse_bool(raw)
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    if isinstance(default, Path):
        return Path(raw).expanduser()
    return raw


def read_env_defaults(
    env_map: Mapping[str, str],
    fields: Mapping[str, Field],
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Collect dataclass kwargs from the environment.

    Variables that are unset are left out so the dataclass default
    applies. Values that fail to convert are logged and skipped.
    """
    env = os.environ if environ is None else environ
    values: Dict[str, Any] = {}
    for name, var in env_map.items():
        raw = env.get(var)
        if raw is None:
            continue
        f = fields[name]
        if f.default is not MISSING:
            default = f.default
        elif f.default_factory is not MISSING:
            default = f.default_factory()
        else:
            default = ""
        try:
            values[name] = _convert(raw, default)
        except ValueError as e:
            logger.warning(f"Ignoring {var}={raw!r}: {e}")
    return values
