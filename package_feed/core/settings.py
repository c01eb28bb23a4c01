from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

DATA_ROOT_ENV_VAR = "PACKAGE_FEED_DATA_DIR"
CACHE_FILE_ENV_VAR = "PACKAGE_FEED_CACHE_FILE"
JSON_INDENT_ENV_VAR = "PACKAGE_FEED_JSON_INDENT"
LOG_LEVEL_ENV_VAR = "PACKAGE_FEED_LOG_LEVEL"

# Resolve repository root (project root, not the Python package root)
_REPO_ROOT = Path(__file__).resolve().parents[2]
_DEFAULT_DATA_DIR = _REPO_ROOT / "data"


def _data_dir_from_env() -> Path:
    env_path = os.environ.get(DATA_ROOT_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return _DEFAULT_DATA_DIR


def _indent_from_env() -> Optional[int]:
    value = os.environ.get(JSON_INDENT_ENV_VAR, "").strip()
    if not value:
        return None
    try:
        indent = int(value)
    except ValueError:
        indent = -1
    if indent < 0:
        raise ValueError(f"{JSON_INDENT_ENV_VAR} must be a whole number, got {value!r}")
    return indent


class FeedSettings(BaseModel):
    """
    Settings for the package cache and its serializer.

    Each field falls back to an environment variable, then to a default.
    """

    data_dir: Path = Field(
        default_factory=_data_dir_from_env,
        description="Directory holding the package cache file.",
    )
    cache_file_name: str = Field(
        default_factory=lambda: os.environ.get(CACHE_FILE_ENV_VAR, "packages.json"),
        description="Name of the package cache file inside data_dir.",
    )
    indent: Optional[int] = Field(
        default_factory=_indent_from_env,
        ge=0,
        description="JSON indentation for the cache file. None writes compact JSON.",
    )
    log_level: str = Field(
        default_factory=lambda: os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper(),
        description="Logging level name used by the command line entry point.",
    )
