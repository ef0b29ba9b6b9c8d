"""
Project-root and `.env` helpers for the file-backed stores.

The sample catalog and preference files are configured as relative paths
(`data/events.json`). They are resolved against the checkout that holds
`pyproject.toml`, so the CLI, uvicorn and pytest agree no matter where they run from.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv


@lru_cache
def get_project_root() -> Path:
    """Nearest directory (cwd upwards) holding `pyproject.toml` or `.env`; cwd otherwise."""
    override = os.getenv("EVENTRANK_PROJECT_ROOT")
    if override:
        return Path(override).expanduser().resolve()

    cwd = Path.cwd().resolve()
    for candidate in (cwd, *cwd.parents):
        if (candidate / "pyproject.toml").is_file() or (candidate / ".env").is_file():
            return candidate
    return cwd


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load the project `.env` once. Variables already set in the environment win."""
    env_path = get_project_root() / ".env"
    if not env_path.is_file():
        return None
    load_dotenv(dotenv_path=env_path, override=False)
    return env_path


def resolve_project_path(path: str | Path) -> Path:
    p = Path(path).expanduser()
    if p.is_absolute():
        return p
    return (get_project_root() / p).resolve()
