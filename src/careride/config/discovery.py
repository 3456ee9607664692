"""Locate ``careride.toml``.

A file given with ``--config`` wins, then one named by ``$CARERIDE_CONFIG``,
then the nearest ``careride.toml`` in the start directory or its parents.
An explicit path that does not exist means "no config", never a fallback
to discovery.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "careride.toml"
CONFIG_ENV_VAR = "CARERIDE_CONFIG"


def _existing(path: str | Path) -> Path | None:
    candidate = Path(path).expanduser()
    return candidate if candidate.is_file() else None


def _lineage(start: Path) -> Iterator[Path]:
    here = start.resolve()
    yield here
    yield from here.parents


def find_config(start: Path | None = None, *, explicit: str | Path | None = None) -> Path | None:
    """Return the config file to load, or None when there is none."""
    if explicit:
        return _existing(explicit)
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return _existing(from_env)
    for directory in _lineage(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None

