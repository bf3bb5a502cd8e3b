"""Locate and read ``dthread.toml``.

Lookup order: the file named by ``DTHREAD_CONFIG`` when set, otherwise the
nearest ``dthread.toml`` in the starting directory or one of its parents.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from dthread.config.models import DThreadConfig

CONFIG_FILENAME = "dthread.toml"
CONFIG_ENV_VAR = "DTHREAD_CONFIG"


def _search_dirs(start: Path) -> Iterator[Path]:
    current = start.resolve()
    yield current
    yield from current.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: CWD), or None.

    An explicit ``DTHREAD_CONFIG`` that points at a missing file yields None
    rather than falling back to the walk-up search.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        explicit = Path(env_path)
        return explicit if explicit.is_file() else None

    for directory in _search_dirs(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML.

    Raises:
        click.ClickException: On a syntax error, naming the file.
    """
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        import click

        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> DThreadConfig:
    """Validate the sections of *path* (or the discovered file) without env overrides.

    Missing files and missing sections fall back to the code defaults.

    Raises:
        click.ClickException: If the file has unknown sections or bad values.
    """
    path = path or find_config(cwd)
    if path is None:
        return DThreadConfig()
    try:
        return DThreadConfig.model_validate(read_config_file(path))
    except ValidationError as exc:
        import click

        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        msg = f"Invalid configuration in {path}: {problems}"
        raise click.ClickException(msg) from exc
