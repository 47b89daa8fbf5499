"""Load saneif configuration from pyproject.toml and optional .saneif.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from .errors import SaneIfConfigError


@dataclass
class SaneIfConfig:
    """Runtime configuration for saneif."""

    # When False, eligible if/else statements are only reported and no file
    # is written.
    apply_fixes: bool = True
    # When True, every eligible if/else in a changed file is handled, not
    # only those overlapping the changed lines.
    whole_file: bool = False


def _read_toml(path: Path) -> dict:
    """Read a TOML file; return empty dict if missing or unparseable."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError):
        return {}


def _apply(cfg: SaneIfConfig, d: dict, origin: str) -> None:
    """Overlay dict values onto cfg, ignoring unknown keys."""
    for f in fields(cfg):
        if f.name not in d:
            continue
        val = d[f.name]
        if not isinstance(val, bool):
            raise SaneIfConfigError(
                f"{origin}: {f.name} must be true or false, got {val!r}"
            )
        setattr(cfg, f.name, val)


def load_config(project_root: Optional[Path] = None) -> SaneIfConfig:
    """Load config from pyproject.toml [tool.saneif], then .saneif.toml."""
    if project_root is None:
        project_root = Path.cwd()
    cfg = SaneIfConfig()
    pyproject = _read_toml(project_root / "pyproject.toml")
    _apply(cfg, pyproject.get("tool", {}).get("saneif", {}), "pyproject.toml")
    _apply(cfg, _read_toml(project_root / ".saneif.toml"), ".saneif.toml")
    return cfg
