"""YAML loading for settings files and template descriptors."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

log = logging.getLogger(__name__)


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Read a YAML mapping from *path*.

    An empty file yields an empty dict.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document is not a mapping or is not valid YAML.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")
    with p.open("r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ValueError(f"{p}: invalid YAML ({exc})") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"{p}: expected a mapping, got {type(data).__name__}")
    log.debug("Loaded %s (%d top-level keys)", p.name, len(data))
    return data


def load_yaml_document(path: str | Path) -> Any:
    """Read any YAML (or JSON) document from *path* without shape checks."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"File not found: {p}")
    with p.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ValueError(f"{p}: invalid YAML ({exc})") from exc
