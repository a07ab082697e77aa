"""Read action trees and run contexts from JSON or YAML files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import yaml

from actiontree.io.errors import LoaderError
from actiontree.utils.logging import log_calls

YAML_SUFFIXES = {".yaml", ".yml"}


def _read_document(path: str) -> Any:
    p = Path(path)
    if not p.is_file():
        raise LoaderError(path, "File not found")
    text = p.read_text(encoding="utf-8")
    try:
        if p.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise LoaderError(path, "Could not parse document", cause=exc) from exc


@log_calls()
def load_tree(path: str) -> Dict[str, Any]:
    """Load a wire-form tree. The document root must be a mapping.

    Only the file format is checked here; node structure is validated when
    the registry builds the tree.
    """
    data = _read_document(path)
    if not isinstance(data, dict):
        raise LoaderError(path, f"Tree root must be an object, got {type(data).__name__}")
    return data


@log_calls()
def load_context(path: str) -> Dict[str, Any]:
    """Load a run context (variable name -> value). An empty file is an empty context."""
    data = _read_document(path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise LoaderError(path, f"Context must be a mapping, got {type(data).__name__}")
    # Variable names are strings even when YAML reads a key as int or bool
    return {str(key): value for key, value in data.items()}


__all__ = ["load_context", "load_tree"]
