"""Helpers for reading the static piece roster from disk."""

from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional


def _resolve_input_path(configured_name: str, base_dir: Optional[str] = None) -> str:
    """Return the absolute path of a configured input file."""

    name = (configured_name or "").strip()
    if os.path.isabs(name):
        return name
    return os.path.abspath(os.path.join(base_dir or os.getcwd(), name))


def read_piece_definitions(path: str, base_dir: Optional[str] = None) -> List[Dict[str, Any]]:
    """Read a ``{"pieces": [{"name", "shape", "color"}, ...]}`` roster file.

    Entries are returned as-is; validation happens in ``pieces.load_pieces``.
    A bare list of entries is accepted as well.
    """

    full_path = _resolve_input_path(path, base_dir)
    with open(full_path, "r", encoding="utf-8") as fh:
        data = json.load(fh)

    if isinstance(data, dict):
        data = data.get("pieces")
    if not isinstance(data, list):
        raise ValueError(f"{full_path}: expected a 'pieces' list")
    return [entry for entry in data if isinstance(entry, dict)]


__all__ = ["read_piece_definitions"]
