# pieces.py
# Piece roster + loading/validation

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from config import CFG
from models import Piece
from shapes import normalize, orientations, shape_from_rows

logger = logging.getLogger(__name__)

# Default roster: 12 pieces, 55 cells, tiles the 5 x 11 Standard layout.
PIECE_DEFINITIONS: List[Dict[str, Any]] = [
    {"name": "A", "color": "#f97316", "shape": [[1, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0], [0, 0, 0, 0]]},
    {"name": "B", "color": "#dc2626", "shape": [[0, 1, 1, 0], [1, 1, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]]},
    {"name": "C", "color": "#1d4ed8", "shape": [[1, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]},
    {"name": "D", "color": "#f9a8d4", "shape": [[1, 0, 0, 0], [1, 0, 0, 0], [1, 1, 0, 0], [1, 0, 0, 0]]},
    {"name": "E", "color": "#16a34a", "shape": [[0, 1, 0, 0], [1, 1, 0, 0], [1, 0, 0, 0], [1, 0, 0, 0]]},
    {"name": "F", "color": "#f5f5f4", "shape": [[0, 1, 0, 0], [1, 1, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]},
    {"name": "G", "color": "#38bdf8", "shape": [[0, 0, 1, 0], [0, 0, 1, 0], [1, 1, 1, 0], [0, 0, 0, 0]]},
    {"name": "H", "color": "#db2777", "shape": [[0, 1, 0, 0], [1, 1, 1, 0], [1, 0, 0, 0], [0, 0, 0, 0]]},
    {"name": "I", "color": "#facc15", "shape": [[1, 1, 1, 0], [1, 0, 1, 0], [0, 0, 0, 0], [0, 0, 0, 0]]},
    {"name": "J", "color": "#7c3aed", "shape": [[1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]},
    {"name": "K", "color": "#84cc16", "shape": [[1, 1, 0, 0], [1, 1, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]},
    {"name": "L", "color": "#9ca3af", "shape": [[1, 1, 1, 0], [0, 1, 0, 0], [0, 1, 0, 0], [0, 0, 0, 0]]},
]


def validate_shape(shape: Any, size: Optional[int] = None) -> bool:
    """True when ``shape`` is a ``size`` x ``size`` grid of 0/1 values."""
    n = CFG.SHAPE_SIZE if size is None else size
    if not isinstance(shape, Sequence) or isinstance(shape, str) or len(shape) != n:
        return False
    for row in shape:
        if not isinstance(row, Sequence) or isinstance(row, str) or len(row) != n:
            return False
        # bools are ints; accept True/False alongside 0/1
        if not all(type(v) in (int, bool) and v in (0, 1) for v in row):
            return False
    return True


def make_piece(name: str, shape_rows: Sequence[Sequence[int]], color: str = "") -> Piece:
    shape = normalize(shape_from_rows(shape_rows))
    return Piece(name=name, shape=shape, color=color, orientations=orientations(shape))


def load_pieces(raw_definitions: Iterable[Mapping[str, Any]]) -> List[Piece]:
    """Build the roster, dropping (and logging) every malformed definition."""
    pieces: List[Piece] = []
    seen = set()
    for raw in raw_definitions:
        name = raw.get("name") if isinstance(raw, Mapping) else None
        if not isinstance(name, str) or not name:
            logger.error("Piece definition without a name skipped: %r", raw)
            continue
        if name in seen:
            logger.error("Duplicate piece %s skipped", name)
            continue
        shape = raw.get("shape")
        if not validate_shape(shape):
            logger.error("Invalid shape for piece %s: %r", name, shape)
            continue
        if not any(v for row in shape for v in row):
            logger.error("Empty shape for piece %s", name)
            continue
        seen.add(name)
        pieces.append(make_piece(name, shape, str(raw.get("color") or "")))
    return pieces


def default_pieces() -> List[Piece]:
    """The configured roster: ``CFG.PIECES_FILE`` when set, else the built-in one."""
    path = (getattr(CFG, "PIECES_FILE", "") or "").strip()
    if path:
        from io_files import read_piece_definitions

        return load_pieces(read_piece_definitions(path))
    return load_pieces(PIECE_DEFINITIONS)


def piece_by_name(pieces: Iterable[Piece], name: str) -> Optional[Piece]:
    for piece in pieces:
        if piece.name == name:
            return piece
    return None


PIECES: List[Piece] = load_pieces(PIECE_DEFINITIONS)

__all__ = [
    "PIECE_DEFINITIONS",
    "PIECES",
    "default_pieces",
    "load_pieces",
    "make_piece",
    "piece_by_name",
    "validate_shape",
]
