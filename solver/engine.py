# Solver engine: full solve, hint and random scatter over one board snapshot
from __future__ import annotations

import random
from typing import Any, Iterable, List, Optional, Sequence, Set, Union

from board import check_board, clone_board, footprint, is_legal, placed_piece_names
from config import CFG
from models import Board, InvalidPieceError, Layout, Orientation, Piece, Placement
from progress import EXHAUSTED, SOLVED, TIMEOUT, SolveProgress, _emit_log
from solver.backtrack import search_exhaustive, search_nearby

STRATEGIES = ("exhaustive", "nearby", "cp_sat")


# ---------- input checks ----------

def check_pieces(pieces: Sequence[Piece]) -> None:
    """Raise ``InvalidPieceError`` for a roster the solver cannot trust."""
    seen: Set[str] = set()
    for piece in pieces:
        if piece is None or not isinstance(getattr(piece, "name", None), str):
            raise InvalidPieceError(f"not a piece: {piece!r}")
        if piece.name in seen:
            raise InvalidPieceError(f"duplicate piece name {piece.name!r}")
        seen.add(piece.name)
        table = piece.orientations
        if len(table) != 8:
            raise InvalidPieceError(
                f"piece {piece.name}: orientation table has {len(table)} entries, expected 8"
            )
        n = len(piece.shape)
        for idx, shape in enumerate(table):
            if len(shape) != n or any(len(row) != n for row in shape):
                raise InvalidPieceError(f"piece {piece.name}: orientation {idx} is not {n}x{n}")
            if not any(v for row in shape for v in row):
                raise InvalidPieceError(f"piece {piece.name}: orientation {idx} is empty")


def _resolve_strategy(strategy: Optional[str]) -> str:
    name = (strategy or getattr(CFG, "STRATEGY", "exhaustive") or "exhaustive").strip().lower()
    if name not in STRATEGIES:
        raise ValueError(f"unknown strategy {name!r}; expected one of {', '.join(STRATEGIES)}")
    return name


def _remaining(board: Board, pieces: Sequence[Piece], used: Optional[Iterable[str]]) -> List[Piece]:
    taken = placed_piece_names(board) | set(used or ())
    return [piece for piece in pieces if piece.name not in taken]


# ---------- full solve ----------

def solve(
    board: Board,
    layout: Layout,
    pieces: Sequence[Piece],
    *,
    used: Optional[Iterable[str]] = None,
    strategy: Optional[str] = None,
    progress: Optional[SolveProgress] = None,
) -> Optional[List[Placement]]:
    """Complete ``board`` with the pieces not yet on it.

    Returns the placements to add (possibly empty when the board is already
    full) or ``None`` when the search is exhausted. ``board`` is never
    modified. Names in ``used`` are treated as already placed.
    """
    check_board(board, layout)
    check_pieces(pieces)
    name = _resolve_strategy(strategy)
    progress = progress if progress is not None else SolveProgress()

    work = clone_board(board)
    remaining = _remaining(work, pieces, used)
    progress.start(name, layout=layout.name, pieces=len(remaining))

    if name == "cp_sat":
        from solver.cp_sat import TIMEBOX_REASON, try_pack_exact_cover

        ok, placed, reason = try_pack_exact_cover(work, layout, remaining, progress=progress)
        if ok:
            progress.finish(SOLVED, placed=len(placed))
            return placed
        progress.finish(TIMEOUT if reason == TIMEBOX_REASON else EXHAUSTED, message=reason or "")
        return None

    if name == "nearby":
        solution = search_nearby(work, layout, remaining, progress)
    else:
        solution = search_exhaustive(work, layout, remaining, progress)

    if solution is None:
        progress.finish(EXHAUSTED)
        return None
    progress.finish(SOLVED, placed=len(solution))
    return solution


def hint(
    board: Board,
    layout: Layout,
    pieces: Sequence[Piece],
    *,
    used: Optional[Iterable[str]] = None,
    strategy: Optional[str] = None,
    progress: Optional[SolveProgress] = None,
) -> Optional[Placement]:
    """Next placement of a full solution from the current board.

    ``None`` only proves this partial board is a dead end.
    """
    solution = solve(board, layout, pieces, used=used, strategy=strategy, progress=progress)
    if not solution:
        return None
    on_board = placed_piece_names(board)
    for placement in solution:
        if placement.name not in on_board:
            return placement
    return None


# ---------- random scatter ----------

def _select_for_scatter(
    candidates: Sequence[Piece],
    count_or_names: Union[None, int, Iterable[str]],
    rng: Any,
) -> List[Piece]:
    if count_or_names is None or isinstance(count_or_names, int):
        if count_or_names is None:
            lo = int(getattr(CFG, "SCATTER_MIN_PIECES", 2))
            hi = int(getattr(CFG, "SCATTER_MAX_PIECES", 4))
            count = rng.randint(min(lo, hi), max(lo, hi))
        else:
            count = count_or_names
        count = max(0, min(int(count), len(candidates)))
        return rng.sample(list(candidates), count)
    if isinstance(count_or_names, str):
        count_or_names = [count_or_names]
    wanted = set(count_or_names)
    return [piece for piece in candidates if piece.name in wanted]


def scatter(
    board: Board,
    layout: Layout,
    candidates: Sequence[Piece],
    count_or_names: Union[None, int, Iterable[str]] = None,
    *,
    rng: Optional[Any] = None,
) -> List[Placement]:
    """Best-effort random starting position.

    Each selected piece gets up to ``CFG.SCATTER_ATTEMPTS`` random anchor and
    orientation draws; the first legal one is kept, otherwise the piece is
    skipped for good. The returned placements are legal together on
    ``board``, which is not modified.
    """
    check_board(board, layout)
    check_pieces(candidates)
    rng = rng if rng is not None else random.Random()
    attempts = int(getattr(CFG, "SCATTER_ATTEMPTS", 50))

    work = clone_board(board)
    selected = _select_for_scatter(_remaining(work, candidates, None), count_or_names, rng)
    rng.shuffle(selected)

    placed: List[Placement] = []
    for piece in selected:
        for _ in range(attempts):
            x = rng.randrange(layout.cols)
            y = rng.randrange(layout.rows)
            rotation = rng.randrange(4)
            flipped = rng.random() < 0.5
            idx = Orientation(rotation, flipped).index
            if is_legal(work, layout, piece, x, y, idx):
                for cx, cy in footprint(piece, x, y, idx):
                    work[cy][cx] = piece.name
                placed.append(Placement(piece, x, y, idx))
                break

    _emit_log(
        "Scatter finished",
        layout=layout.name,
        requested=len(selected),
        placed=len(placed),
    )
    return placed


__all__ = ["STRATEGIES", "check_pieces", "hint", "scatter", "solve"]
