from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

from ortools.sat.python import cp_model as _cp

from board import footprint, is_legal
from config import CFG
from models import Board, Layout, Piece, Placement
from progress import SolveProgress
from shapes import distinct_orientations

# reasons surfaced to callers
INFEASIBLE_REASON = "Proven infeasible"
TIMEBOX_REASON = "Stopped before solution (timebox)"

# ---------------- helpers ----------------

def build_options(
    board: Board,
    layout: Layout,
    pieces: Sequence[Piece],
    progress: Optional[SolveProgress] = None,
) -> Tuple[List[List[Tuple[int, int, int]]], Dict[str, object]]:
    """Every legal (x, y, orientation) per piece on the current board."""
    opts: List[List[Tuple[int, int, int]]] = []
    coverage: Dict[Tuple[int, int], int] = defaultdict(int)

    for piece in pieces:
        t: List[Tuple[int, int, int]] = []
        for idx in distinct_orientations(piece.orientations):
            for y in range(layout.rows):
                for x in range(layout.cols):
                    if progress is not None:
                        progress.candidates += 1
                    if not is_legal(board, layout, piece, x, y, idx):
                        continue
                    t.append((x, y, idx))
                    for cell in footprint(piece, x, y, idx):
                        coverage[cell] += 1
        opts.append(t)

    uncoverable = [
        (x, y)
        for y in range(layout.rows)
        for x in range(layout.cols)
        if layout.mask[y][x] and board[y][x] is None and not coverage.get((x, y))
    ]
    meta: Dict[str, object] = {
        "option_count": sum(len(t) for t in opts),
        "piece_option_counts": [len(t) for t in opts],
        "uncoverable": uncoverable,
    }
    return opts, meta

# ---------------- main solve ----------------
def try_pack_exact_cover(
    board: Board,
    layout: Layout,
    pieces: Sequence[Piece],
    max_seconds: Optional[float] = None,
    progress: Optional[SolveProgress] = None,
) -> Tuple[bool, List[Placement], Optional[str]]:
    """Exact cover of the empty playable cells; each piece used at most once.

    Returns ``(ok, placements, reason)``; ``reason`` is set when ``ok`` is False.
    """
    seconds = float(CFG.CP_SAT_SECONDS if max_seconds is None else max_seconds)

    empty = [
        (x, y)
        for y in range(layout.rows)
        for x in range(layout.cols)
        if layout.mask[y][x] and board[y][x] is None
    ]
    if not empty:
        return True, [], None
    if sum(piece.size for piece in pieces) < len(empty):
        return False, [], f"{INFEASIBLE_REASON}: not enough piece area"

    options, meta = build_options(board, layout, pieces, progress)
    if meta["uncoverable"]:
        x, y = meta["uncoverable"][0]
        return False, [], f"{INFEASIBLE_REASON}: un-coverable cell ({x},{y})"

    m = _cp.CpModel()
    p = [[m.NewBoolVar(f"p_{i}_{k}") for k in range(len(options[i]))] for i in range(len(pieces))]

    cell_to_vars: Dict[Tuple[int, int], List[_cp.IntVar]] = defaultdict(list)
    for i, piece in enumerate(pieces):
        if p[i]:
            m.AddAtMostOne(p[i])
        for k, (x, y, idx) in enumerate(options[i]):
            for cell in footprint(piece, x, y, idx):
                cell_to_vars[cell].append(p[i][k])

    for cell in empty:
        m.AddExactlyOne(cell_to_vars[cell])

    solver = _cp.CpSolver()
    solver.parameters.max_time_in_seconds = seconds
    solver.parameters.max_memory_in_mb = int(getattr(CFG, "MAX_MEMORY_MB", 2048))
    solver.parameters.num_workers = int(getattr(CFG, "WORKERS", 1))
    solver.parameters.random_seed = int(getattr(CFG, "RANDOM_SEED", 0))
    solver.parameters.log_search_progress = False

    status = solver.Solve(m)

    if status in (_cp.OPTIMAL, _cp.FEASIBLE):
        placed: List[Placement] = []
        for i, piece in enumerate(pieces):
            for k, (x, y, idx) in enumerate(options[i]):
                if solver.BooleanValue(p[i][k]):
                    placed.append(Placement(piece, x, y, idx))
                    break
        if progress is not None:
            progress.nodes += len(placed)
        return True, placed, None
    if status == _cp.INFEASIBLE:
        return False, [], INFEASIBLE_REASON
    if status == _cp.MODEL_INVALID:
        return False, [], "Model invalid"
    return False, [], TIMEBOX_REASON


__all__ = ["INFEASIBLE_REASON", "TIMEBOX_REASON", "build_options", "try_pack_exact_cover"]
