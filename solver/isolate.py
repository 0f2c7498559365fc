# solver/isolate.py
import multiprocessing as mp
import queue
import time
import traceback
from typing import List, Optional, Sequence, Tuple

from config import CFG
from models import Board, Layout, Piece, Placement

_POLL_SECONDS = 0.2

# Worker must be top-level (picklable under spawn)
def _solve_worker(q, board: Board, layout: Layout, pieces, strategy: Optional[str]):
    try:
        from solver.engine import solve  # import inside child
        q.put(("ok", solve(board, layout, pieces, strategy=strategy)))
    except MemoryError:
        q.put(("err", "Child ran out of memory"))
    except Exception as e:
        q.put(("exc", f"{e}\n{traceback.format_exc()}"))

def solve_isolated(
    board: Board,
    layout: Layout,
    pieces: Sequence[Piece],
    max_seconds: float,
    *,
    strategy: Optional[str] = None,
    grace: Optional[float] = None,
) -> Tuple[bool, Optional[List[Placement]], Optional[str]]:
    """
    Run ``solver.engine.solve`` in a child process under a wall-clock budget.

    Returns (ok, solution, note). ``ok`` is True when the child finished;
    ``solution`` is then exactly what ``solve`` returned (``None`` when the
    search was exhausted). ``note`` is set only when the child was killed,
    crashed, or raised.
    """
    ctx = mp.get_context("spawn")
    q = ctx.Queue()
    p = ctx.Process(target=_solve_worker, args=(q, board, layout, list(pieces), strategy))
    p.daemon = True
    p.start()

    buffer = float(CFG.ISOLATE_GRACE_SECONDS if grace is None else grace)
    deadline = time.monotonic() + max(0.0, float(max_seconds)) + max(0.0, buffer)

    # read before join so a large result cannot block the child's exit;
    # poll so a child that dies without answering is noticed early
    tag, payload = None, None
    while True:
        wait = min(_POLL_SECONDS, max(0.0, deadline - time.monotonic()))
        try:
            tag, payload = q.get(timeout=wait)
            break
        except queue.Empty:
            pass
        if not p.is_alive():
            # a result flushed just before exit is still in the pipe
            try:
                tag, payload = q.get(timeout=_POLL_SECONDS)
            except queue.Empty:
                pass
            break
        if time.monotonic() >= deadline:
            break

    if tag is None:
        if p.is_alive():
            p.terminate()
            p.join(2.0)
            return False, None, "killed: timeout"
        p.join(2.0)
        if p.exitcode not in (0, None):
            return False, None, f"child crashed (exit {p.exitcode})"
        return False, None, "no-result"

    p.join(2.0)
    if tag == "ok":
        return True, payload, None
    return False, None, payload
