from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from config import CFG

# ------------------------------
# Attempt logger
# ------------------------------


def _init_logger() -> logging.Logger:
    logger = logging.getLogger("solver.attempt_log")
    if logger.handlers:
        return logger

    configured = (getattr(CFG, "ATTEMPT_LOG", "") or "").strip()
    if not configured:
        # no file: records propagate to whatever the host application set up
        return logger

    log_path = Path(configured)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


ATTEMPT_LOGGER = _init_logger()


def _fmt_seconds(seconds: Optional[float]) -> Optional[str]:
    if seconds is None:
        return None
    return f"{float(seconds):.2f}s"


def _emit_log(event: str, level: int = logging.INFO, **fields: Any) -> None:
    extras = [
        f"{key}={value}"
        for key, value in fields.items()
        if value is not None and value != ""
    ]
    if extras:
        ATTEMPT_LOGGER.log(level, "%s | %s", event, " ".join(extras))
    else:
        ATTEMPT_LOGGER.log(level, "%s", event)


def _now() -> float:
    return time.time()


# ------------------------------
# Per-invocation progress
# ------------------------------

SEARCHING = "Searching"
SOLVED = "Solved"
EXHAUSTED = "Exhausted"
TIMEOUT = "Timeout"


@dataclass
class SolveProgress:
    """What one solve invocation did. Owned by that invocation only."""

    strategy: str = ""
    status: str = "Idle"
    nodes: int = 0          # placements committed during the search
    candidates: int = 0     # validator calls
    placed: int = 0         # placements in the returned solution
    started: Optional[float] = None
    elapsed: float = 0.0
    message: str = ""

    def start(self, strategy: str, **fields: Any) -> None:
        self.strategy = strategy
        self.status = SEARCHING
        self.nodes = 0
        self.candidates = 0
        self.placed = 0
        self.message = ""
        self.started = _now()
        self.elapsed = 0.0
        _emit_log("Solve started", strategy=strategy, **fields)

    def finish(self, status: str, *, placed: int = 0, message: str = "") -> None:
        if self.started is not None:
            self.elapsed = max(0.0, _now() - self.started)
        self.status = status
        self.placed = placed
        self.message = message
        level = logging.WARNING if status == TIMEOUT else logging.INFO
        _emit_log(
            "Solve finished",
            level,
            strategy=self.strategy,
            status=status,
            nodes=self.nodes,
            candidates=self.candidates,
            placed=placed,
            duration=_fmt_seconds(self.elapsed),
            reason=message,
        )

    @property
    def done(self) -> bool:
        return self.status in (SOLVED, EXHAUSTED, TIMEOUT)

    def as_json(self) -> Dict[str, Any]:
        return {
            "strategy": self.strategy,
            "status": self.status,
            "nodes": self.nodes,
            "candidates": self.candidates,
            "placed": self.placed,
            "elapsed": round(self.elapsed, 3),
            "message": self.message,
            "done": self.done,
            "ok": (self.status == SOLVED) if self.done else None,
        }


__all__ = [
    "ATTEMPT_LOGGER",
    "EXHAUSTED",
    "SEARCHING",
    "SOLVED",
    "SolveProgress",
    "TIMEOUT",
]
