# layouts.py
# Built-in board layouts

from __future__ import annotations

from typing import Dict, List

from models import Layout

STANDARD = Layout.from_strings("Standard", ["#" * 11] * 5)

PYRAMID = Layout.from_strings(
    "Pyramid",
    [
        "....#....",
        "...###...",
        "..#####..",
        ".#######.",
        "#########",
    ],
)

CROSS = Layout.from_strings(
    "Cross",
    [
        "..#..",
        ".###.",
        "#####",
        ".###.",
        "..#..",
    ],
)

DIAMOND = Layout.from_strings(
    "Diamond",
    [
        "...#...",
        "..###..",
        ".#####.",
        "#######",
        ".#####.",
        "..###..",
        "...#...",
    ],
)

BOARD_LAYOUTS: List[Layout] = [STANDARD, PYRAMID, CROSS, DIAMOND]

_BY_NAME: Dict[str, Layout] = {layout.name.lower(): layout for layout in BOARD_LAYOUTS}


def get_layout(name: str) -> Layout:
    try:
        return _BY_NAME[(name or "").strip().lower()]
    except KeyError:
        raise KeyError(f"unknown layout: {name!r}") from None


__all__ = ["BOARD_LAYOUTS", "CROSS", "DIAMOND", "PYRAMID", "STANDARD", "get_layout"]
