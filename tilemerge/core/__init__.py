# -*- coding: utf-8 -*-
"""
Pure board functions and move report types for the sliding-tile game.

It includes line merging with origin tracking, whole-board moves for a direction, tile spawning, terminal and
win checks, and the legal-direction mask.
"""

from .gameboard import (
    MAX_BOARD_TOTAL,
    TILE_SPAWN_PROBS,
    create_generator,
    has_tile,
    is_done,
    is_power_of_two,
    merge_line,
    slide_and_merge,
    spawn_tile,
)
from .gamemove import Direction, legal_directions, legal_directions_mask, line_positions, parse_direction
from .report import Merge, Movement, MoveReport, Position, Spawn

__all__ = [
    "MAX_BOARD_TOTAL",
    "TILE_SPAWN_PROBS",
    "Direction",
    "Merge",
    "Movement",
    "MoveReport",
    "Position",
    "Spawn",
    "create_generator",
    "has_tile",
    "is_done",
    "is_power_of_two",
    "legal_directions",
    "legal_directions_mask",
    "line_positions",
    "merge_line",
    "parse_direction",
    "slide_and_merge",
    "spawn_tile",
]
