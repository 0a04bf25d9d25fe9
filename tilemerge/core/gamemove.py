"""
Directions and line geometry for the sliding-tile game, plus the vectorised legal-move check.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from numpy import ndarray

from tilemerge.core.report import Position


class Direction(str, Enum):
    """Cardinal move directions."""

    LEFT = 'left'
    UP = 'up'
    RIGHT = 'right'
    DOWN = 'down'


def parse_direction(direction: Direction | str) -> Direction:
    """
    Coerce a user-supplied direction to a ``Direction``.

    Parameters
    ----------
    direction : Direction or str
        A ``Direction`` member or its name, case-insensitive.

    Returns
    -------
    Direction
        The matching direction.

    Raises
    ------
    ValueError
        If the value does not name a direction.
    """
    if isinstance(direction, Direction):
        return direction
    if isinstance(direction, str):
        try:
            return Direction(direction.strip().lower())
        except ValueError:
            pass
    raise ValueError(f'Unknown direction {direction!r}, expected one of {[d.value for d in Direction]}')


@lru_cache(maxsize=None)
def line_positions(size: int, direction: Direction) -> tuple[tuple[Position, ...], ...]:
    """
    Cell positions of every line for a direction, each line read from its leading edge.

    Parameters
    ----------
    size : int
        Board size.
    direction : Direction
        The move direction.

    Returns
    -------
    tuple of tuple of Position
        Rows top to bottom for left/right, columns left to right for up/down.

    Notes
    -----
    Index 0 of each line is the cell tiles slide toward.
    """
    span = range(size)
    if direction is Direction.LEFT:
        return tuple(tuple(Position(r, c) for c in span) for r in span)
    if direction is Direction.RIGHT:
        return tuple(tuple(Position(r, size - 1 - c) for c in span) for r in span)
    if direction is Direction.UP:
        return tuple(tuple(Position(r, c) for r in span) for c in span)
    return tuple(tuple(Position(size - 1 - r, c) for r in span) for c in span)


def legal_directions_mask(board: ndarray) -> dict[Direction, bool]:
    """
    Compute, for every direction, whether a move would change the board.

    Parameters
    ----------
    board : ndarray
        The current game board.

    Returns
    -------
    dict[Direction, bool]
        True where the move is legal.

    Notes
    -----
    Horizontal and vertical merge adjacency is computed once and shared by opposite directions.
    """
    # ##>: Compute horizontal adjacency once for left/right.
    left_cols, right_cols = board[:, :-1], board[:, 1:]
    h_can_merge = (left_cols != 0) & (left_cols == right_cols)

    # ##>: Compute vertical adjacency once for up/down.
    top_rows, bottom_rows = board[:-1, :], board[1:, :]
    v_can_merge = (top_rows != 0) & (top_rows == bottom_rows)

    # ##>: Slide conditions per direction.
    left = (left_cols == 0) & (right_cols != 0)
    right = (right_cols == 0) & (left_cols != 0)
    up = (top_rows == 0) & (bottom_rows != 0)
    down = (bottom_rows == 0) & (top_rows != 0)

    return {
        Direction.LEFT: bool(left.any() or h_can_merge.any()),
        Direction.UP: bool(up.any() or v_can_merge.any()),
        Direction.RIGHT: bool(right.any() or h_can_merge.any()),
        Direction.DOWN: bool(down.any() or v_can_merge.any()),
    }


def legal_directions(board: ndarray) -> list[Direction]:
    """Directions that would change the board, in declaration order."""
    mask = legal_directions_mask(board)
    return [direction for direction in Direction if mask[direction]]
