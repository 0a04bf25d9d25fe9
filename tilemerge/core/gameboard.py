"""
Core functionality for the sliding-tile game: line merging, whole-board moves, tile spawning and terminal checks.

These functions are pure with respect to their inputs except ``spawn_tile``, which writes into the board it is given.
"""

from __future__ import annotations

from numpy import all as np_all
from numpy import any as np_any
from numpy import argwhere, array, flatnonzero, ndarray, zeros_like
from numpy.random import PCG64DXSM, Generator, default_rng

from tilemerge.core.gamemove import Direction, line_positions
from tilemerge.core.report import Merge, Movement, Position, Spawn

# ##>: Tile spawn probabilities (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##>: Bound on the sum of all tiles. A tile never exceeds the board total, so merges stay within int64.
MAX_BOARD_TOTAL = 2**62


def create_generator(seed: int | None = None) -> Generator:
    """
    Build the random generator used for tile spawning.

    Parameters
    ----------
    seed : int, optional
        Seed for reproducibility. A fresh entropy-seeded generator is returned when omitted.

    Returns
    -------
    Generator
        A PCG64DXSM-backed numpy generator.
    """
    return default_rng(PCG64DXSM(seed))


def merge_line(line: ndarray) -> tuple[int, ndarray, list[tuple[int, ...]]]:
    """
    Compress a line toward index 0 and merge equal neighbours in a single pass.

    Parameters
    ----------
    line : ndarray
        A 1D array read from the leading edge (index 0 is where tiles slide to).

    Returns
    -------
    score : int
        Sum of the merged values.
    merged_line : ndarray
        The non-empty tiles after merging, without padding.
    origins : list of tuple of int
        For each tile of ``merged_line``, the source indices it came from: one index for a plain tile,
        two for a merge (nearer source first).

    Notes
    -----
    - Zeros are dropped before merging, so the relative order of tiles is preserved.
    - Index ``i`` merges with ``i + 1`` when equal and the scan then skips both; a merged tile never merges
      again in the same move.
    """
    sources = flatnonzero(line)
    tiles = line[sources]

    result = []
    origins: list[tuple[int, ...]] = []
    score = 0

    i = 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            merged = int(tiles[i]) * 2
            result.append(merged)
            origins.append((int(sources[i]), int(sources[i + 1])))
            score += merged
            i += 2
        else:
            result.append(int(tiles[i]))
            origins.append((int(sources[i]),))
            i += 1

    return score, array(result, dtype=line.dtype), origins


def slide_and_merge(board: ndarray, direction: Direction) -> tuple[int, ndarray, list[Movement], list[Merge]]:
    """
    Apply a move to every line of the board, without spawning a tile.

    Parameters
    ----------
    board : ndarray
        The game board. Not modified.
    direction : Direction
        The move direction.

    Returns
    -------
    score : int
        Points earned by all merges.
    updated_board : ndarray
        A new board with every line slid and merged.
    movements : list of Movement
        Tiles that changed position without merging, in line order.
    merges : list of Merge
        Merges, in line order.

    Notes
    -----
    Tiles that end where they started are not reported as movements.
    """
    result = zeros_like(board)
    movements: list[Movement] = []
    merges: list[Merge] = []
    score = 0

    for positions in line_positions(board.shape[0], direction):
        line = array([board[pos.row, pos.col] for pos in positions], dtype=board.dtype)
        score_line, merged_line, origins = merge_line(line)
        score += score_line

        for index, (value, origin) in enumerate(zip(merged_line.tolist(), origins)):
            target = positions[index]
            result[target.row, target.col] = value

            if len(origin) == 2:
                # ##: The source farther from the edge is the active half of the merge.
                passive, active = positions[origin[0]], positions[origin[1]]
                merges.append(Merge(active=active, passive=passive, target=target, value=value))
            elif positions[origin[0]] != target:
                movements.append(Movement(source=positions[origin[0]], target=target, value=value))

    return score, result, movements, merges


def spawn_tile(board: ndarray, generator: Generator, spawn_probs: dict[int, float] | None = None) -> Spawn | None:
    """
    Place a new tile on a uniformly chosen empty cell.

    Parameters
    ----------
    board : ndarray
        The game board. **Modified in-place.**
    generator : Generator
        Random source.
    spawn_probs : dict[int, float], optional
        Tile value probabilities, ``TILE_SPAWN_PROBS`` by default.

    Returns
    -------
    Spawn or None
        The spawned tile, or None when the board has no empty cell.
    """
    probs = spawn_probs or TILE_SPAWN_PROBS

    # ##: Only if there are still available places.
    empty_cells = argwhere(board == 0)
    if len(empty_cells) == 0:
        return None

    row, col = empty_cells[generator.integers(len(empty_cells))]
    value = int(generator.choice(list(probs), p=list(probs.values())))
    board[row, col] = value
    return Spawn(position=Position(int(row), int(col)), value=value)


def is_power_of_two(value: int) -> bool:
    """Check that ``value`` is a positive power of two."""
    return value > 0 and value & (value - 1) == 0


def has_tile(board: ndarray, value: int) -> bool:
    """Check whether any cell holds exactly ``value``."""
    return bool(np_any(board == value))


def is_done(board: ndarray) -> bool:
    """
    Check if the game has ended.

    Parameters
    ----------
    board : ndarray
        The current game board.

    Returns
    -------
    bool
        True if no empty cell exists and no two horizontally or vertically adjacent cells are equal.
    """
    return bool(
        np_all(board != 0) and not np_any(board[:-1] == board[1:]) and not np_any(board[:, :-1] == board[:, 1:])
    )
