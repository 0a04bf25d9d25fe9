"""
Configuration for the sliding-tile game.
"""

from dataclasses import dataclass, field
from enum import Enum
from math import isclose

from tilemerge.core.gameboard import is_power_of_two

# ##>: Smallest board on which tiles can still slide and merge.
MIN_BOARD_SIZE = 2


class StorageKey(str, Enum):
    """Keys under which a session persists its values."""

    BEST_SCORE = 'bestScore'
    BEST_MOVES = 'bestMoves'
    CURRENT_BOARD = 'currentBoard'
    CURRENT_SCORE = 'currentScore'
    MOVES_MADE = 'movesMade'


@dataclass(frozen=True)
class GameConfig:
    """
    Game parameters.

    Raises ``ValueError`` on construction when a parameter is out of range.
    """

    size: int = 4  # Board is size x size
    win_tile: int = 2048  # Tile value that sets the won flag
    start_tiles: int = 2  # Tiles spawned by a reset
    spawn_probs: dict[int, float] = field(default_factory=lambda: {2: 0.9, 4: 0.1})

    def __post_init__(self):
        if self.size < MIN_BOARD_SIZE:
            raise ValueError(f'Board size must be at least {MIN_BOARD_SIZE}, got {self.size}')
        if self.win_tile < 4 or not is_power_of_two(self.win_tile):
            raise ValueError(f'Win tile must be a power of two of at least 4, got {self.win_tile}')
        if not 0 <= self.start_tiles <= self.size * self.size:
            raise ValueError(f'Start tiles must be between 0 and {self.size * self.size}, got {self.start_tiles}')
        if not self.spawn_probs or not all(is_power_of_two(value) for value in self.spawn_probs):
            raise ValueError(f'Spawn values must be powers of two, got {list(self.spawn_probs)}')
        if not isclose(sum(self.spawn_probs.values()), 1.0):
            raise ValueError(f'Spawn probabilities must sum to 1, got {sum(self.spawn_probs.values())}')
