"""Rules engine for the sliding-tile merging puzzle."""

from .core import Direction, MoveReport
from .errors import (
    EmptyInputError,
    InvalidTileError,
    MalformedStructureError,
    SaveDataError,
    SizeMismatchError,
    UnparseableError,
)
from .game import GameBoard, GameConfig, GameSession, GameStatus, StorageKey

__all__ = [
    "Direction",
    "EmptyInputError",
    "GameBoard",
    "GameConfig",
    "GameSession",
    "GameStatus",
    "InvalidTileError",
    "MalformedStructureError",
    "MoveReport",
    "SaveDataError",
    "SizeMismatchError",
    "StorageKey",
    "UnparseableError",
]
