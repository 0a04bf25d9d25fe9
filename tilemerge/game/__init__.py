# -*- coding: utf-8 -*-
"""
Python implementation of the sliding-tile merging game.

This package provides the `GameBoard` engine, the `GameSession` coordinator used by front ends, and the game
configuration.
"""

from .board import GameBoard
from .config import GameConfig, StorageKey
from .session import GameSession, GameStatus

__all__ = ["GameBoard", "GameConfig", "GameSession", "GameStatus", "StorageKey"]
