"""
Game session: coordinates a board engine with best results, save codes and persistent storage.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import NamedTuple

from tilemerge.core.gamemove import Direction
from tilemerge.core.report import MoveReport
from tilemerge.game.board import GameBoard
from tilemerge.game.config import GameConfig, StorageKey
from tilemerge.persistence.codec import export_state, import_state
from tilemerge.persistence.schema import SaveState, validate_state
from tilemerge.persistence.storage import MemoryStorage, Storage

logger = logging.getLogger(__name__)


class GameStatus(NamedTuple):
    """Terminal flags of the running game."""

    won: bool
    over: bool


class GameSession:
    """
    One player's running game plus their best result.

    The session owns a ``GameBoard`` and talks to an injected ``Storage`` for the best score, the number of moves
    that best score took, and the current game. Moves are single-flight: a move requested while another one is
    being applied is ignored.
    """

    def __init__(self, config: GameConfig | None = None, storage: Storage | None = None, seed: int | None = None):
        """
        Parameters
        ----------
        config : GameConfig, optional
            Game parameters.
        storage : Storage, optional
            Key-value store; an in-memory store is used when omitted.
        seed : int, optional
            Seed for the board's spawn generator.
        """
        self.config = config or GameConfig()
        self.storage = storage if storage is not None else MemoryStorage()
        self.board = GameBoard(config=self.config, seed=seed)

        self.best_score = self._read_int(StorageKey.BEST_SCORE)
        self.best_moves = self._read_int(StorageKey.BEST_MOVES)
        self._moving = False

    def _read_int(self, key: StorageKey) -> int:
        try:
            return max(int(self.storage.get(key.value)), 0)
        except (TypeError, ValueError):
            return 0

    def _save_best(self) -> None:
        self.storage.set(StorageKey.BEST_SCORE.value, str(self.best_score))
        self.storage.set(StorageKey.BEST_MOVES.value, str(self.best_moves))

    def save_game(self) -> None:
        """Write the current board, score and move count to storage."""
        self.storage.set(StorageKey.CURRENT_BOARD.value, json.dumps(self.board.board.tolist()))
        self.storage.set(StorageKey.CURRENT_SCORE.value, str(self.board.score))
        self.storage.set(StorageKey.MOVES_MADE.value, str(self.board.moves_made))

    def handle_move(self, direction: Direction | str) -> MoveReport | None:
        """
        Apply a move requested by the player.

        Parameters
        ----------
        direction : Direction or str
            The move direction.

        Returns
        -------
        MoveReport or None
            The move report, or None if the move changed nothing, the game is over or another move is in progress.

        Raises
        ------
        ValueError
            If ``direction`` is not a valid direction.
        """
        if self._moving:
            logger.debug('Ignoring %s move: another move is being applied', direction)
            return None

        self._moving = True
        try:
            report = self.board.move(direction)
            if report is not None:
                self.check_status()
                self.save_game()
            return report
        finally:
            self._moving = False

    def check_status(self) -> GameStatus:
        """
        Refresh the terminal flags and record a new best result when the game just ended.

        Returns
        -------
        GameStatus
            The won and over flags.
        """
        won = self.board.has_won()
        over = self.board.is_game_over()

        if over and self.board.score > self.best_score:
            logger.info('New best score %d in %d moves', self.board.score, self.board.moves_made)
            self.best_score = self.board.score
            self.best_moves = self.board.moves_made
            self._save_best()

        return GameStatus(won=won, over=over)

    def restart(self) -> None:
        """Start a new game; best results are kept."""
        self.board.reset()
        self.save_game()

    def export_state(self, timestamp: datetime | None = None) -> str:
        """
        Build a save code for the current game.

        Parameters
        ----------
        timestamp : datetime, optional
            Export time recorded in the save code, now (UTC) by default.

        Returns
        -------
        str
            The save code.
        """
        state = SaveState(
            board=self.board.board.tolist(),
            score=self.board.score,
            moves_made=self.board.moves_made,
            best_score=self.best_score,
            best_moves=self.best_moves,
            timestamp=(timestamp or datetime.now(timezone.utc)).isoformat(),
        )
        return export_state(state)

    def import_state(self, data: str) -> GameStatus:
        """
        Replace the current game with the one in a save code.

        Parameters
        ----------
        data : str
            A save code or raw JSON record.

        Returns
        -------
        GameStatus
            The terminal flags of the imported game.

        Raises
        ------
        SaveDataError
            If the save code is rejected; the current game is left untouched.
        """
        state = import_state(data, size=self.board.size)

        self.board.restore_state(state.board, state.score, state.moves_made)
        self.best_score = state.best_score
        if 'best_moves' in state.model_fields_set:
            self.best_moves = state.best_moves
        self._save_best()
        self.save_game()

        return self.check_status()

    def resume(self) -> bool:
        """
        Restore the game saved in storage by a previous session.

        Returns
        -------
        bool
            True if a stored game was restored, False if none was stored or it was invalid.
        """
        stored_board = self.storage.get(StorageKey.CURRENT_BOARD.value)
        if stored_board is None:
            return False

        # ##>: SaveDataError and JSON decoding errors are both ValueError.
        try:
            state = validate_state(
                {
                    'board': json.loads(stored_board),
                    'score': self._read_int(StorageKey.CURRENT_SCORE),
                    'movesMade': self._read_int(StorageKey.MOVES_MADE),
                    'bestScore': self.best_score,
                },
                size=self.board.size,
            )
        except ValueError as error:
            logger.warning('Discarding stored game: %s', error)
            return False

        self.board.restore_state(state.board, state.score, state.moves_made)
        self.check_status()
        return True
