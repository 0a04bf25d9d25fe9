"""Board engine for the sliding-tile game: owns the grid, score, move counter and terminal flags."""

from __future__ import annotations

import logging

from numpy import array_equal, asarray, int64, ndarray, zeros
from numpy import max as max_array_values

from tilemerge.core.gameboard import create_generator, has_tile, is_done, slide_and_merge, spawn_tile
from tilemerge.core.gamemove import Direction, legal_directions, parse_direction
from tilemerge.core.report import MoveReport, Spawn
from tilemerge.game.config import GameConfig

logger = logging.getLogger(__name__)


class GameBoard:
    """
    Sliding-tile game engine.

    This class holds one game's mutable state and applies moves to it. It never renders anything: every
    effective move produces a ``MoveReport`` that a front end may consume.
    """

    def __init__(self, config: GameConfig | None = None, seed: int | None = None):
        """
        Initialize the engine and start a new game.

        Parameters
        ----------
        config : GameConfig, optional
            Game parameters (default is a 4x4 board with a 2048 win tile).
        seed : int, optional
            Seed for the spawn generator.
        """
        self._config = config or GameConfig()
        self._generator = create_generator(seed)

        self._board: ndarray = zeros((self._config.size, self._config.size), dtype=int64)
        self._score = 0
        self._moves_made = 0
        self._won = False
        self._over = False
        self._last_report: MoveReport | None = None

        self.reset()

    @property
    def size(self) -> int:
        """Board size."""
        return self._config.size

    @property
    def win_tile(self) -> int:
        """Tile value that sets the won flag."""
        return self._config.win_tile

    @property
    def board(self) -> ndarray:
        """
        Get the current grid.

        Returns
        -------
        ndarray
            A read-only view of the grid; copy it before modifying.
        """
        view = self._board.view()
        view.flags.writeable = False
        return view

    @property
    def score(self) -> int:
        return self._score

    @property
    def moves_made(self) -> int:
        return self._moves_made

    @property
    def won(self) -> bool:
        return self._won

    @property
    def over(self) -> bool:
        return self._over

    @property
    def last_report(self) -> MoveReport | None:
        """Report of the last effective move, None after a reset, a restore or a no-op move."""
        return self._last_report

    @property
    def max_tile(self) -> int:
        return int(max_array_values(self._board))

    def reset(self, size: int | None = None, seed: int | None = None) -> ndarray:
        """
        Start a new game on an empty board with the configured number of random tiles.

        Parameters
        ----------
        size : int, optional
            New board size; the current size is kept when omitted.
        seed : int, optional
            Reseed the spawn generator.

        Returns
        -------
        ndarray
            The new grid.

        Raises
        ------
        ValueError
            If ``size`` is out of range.
        """
        if size is not None and size != self._config.size:
            self._config = GameConfig(
                size=size,
                win_tile=self._config.win_tile,
                start_tiles=min(self._config.start_tiles, size * size),
                spawn_probs=self._config.spawn_probs,
            )
        if seed is not None:
            self._generator = create_generator(seed)

        self._board = zeros((self._config.size, self._config.size), dtype=int64)
        self._score = 0
        self._moves_made = 0
        self._won = False
        self._over = False
        self._last_report = None

        for _ in range(self._config.start_tiles):
            self.spawn_random_tile()

        logger.debug('New %dx%d game started', self._config.size, self._config.size)
        return self.board

    def spawn_random_tile(self) -> Spawn | None:
        """
        Place a 2 (90%) or a 4 (10%) on a uniformly chosen empty cell.

        Returns
        -------
        Spawn or None
            The spawned tile, or None if the board was full.
        """
        return spawn_tile(self._board, self._generator, self._config.spawn_probs)

    def move(self, direction: Direction | str) -> MoveReport | None:
        """
        Slide and merge every line toward ``direction``.

        Parameters
        ----------
        direction : Direction or str
            One of left, up, right, down.

        Returns
        -------
        MoveReport or None
            The report of the move, or None when nothing changed or the game is already over.

        Raises
        ------
        ValueError
            If ``direction`` is not a valid direction.

        Notes
        -----
        - An effective move commits the grid, spawns one tile, increments the move counter and refreshes the
          won and over flags.
        - A move that changes nothing leaves every piece of state untouched and spawns nothing.
        """
        direction = parse_direction(direction)

        if self._over:
            logger.debug('Ignoring %s move: game is over', direction.value)
            self._last_report = None
            return None

        score, updated_board, movements, merges = slide_and_merge(self._board, direction)
        if array_equal(updated_board, self._board):
            self._last_report = None
            return None

        # ##: Commit the move, then fill one cell.
        self._board = updated_board
        self._score += score
        spawned = self.spawn_random_tile()
        self._moves_made += 1

        self.has_won()
        self.is_game_over()

        self._last_report = MoveReport(
            direction=direction.value, movements=tuple(movements), merges=tuple(merges), spawn=spawned
        )
        logger.debug(
            'Move %d %s: %d moved, %d merged, +%d points',
            self._moves_made,
            direction.value,
            len(movements),
            len(merges),
            score,
        )
        return self._last_report

    def is_game_over(self) -> bool:
        """
        Check whether no move is possible; sets the sticky over flag when true.

        Returns
        -------
        bool
            True if every cell is filled and no two adjacent cells share a value.
        """
        if is_done(self._board):
            if not self._over:
                logger.info('Game over after %d moves with score %d', self._moves_made, self._score)
            self._over = True
            return True
        return False

    def has_won(self) -> bool:
        """
        Check whether the win tile has been reached in this game.

        Returns
        -------
        bool
            True if the won flag is already set or the win tile is on the board (the flag is then set).
        """
        if self._won:
            return True
        if has_tile(self._board, self._config.win_tile):
            logger.info('Reached %d after %d moves', self._config.win_tile, self._moves_made)
            self._won = True
        return self._won

    def legal_directions(self) -> list[Direction]:
        """Directions that would change the grid."""
        return legal_directions(self._board)

    def restore_state(self, board, score: int, moves_made: int) -> None:
        """
        Replace the grid, score and move counter wholesale.

        The over flag is cleared and the won flag recomputed from the restored grid. Tile values are not
        validated here; use ``tilemerge.persistence.import_state`` for untrusted input.

        Parameters
        ----------
        board : array_like
            A size x size grid.
        score : int
            The score to restore.
        moves_made : int
            The move counter to restore.

        Raises
        ------
        ValueError
            If the grid does not match the board size or holds values outside the int64 range.
        """
        try:
            restored = asarray(board, dtype=int64)
        except OverflowError as error:
            raise ValueError(f'Board values do not fit in int64: {error}') from error
        if restored.shape != (self._config.size, self._config.size):
            raise ValueError(f'Expected a {self._config.size}x{self._config.size} board, got shape {restored.shape}')

        self._board = restored.copy()
        self._score = int(score)
        self._moves_made = int(moves_made)
        self._over = False
        self._won = False
        self._last_report = None
        self.has_won()
