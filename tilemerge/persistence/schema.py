"""
Save record schema and the ordered validation applied to imported game states.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError

from tilemerge.core.gameboard import MAX_BOARD_TOTAL, is_power_of_two
from tilemerge.errors import InvalidTileError, MalformedStructureError, SizeMismatchError


class SaveState(BaseModel):
    """
    A serialized game: board, score, move counter and best results.

    Field aliases are the camelCase keys used in save codes. The counters must be non-negative JSON integers:
    ``10.0``, ``"10"`` or ``true`` are rejected rather than coerced. ``timestamp`` is carried along as-is and never
    checked, so exports from other front ends (ISO strings, epoch numbers) still import.
    """

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    board: list[list[Any]]
    score: StrictInt = Field(ge=0)
    moves_made: StrictInt = Field(ge=0, alias='movesMade')
    best_score: StrictInt = Field(ge=0, alias='bestScore')
    best_moves: StrictInt = Field(default=0, ge=0, alias='bestMoves')
    timestamp: Any = Field(default=None, description='Export time, informational only')


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = '.'.join(str(part) for part in first['loc']) or 'record'
    return f"{location}: {first['msg']}"


def validate_state(payload: Any, size: int) -> SaveState:
    """
    Validate a parsed save record against the board size.

    Parameters
    ----------
    payload : Any
        The parsed JSON value.
    size : int
        The configured board size.

    Returns
    -------
    SaveState
        The validated record.

    Raises
    ------
    MalformedStructureError
        If the payload is not an object or a required field has the wrong type.
    SizeMismatchError
        If the board row or column count differs from ``size``.
    InvalidTileError
        If a cell is neither 0 nor a power of two, or the cells add up to more than ``MAX_BOARD_TOTAL``.
    """
    if not isinstance(payload, dict):
        raise MalformedStructureError(f'expected an object, got {type(payload).__name__}')

    try:
        state = SaveState.model_validate(payload)
    except ValidationError as error:
        raise MalformedStructureError(_describe(error)) from error

    # ##: Shape first, then the cells.
    if len(state.board) != size or any(len(row) != size for row in state.board):
        raise SizeMismatchError(expected=size)

    total = 0
    for r, row in enumerate(state.board):
        for c, cell in enumerate(row):
            if isinstance(cell, bool) or not isinstance(cell, int) or (cell != 0 and not is_power_of_two(cell)):
                raise InvalidTileError(row=r, col=c, value=cell)
            total += cell
            if total > MAX_BOARD_TOTAL:
                raise InvalidTileError(row=r, col=c, value=cell, detail=f'board total exceeds {MAX_BOARD_TOTAL}')

    return state
