"""
Move report types describing the visual effect of a single move.

A report is produced fresh by every effective move and is never mutated afterwards. Renderers read it to
animate tiles; the engine itself does not keep any history of reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NamedTuple


class Position(NamedTuple):
    """A cell position on the board, 0-indexed."""

    row: int
    col: int


class Movement(NamedTuple):
    """A tile that slid from ``source`` to ``target`` without merging."""

    source: Position
    target: Position
    value: int


class Merge(NamedTuple):
    """
    Two equal tiles collapsing into one.

    Attributes
    ----------
    active : Position
        Source of the tile further from the leading edge (it travels further).
    passive : Position
        Source of the tile nearer to the leading edge.
    target : Position
        Where the merged tile lands.
    value : int
        Value of the merged tile (twice the value of each source).
    """

    active: Position
    passive: Position
    target: Position
    value: int


class Spawn(NamedTuple):
    """A tile freshly placed on an empty cell."""

    position: Position
    value: int


@dataclass(frozen=True)
class MoveReport:
    """
    Everything a renderer needs to animate one effective move.

    Attributes
    ----------
    direction : str
        The direction of the move.
    movements : tuple[Movement, ...]
        Simple relocations, in line order.
    merges : tuple[Merge, ...]
        Merges, in line order.
    spawn : Spawn | None
        The tile spawned after the move settled, if any.
    """

    direction: str
    movements: tuple[Movement, ...] = field(default_factory=tuple)
    merges: tuple[Merge, ...] = field(default_factory=tuple)
    spawn: Spawn | None = None

    @property
    def score_delta(self) -> int:
        """Points earned by this move."""
        return sum(merge.value for merge in self.merges)

    def as_dict(self) -> dict[str, Any]:
        """
        Plain-data rendering of the report.

        Returns
        -------
        dict
            Nested dictionaries and lists only, suitable for JSON.
        """

        def _pos(position: Position) -> dict[str, int]:
            return {'row': position.row, 'col': position.col}

        return {
            'direction': self.direction,
            'movements': [
                {'from': _pos(move.source), 'to': _pos(move.target), 'value': move.value} for move in self.movements
            ],
            'merges': [
                {
                    'active': _pos(merge.active),
                    'passive': _pos(merge.passive),
                    'to': _pos(merge.target),
                    'value': merge.value,
                }
                for merge in self.merges
            ],
            'spawn': None if self.spawn is None else {**_pos(self.spawn.position), 'value': self.spawn.value},
        }
