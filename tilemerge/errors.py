"""
Errors raised while importing a save code.

Every error carries a ``reason`` code so a front end can pick a specific message without matching on text.
"""


class SaveDataError(ValueError):
    """Base class for rejected save codes."""

    reason = 'invalid'


class EmptyInputError(SaveDataError):
    reason = 'empty'

    def __init__(self):
        super().__init__('Save data is empty')


class UnparseableError(SaveDataError):
    reason = 'unparseable'

    def __init__(self):
        super().__init__('Save data could not be decoded or parsed')


class MalformedStructureError(SaveDataError):
    """The save data parsed but is not a valid game state record."""

    reason = 'malformed'

    def __init__(self, detail: str):
        super().__init__(f'Save data is not a valid game state: {detail}')
        self.detail = detail


class SizeMismatchError(SaveDataError):
    reason = 'size_mismatch'

    def __init__(self, expected: int):
        super().__init__(f'Saved board size does not match, expected {expected}x{expected}')
        self.expected = expected


class InvalidTileError(SaveDataError):
    """A saved cell is not 0 or a power of two, or pushes the board total past ``MAX_BOARD_TOTAL``."""

    reason = 'invalid_tile'

    def __init__(self, row: int, col: int, value, detail: str = 'cells must be 0 or a power of two'):
        super().__init__(f'Invalid value {value!r} at row {row + 1}, column {col + 1}: {detail}')
        self.row = row
        self.col = col
        self.value = value
