"""
Save codes: copy-pasteable text encoding of a game state.

A save code is the compact JSON record, percent-encoded the way JavaScript's ``encodeURIComponent`` does, then
base64-encoded. Raw JSON is accepted on import as well.
"""

from __future__ import annotations

import json
import logging
from base64 import b64decode, b64encode
from typing import Any
from urllib.parse import quote, unquote

from tilemerge.errors import EmptyInputError, UnparseableError
from tilemerge.persistence.schema import SaveState, validate_state

logger = logging.getLogger(__name__)

# ##>: Characters encodeURIComponent leaves unescaped besides alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def export_state(state: SaveState) -> str:
    """
    Encode a game state as a save code.

    Parameters
    ----------
    state : SaveState
        The record to encode.

    Returns
    -------
    str
        An ASCII-only save code.
    """
    text = json.dumps(state.model_dump(by_alias=True), separators=(',', ':'))
    return b64encode(quote(text, safe=_URI_COMPONENT_SAFE).encode('ascii')).decode('ascii')


def _decode_save_code(text: str) -> Any:
    # ##: Codes pasted from chat or mail often lose their trailing padding.
    padded = text + '=' * (-len(text) % 4)
    decoded = b64decode(padded, validate=True).decode('ascii')
    return json.loads(unquote(decoded, errors='strict'))


def parse_save_data(data: str) -> Any:
    """
    Turn a save code, or raw JSON, into a Python value.

    Parameters
    ----------
    data : str
        The pasted text.

    Returns
    -------
    Any
        The parsed JSON value, not yet validated.

    Raises
    ------
    EmptyInputError
        If the text is empty or blank.
    UnparseableError
        If neither the save code decoding nor raw JSON parsing succeeds.
    """
    if data is None or not data.strip():
        raise EmptyInputError()
    text = data.strip()

    # ##>: binascii, unicode and JSON decoding errors all derive from ValueError.
    try:
        return _decode_save_code(text)
    except ValueError:
        logger.debug('Input is not a base64 save code, trying raw JSON')

    try:
        return json.loads(text)
    except ValueError as error:
        raise UnparseableError() from error


def import_state(data: str, size: int) -> SaveState:
    """
    Parse and validate a save code.

    Parameters
    ----------
    data : str
        A save code or raw JSON record.
    size : int
        The configured board size.

    Returns
    -------
    SaveState
        The validated record, ready for ``GameBoard.restore_state``.

    Raises
    ------
    SaveDataError
        The specific subclass names the first failed check, in order: empty input, unparseable data, malformed
        structure, size mismatch, invalid tile value.
    """
    return validate_state(parse_save_data(data), size=size)
