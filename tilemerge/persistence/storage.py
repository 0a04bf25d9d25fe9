"""
Key-value storage used by a game session to keep best results and the current game between runs.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Storage(Protocol):
    """String key-value store."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Storage kept in a dictionary, lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = str(value)


class JsonFileStorage:
    """
    Storage persisted as a flat JSON object in a file.

    The file is read on first access and replaced on every ``set``: the new content goes to a temporary file in the
    same directory which is then renamed over the old one, so an interrupted write leaves the previous file intact.
    A missing or unreadable file behaves as an empty store.

    Parameters
    ----------
    path : str or Path
        Location of the JSON file.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._values: dict[str, str] | None = None

    def _load(self) -> dict[str, str]:
        if self._values is None:
            self._values = {}
            if self._path.exists():
                try:
                    with open(self._path, 'r', encoding='utf-8') as handler:
                        data = json.load(handler)
                    if isinstance(data, dict):
                        self._values = {str(key): str(value) for key, value in data.items()}
                    else:
                        logger.warning('Ignoring %s: expected a JSON object', self._path)
                except (OSError, ValueError) as error:
                    logger.warning('Ignoring unreadable storage file %s: %s', self._path, error)
        return self._values

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        values = self._load()
        values[key] = str(value)

        self._path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            'w', encoding='utf-8', dir=self._path.parent, prefix=f'.{self._path.name}.', suffix='.tmp', delete=False
        ) as handler:
            temp_path = Path(handler.name)
            try:
                json.dump(values, handler)
            except BaseException:
                handler.close()
                temp_path.unlink(missing_ok=True)
                raise
        os.replace(temp_path, self._path)
