# -*- coding: utf-8 -*-
"""
Save codes, save record validation and key-value storage for game sessions.
"""

from .codec import export_state, import_state, parse_save_data
from .schema import SaveState, validate_state
from .storage import JsonFileStorage, MemoryStorage, Storage

__all__ = [
    "JsonFileStorage",
    "MemoryStorage",
    "SaveState",
    "Storage",
    "export_state",
    "import_state",
    "parse_save_data",
    "validate_state",
]
