"""
Utils Package

Serialization and text utility functions.
"""

from .serialization import (
    serialize_metadata,
    deserialize_metadata,
    load_settings_json,
    save_settings_json,
)
from .text import escape_xml, padded, suggested_filename

__all__ = [
    "serialize_metadata",
    "deserialize_metadata",
    "load_settings_json",
    "save_settings_json",
    "escape_xml",
    "padded",
    "suggested_filename",
]
