"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import (
    validate_settings,
    validate_build_inputs,
    ValidationError,
)

__all__ = [
    "validate_settings",
    "validate_build_inputs",
    "ValidationError",
]
