"""Data layer utilities for loading and writing JSON documents."""

from .errors import DataLoadError, DataReferenceError, DataValidationError, DataWriteError
from .paths import get_definitions_path, get_package_root

__all__ = [
    "DataLoadError",
    "DataReferenceError",
    "DataValidationError",
    "DataWriteError",
    "get_definitions_path",
    "get_package_root",
]
