"""The `atelier` backend core: the data models of a works-sharing site and the storage of the uploaded files."""

from .toolkit.file_storage import BaseFileStorageService, LocalFileStorage
from .toolkit.random_strings import generate_random_string

__all__ = [
    "BaseFileStorageService",
    "LocalFileStorage",
    "generate_random_string",
]
