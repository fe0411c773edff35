"""File storage module for saving the uploaded files and serving them under a public URL."""

from .storage_services import BaseFileStorageService, LocalFileStorage

__all__ = ["BaseFileStorageService", "LocalFileStorage"]
