"""Choose the file storage service from the settings."""

from typing import Type

from ...enums import StoragesIDs
from ...settings import settings
from .storage_services import BaseFileStorageService, LocalFileStorage

STORAGES_IDS_TO_SERVICES: dict[StoragesIDs, Type[BaseFileStorageService]] = {
    StoragesIDs.LOCAL: LocalFileStorage,
}


def choose_storage_service(default: StoragesIDs = StoragesIDs.LOCAL) -> BaseFileStorageService:
    """Choose the storage service to use based on the settings, falling back to the `default` one."""
    storage_id: StoragesIDs = (
        StoragesIDs(settings.FILE_STORAGE_SERVICE) if settings.FILE_STORAGE_SERVICE else default
    )

    storage_service_class = STORAGES_IDS_TO_SERVICES[storage_id]
    return storage_service_class(
        base_url=settings.FILES_BASE_URL,
        storage_root=settings.FILES_STORAGE_ROOT,
        uploads_dir=settings.UPLOADS_DIR,
        random_name_length=settings.RANDOM_FILENAME_LENGTH,
    )
