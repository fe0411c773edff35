"""Local file storage implementation."""

import shutil
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

from ....toolkit.loguru_logging import logger
from ...random_strings import generate_random_string
from ._base_storage_service import BaseFileStorageService

DIRECTORIES_MODE = 0o755

DEFAULT_UPLOADS_DIR = "uploads"
DEFAULT_RANDOM_NAME_LENGTH = 16


class LocalFileStorage(BaseFileStorageService):
    """Local file storage service implementation.

    Nothing here validates the paths, the sizes or the content types of the files: keeping the destination
    paths inside the storage and the uploads small is up to the callers.

    Concurrent saves to the same path are not coordinated, the last writer wins.
    """

    def __init__(
        self,
        base_url: str,
        storage_root: str | Path | None = None,
        uploads_dir: str = DEFAULT_UPLOADS_DIR,
        random_name_length: int = DEFAULT_RANDOM_NAME_LENGTH,
    ):
        """Initialize local storage service.

        Args:
            base_url: Public URL prefix of the stored files
            storage_root: Directory that relative paths are resolved against. If not provided, the current working
                directory at the moment of initialization is used
            uploads_dir: Directory for the uploads, used by `build_upload_path`
            random_name_length: Length of the random part of the upload names
        """
        super().__init__(base_url)
        self.storage_root = Path(storage_root or Path.cwd()).absolute()
        self.uploads_dir = uploads_dir
        self.random_name_length = random_name_length

    def resolve_path(self, path: str | Path) -> Path:
        """Resolve the `path` to an absolute one, relative paths being relative to the `storage_root`."""
        return self.storage_root / Path(path)

    def save_file(self, stream: BinaryIO, destination_path: str) -> str:
        """Save the stream to the local storage.

        An existing file at the same path is overwritten. If the copying fails midway, the truncated file is left
        on the disk.

        Args:
            stream: Readable binary stream
            destination_path: Path of the file, relative to the `storage_root` or absolute

        Returns:
            str: Public URL of the stored file
        """
        file_path = self.resolve_path(destination_path)

        try:
            self._make_parent_directories(file_path)
            with open(file_path, "wb") as dest_file:
                shutil.copyfileobj(stream, dest_file)
        except OSError as exception:
            logger.error(f"Failed to save the file to {file_path}: {exception}")
            raise

        url = self.build_url(destination_path)
        logger.info(f"File saved: {file_path} -> {url}")
        return url

    @staticmethod
    def _make_parent_directories(file_path: Path):
        """Create the missing parent directories of `file_path`, each one with the `DIRECTORIES_MODE`."""
        missing_directories = [directory for directory in file_path.parents if not directory.exists()]
        for directory in reversed(missing_directories):
            directory.mkdir(mode=DIRECTORIES_MODE, exist_ok=True)

    def delete_file(self, path: str) -> None:
        """Delete a file from the local storage.

        Args:
            path: Path of the file, relative to the `storage_root` or absolute

        Raises:
            FileNotFoundError: If there's no such file
        """
        file_path = self.resolve_path(path)

        try:
            file_path.unlink()
        except OSError as exception:
            logger.error(f"Failed to delete the file {file_path}: {exception}")
            raise

        logger.info(f"File deleted: {file_path}")

    def check_file_exists(self, path: str) -> bool:
        """Check if a file exists in the local storage."""
        return self.resolve_path(path).is_file()

    def build_upload_path(self, original_filename: str, uploads_dir: str | None = None) -> str:
        """Build a fresh destination path for an uploaded file: `<uploads_dir>/<timestamp>_<random>.<ext>`.

        Only the extension of the `original_filename` is kept, and only if it's alphanumeric.
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"{timestamp}_{generate_random_string(self.random_name_length)}"

        extension = Path(original_filename).suffix.lstrip(".").lower()
        if extension and extension.isascii() and extension.isalnum():
            filename += f".{extension}"

        uploads_dir = (uploads_dir or self.uploads_dir).replace("\\", "/").rstrip("/")
        return f"{uploads_dir}/{filename}" if uploads_dir else filename
