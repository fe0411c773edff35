"""Base storage service for file handling."""

from abc import ABC, abstractmethod
from typing import BinaryIO


class BaseFileStorageService(ABC):
    """Base class for file storage services.

    Every stored file is addressed by its destination path and served under `base_url`.
    """

    def __init__(self, base_url: str):
        """Initialize the storage service.

        Args:
            base_url: Public URL prefix under which the stored files are served. Used verbatim
        """
        self.base_url = base_url

    @abstractmethod
    def save_file(self, stream: BinaryIO, destination_path: str) -> str:
        """Saves the stream at `destination_path` and returns the public URL of the file.

        Args:
            stream: Readable binary stream, copied until exhausted
            destination_path: Where to store the file. May include directories that don't exist yet

        Returns:
            str: Public URL of the stored file
        """
        raise NotImplementedError

    @abstractmethod
    def delete_file(self, path: str) -> None:
        """Deletes a stored file.

        Args:
            path: Path of the file to delete
        """
        raise NotImplementedError

    @abstractmethod
    def check_file_exists(self, path: str) -> bool:
        """Checks if a file exists in storage.

        Args:
            path: Path of the file

        Returns:
            bool: True if file exists, False otherwise
        """
        raise NotImplementedError

    @staticmethod
    def normalize_path(destination_path: str) -> str:
        """Convert the path to forward slashes and strip a leading `./`."""
        relative_path = destination_path.replace("\\", "/")
        if relative_path.startswith("./"):
            relative_path = relative_path[2:]
        return relative_path

    def build_url(self, destination_path: str) -> str:
        """Build the public URL of a file stored at `destination_path`."""
        return f"{self.base_url}/{self.normalize_path(destination_path)}"

    def path_from_url(self, url: str) -> str:
        """Get the stored path back from the public URL of a file.

        Raises:
            ValueError: If the URL is not served under `base_url`
        """
        prefix = f"{self.base_url}/"
        if not url.startswith(prefix):
            raise ValueError(f"The URL {url!r} is not served under {self.base_url!r}")
        return url[len(prefix) :]
