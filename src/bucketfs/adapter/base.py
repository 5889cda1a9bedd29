from abc import ABC, abstractmethod
import io
from datetime import datetime
from typing import IO, Any, Mapping, Optional, Union

from bucketfs.schemas import (
    DirectoryResult,
    Entry,
    ObjectMetadata,
    ReadResult,
    StreamResult,
    Visibility,
    VisibilityResult,
    WriteResult,
)

Config = Optional[Mapping[str, Any]]


class FileStoreAdapter(ABC):
    """Abstract base class for hierarchical file stores.

    Operations report expected failures with a sentinel instead of raising:
    boolean operations return False, record-returning operations return None.
    """

    @abstractmethod
    def write(
        self, path: str, contents: Union[bytes, str], config: Config = None
    ) -> Optional[WriteResult]:
        """Write a new file."""
        pass

    @abstractmethod
    def update(
        self, path: str, contents: Union[bytes, str], config: Config = None
    ) -> Optional[WriteResult]:
        """Update an existing file."""
        pass

    @abstractmethod
    def read(self, path: str) -> Optional[ReadResult]:
        """Read a file."""
        pass

    @abstractmethod
    def delete(self, path: str) -> bool:
        pass

    @abstractmethod
    def delete_dir(self, dirname: str) -> bool:
        pass

    @abstractmethod
    def create_dir(
        self, dirname: str, config: Config = None
    ) -> Optional[DirectoryResult]:
        pass

    @abstractmethod
    def copy(self, path: str, newpath: str) -> bool:
        pass

    @abstractmethod
    def rename(self, path: str, newpath: str) -> bool:
        pass

    @abstractmethod
    def has(self, path: str) -> bool:
        pass

    @abstractmethod
    def set_visibility(
        self, path: str, visibility: Union[Visibility, str]
    ) -> Optional[ObjectMetadata]:
        pass

    @abstractmethod
    def get_visibility(self, path: str) -> Optional[VisibilityResult]:
        pass

    @abstractmethod
    def get_metadata(self, path: str) -> Optional[ObjectMetadata]:
        pass

    def get_size(self, path: str) -> Optional[ObjectMetadata]:
        return self.get_metadata(path)

    def get_mimetype(self, path: str) -> Optional[ObjectMetadata]:
        return self.get_metadata(path)

    def get_timestamp(self, path: str) -> Optional[ObjectMetadata]:
        return self.get_metadata(path)

    @abstractmethod
    def list_contents(
        self, directory: str = "", recursive: bool = False
    ) -> list[Entry]:
        pass

    @abstractmethod
    def get_url(self, path: str) -> str:
        pass

    @abstractmethod
    def get_temporary_url(
        self,
        path: str,
        expiration: Union[datetime, int, float],
        options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        pass

    # Stream variants built on the whole-content operations

    def write_stream(
        self, path: str, stream: IO[bytes], config: Config = None
    ) -> Optional[WriteResult]:
        return self.write(path, stream.read(), config)

    def update_stream(
        self, path: str, stream: IO[bytes], config: Config = None
    ) -> Optional[WriteResult]:
        return self.update(path, stream.read(), config)

    def read_stream(self, path: str) -> Optional[StreamResult]:
        result = self.read(path)
        if result is None:
            return None
        return StreamResult(path=result.path, stream=io.BytesIO(result.contents))
