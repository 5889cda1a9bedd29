from typing import Any, Mapping, Optional, Protocol, Sequence

from bucketfs.schemas import ListPage


class ObjectStoreClient(Protocol):
    """Protocol for the object store calls the adapter relies on.

    Implementations raise ``StoreError`` subclasses for failed calls.
    """

    def put(
        self, bucket: str, key: str, body: bytes, options: Mapping[str, Any]
    ) -> None: ...

    def get(self, bucket: str, key: str) -> bytes: ...

    def delete(self, bucket: str, key: str) -> None: ...

    def delete_many(self, bucket: str, keys: Sequence[str]) -> None: ...

    def copy(
        self, src_bucket: str, src_key: str, dst_bucket: str, dst_key: str
    ) -> None: ...

    def exists(self, bucket: str, key: str) -> bool: ...

    def get_acl(self, bucket: str, key: str) -> str: ...

    def set_acl(self, bucket: str, key: str, acl: str) -> None: ...

    def head_object(self, bucket: str, key: str) -> dict[str, Any]: ...

    def list_objects(
        self,
        bucket: str,
        prefix: str = "",
        delimiter: str = "/",
        max_keys: int = 1000,
        marker: str = "",
    ) -> ListPage: ...

    def create_marker_object(
        self, bucket: str, key: str, options: Mapping[str, Any]
    ) -> None: ...

    def sign_url(
        self,
        bucket: str,
        key: str,
        timeout: int,
        method: str = "GET",
        options: Optional[Mapping[str, Any]] = None,
    ) -> str: ...
