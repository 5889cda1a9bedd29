"""Directory emulation over delimiter listings.

Object stores have no directories; a key such as ``data/2024/file.txt`` only
implies them. A delimiter listing of ``data/`` returns the objects directly
under it plus the common prefixes (``data/2024/``) that stand for
subdirectories. This module turns those responses into file and dir entries:

- an object whose key equals the listed prefix and whose size is zero is a
  directory marker and becomes a dir entry for the listed directory itself
- every other object becomes a file entry
- a common prefix becomes a dir entry with timestamp 0, or, when listing
  recursively, is expanded in place into its own entries

Entries keep store order: the objects of a level first, then its common
prefixes (or their expansions).
"""

from typing import List, Optional

from bucketfs.core import get_logger, settings
from bucketfs.objectstorage.clients.base import ObjectStoreClient
from bucketfs.objectstorage.metadata import to_timestamp
from bucketfs.objectstorage.paths import DELIMITER, PathPrefixer
from bucketfs.schemas import Entry, EntryType, ListPage

logger = get_logger(__name__)


class PrefixContentsLister:
    """Lists files and synthesized directories under a logical directory."""

    def __init__(
        self,
        store: ObjectStoreClient,
        bucket: str,
        prefixer: PathPrefixer,
        max_keys: Optional[int] = None,
    ):
        """Initialize the lister.

        Args:
            store: Object store client
            bucket: Bucket name
            prefixer: Prefixer shared with the owning adapter
            max_keys: Keys requested per page (defaults to settings.list_max_keys)
        """
        self.store = store
        self.bucket = bucket
        self.prefixer = prefixer
        self.max_keys = max_keys or settings.list_max_keys

    def list(self, directory: str = "", recursive: bool = False) -> List[Entry]:
        """List the contents of a logical directory.

        Args:
            directory: Logical directory path, ``""`` for the root
            recursive: Expand subdirectories into their contents

        Returns:
            Entries in store order

        Raises:
            StoreError: If a listing call fails
        """
        prefix = self.prefixer.directory_key(directory)
        logger.info(
            "Listing directory",
            bucket=self.bucket,
            prefix=prefix,
            recursive=recursive,
        )

        objects, common_prefixes = self._fetch_level(prefix)

        entries: list[Entry] = []
        for obj in objects:
            if obj.size == 0 and obj.key == prefix:
                entries.append(
                    Entry(
                        type=EntryType.dir,
                        path=self.prefixer.remove(obj.key.rstrip(DELIMITER)),
                        timestamp=to_timestamp(obj.last_modified),
                    )
                )
                continue
            entries.append(
                Entry(
                    type=EntryType.file,
                    path=self.prefixer.remove(obj.key),
                    timestamp=to_timestamp(obj.last_modified),
                    size=obj.size,
                )
            )

        for common_prefix in common_prefixes:
            if recursive:
                entries.extend(self.list(self.prefixer.remove(common_prefix), True))
            else:
                entries.append(
                    Entry(
                        type=EntryType.dir,
                        path=self.prefixer.remove(common_prefix.rstrip(DELIMITER)),
                        timestamp=0,
                    )
                )

        return entries

    def _fetch_level(self, prefix: str):
        """Collect every page of one directory level."""
        objects = []
        common_prefixes = []
        marker = ""
        pages = 0

        while True:
            page: ListPage = self.store.list_objects(
                self.bucket,
                prefix=prefix,
                delimiter=DELIMITER,
                max_keys=self.max_keys,
                marker=marker,
            )
            pages += 1
            objects.extend(page.objects)
            common_prefixes.extend(page.common_prefixes)

            if not page.is_truncated:
                break

            next_marker = page.next_marker or _last_returned(page)
            if not next_marker or next_marker == marker:
                logger.warning(
                    "Truncated listing without a new marker, stopping",
                    prefix=prefix,
                    marker=marker,
                )
                break
            marker = next_marker

        logger.debug(
            "Directory level fetched",
            prefix=prefix,
            pages=pages,
            object_count=len(objects),
            prefix_count=len(common_prefixes),
        )
        return objects, common_prefixes

    def keys_for_delete(self, directory: str) -> List[str]:
        """Every store key under a directory, markers included."""
        keys = []
        for entry in self.list(directory, recursive=True):
            if entry.type is EntryType.dir:
                keys.append(self.prefixer.directory_key(entry.path))
            else:
                keys.append(self.prefixer.apply(entry.path))
        return keys


def _last_returned(page: ListPage) -> str:
    candidates = [obj.key for obj in page.objects] + list(page.common_prefixes)
    return max(candidates) if candidates else ""
