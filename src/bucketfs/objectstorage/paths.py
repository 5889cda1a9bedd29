"""Root prefix handling between logical paths and store keys."""

import posixpath
from typing import Optional

from bucketfs.core.exceptions import ValidationError

DELIMITER = "/"


def normalize_separators(path: str) -> str:
    return path.replace("\\", DELIMITER)


def dirname(path: str) -> str:
    """Parent segment of a logical path, ``""`` for top-level entries."""
    return posixpath.dirname(normalize_separators(path).rstrip(DELIMITER))


class PathPrefixer:
    """Applies and removes the configured root prefix.

    A non-empty prefix is stored with exactly one trailing delimiter, so
    ``apply`` and ``remove`` are inverses for every path ``apply`` produces.
    """

    def __init__(self, prefix: Optional[str] = None):
        prefix = normalize_separators(prefix or "").strip(DELIMITER)
        self.prefix = prefix + DELIMITER if prefix else ""

    def apply(self, path: str) -> str:
        """Map a logical path to its store key."""
        return self.prefix + normalize_separators(path).lstrip(DELIMITER)

    def remove(self, key: str) -> str:
        """Map a store key back to its logical path.

        Raises:
            ValidationError: If the key lies outside the configured prefix
        """
        if not self.prefix:
            return key
        if key == self.prefix.rstrip(DELIMITER):
            return ""
        if not key.startswith(self.prefix):
            raise ValidationError(
                f"Key '{key}' is outside the configured prefix '{self.prefix}'"
            )
        return key[len(self.prefix) :]

    def directory_key(self, path: str) -> str:
        """Store key of a directory, with a trailing delimiter unless root."""
        key = self.apply(path).rstrip(DELIMITER)
        return key + DELIMITER if key else ""
