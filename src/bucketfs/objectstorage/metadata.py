"""Normalization of raw object headers into adapter metadata."""

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Mapping, Union

from bucketfs.core.exceptions import ValidationError
from bucketfs.objectstorage.paths import dirname
from bucketfs.schemas import ObjectMetadata


def to_timestamp(value: Union[datetime, str, int, float, None]) -> int:
    """Convert a store date (HTTP date, ISO 8601 or datetime) to epoch seconds.

    Raises:
        ValidationError: If the value cannot be parsed
    """
    if value is None or value == "":
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, datetime):
        moment = value
    else:
        try:
            moment = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            try:
                moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                raise ValidationError(f"Unrecognized store date: {value!r}")

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp())


class MetadataTranslator:
    """Builds ObjectMetadata records from store headers."""

    @staticmethod
    def from_raw_metadata(path: str, raw: Mapping[str, Any]) -> ObjectMetadata:
        """Normalize headers returned by a head request.

        Args:
            path: Logical path of the object
            raw: Mapping with ``content-type``, ``content-length`` and
                ``last-modified``

        Returns:
            ObjectMetadata for the object
        """
        return ObjectMetadata(
            dirname=dirname(path),
            path=path,
            timestamp=to_timestamp(raw.get("last-modified")),
            mimetype=raw.get("content-type"),
            size=int(raw.get("content-length") or 0),
        )
