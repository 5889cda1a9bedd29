"""Translation of per-call configuration into store request options.

Per-call configuration is a plain mapping. Only a fixed allow-list of option
names is copied into the request; every other key is ignored.

Two settings get special treatment:

- ``visibility`` is kept under its own name for local reference and turned
  into the ACL request header.
- ``mimetype`` is kept under its own name and also sets ``Content-Type``.
"""

import copy
import mimetypes
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from bucketfs.core import get_logger
from bucketfs.core.exceptions import ValidationError
from bucketfs.schemas import Visibility

logger = get_logger(__name__)

# Store request option names
CONTENT_TYPE = "Content-Type"
CONTENT_LENGTH = "Content-Length"
CONTENT_MD5 = "Content-MD5"
CONTENT_DISPOSITION = "Content-Disposition"
CACHE_CONTROL = "Cache-Control"
EXPIRES = "Expires"
CALLBACK = "callback"
CALLBACK_VAR = "callback-var"
HEADERS = "headers"

ACL_HEADER = "x-amz-acl"

# Local reference keys, never sent to the store
VISIBILITY = "visibility"
MIMETYPE = "mimetype"

OPTION_NAMES = frozenset(
    {
        CONTENT_TYPE,
        CONTENT_LENGTH,
        CONTENT_MD5,
        CONTENT_DISPOSITION,
        CACHE_CONTROL,
        EXPIRES,
        CALLBACK,
        CALLBACK_VAR,
        HEADERS,
    }
)

ACL_PUBLIC_READ = "public-read"
ACL_PRIVATE = "private"

_VISIBILITY_TO_ACL = MappingProxyType(
    {Visibility.public: ACL_PUBLIC_READ, Visibility.private: ACL_PRIVATE}
)
_ACL_TO_VISIBILITY = MappingProxyType(
    {acl: visibility for visibility, acl in _VISIBILITY_TO_ACL.items()}
)

DEFAULT_MIMETYPE = "application/octet-stream"


def visibility_to_acl(visibility: Union[Visibility, str]) -> str:
    """Map a visibility value to the store ACL string.

    Raises:
        ValidationError: If the value is neither public nor private
    """
    try:
        return _VISIBILITY_TO_ACL[Visibility(visibility)]
    except ValueError:
        raise ValidationError(
            f"Invalid visibility: {visibility!r}. Must be 'public' or 'private'"
        )


def acl_to_visibility(acl: str) -> Visibility:
    """Map a store ACL string back to a visibility value.

    Raises:
        ValidationError: If the ACL has no visibility counterpart
    """
    try:
        return _ACL_TO_VISIBILITY[acl]
    except KeyError:
        raise ValidationError(
            f"Unsupported ACL: {acl!r}. Must be 'public-read' or 'private'"
        )


def content_size(contents: bytes) -> int:
    return len(contents)


def guess_mimetype(path: str, contents: bytes) -> str:
    """Guess a content type from the file extension, then from the bytes."""
    guessed, _ = mimetypes.guess_type(path)
    if guessed:
        return guessed
    if not contents:
        return "text/plain"
    try:
        contents.decode("utf-8")
    except UnicodeDecodeError:
        return DEFAULT_MIMETYPE
    return "text/plain"


class OptionMapper:
    """Builds request options from adapter defaults and per-call configuration."""

    def __init__(self, defaults: Optional[Mapping[str, Any]] = None):
        self._defaults = MappingProxyType(copy.deepcopy(dict(defaults or {})))

    @property
    def defaults(self) -> Mapping[str, Any]:
        return self._defaults

    def from_config(self, config: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        """Merge adapter defaults with the recognized per-call settings.

        Args:
            config: Per-call configuration mapping (may be None)

        Returns:
            Request options keyed by store option name, plus the local
            ``visibility``/``mimetype`` references when given

        Raises:
            ValidationError: If ``visibility`` is neither public nor private
        """
        options = copy.deepcopy(dict(self._defaults))
        config = config or {}

        for name in OPTION_NAMES:
            if name not in config:
                continue
            if name == HEADERS:
                headers = dict(options.get(HEADERS) or {})
                headers.update(config[HEADERS] or {})
                options[HEADERS] = headers
            else:
                options[name] = config[name]

        visibility = config.get(VISIBILITY)
        if visibility:
            acl = visibility_to_acl(visibility)
            options[VISIBILITY] = Visibility(visibility)
            headers = dict(options.get(HEADERS) or {})
            headers[ACL_HEADER] = acl
            options[HEADERS] = headers

        mimetype = config.get(MIMETYPE)
        if mimetype:
            options[MIMETYPE] = mimetype
            options[CONTENT_TYPE] = mimetype

        ignored = sorted(
            str(name)
            for name in config
            if name not in OPTION_NAMES and name not in (VISIBILITY, MIMETYPE)
        )
        if ignored:
            logger.debug("Ignoring unrecognized options", options=ignored)

        return options
