"""Object storage listing operations."""

from .prefix_contents import PrefixContentsLister

__all__ = ["PrefixContentsLister"]
