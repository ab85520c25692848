"""Exceptions raised by the media declaration machinery.

Each error also derives from the builtin a caller would naturally catch
(``TypeError`` for hierarchy problems, ``ValueError`` for bad declarations,
``AttributeError`` for illegal writes to ``media``).
"""


class MediaError(Exception):
    """Base class for all media declaration errors."""


class MediaHierarchyError(MediaError, TypeError):
    """A class is not singly rooted at MediaDefiningClass."""


class MediaDefinitionError(MediaError, ValueError):
    """A ``define_media`` hook returned something that is not a manifest."""


class MediaAlreadyResolvedError(MediaError, AttributeError):
    """``media`` was assigned after the instance's value was already fixed."""
