"""Typed report models for resolved class media.

Used by ``scripts/media.py`` to describe what a media-defining class ends up
with after inheritance is applied.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from resolvers.manifest import media_lineage, resolve_manifest


class MediaKind(str, Enum):
    CSS = "css"
    JS  = "js"


def class_path(cls: type) -> str:
    """Return the ``module:QualName`` path of *cls*."""
    return f"{cls.__module__}:{cls.__qualname__}"


class MediaReport(BaseModel):
    """Resolved media of a single class."""

    class_path: str
    """``module:QualName`` of the reported class."""

    lineage: list[str] = Field(default_factory=list)
    """Contributing classes, ancestor first, root excluded."""

    media: dict[str, Any] = Field(default_factory=dict)
    """Merged manifest, optionally restricted to some kinds."""

    @classmethod
    def for_class(cls, target: type, kinds: list[str | MediaKind] | None = None) -> "MediaReport":
        """Resolve *target* and build its report.

        Args:
            target: A MediaDefiningClass subclass.
            kinds:  When given, only these keys are kept.  Accepts plain strings or
                :class:`MediaKind` members; missing kinds are skipped.
        """
        media = resolve_manifest(target)
        if kinds is not None:
            wanted = {k.value if isinstance(k, MediaKind) else k for k in kinds}
            media = {k: v for k, v in media.items() if k in wanted}
        return cls(
            class_path=class_path(target),
            lineage=[class_path(c) for c in media_lineage(target)],
            media=media,
        )
