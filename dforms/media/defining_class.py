"""MediaDefiningClass — classes that declare CSS/JS media per class.

Subclasses override the ``define_media`` hook to return *only their own*
media; ancestors' media is merged in automatically, so a hook must never call
its parent's hook.  Instances expose the merged result as ``media``::

    class BaseForm(MediaDefiningClass):
        @classmethod
        def define_media(cls):
            return {"css": ["forms.css"]}

    class CalendarForm(BaseForm):
        @classmethod
        def define_media(cls):
            return {"css": ["calendar.css"], "js": ["calendar.js"]}

    CalendarForm().media
    # {"css": ["forms.css", "calendar.css"], "js": ["calendar.js"]}

An instance may be given its own media by assigning ``media`` before it is
first read; that value is returned as-is and no hook runs.
"""

from typing import Any

from app.utils.logging import get_logger
from dforms.media.errors import MediaAlreadyResolvedError, MediaHierarchyError
from resolvers.manifest import resolve_manifest

logger = get_logger("dforms.media")


class MediaAccessor:
    """Lazy, compute-once ``media`` attribute.

    The value lives in the instance's ``_<name>`` slot.  Reading fills the
    slot on first access; writing is allowed only while the slot is empty.
    """

    def __init__(self) -> None:
        self.name = "media"
        self.slot = "_media"

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self.slot = f"_{name}"

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self

        state = instance.__dict__
        if self.slot in state:
            return state[self.slot]

        media = resolve_manifest(type(instance))
        state[self.slot] = media
        logger.debug("media_cached", cls=type(instance).__qualname__)
        return media

    def __set__(self, instance: Any, value: Any) -> None:
        if self.slot in instance.__dict__:
            raise MediaAlreadyResolvedError(
                f"{type(instance).__qualname__}.{self.name} is already set "
                "and cannot be reassigned"
            )
        instance.__dict__[self.slot] = value
        logger.debug("media_preset", cls=type(instance).__qualname__)


class MediaDefiningClass:
    """Root of every media-defining hierarchy.

    Each subclass must have exactly one direct base inside the hierarchy
    (unrelated mixins are fine); the link to that base is recorded when the
    subclass is created and followed when media is resolved.  A
    ``define_media`` hook may only come from the class itself or from the
    media hierarchy, never from an unrelated mixin.
    """

    _media_root = True
    _media_parent: type | None = None

    media = MediaAccessor()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        media_bases = [b for b in cls.__bases__ if issubclass(b, MediaDefiningClass)]
        if len(media_bases) != 1:
            redundant = [
                b.__qualname__ for b in media_bases
                if any(o is not b and issubclass(o, b) for o in media_bases)
            ]
            hint = (
                f"; {', '.join(redundant)} is already an ancestor of another "
                "base and should be dropped"
                if redundant else ""
            )
            raise MediaHierarchyError(
                f"{cls.__qualname__} must have exactly one MediaDefiningClass "
                f"base, found {len(media_bases)}: "
                f"{[b.__qualname__ for b in media_bases]}{hint}"
            )

        # A hook found on an unrelated mixin would shadow the hierarchy's
        # hooks for this class without ever being merged.
        owner = next(k for k in cls.__mro__ if "define_media" in vars(k))
        if not issubclass(owner, MediaDefiningClass):
            raise MediaHierarchyError(
                f"{cls.__qualname__} inherits define_media from "
                f"{owner.__qualname__}, which is not a MediaDefiningClass; "
                "declare media in the class itself or in a media-defining base"
            )

        parent = media_bases[0]
        cls._media_parent = None if parent is MediaDefiningClass else parent

    @classmethod
    def define_media(cls) -> dict[str, Any]:
        """Return this class's own media, keyed by kind (``css``, ``js``).

        Override in subclasses.  Values are lists of URLs, or mappings of
        lists (e.g. ``{"css": {"all": [...], "print": [...]}}``).
        """
        return {}

    @classmethod
    def resolve_media(cls) -> dict[str, Any]:
        """Return a freshly resolved manifest for this class (not cached)."""
        return resolve_manifest(cls)
