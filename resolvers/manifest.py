"""Manifest resolution — walks a media-defining class up to the root.

Input:  a subclass of :class:`~dforms.media.defining_class.MediaDefiningClass`
Output: a fresh ``dict`` mapping asset kind → asset locations, where each
        class's own ``define_media()`` contribution is overlaid on its
        parent's resolved manifest.

Parent links are read from ``_media_parent``, which is recorded on every
media-defining class when it is created (``None`` directly below the root).
"""

from collections.abc import Mapping
from typing import Any

import jsonschema
from jsonschema.exceptions import best_match

from app.utils.logging import get_logger
from dforms.media.errors import MediaDefinitionError, MediaHierarchyError
from resolvers.merge import deep_merge

logger = get_logger("resolvers.manifest")

# Name of the per-class hook.  Only a hook defined in the class's own body
# counts as that class's contribution.
HOOK_NAME = "define_media"

# Attribute holding the explicit parent link (set by __init_subclass__).
PARENT_ATTR = "_media_parent"

# Marker present only in the root class body.
ROOT_ATTR = "_media_root"

MANIFEST_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "MediaManifest",
    "type": "object",
    "additionalProperties": {
        "anyOf": [
            {"$ref": "#/$defs/locations"},
            {"$ref": "#/$defs/group"},
        ]
    },
    "$defs": {
        "locations": {"type": "array", "items": {"type": "string"}},
        "group": {
            "type": "object",
            "additionalProperties": {
                "anyOf": [
                    {"type": "string"},
                    {"$ref": "#/$defs/locations"},
                    {"$ref": "#/$defs/group"},
                ]
            },
        },
    },
}

_VALIDATOR = jsonschema.Draft202012Validator(MANIFEST_SCHEMA)


def _copy_assets(value: Any) -> Any:
    """Deep-copy a declared value, turning tuples into lists."""
    if isinstance(value, Mapping):
        return {k: _copy_assets(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_copy_assets(v) for v in value]
    return value


def _parent_of(cls: type) -> type | None:
    try:
        return getattr(cls, PARENT_ATTR)
    except AttributeError:
        raise MediaHierarchyError(
            f"{cls.__qualname__} is not a media-defining class"
        ) from None


def own_media(cls: type) -> dict[str, Any]:
    """Return the manifest *cls* declares itself, excluding its ancestors.

    Classes that do not override the hook contribute an empty manifest.

    Raises:
        MediaDefinitionError: If the hook result is not a valid manifest.
    """
    if HOOK_NAME not in vars(cls):
        return {}

    declared = getattr(cls, HOOK_NAME)()
    if not isinstance(declared, Mapping):
        raise MediaDefinitionError(
            f"{cls.__qualname__}.{HOOK_NAME}() must return a mapping, "
            f"got {type(declared).__name__}"
        )

    media = _copy_assets(declared)
    error = best_match(_VALIDATOR.iter_errors(media))
    if error is not None:
        location = "/".join(str(p) for p in error.absolute_path) or "<root>"
        logger.warning(
            "media_definition_invalid",
            cls=cls.__qualname__,
            location=location,
            error=error.message,
        )
        raise MediaDefinitionError(
            f"{cls.__qualname__}.{HOOK_NAME}() returned an invalid manifest "
            f"at {location}: {error.message}"
        )
    return media


def resolve_manifest(cls: type) -> dict[str, Any]:
    """Resolve the effective manifest of *cls*, ancestors included.

    Parent entries form the base layer; the class's own entries are merged on
    top with :func:`~resolvers.merge.deep_merge`.  Keys the class declares keep
    their order and keys only the ancestors declare follow them.

    Raises:
        MediaHierarchyError: If *cls* is not part of a media hierarchy.
        MediaDefinitionError: If any hook in the chain is invalid.
    """
    parent = _parent_of(cls)
    media = own_media(cls)

    if parent is not None:
        parent_media = resolve_manifest(parent)
        for key, value in parent_media.items():
            media[key] = deep_merge(value, media[key]) if key in media else value

    logger.debug("media_resolved", cls=cls.__qualname__, kinds=sorted(media))
    return media


def media_lineage(cls: type) -> list[type]:
    """Return the classes contributing to *cls*, ancestor first, root excluded."""
    chain: list[type] = []
    current: type | None = cls
    while current is not None:
        parent = _parent_of(current)
        if ROOT_ATTR in vars(current):
            break
        chain.append(current)
        current = parent
    return list(reversed(chain))
