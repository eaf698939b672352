"""Tag registry and string (de)serialization for generators.

Every generator serializes itself as ``TAG`W0~W1~...`` (see
``EnhancedRandom.string_serialize``). To turn such a string back into a
generator, the tag has to be registered here first; nothing is registered
until ``register_defaults()`` or one of the ``register_*`` helpers is called.

Registrations keep a prototype instance per tag. Deserializing copies the
prototype and loads the serialized words into the copy, so the prototype's
own state never matters.

A ``ReversingWrapper`` serializes as ``R`` followed by the wrapped
generator's serialized form, and deserializes back into a wrapper around the
wrapped generator.
"""

from __future__ import annotations

import logging

from .base import EnhancedRandom, split_serialized
from .reversing import REVERSED_PREFIX, ReversingWrapper
from .trace import TraceRandom

logger = logging.getLogger(__name__)

_tags_to_generators: dict[str, EnhancedRandom] = {}
_types_to_tags: dict[type, str] = {}


def _check_tag(tag: str) -> None:
    if not tag:
        raise ValueError("Generator tags cannot be empty")
    if "`" in tag:
        raise ValueError(f"Generator tags cannot contain '`', got {tag!r}")


def register_tag(instance: EnhancedRandom, tag: str | None = None) -> None:
    """Register ``instance``'s type under ``tag`` (default: its own tag).

    Raises ``ValueError`` if the type or the tag is already registered, or if
    the tag is invalid.
    """
    tag = instance.default_tag if tag is None else tag
    _check_tag(tag)
    kind = type(instance)
    if kind in _types_to_tags:
        raise ValueError(
            f"Tried to register {kind.__name__} with tag {tag!r}, but that "
            f"type already has tag {_types_to_tags[kind]!r}"
        )
    if tag in _tags_to_generators:
        raise ValueError(
            f"Tried to register {kind.__name__} with tag {tag!r}, but that "
            "tag already belongs to "
            f"{type(_tags_to_generators[tag]).__name__}"
        )
    _tags_to_generators[tag] = instance.copy()
    _types_to_tags[kind] = tag
    logger.debug("Registered tag %r for %s", tag, kind.__name__)


def try_register_tag(instance: EnhancedRandom, tag: str | None = None) -> bool:
    """Like ``register_tag``, but returns False instead of raising."""
    try:
        register_tag(instance, tag)
    except ValueError:
        return False
    return True


def force_register_tag(
    instance: EnhancedRandom, tag: str | None = None
) -> None:
    """Register ``instance``'s type, replacing any conflicting registration.

    Both an existing owner of the tag and an existing tag of the type are
    dropped first. Invalid tags still raise ``ValueError``.
    """
    tag = instance.default_tag if tag is None else tag
    _check_tag(tag)
    kind = type(instance)
    unregister_tag(tag)
    old_tag = _types_to_tags.get(kind)
    if old_tag is not None:
        unregister_tag(old_tag)
    register_tag(instance, tag)


def unregister_tag(tag: str) -> bool:
    """Remove a tag and its type; returns whether anything was removed."""
    instance = _tags_to_generators.pop(tag, None)
    if instance is None:
        return False
    del _types_to_tags[type(instance)]
    logger.debug("Unregistered tag %r", tag)
    return True


def unregister_all() -> None:
    _tags_to_generators.clear()
    _types_to_tags.clear()


def register_defaults() -> None:
    """Register the default tag of every generator in this package."""
    try_register_tag(TraceRandom(0))


def registered_tags() -> list[str]:
    return sorted(_tags_to_generators)


def get_tag(rng: EnhancedRandom) -> str:
    """The registered tag for ``rng``; wrappers get ``R`` plus the inner tag."""
    if isinstance(rng, ReversingWrapper):
        return REVERSED_PREFIX + get_tag(rng.wrapped)
    try:
        return _types_to_tags[type(rng)]
    except KeyError:
        raise ValueError(
            f"{type(rng).__name__} has no registered tag"
        ) from None


def serialize(rng: EnhancedRandom) -> str:
    if isinstance(rng, ReversingWrapper):
        return REVERSED_PREFIX + serialize(rng.wrapped)
    return rng.string_serialize(get_tag(rng))


def deserialize(data: str) -> EnhancedRandom:
    """Build a new generator from ``serialize`` output.

    Raises ``ValueError`` for malformed data or unregistered tags.
    """
    tag, _ = split_serialized(data)
    prototype = _tags_to_generators.get(tag)
    if prototype is not None:
        logger.debug("Deserializing %r", tag)
        return prototype.copy().string_deserialize(data)
    if tag.startswith(REVERSED_PREFIX) and len(tag) > len(REVERSED_PREFIX):
        return ReversingWrapper(deserialize(data[len(REVERSED_PREFIX) :]))
    raise ValueError(f"No generator registered for tag {tag!r}")
