"""Identity generation for graph elements."""

from .uuid import (
    NIL,
    UUID,
    UUIDGenerator,
    generate_deterministic,
    generate_named,
    generate_random,
    get_default_generator,
    is_deterministic,
    is_random,
    set_default_generator,
)

__all__ = [
    "NIL",
    "UUID",
    "UUIDGenerator",
    "generate_deterministic",
    "generate_named",
    "generate_random",
    "get_default_generator",
    "is_deterministic",
    "is_random",
    "set_default_generator",
]
