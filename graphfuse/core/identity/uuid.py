"""Identifier generation for variables and constraints.

Two generation modes are provided:

- deterministic: a name-based (version 5) UUID derived from a type
  discriminator and the fields that define the quantity. Identical inputs give
  identical identifiers in any process, which is what lets independently built
  variables collapse onto one graph node.
- random: a version 4 UUID drawn from an injectable, thread-safe generator.

The version bits keep the two modes disjoint.
"""

import hashlib
import os
import struct
import threading
import uuid
from typing import Any, Optional, Union

import numpy as np

from ..time import Time

UUID = uuid.UUID

NIL = uuid.UUID(int=0)

# Fixed namespace for all deterministic identifiers produced by this package.
NAMESPACE = uuid.UUID("6f1c3a52-8e0b-5d4a-9b7e-2c41f0d9a8e3")

_DETERMINISTIC_VERSION = 5
_RANDOM_VERSION = 4


class UUIDGenerator:
    """Thread-safe source of random identifiers.

    Without a seed, bytes come from the operating system, so processes forked
    from one parent never repeat each other. With a seed, a numpy Generator
    behind a lock gives a reproducible sequence for tests.
    """

    def __init__(self, seed: Optional[Union[int, np.random.SeedSequence]] = None):
        self._rng = np.random.default_rng(seed) if seed is not None else None
        self._lock = threading.Lock()

    def random_bytes(self, n: int = 16) -> bytes:
        if self._rng is None:
            return os.urandom(n)
        with self._lock:
            return self._rng.bytes(n)

    def generate(self) -> UUID:
        """Generate a random (version 4) identifier."""
        return uuid.UUID(bytes=self.random_bytes(16), version=_RANDOM_VERSION)


_default_generator = UUIDGenerator()
_default_lock = threading.Lock()


def get_default_generator() -> UUIDGenerator:
    """Get the process-wide random generator."""
    with _default_lock:
        return _default_generator


def set_default_generator(generator: UUIDGenerator) -> UUIDGenerator:
    """Replace the process-wide random generator.

    Returns:
        The previously installed generator, so callers can restore it
    """
    global _default_generator
    if not isinstance(generator, UUIDGenerator):
        raise TypeError(f"Expected UUIDGenerator, got {type(generator).__name__}")
    with _default_lock:
        previous = _default_generator
        _default_generator = generator
    return previous


def _encode_field(value: Any) -> bytes:
    """Canonical, length-prefixed byte encoding of one identity field."""
    if isinstance(value, bool):
        return b"b" + (b"\x01" if value else b"\x00")
    if isinstance(value, int):
        return b"i" + struct.pack(">q", value)
    if isinstance(value, float):
        return b"f" + struct.pack(">d", value)
    if isinstance(value, str):
        raw = value.encode("utf-8")
        return b"s" + struct.pack(">I", len(raw)) + raw
    if isinstance(value, (bytes, bytearray)):
        return b"r" + struct.pack(">I", len(value)) + bytes(value)
    if isinstance(value, uuid.UUID):
        return b"u" + value.bytes
    if isinstance(value, Time):
        return b"t" + struct.pack(">qI", value.sec, value.nsec)
    raise TypeError(f"Unsupported identity field type: {type(value).__name__}")


def generate_deterministic(discriminator: str, *fields: Any) -> UUID:
    """Generate a content-derived identifier.

    Args:
        discriminator: Type name of the thing being identified
        *fields: Values that define the identity (stamp, device id, ...)

    Returns:
        Version 5 UUID; identical inputs always give the identical UUID
    """
    if not isinstance(discriminator, str):
        raise TypeError("Discriminator must be a string")

    payload = bytearray(_encode_field(discriminator))
    for field in fields:
        payload += _encode_field(field)

    digest = hashlib.sha1(NAMESPACE.bytes + bytes(payload)).digest()
    return uuid.UUID(bytes=digest[:16], version=_DETERMINISTIC_VERSION)


def generate_named(name: str) -> UUID:
    """Deterministic identifier for a device or robot name."""
    return generate_deterministic("device", name)


def generate_random(generator: Optional[UUIDGenerator] = None) -> UUID:
    """Generate a random identifier from the given or default generator."""
    if generator is None:
        generator = get_default_generator()
    return generator.generate()


def is_deterministic(value: UUID) -> bool:
    return value.version == _DETERMINISTIC_VERSION


def is_random(value: UUID) -> bool:
    return value.version == _RANDOM_VERSION
