"""Tests for identifier generation."""

import multiprocessing
import threading
import uuid

import pytest

from graphfuse.core.identity.uuid import (
    NIL,
    UUIDGenerator,
    generate_deterministic,
    generate_named,
    generate_random,
    get_default_generator,
    is_deterministic,
    is_random,
    set_default_generator,
)
from graphfuse.core.time import Time


class TestDeterministicGeneration:
    """Test content-derived identifiers."""

    def test_identical_inputs_give_identical_uuid(self):
        """Same discriminator and fields always give the same UUID."""
        device = generate_named("robot_1")
        a = generate_deterministic("kind", Time(10, 0), device)
        b = generate_deterministic("kind", Time(10, 0), device)

        assert a == b
        assert hash(a) == hash(b)

    def test_any_field_change_changes_uuid(self):
        """Changing discriminator, stamp or device gives a new UUID."""
        base = generate_deterministic("kind", Time(10, 0), NIL)

        assert generate_deterministic("other_kind", Time(10, 0), NIL) != base
        assert generate_deterministic("kind", Time(10, 1), NIL) != base
        assert generate_deterministic("kind", Time(10, 0), generate_named("robot")) != base

    def test_field_types_are_distinguished(self):
        """Fields with the same printed value but different types do not collide."""
        assert generate_deterministic("kind", 1) != generate_deterministic("kind", 1.0)
        assert generate_deterministic("kind", "1") != generate_deterministic("kind", 1)
        assert generate_deterministic("kind", True) != generate_deterministic("kind", 1)

    def test_field_boundaries_are_distinguished(self):
        """Length prefixes keep ("ab", "c") apart from ("a", "bc")."""
        assert generate_deterministic("kind", "ab", "c") != generate_deterministic("kind", "a", "bc")

    def test_version_bits(self):
        """Deterministic identifiers are version 5 UUIDs."""
        value = generate_deterministic("kind", Time(1, 2), NIL)

        assert value.version == 5
        assert value.variant == uuid.RFC_4122
        assert is_deterministic(value)
        assert not is_random(value)

    def test_unsupported_field_type(self):
        """Unsupported field types are rejected."""
        with pytest.raises(TypeError):
            generate_deterministic("kind", [1, 2, 3])

        with pytest.raises(TypeError):
            generate_deterministic(42)

    def test_named_generation_is_stable(self):
        """Device ids derived from a name are stable."""
        assert generate_named("lidar") == generate_named("lidar")
        assert generate_named("lidar") != generate_named("camera")

    def test_nil(self):
        """NIL is the all-zero UUID."""
        assert NIL.int == 0


class TestRandomGeneration:
    """Test random identifiers."""

    def test_random_uuids_are_unique(self):
        """Random identifiers do not repeat."""
        values = {generate_random() for _ in range(1000)}
        assert len(values) == 1000

    def test_version_bits(self):
        """Random identifiers are version 4 and never look deterministic."""
        value = generate_random()

        assert value.version == 4
        assert is_random(value)
        assert not is_deterministic(value)

    def test_seeded_generator_is_reproducible(self):
        """Generators with the same seed produce the same sequence."""
        a = UUIDGenerator(seed=1234)
        b = UUIDGenerator(seed=1234)

        assert [a.generate() for _ in range(5)] == [b.generate() for _ in range(5)]
        assert UUIDGenerator(seed=1).generate() != UUIDGenerator(seed=2).generate()

    def test_explicit_generator(self):
        """generate_random uses the generator it is given."""
        expected = UUIDGenerator(seed=7).generate()
        assert generate_random(UUIDGenerator(seed=7)) == expected

    def test_default_generator_can_be_replaced(self):
        """The process-wide generator can be swapped for a deterministic one."""
        previous = set_default_generator(UUIDGenerator(seed=99))
        try:
            first = generate_random()
            set_default_generator(UUIDGenerator(seed=99))
            assert generate_random() == first
        finally:
            set_default_generator(previous)

        assert get_default_generator() is previous

    def test_set_default_generator_type_check(self):
        """Only UUIDGenerator instances can be installed."""
        with pytest.raises(TypeError):
            set_default_generator(object())

    def test_thread_safety(self):
        """Concurrent generation from one generator yields unique identifiers."""
        generator = UUIDGenerator(seed=5)
        results = []
        lock = threading.Lock()

        def worker():
            local = [generator.generate() for _ in range(200)]
            with lock:
                results.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 1600
        assert len(set(results)) == 1600

    @pytest.mark.skipif(
        "fork" not in multiprocessing.get_all_start_methods(),
        reason="requires the fork start method"
    )
    def test_forked_processes_do_not_repeat(self):
        """A forked child draws different identifiers than its parent."""
        context = multiprocessing.get_context("fork")
        receiver, sender = context.Pipe(duplex=False)
        child = context.Process(target=_send_random_uuid, args=(sender,))
        child.start()
        sender.close()

        from_child = uuid.UUID(bytes=receiver.recv_bytes())
        child.join(timeout=10)
        from_parent = generate_random()

        assert child.exitcode == 0
        assert from_child != from_parent


def _send_random_uuid(connection):
    connection.send_bytes(generate_random().bytes)
    connection.close()
