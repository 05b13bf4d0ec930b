"""
Tests for the per-client lock registry.
"""
import threading
import time

import pytest

from services.client_locks import ClientLockRegistry


class TestClientLockRegistry:

    def test_entries_released_after_use(self):
        locks = ClientLockRegistry()
        with locks.hold("a"):
            assert len(locks) == 1
        assert len(locks) == 0

    def test_entry_released_on_exception(self):
        locks = ClientLockRegistry()
        with pytest.raises(RuntimeError):
            with locks.hold("a"):
                raise RuntimeError("boom")
        assert len(locks) == 0

    def test_same_client_is_serialized(self):
        locks = ClientLockRegistry()
        active = []
        overlap = []

        def work():
            with locks.hold("a"):
                active.append(1)
                if len(active) > 1:
                    overlap.append(True)
                time.sleep(0.01)
                active.pop()

        threads = [threading.Thread(target=work) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert overlap == []
        assert len(locks) == 0

    def test_different_clients_do_not_block(self):
        locks = ClientLockRegistry()
        entered = threading.Event()

        def other():
            with locks.hold("b"):
                entered.set()

        with locks.hold("a"):
            t = threading.Thread(target=other)
            t.start()
            assert entered.wait(timeout=2)
            t.join()
