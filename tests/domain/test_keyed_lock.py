"""Unit tests for KeyedLock."""

import threading
import time

from shopbot.domain.service.keyed_lock import KeyedLock


class TestKeyedLock:

    def test_same_key_is_serialized(self):
        locks = KeyedLock()
        inside = 0
        max_inside = 0
        guard = threading.Lock()

        def work():
            nonlocal inside, max_inside
            with locks.hold("U1"):
                with guard:
                    inside += 1
                    max_inside = max(max_inside, inside)
                time.sleep(0.01)
                with guard:
                    inside -= 1

        threads = [threading.Thread(target=work) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert max_inside == 1

    def test_different_keys_do_not_block_each_other(self):
        locks = KeyedLock()
        entered = threading.Event()

        def hold_other_key():
            with locks.hold("U2"):
                entered.set()

        with locks.hold("U1"):
            t = threading.Thread(target=hold_other_key)
            t.start()
            assert entered.wait(timeout=2)
            t.join()

    def test_registry_is_emptied_after_use(self):
        locks = KeyedLock()
        with locks.hold("U1"):
            assert len(locks) == 1
        assert len(locks) == 0
