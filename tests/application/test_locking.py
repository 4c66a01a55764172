"""Unit tests for KeyedLock and store-failure reporting."""

import threading
import time

import pytest
from structlog.testing import capture_logs

from shop.application.locking import KeyedLock
from shop.application.store_errors import reporting_store_failures
from shop.domain.exceptions import StoreUnavailableError, ValidationError


class TestKeyedLock:

    def test_same_key_is_exclusive(self):
        locks = KeyedLock()
        inside = []
        overlaps = []

        def worker():
            with locks.hold("a"):
                if inside:
                    overlaps.append(True)
                inside.append(True)
                time.sleep(0.01)
                inside.pop()

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert overlaps == []

    def test_different_keys_do_not_block(self):
        locks = KeyedLock()
        entered = threading.Event()

        def other():
            with locks.hold("b"):
                entered.set()

        with locks.hold("a"):
            t = threading.Thread(target=other)
            t.start()
            assert entered.wait(timeout=2)
            t.join()

    def test_unused_locks_are_released(self):
        locks = KeyedLock()
        with locks.hold("a"):
            assert len(locks) == 1
        assert len(locks) == 0

    def test_released_after_exception(self):
        locks = KeyedLock()
        with pytest.raises(ValueError):
            with locks.hold("a"):
                raise ValueError("boom")
        assert len(locks) == 0
        with locks.hold("a"):
            pass


class TestReportingStoreFailures:

    def test_logs_and_reraises(self):
        with capture_logs() as logs:
            with pytest.raises(StoreUnavailableError):
                with reporting_store_failures("inventory.adjust", record_id="r1"):
                    raise StoreUnavailableError("disk full")

        assert logs[0]["event"] == "Store unavailable"
        assert logs[0]["operation"] == "inventory.adjust"
        assert logs[0]["record_id"] == "r1"
        assert logs[0]["log_level"] == "error"

    def test_other_errors_pass_untouched(self):
        with capture_logs() as logs:
            with pytest.raises(ValidationError):
                with reporting_store_failures("inventory.adjust"):
                    raise ValidationError("bad")
        assert logs == []
