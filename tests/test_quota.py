"""Tests for session quota accounting."""

import threading

import pytest

from moodscope.core.errors import QuotaExceeded
from moodscope.core.quota import Admitted, QuotaGuard, Rejected


class TestQuotaGuard:
    """Test admission and commit semantics."""

    def test_admit_does_not_charge(self):
        guard = QuotaGuard(limit=15)
        assert guard.admit(3) == Admitted(units=3)
        assert guard.used == 0

    def test_rejection_carries_remaining(self):
        guard = QuotaGuard(limit=15, used=14)
        assert guard.admit(3) == Rejected(remaining=1)
        assert guard.used == 14

    def test_admit_up_to_limit(self):
        guard = QuotaGuard(limit=15, used=12)
        assert isinstance(guard.admit(3), Admitted)

    def test_commit_increments(self):
        guard = QuotaGuard(limit=15)
        guard.commit(2)
        guard.commit(1)
        assert guard.state.used == 3
        assert guard.state.remaining == 12

    def test_commit_past_limit_raises(self):
        guard = QuotaGuard(limit=2, used=2)
        with pytest.raises(QuotaExceeded) as exc:
            guard.commit(1)
        assert exc.value.remaining == 0
        assert guard.used == 2

    def test_invalid_initial_state(self):
        with pytest.raises(ValueError):
            QuotaGuard(limit=1, used=2)


class TestQuotaTransaction:
    """Test the admit-execute-commit critical section."""

    def test_charges_only_committed_units(self):
        guard = QuotaGuard(limit=15)
        with guard.transaction(5) as charge:
            charge.commit(3)
        assert guard.used == 3

    def test_rejected_transaction_leaves_usage(self):
        guard = QuotaGuard(limit=15, used=14)
        with pytest.raises(QuotaExceeded) as exc:
            with guard.transaction(3):
                pytest.fail("transaction body must not run")
        assert exc.value.remaining == 1
        assert guard.used == 14

    def test_custom_rejection_message(self):
        guard = QuotaGuard(limit=1, used=1)
        with pytest.raises(QuotaExceeded, match="comparison"):
            with guard.transaction(1, "no comparison for you"):
                pass

    def test_cannot_commit_more_than_admitted(self):
        guard = QuotaGuard(limit=15)
        with guard.transaction(2) as charge:
            with pytest.raises(ValueError):
                charge.commit(3)
        assert guard.used == 0

    def test_quota_message_wording(self):
        assert str(QuotaExceeded(1)).endswith("You can perform 1 more analysis.")
        assert str(QuotaExceeded(0)).endswith("You can perform no more analyses.")

    def test_concurrent_transactions_never_exceed_limit(self):
        guard = QuotaGuard(limit=10)
        rejected = []

        def worker():
            try:
                with guard.transaction(1) as charge:
                    charge.commit(1)
            except QuotaExceeded:
                rejected.append(1)

        threads = [threading.Thread(target=worker) for _ in range(25)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert guard.used == 10
        assert len(rejected) == 15

    def test_reservation_blocks_other_callers(self):
        guard = QuotaGuard(limit=3)
        with guard.transaction(2) as charge:
            assert guard.reserved == 2
            assert guard.admit(2) == Rejected(remaining=1)
            charge.commit(1)
            assert guard.reserved == 1
        assert guard.reserved == 0
        assert guard.used == 1

    def test_failed_body_releases_reservation(self):
        guard = QuotaGuard(limit=3)
        with pytest.raises(RuntimeError):
            with guard.transaction(3):
                raise RuntimeError("backend exploded")
        assert guard.reserved == 0
        assert guard.used == 0

    def test_transactions_run_in_parallel(self):
        guard = QuotaGuard(limit=10)
        barrier = threading.Barrier(4, timeout=5)

        def worker():
            with guard.transaction(1) as charge:
                barrier.wait()
                charge.commit(1)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not barrier.broken
        assert guard.used == 4
