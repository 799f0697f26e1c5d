"""Tests for ActionGuard."""

import pytest

from stellar_payflow.errors import ActionInProgressError, ErrorCategory
from stellar_payflow.guard import ActionGuard


class TestActionGuard:
    def test_idle(self) -> None:
        guard = ActionGuard()
        assert not guard.busy
        assert guard.active is None

    def test_hold_marks_busy(self) -> None:
        guard = ActionGuard()
        with guard.hold("connect"):
            assert guard.busy
            assert guard.active == "connect"
        assert not guard.busy

    def test_second_hold_rejected(self) -> None:
        guard = ActionGuard()
        with guard.hold("submit a payment"):
            with pytest.raises(ActionInProgressError) as excinfo:
                with guard.hold("disconnect"):
                    pass
            assert guard.active == "submit a payment"
        error = excinfo.value
        assert error.category == ErrorCategory.BUSY
        assert error.message == "Cannot disconnect while submit a payment is still in progress."

    def test_released_on_error(self) -> None:
        guard = ActionGuard()
        with pytest.raises(RuntimeError):
            with guard.hold("connect"):
                raise RuntimeError("boom")
        assert not guard.busy
