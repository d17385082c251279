"""Unit tests for OperationResult and OperationStatus."""

import pytest

from infrastructure.operations import OperationResult, OperationStatus


@pytest.mark.unit
class TestOperationResult:
    def test_success_carries_data(self):
        result = OperationResult.success(data={"delivered": True})

        assert result.status == OperationStatus.SUCCESS
        assert result.data == {"delivered": True}
        assert result.message == "ok"
        assert result.is_success is True
        assert result.is_skipped is False
        assert result.is_failure is False

    def test_skipped(self):
        result = OperationResult.skipped("empty webhook")

        assert result.is_skipped is True
        assert result.is_success is False
        assert result.is_failure is False
        assert result.message == "empty webhook"

    def test_transient_error(self):
        result = OperationResult.transient_error("Slack returned 500", "HTTP_500")

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "HTTP_500"
        assert result.is_failure is True

    def test_permanent_error(self):
        result = OperationResult.permanent_error("bad input", "INVALID")

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.is_failure is True

    def test_unsupported_is_a_failure(self):
        result = OperationResult.error(OperationStatus.UNSUPPORTED, "nope")

        assert result.is_failure is True
        assert result.error_code is None
