# tests/services/test_store.py
"""Store retry policy: reads retry once, writes never."""
from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from open_court.services.exceptions import StoreError
from open_court.services.store import commit_or_raise, read_with_retry


def _operational() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("database is locked"))


def test_read_retries_once_then_succeeds(db_session) -> None:
    """Test that a transient read failure is retried once."""
    calls = []

    def _flaky():
        calls.append(1)
        if len(calls) == 1:
            raise _operational()
        return "ok"

    assert read_with_retry(db_session, _flaky) == "ok"
    assert len(calls) == 2


def test_read_gives_up_after_second_failure(db_session) -> None:
    """Test that a second transient failure surfaces as a store error."""
    calls = []

    def _down():
        calls.append(1)
        raise _operational()

    with pytest.raises(StoreError):
        read_with_retry(db_session, _down)
    assert len(calls) == 2


def test_non_transient_read_error_is_not_retried(db_session) -> None:
    """Test that non-transient read errors are not retried."""
    calls = []

    def _broken():
        calls.append(1)
        raise IntegrityError("SELECT 1", {}, Exception("constraint"))

    with pytest.raises(StoreError):
        read_with_retry(db_session, _broken)
    assert len(calls) == 1


def test_commit_failure_is_not_retried(db_session, monkeypatch) -> None:
    """Test that a failed commit is surfaced without a retry."""
    calls = []

    def _commit():
        calls.append(1)
        raise _operational()

    monkeypatch.setattr(db_session, "commit", _commit)
    with pytest.raises(StoreError) as exc_info:
        commit_or_raise(db_session)
    assert exc_info.value.status_code == 503
    assert len(calls) == 1
