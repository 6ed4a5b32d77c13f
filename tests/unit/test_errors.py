# tests/unit/test_errors.py

from __future__ import annotations
import copy
import pickle
import sys
from pathlib import Path

# Make "src" importable
sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from resas.core.errors import ErrorKind, FatalError, ResasError, RetryableError


def test_new_picks_subclass_by_kind():
    r = ResasError.new(ErrorKind.RETRYABLE, message="busy")
    f = ResasError.new(ErrorKind.FATAL)
    assert isinstance(r, RetryableError) and r.is_retriable()
    assert isinstance(f, FatalError) and not f.is_retriable()


def test_escalate_moves_cause_and_replaces_message():
    cause = ConnectionError("reset")
    err = RetryableError(cause=cause, message="Status code 500")
    fatal = err.escalate_to_fatal("Retried 3 but couldn't recover")

    assert isinstance(fatal, FatalError)
    assert fatal.cause is cause
    assert fatal.__cause__ is cause
    assert fatal.message == "Retried 3 but couldn't recover"
    # the retryable error no longer owns the cause
    assert err.cause is None
    assert err.__cause__ is None


def test_from_exception_is_fatal_without_message():
    exc = ValueError("bad json")
    err = ResasError.from_exception(exc)
    assert isinstance(err, FatalError)
    assert err.cause is exc
    assert err.message is None


def test_str_formats():
    assert str(FatalError()) == "Fatal error:"
    assert str(RetryableError(message="busy")) == "Retryable error: busy"
    assert str(FatalError(cause=ValueError("boom"))) == "Fatal error: boom"
    assert str(FatalError(cause=ValueError("boom"), message="404 nope")) == "Fatal error: 404 nope: boom"


def test_copy_and_pickle_keep_message_and_cause():
    err = FatalError(cause=ValueError("boom"), message="404 nope")
    for clone in (copy.copy(err), pickle.loads(pickle.dumps(err))):
        assert isinstance(clone, FatalError)
        assert clone.message == "404 nope"
        assert isinstance(clone.cause, ValueError) and str(clone.cause) == "boom"
        assert str(clone) == "Fatal error: 404 nope: boom"
