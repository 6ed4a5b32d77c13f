from __future__ import annotations
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    FATAL = "Fatal"
    RETRYABLE = "Retryable"


class ResasError(Exception):
    """
    Base class for client failures.
    Carries a kind (Fatal/Retryable), an optional underlying cause and an
    optional human-readable message.
    """

    kind: ErrorKind = ErrorKind.FATAL

    def __init__(self, cause: Optional[BaseException] = None, message: Optional[str] = None):
        # args mirror __init__ for copy and pickle
        super().__init__(cause, message)
        self.cause = cause
        self.message = message
        self.__cause__ = cause

    @staticmethod
    def new(kind: ErrorKind, cause: Optional[BaseException] = None,
            message: Optional[str] = None) -> "ResasError":
        klass = RetryableError if kind is ErrorKind.RETRYABLE else FatalError
        return klass(cause=cause, message=message)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "FatalError":
        """
        Transport and decoding failures point at a structural problem
        (bad URL, malformed JSON), so they are always fatal.
        """
        return FatalError(cause=exc)

    def is_retriable(self) -> bool:
        return self.kind is ErrorKind.RETRYABLE

    def escalate_to_fatal(self, message: Optional[str]) -> "FatalError":
        # The cause moves to the new error; this one is spent afterwards.
        cause, self.cause = self.cause, None
        self.__cause__ = None
        return FatalError(cause=cause, message=message)

    def __str__(self) -> str:
        parts = [p for p in (self.message, str(self.cause) if self.cause is not None else None) if p]
        head = f"{self.kind.value} error:"
        return f"{head} {': '.join(parts)}" if parts else head


class FatalError(ResasError):
    """
    Non-retryable: malformed payload, unretryable status, transport failure
    or an exhausted retry budget.
    """
    kind = ErrorKind.FATAL


class RetryableError(ResasError):
    """
    Retryable: the server signalled a transient condition with a code in
    the retry policy, either as the HTTP status or inside the body.
    """
    kind = ErrorKind.RETRYABLE
