from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, FrozenSet, Iterable, Mapping, Optional, Union

DEFAULT_RETRIABLE_CODES = frozenset({"500", "502"})


def _code_text(code: Union[int, str]) -> str:
    return str(code).strip()


@dataclass(frozen=True)
class RetryPolicy:
    """
    Which status codes are retried, how long to wait between attempts
    (seconds) and how many attempts are made in total.
    """
    retriable_codes: FrozenSet[str] = field(default=DEFAULT_RETRIABLE_CODES)
    interval: float = 60
    attempts: int = 3

    def __post_init__(self) -> None:
        object.__setattr__(self, "retriable_codes",
                           frozenset(_code_text(c) for c in self.retriable_codes))
        if self.attempts < 1:
            raise ValueError(f"attempts must be >= 1, got {self.attempts}")
        if self.interval < 0:
            raise ValueError(f"interval must be >= 0, got {self.interval}")

    @classmethod
    def from_config(cls, section: Mapping[str, Any]) -> "RetryPolicy":
        kwargs: dict = {}
        codes: Optional[Iterable[Union[int, str]]] = section.get("retriable_codes")
        if codes is not None:
            kwargs["retriable_codes"] = frozenset(_code_text(c) for c in codes)
        if section.get("interval") is not None:
            kwargs["interval"] = float(section["interval"])
        if section.get("attempts") is not None:
            kwargs["attempts"] = int(section["attempts"])
        return cls(**kwargs)

    def is_retriable_code(self, code: Union[int, str]) -> bool:
        return _code_text(code) in self.retriable_codes
