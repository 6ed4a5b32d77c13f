from __future__ import annotations
from typing import Optional, Protocol, Type, TypeVar

from .schema import ResasResponse

T = TypeVar("T")


class CollectionClient(Protocol):
    """
    What the downloader needs from a client: one typed collection per call.
    """

    def get(
        self,
        path: str,
        record_type: Type[T],
        parameters: Optional[str] = None,
        with_retry: bool = True,
    ) -> ResasResponse[T]:
        """
        Fetch `path` (with an optional pre-encoded query string) and return the
        envelope with `result` parsed as `record_type` items. Raises ResasError.
        """
        ...
