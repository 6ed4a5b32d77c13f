from __future__ import annotations
import json
import logging
import time
from typing import Optional, Type, TypeVar

from pydantic import ValidationError
from requests import HTTPError, RequestException, Session

from resas.core.errors import FatalError, ResasError, RetryableError
from resas.core.schema import ApiStatus, ResasResponse
from resas.resilience.retry_policy import RetryPolicy

logger = logging.getLogger(__name__)

RESAS_ENDPOINT = "https://opendata.resas-portal.go.jp"
API_KEY_HEADER = "X-API-KEY"

T = TypeVar("T")


class ResasClient:
    """
    Blocking client for the RESAS API.
    - one pooled session, one API key and one retry policy, fixed at construction
    - every endpoint goes through get(); failures surface as ResasError
    """

    def __init__(
        self,
        api_key: str,
        retry_policy: Optional[RetryPolicy] = None,
        *,
        base_url: str = RESAS_ENDPOINT,
        timeout: Optional[float] = None,
    ):
        self._api_key = api_key
        self.retry_policy = retry_policy or RetryPolicy()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = Session()

    def __repr__(self) -> str:
        return f"ResasClient(base_url={self.base_url!r}, retry_policy={self.retry_policy!r})"

    def __enter__(self) -> "ResasClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def build_url(self, path: str, parameters: Optional[str] = None) -> str:
        # parameters is an already-encoded query string
        url = f"{self.base_url}/{path}"
        return f"{url}?{parameters}" if parameters else url

    def get(
        self,
        path: str,
        record_type: Type[T],
        parameters: Optional[str] = None,
        with_retry: bool = True,
    ) -> ResasResponse[T]:
        url = self.build_url(path, parameters)
        text = self.send_request_with_retry(url) if with_retry else self.send_request(url)
        try:
            return ResasResponse[record_type].model_validate_json(text)
        except ValidationError as e:
            raise ResasError.from_exception(e)

    def send_request_with_retry(self, url: str) -> str:
        attempts = 0
        while True:
            try:
                return self.send_request(url)
            except ResasError as err:
                if not err.is_retriable():
                    raise
                attempts += 1
                if attempts >= self.retry_policy.attempts:
                    raise err.escalate_to_fatal(f"Retried {attempts} but couldn't recover")
                logger.warning(
                    "Attempt %d/%d for %s failed (%s); retrying in %ss",
                    attempts, self.retry_policy.attempts, url, err, self.retry_policy.interval,
                )
                time.sleep(self.retry_policy.interval)

    def send_request(self, url: str) -> str:
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, headers={API_KEY_HEADER: self._api_key}, timeout=self.timeout)
            response.raise_for_status()
        except HTTPError as e:
            status = getattr(e.response, "status_code", None)
            if status is not None and self.retry_policy.is_retriable_code(status):
                raise RetryableError(cause=e, message=f"Status code {status}")
            raise ResasError.from_exception(e)
        except RequestException as e:
            # connection errors, timeouts, DNS failures: not retried
            raise ResasError.from_exception(e)

        text = response.text
        try:
            status = ApiStatus.probe(text)
        except (json.JSONDecodeError, ValidationError) as e:
            raise ResasError.from_exception(e)
        if status is None:
            return text

        # RESAS reports failures in the body even when the HTTP status is 200.
        code = status.code_text or "null"
        if self.retry_policy.is_retriable_code(code):
            raise RetryableError(message=status.message_text or None)
        if code.startswith("2"):
            return text
        raise FatalError(message=f"{code} {status.message_text}".rstrip())
