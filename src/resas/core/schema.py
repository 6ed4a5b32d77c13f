from __future__ import annotations
import json
from typing import Any, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class _Record(BaseModel):
    # Wire names are the camelCase form of the attribute names.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Prefecture(_Record):
    pref_code: int
    pref_name: str


class City(_Record):
    pref_code: int
    city_code: str
    city_name: str
    big_city_flag: str


class ResasResponse(BaseModel, Generic[T]):
    """Envelope around a collection; `result` is the only field consumers read."""
    message: Optional[str] = None
    result: List[T] = Field(default_factory=list)


class ApiStatus(BaseModel):
    """
    Application-level status embedded in a response body.
    The API can answer HTTP 200 and still report a failure here.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status_code: Optional[Union[int, str]] = Field(default=None, alias="statusCode")
    message: Optional[Any] = None

    @property
    def code_text(self) -> Optional[str]:
        return None if self.status_code is None else str(self.status_code).strip()

    @property
    def message_text(self) -> str:
        return "" if self.message is None else str(self.message)

    @classmethod
    def probe(cls, text: str) -> Optional["ApiStatus"]:
        """
        Decode `text` generically. Returns None when the body is valid JSON but
        carries no statusCode; raises json.JSONDecodeError on malformed input.
        """
        data = json.loads(text)
        if not isinstance(data, dict) or "statusCode" not in data:
            return None
        return cls.model_validate(data)
