"""Outcome of a single HTTP call made through a client."""

from typing import Any

from pydantic import BaseModel


class RequestResult(BaseModel):
    """
    Either the parsed JSON body of a successful call or the reason it failed.

    Callers check ``ok`` before touching ``data``.
    """
    ok: bool
    url: str
    status_code: int | None = None
    data: Any = None
    error: str | None = None

    @classmethod
    def success(cls, url: str, status_code: int, data: Any) -> "RequestResult":
        return cls(ok=True, url=url, status_code=status_code, data=data)

    @classmethod
    def failure(cls, url: str, error: str, status_code: int | None = None) -> "RequestResult":
        return cls(ok=False, url=url, status_code=status_code, error=error)
