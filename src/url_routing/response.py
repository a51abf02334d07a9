"""
Immutable response produced by a transport.

ResponseData replaces the per-library response objects (httpx, aiohttp,
requests) with one shape, so interceptors and decoders never need to know
which HTTP client performed the call.
"""

import json
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class ResponseData(BaseModel):
    """
    Raw body bytes plus transport metadata.

    Instances are frozen; an interceptor that wants a different response
    builds a new one with `model_copy(update=...)`.
    """

    model_config = ConfigDict(frozen=True)

    status_code: int = 200
    headers: dict[str, list[str]] = Field(default_factory=dict)
    body: bytes = b""
    url: str | None = None

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def header(self, name: str) -> str | None:
        """First value of header `name`, matched case-insensitively."""
        lowered = name.lower()
        for key, values in self.headers.items():
            if key.lower() == lowered and values:
                return values[0]
        return None

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json.loads(self.body)

    @staticmethod
    def collect_headers(items) -> dict[str, list[str]]:
        """Group (name, value) pairs into an ordered multi-value mapping."""
        headers: dict[str, list[str]] = {}
        for name, value in items:
            headers.setdefault(name, []).append(value)
        return headers
