"""
Route-neutral description of an outbound HTTP request.

Routers print routes into RequestData, interceptors hand modified copies
down the chain, and transports turn the final copy into a real HTTP call.
Query parameters and headers keep insertion order and may hold several
values per name.
"""

from urllib.parse import quote
from urllib.parse import urlencode

from pydantic import BaseModel
from pydantic import Field


class RequestData(BaseModel):
    """
    Order-preserving request representation.

    Example:
        request = RequestData(host="api.example.com", path=["users", "42"])
        request = request.with_header("Accept", "application/json")
        request.url  # "https://api.example.com/users/42"
    """

    method: str = "GET"
    scheme: str = "https"
    host: str | None = None
    port: int | None = None
    path: list[str] = Field(default_factory=list)
    query: dict[str, list[str]] = Field(default_factory=dict)
    headers: dict[str, list[str]] = Field(default_factory=dict)
    body: bytes | None = None

    @property
    def is_complete(self) -> bool:
        """True when the request carries everything a transport needs."""
        return bool(self.host) and bool(self.method)

    @property
    def path_string(self) -> str:
        return "/" + "/".join(quote(segment, safe="") for segment in self.path)

    @property
    def url(self) -> str:
        """Absolute URL built from scheme, host, port, path and query."""
        authority = self.host or ""
        if self.port is not None:
            authority = f"{authority}:{self.port}"
        url = f"{self.scheme}://{authority}{self.path_string}"
        if self.query:
            url = f"{url}?{urlencode(self.query, doseq=True)}"
        return url

    def header_items(self) -> list[tuple[str, str]]:
        """Flatten headers into (name, value) pairs, preserving order."""
        return [(name, value) for name, values in self.headers.items() for value in values]

    def with_header(self, name: str, value: str) -> "RequestData":
        """Return a copy with `name` set to the single value `value`."""
        headers = {key: list(values) for key, values in self.headers.items()}
        headers[name] = [value]
        return self.model_copy(update={"headers": headers})

    def with_query(self, name: str, value: str) -> "RequestData":
        """Return a copy with `value` appended to the query parameter `name`."""
        query = {key: list(values) for key, values in self.query.items()}
        query.setdefault(name, []).append(value)
        return self.model_copy(update={"query": query})
