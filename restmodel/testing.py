"""
Fake REST API for testing restmodel models.

Serves canned responses through ``httpx.MockTransport`` so no HTTP server is
needed. Plug it into a connection through its options:

    api = FakeAPI()
    api.add("GET", "https://api.example.com/users", json={"users": [{"id": 1}]})
    registry.register("main", url="https://api.example.com", options=api.options())
"""
from typing import Any, Dict, List, Optional, Tuple, Type

import httpx


class FakeAPI:
    """Transport double that records requests and replays registered responses."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], Any] = {}
        self._queue: List[Any] = []

    @staticmethod
    def _key(method: str, url: str) -> Tuple[str, str]:
        return method.upper(), str(url).split("?", 1)[0].rstrip("/")

    @staticmethod
    def _response(status_code: int, json: Any, content: Optional[bytes], headers: Optional[Dict[str, str]]):
        if content is not None:
            return httpx.Response(status_code, content=content, headers=headers)
        if json is not None:
            return httpx.Response(status_code, json=json, headers=headers)
        return httpx.Response(status_code, headers=headers)

    def add(
        self,
        method: str,
        url: str,
        json: Any = None,
        status_code: int = 200,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        """Serve a response for every request on ``method`` + ``url`` (query string ignored)."""
        self._routes[self._key(method, url)] = self._response(status_code, json, content, headers)

    def queue(
        self,
        json: Any = None,
        status_code: int = 200,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        """Serve a response once, for the next request without a matching route."""
        self._queue.append(self._response(status_code, json, content, headers))

    def fail(self, method: str, url: str, exc_class: Type[httpx.RequestError] = httpx.ConnectError) -> None:
        """Raise a transport error for requests on ``method`` + ``url``."""
        self._routes[self._key(method, url)] = exc_class

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        route = self._routes.get(self._key(request.method, str(request.url)))
        if route is None and self._queue:
            route = self._queue.pop(0)
        if route is None:
            return httpx.Response(404, json={"detail": "Not found."})

        if isinstance(route, type) and issubclass(route, httpx.RequestError):
            raise route("Connection failed", request=request)

        # Responses are shared between requests, so hand out a copy
        return httpx.Response(
            route.status_code, content=route.content, headers=route.headers
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def options(self, **extra) -> Dict[str, Any]:
        return {"transport": self.transport, **extra}

    @property
    def last_request(self) -> Optional[httpx.Request]:
        return self.requests[-1] if self.requests else None
