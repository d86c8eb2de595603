import logging
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

logger = logging.getLogger(__name__)

# Connection options that are handed to httpx.Client as is
CLIENT_OPTIONS = (
    "auth",
    "headers",
    "cookies",
    "verify",
    "cert",
    "timeout",
    "follow_redirects",
    "transport",
    "proxy",
    "trust_env",
)

DEFAULT_HEADERS = {"Accept": "application/json"}


class HTTPTransport:
    """
    Executes builder requests against a REST API.

    Failures never raise: an error status, a transport error or a body that is
    not JSON all result in ``None`` as decoded body. The response, when there
    is one, is returned alongside so callers can inspect what went wrong.
    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        options = dict(options or {})
        unknown = set(options) - set(CLIENT_OPTIONS)
        if unknown:
            logger.debug("Ignoring unsupported transport options: %s", sorted(unknown))

        self.client_options: Dict[str, Any] = {
            key: value for key, value in options.items() if key in CLIENT_OPTIONS
        }
        self.client_options["headers"] = {
            **DEFAULT_HEADERS,
            **(self.client_options.get("headers") or {}),
        }

    def _client(self) -> httpx.Client:
        return httpx.Client(**self.client_options)

    def send(
        self,
        method: str,
        url: str,
        query: Optional[Mapping[str, Any]] = None,
        payload: Any = None,
    ) -> Optional[httpx.Response]:
        """Perform the request. Returns the response, or None when none was received."""
        request_kwargs: Dict[str, Any] = {"params": dict(query or {})}
        if payload is not None:
            request_kwargs["json"] = payload

        logger.debug("%s %s params=%s", method, url, request_kwargs["params"])

        with self._client() as client:
            try:
                response = client.request(method, url, **request_kwargs)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                logger.warning(
                    "%s %s failed with status %s", method, url, exc.response.status_code
                )
                return exc.response
            except httpx.RequestError:
                logger.warning("%s %s could not be performed", method, url, exc_info=True)
                return None

        return response

    def execute(
        self,
        method: str,
        url: str,
        query: Optional[Mapping[str, Any]] = None,
        payload: Any = None,
    ) -> Tuple[Optional[httpx.Response], Any]:
        """
        Perform the request and decode the body.

        Returns a ``(response, body)`` tuple where ``body`` is None for every
        kind of failure.
        """
        response = self.send(method, url, query=query, payload=payload)
        return response, decode_response(response)


def decode_response(response: Optional[httpx.Response]) -> Any:
    """Decode the JSON body of a successful response, None otherwise."""
    if response is None:
        return None

    # Status code has to be lower than 300 to be valid
    if response.status_code >= 300:
        return None

    if not response.content:
        return None

    try:
        return response.json()
    except ValueError:
        logger.warning("Response body with status %s is not valid JSON", response.status_code)
        return None
