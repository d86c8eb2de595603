import json
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

import httpx

from restmodel.core.config import ConnectionConfig, ConnectionRegistry, get_default_registry
from restmodel.core.endpoint import assemble_endpoint, resolve_namespace
from restmodel.core.exceptions import (InvalidInputError, NotImplementedOperationError,
                                       UnsupportedOperationError)
from restmodel.core.normalizer import normalize
from restmodel.core.pagination import PaginationResult
from restmodel.core.transport import HTTPTransport

logger = logging.getLogger(__name__)


class Builder:
    """
    Builds restful API calls the way a queryset builds database queries.

    A builder is bound to a model prototype and owned by a single query chain:

        User.objects.where("active", 1).take(10).get()
        User.objects.action("search").where("q", "bob").get()
        User.objects.find(5)

    Attribute names that are not builder methods are treated as scope calls
    on the model. Unknown scopes are ignored.
    """

    transport_class = HTTPTransport

    def __init__(
        self,
        model,
        registry: Optional[ConnectionRegistry] = None,
        connection: Optional[str] = None,
    ):
        self.model = model
        if registry is None:
            registry = model.get_registry()
        self.registry = registry if registry is not None else get_default_registry()

        self._query: Dict[str, Any] = {}
        self._payload: Any = None
        self._action: Optional[str] = None
        self._id: Any = None
        self._response: Optional[httpx.Response] = None
        self._requested = False
        self._dataset: Any = None
        self._config: Optional[ConnectionConfig] = None
        self._connection: Optional[str] = None

        # Initialize the API connection
        self.on(connection or model.get_connection())

        # Call the scopes which have to be executed by default
        self._init_scopes()

    # -- Terminal methods --

    def all(self):
        raise NotImplementedOperationError("The all method is not yet implemented")

    def get(self) -> List[Any]:
        """Execute the request and return the results as model instances."""
        result = self.do_request()
        records = normalize(
            result, root=self.model.get_root(), namespace=self.get_namespace()
        )
        return [self.model.new_instance(record) for record in records]

    def first(self):
        results = self.get()
        return results[0] if results else None

    def find(self, id):
        """Fetch a specific record, None when it could not be found."""
        self.id(id)
        return self.first()

    def create(self, data: Optional[Dict[str, Any]] = None):
        """Create a record, None when the API did not accept it."""
        self._payload = data if data is not None else {}

        response = self.do_request("POST")
        if not response:
            return None
        if not isinstance(response, Mapping):
            logger.warning("Unexpected create response for %s: %r", self.get_endpoint(), response)
            return None

        return self.model.new_instance(response)

    def paginate(self, per_page: int, current_page: Optional[int] = None) -> PaginationResult:
        current_page = current_page or 1

        # Looked up on the class, instances answer every public name
        if hasattr(type(self.model), "set_pagination"):
            self.model.set_pagination(self, per_page, current_page)

        results = self.get()

        total = None
        if hasattr(type(self.model), "get_total"):
            total = self.model.get_total(self)

        if not total:
            total = len(results)

        return PaginationResult(
            items=results, total=total, per_page=per_page, current_page=current_page
        )

    # -- Chaining methods --

    def where(self, key: str, value: Any) -> "Builder":
        self._query[key] = value
        return self

    def take(self, take: int) -> "Builder":
        field = self.model.get_take()
        if field:
            return self.where(field, take)
        raise UnsupportedOperationError("Take method not implemented for this API")

    def order_by(self, order_by: Any) -> "Builder":
        field = self.model.get_order_by()
        if field:
            return self.where(field, order_by)
        raise UnsupportedOperationError("OrderBy method not implemented for this API")

    def action(self, action: Optional[str]) -> "Builder":
        """Set the extra path segment placed after the namespace and id."""
        self._action = action
        return self

    def id(self, id: Any) -> "Builder":
        self._id = id
        return self

    def on(self, connection: Optional[str]) -> "Builder":
        """Run the API call on another configured connection."""
        self._config = self.registry.resolve(connection)
        self._connection = connection or self.registry.default
        return self

    def dataset(self, data: Any) -> "Builder":
        """
        Use fixture data instead of calling the API. Accepts decoded data or a
        JSON string.
        """
        if isinstance(data, (list, dict)):
            self._dataset = data
            return self

        result = None
        if isinstance(data, (str, bytes, bytearray)):
            try:
                result = json.loads(data)
            except ValueError:
                result = None

        if not result:
            raise InvalidInputError("Invalid json send as dataset")

        self._dataset = result
        return self

    # -- Scopes --

    def _init_scopes(self) -> None:
        for name in self.model.get_scopes():
            self.call_scope(name)

    def call_scope(self, name: str, *args, **kwargs) -> bool:
        """Apply a scope of the model. Returns whether the scope exists."""
        handler = self.model.get_scope(name)
        if handler is None:
            return False

        logger.debug("Applying scope %r of %s", name, type(self.model).__name__)
        handler(self.model, self, *args, **kwargs)
        return True

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)

        def scope_call(*args, **kwargs):
            self.call_scope(name, *args, **kwargs)
            return self

        return scope_call

    # -- Inspection --

    def get_endpoint(self) -> str:
        """Create the endpoint based on url, version, namespace, id and action."""
        return assemble_endpoint(self._config, self.get_namespace(), self._id, self._action)

    def get_namespace(self) -> Optional[str]:
        return resolve_namespace(self.model)

    def get_query(self) -> Dict[str, Any]:
        return self._query

    def get_payload(self) -> Any:
        return self._payload

    def get_connection(self) -> Optional[str]:
        return self._connection

    def get_config(self, key: Optional[str] = None) -> Any:
        if not key:
            return self._config
        return self._config.get(key)

    def get_response(self) -> Optional[httpx.Response]:
        """The latest API response, requested first when nothing was requested yet."""
        if not self._requested:
            self.do_request()
        return self._response

    # -- Transport --

    def do_request(self, method: str = "GET") -> Any:
        """Perform the request with the API and return the decoded body, or None."""
        if self._dataset is not None:
            logger.debug("Using dataset instead of requesting %s", self.get_endpoint())
            return self._dataset

        transport = self.transport_class(self._config.options)
        self._response, body = transport.execute(
            method, self.get_endpoint(), query=self._query, payload=self._payload
        )
        self._requested = True
        return body

    def __repr__(self):
        return f"<Builder {type(self.model).__name__} {self.get_endpoint()} {self._query}>"
