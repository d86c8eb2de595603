from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, ClassVar, Dict, List, Optional, Union

from restmodel.core.builder import Builder
from restmodel.core.config import ConnectionRegistry

logger = logging.getLogger(__name__)

SCOPE_MARKER = "_restmodel_scope"
ACCESSOR_MARKER = "_restmodel_accessor"
SCOPE_PREFIX = "scope_"


def scope(func: Optional[Callable] = None, *, name: Optional[str] = None):
    """
    Register a model method as a scope.

    The scope name defaults to the method name without the ``scope_`` prefix.
    Handlers receive the builder followed by the arguments of the call:

        class User(RestModel):
            scopes = ["active"]

            @scope
            def scope_active(self, builder):
                builder.where("active", 1)

            @scope(name="named")
            def filter_on_name(self, builder, name):
                builder.where("name", name)
    """

    def decorator(f: Callable) -> Callable:
        scope_name = name or f.__name__
        if not name and scope_name.startswith(SCOPE_PREFIX):
            scope_name = scope_name[len(SCOPE_PREFIX):]
        setattr(f, SCOPE_MARKER, scope_name)
        return f

    if func is not None:
        return decorator(func)
    return decorator


def accessor(name: str):
    """
    Register a model method as the getter of a computed attribute:

        @accessor("full_name")
        def get_full_name(self):
            return f"{self.attributes['first_name']} {self.attributes['last_name']}"
    """

    def decorator(f: Callable) -> Callable:
        setattr(f, ACCESSOR_MARKER, name)
        return f

    return decorator


class Manager:
    """
    Entry point for queries on a model. Every attribute access starts a new
    builder, so chains never share state:

        User.objects.where("name", "bob").get()
        User.objects.active().get()
    """

    def __init__(self, model_cls):
        self.model = model_cls

    def query(self, registry: Optional[ConnectionRegistry] = None, connection: Optional[str] = None) -> Builder:
        return Builder(self.model(), registry=registry, connection=connection)

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)

        if self.model.get_scope(name) is not None:
            builder = self.query()

            def scope_call(*args, **kwargs):
                builder.call_scope(name, *args, **kwargs)
                return builder

            return scope_call

        if callable(getattr(Builder, name, None)):
            return getattr(self.query(), name)

        raise AttributeError(f"Method {name} not available on {self.model.__name__}")


class RestModel:
    """
    Create an ORM-like model from a restful API.

    Subclasses describe the API resource with class attributes; instances hold
    one record of the API response.
    """

    # Which connection the model uses. The default connection of the registry when None.
    connection: ClassVar[Optional[str]] = None
    # Registry holding the connections. The process default when None.
    registry: ClassVar[Optional[ConnectionRegistry]] = None
    # The namespace / path after the url of the API call. Derived from the class name when None.
    namespace: ClassVar[Optional[str]] = None
    use_namespace: ClassVar[bool] = True
    # The root element of list responses
    root: ClassVar[Optional[str]] = None
    # Scope names applied to every builder of this model, in order
    scopes: ClassVar[List[str]] = []
    # Query parameter names for take() and order_by(). Unsupported when None.
    take: ClassVar[Optional[str]] = None
    order_by: ClassVar[Optional[str]] = None
    # Attributes cast to datetime, parsed with date_format
    dates: ClassVar[List[str]] = []
    date_format: ClassVar[str] = "%Y-%m-%d"
    # Accessors added to the attributes
    appends: ClassVar[List[str]] = []

    _scope_registry: ClassVar[Dict[str, Callable]] = {}
    _accessor_registry: ClassVar[Dict[str, Callable]] = {}

    objects: ClassVar[Manager]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        scopes: Dict[str, Callable] = {}
        accessors: Dict[str, Callable] = {}
        # Method name -> registered name, so undecorated overrides replace the handler
        scope_methods: Dict[str, str] = {}
        accessor_methods: Dict[str, str] = {}
        for klass in reversed(cls.__mro__):
            for attr, value in vars(klass).items():
                scope_name = getattr(value, SCOPE_MARKER, None)
                accessor_name = getattr(value, ACCESSOR_MARKER, None)
                if scope_name:
                    scopes[scope_name] = value
                    scope_methods[attr] = scope_name
                elif attr in scope_methods and callable(value):
                    scopes[scope_methods[attr]] = value
                if accessor_name:
                    accessors[accessor_name] = value
                    accessor_methods[attr] = accessor_name
                elif attr in accessor_methods and callable(value):
                    accessors[accessor_methods[attr]] = value
        cls._scope_registry = scopes
        cls._accessor_registry = accessors
        cls.objects = Manager(cls)

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.original: Dict[str, Any] = {}
        self.attributes: Dict[str, Any] = {}

        if not data:
            return

        data = self.format_data(dict(data))

        # Keep the data as returned by the API
        self.original = dict(data)

        for key, value in data.items():
            self.attributes[key] = self.set_attribute(key, value)

        self.append_accessors()

    # -- Construction hooks --

    def format_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Format the incoming data before creating an instance."""
        return data

    def set_attribute(self, key: str, value: Any) -> Any:
        if key in self.dates and value is not None:
            try:
                return self.create_date(value)
            except (TypeError, ValueError):
                logger.warning(
                    "Could not parse %s.%s=%r with format %r, keeping the raw value",
                    type(self).__name__, key, value, self.date_format,
                )
        return value

    def create_date(self, value: Any, date_format: Optional[str] = None) -> datetime:
        if isinstance(value, datetime):
            return value
        return datetime.strptime(value, date_format or self.date_format)

    def append_accessors(self) -> None:
        for name in self.appends:
            self.attributes[name] = self.get_attribute(name)

    def new_instance(self, data: Optional[Dict[str, Any]] = None) -> "RestModel":
        return type(self)(data)

    # -- Attribute access --

    def get_attribute(self, name: str) -> Any:
        getter = self._accessor_registry.get(name)
        if getter is not None:
            return getter(self)
        return self.attributes.get(name)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.get_attribute(name)

    def __getitem__(self, name: str) -> Any:
        return self.get_attribute(name)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.attributes)

    def __eq__(self, other):
        if not isinstance(other, RestModel):
            return NotImplemented
        return type(self) is type(other) and self.attributes == other.attributes

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}({self.attributes!r})"

    # -- Descriptor --

    @classmethod
    def query(cls, registry: Optional[ConnectionRegistry] = None, connection: Optional[str] = None) -> Builder:
        """Start a builder, optionally with an explicit registry or connection."""
        return cls.objects.query(registry=registry, connection=connection)

    @classmethod
    def get_connection(cls) -> Optional[str]:
        return cls.connection

    @classmethod
    def get_registry(cls) -> Optional[ConnectionRegistry]:
        return cls.registry

    @classmethod
    def get_namespace(cls) -> Union[str, None, bool]:
        """The namespace of the API call, False when the API uses none."""
        return cls.namespace if cls.use_namespace else False

    @classmethod
    def get_root(cls) -> Optional[str]:
        return cls.root

    @classmethod
    def get_scopes(cls) -> List[str]:
        return list(cls.scopes)

    @classmethod
    def get_scope(cls, name: str) -> Optional[Callable]:
        return cls._scope_registry.get(name)

    @classmethod
    def get_take(cls) -> Optional[str]:
        return cls.take

    @classmethod
    def get_order_by(cls) -> Optional[str]:
        return cls.order_by
