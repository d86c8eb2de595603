import re
from typing import Any, Optional, Union

from restmodel.core.config import ConnectionConfig
from restmodel.core.inflection import snake_case

_REPEATED_SLASHES = re.compile(r"/{2,}")
# Leaves the "//" of "https://" alone
_REPEATED_PATH_SLASHES = re.compile(r"(?<!:)/{2,}")


def _segment(value: Any) -> str:
    """Render one path segment without surrounding separators."""
    if value is None or value is False:
        return ""
    return _REPEATED_SLASHES.sub("/", str(value).strip()).strip("/")


def assemble_endpoint(
    config: ConnectionConfig,
    namespace: Optional[str] = None,
    resource_id: Any = None,
    action: Optional[str] = None,
) -> str:
    """
    Join url, version, namespace, resource id and action with a single "/",
    skipping empty segments.

    Examples:
        >>> assemble_endpoint(ConnectionConfig(url="https://api.x"), "users", 5)
        'https://api.x/users/5'
        >>> assemble_endpoint(ConnectionConfig(url="https://api.x/", version="v1"), "users", action="search")
        'https://api.x/v1/users/search'
    """
    base = _REPEATED_PATH_SLASHES.sub("/", (config.url or "").strip()).rstrip("/")
    segments = [base] if base else []

    for value in (config.version, namespace, resource_id, action):
        segment = _segment(value)
        if segment:
            segments.append(segment)

    return "/".join(segments)


def resolve_namespace(model) -> Union[str, None]:
    """
    Namespace of the API call for a model (class or instance).

    Disabled namespaces resolve to None, an explicit namespace is used as is,
    otherwise the snake cased class name is used.
    """
    namespace = model.get_namespace()

    if namespace is False:
        return None
    if namespace:
        return namespace

    model_cls = model if isinstance(model, type) else type(model)
    return snake_case(model_cls.__name__)
