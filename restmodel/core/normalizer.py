"""
Root discovery for JSON responses.

APIs wrap their result lists in differently named envelopes. The lookups
below are tried in order and the first match wins:

1. the root key declared on the model
2. the singular form of that root key
3. the snake cased namespace, when the model declares no root
4. the value of the only key of a single-key mapping
5. the response as is

Root keys may be dotted paths into nested envelopes, e.g. "data.items".
"""
import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from restmodel.core.inflection import singularize, snake_case

logger = logging.getLogger(__name__)

_MISSING = object()


def lookup(data: Mapping, key: str) -> Tuple[bool, Any]:
    """
    Look up ``key`` in ``data``. A key that is not present as is, is followed
    as a dotted path through nested mappings.

    Returns a ``(found, value)`` tuple.

    Examples:
        >>> lookup({"data": {"items": [1]}}, "data.items")
        (True, [1])
        >>> lookup({"data.items": [1]}, "data.items")
        (True, [1])
        >>> lookup({"data": []}, "data.items")
        (False, None)
    """
    if key in data:
        return True, data[key]
    if "." not in key:
        return False, None

    value: Any = data
    for part in key.split("."):
        if not isinstance(value, Mapping):
            return False, None
        value = value.get(part, _MISSING)
        if value is _MISSING:
            return False, None
    return True, value


def singular_root(root: str) -> str:
    """Singularize the last segment of a (dotted) root key."""
    head, sep, tail = root.rpartition(".")
    return head + sep + singularize(tail)


def find_root(data: Any, root: Optional[str] = None, namespace: Optional[str] = None) -> Any:
    """
    Unwrap the envelope of a decoded response body.

    Examples:
        >>> find_root({"users": [{"id": 1}]}, root="users")
        [{'id': 1}]
        >>> find_root({"user": [{"id": 1}]}, root="users")
        [{'id': 1}]
        >>> find_root({"data": {"items": [{"id": 1}]}, "meta": {}}, root="data.items")
        [{'id': 1}]
        >>> find_root({"foo": [{"id": 1}]})
        [{'id': 1}]
    """
    if not isinstance(data, Mapping):
        return data

    if root:
        found, value = lookup(data, root)
        if found:
            logger.debug("Using declared root %r", root)
            return value

        singular = singular_root(root)
        found, value = lookup(data, singular)
        if found:
            logger.debug("Using singular root %r of %r", singular, root)
            return value

    elif namespace:
        key = snake_case(namespace)
        if key in data:
            logger.debug("Using namespace %r as root", key)
            return data[key]

    if len(data) == 1:
        key = next(iter(data))
        logger.debug("Unwrapping single root element %r", key)
        return data[key]

    return data


def normalize(data: Any, root: Optional[str] = None, namespace: Optional[str] = None) -> List[Mapping]:
    """
    Return the list of raw records of a decoded response body. Anything that
    does not unwrap to a non-empty list results in an empty list, and elements
    that are not objects are skipped.
    """
    if data is None:
        return []

    records = find_root(data, root=root, namespace=namespace)

    if not records or not isinstance(records, list):
        return []

    skipped = [record for record in records if not isinstance(record, Mapping)]
    if skipped:
        logger.debug("Skipping %d records that are not objects: %r", len(skipped), skipped[:5])

    return [record for record in records if isinstance(record, Mapping)]
