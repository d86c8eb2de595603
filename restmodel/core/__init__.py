"""
restmodel: ORM-like models and query builders for restful APIs.
"""

from restmodel.core.builder import Builder
from restmodel.core.config import (ConnectionConfig, ConnectionRegistry,
                                   get_default_registry, set_default_registry)
from restmodel.core.exceptions import (ConfigurationError, InvalidInputError,
                                       NotImplementedOperationError, RestModelError,
                                       UnsupportedOperationError)
from restmodel.core.model import Manager, RestModel, accessor, scope
from restmodel.core.pagination import Paginate, PaginationResult

__all__ = [
    # Models
    "RestModel",
    "Manager",
    "Builder",
    "scope",
    "accessor",
    "Paginate",
    "PaginationResult",
    # Configuration
    "ConnectionConfig",
    "ConnectionRegistry",
    "get_default_registry",
    "set_default_registry",
    # Errors
    "RestModelError",
    "ConfigurationError",
    "UnsupportedOperationError",
    "NotImplementedOperationError",
    "InvalidInputError",
]

__version__ = "0.1.0"
