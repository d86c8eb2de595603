import logging

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from restmodel.core.config import ConnectionRegistry
from restmodel.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def registry_from_settings() -> ConnectionRegistry:
    """
    Build the connection registry from ``settings.RESTMODEL``:

        RESTMODEL = {
            "default": "main",
            "connections": {
                "main": {
                    "url": "https://api.example.com",
                    "version": "v1",
                    "options": {"timeout": 10, "headers": {"Authorization": "Token ..."}},
                },
            },
        }

    ``RESTMODEL_DEFAULT_CONNECTION`` overrides the default connection name.
    """
    restmodel_settings = getattr(settings, "RESTMODEL", None)
    if restmodel_settings is None:
        raise ImproperlyConfigured("RESTMODEL is not configured in your settings.py")

    try:
        data = dict(restmodel_settings)
    except (TypeError, ValueError):
        raise ImproperlyConfigured("RESTMODEL must be a dictionary")

    default_connection = getattr(settings, "RESTMODEL_DEFAULT_CONNECTION", None)
    if default_connection:
        data["default"] = default_connection

    try:
        registry = ConnectionRegistry.from_dict(data)
    except ConfigurationError as exc:
        raise ImproperlyConfigured(f"Invalid RESTMODEL setting: {exc}") from exc

    logger.debug("Loaded restmodel connections from settings: %s", registry.names())
    return registry
