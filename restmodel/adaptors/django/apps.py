import logging
import warnings

from django.apps import AppConfig as DjangoAppConfig
from django.conf import settings

from restmodel.adaptors.django.config import registry_from_settings
from restmodel.core.config import set_default_registry

logger = logging.getLogger(__name__)


class RestModelDjangoConfig(DjangoAppConfig):
    name = "restmodel.adaptors.django"
    verbose_name = "Restmodel Django Integration"
    label = "restmodel"

    def ready(self):
        if not hasattr(settings, "RESTMODEL"):
            warnings.warn(
                "You have not added RESTMODEL to your settings.py. Models need an explicit "
                "connection registry until one is configured."
            )
            return

        registry = registry_from_settings()
        set_default_registry(registry)

        if len(registry):
            logger.info(
                "Restmodel is using connections: %s (default: %s)",
                ", ".join(registry.names()),
                registry.default,
            )
        else:
            logger.info("Restmodel is running but no connections are configured.")
