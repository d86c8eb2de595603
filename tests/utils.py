from restmodel.core import (ConfigurationError, ConnectionRegistry,
                            get_default_registry, set_default_registry)
from restmodel.testing import FakeAPI

API_ROOT = "https://api.example.com"
BACKUP_ROOT = "https://backup.example.com"


def make_registry(api: FakeAPI) -> ConnectionRegistry:
    registry = ConnectionRegistry(default="main")
    registry.register("main", url=API_ROOT, version="v1", options=api.options())
    registry.register("backup", url=BACKUP_ROOT, options=api.options())
    return registry


class FakeAPIMixin:
    """Installs a registry backed by a FakeAPI as the default for each test."""

    def setUp(self):
        super().setUp()
        self.api = FakeAPI()
        self.registry = make_registry(self.api)
        try:
            self._previous_registry = get_default_registry()
        except ConfigurationError:
            self._previous_registry = None
        set_default_registry(self.registry)

    def tearDown(self):
        set_default_registry(self._previous_registry)
        super().tearDown()
