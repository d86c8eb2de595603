from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from restmodel.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionConfig:
    """
    Connection settings for a single REST API.

    Parameters:
    -----------
    url: str
        Base URL of the API, e.g. "https://api.example.com"
    version: Optional[str]
        Version path segment placed after the base URL, e.g. "v1"
    options: Mapping[str, Any]
        Keyword arguments for the httpx client (headers, timeout, auth, ...)
    """

    url: str
    version: Optional[str] = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the options so a resolved config cannot be altered by a builder.
        object.__setattr__(self, "options", MappingProxyType(dict(self.options or {})))

    def get(self, key: str, default: Any = None) -> Any:
        if key in ("url", "version", "options"):
            return getattr(self, key)
        return default


class ConnectionRegistry:
    """
    Registry mapping connection names to their ConnectionConfig.
    """

    def __init__(
        self,
        connections: Optional[Mapping[str, ConnectionConfig]] = None,
        default: Optional[str] = None,
    ) -> None:
        self._connections: Dict[str, ConnectionConfig] = dict(connections or {})
        self.default = default

    def register(
        self,
        name: str,
        url: str,
        version: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> ConnectionConfig:
        if not url:
            raise ConfigurationError(f"Connection {name} has no url configured")
        config = ConnectionConfig(url=url, version=version, options=options or {})
        self._connections[name] = config
        if self.default is None:
            self.default = name
        return config

    def resolve(self, name: Optional[str] = None) -> ConnectionConfig:
        """
        Resolve a connection name to its config. ``None`` resolves the default
        connection of the registry.
        """
        name = name or self.default
        if name is None:
            raise ConfigurationError("No connection given and no default connection configured")
        try:
            return self._connections[name]
        except KeyError:
            raise ConfigurationError(f"Connection {name} not configured") from None

    def __contains__(self, name: str) -> bool:
        return name in self._connections

    def __len__(self) -> int:
        return len(self._connections)

    def names(self):
        return list(self._connections)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConnectionRegistry":
        """
        Build a registry from the settings shape:

            {
                "default": "main",
                "connections": {
                    "main": {"url": "https://api.example.com", "version": "v1", "options": {}},
                },
            }
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError("Connection settings must be a mapping")

        connections = data.get("connections") or {}
        if not isinstance(connections, Mapping):
            raise ConfigurationError("'connections' must map connection names to settings")

        registry = cls(default=data.get("default"))
        for name, settings in connections.items():
            if not isinstance(settings, Mapping):
                raise ConfigurationError(f"Settings for connection {name} must be a mapping")
            registry.register(
                name,
                url=settings.get("url"),
                version=settings.get("version"),
                options=settings.get("options"),
            )

        if registry.default is not None and registry.default not in registry:
            raise ConfigurationError(f"Default connection {registry.default} not configured")
        return registry


_default_registry: Optional[ConnectionRegistry] = None


def set_default_registry(registry: Optional[ConnectionRegistry]) -> None:
    """Install the process-wide fallback registry. Pass ``None`` to clear it."""
    global _default_registry
    _default_registry = registry
    if registry is not None:
        logger.debug("Default connection registry set with connections: %s", registry.names())


def get_default_registry() -> ConnectionRegistry:
    if _default_registry is None:
        raise ConfigurationError(
            "No connection registry configured. Pass registry= explicitly, set it on "
            "the model, or install one with set_default_registry()."
        )
    return _default_registry
