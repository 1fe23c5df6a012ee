"""Platform adapter registry with lazy loading.

Usage:
    from gigscraper.platforms import AdapterRegistry

    registry = AdapterRegistry.build(adapter_config)
    adapter = registry.get("freelancer")
    result = await adapter.scrape(filters)

The registry is a plain object owned by whoever builds it; a config change
means building a new one.
"""

from __future__ import annotations

import importlib
from collections.abc import Iterable

from gigscraper.core.config import AdapterConfig
from gigscraper.core.errors import UnknownPlatformError
from gigscraper.platforms.base import PlatformAdapter, SessionFactory

__all__ = ["AdapterRegistry", "available_platforms", "create_adapter"]

# Lazy registry: maps platform id → (module_path, class_name)
_REGISTRY: dict[str, tuple[str, str]] = {
    "freelancer": ("gigscraper.platforms.freelancer.adapter", "FreelancerAdapter"),
}


def create_adapter(
    name: str,
    config: AdapterConfig,
    session_factory: SessionFactory | None = None,
) -> PlatformAdapter:
    """Instantiate a platform adapter by id.

    Raises:
        UnknownPlatformError: If the platform id is not registered.
    """
    if name not in _REGISTRY:
        raise UnknownPlatformError(name, list(_REGISTRY))

    module_path, class_name = _REGISTRY[name]
    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)
    return cls(config, session_factory)  # type: ignore[no-any-return]


def available_platforms() -> list[str]:
    """Return sorted list of registered platform ids."""
    return sorted(_REGISTRY)


class AdapterRegistry:
    """Platform id → adapter instance, in registration order."""

    def __init__(self, adapters: dict[str, PlatformAdapter]) -> None:
        self._adapters = dict(adapters)

    @classmethod
    def build(
        cls,
        config: AdapterConfig,
        platforms: Iterable[str] | None = None,
        session_factory: SessionFactory | None = None,
    ) -> AdapterRegistry:
        """Create one adapter per platform id (all registered ids by default)."""
        names = list(platforms) if platforms else available_platforms()
        return cls({name: create_adapter(name, config, session_factory) for name in names})

    def get(self, platform: str) -> PlatformAdapter:
        adapter = self._adapters.get(platform)
        if adapter is None:
            raise UnknownPlatformError(platform, self.platforms())
        return adapter

    def platforms(self) -> list[str]:
        return list(self._adapters)

    def adapters(self) -> list[PlatformAdapter]:
        return list(self._adapters.values())

    def __contains__(self, platform: object) -> bool:
        return platform in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)
