"""Plugin entry points called by the content host."""
from __future__ import annotations

from typing import Callable, Optional

from cf_purge.cache_service import CacheService
from cf_purge.host import EventRegistry, PluginServices

# cb(error, success)
LifecycleCallback = Callable[[Optional[Exception], bool], None]


class CFPlugin:
    """Hooks the cache service into a host's content events."""

    def __init__(
        self,
        services: PluginServices,
        registry: EventRegistry,
        cache_service: CacheService | None = None,
    ):
        self.services = services
        self.registry = registry
        self.cache_service = cache_service or CacheService(services)

    def on_install(self, cb: LifecycleCallback):
        """Called when the plugin is installed for the first time."""
        cb(None, True)

    def on_uninstall(self, context, cb: LifecycleCallback):
        """Called when the plugin is removed. Stored site settings are left to the host."""
        self.cache_service.unregister(self.registry)
        cb(None, True)

    def on_startup(self, context, cb: LifecycleCallback):
        """Called on host startup and after a successful install."""
        self.cache_service.register(self.registry)
        self.cache_service.init(cb)

    def on_shutdown(self, cb: LifecycleCallback):
        """Called on graceful shutdown; in-flight purges are not awaited."""
        self.cache_service.shutdown(wait=False)
        cb(None, True)
