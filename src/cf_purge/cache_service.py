"""Purges the Cloudflare cache when published content changes."""
from __future__ import annotations

import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional

from cf_purge.host import Callback, EventRegistry, PluginServices
from cf_purge.models.content import ContentEventContext, ContentKind, EventKind
from cf_purge.models.settings import env
from cf_purge.utils.cf_cache import PurgeClient

SERVICE_NAME = "CacheService"


class CacheService:
    def __init__(
        self,
        services: PluginServices,
        client: PurgeClient | None = None,
        executor: Executor | None = None,
    ):
        """Initialize a new CacheService."""
        self.services = services
        self.client = client or PurgeClient(services)
        self.executor = executor or ThreadPoolExecutor(
            max_workers=env.max_workers, thread_name_prefix="cf-purge"
        )
        self._pending: set[Future] = set()
        self._lock = threading.Lock()
        self._closing = False

    @property
    def name(self) -> str:
        return SERVICE_NAME

    def init(self, cb: Callable[[Optional[Exception], bool], None]):
        self.services.log.debug(f"{SERVICE_NAME}: Initialized")
        cb(None, True)

    def url_for(self, context: ContentEventContext) -> str:
        return self.services.url_join(
            context.hostname, context.data.object_type, context.data.url
        )

    def after_save(self, context: ContentEventContext, cb: Callback):
        """Purge after a published object was created or updated.

        A new object changes the homepage listing, so creation purges the
        site's hostname rather than the object's own URL.
        """
        if not context.validation_errors and context.data.is_published:
            url = self.url_for(context)
            object_type = context.data.object_type

            if context.is_create:
                self.services.log.info(
                    f"New [{object_type}] created at URL: [{url}]. Clearing cache for homepage."
                )
                self.clear_url(context, context.hostname)
            else:
                self.services.log.info(f"Clearing cache for [{object_type}] at URL: [{url}].")
                self.clear_url(context, url)

        cb(None)

    def after_delete(self, context: ContentEventContext, cb: Callback):
        """Purge the URL of a published object that was deleted."""
        if context.data.is_published:
            url = self.url_for(context)

            self.services.log.info(
                f"Clearing cache for deleted [{context.data.object_type}] at URL: [{url}]."
            )
            self.clear_url(context, url)

        cb(None)

    def clear_url(self, context: ContentEventContext, url: str) -> Future:
        """Start a purge without waiting for it."""
        future = self.executor.submit(self.client.purge, context, url)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._purge_done)
        return future

    def _purge_done(self, future: Future):
        exc = None if future.cancelled() else future.exception()
        if exc is not None:
            self.services.log.error(f"CloudFlare: Purge failed [{exc}]", exc_info=exc)

        with self._lock:
            self._pending.discard(future)
            close = self._closing and not self._pending
        if close:
            self.client.close()

    def register(self, registry: EventRegistry):
        for kind in ContentKind:
            registry.on(kind, EventKind.AFTER_SAVE, self.after_save)
            registry.on(kind, EventKind.AFTER_DELETE, self.after_delete)

    def unregister(self, registry: EventRegistry):
        for kind in ContentKind:
            registry.off(kind, EventKind.AFTER_SAVE, self.after_save)
            registry.off(kind, EventKind.AFTER_DELETE, self.after_delete)

    def shutdown(self, wait: bool = True):
        """Stop taking purges. The http client closes once in-flight purges finish."""
        self.executor.shutdown(wait=wait)
        with self._lock:
            self._closing = True
            close = not self._pending
        if close:
            self.client.close()
