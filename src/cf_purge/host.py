"""Collaborators supplied by the content host."""
from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

from cf_purge.models.content import ContentEventContext, ContentKind, EventKind
from cf_purge.models.keyring_config import KeyringSiteConfig
from cf_purge.utils import uris

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[Exception]], None]
Handler = Callable[[ContentEventContext, Callback], None]


class SettingsStore(Protocol):
    def fetch(self, site: str, namespace: str) -> Mapping[str, str] | None:
        """Return a site's settings for a namespace, None when never set.

        Raises SettingsStoreError when the store cannot be read.
        """


class MemorySettingsStore:
    """Settings held in a dict keyed by (site, namespace)."""

    def __init__(self, settings: dict[tuple[str, str], dict[str, str]] | None = None):
        self.settings = dict(settings or {})

    def set(self, site: str, namespace: str, values: dict[str, str]):
        self.settings[(site, namespace)] = dict(values)

    def fetch(self, site: str, namespace: str) -> Mapping[str, str] | None:
        values = self.settings.get((site, namespace))
        return dict(values) if values is not None else None


class KeyringSettingsStore:
    """Settings stored per site in the OS keyring."""

    def fetch(self, site: str, namespace: str) -> Mapping[str, str] | None:
        config = KeyringSiteConfig.load_from_keyring(site, namespace)
        return dict(config) or None


@dataclass
class PluginServices:
    """Everything the cache service and purge client need from the host."""

    settings: SettingsStore
    log: logging.Logger = field(default=logger)
    url_join: Callable[..., str] = field(default=uris.join)


class EventRegistry:
    """Handlers subscribed per (content kind, event kind)."""

    def __init__(self):
        self._handlers: dict[tuple[ContentKind, EventKind], list[Handler]] = defaultdict(list)

    def on(self, kind: ContentKind, event: EventKind, handler: Handler):
        self._handlers[(kind, event)].append(handler)

    def off(self, kind: ContentKind, event: EventKind, handler: Handler):
        handlers = self._handlers.get((kind, event), [])
        if handler in handlers:
            handlers.remove(handler)

    def handlers(self, kind: ContentKind, event: EventKind) -> list[Handler]:
        return list(self._handlers.get((kind, event), []))

    def emit(
        self,
        kind: ContentKind,
        event: EventKind,
        context: ContentEventContext,
        cb: Callback | None = None,
    ) -> list[Exception]:
        """Run every handler for the event. Returns errors the handlers reported."""
        errors: list[Exception] = []

        def done(err: Exception | None):
            if err is not None:
                errors.append(err)

        for handler in self.handlers(kind, event):
            handler(context, done)

        if cb is not None:
            cb(errors[0] if errors else None)
        return errors


__all__ = [
    "Callback",
    "EventRegistry",
    "Handler",
    "KeyringSettingsStore",
    "MemorySettingsStore",
    "PluginServices",
    "SettingsStore",
]
