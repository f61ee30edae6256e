import logging

from cf_purge.host import EventRegistry
from cf_purge.models.content import ContentKind, EventKind, Operation
from cf_purge.plugin import CFPlugin


def lifecycle_results():
    results = []
    return results, lambda err, ok: results.append((err, ok))


def test_lifecycle_always_succeeds(services, cache_service):
    plugin = CFPlugin(services, EventRegistry(), cache_service)
    results, cb = lifecycle_results()

    plugin.on_install(cb)
    plugin.on_startup({"site": "site-1"}, cb)
    plugin.on_uninstall({"site": "site-1"}, cb)
    plugin.on_shutdown(cb)

    assert results == [(None, True)] * 4


def test_startup_registers_handlers(services, cache_service):
    registry = EventRegistry()
    plugin = CFPlugin(services, registry, cache_service)
    _, cb = lifecycle_results()

    plugin.on_startup({}, cb)

    for kind in (ContentKind.ARTICLE, ContentKind.PAGE):
        assert registry.handlers(kind, EventKind.AFTER_SAVE) == [cache_service.after_save]
        assert registry.handlers(kind, EventKind.AFTER_DELETE) == [cache_service.after_delete]


def test_uninstall_removes_handlers(services, cache_service):
    registry = EventRegistry()
    plugin = CFPlugin(services, registry, cache_service)
    _, cb = lifecycle_results()

    plugin.on_startup({}, cb)
    plugin.on_uninstall({}, cb)

    assert registry.handlers(ContentKind.ARTICLE, EventKind.AFTER_SAVE) == []
    assert registry.handlers(ContentKind.PAGE, EventKind.AFTER_DELETE) == []


def test_emit_routes_to_cache_service(cache_service, make_context, sent, caplog):
    caplog.set_level(logging.INFO)
    registry = EventRegistry()
    cache_service.register(registry)
    done = []

    ctx = make_context(kind=ContentKind.PAGE, url="/bar", operation=Operation.DELETE)
    errors = registry.emit(ContentKind.PAGE, EventKind.AFTER_DELETE, ctx, done.append)

    assert errors == []
    assert done == [None]
    assert sent[0].url.params["url"] == "https://blog.example.org/page/bar"


def test_emit_without_handlers(make_context):
    done = []

    errors = EventRegistry().emit(ContentKind.ARTICLE, EventKind.AFTER_SAVE, make_context(), done.append)

    assert errors == []
    assert done == [None]


def test_emit_collects_handler_errors(make_context):
    registry = EventRegistry()
    failure = RuntimeError("boom")
    registry.on(ContentKind.ARTICLE, EventKind.AFTER_SAVE, lambda ctx, cb: cb(failure))
    done = []

    errors = registry.emit(ContentKind.ARTICLE, EventKind.AFTER_SAVE, make_context(), done.append)

    assert errors == [failure]
    assert done == [failure]
