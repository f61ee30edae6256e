import logging
from concurrent.futures import Executor, Future

import httpx
import pytest

from cf_purge.cache_service import CacheService
from cf_purge.host import MemorySettingsStore, PluginServices
from cf_purge.models.cdn_settings import SETTINGS_NAMESPACE
from cf_purge.models.content import (
    ContentEventContext,
    ContentKind,
    ContentObject,
    Operation,
)
from cf_purge.utils.cf_cache import PurgeClient

HOSTNAME = "https://blog.example.org"
SITE = "site-1"
API_URL = "https://cf.test/api_json.html"


class ImmediateExecutor(Executor):
    """Runs submitted work on the calling thread."""

    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future


class CountingSettingsStore(MemorySettingsStore):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fetches = []

    def fetch(self, site, namespace):
        self.fetches.append((site, namespace))
        return super().fetch(site, namespace)


@pytest.fixture
def settings_store():
    store = CountingSettingsStore()
    store.set(
        SITE,
        SETTINGS_NAMESPACE,
        {
            "cloudflare_api_key": "api-key-123",
            "cloudflare_email_address": "ops@example.org",
        },
    )
    return store


@pytest.fixture
def services(settings_store):
    return PluginServices(settings=settings_store, log=logging.getLogger("cf_purge.tests"))


@pytest.fixture
def sent():
    """Requests that reached the mock Cloudflare endpoint."""
    return []


@pytest.fixture
def http_client(sent):
    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(request)
        return httpx.Response(200, json={"result": "success"})

    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture
def purge_client(services, http_client):
    return PurgeClient(services, api_url=API_URL, zone="zone.example.org", client=http_client)


@pytest.fixture
def cache_service(services, purge_client):
    return CacheService(services, client=purge_client, executor=ImmediateExecutor())


@pytest.fixture
def make_context():
    def factory(
        kind=ContentKind.ARTICLE,
        url="/foo",
        draft=0,
        operation=Operation.UPDATE,
        validation_errors=(),
        site=SITE,
    ):
        return ContentEventContext(
            site=site,
            hostname=HOSTNAME,
            object_type=kind,
            data=ContentObject(url=url, draft=draft, object_type=kind),
            operation=operation,
            validation_errors=validation_errors,
        )

    return factory


@pytest.fixture
def callback():
    """Completion callback that records what the handler reported."""
    calls = []

    def cb(err=None):
        calls.append(err)

    cb.calls = calls
    return cb
