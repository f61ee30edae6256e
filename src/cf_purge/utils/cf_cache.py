"""Cloudflare cache management."""
from __future__ import annotations

import httpx
from pydantic import ValidationError

from cf_purge.errors import SettingsStoreError
from cf_purge.host import PluginServices
from cf_purge.models.cdn_settings import SETTINGS_NAMESPACE, CdnSettings, PurgeRequest
from cf_purge.models.content import ContentEventContext
from cf_purge.models.settings import env


class PurgeClient:
    """Sends zone file purge requests using a site's stored credentials.

    Every outcome is logged; nothing is raised to the caller.
    """

    def __init__(
        self,
        services: PluginServices,
        api_url: str | None = None,
        zone: str | None = None,
        client: httpx.Client | None = None,
    ):
        self.services = services
        self.api_url = api_url or env.api_url
        self.zone = zone or env.zone
        self.client = client or httpx.Client()

    def load_settings(self, site: str) -> CdnSettings | None:
        """Fetch a site's cloudflare settings, None if absent or incomplete."""
        kv = self.services.settings.fetch(site, SETTINGS_NAMESPACE)
        try:
            settings = CdnSettings.from_kv(kv)
        except ValidationError as e:
            raise SettingsStoreError(f"Stored cloudflare settings are invalid: {e}", site)
        if settings is None or not settings.is_initialized:
            return None
        return settings

    def build_request(self, hostname: str, url: str, settings: CdnSettings) -> PurgeRequest:
        return PurgeRequest(
            hostname=hostname,
            url=url,
            api_key=settings.cloudflare_api_key,
            email=settings.cloudflare_email_address,
            zone=settings.cloudflare_zone or self.zone,
        )

    def purge(self, context: ContentEventContext, url: str) -> None:
        """Purge a URL from Cloudflare's cache for the site that raised an event."""
        self.purge_site(context.site, context.hostname, url)

    def purge_site(self, site: str, hostname: str, url: str) -> httpx.Response | None:
        """Purge a URL for a site. Returns the response, None if nothing was sent."""
        log = self.services.log

        try:
            settings = self.load_settings(site)
        except SettingsStoreError as e:
            log.error(f"CloudFlare: Could not load settings for site [{site}]: {e}")
            return None

        if settings is None:
            log.warning("CloudFlare: Settings have not been initialized!")
            return None

        request = self.build_request(hostname, url, settings)
        try:
            res = self.client.get(self.api_url, params=request.to_params())
        except httpx.HTTPError as e:
            log.error(f"CloudFlare API returned error [{e}]")
            return None

        log.info(f"CloudFlare API Response [{res.status_code}]")
        return res

    def close(self):
        self.client.close()
