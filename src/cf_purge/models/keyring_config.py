from __future__ import annotations

import enum
import json

import keyring
import keyring.errors

from cf_purge.errors import SettingsStoreError
from cf_purge.models.cdn_settings import SETTINGS_NAMESPACE


class ConfigKey(enum.StrEnum):
    CLOUDFLARE_API_KEY = "cloudflare_api_key"
    CLOUDFLARE_EMAIL_ADDRESS = "cloudflare_email_address"
    CLOUDFLARE_ZONE = "cloudflare_zone"


class KeyringSiteConfig(dict[str, str]):
    """Settings of one namespace for one site, stored as json in the keyring."""

    KR_SERVICE_NAME: str = "cf-purge"

    def __init__(self, site: str, namespace: str = SETTINGS_NAMESPACE, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.site = site
        self.namespace = namespace

    def __enter__(self) -> KeyringSiteConfig:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.save()

    @classmethod
    def username(cls, site: str, namespace: str) -> str:
        return f"{namespace}:{site}"

    @classmethod
    def load_from_keyring(
        cls, site: str, namespace: str = SETTINGS_NAMESPACE
    ) -> KeyringSiteConfig:
        """Load a site's configuration from the keyring."""
        json_str = cls._read(site, namespace)
        if json_str is None:
            return cls(site, namespace)
        try:
            values = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise SettingsStoreError(f"Stored settings are not valid json: {e}", site)
        if not isinstance(values, dict):
            raise SettingsStoreError("Stored settings are not a json object", site)
        return cls(site, namespace, values)

    @classmethod
    def _read(cls, site: str, namespace: str) -> str | None:
        try:
            return keyring.get_password(cls.KR_SERVICE_NAME, cls.username(site, namespace))
        except keyring.errors.KeyringError as e:
            raise SettingsStoreError(f"Could not read keyring: {e}", site)

    def save(self):
        """Save the configuration to the keyring."""
        json_str = json.dumps(self)
        try:
            keyring.set_password(
                self.KR_SERVICE_NAME, self.username(self.site, self.namespace), json_str
            )
        except keyring.errors.KeyringError as e:
            raise SettingsStoreError(f"Could not write keyring: {e}", self.site)

    def to_keys_json(self) -> str:
        """Masked view of the configuration."""
        result = {}
        for key in ConfigKey:
            if key in self:
                if not self[key]:
                    # empty key
                    result[key] = ""
                elif key is ConfigKey.CLOUDFLARE_API_KEY:
                    result[key] = "********"
                else:
                    result[key] = self[key]
            else:
                # missing key
                result[key] = "(not set)"

        return json.dumps(result, indent=2)
