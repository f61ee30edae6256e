from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel

SETTINGS_NAMESPACE = "cloudflare"
PURGE_ACTION = "zone_file_purge"


class CdnSettings(BaseModel):
    cloudflare_api_key: str | None = None
    cloudflare_email_address: str | None = None
    cloudflare_zone: str | None = None

    @classmethod
    def from_kv(cls, kv: Mapping[str, str] | None) -> CdnSettings | None:
        """Build settings from a store mapping, ignoring unrelated keys."""
        if kv is None:
            return None
        return cls(**{k: v for k, v in kv.items() if k in cls.model_fields})

    @property
    def is_initialized(self) -> bool:
        return bool(self.cloudflare_api_key) and bool(self.cloudflare_email_address)


class PurgeRequest(BaseModel):
    hostname: str
    url: str
    api_key: str
    email: str
    zone: str

    def to_params(self) -> dict[str, str]:
        """Query parameters for the zone file purge call."""
        return {
            "tkn": self.api_key,
            "a": PURGE_ACTION,
            "email": self.email,
            "z": self.zone,
            "url": self.url,
        }

    class Config:
        frozen = True
