"""Errors raised by the purge plugin."""


class CFPurgeError(Exception):
    """Base error for the purge plugin."""


class SettingsStoreError(CFPurgeError):
    """Raised when per-site settings cannot be read from the store."""

    def __init__(self, message: str, site: str | None = None):
        super().__init__(message)
        self.message = message
        self.site = site

    def __str__(self):
        if self.site:
            return f"SettingsStoreError ({self.site}): {self.message}"
        return f"SettingsStoreError: {self.message}"
