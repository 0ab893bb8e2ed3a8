"""Locale-aware message resolution that never fails the caller."""

from __future__ import annotations

import logging

from faultline.i18n.catalog import MessageCatalog

logger = logging.getLogger(__name__)


class MessageResolver:
    """Resolve message keys against a shared read-only catalog."""

    def __init__(self, catalog: MessageCatalog) -> None:
        self._catalog = catalog

    @property
    def default_locale(self) -> str:
        return self._catalog.default_locale

    def resolve(self, key: str | None, locale: str | None) -> str | None:
        """Return the localized message, or ``None`` on a miss or lookup failure."""
        if not key:
            return None
        try:
            message = self._catalog.lookup(key, locale)
        except Exception:
            logger.debug("Message lookup failed for key=%s locale=%s", key, locale, exc_info=True)
            return None
        return message or None

    def resolve_or_default(self, key: str | None, locale: str | None, default: str) -> str:
        return self.resolve(key, locale) or default
