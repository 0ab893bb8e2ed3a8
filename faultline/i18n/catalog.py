"""Read-only localized message catalog loaded once at startup."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
import json
import logging
import re

logger = logging.getLogger(__name__)

_LOCALE_TAG = re.compile(r"^[A-Za-z]{2,8}([-_][A-Za-z0-9]{1,8})*$")


def normalize_locale(locale: str | None) -> str | None:
    """Normalize ``pt-br``/``PT_BR`` style tags to ``pt_BR``."""
    if not locale:
        return None
    tag = locale.strip()
    if not _LOCALE_TAG.match(tag):
        return None
    parts = re.split(r"[-_]", tag)
    language = parts[0].lower()
    if len(parts) == 1:
        return language
    return f"{language}_{parts[1].upper()}"


def negotiate_locale(accept_language: str | None, default: str) -> str:
    """Pick the preferred locale from an ``Accept-Language`` header value."""
    if not accept_language:
        return default

    candidates: list[tuple[float, int, str]] = []
    for position, item in enumerate(accept_language.split(",")):
        tag, _, params = item.strip().partition(";")
        locale = normalize_locale(tag)
        if locale is None:
            continue
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                continue
        if quality <= 0:
            continue
        candidates.append((-quality, position, locale))

    if not candidates:
        return default
    return min(candidates)[2]


class MessageCatalog:
    """Per-locale message tables with language and default-locale fallback."""

    def __init__(self, tables: Mapping[str, Mapping[str, str]], *, default_locale: str = "en") -> None:
        normalized_default = normalize_locale(default_locale)
        if normalized_default is None:
            raise ValueError(f"Invalid default locale: {default_locale!r}")

        self._default_locale = normalized_default
        self._tables: Mapping[str, Mapping[str, str]] = MappingProxyType(
            {
                normalize_locale(locale) or locale: MappingProxyType(dict(table))
                for locale, table in tables.items()
            }
        )

    @property
    def default_locale(self) -> str:
        return self._default_locale

    @property
    def locales(self) -> frozenset[str]:
        return frozenset(self._tables)

    @classmethod
    def from_directory(cls, directory: Path, *, default_locale: str = "en") -> MessageCatalog:
        """Load every ``<locale>.json`` file in a directory."""
        tables: dict[str, dict[str, str]] = {}
        for path in sorted(directory.glob("*.json")):
            with path.open(encoding="utf-8") as handle:
                payload = json.load(handle)
            if not isinstance(payload, dict):
                raise ValueError(f"Message catalog {path.name} must contain a JSON object")
            tables[path.stem] = {str(key): str(value) for key, value in payload.items()}

        logger.info("Loaded message catalog locales=%s from %s", sorted(tables), directory)
        return cls(tables, default_locale=default_locale)

    def candidate_locales(self, locale: str | None) -> list[str]:
        """Return the lookup chain for a locale, most specific first."""
        chain: list[str] = []
        normalized = normalize_locale(locale)
        if normalized:
            chain.append(normalized)
            language = normalized.split("_", 1)[0]
            if language not in chain:
                chain.append(language)
        if self._default_locale not in chain:
            chain.append(self._default_locale)
        return chain

    def lookup(self, key: str, locale: str | None) -> str | None:
        """Return the translation for ``key`` or ``None`` when no table has it."""
        for candidate in self.candidate_locales(locale):
            table = self._tables.get(candidate)
            if table is not None and key in table:
                return table[key]
        return None
