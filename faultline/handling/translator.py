"""Entry point turning any raised exception into a response record."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from faultline.core.config import Settings
from faultline.handling.classifier import ErrorClassifier
from faultline.handling.fields import FieldErrorAggregator
from faultline.handling.messages import MessageResolver
from faultline.handling.responses import ResponseBuilder
from faultline.handling.responses import utc_now
from faultline.i18n.catalog import MessageCatalog
from faultline.schemas.error import ErrorInfo
from faultline.schemas.error import ValidationErrorInfo


class ErrorTranslator:
    """Wire resolver, aggregator, classifier and builder around one catalog."""

    def __init__(self, catalog: MessageCatalog, *, clock: Callable[[], datetime] = utc_now) -> None:
        self.resolver = MessageResolver(catalog)
        self.aggregator = FieldErrorAggregator(self.resolver)
        self.classifier = ErrorClassifier(self.resolver, self.aggregator)
        self.builder = ResponseBuilder(clock)

    @classmethod
    def from_settings(cls, settings: Settings) -> ErrorTranslator:
        catalog = MessageCatalog.from_directory(settings.messages_dir, default_locale=settings.default_locale)
        return cls(catalog)

    @property
    def default_locale(self) -> str:
        return self.resolver.default_locale

    def translate(
        self,
        error: BaseException,
        *,
        path: str | None = None,
        locale: str | None = None,
    ) -> ErrorInfo | ValidationErrorInfo:
        """Classify ``error`` and render the response record for it."""
        classified = self.classifier.classify(error, locale or self.default_locale)
        return self.builder.build(classified, path)
