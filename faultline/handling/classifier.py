"""Central dispatcher mapping any raised fault to status, kind and message."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from faultline.core.exceptions import ErrorMessage
from faultline.handling.constraints import translate
from faultline.handling.faults import AccessDeniedFault
from faultline.handling.faults import DomainFault
from faultline.handling.faults import Fault
from faultline.handling.faults import PersistenceFault
from faultline.handling.faults import RoutingFault
from faultline.handling.faults import TransportFault
from faultline.handling.faults import UnclassifiedFault
from faultline.handling.faults import ValidationFault
from faultline.handling.faults import to_fault
from faultline.handling.fields import FieldErrorAggregator
from faultline.handling.messages import MessageResolver
from faultline.schemas.error import FieldError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifiedError:
    """Single-error classification."""

    status: int
    kind: str
    message: str


@dataclass(frozen=True)
class ClassifiedValidation:
    """Multi-field classification; status is always 400."""

    kind: str
    errors: tuple[FieldError, ...]
    status: int = 400


Classification = ClassifiedError | ClassifiedValidation


class ErrorClassifier:
    """Classify faults over a closed table of categories."""

    def __init__(self, resolver: MessageResolver, aggregator: FieldErrorAggregator | None = None) -> None:
        self._resolver = resolver
        self._aggregator = aggregator or FieldErrorAggregator(resolver)

    def classify(self, error: BaseException, locale: str | None = None) -> Classification:
        """Classify a raised exception in the given locale."""
        return self.classify_fault(to_fault(error), locale)

    def classify_fault(self, fault: Fault, locale: str | None = None) -> Classification:
        match fault:
            case DomainFault(error=error, status=status_code):
                message = self._resolver.resolve_or_default(error.message_key, locale, error.message)
                classified = ClassifiedError(status=status_code, kind=error.kind, message=message)
            case AccessDeniedFault():
                classified = self._curated(ErrorMessage.ACCESS_DENIED, locale)
            case TransportFault():
                classified = self._curated(ErrorMessage.GLOBAL_JSON_INVALID_FORMAT, locale)
            case PersistenceFault(detail=detail):
                classified = self._curated(translate(detail).error_message, locale)
            case ValidationFault(source=source, failures=failures):
                errors = self._aggregator.aggregate(failures, locale)
                classified = ClassifiedValidation(kind=source.value, errors=tuple(errors))
            case RoutingFault(status_code=404):
                classified = self._curated(ErrorMessage.GLOBAL_ROUTE_NOT_FOUND, locale)
            case RoutingFault():
                classified = self._curated(ErrorMessage.GLOBAL_BAD_REQUEST, locale)
            case UnclassifiedFault(error=error):
                logger.error(
                    "Unhandled %s: %s",
                    type(error).__name__,
                    error,
                    exc_info=(type(error), error, error.__traceback__),
                )
                classified = self._curated(ErrorMessage.GLOBAL_ERROR, locale)

        logger.debug("Classified %s as status=%s kind=%s", type(fault).__name__, classified.status, classified.kind)
        return classified

    def _curated(self, error_message: ErrorMessage, locale: str | None) -> ClassifiedError:
        return ClassifiedError(
            status=error_message.status_code,
            kind=error_message.kind,
            message=self._resolver.resolve_or_default(error_message.key, locale, error_message.default_message),
        )
