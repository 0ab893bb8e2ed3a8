"""Unit tests for field error aggregation."""

from __future__ import annotations

from faultline.handling.fields import FieldErrorAggregator
from faultline.handling.fields import FieldFailure
from faultline.handling.fields import failure_codes
from faultline.handling.fields import failure_from_issue
from faultline.handling.messages import MessageResolver
from faultline.i18n.catalog import MessageCatalog


def _aggregator() -> FieldErrorAggregator:
    catalog = MessageCatalog(
        {
            "en": {"missing.body.email": "Email is required"},
            "pt_BR": {"missing.body.email": "O e-mail é obrigatório"},
        },
        default_locale="en",
    )
    return FieldErrorAggregator(MessageResolver(catalog))


def _failure(field: str, code: str, default_message: str, *, codes: tuple[str, ...] | None = None) -> FieldFailure:
    return FieldFailure(
        object_name="body",
        field=field,
        code=code,
        default_message=default_message,
        codes=failure_codes(code, "body", field) if codes is None else codes,
    )


def test_resolvable_and_unresolvable_fields_keep_order() -> None:
    failures = [
        _failure("email", "missing", "Field required"),
        _failure("username", "string_too_short", "String should have at least 3 characters"),
    ]

    errors = _aggregator().aggregate(failures, "en")

    assert [error.model_dump(by_alias=True) for error in errors] == [
        {"defaultMessage": "Email is required", "objectName": "body", "field": "email", "reason": "missing"},
        {
            "defaultMessage": "String should have at least 3 characters",
            "objectName": "body",
            "field": "username",
            "reason": "string_too_short",
        },
    ]


def test_messages_follow_request_locale() -> None:
    errors = _aggregator().aggregate([_failure("email", "missing", "Field required")], "pt-BR")

    assert errors[0].default_message == "O e-mail é obrigatório"


def test_empty_code_list_uses_default_message() -> None:
    errors = _aggregator().aggregate([_failure("email", "missing", "Field required", codes=())], "en")

    assert errors[0].default_message == "Field required"


def test_missing_default_message_never_leaves_field_error_empty() -> None:
    errors = _aggregator().aggregate([_failure("nickname", "custom_rule", "")], "en")

    assert errors[0].default_message == "custom_rule"
    assert errors[0].reason == "custom_rule"


def test_aggregate_returns_one_entry_per_failure() -> None:
    failures = [_failure(f"field_{index}", "missing", "Field required") for index in range(5)]

    errors = _aggregator().aggregate(failures, "en")

    assert [error.field for error in errors] == [f"field_{index}" for index in range(5)]
    assert all(error.default_message and error.reason for error in errors)


def test_failure_codes_are_most_specific_first() -> None:
    assert failure_codes("missing", "body", "email") == ("missing.body.email", "missing.email", "missing")
    assert failure_codes("missing", "body", "") == ("missing",)


def test_failure_from_issue_splits_location_prefix() -> None:
    failure = failure_from_issue(
        {"type": "string_too_short", "loc": ("body", "profile", "username"), "msg": "Too short"},
    )

    assert failure.object_name == "body"
    assert failure.field == "profile.username"
    assert failure.code == "string_too_short"
    assert failure.codes[0] == "string_too_short.body.profile.username"


def test_failure_from_issue_without_prefix_uses_given_object_name() -> None:
    failure = failure_from_issue({"type": "int_parsing", "loc": ("port",), "msg": "Bad int"}, object_name="Gateway")

    assert failure.object_name == "Gateway"
    assert failure.field == "port"
