"""Shared route dependencies."""

from __future__ import annotations

from fastapi import Header

from faultline.core.exceptions import AccessDeniedError


def require_api_key(x_api_key: str | None = Header(default=None)) -> str:
    """Reject callers that present no API key."""
    if not x_api_key:
        raise AccessDeniedError("Missing X-Api-Key header")
    return x_api_key
