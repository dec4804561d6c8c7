"""Utility for logging backend requests when GASPH_LOG_REQUESTS is enabled."""

import json
import logging
import os
from typing import Any
from urllib.parse import urlencode

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = {"authorization", "apikey", "cookie", "x-api-key"}


def should_log_requests() -> bool:
    """Check if request logging is enabled via GASPH_LOG_REQUESTS environment variable."""
    return os.getenv("GASPH_LOG_REQUESTS", "").lower() == "true"


def _build_url_with_params(url: str, params: list[tuple[str, str]] | None) -> str:
    """Build full URL with query parameters, keeping repeated keys in order."""
    if not params:
        return url
    param_str = urlencode(params, safe="(),.*:!")
    return f"{url}?{param_str}" if "?" not in url else f"{url}&{param_str}"


def _redact_sensitive_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive headers from logging."""
    return {
        k: "***REDACTED***" if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()
    }


def _format_payload(payload: Any) -> str:
    """Format payload for logging."""
    try:
        return json.dumps(payload, indent=2, default=str)
    except (TypeError, ValueError):
        return str(payload)


def log_api_request(
    method: str,
    url: str,
    params: list[tuple[str, str]] | None = None,
    headers: dict[str, str] | None = None,
    payload: Any = None,
) -> None:
    """Log request details if GASPH_LOG_REQUESTS is enabled.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Request URL.
        params: Query parameters (optional).
        headers: Request headers (optional, credentials are redacted).
        payload: Request body (optional).
    """
    if not should_log_requests():
        return

    full_url = _build_url_with_params(url, params)
    log_parts = [f"{method} {full_url}"]

    if headers:
        safe_headers = _redact_sensitive_headers(headers)
        log_parts.append(f"Headers: {json.dumps(safe_headers, indent=2)}")

    if payload is not None:
        log_parts.append(f"Payload: {_format_payload(payload)}")

    logger.info("API Request:\n" + "\n".join(log_parts))
