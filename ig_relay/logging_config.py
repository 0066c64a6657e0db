"""Centralized logging configuration with Pydantic Logfire integration."""

import logging
from typing import Any

import logfire
from fastapi import FastAPI

from ig_relay.config import Settings


def setup_logfire(app: FastAPI, settings: Settings) -> None:
    """
    Initialize and configure Pydantic Logfire for observability.

    Sets up:
    - FastAPI instrumentation (request/response tracing)
    - Pydantic instrumentation (model validation logging)
    - Environment-aware configuration of stdlib logging
    """
    logfire_config: dict[str, Any] = {
        "environment": settings.env,
        "service_name": "ig-relay",
    }

    # Token is only needed for cloud logging
    if settings.logfire_token:
        logfire_config["token"] = settings.logfire_token

    logfire.configure(**logfire_config)

    logfire.instrument_fastapi(app)
    logfire.instrument_pydantic()

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    if settings.env == "local":
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        # Logfire handles structured formatting
        logging.basicConfig(level=log_level, format="%(message)s")


def mask_pii(value: str | None, mask_char: str = "*") -> str:
    """
    Mask potentially sensitive data in logs.

    Args:
        value: Value to mask
        mask_char: Character to use for masking

    Returns:
        Masked string
    """
    if not value:
        return ""

    if len(value) <= 4:
        return mask_char * len(value)

    # Show first 2 and last 2 characters, mask the rest
    return f"{value[:2]}{mask_char * (len(value) - 4)}{value[-2:]}"


SENSITIVE_KEY_MARKERS = ("token", "secret", "password", "authorization", "api_key", "dsn")


def redact_tokens(data: dict[str, Any]) -> dict[str, Any]:
    """
    Redact credentials from data before it is logged.

    Any key containing one of ``SENSITIVE_KEY_MARKERS`` is masked; nested
    dicts are redacted recursively.

    Args:
        data: Dictionary that may contain sensitive values

    Returns:
        Copy of the dictionary with credentials masked
    """
    redacted = data.copy()

    for key, value in data.items():
        if isinstance(value, dict):
            redacted[key] = redact_tokens(value)
        elif isinstance(value, str) and any(
            marker in key.lower() for marker in SENSITIVE_KEY_MARKERS
        ):
            redacted[key] = mask_pii(value)

    return redacted
