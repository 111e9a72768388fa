"""
Exception hierarchy for otrsrpc.

Provides:
- A base error carrying a stable code, a category and structured details
- ConfigurationError for incomplete credentials
- TransportError for anything the RPC transport reports
- Safe message formatting so passwords never reach logs or terminals
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    RETRYABLE = "retryable"
    FATAL = "fatal"


class OtrsRpcError(Exception):
    """Base exception for all otrsrpc errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigurationError(OtrsRpcError):
    """Raised when a connection is needed but credentials are incomplete."""

    def __init__(self, missing: Iterable[str]):
        fields = [str(name) for name in missing]
        listed = ", ".join(f"`{name}`" for name in fields)
        noun = "field is" if len(fields) == 1 else "fields are"
        super().__init__(
            f"Required {noun} missing: {listed}",
            code="CONFIGURATION_ERROR",
            category=ErrorCategory.CONFIGURATION,
            details={"missing": fields},
        )
        self.missing = fields


class TransportError(OtrsRpcError):
    """Raised when the RPC transport fails or the server returns a fault."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "TRANSPORT_ERROR",
        status_code: int | None = None,
        fault_code: str | None = None,
        fault_string: str | None = None,
        retryable: bool = False,
    ):
        category = ErrorCategory.RETRYABLE if retryable else ErrorCategory.TRANSPORT
        details: dict[str, Any] = {"retryable": retryable}
        if status_code is not None:
            details["status_code"] = status_code
        if fault_code is not None:
            details["fault_code"] = fault_code
        if fault_string is not None:
            details["fault_string"] = fault_string
        super().__init__(message, code=code, category=category, details=details)
        self.status_code = status_code
        self.fault_code = fault_code
        self.fault_string = fault_string
        self.retryable = retryable


_SENSITIVE_PATTERNS = [
    re.compile(r"(password|passwd|secret|token)([=:]\s*|>)['\"]?([^\s'\"<]+)['\"]?", re.IGNORECASE),
    re.compile(r"basic\s+[a-zA-Z0-9+/]+=*", re.IGNORECASE),
]

# Shorter secrets are only redacted where they stand alone
_MIN_SUBSTRING_SECRET = 6


def sanitize_error_message(
    message: str,
    secrets: Iterable[str] = (),
    replacement: str = "[REDACTED]",
) -> str:
    """Remove sensitive information from messages and wire dumps."""
    sanitized = message
    for secret in secrets:
        if not secret:
            continue
        if len(secret) >= _MIN_SUBSTRING_SECRET:
            sanitized = sanitized.replace(secret, replacement)
        else:
            sanitized = _standalone(secret).sub(replacement, sanitized)
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def _standalone(secret: str) -> re.Pattern[str]:
    """Match ``secret`` as a whole XML text node, quoted value or word."""
    return re.compile(r"(?<![^\s>'\"])" + re.escape(secret) + r"(?![^\s<'\"])")
