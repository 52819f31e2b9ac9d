"""Helpers for keeping sensitive request parameters out of logs."""

import copy
from collections.abc import Mapping, Sequence
from typing import Any

FILTERED = "[FILTERED]"

_SENSITIVE_PARAMS = frozenset(
    {
        "password",
        "password_confirmation",
    }
)


def is_sensitive_param(key: str) -> bool:
    """Exact, case-sensitive match against the sensitive parameter names."""
    return key in _SENSITIVE_PARAMS


def redact_params(params: Mapping[str, Any]) -> dict[str, Any]:
    """Return a deep copy of params with sensitive values replaced."""
    redacted: dict[str, Any] = {}
    for key, value in params.items():
        if is_sensitive_param(key):
            redacted[key] = FILTERED
        else:
            redacted[key] = copy.deepcopy(value)
    return redacted


def redact_param_list(items: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Redact every element of a JSON array body independently."""
    return [redact_params(item) for item in items]
