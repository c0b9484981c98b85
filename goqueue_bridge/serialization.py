# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Deterministic payload serialization."""

import json
from collections.abc import Mapping
from typing import Any

from .exceptions import SerializationError


def _check_keys(value: Any, path: str = "$") -> None:
    """Reject mapping keys that JSON would silently coerce to strings."""
    if isinstance(value, Mapping):
        for key, item in value.items():
            if not isinstance(key, str):
                raise SerializationError(
                    f"Non-string key {key!r} at {path} cannot be serialized without loss",
                    value=key,
                )
            _check_keys(item, f"{path}.{key}")
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _check_keys(item, f"{path}[{index}]")


def serialize_payload(payload: Any) -> str:
    """Serialize a payload to compact JSON with sorted keys.

    The same payload always produces the same text.

    Args:
        payload: JSON-native data (dict, list, str, int, float, bool, None)

    Returns:
        Serialized payload text

    Raises:
        SerializationError: If the payload contains values JSON cannot represent
            exactly (sets, arbitrary objects, NaN/Infinity, non-string keys)
    """
    _check_keys(payload)
    try:
        return json.dumps(
            payload,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Payload is not serializable: {e}", value=payload) from e


def deserialize_payload(text: str | bytes) -> Any:
    """Inverse of serialize_payload.

    Raises:
        SerializationError: If the text is not valid JSON
    """
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Payload is not valid JSON: {e}", value=text) from e
