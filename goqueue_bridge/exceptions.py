# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Exception hierarchy for the queue bridge."""

from typing import Any


class QueueBridgeError(Exception):
    """Base class for all queue bridge errors."""


class QueueConnectionError(QueueBridgeError, ConnectionError):
    """Raised when the socket connection cannot be established or re-established."""


class SubscriptionLostError(QueueBridgeError):
    """Raised by the subscriber after reconnection attempts are exhausted.

    Attributes:
        url: Socket endpoint that could not be recovered
        attempts: Number of consecutive reconnection attempts made
        last_error: Last error seen while reconnecting
    """

    def __init__(self, url: str, attempts: int, last_error: BaseException | None = None):
        self.url = url
        self.attempts = attempts
        self.last_error = last_error
        message = f"Subscription to {url} lost after {attempts} reconnection attempt(s)"
        if last_error is not None:
            message = f"{message}: {last_error}"
        super().__init__(message)


class PublishError(QueueBridgeError):
    """Raised when a single publish attempt is not accepted by the queue server.

    Attributes:
        event_name: Name of the event that failed to publish
        reason: Human-readable failure reason
        status_code: HTTP status code, if a response was received
    """

    def __init__(self, event_name: str, reason: str, status_code: int | None = None):
        self.event_name = event_name
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Failed to publish '{event_name}': {reason}")


class SerializationError(QueueBridgeError, ValueError):
    """Raised when a payload or frame cannot be encoded or decoded.

    Attributes:
        value: The offending value, when available
    """

    def __init__(self, message: str, value: Any = None):
        self.value = value
        super().__init__(message)
