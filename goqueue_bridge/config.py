# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Bridge configuration shared by the subscriber and the publisher."""

import math
from collections.abc import Mapping
from dataclasses import dataclass

from .env_provider import EnvConfigProvider

DEFAULT_PUBLISH_URL = "http://localhost:8080/publish"

SUBSCRIBER_TYPES = ("websocket", "noop")
PUBLISHER_TYPES = ("http", "noop")
BODY_FORMATS = ("json", "form")


@dataclass(frozen=True)
class BridgeConfig:
    """Immutable, process-wide bridge configuration.

    Attributes:
        socket_url: WebSocket URL of the queue server (required for the websocket driver)
        publish_url: HTTP URL of the queue server's publish endpoint
        request_timeout: Timeout in seconds for a single publish request
        connect_timeout: Timeout in seconds for the WebSocket handshake
        receive_timeout: Maximum time a single receive blocks before the stop
            signal is re-checked
        max_reconnect_attempts: Consecutive failed reconnects before the
            subscription is declared lost
        reconnect_delay: Base delay in seconds for reconnect backoff
        max_reconnect_delay: Upper bound for a single backoff delay
        publish_body_format: Request body encoding, "json" or "form"
        subscriber_type: Subscriber driver, "websocket" or "noop"
        publisher_type: Publisher driver, "http" or "noop"
    """

    socket_url: str = ""
    publish_url: str = DEFAULT_PUBLISH_URL
    request_timeout: float = 10.0
    connect_timeout: float = 10.0
    receive_timeout: float = 5.0
    max_reconnect_attempts: int = 5
    reconnect_delay: float = 1.0
    max_reconnect_delay: float = 30.0
    publish_body_format: str = "json"
    subscriber_type: str = "websocket"
    publisher_type: str = "http"

    def __post_init__(self) -> None:
        if self.subscriber_type not in SUBSCRIBER_TYPES:
            raise ValueError(
                f"Unknown subscriber_type: {self.subscriber_type}. "
                f"Must be one of: {', '.join(SUBSCRIBER_TYPES)}"
            )
        if self.publisher_type not in PUBLISHER_TYPES:
            raise ValueError(
                f"Unknown publisher_type: {self.publisher_type}. "
                f"Must be one of: {', '.join(PUBLISHER_TYPES)}"
            )
        if self.publish_body_format not in BODY_FORMATS:
            raise ValueError(
                f"Unknown publish_body_format: {self.publish_body_format}. "
                f"Must be one of: {', '.join(BODY_FORMATS)}"
            )
        if self.subscriber_type == "websocket" and not self.socket_url:
            raise ValueError("socket_url is required for the websocket subscriber")
        if self.publisher_type == "http" and not self.publish_url:
            raise ValueError("publish_url is required for the http publisher")

        for name in (
            "request_timeout",
            "connect_timeout",
            "receive_timeout",
            "reconnect_delay",
            "max_reconnect_delay",
        ):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number, got {value!r}")

        for name in ("request_timeout", "connect_timeout", "receive_timeout"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value!r}")

        if self.max_reconnect_attempts < 1:
            raise ValueError(
                f"max_reconnect_attempts must be at least 1, got {self.max_reconnect_attempts!r}"
            )
        if self.reconnect_delay < 0:
            raise ValueError(f"reconnect_delay must not be negative, got {self.reconnect_delay!r}")
        if self.max_reconnect_delay < self.reconnect_delay:
            raise ValueError(
                f"max_reconnect_delay ({self.max_reconnect_delay}) must be >= "
                f"reconnect_delay ({self.reconnect_delay})"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BridgeConfig":
        """Build configuration from environment variables.

        Reads GO_QUEUE_SOCKET_URL, GO_QUEUE_URL and the GO_QUEUE_* tuning
        variables. Unset variables fall back to the field defaults.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            BridgeConfig instance

        Raises:
            ValueError: If the resulting configuration is invalid
        """
        env = EnvConfigProvider(environ)
        defaults = cls.__dataclass_fields__

        return cls(
            socket_url=env.get("GO_QUEUE_SOCKET_URL", ""),
            publish_url=env.get("GO_QUEUE_URL", DEFAULT_PUBLISH_URL),
            request_timeout=env.get_float(
                "GO_QUEUE_REQUEST_TIMEOUT", defaults["request_timeout"].default
            ),
            connect_timeout=env.get_float(
                "GO_QUEUE_CONNECT_TIMEOUT", defaults["connect_timeout"].default
            ),
            receive_timeout=env.get_float(
                "GO_QUEUE_RECEIVE_TIMEOUT", defaults["receive_timeout"].default
            ),
            max_reconnect_attempts=env.get_int(
                "GO_QUEUE_MAX_RECONNECT_ATTEMPTS", defaults["max_reconnect_attempts"].default
            ),
            reconnect_delay=env.get_float(
                "GO_QUEUE_RECONNECT_DELAY", defaults["reconnect_delay"].default
            ),
            max_reconnect_delay=env.get_float(
                "GO_QUEUE_MAX_RECONNECT_DELAY", defaults["max_reconnect_delay"].default
            ),
            publish_body_format=env.get("GO_QUEUE_PUBLISH_FORMAT", "json").lower(),
            subscriber_type=env.get("GO_QUEUE_SUBSCRIBER_TYPE", "websocket").lower(),
            publisher_type=env.get("GO_QUEUE_PUBLISHER_TYPE", "http").lower(),
        )
