# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""HTTP event publisher implementation."""

import logging
import math
from typing import Any

import requests

from .base import EventPublisher
from .config import BODY_FORMATS, DEFAULT_PUBLISH_URL, BridgeConfig
from .exceptions import PublishError
from .serialization import serialize_payload

logger = logging.getLogger(__name__)

_MAX_ERROR_BODY = 200


def build_publish_body(event_name: str, payload: Any) -> dict[str, str]:
    """Build the request fields for one event.

    Args:
        event_name: Event name
        payload: Structured data

    Returns:
        Dictionary with 'event' and 'data' fields

    Raises:
        SerializationError: If the payload cannot be serialized
    """
    return {"event": event_name, "data": serialize_payload(payload)}


class HttpEventPublisher(EventPublisher):
    """Publishes events to the queue server's HTTP publish endpoint.

    Each call sends exactly one request and never retries. Calls share no
    mutable state, so one instance may be used from several threads.
    """

    def __init__(
        self,
        publish_url: str = DEFAULT_PUBLISH_URL,
        timeout: float = 10.0,
        body_format: str = "json",
    ):
        """Initialize HTTP publisher.

        Args:
            publish_url: URL of the publish endpoint
            timeout: Request timeout in seconds (required, must be positive)
            body_format: "json" for a JSON body, "form" for a urlencoded form body

        Raises:
            ValueError: For invalid initialization parameters
        """
        if not publish_url:
            raise ValueError("publish_url is required")
        if timeout is None or not math.isfinite(timeout) or timeout <= 0:
            raise ValueError(f"timeout must be a positive finite number, got {timeout!r}")
        if body_format not in BODY_FORMATS:
            raise ValueError(f"Unknown body_format: {body_format}. Must be one of: {', '.join(BODY_FORMATS)}")

        self.publish_url = publish_url
        self.timeout = timeout
        self.body_format = body_format

    @classmethod
    def from_config(cls, config: BridgeConfig) -> "HttpEventPublisher":
        """Create publisher from BridgeConfig.

        Args:
            config: Bridge configuration

        Returns:
            HttpEventPublisher instance
        """
        return cls(
            publish_url=config.publish_url,
            timeout=config.request_timeout,
            body_format=config.publish_body_format,
        )

    def publish(self, event_name: str, payload: Any) -> bool:
        """Publish an event, reporting failure as False.

        Args:
            event_name: Event name
            payload: Structured data

        Returns:
            True if the server answered 2xx, False for any other status,
            a timeout or a transport error

        Raises:
            SerializationError: If the payload cannot be serialized
        """
        try:
            self.publish_or_raise(event_name, payload)
        except PublishError as e:
            logger.error(str(e))
            return False
        return True

    def publish_or_raise(self, event_name: str, payload: Any) -> None:
        """Publish an event, raising on failure.

        Args:
            event_name: Event name
            payload: Structured data

        Raises:
            ValueError: If event_name is empty
            SerializationError: If the payload cannot be serialized
            PublishError: If the request fails or the status is not 2xx
        """
        if not event_name:
            raise ValueError("event_name is required")

        body = build_publish_body(event_name, payload)
        request_kwargs: dict[str, Any] = {"timeout": self.timeout}
        if self.body_format == "json":
            request_kwargs["json"] = body
        else:
            request_kwargs["data"] = body

        try:
            response = requests.post(self.publish_url, **request_kwargs)
        except requests.Timeout as e:
            raise PublishError(event_name, f"request timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise PublishError(event_name, f"transport error: {e}") from e

        if not 200 <= response.status_code < 300:
            detail = (response.text or "")[:_MAX_ERROR_BODY]
            raise PublishError(
                event_name,
                f"HTTP {response.status_code} from {self.publish_url}: {detail}",
                status_code=response.status_code,
            )

        logger.info(f"Published event {event_name} to {self.publish_url}")
