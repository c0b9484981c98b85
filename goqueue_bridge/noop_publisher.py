# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""No-op event publisher for testing."""

import logging
import threading
from typing import Any

from .base import EventPublisher
from .config import BridgeConfig
from .http_publisher import build_publish_body

logger = logging.getLogger(__name__)


class NoopPublisher(EventPublisher):
    """No-op publisher for testing that stores events in memory.

    Payloads are serialized exactly as the HTTP publisher would, so
    SerializationError surfaces in tests too.
    """

    def __init__(self) -> None:
        """Initialize no-op publisher."""
        self.published_events: list[dict[str, str]] = []
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: BridgeConfig) -> "NoopPublisher":
        """Create publisher from BridgeConfig.

        Args:
            config: Bridge configuration (unused for noop)

        Returns:
            NoopPublisher instance
        """
        del config
        return cls()

    def publish(self, event_name: str, payload: Any) -> bool:
        """Store the event without sending it anywhere.

        Returns:
            Always True
        """
        body = build_publish_body(event_name, payload)
        with self._lock:
            self.published_events.append(body)
        logger.debug(f"NoopPublisher: published {event_name}")
        return True

    def clear_events(self) -> None:
        """Clear all stored events (useful for testing)."""
        with self._lock:
            self.published_events.clear()

    def get_events(self, event_name: str | None = None) -> list[dict[str, str]]:
        """Get stored events, optionally filtered by event name.

        Args:
            event_name: Optional event name to filter by

        Returns:
            List of published request bodies
        """
        with self._lock:
            events = list(self.published_events)
        if event_name is None:
            return events
        return [e for e in events if e["event"] == event_name]
