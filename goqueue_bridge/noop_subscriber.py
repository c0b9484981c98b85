# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""No-op event subscriber for testing."""

import logging
import threading
from typing import Any

from .base import EventSubscriber, MessageHandler
from .config import BridgeConfig
from .handlers import log_message

logger = logging.getLogger(__name__)


class NoopSubscriber(EventSubscriber):
    """No-op implementation of EventSubscriber for testing.

    Does not open any connection. Use inject_message() to drive the handler
    from tests.
    """

    def __init__(self, handler: MessageHandler | None = None) -> None:
        """Initialize noop subscriber."""
        self.handler: MessageHandler = handler or log_message
        self.connected = False
        self.running = False
        self.handler_errors = 0
        self._stop_event = threading.Event()

    @classmethod
    def from_config(cls, config: BridgeConfig, handler: MessageHandler | None = None) -> "NoopSubscriber":
        """Create subscriber from BridgeConfig.

        Args:
            config: Bridge configuration (unused for noop)
            handler: Message handler

        Returns:
            NoopSubscriber instance
        """
        del config
        return cls(handler)

    def connect(self) -> None:
        """Simulate connection (always succeeds)."""
        self.connected = True
        logger.debug("NoopSubscriber connected")

    def disconnect(self) -> None:
        """Simulate disconnection."""
        self.connected = False
        logger.debug("NoopSubscriber disconnected")

    def run(self) -> None:
        """Block until stop() is called.

        This mimics the blocking behavior of the WebSocket subscriber.
        """
        if not self.connected:
            self.connect()
        self.running = True
        logger.debug("NoopSubscriber running (blocking)")
        try:
            self._stop_event.wait()
        finally:
            self.running = False
            self.disconnect()
        logger.debug("NoopSubscriber stopped blocking")

    def stop(self) -> None:
        """Unblock run()."""
        self._stop_event.set()
        logger.debug("NoopSubscriber stop requested")

    def inject_message(self, message: Any) -> None:
        """Manually deliver a message to the handler.

        Empty messages are skipped and handler exceptions are logged and
        contained, as the WebSocket subscriber does.

        Args:
            message: Raw message
        """
        if not message:
            logger.debug("NoopSubscriber skipped empty message")
            return
        try:
            self.handler(message)
        except Exception as e:
            self.handler_errors += 1
            logger.exception(f"Error in message handler: {e}")
