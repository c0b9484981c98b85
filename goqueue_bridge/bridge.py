# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Host-side wiring of one subscriber and one publisher."""

import logging
import threading
from collections.abc import Callable
from typing import Any

from .base import EventPublisher, EventSubscriber, MessageHandler
from .config import BridgeConfig
from .exceptions import SubscriptionLostError
from .factory import create_publisher, create_subscriber

logger = logging.getLogger(__name__)


class QueueBridge:
    """Runs a subscriber on a background thread next to a publisher.

    Example:
        >>> config = BridgeConfig.from_env()
        >>> with QueueBridge(config, handler=my_handler) as bridge:
        ...     bridge.publish("order.created", {"id": 42})
    """

    def __init__(
        self,
        config: BridgeConfig,
        handler: MessageHandler | None = None,
        on_fatal: Callable[[SubscriptionLostError], None] | None = None,
        publisher: EventPublisher | None = None,
        subscriber: EventSubscriber | None = None,
    ):
        """Initialize the bridge.

        Args:
            config: Bridge configuration shared by both components
            handler: Callable invoked with each inbound message
            on_fatal: Called on the subscriber thread if the subscription is lost
            publisher: Publisher to use instead of one built from config
            subscriber: Subscriber to use instead of one built from config
        """
        self.config = config
        self.publisher = publisher or create_publisher(config)
        self.subscriber = subscriber or create_subscriber(config, handler)
        self.on_fatal = on_fatal
        self._thread: threading.Thread | None = None
        self._fatal_error: SubscriptionLostError | None = None
        self._stopped = False

    @property
    def fatal_error(self) -> SubscriptionLostError | None:
        """The error that ended the subscription, if any."""
        return self._fatal_error

    def is_running(self) -> bool:
        """True while the subscriber thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the subscriber thread.

        Raises:
            RuntimeError: If the bridge is already running or has been stopped.
                A stopped bridge cannot be restarted; create a new one.
        """
        if self._stopped:
            raise RuntimeError("QueueBridge has been stopped and cannot be restarted")
        if self.is_running():
            raise RuntimeError("QueueBridge is already running")

        # Non-daemon so a host process does not exit with the socket still open
        self._thread = threading.Thread(
            target=self._run_subscriber,
            name="goqueue-subscriber",
            daemon=False,
        )
        self._thread.start()
        logger.info("Subscriber thread started")

    def _run_subscriber(self) -> None:
        try:
            self.subscriber.run()
        except SubscriptionLostError as e:
            self._fatal_error = e
            logger.error(f"Subscription lost: {e}")
            if self.on_fatal is not None:
                self.on_fatal(e)

    def publish(self, event_name: str, payload: Any) -> bool:
        """Publish one event through the configured publisher."""
        return self.publisher.publish(event_name, payload)

    def stop(self, timeout: float | None = None) -> None:
        """Stop the subscriber and wait for its thread to finish.

        Args:
            timeout: Maximum seconds to wait for the thread (None waits indefinitely)
        """
        self._stopped = True
        self.subscriber.stop()
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("Subscriber thread did not stop within timeout")
            else:
                logger.info("Subscriber thread stopped")

    def __enter__(self) -> "QueueBridge":
        self.start()
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.stop()
