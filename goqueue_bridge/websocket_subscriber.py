# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""WebSocket subscriber implementation."""

import logging
import math
import threading
from enum import Enum
from typing import Any

import websocket

from .backoff import BackoffConfig, BackoffPolicy
from .base import EventSubscriber, MessageHandler
from .config import BridgeConfig
from .exceptions import QueueConnectionError, SubscriptionLostError
from .handlers import log_message

logger = logging.getLogger(__name__)


class SubscriberState(str, Enum):
    """Lifecycle states of a WebSocketSubscriber."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    LISTENING = "listening"
    ERROR_BACKOFF = "error_backoff"
    SHUTTING_DOWN = "shutting_down"


class WebSocketSubscriber(EventSubscriber):
    """Subscribes to the queue server over a WebSocket.

    Runs the state machine
    DISCONNECTED -> CONNECTING -> LISTENING -> (ERROR_BACKOFF -> CONNECTING | SHUTTING_DOWN).

    The socket is owned by the thread executing run(); stop() only sets a flag
    that run() checks between receives and while waiting to reconnect.
    """

    def __init__(
        self,
        url: str,
        handler: MessageHandler | None = None,
        connect_timeout: float = 10.0,
        receive_timeout: float = 5.0,
        max_reconnect_attempts: int = 5,
        reconnect_delay: float = 1.0,
        max_reconnect_delay: float = 30.0,
        backoff: BackoffPolicy | None = None,
    ):
        """Initialize WebSocket subscriber.

        Args:
            url: WebSocket URL of the queue server (e.g., "ws://go-queue-server:8080/ws")
            handler: Callable invoked with each non-empty message (defaults to logging it)
            connect_timeout: Handshake timeout in seconds
            receive_timeout: Maximum time a single receive blocks, in seconds
            max_reconnect_attempts: Consecutive failed reconnects before giving up
            reconnect_delay: Base delay between reconnection attempts in seconds
            max_reconnect_delay: Maximum delay between reconnection attempts
            backoff: Custom backoff policy (built from the delays if None)

        Raises:
            ValueError: For invalid initialization parameters
        """
        if not url:
            raise ValueError("url is required")
        if max_reconnect_attempts < 1:
            raise ValueError(f"max_reconnect_attempts must be at least 1, got {max_reconnect_attempts!r}")
        for name, value in (("connect_timeout", connect_timeout), ("receive_timeout", receive_timeout)):
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be a positive finite number, got {value!r}")
        delays = (("reconnect_delay", reconnect_delay), ("max_reconnect_delay", max_reconnect_delay))
        for name, value in delays:
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be a non-negative finite number, got {value!r}")

        self.url = url
        self.handler: MessageHandler = handler or log_message
        self.connect_timeout = connect_timeout
        self.receive_timeout = receive_timeout
        self.max_reconnect_attempts = max_reconnect_attempts
        self.backoff = backoff or BackoffPolicy(
            BackoffConfig(base_delay=reconnect_delay, max_delay=max_reconnect_delay)
        )

        self._ws: Any = None  # websocket.WebSocket after connect()
        self._state = SubscriberState.DISCONNECTED
        self._stop_event = threading.Event()
        self._stats = {
            "messages_received": 0,
            "messages_skipped": 0,
            "handler_errors": 0,
            "reconnects": 0,
        }

    @classmethod
    def from_config(cls, config: BridgeConfig, handler: MessageHandler | None = None) -> "WebSocketSubscriber":
        """Create subscriber from BridgeConfig.

        Args:
            config: Bridge configuration
            handler: Message handler

        Returns:
            WebSocketSubscriber instance
        """
        return cls(
            url=config.socket_url,
            handler=handler,
            connect_timeout=config.connect_timeout,
            receive_timeout=config.receive_timeout,
            max_reconnect_attempts=config.max_reconnect_attempts,
            reconnect_delay=config.reconnect_delay,
            max_reconnect_delay=config.max_reconnect_delay,
        )

    @property
    def state(self) -> SubscriberState:
        """Current lifecycle state."""
        return self._state

    @property
    def connected(self) -> bool:
        """True while a socket is open."""
        return self._ws is not None and bool(getattr(self._ws, "connected", False))

    def _set_state(self, state: SubscriberState) -> None:
        if state is not self._state:
            logger.debug(f"Subscriber state {self._state.value} -> {state.value}")
            self._state = state

    def connect(self) -> None:
        """Connect to the queue server.

        Raises:
            QueueConnectionError: If the endpoint is unreachable or the handshake fails
        """
        self._set_state(SubscriberState.CONNECTING)
        ws = None
        try:
            ws = websocket.create_connection(self.url, timeout=self.connect_timeout)
            ws.settimeout(self.receive_timeout)
        except (websocket.WebSocketException, OSError, ValueError) as e:
            if ws is not None:
                self._close_quietly(ws)
            self._set_state(SubscriberState.DISCONNECTED)
            logger.error(f"Failed to connect to queue server at {self.url}: {e}")
            raise QueueConnectionError(f"Failed to connect to {self.url}: {e}") from e

        self._ws = ws
        self._set_state(SubscriberState.LISTENING)
        logger.info(f"Connected to queue server: {self.url}")

    def disconnect(self) -> None:
        """Close the socket if it is open."""
        ws, self._ws = self._ws, None
        if ws is not None:
            try:
                ws.close()
                logger.info("Disconnected from queue server")
            except (websocket.WebSocketException, OSError) as e:
                logger.warning(f"Error during disconnect: {e}")
        self._set_state(SubscriberState.DISCONNECTED)

    def stop(self) -> None:
        """Ask run() to shut down.

        Safe to call from any thread. run() returns within one receive timeout.
        A stopped subscriber does not run again.
        """
        self._stop_event.set()
        logger.info("Subscriber stop requested")

    def run(self) -> None:
        """Receive messages and dispatch them to the handler until stopped.

        Connects first if necessary. A lost connection is re-established with
        exponential backoff; the socket is always closed on return.

        Raises:
            SubscriptionLostError: If max_reconnect_attempts consecutive
                reconnection attempts fail
        """
        try:
            if self._ws is None and not self._stop_event.is_set():
                try:
                    self.connect()
                except QueueConnectionError as e:
                    self._recover(e)

            while not self._stop_event.is_set():
                try:
                    message = self._ws.recv()
                except websocket.WebSocketTimeoutException:
                    continue
                except websocket.WebSocketPayloadException as e:
                    # The bad frame has been consumed; the stream stays usable
                    self._stats["messages_skipped"] += 1
                    logger.warning(f"Skipping malformed frame from queue server: {e}")
                    continue
                except (websocket.WebSocketException, OSError) as e:
                    if self._stop_event.is_set():
                        break
                    logger.warning(f"Connection to queue server lost: {e}")
                    self._recover(e)
                    continue

                self._dispatch(message)
        finally:
            self._set_state(SubscriberState.SHUTTING_DOWN)
            self.disconnect()
            logger.info("Subscriber stopped")

    @staticmethod
    def _close_quietly(ws: Any) -> None:
        try:
            ws.close()
        except (websocket.WebSocketException, OSError) as e:
            logger.debug(f"Error closing abandoned socket: {e}")

    def _recover(self, error: BaseException) -> None:
        """Reconnect with backoff after a connection failure.

        Returns once connected or once stop() has been requested.

        Raises:
            SubscriptionLostError: When all attempts fail
        """
        if self._ws is not None:
            self._close_quietly(self._ws)
            self._ws = None

        last_error = error
        attempt = 0
        while not self._stop_event.is_set():
            if attempt >= self.max_reconnect_attempts:
                logger.error(
                    f"Maximum reconnection attempts ({self.max_reconnect_attempts}) exceeded for {self.url}"
                )
                self._set_state(SubscriberState.DISCONNECTED)
                raise SubscriptionLostError(self.url, attempt, last_error)

            attempt += 1
            delay = self.backoff.calculate_delay(attempt)
            self._set_state(SubscriberState.ERROR_BACKOFF)
            logger.info(
                f"Attempting reconnection {attempt}/{self.max_reconnect_attempts} in {delay:.1f}s..."
            )
            if self._stop_event.wait(delay):
                break

            try:
                self.connect()
            except QueueConnectionError as e:
                last_error = e
                logger.warning(f"Reconnection attempt {attempt} failed: {e}")
                continue

            self._stats["reconnects"] += 1
            logger.info("Reconnection successful")
            return

    def _dispatch(self, message: Any) -> None:
        """Hand one message to the handler, containing any handler failure."""
        if not message:
            self._stats["messages_skipped"] += 1
            logger.debug("Skipping empty frame from queue server")
            return

        self._stats["messages_received"] += 1
        try:
            self.handler(message)
        except Exception as e:
            self._stats["handler_errors"] += 1
            logger.exception(f"Error in message handler: {e}")

    def get_stats(self) -> dict[str, Any]:
        """Get subscriber statistics.

        Returns:
            Dictionary with message counters, reconnect count and current state
        """
        return {**self._stats, "state": self._state.value}
