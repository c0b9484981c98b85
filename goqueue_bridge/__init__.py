# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Go Queue Bridge.

Keeps a WebSocket subscription to a queue server and publishes events to the
same server over HTTP.

Example:
    >>> from goqueue_bridge import BridgeConfig, QueueBridge, decoding_handler
    >>>
    >>> config = BridgeConfig(socket_url="ws://go-queue-server:8080/ws")
    >>> bridge = QueueBridge(config, handler=decoding_handler(print))
    >>> bridge.start()
    >>> bridge.publish("order.created", {"id": 42})
    True
    >>> bridge.stop()
"""

__version__ = "0.1.0"

from .backoff import BackoffConfig, BackoffPolicy
from .base import EventPublisher, EventSubscriber, MessageHandler
from .bridge import QueueBridge
from .config import DEFAULT_PUBLISH_URL, BridgeConfig
from .exceptions import (
    PublishError,
    QueueBridgeError,
    QueueConnectionError,
    SerializationError,
    SubscriptionLostError,
)
from .factory import create_publisher, create_subscriber
from .handlers import decoding_handler, log_message
from .http_publisher import HttpEventPublisher
from .log_config import JSONFormatter, configure_logging
from .models import QueueMessage
from .noop_publisher import NoopPublisher
from .noop_subscriber import NoopSubscriber
from .serialization import deserialize_payload, serialize_payload
from .websocket_subscriber import SubscriberState, WebSocketSubscriber

__all__ = [
    # Version
    "__version__",
    # Configuration
    "BridgeConfig",
    "DEFAULT_PUBLISH_URL",
    "BackoffConfig",
    "BackoffPolicy",
    # Factories
    "create_publisher",
    "create_subscriber",
    "QueueBridge",
    # Base interfaces (for type hints)
    "EventPublisher",
    "EventSubscriber",
    "MessageHandler",
    # Drivers
    "HttpEventPublisher",
    "NoopPublisher",
    "WebSocketSubscriber",
    "SubscriberState",
    "NoopSubscriber",
    # Messages and handlers
    "QueueMessage",
    "decoding_handler",
    "log_message",
    "serialize_payload",
    "deserialize_payload",
    # Errors
    "QueueBridgeError",
    "QueueConnectionError",
    "SubscriptionLostError",
    "PublishError",
    "SerializationError",
    # Logging
    "JSONFormatter",
    "configure_logging",
]
