# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Abstract base classes for queue publishers and subscribers."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

MessageHandler = Callable[[Any], None]


class EventPublisher(ABC):
    """Abstract base class for event publishers."""

    @abstractmethod
    def publish(self, event_name: str, payload: Any) -> bool:
        """Publish one event to the queue server.

        Args:
            event_name: Event name (e.g., "order.created")
            payload: Structured data to serialize and send

        Returns:
            True if the queue server accepted the event, False otherwise

        Raises:
            SerializationError: If the payload cannot be serialized
        """
        pass


class EventSubscriber(ABC):
    """Abstract base class for event subscribers.

    A subscriber owns a single connection to the queue server and hands every
    inbound message to its handler, one at a time and in receipt order.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the queue server.

        Raises:
            QueueConnectionError: If the connection cannot be established
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the queue server."""
        pass

    @abstractmethod
    def run(self) -> None:
        """Receive messages and dispatch them until stop() is called.

        This method blocks.
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Request a graceful shutdown of run()."""
        pass
