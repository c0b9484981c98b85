# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Frame model pushed by the queue server to socket subscribers."""

from dataclasses import dataclass
from typing import Any

from .exceptions import SerializationError
from .serialization import deserialize_payload


@dataclass(frozen=True)
class QueueMessage:
    """A message frame as the queue server delivers it.

    Attributes:
        event: Event name given by the publisher
        data: Serialized payload text, exactly as it was published
        retry: Delivery attempt counter maintained by the queue server
        timestamp: Unix timestamp (seconds) set when the message was enqueued
    """

    event: str
    data: str = ""
    retry: int = 0
    timestamp: int | None = None

    @classmethod
    def from_json(cls, raw: str | bytes) -> "QueueMessage":
        """Decode a frame.

        Args:
            raw: Frame text as received from the socket

        Returns:
            QueueMessage instance

        Raises:
            SerializationError: If the frame is not a JSON object with an
                'event' string
        """
        frame = deserialize_payload(raw)
        if not isinstance(frame, dict):
            raise SerializationError("Frame must be a JSON object", value=raw)

        event = frame.get("event")
        if not isinstance(event, str) or not event:
            raise SerializationError("Frame is missing the 'event' field", value=raw)

        data = frame.get("data", "")
        if data is None:
            data = ""
        elif not isinstance(data, str):
            raise SerializationError("Frame 'data' field must be a string", value=raw)

        try:
            retry = int(frame.get("retry") or 0)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Frame 'retry' field is not an integer: {e}", value=raw) from e

        timestamp = frame.get("timestamp")
        if timestamp is not None and not isinstance(timestamp, int):
            raise SerializationError("Frame 'timestamp' field must be an integer", value=raw)

        return cls(event=event, data=data, retry=retry, timestamp=timestamp)

    def payload(self) -> Any:
        """Deserialize the data field back into structured data."""
        if not self.data:
            return None
        return deserialize_payload(self.data)
