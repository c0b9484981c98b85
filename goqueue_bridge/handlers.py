# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Ready-made message handlers."""

import logging
from collections.abc import Callable

from .base import MessageHandler
from .models import QueueMessage

logger = logging.getLogger(__name__)


def log_message(message: str | bytes) -> None:
    """Log the raw message and do nothing else."""
    logger.info(f"Received message from queue: {message!r}")


def decoding_handler(callback: Callable[[QueueMessage], None]) -> MessageHandler:
    """Wrap a callback so it receives decoded QueueMessage frames.

    Decoding failures raise SerializationError from the returned handler,
    which the subscriber logs as a handler failure.

    Args:
        callback: Function taking a QueueMessage

    Returns:
        Handler accepting raw frames
    """

    def handler(message: str | bytes) -> None:
        queue_message = QueueMessage.from_json(message)
        logger.debug(f"Decoded {queue_message.event} (retry={queue_message.retry})")
        callback(queue_message)

    return handler
