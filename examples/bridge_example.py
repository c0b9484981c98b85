# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Example: listen to the queue server and publish one event.

Run with GO_QUEUE_SOCKET_URL (and optionally GO_QUEUE_URL) set, e.g.:

    GO_QUEUE_SOCKET_URL=ws://localhost:8080/ws python examples/bridge_example.py
"""

import logging
import signal
import threading

from goqueue_bridge import BridgeConfig, QueueBridge, QueueMessage, configure_logging, decoding_handler

logger = logging.getLogger("goqueue_bridge.example")


def on_message(message: QueueMessage) -> None:
    logger.info(f"{message.event} (retry={message.retry}): {message.payload()!r}")


def main() -> None:
    configure_logging()
    config = BridgeConfig.from_env()
    finished = threading.Event()

    def on_fatal(error):
        logger.error(f"Giving up: {error}")
        finished.set()

    signal.signal(signal.SIGINT, lambda *_: finished.set())
    signal.signal(signal.SIGTERM, lambda *_: finished.set())

    with QueueBridge(config, handler=decoding_handler(on_message), on_fatal=on_fatal) as bridge:
        if bridge.publish("example.started", {"source": "bridge_example"}):
            logger.info("Published example.started")
        else:
            logger.warning("example.started was not accepted")
        finished.wait()


if __name__ == "__main__":
    main()
