# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Factory functions for creating publishers and subscribers."""

import logging
from collections.abc import Callable, Mapping
from typing import TypeVar

from .base import EventPublisher, EventSubscriber, MessageHandler
from .config import BridgeConfig

logger = logging.getLogger(__name__)

TAdapter = TypeVar("TAdapter")


def _dispatch(
    config: BridgeConfig,
    *,
    adapter_name: str,
    driver_type: str,
    drivers: Mapping[str, Callable[[], TAdapter]],
) -> TAdapter:
    if config is None:
        raise ValueError(f"{adapter_name} config is required")

    normalized = str(driver_type).lower()
    try:
        factory = drivers[normalized]
    except KeyError as exc:
        supported = ", ".join(sorted(drivers.keys()))
        raise ValueError(
            f"Unknown {adapter_name} driver: {normalized}. Supported drivers: {supported}"
        ) from exc

    logger.debug(f"Creating {normalized} {adapter_name}")
    return factory()


def create_publisher(config: BridgeConfig) -> EventPublisher:
    """Create the publisher selected by config.publisher_type.

    Args:
        config: Bridge configuration

    Returns:
        EventPublisher instance

    Raises:
        ValueError: If config is missing or the driver type is unknown
    """
    from .http_publisher import HttpEventPublisher
    from .noop_publisher import NoopPublisher

    return _dispatch(
        config,
        adapter_name="publisher",
        driver_type=getattr(config, "publisher_type", ""),
        drivers={
            "http": lambda: HttpEventPublisher.from_config(config),
            "noop": lambda: NoopPublisher.from_config(config),
        },
    )


def create_subscriber(config: BridgeConfig, handler: MessageHandler | None = None) -> EventSubscriber:
    """Create the subscriber selected by config.subscriber_type.

    Args:
        config: Bridge configuration
        handler: Callable invoked with each inbound message

    Returns:
        EventSubscriber instance

    Raises:
        ValueError: If config is missing or the driver type is unknown
    """
    from .noop_subscriber import NoopSubscriber
    from .websocket_subscriber import WebSocketSubscriber

    return _dispatch(
        config,
        adapter_name="subscriber",
        driver_type=getattr(config, "subscriber_type", ""),
        drivers={
            "websocket": lambda: WebSocketSubscriber.from_config(config, handler),
            "noop": lambda: NoopSubscriber.from_config(config, handler),
        },
    )
