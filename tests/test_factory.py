# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for publisher and subscriber factories."""

from types import SimpleNamespace

import pytest

from goqueue_bridge import (
    BridgeConfig,
    EventPublisher,
    EventSubscriber,
    HttpEventPublisher,
    NoopPublisher,
    NoopSubscriber,
    WebSocketSubscriber,
    create_publisher,
    create_subscriber,
)


class TestPublisherFactory:
    """Tests for create_publisher()."""

    def test_create_http_publisher(self):
        """Test creating the HTTP publisher."""
        config = BridgeConfig(socket_url="ws://q/ws", publish_url="http://q/publish")

        publisher = create_publisher(config)

        assert isinstance(publisher, HttpEventPublisher)
        assert isinstance(publisher, EventPublisher)
        assert publisher.publish_url == "http://q/publish"

    def test_create_noop_publisher(self):
        """Test creating the no-op publisher."""
        config = BridgeConfig(socket_url="ws://q/ws", publisher_type="noop")

        assert isinstance(create_publisher(config), NoopPublisher)

    def test_unknown_publisher_type(self):
        """Test that unknown driver types raise ValueError."""
        config = SimpleNamespace(publisher_type="carrier-pigeon")

        with pytest.raises(ValueError, match=r"Unknown publisher driver: carrier-pigeon"):
            create_publisher(config)  # type: ignore[arg-type]

    def test_missing_config_raises(self):
        """Test that a missing config raises a standardized error."""
        with pytest.raises(ValueError, match=r"publisher config is required"):
            create_publisher(None)  # type: ignore[arg-type]


class TestSubscriberFactory:
    """Tests for create_subscriber()."""

    def test_create_websocket_subscriber(self):
        """Test creating the WebSocket subscriber with a handler."""
        handler = print
        config = BridgeConfig(socket_url="ws://q/ws", max_reconnect_attempts=9)

        subscriber = create_subscriber(config, handler)

        assert isinstance(subscriber, WebSocketSubscriber)
        assert isinstance(subscriber, EventSubscriber)
        assert subscriber.handler is handler
        assert subscriber.max_reconnect_attempts == 9

    def test_create_noop_subscriber(self):
        """Test creating the no-op subscriber."""
        config = BridgeConfig(subscriber_type="noop")

        assert isinstance(create_subscriber(config), NoopSubscriber)

    def test_unknown_subscriber_type(self):
        """Test that unknown driver types raise ValueError."""
        config = SimpleNamespace(subscriber_type="mqtt")

        with pytest.raises(ValueError, match=r"Unknown subscriber driver: mqtt"):
            create_subscriber(config)  # type: ignore[arg-type]
