# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for the in-memory publisher and subscriber."""

import threading

import pytest

from goqueue_bridge import NoopPublisher, NoopSubscriber, SerializationError


class TestNoopPublisher:
    """Tests for NoopPublisher."""

    def test_publish_records_event(self):
        """Test that published events are stored with serialized data."""
        publisher = NoopPublisher()

        assert publisher.publish("order.created", {"id": 42}) is True

        assert publisher.published_events == [{"event": "order.created", "data": '{"id":42}'}]

    def test_get_events_filters_by_name(self):
        """Test filtering stored events by event name."""
        publisher = NoopPublisher()
        publisher.publish("a", 1)
        publisher.publish("b", 2)
        publisher.publish("a", 3)

        assert [e["data"] for e in publisher.get_events("a")] == ["1", "3"]
        assert len(publisher.get_events()) == 3

    def test_clear_events(self):
        """Test clearing stored events."""
        publisher = NoopPublisher()
        publisher.publish("a", 1)
        publisher.clear_events()
        assert publisher.get_events() == []

    def test_serialization_errors_surface(self):
        """Test that non-serializable payloads still raise."""
        with pytest.raises(SerializationError):
            NoopPublisher().publish("a", {"x": {1, 2}})


class TestNoopSubscriber:
    """Tests for NoopSubscriber."""

    def test_connect_disconnect(self):
        """Test connection flags."""
        subscriber = NoopSubscriber()

        subscriber.connect()
        assert subscriber.connected
        subscriber.disconnect()
        assert not subscriber.connected

    def test_inject_message(self):
        """Test that injected messages reach the handler."""
        received = []
        subscriber = NoopSubscriber(received.append)

        subscriber.inject_message("hello")
        subscriber.inject_message("")
        subscriber.inject_message(None)

        assert received == ["hello"]

    def test_inject_message_contains_handler_errors(self, caplog):
        """Test that handler errors are logged and counted, not raised."""
        received = []

        def handler(message):
            if message == "bad":
                raise RuntimeError("boom")
            received.append(message)

        subscriber = NoopSubscriber(handler)
        subscriber.inject_message("bad")
        subscriber.inject_message("good")

        assert received == ["good"]
        assert subscriber.handler_errors == 1
        assert "boom" in caplog.text

    def test_run_blocks_until_stop(self):
        """Test that run blocks until stop is called."""
        subscriber = NoopSubscriber()
        thread = threading.Thread(target=subscriber.run)
        thread.start()

        thread.join(timeout=0.05)
        assert thread.is_alive()

        subscriber.stop()
        thread.join(timeout=2.0)

        assert not thread.is_alive()
        assert not subscriber.running
        assert not subscriber.connected
