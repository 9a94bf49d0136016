"""
Unit Tests for NatsPublisher
"""

import pytest
from nats.errors import TimeoutError as NatsTimeoutError
from nats.js.errors import NoStreamResponseError
from pydantic import BaseModel

from microkit.core.exceptions import ConfigError, PublishError
from microkit.infrastructure.messaging.publisher import NatsPublisher


class OrderCreated(BaseModel):
    orderId: int


@pytest.mark.unit
class TestNatsPublisher:
    """Test publishing."""

    def test_empty_subject_is_config_error(self, nats_client):
        with pytest.raises(ConfigError):
            NatsPublisher(" ", nats_client)

    async def test_publishes_json(self, nats_client, jetstream):
        publisher = NatsPublisher("orders.created", nats_client)

        ack = await publisher.publish({"orderId": 42})

        jetstream.publish.assert_awaited_once_with("orders.created", b'{"orderId":42}')
        assert ack.stream == "ORDERS"
        assert ack.seq == 1

    async def test_publishes_models(self, nats_client, jetstream):
        publisher = NatsPublisher("orders.created", nats_client)

        await publisher.publish(OrderCreated(orderId=42))

        jetstream.publish.assert_awaited_once_with("orders.created", b'{"orderId":42}')

    @pytest.mark.parametrize("error", [NatsTimeoutError(), NoStreamResponseError()])
    async def test_broker_failure_is_publish_error(self, nats_client, jetstream, error):
        """Test that missing publish acks surface as PublishError."""
        jetstream.publish.side_effect = error
        publisher = NatsPublisher("orders.created", nats_client)

        with pytest.raises(PublishError) as exc_info:
            await publisher.publish({"orderId": 42})

        assert exc_info.value.details["subject"] == "orders.created"
