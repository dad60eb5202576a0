"""RabbitMQ implementations of the MessagePublisher and MessageBroker interfaces."""

import json
import logging
from collections.abc import Callable
from typing import Any

from pika.adapters.blocking_connection import BlockingChannel

from video_processor.config import RabbitMQConfig
from video_processor.exceptions import EventPublishError

from .interfaces import MessageBroker, MessagePublisher

logger = logging.getLogger(__name__)


class RabbitMQPublisher(MessagePublisher):
    """Publishes events to a RabbitMQ topic exchange."""

    def __init__(self, channel: BlockingChannel, config: RabbitMQConfig):
        self._channel = channel
        self._config = config

    def publish(self, routing_key: str, payload: dict) -> None:
        try:
            self._channel.basic_publish(
                exchange=self._config.exchange_name,
                routing_key=routing_key,
                body=json.dumps(payload),
            )
            logger.info(
                "Event published to RabbitMQ",
                extra={
                    "exchange": self._config.exchange_name,
                    "routing_key": routing_key,
                },
            )
        except Exception as e:
            logger.exception(
                "RabbitMQ publish failed",
                extra={"routing_key": routing_key},
            )
            raise EventPublishError(routing_key, e) from e

    def declare_exchange(self) -> None:
        """Ensures the events exchange exists - idempotent."""
        self._channel.exchange_declare(
            exchange=self._config.exchange_name,
            exchange_type="topic",
            durable=True,
        )


class LazyRabbitMQPublisher(MessagePublisher):
    """
    Publisher that connects to RabbitMQ on first use.

    A broker that cannot be reached surfaces as EventPublishError from
    publish, never at construction time.
    """

    def __init__(
        self, channel_factory: Callable[[], BlockingChannel], config: RabbitMQConfig
    ):
        self._channel_factory = channel_factory
        self._config = config
        self._publisher: RabbitMQPublisher | None = None

    def publish(self, routing_key: str, payload: dict) -> None:
        if self._publisher is None:
            try:
                publisher = RabbitMQPublisher(self._channel_factory(), self._config)
                publisher.declare_exchange()
            except Exception as e:
                logger.exception(
                    "RabbitMQ connection failed",
                    extra={"host": self._config.host, "routing_key": routing_key},
                )
                raise EventPublishError(routing_key, e) from e
            self._publisher = publisher
        self._publisher.publish(routing_key, payload)


class RabbitMQBroker(RabbitMQPublisher, MessageBroker):
    """Handles message broker operations using RabbitMQ."""

    def acknowledge(self, delivery_tag: int) -> None:
        self._channel.basic_ack(delivery_tag=delivery_tag)

    def reject(self, delivery_tag: int) -> None:
        self._channel.basic_nack(delivery_tag=delivery_tag)

    def consume(
        self, callback: Callable[[bytes, int, dict[str, Any] | None], None]
    ) -> None:
        queue_config = self._require_queue_config()

        def on_message(ch, method, properties, body):
            headers = properties.headers if properties else None
            callback(body, method.delivery_tag, headers)

        self._channel.basic_consume(
            queue=queue_config.name,
            on_message_callback=on_message,
        )
        logger.info(
            "Message consumption started",
            extra={"queue": queue_config.name},
        )
        self._channel.start_consuming()

    def setup(self) -> None:
        """Sets up dead-letter exchange, main exchange, queue, and bindings."""
        queue_config = self._require_queue_config()

        # Dead letter infrastructure
        self._channel.exchange_declare(
            exchange=queue_config.dlq_exchange_name,
            exchange_type="direct",
            durable=True,
        )
        self._channel.queue_declare(queue=queue_config.dlq_name, durable=True)
        self._channel.queue_bind(
            queue=queue_config.dlq_name,
            exchange=queue_config.dlq_exchange_name,
            routing_key=queue_config.dlq_routing_key,
        )

        self.declare_exchange()

        # Main queue with dead-letter configuration
        queue_args = {
            "x-queue-type": queue_config.queue_type,
            "x-delivery-limit": queue_config.max_delivery_count,
            "x-dead-letter-exchange": queue_config.dlq_exchange_name,
            "x-dead-letter-routing-key": queue_config.dlq_routing_key,
        }
        self._channel.queue_declare(
            queue=queue_config.name,
            durable=True,
            arguments=queue_args,
        )
        self._channel.queue_bind(
            queue=queue_config.name,
            exchange=self._config.exchange_name,
            routing_key=queue_config.expected_routing_key,
        )

        logger.info(
            "RabbitMQ infrastructure setup complete",
            extra={
                "queue": queue_config.name,
                "exchange": self._config.exchange_name,
            },
        )

    def _require_queue_config(self):
        if self._config.queue_config is None:
            raise ValueError("RabbitMQ queue configuration is required for consuming")
        return self._config.queue_config
