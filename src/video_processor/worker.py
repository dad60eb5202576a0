"""Worker that handles queue message consumption and orchestration."""

import json
import logging
from typing import Any

from pydantic import ValidationError

from video_processor.cancellation import cancel_after
from video_processor.config import RabbitMQConfig
from video_processor.domain import ProcessingRequest
from video_processor.exceptions import (
    DeadlineExceeded,
    ErrorKind,
    ProcessingCancelled,
    ProcessingError,
)
from video_processor.handlers import VideoProcessingHandler
from video_processor.infrastructure.interfaces import MessageBroker
from video_processor.logging import bind_trace_id

logger = logging.getLogger(__name__)


class Worker:
    """Consumes processing requests from the queue and runs them one at a time."""

    def __init__(
        self,
        broker: MessageBroker,
        handler: VideoProcessingHandler,
        config: RabbitMQConfig,
        job_timeout_seconds: float | None = None,
    ):
        self._broker = broker
        self._handler = handler
        self._config = config
        self._job_timeout = job_timeout_seconds

    def start(self) -> None:
        """Starts consuming messages from the queue."""
        logger.info("Worker initialized, starting message consumption")
        self._broker.consume(self._on_message)

    def _on_message(
        self, body: bytes, delivery_tag: int, headers: dict[str, Any] | None
    ) -> None:
        """Callback for each received message."""
        bind_trace_id()
        delivery_count = headers.get("x-delivery-count", 1) if headers else 1
        max_attempts = (
            self._config.queue_config.max_delivery_count
            if self._config.queue_config
            else None
        )

        logger.info(
            "Message received",
            extra={"attempt": delivery_count, "max_attempts": max_attempts},
        )

        try:
            request = ProcessingRequest.model_validate(json.loads(body))
        except (ValidationError, ValueError) as e:
            logger.exception("Invalid message format", extra={"error": str(e)})
            self._broker.reject(delivery_tag)
            return

        try:
            with cancel_after(self._job_timeout):
                result = self._handler.process(request)
        except ProcessingError as e:
            if e.kind is ErrorKind.INTERNAL:
                logger.exception(
                    "Message processing failed, requesting redelivery",
                    extra={"video_key": request.video_key},
                )
                self._broker.reject(delivery_tag)
            else:
                # redelivering a missing or unusable video cannot succeed
                logger.warning(
                    "Message processing failed permanently",
                    extra={"video_key": request.video_key, "error_kind": e.kind.value},
                )
                self._broker.acknowledge(delivery_tag)
            return
        except DeadlineExceeded as e:
            logger.error(
                "Message processing exceeded its deadline",
                extra={"video_key": request.video_key, "reason": str(e)},
            )
            self._broker.reject(delivery_tag)
            return
        except ProcessingCancelled:
            # termination stops consumption
            logger.error(
                "Message processing cancelled",
                extra={"video_key": request.video_key},
            )
            self._broker.reject(delivery_tag)
            raise

        self._broker.acknowledge(delivery_tag)
        logger.info(
            "Message processed successfully",
            extra={
                "video_key": request.video_key,
                "output_key": result.output_key,
                "frame_count": result.frame_count,
            },
        )
