"""Kafka producer utilities."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from confluent_kafka import KafkaError, KafkaException, Message, Producer

from src.postbacks.errors import PostbackError
from src.postbacks.models import Postback, PublishOutcome

from .config import KafkaSettings

logger = logging.getLogger(__name__)

FLUSH_FAILURE_REASON = "Unable to perform flush, messages might be lost!"


class PublishError(PostbackError, RuntimeError):
    """Raised when postbacks could not be handed to the broker."""

    def __init__(self, message: str, outcome: Optional[PublishOutcome] = None) -> None:
        super().__init__(message)
        self.outcome = outcome


@dataclass(frozen=True)
class KafkaProducerFactory:
    """Factory for creating Kafka producers with shared configuration."""

    settings: KafkaSettings

    def create(self) -> Producer:
        """Instantiate a configured Kafka producer."""
        config = {
            "bootstrap.servers": self.settings.bootstrap_servers,
            "client.id": self.settings.client_id,
        }
        try:
            return Producer(config)
        except KafkaException as exc:
            raise PublishError(f"Unable to create Kafka producer: {exc}") from exc


class PostbackPublisher:
    """Publish postbacks onto the Kafka postback topic."""

    def __init__(self, producer: Producer, settings: KafkaSettings) -> None:
        self._producer = producer
        self._settings = settings
        self._delivery_errors: List[str] = []

    def publish(
        self,
        postbacks: Sequence[Postback],
        topic: Optional[str] = None,
    ) -> PublishOutcome:
        """Enqueue every postback, then flush with a bounded number of attempts.

        The outcome is only ``DELIVERED`` when the flush drained the queue and
        the broker reported no delivery error for any message.
        """
        target = topic or self._settings.topic
        self._delivery_errors = []
        logger.info(
            "Kafka connect brokers: %s Using topic: %s",
            self._settings.bootstrap_servers,
            target,
        )

        for postback in postbacks:
            logger.debug("Pushing postback URL to Kafka: %s", postback)
            try:
                self._producer.produce(
                    target,
                    value=postback.encode(),
                    on_delivery=self._delivery_report,
                )
            except (BufferError, KafkaException) as exc:
                raise PublishError(
                    f"Error producing postback message(s) to Kafka: {exc}"
                ) from exc
            self._producer.poll(0)

        return self._flush(len(postbacks))

    def publish_or_raise(
        self,
        postbacks: Sequence[Postback],
        topic: Optional[str] = None,
    ) -> PublishOutcome:
        outcome = self.publish(postbacks, topic=topic)
        if not outcome.ok:
            raise PublishError(outcome.reason or FLUSH_FAILURE_REASON, outcome)
        return outcome

    def _flush(self, total: int) -> PublishOutcome:
        attempts = self._settings.flush_attempts
        timeout = self._settings.flush_timeout_seconds
        remaining = 0
        for attempt in range(1, attempts + 1):
            remaining = self._producer.flush(timeout)
            if remaining == 0:
                if self._delivery_errors:
                    return self._rejected(attempt, total)
                return PublishOutcome.delivered(attempt)
            logger.warning(
                "Flush attempt %d/%d left %d message(s) unacknowledged",
                attempt,
                attempts,
                remaining,
            )

        logger.error("%s (%d message(s) pending)", FLUSH_FAILURE_REASON, remaining)
        return PublishOutcome.failed(
            attempts,
            FLUSH_FAILURE_REASON,
            pending=remaining,
            delivery_errors=tuple(self._delivery_errors),
        )

    def _rejected(self, attempts: int, total: int) -> PublishOutcome:
        errors = tuple(self._delivery_errors)
        reason = (
            f"Broker rejected {len(errors)} of {total} postback message(s): {errors[0]}"
        )
        logger.error("%s", reason)
        return PublishOutcome.failed(attempts, reason, delivery_errors=errors)

    def _delivery_report(self, err: Optional[KafkaError], msg: Message) -> None:
        if err is None:
            return
        code = err.code() if isinstance(err, KafkaError) else None
        detail = f"{err} (code={code})" if code is not None else str(err)
        self._delivery_errors.append(detail)
        logger.error("Postback delivery to %s failed: %s", msg.topic(), detail)
