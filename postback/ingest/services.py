from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from django.conf import settings as django_settings

from src.orchestration.kafka.config import KafkaSettings
from src.orchestration.kafka.producer import KafkaProducerFactory, PostbackPublisher
from src.postbacks.builder import PostbackBuilder
from src.postbacks.models import Postback, PublishOutcome
from src.postbacks.template_resolver import TemplateResolver

from .schemas import PostbackRequest

logger = logging.getLogger(__name__)

ProducerFactory = Callable[[KafkaSettings], KafkaProducerFactory]


@dataclass(frozen=True)
class IngestResult:
    postbacks: List[Postback]
    outcome: Optional[PublishOutcome]
    topic: str
    duration_seconds: float

    @property
    def published(self) -> int:
        return len(self.postbacks)


def configured_resolver() -> TemplateResolver:
    """Resolver using the delimiters from Django settings."""
    return TemplateResolver(
        getattr(django_settings, "POSTBACK_PARAM_START_DELIMITER", "{"),
        getattr(django_settings, "POSTBACK_PARAM_END_DELIMITER", "}"),
    )


def build_postbacks(payload: PostbackRequest) -> List[Postback]:
    builder = PostbackBuilder(payload.to_endpoint(), configured_resolver())
    return builder.build(payload.data)


class PostbackIngestService:
    """Resolve a validated request into postbacks and publish them."""

    def __init__(
        self,
        kafka_settings: KafkaSettings,
        *,
        producer_factory: Optional[ProducerFactory] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._settings = kafka_settings
        self._producer_factory = producer_factory or KafkaProducerFactory
        self._clock = clock

    def ingest(self, payload: PostbackRequest, topic: Optional[str] = None) -> IngestResult:
        started = self._clock()
        target = topic or self._settings.topic

        # Every record must resolve before a producer is opened.
        postbacks = build_postbacks(payload)
        if not postbacks:
            logger.info("No postbacks to publish")
            return IngestResult(postbacks, None, target, self._clock() - started)

        producer = self._producer_factory(self._settings).create()
        publisher = PostbackPublisher(producer, self._settings)
        outcome = publisher.publish_or_raise(postbacks, topic=target)

        duration = self._clock() - started
        logger.info(
            "Postback complete. %d postback(s) in %.3f seconds.",
            len(postbacks),
            duration,
        )
        return IngestResult(postbacks, outcome, target, duration)
