"""Publish postbacks from a JSON payload file."""

from __future__ import annotations

import sys

from django.core.management.base import BaseCommand, CommandError
from pydantic import ValidationError

from postback.ingest.schemas import PostbackRequest
from postback.ingest.services import PostbackIngestService, build_postbacks
from src.orchestration.kafka.config import ConfigurationError, KafkaSettings
from src.orchestration.kafka.producer import PublishError
from src.postbacks.errors import TemplateError


class Command(BaseCommand):
    help = "Resolve a postback payload and publish it to the Kafka postback topic."

    def add_arguments(self, parser):  # type: ignore[no-untyped-def]
        parser.add_argument(
            "payload", help="Path to a JSON payload, or '-' to read stdin")
        parser.add_argument(
            "--topic", help="Override KAFKA_POSTBACK_TOPIC for this run")
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Print the resolved postbacks without publishing them",
        )

    def handle(self, *args, **options):  # type: ignore[override]
        payload = self._load_payload(options["payload"])

        try:
            if options["dry_run"]:
                for postback in build_postbacks(payload):
                    self.stdout.write(postback.to_csv())
                return

            settings = KafkaSettings.from_env()
            result = PostbackIngestService(settings).ingest(
                payload, topic=options.get("topic"))
        except (ConfigurationError, TemplateError, PublishError) as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(
            self.style.SUCCESS(
                f"Published {result.published} postback(s) to {result.topic}"
            )
        )

    def _load_payload(self, source: str) -> PostbackRequest:
        try:
            if source == "-":
                raw = sys.stdin.read()
            else:
                with open(source, "r", encoding="utf-8") as handle:
                    raw = handle.read()
            return PostbackRequest.model_validate_json(raw)
        except OSError as exc:
            raise CommandError(f"Unable to read payload {source}: {exc}") from exc
        except ValidationError as exc:
            raise CommandError(f"Invalid postback payload: {exc}") from exc
