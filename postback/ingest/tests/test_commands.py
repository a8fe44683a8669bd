from __future__ import annotations

import json
import os
import tempfile
from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase

PAYLOAD = {
    "endpoint": {"method": "POST", "url": "http://x/cb?id={id}"},
    "data": [{"id": "a b"}, {"id": "2"}],
}


class PublishPostbacksCommandTests(SimpleTestCase):
    def _write_payload(self, payload) -> str:  # type: ignore[no-untyped-def]
        handle = tempfile.NamedTemporaryFile(
            "w", suffix=".json", delete=False, encoding="utf-8")
        with handle:
            json.dump(payload, handle)
        self.addCleanup(os.unlink, handle.name)
        return handle.name

    def test_dry_run_prints_postbacks(self) -> None:
        out = StringIO()
        call_command("publish_postbacks", self._write_payload(PAYLOAD),
                     "--dry-run", stdout=out)
        self.assertEqual(
            out.getvalue().splitlines(),
            ["POST,http://x/cb?id=a+b", "POST,http://x/cb?id=2"],
        )

    @patch.dict("os.environ", {"KAFKA_HOSTNAME_PORT": "kafka:9092",
                               "KAFKA_POSTBACK_TOPIC": "postback"})
    @patch("postback.ingest.services.KafkaProducerFactory")
    def test_publishes_to_topic_override(self, factory_cls) -> None:
        producer = factory_cls.return_value.create.return_value
        producer.flush.return_value = 0
        out = StringIO()

        call_command("publish_postbacks", self._write_payload(PAYLOAD),
                     "--topic", "replay", stdout=out)

        self.assertEqual(producer.produce.call_count, 2)
        self.assertEqual(producer.produce.call_args_list[0].args[0], "replay")
        self.assertIn("Published 2 postback(s) to replay", out.getvalue())

    @patch.dict("os.environ", {"KAFKA_HOSTNAME_PORT": "", "KAFKA_POSTBACK_TOPIC": ""})
    def test_missing_configuration(self) -> None:
        with self.assertRaises(CommandError):
            call_command("publish_postbacks", self._write_payload(PAYLOAD))

    def test_invalid_payload(self) -> None:
        with self.assertRaises(CommandError):
            call_command("publish_postbacks", self._write_payload({"data": []}))

    def test_unresolved_parameter(self) -> None:
        payload = {"endpoint": {"method": "GET", "url": "http://x/{id}"},
                   "data": [{"other": "1"}]}
        with self.assertRaises(CommandError) as ctx:
            call_command("publish_postbacks", self._write_payload(payload),
                         "--dry-run")
        self.assertIn("{id}", str(ctx.exception))

    def test_unreadable_file(self) -> None:
        with self.assertRaises(CommandError):
            call_command("publish_postbacks", "/nonexistent/payload.json")
