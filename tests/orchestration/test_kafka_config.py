from __future__ import annotations

from unittest.mock import patch

from django.test import SimpleTestCase

from src.orchestration.kafka.config import ConfigurationError, KafkaSettings


class KafkaSettingsTests(SimpleTestCase):
    def test_from_env_reads_required_values(self) -> None:
        settings = KafkaSettings.from_env(
            {"KAFKA_HOSTNAME_PORT": "kafka:9092", "KAFKA_POSTBACK_TOPIC": "postback"}
        )
        self.assertEqual(settings.bootstrap_servers, "kafka:9092")
        self.assertEqual(settings.topic, "postback")
        self.assertEqual(settings.client_id, "postback-ingest")
        self.assertEqual(settings.flush_attempts, 3)
        self.assertEqual(settings.flush_timeout_ms, 3000)
        self.assertEqual(settings.flush_timeout_seconds, 3.0)

    def test_missing_broker_address(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            KafkaSettings.from_env({"KAFKA_POSTBACK_TOPIC": "postback"})
        self.assertIn("KAFKA_HOSTNAME_PORT", str(ctx.exception))

    def test_missing_topic(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            KafkaSettings.from_env(
                {"KAFKA_HOSTNAME_PORT": "kafka:9092", "KAFKA_POSTBACK_TOPIC": ""})
        self.assertIn("KAFKA_POSTBACK_TOPIC", str(ctx.exception))

    def test_flush_overrides(self) -> None:
        settings = KafkaSettings.from_env(
            {
                "KAFKA_HOSTNAME_PORT": "kafka:9092",
                "KAFKA_POSTBACK_TOPIC": "postback",
                "KAFKA_FLUSH_ATTEMPTS": "5",
                "KAFKA_FLUSH_TIMEOUT_MS": "1500",
                "KAFKA_CLIENT_ID": "custom",
            }
        )
        self.assertEqual(settings.flush_attempts, 5)
        self.assertEqual(settings.flush_timeout_seconds, 1.5)
        self.assertEqual(settings.client_id, "custom")

    def test_invalid_flush_values(self) -> None:
        base = {"KAFKA_HOSTNAME_PORT": "kafka:9092", "KAFKA_POSTBACK_TOPIC": "postback"}
        for name, value in (
            ("KAFKA_FLUSH_ATTEMPTS", "zero"),
            ("KAFKA_FLUSH_ATTEMPTS", "0"),
            ("KAFKA_FLUSH_TIMEOUT_MS", "-5"),
        ):
            with self.subTest(name=name, value=value):
                with self.assertRaises(ConfigurationError):
                    KafkaSettings.from_env({**base, name: value})

    def test_defaults_to_process_environment(self) -> None:
        env = {"KAFKA_HOSTNAME_PORT": "broker:29092", "KAFKA_POSTBACK_TOPIC": "cb"}
        with patch.dict("os.environ", env, clear=True):
            settings = KafkaSettings.from_env()
        self.assertEqual(settings.bootstrap_servers, "broker:29092")
        self.assertEqual(settings.topic, "cb")
