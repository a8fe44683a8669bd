"""Kafka configuration helpers."""

from dataclasses import dataclass
from typing import Mapping, Optional
import os

DEFAULT_CLIENT_ID = "postback-ingest"
DEFAULT_FLUSH_ATTEMPTS = 3
DEFAULT_FLUSH_TIMEOUT_MS = 3000


class ConfigurationError(RuntimeError):
    """Raised when required Kafka settings are missing or invalid."""


@dataclass(frozen=True)
class KafkaSettings:
    """Strongly typed Kafka configuration."""

    bootstrap_servers: str
    topic: str
    client_id: str = DEFAULT_CLIENT_ID
    flush_attempts: int = DEFAULT_FLUSH_ATTEMPTS
    flush_timeout_ms: int = DEFAULT_FLUSH_TIMEOUT_MS

    @property
    def flush_timeout_seconds(self) -> float:
        return self.flush_timeout_ms / 1000.0

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> "KafkaSettings":
        """Load settings from environment variables."""
        env = os.environ if environ is None else environ

        bootstrap_servers = env.get("KAFKA_HOSTNAME_PORT")
        if not bootstrap_servers:
            raise ConfigurationError(
                "No Kafka hostname:port specified in env var KAFKA_HOSTNAME_PORT")

        topic = env.get("KAFKA_POSTBACK_TOPIC")
        if not topic:
            raise ConfigurationError(
                "No Kafka topic specified in env var KAFKA_POSTBACK_TOPIC")

        flush_attempts = _positive_int(
            env, "KAFKA_FLUSH_ATTEMPTS", DEFAULT_FLUSH_ATTEMPTS)
        flush_timeout_ms = _positive_int(
            env, "KAFKA_FLUSH_TIMEOUT_MS", DEFAULT_FLUSH_TIMEOUT_MS)

        return KafkaSettings(
            bootstrap_servers=bootstrap_servers,
            topic=topic,
            client_id=env.get("KAFKA_CLIENT_ID") or DEFAULT_CLIENT_ID,
            flush_attempts=flush_attempts,
            flush_timeout_ms=flush_timeout_ms,
        )


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ConfigurationError(f"{name} must be at least 1, got {value}")
    return value
