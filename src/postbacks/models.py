"""Postback data model shared by the builder, publisher and ingest API."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Tuple

DataRecord = Mapping[str, str]


class HttpMethod(str, Enum):
    """HTTP methods a postback may be delivered with."""

    GET = "GET"
    POST = "POST"

    @classmethod
    def parse(cls, value: str) -> "HttpMethod":
        """Return the method matching ``value`` regardless of case."""
        try:
            return cls(value.strip().upper())
        except (AttributeError, ValueError) as exc:
            raise ValueError(f"Unsupported HTTP method: {value!r}") from exc


@dataclass(frozen=True)
class Endpoint:
    """Callback endpoint whose URL may contain placeholders."""

    method: HttpMethod
    url_template: str


@dataclass(frozen=True)
class Postback:
    """A fully resolved callback, published as ``<METHOD>,<URL>``."""

    method: HttpMethod
    resolved_url: str

    def to_csv(self) -> str:
        return f"{self.method.value},{self.resolved_url}"

    def encode(self) -> bytes:
        return self.to_csv().encode("utf-8")

    def __str__(self) -> str:
        return self.to_csv()


class PublishStatus(str, Enum):
    DELIVERED = "delivered"
    FAILED = "failed"


@dataclass(frozen=True)
class PublishOutcome:
    """Terminal state of a publish call."""

    status: PublishStatus
    attempts: int
    reason: Optional[str] = None
    pending: int = 0
    delivery_errors: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status is PublishStatus.DELIVERED

    @staticmethod
    def delivered(attempts: int) -> "PublishOutcome":
        return PublishOutcome(status=PublishStatus.DELIVERED, attempts=attempts)

    @staticmethod
    def failed(
        attempts: int,
        reason: str,
        pending: int = 0,
        delivery_errors: Tuple[str, ...] = (),
    ) -> "PublishOutcome":
        return PublishOutcome(
            status=PublishStatus.FAILED,
            attempts=attempts,
            reason=reason,
            pending=pending,
            delivery_errors=delivery_errors,
        )
