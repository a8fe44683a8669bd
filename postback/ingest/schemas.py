"""
Request models for the postback ingest endpoint.

Mirrors the JSON schema accepted by the ingest API: an ``endpoint`` describing
the callback (method and URL template) and a ``data`` array of flat
string-to-string records, one postback per record.
"""

from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from src.postbacks.models import Endpoint, HttpMethod


class EndpointPayload(BaseModel):
    """Callback endpoint as submitted by the caller."""
    model_config = ConfigDict(frozen=True)

    method: Literal["GET", "POST"] = Field(
        description="HTTP method used when the postback is delivered")
    url: StrictStr = Field(
        min_length=1,
        description="Callback URL, optionally containing {placeholders}")

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("url")
    @classmethod
    def url_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("url cannot be blank")
        return value


class PostbackRequest(BaseModel):
    """Full ingest request body."""

    endpoint: EndpointPayload
    data: List[Dict[StrictStr, StrictStr]] = Field(
        description="One record per postback; values substitute URL placeholders")

    def to_endpoint(self) -> Endpoint:
        return Endpoint(
            method=HttpMethod.parse(self.endpoint.method),
            url_template=self.endpoint.url,
        )
