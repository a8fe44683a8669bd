"""Postback construction: URL template resolution and batch building."""

from .builder import PostbackBuilder
from .errors import (
    MissingParameterError,
    PostbackError,
    TemplateError,
    UnresolvedParameterError,
)
from .models import (
    DataRecord,
    Endpoint,
    HttpMethod,
    Postback,
    PublishOutcome,
    PublishStatus,
)
from .template_resolver import TemplateResolver, resolve

__all__ = [
    "DataRecord",
    "Endpoint",
    "HttpMethod",
    "MissingParameterError",
    "Postback",
    "PostbackBuilder",
    "PostbackError",
    "PublishOutcome",
    "PublishStatus",
    "TemplateError",
    "TemplateResolver",
    "UnresolvedParameterError",
    "resolve",
]
