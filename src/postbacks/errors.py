"""Exceptions raised while building postbacks."""

from __future__ import annotations

from typing import Optional


class PostbackError(Exception):
    """Base class for postback failures."""


class TemplateError(PostbackError, ValueError):
    """Raised when a URL template cannot be resolved for a record."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.index: Optional[int] = None


class UnresolvedParameterError(TemplateError):
    """A placeholder references a key the record does not provide."""

    def __init__(self, key: str, template: str, start: str = "{", end: str = "}") -> None:
        super().__init__(f"Unknown param {start}{key}{end} in endpoint URL")
        self.key = key
        self.template = template


class MissingParameterError(TemplateError):
    """Delimiters are still present after substitution."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Missing parameters in URL: {url}")
        self.url = url
