"""Placeholder substitution for postback URL templates.

A template such as ``http://host/cb?id={id}&src={source}`` is resolved against
a flat record. Every placeholder must resolve to a key present in the record;
values are form-encoded before substitution and the result may not contain any
stray delimiter.
"""

from __future__ import annotations

import re
import string
from typing import Iterator, Mapping, Optional
from urllib.parse import quote_plus

from .errors import MissingParameterError, UnresolvedParameterError

DEFAULT_START_DELIMITER = "{"
DEFAULT_END_DELIMITER = "}"

# Characters quote_plus can emit; a delimiter built from them would be
# indistinguishable from an encoded value.
ENCODED_ALPHABET = frozenset(string.ascii_letters + string.digits + "_.-~%+")


class TemplateResolver:
    """Resolve URL templates using a configurable delimiter pair."""

    def __init__(
        self,
        start_delimiter: str = DEFAULT_START_DELIMITER,
        end_delimiter: str = DEFAULT_END_DELIMITER,
    ) -> None:
        if not start_delimiter or not end_delimiter:
            raise ValueError("delimiters cannot be empty")
        for delimiter in (start_delimiter, end_delimiter):
            clash = sorted(ENCODED_ALPHABET.intersection(delimiter))
            if clash:
                raise ValueError(
                    f"delimiter {delimiter!r} contains characters produced by URL "
                    f"encoding: {''.join(clash)!r}"
                )
        self.start_delimiter = start_delimiter
        self.end_delimiter = end_delimiter
        self._pattern = re.compile(
            f"{re.escape(start_delimiter)}(.*?){re.escape(end_delimiter)}",
            re.DOTALL,
        )

    def placeholders(self, url_template: str) -> list[str]:
        """Return distinct raw placeholders in first-occurrence order."""
        return list(dict.fromkeys(self._iter_raw(url_template)))

    def resolve(self, url_template: str, record: Mapping[str, Optional[str]]) -> str:
        resolved = url_template
        for raw in self.placeholders(url_template):
            key = raw[len(self.start_delimiter):-len(self.end_delimiter)]
            value = self._lookup(record, key)
            if value is None:
                raise UnresolvedParameterError(
                    key, url_template, self.start_delimiter, self.end_delimiter
                )
            resolved = resolved.replace(raw, quote_plus(value, safe=""))

        if self._has_delimiter(resolved):
            raise MissingParameterError(resolved)
        return resolved

    def _iter_raw(self, url_template: str) -> Iterator[str]:
        for match in self._pattern.finditer(url_template):
            yield match.group(0)

    def _has_delimiter(self, url: str) -> bool:
        return self.start_delimiter in url or self.end_delimiter in url

    @staticmethod
    def _lookup(record: Mapping[str, Optional[str]], key: str) -> Optional[str]:
        # Empty strings are valid values; only a missing key (or None) is not.
        if key not in record:
            return None
        return record[key]


_default_resolver = TemplateResolver()


def resolve(
    url_template: str,
    record: Mapping[str, Optional[str]],
    start_delimiter: str = DEFAULT_START_DELIMITER,
    end_delimiter: str = DEFAULT_END_DELIMITER,
) -> str:
    """Resolve ``url_template`` against ``record``."""
    if (start_delimiter, end_delimiter) == (DEFAULT_START_DELIMITER, DEFAULT_END_DELIMITER):
        return _default_resolver.resolve(url_template, record)
    return TemplateResolver(start_delimiter, end_delimiter).resolve(url_template, record)
