"""Build ordered postback batches from an endpoint and its data records."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .errors import TemplateError
from .models import DataRecord, Endpoint, Postback
from .template_resolver import TemplateResolver

logger = logging.getLogger(__name__)


class PostbackBuilder:
    """Resolve one postback per record, failing the whole batch on the first error."""

    def __init__(self, endpoint: Endpoint, resolver: Optional[TemplateResolver] = None) -> None:
        self._endpoint = endpoint
        self._resolver = resolver or TemplateResolver()

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    def build_one(self, record: DataRecord) -> Postback:
        url = self._resolver.resolve(self._endpoint.url_template, record)
        return Postback(method=self._endpoint.method, resolved_url=url)

    def build(self, records: Iterable[DataRecord]) -> List[Postback]:
        postbacks: List[Postback] = []
        for index, record in enumerate(records):
            try:
                postbacks.append(self.build_one(record))
            except TemplateError as exc:
                exc.index = index
                logger.warning(
                    "Postback %d could not be built for %s: %s",
                    index,
                    self._endpoint.url_template,
                    exc,
                )
                raise
        return postbacks
