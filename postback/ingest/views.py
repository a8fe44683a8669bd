"""HTTP entry point that turns a batch of records into published postbacks."""

from __future__ import annotations

import logging

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt
from pydantic import ValidationError

from postback.utils.views import JSONView
from src.orchestration.kafka.config import ConfigurationError, KafkaSettings
from src.orchestration.kafka.producer import PublishError
from src.postbacks.errors import TemplateError

from .schemas import PostbackRequest
from .services import PostbackIngestService

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class PostbackIngestView(JSONView):
    """Accept postback batches and hand them to Kafka."""

    http_method_names = ["post"]

    def post(self, request, *args, **kwargs):  # type: ignore[override]
        if not self.is_json_request(request):
            content_type = request.META.get("CONTENT_TYPE", "")
            logger.warning(
                "Invalid Content-Type. Expecting application/json, but got %s",
                content_type,
            )
            return self.json_error(
                f"Invalid Content-Type {content_type!r}, expecting application/json",
                status=405,
            )

        try:
            kafka_settings = KafkaSettings.from_env()
        except ConfigurationError as exc:
            logger.error("%s", exc)
            return self.json_error(str(exc), status=500)

        try:
            body = self.parse_json_body(request)
        except ValueError as exc:
            logger.warning("Error parsing JSON for request body: %s", exc)
            return self.json_error(str(exc), status=400)

        try:
            payload = PostbackRequest.model_validate(body)
        except ValidationError as exc:
            logger.warning(
                "Error validating JSON schema with request body: %s", exc)
            return self.json_error(
                "Request body does not match the postback schema",
                status=400,
                details=exc.errors(include_url=False, include_context=False),
            )

        service = PostbackIngestService(kafka_settings)
        try:
            result = service.ingest(payload)
        except TemplateError as exc:
            logger.warning("Error building postback URL: %s", exc)
            return self.json_error(str(exc), status=400, index=exc.index)
        except PublishError as exc:
            logger.error(
                "Error producing postback message(s) to Kafka: %s", exc)
            return self.json_error(str(exc), status=500)

        return JsonResponse(
            {
                "published": result.published,
                "topic": result.topic,
                "attempts": result.outcome.attempts if result.outcome else 0,
            }
        )
