from __future__ import annotations

import json
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views import View

JSON_CONTENT_TYPE = "application/json"


class JSONView(View):
    """Base view for endpoints that accept and return JSON."""

    def json_error(self, message: str, status: int, **extra: Any) -> JsonResponse:
        return JsonResponse({"error": message, **extra}, status=status)

    def is_json_request(self, request: HttpRequest) -> bool:
        content_type = request.META.get("CONTENT_TYPE", "")
        return JSON_CONTENT_TYPE in content_type.lower()

    def parse_json_body(self, request: HttpRequest) -> Any:
        """Decode the request body; raises ValueError when it is not JSON."""
        try:
            return json.loads(request.body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ValueError(f"Malformed JSON body: {exc}") from exc
