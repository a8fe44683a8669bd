from django.apps import AppConfig


class IngestConfig(AppConfig):
    name = "postback.ingest"
    verbose_name = "Postback ingest"
