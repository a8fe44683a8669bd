from django.urls import include, path

urlpatterns = [
    path("", include("postback.ingest.urls")),
]
