from django.urls import path

from postback.ingest.views import PostbackIngestView

app_name = "ingest"

urlpatterns = [
    path("postbacks/", PostbackIngestView.as_view(), name="postbacks"),
    path("postbacks", PostbackIngestView.as_view(), name="postbacks-no-slash"),
]
