"""URL routing for SchoolHub.

The JSON API lives under /api/; the OpenAPI schema and Swagger UI are
served by the api app as well.
"""
from django.contrib import admin
from django.urls import include, path


urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("api.urls")),
]
