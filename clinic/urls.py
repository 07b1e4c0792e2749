"""
URL configuration for the veterinary clinic backend.

Routes the Django admin, the JSON API provided by the ``records`` app
(mounted under ``/api/``), uploaded files under ``/storage/`` and the
OpenAPI documentation at ``/swagger/`` and ``/redoc/``.
"""
from django.conf import settings
from django.contrib import admin
from django.urls import include, path, re_path
from django.views.static import serve

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

# API metadata for Swagger/OpenAPI documentation
api_info = openapi.Info(
    title="Veterinary Clinic API",
    default_version='v1',
    description="Client, pet and medical record services for the clinic.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('records.routers')),
    path('', include('django_prometheus.urls')),
    # Uploaded lab results and prescription photos
    re_path(r'^storage/(?P<path>.*)$', serve, {'document_root': settings.MEDIA_ROOT}),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
