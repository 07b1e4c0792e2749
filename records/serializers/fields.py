import bleach
from django.conf import settings
from rest_framework import serializers


class CleanCharField(serializers.CharField):
    """CharField that strips markup from free text before it is stored."""

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        return bleach.clean(value, tags=set(), attributes={}, strip=True)


class UploadedImageField(serializers.FileField):
    """An uploaded photo, limited by ``ALLOWED_UPLOAD_TYPES`` and ``UPLOAD_MAX_MB``."""

    def to_internal_value(self, data):
        f = super().to_internal_value(data)
        allowed = settings.ALLOWED_UPLOAD_TYPES
        if getattr(f, 'content_type', None) not in allowed:
            raise serializers.ValidationError(f"Unsupported file type; expected one of {', '.join(allowed)}.")
        max_bytes = settings.UPLOAD_MAX_MB * 1024 * 1024
        if f.size > max_bytes:
            raise serializers.ValidationError(f"File may not be greater than {settings.UPLOAD_MAX_MB} MB.")
        return f
