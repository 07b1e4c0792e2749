from rest_framework import serializers

from .fields import CleanCharField
from .users import unique_email, unique_username


class LoginSerializer(serializers.Serializer):
    # Accepts either the username or the e-mail address
    username = serializers.CharField()
    password = serializers.CharField()

    def validate_username(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('The username field is required.')
        return v


class RegisterSerializer(serializers.Serializer):
    name = CleanCharField(max_length=255)
    email = serializers.EmailField(max_length=255)
    username = serializers.RegexField(r'^[\w.@+-]+$', max_length=150)
    password = serializers.CharField(min_length=8, write_only=True)
    password_confirmation = serializers.CharField(write_only=True)

    def validate_email(self, v):
        return unique_email(v)

    def validate_username(self, v):
        return unique_username(v)

    def validate(self, attrs):
        if attrs['password'] != attrs['password_confirmation']:
            raise serializers.ValidationError({'password': ['The password confirmation does not match.']})
        return attrs
