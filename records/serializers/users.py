from django.contrib.auth import get_user_model
from rest_framework import serializers

from .fields import CleanCharField

User = get_user_model()


def unique_email(v, exclude_id=None):
    if not v:
        return None
    qs = User.objects.filter(email__iexact=v)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    if qs.exists():
        raise serializers.ValidationError('The email has already been taken.')
    return v


def unique_username(v, exclude_id=None):
    qs = User.objects.filter(username=v)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    if qs.exists():
        raise serializers.ValidationError('The username has already been taken.')
    return v


class _OwnAccountSerializer(serializers.Serializer):
    """Uniqueness checks ignore the row named by ``context['user_id']``."""

    def validate_email(self, v):
        return unique_email(v, self.context.get('user_id'))

    def validate_username(self, v):
        return unique_username(v, self.context.get('user_id'))


class ClientSerializer(_OwnAccountSerializer):
    name = CleanCharField(max_length=255)
    email = serializers.EmailField(max_length=255, required=False, allow_null=True, allow_blank=True)
    username = serializers.RegexField(r'^[\w.@+-]+$', max_length=150, required=False)
    phone = CleanCharField(max_length=32, required=False, allow_null=True, allow_blank=True)
    address = CleanCharField(required=False, allow_null=True, allow_blank=True)


class ProfileSerializer(_OwnAccountSerializer):
    name = CleanCharField(max_length=255, required=False)
    username = serializers.RegexField(r'^[\w.@+-]+$', max_length=150, required=False)
    email = serializers.EmailField(max_length=255, required=False)
    phone = CleanCharField(max_length=32, required=False, allow_null=True, allow_blank=True)
    address = CleanCharField(required=False, allow_null=True, allow_blank=True)
    current_password = serializers.CharField(required=False, write_only=True)
    password = serializers.CharField(min_length=8, required=False, write_only=True)
    password_confirmation = serializers.CharField(required=False, write_only=True)

    def validate(self, attrs):
        if 'password' in attrs:
            if not attrs.get('current_password'):
                raise serializers.ValidationError(
                    {'current_password': ['The current password is required to set a new password.']})
            if attrs['password'] != attrs.get('password_confirmation'):
                raise serializers.ValidationError({'password': ['The password confirmation does not match.']})
        return attrs


class UsernameSerializer(_OwnAccountSerializer):
    username = serializers.RegexField(r'^[\w.@+-]+$', max_length=150)


class EmailSerializer(_OwnAccountSerializer):
    email = serializers.EmailField(max_length=255)


class PasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    password = serializers.CharField(min_length=8, write_only=True)
    password_confirmation = serializers.CharField(write_only=True)

    def validate(self, attrs):
        if attrs['password'] != attrs['password_confirmation']:
            raise serializers.ValidationError({'password': ['The password confirmation does not match.']})
        return attrs
