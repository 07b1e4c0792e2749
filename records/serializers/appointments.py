from django.contrib.auth import get_user_model
from rest_framework import serializers

from ..models import Pet

User = get_user_model()

FILTER_CHOICES = ['all', 'today', 'week', 'month']


class AppointmentSerializer(serializers.Serializer):
    client_id = serializers.IntegerField(min_value=1)
    pet_id = serializers.IntegerField(min_value=1)
    # Naive values are read as clinic-local wall-clock time
    appointment_date = serializers.DateTimeField()
    types = serializers.ChoiceField(choices=['consultation', 'vaccine', 'deworming'])

    def validate_client_id(self, v):
        if not User.objects.filter(pk=v, role='client').exists():
            raise serializers.ValidationError('The selected client id is invalid.')
        return v

    def validate_pet_id(self, v):
        if not Pet.objects.filter(pk=v).exists():
            raise serializers.ValidationError('The selected pet id is invalid.')
        return v


class AppointmentListQuerySerializer(serializers.Serializer):
    filter = serializers.ChoiceField(choices=FILTER_CHOICES, required=False, default='all')


class ReminderRequestSerializer(serializers.Serializer):
    client_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)

    def validate_client_ids(self, ids):
        known = set(User.objects.filter(pk__in=ids).values_list('pk', flat=True))
        unknown = [i for i in ids if i not in known]
        if unknown:
            raise serializers.ValidationError(f"Unknown client id(s): {', '.join(map(str, unknown))}.")
        return ids
