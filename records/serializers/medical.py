"""Input schemas for consultations and the records filed under them."""
from decimal import Decimal

from rest_framework import serializers

from .fields import CleanCharField, UploadedImageField


class ConsultationSerializer(serializers.Serializer):
    consultation_date = serializers.DateField()
    weight = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=Decimal('0'),
                                      max_value=Decimal('999.99'), required=False, allow_null=True)
    temperature = serializers.DecimalField(max_digits=4, decimal_places=2, min_value=Decimal('0'),
                                           max_value=Decimal('99.99'), required=False, allow_null=True)
    complaint = CleanCharField(required=False, allow_null=True, allow_blank=True)
    diagnosis = CleanCharField(required=False, allow_null=True, allow_blank=True)


class LabtestSerializer(serializers.Serializer):
    lab_types = serializers.ChoiceField(choices=['cbc', 'microscopy', 'bloodchem', 'ultrasound', 'xray'])
    photo_result = serializers.ListField(child=UploadedImageField(), required=False)
    notes = CleanCharField(required=False, allow_null=True, allow_blank=True)


class TreatmentSerializer(serializers.Serializer):
    treatment_type = serializers.ChoiceField(choices=['medicine', 'surgery', 'confinement'])
    meds_name = CleanCharField(max_length=255, required=False, allow_null=True, allow_blank=True)
    treatment_details = CleanCharField(required=False, allow_null=True, allow_blank=True)


class PrescriptionSerializer(serializers.Serializer):
    upload_photo = serializers.ListField(child=UploadedImageField(), required=False)
    description = CleanCharField(required=False, allow_null=True, allow_blank=True)

    def validate(self, attrs):
        # A new prescription needs something to show
        if not self.partial and not attrs.get('upload_photo') and not attrs.get('description'):
            msg = 'Either a photo or a description is required.'
            raise serializers.ValidationError({'upload_photo': [msg], 'description': [msg]})
        return attrs


class LeafListQuerySerializer(serializers.Serializer):
    consultation_id = serializers.IntegerField(min_value=1, required=False)
