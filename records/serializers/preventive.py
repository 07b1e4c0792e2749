"""Input schemas for vaccinations and dewormings with their treatment lines."""
from decimal import Decimal

from rest_framework import serializers

from .fields import CleanCharField


class VacTreatmentSerializer(serializers.Serializer):
    treatment = CleanCharField(max_length=255)
    dose = CleanCharField(max_length=255)


class DewormTreatmentSerializer(serializers.Serializer):
    treatment = CleanCharField(max_length=255)


class _VisitSerializer(serializers.Serializer):
    date = serializers.DateField()
    weight = serializers.DecimalField(max_digits=6, decimal_places=2, min_value=Decimal('0'),
                                      required=False, allow_null=True)
    temperature = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=Decimal('0'),
                                           required=False, allow_null=True)

    def validate_treatments(self, lines):
        # Partial updates relax nested fields too; replacement lines must be complete
        child = self.fields['treatments'].child
        required = [name for name, f in child.fields.items() if f.required]
        errors = []
        for n, line in enumerate(lines, start=1):
            errors += [f'Treatment {n}: the {name} field is required.' for name in required if name not in line]
        if errors:
            raise serializers.ValidationError(errors)
        return lines


class VaccinationSerializer(_VisitSerializer):
    treatments = VacTreatmentSerializer(many=True, allow_empty=False)


class DewormingSerializer(_VisitSerializer):
    treatments = DewormTreatmentSerializer(many=True, allow_empty=False)
