from rest_framework import serializers

from .fields import CleanCharField


class PetSerializer(serializers.Serializer):
    name = CleanCharField(max_length=255)
    age = serializers.IntegerField(min_value=0, max_value=50)
    species = serializers.ChoiceField(choices=['canine', 'feline'])
    breed = CleanCharField(max_length=255)
    colormark = CleanCharField(max_length=255)
